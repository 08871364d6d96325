import logging

from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from hotel_booking_service.cache import ROOMS_CACHE, get_cache
from room.models import Room

logger = logging.getLogger(__name__)


@receiver([post_save, post_delete], sender=Room)
def evict_room_cache(sender, instance: Room, **kwargs):
    get_cache().evict(ROOMS_CACHE, instance.pk)
    logger.debug("Evicted cached room %s", instance.pk)
