from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from hotel_booking_service.cache import (
    ROOM_SERVICES_CACHE,
    SERVICE_TYPES_CACHE,
    get_cache,
)
from room_service.models import RoomService, ServiceType


@receiver([post_save, post_delete], sender=ServiceType)
def service_type_changed(sender, instance: ServiceType, **kwargs):
    cache = get_cache()
    cache.clear(SERVICE_TYPES_CACHE)
    cache.clear(ROOM_SERVICES_CACHE)


@receiver([post_save, post_delete], sender=RoomService)
def room_service_changed(sender, instance: RoomService, **kwargs):
    get_cache().evict(ROOM_SERVICES_CACHE, instance.booking_id)
