import logging

from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from booking.models import Booking
from hotel_booking_service.cache import BOOKINGS_CACHE, get_cache

logger = logging.getLogger(__name__)


@receiver(post_save, sender=Booking)
def booking_saved(sender, instance: Booking, created, **kwargs):
    """Drop the cached copy; the next read loads the fresh row."""
    get_cache().evict(BOOKINGS_CACHE, instance.pk)

    if created:
        logger.info(
            "Booking %s created: room %s, %s - %s, status %s",
            instance.pk,
            instance.room_id,
            instance.check_in_date,
            instance.check_out_date,
            instance.status,
        )
    elif instance.status == Booking.BookingStatus.CANCELED:
        logger.info("Booking %s canceled", instance.pk)


@receiver(post_delete, sender=Booking)
def booking_deleted(sender, instance: Booking, **kwargs):
    get_cache().evict(BOOKINGS_CACHE, instance.pk)
