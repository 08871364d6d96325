from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from amenity.models import AmenityType, RoomAmenity
from hotel_booking_service.cache import (
    AMENITY_TYPES_CACHE,
    ROOM_AMENITIES_CACHE,
    get_cache,
)


@receiver([post_save, post_delete], sender=AmenityType)
def amenity_type_changed(sender, instance: AmenityType, **kwargs):
    # room amenity lists embed the type name
    cache = get_cache()
    cache.clear(AMENITY_TYPES_CACHE)
    cache.clear(ROOM_AMENITIES_CACHE)


@receiver([post_save, post_delete], sender=RoomAmenity)
def room_amenity_changed(sender, instance: RoomAmenity, **kwargs):
    get_cache().evict(ROOM_AMENITIES_CACHE, instance.room_id)
