import logging
from typing import List, Optional

from django.db.models import ProtectedError

from amenity.models import AmenityType, RoomAmenity
from hotel_booking_service.cache import (
    AMENITY_TYPES_CACHE,
    ROOM_AMENITIES_CACHE,
    NamespacedCache,
)
from hotel_booking_service.exceptions import (
    BusinessValidationError,
    ResourceNotFoundError,
)
from room.models import Room

logger = logging.getLogger(__name__)


def list_amenity_types(
        active_only: bool = False,
        cache: Optional[NamespacedCache] = None,
) -> List[AmenityType]:
    def load():
        queryset = AmenityType.objects.all()
        if active_only:
            queryset = queryset.filter(is_active=True)
        return list(queryset)

    if cache is None:
        return load()
    return cache.get_or_set(
        AMENITY_TYPES_CACHE, "active" if active_only else "all", load
    )


def delete_amenity_type(amenity_type: AmenityType) -> None:
    try:
        amenity_type.delete()
    except ProtectedError:
        raise BusinessValidationError(
            f"Amenity type {amenity_type.name} is assigned to rooms "
            f"and cannot be deleted."
        )
    logger.info("Deleted amenity type: %s", amenity_type.name)


def create_room_amenity(data: dict) -> RoomAmenity:
    room_id = data["room_id"]
    amenity_type_id = data["amenity_type_id"]

    try:
        room = Room.objects.get(pk=room_id)
    except Room.DoesNotExist:
        raise ResourceNotFoundError("Room", room_id)
    try:
        amenity_type = AmenityType.objects.get(pk=amenity_type_id)
    except AmenityType.DoesNotExist:
        raise ResourceNotFoundError("Amenity type", amenity_type_id)

    if RoomAmenity.objects.filter(room=room, amenity_type=amenity_type).exists():
        raise BusinessValidationError(
            f"Room {room.number} already has amenity {amenity_type.name}."
        )

    room_amenity = RoomAmenity.objects.create(
        room=room,
        amenity_type=amenity_type,
        is_available=data.get("is_available", True),
        notes=data.get("notes", ""),
    )
    logger.info(
        "Added amenity %s to room %s", amenity_type.name, room.number
    )
    return room_amenity


def list_room_amenities(
        room_id: int,
        cache: Optional[NamespacedCache] = None,
) -> List[RoomAmenity]:
    """Amenities of one room; a room without any is reported as not found."""

    def load():
        return list(
            RoomAmenity.objects.select_related("room", "amenity_type")
            .filter(room_id=room_id)
        )

    if cache is None:
        amenities = load()
    else:
        amenities = cache.get_or_set(ROOM_AMENITIES_CACHE, room_id, load)

    if not amenities:
        raise ResourceNotFoundError(
            message=f"Room amenity with room ID {room_id} does not exist."
        )
    return amenities


def delete_room_amenities(room_id: int) -> int:
    amenities = RoomAmenity.objects.filter(room_id=room_id)
    if not amenities.exists():
        raise ResourceNotFoundError(
            message=f"Room amenity with room ID {room_id} does not exist."
        )
    deleted, _ = amenities.delete()
    logger.info("Deleted %s amenities of room ID: %s", deleted, room_id)
    return deleted
