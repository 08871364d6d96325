import logging
from datetime import date, timedelta
from typing import List, Optional

from django.db.models import Exists, F, OuterRef

from booking.models import Booking
from hotel_booking_service.cache import ROOMS_CACHE, NamespacedCache
from hotel_booking_service.exceptions import (
    BusinessValidationError,
    ResourceNotFoundError,
)
from room.models import Room

logger = logging.getLogger(__name__)


def find_available_room(
        number_of_adults: int,
        number_of_children: int,
        check_in_date: date,
        check_out_date: date,
) -> Optional[Room]:
    """
    Cheapest room that fits the party and has no active booking
    overlapping [check_in_date, check_out_date).

    Ties on price go to the lowest room number. Returns None when no room
    qualifies.
    """
    conflicting = (
        Booking.objects.active()
        .overlapping(check_in_date, check_out_date)
        .filter(room=OuterRef("pk"))
    )

    room = (
        Room.objects.annotate(
            party_capacity=F("adult_capacity") + F("children_capacity")
        )
        .filter(
            adult_capacity__gte=number_of_adults,
            party_capacity__gte=number_of_adults + number_of_children,
        )
        .exclude(Exists(conflicting))
        .order_by("price", "number", "id")
        .first()
    )

    if room is None:
        logger.info(
            "No available room for %s adults, %s children, %s - %s",
            number_of_adults,
            number_of_children,
            check_in_date,
            check_out_date,
        )
    return room


def get_room(room_id: int, cache: Optional[NamespacedCache] = None) -> Room:
    room = cache.get(ROOMS_CACHE, room_id) if cache is not None else None
    if room is None:
        try:
            room = Room.objects.get(pk=room_id)
        except Room.DoesNotExist:
            raise ResourceNotFoundError("Room", room_id)
        if cache is not None:
            cache.put(ROOMS_CACHE, room_id, room)
    return room


def delete_room(room: Room) -> None:
    """Delete a room with its amenities. Rooms with bookings stay."""
    if room.bookings.exists():
        raise BusinessValidationError(
            f"Room with ID {room.id} has bookings and cannot be deleted."
        )
    room_id = room.id
    room.delete()
    logger.info("Deleted room with ID: %s", room_id)


def room_calendar(room: Room, date_from: date, date_to: date) -> List[dict]:
    """Per-day availability of one room, both ends inclusive."""
    bookings = Booking.objects.active().filter(
        room=room,
        check_in_date__lte=date_to,
        check_out_date__gt=date_from,
    )

    booked_dates = set()
    for booking in bookings:
        nights = (booking.check_out_date - booking.check_in_date).days
        for offset in range(nights):
            booked_dates.add(booking.check_in_date + timedelta(days=offset))

    calendar = []
    for offset in range((date_to - date_from).days + 1):
        current_date = date_from + timedelta(days=offset)
        calendar.append({
            "date": current_date,
            "available": current_date not in booked_dates,
        })
    return calendar
