"""
Booking lifecycle: create, update, status transitions, delete, and the
owner-or-admin access rule applied to single bookings.

Every operation receives the caller explicitly as a CallerContext and the
cache, when one is used, as a NamespacedCache.
"""

import logging
import re
from datetime import date
from typing import Optional

from django.db import transaction
from django.db.models import Q, QuerySet, Value
from django.db.models.functions import Concat
from django.utils import timezone

from booking.models import Booking
from guest.context import CallerContext
from hotel_booking_service.cache import BOOKINGS_CACHE, NamespacedCache
from hotel_booking_service.exceptions import (
    AccessDeniedError,
    BusinessValidationError,
    ResourceNotFoundError,
)
from hotel_booking_service.pagination import normalize_direction
from room.models import Room

logger = logging.getLogger(__name__)

Status = Booking.BookingStatus

STATUS_TRANSITIONS = {
    Status.BOOKED: frozenset({Status.CHECKED_IN, Status.CANCELED}),
    Status.CHECKED_IN: frozenset({Status.CHECKED_OUT}),
    Status.CHECKED_OUT: frozenset(),
    Status.CANCELED: frozenset(),
}

BOOKING_FIELDS = (
    "first_name",
    "last_name",
    "email",
    "phone_number",
    "special_requests",
    "check_in_date",
    "check_out_date",
    "adult_capacity",
    "children_capacity",
)

SORTABLE_FIELDS = {
    "id": "id",
    "first_name": "first_name",
    "last_name": "last_name",
    "check_in_date": "check_in_date",
    "check_out_date": "check_out_date",
    "status": "status",
    "total_amount": "total_amount",
    "created_at": "created_at",
    "room": "room__number",
}

# ids are BIGINT: 18 digits always fit
ID_SEARCH_PATTERN = re.compile(r"[0-9]{1,18}")


def is_valid_transition(current_status: str, new_status: str) -> bool:
    return new_status in STATUS_TRANSITIONS.get(current_status, frozenset())


def validate_booking_dates(
        check_in_date: Optional[date],
        check_out_date: Optional[date],
        today: Optional[date] = None,
) -> None:
    if check_in_date is None or check_out_date is None:
        raise BusinessValidationError("Check-in and check-out dates are required")

    if check_out_date <= check_in_date:
        raise BusinessValidationError("Check-out date must be after check-in date")

    if check_in_date < (today or timezone.localdate()):
        raise BusinessValidationError("Check-in date cannot be in the past")


def is_room_available(
        room: Room,
        check_in_date: date,
        check_out_date: date,
        exclude_booking_id: Optional[int] = None,
) -> bool:
    """True when no active booking of this room overlaps the dates."""
    conflicts = (
        Booking.objects.active()
        .filter(room=room)
        .overlapping(check_in_date, check_out_date)
    )
    if exclude_booking_id is not None:
        conflicts = conflicts.exclude(pk=exclude_booking_id)
    return not conflicts.exists()


def check_booking_access(booking: Booking, caller: CallerContext, action: str) -> None:
    if caller.is_admin:
        return
    if caller.user_id is None or caller.user_id != booking.user_id:
        raise AccessDeniedError(
            f"Access denied: You can only {action} your own bookings"
        )


def _lock_room(room_id: int) -> Room:
    try:
        return Room.objects.select_for_update().get(pk=room_id)
    except Room.DoesNotExist:
        raise ResourceNotFoundError("Room", room_id)


def _lock_booking(booking_id: int) -> Booking:
    try:
        return Booking.objects.select_for_update().get(pk=booking_id)
    except Booking.DoesNotExist:
        raise ResourceNotFoundError("Booking", booking_id)


def get_booking(
        booking_id: int,
        caller: CallerContext,
        cache: Optional[NamespacedCache] = None,
) -> Booking:
    booking = cache.get(BOOKINGS_CACHE, booking_id) if cache is not None else None
    if booking is None:
        try:
            booking = Booking.objects.select_related("room", "user").get(pk=booking_id)
        except Booking.DoesNotExist:
            raise ResourceNotFoundError("Booking", booking_id)
        if cache is not None:
            cache.put(BOOKINGS_CACHE, booking_id, booking)

    check_booking_access(booking, caller, "view")
    return booking


def list_bookings(
        caller: CallerContext,
        search: Optional[str] = None,
        sort: str = "id",
        direction: str = "asc",
) -> QuerySet:
    """
    Bookings visible to the caller, searched and sorted.

    Search matches guest full name and status case-insensitively, and
    booking id or room id exactly when the term is a number.
    """
    queryset = Booking.objects.select_related("room", "user")

    if not caller.is_admin:
        if caller.user_id is None:
            return queryset.none()
        queryset = queryset.filter(user_id=caller.user_id)

    search = (search or "").strip()
    if search:
        queryset = queryset.annotate(
            search_name=Concat("first_name", Value(" "), "last_name")
        )
        condition = Q(search_name__icontains=search) | Q(status__icontains=search)
        if ID_SEARCH_PATTERN.fullmatch(search):
            condition |= Q(pk=int(search)) | Q(room_id=int(search))
        queryset = queryset.filter(condition)

    sort = sort or "id"
    if sort not in SORTABLE_FIELDS:
        raise BusinessValidationError(
            f"Cannot sort by '{sort}'. Allowed: {', '.join(sorted(SORTABLE_FIELDS))}"
        )
    order = SORTABLE_FIELDS[sort]
    if normalize_direction(direction) == "desc":
        order = f"-{order}"
    return queryset.order_by(order, "id")


def create_booking(
        data: dict,
        caller: CallerContext,
        cache: Optional[NamespacedCache] = None,
) -> Booking:
    check_in_date = data.get("check_in_date")
    check_out_date = data.get("check_out_date")
    validate_booking_dates(check_in_date, check_out_date)

    with transaction.atomic():
        room = _lock_room(data["room_id"])

        if not is_room_available(room, check_in_date, check_out_date):
            raise BusinessValidationError("Room is not available for the selected dates")

        booking = Booking(
            room=room,
            status=Status.BOOKED,
            user_id=caller.user_id,
            **{field: data[field] for field in BOOKING_FIELDS if field in data},
        )
        booking.calculate_total_amount()
        booking.save()

    logger.info(
        "Created new booking with ID: %s for user: %s", booking.id, booking.user_id
    )
    if cache is not None:
        cache.put(BOOKINGS_CACHE, booking.id, booking)
    return booking


def update_booking(
        booking_id: int,
        data: dict,
        caller: CallerContext,
        cache: Optional[NamespacedCache] = None,
) -> Booking:
    with transaction.atomic():
        booking = _lock_booking(booking_id)
        check_booking_access(booking, caller, "update")

        check_in_date = data.get("check_in_date")
        check_out_date = data.get("check_out_date")
        validate_booking_dates(check_in_date, check_out_date)

        room_id = data.get("room_id", booking.room_id)
        room_changed = room_id != booking.room_id
        room = _lock_room(room_id)

        if not is_room_available(
                room, check_in_date, check_out_date, exclude_booking_id=booking.id
        ):
            if room_changed:
                raise BusinessValidationError(
                    "New room is not available for the selected dates"
                )
            raise BusinessValidationError("Room is not available for the selected dates")

        booking.room = room
        for field in BOOKING_FIELDS:
            if field in data:
                setattr(booking, field, data[field])
        booking.calculate_total_amount()
        booking.save()

    logger.info("Updated booking with ID: %s", booking.id)
    if cache is not None:
        cache.put(BOOKINGS_CACHE, booking.id, booking)
    return booking


def update_booking_status(
        booking_id: int,
        new_status: str,
        caller: CallerContext,
        cache: Optional[NamespacedCache] = None,
) -> Booking:
    with transaction.atomic():
        booking = _lock_booking(booking_id)
        check_booking_access(booking, caller, "update")

        if not is_valid_transition(booking.status, new_status):
            raise BusinessValidationError(
                f"Invalid status transition from {booking.status} to {new_status}"
            )

        booking.status = new_status
        booking.save(update_fields=["status", "updated_at"])

    logger.info(
        "Updated booking status to %s for booking ID: %s", new_status, booking_id
    )
    if cache is not None:
        cache.evict(BOOKINGS_CACHE, booking_id)
    return booking


def delete_booking(
        booking_id: int,
        caller: CallerContext,
        cache: Optional[NamespacedCache] = None,
) -> None:
    with transaction.atomic():
        booking = _lock_booking(booking_id)
        check_booking_access(booking, caller, "delete")

        if booking.status == Status.CHECKED_IN:
            raise BusinessValidationError(
                "Cannot delete a booking that is currently checked in"
            )

        booking.delete()

    logger.info("Deleted booking with ID: %s", booking_id)
    if cache is not None:
        cache.evict(BOOKINGS_CACHE, booking_id)
