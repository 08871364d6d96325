"""
Services ordered for a booking's room (breakfast, laundry, transfers...).

A room service belongs to a booking, so whoever may view or update the
booking may view or update its services.
"""

import logging
from typing import List, Optional

from django.db.models import ProtectedError, QuerySet

from booking.models import Booking
from booking.services import check_booking_access
from guest.context import CallerContext
from hotel_booking_service.cache import (
    ROOM_SERVICES_CACHE,
    SERVICE_TYPES_CACHE,
    NamespacedCache,
)
from hotel_booking_service.exceptions import (
    AccessDeniedError,
    BusinessValidationError,
    ResourceNotFoundError,
)
from room_service.models import RoomService, ServiceType

logger = logging.getLogger(__name__)

ServiceStatus = RoomService.ServiceStatus

UPDATABLE_FIELDS = ("date", "amount", "quantity", "notes", "status")


def list_service_types(
        active_only: bool = False,
        cache: Optional[NamespacedCache] = None,
) -> List[ServiceType]:
    def load():
        queryset = ServiceType.objects.all()
        if active_only:
            queryset = queryset.filter(is_active=True)
        return list(queryset)

    if cache is None:
        return load()
    return cache.get_or_set(
        SERVICE_TYPES_CACHE, "active" if active_only else "all", load
    )


def delete_service_type(service_type: ServiceType) -> None:
    try:
        service_type.delete()
    except ProtectedError:
        raise BusinessValidationError(
            f"Service type {service_type.name} has room services "
            f"and cannot be deleted."
        )
    logger.info("Deleted service type: %s", service_type.name)


def _get_booking(booking_id: int) -> Booking:
    try:
        return Booking.objects.get(pk=booking_id)
    except Booking.DoesNotExist:
        raise ResourceNotFoundError("Booking", booking_id)


def visible_room_services(caller: CallerContext) -> QuerySet:
    queryset = RoomService.objects.select_related("service_type", "room", "booking")
    if caller.is_admin:
        return queryset
    if caller.user_id is None:
        return queryset.none()
    return queryset.filter(booking__user_id=caller.user_id)


def get_room_service(
        room_service_id: int,
        caller: CallerContext,
        action: str = "view",
) -> RoomService:
    try:
        room_service = RoomService.objects.select_related(
            "service_type", "room", "booking"
        ).get(pk=room_service_id)
    except RoomService.DoesNotExist:
        raise ResourceNotFoundError("Room service", room_service_id)

    check_booking_access(room_service.booking, caller, action)
    return room_service


def create_room_service(data: dict, caller: CallerContext) -> RoomService:
    """
    Order a service for a booking. The room is taken from the booking and
    the amount falls back to the service type's default price.
    """
    booking = _get_booking(data["booking_id"])
    check_booking_access(booking, caller, "update")

    if booking.status not in Booking.ACTIVE_STATUSES:
        raise BusinessValidationError(
            f"Services cannot be added to a booking with status {booking.status}"
        )

    service_type_id = data["service_type_id"]
    try:
        service_type = ServiceType.objects.get(pk=service_type_id)
    except ServiceType.DoesNotExist:
        raise ResourceNotFoundError("Service type", service_type_id)

    if not service_type.is_active:
        raise BusinessValidationError(
            f"Service type {service_type.name} is not available"
        )

    amount = data.get("amount") or service_type.default_price
    if not amount:
        raise BusinessValidationError(
            f"Amount is required: service type {service_type.name} has no default price"
        )

    room_service = RoomService.objects.create(
        service_type=service_type,
        booking=booking,
        room_id=booking.room_id,
        date=data["date"],
        amount=amount,
        quantity=data.get("quantity", 1),
        notes=data.get("notes", ""),
    )
    logger.info(
        "Created room service %s (%s) for booking ID: %s",
        room_service.id,
        service_type.name,
        booking.id,
    )
    return room_service


def update_room_service(
        room_service: RoomService, data: dict, caller: CallerContext
) -> RoomService:
    """
    Guests may edit the date, quantity and notes of their own requests and
    cancel them; staff set the price and move the status.
    """
    new_amount = data.get("amount", room_service.amount)
    if new_amount != room_service.amount and not caller.is_admin:
        raise AccessDeniedError("Access denied: Only staff can change service price")

    new_status = data.get("status", room_service.status)
    if (
            new_status != room_service.status
            and not caller.is_admin
            and new_status != ServiceStatus.CANCELLED
    ):
        raise AccessDeniedError("Access denied: Only staff can change service status")

    for field in UPDATABLE_FIELDS:
        if field in data:
            setattr(room_service, field, data[field])
    room_service.save()

    logger.info("Updated room service with ID: %s", room_service.id)
    return room_service


def list_booking_services(
        booking_id: int,
        caller: CallerContext,
        cache: Optional[NamespacedCache] = None,
) -> List[RoomService]:
    booking = _get_booking(booking_id)
    check_booking_access(booking, caller, "view")

    def load():
        return list(
            RoomService.objects.select_related("service_type", "room", "booking")
            .filter(booking_id=booking_id)
        )

    if cache is None:
        return load()
    return cache.get_or_set(ROOM_SERVICES_CACHE, booking_id, load)


def delete_booking_services(booking_id: int, caller: CallerContext) -> int:
    booking = _get_booking(booking_id)
    check_booking_access(booking, caller, "delete")

    room_services = RoomService.objects.filter(booking_id=booking_id)
    if not room_services.exists():
        raise ResourceNotFoundError(
            message=f"Room service with booking ID {booking_id} does not exist."
        )
    deleted, _ = room_services.delete()
    logger.info("Deleted %s room services of booking ID: %s", deleted, booking_id)
    return deleted
