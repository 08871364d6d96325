from datetime import date, timedelta
from decimal import Decimal
from itertools import product

import pytest
from django.contrib.auth import get_user_model
from django.test import TestCase
from django.utils import timezone

from booking import services
from booking.models import Booking
from guest.context import CallerContext
from hotel_booking_service.exceptions import (
    AccessDeniedError,
    BusinessValidationError,
    ResourceNotFoundError,
)
from room.models import Room
from room.services import find_available_room

Status = Booking.BookingStatus

ALLOWED_TRANSITIONS = {
    (Status.BOOKED, Status.CHECKED_IN),
    (Status.BOOKED, Status.CANCELED),
    (Status.CHECKED_IN, Status.CHECKED_OUT),
}


@pytest.mark.parametrize("current,target", list(product(Status, Status)))
def test_transition_table(current, target):
    expected = (current, target) in ALLOWED_TRANSITIONS
    assert services.is_valid_transition(current, target) is expected


@pytest.mark.parametrize("final_status", [Status.CHECKED_OUT, Status.CANCELED])
def test_final_statuses_accept_nothing(final_status):
    assert not services.STATUS_TRANSITIONS[final_status]


def test_validate_dates_requires_both():
    with pytest.raises(BusinessValidationError, match="are required"):
        services.validate_booking_dates(None, date(2030, 1, 2))


def test_validate_dates_rejects_reversed_range():
    with pytest.raises(BusinessValidationError, match="must be after check-in"):
        services.validate_booking_dates(date(2030, 1, 2), date(2030, 1, 2))


def test_validate_dates_rejects_past_check_in():
    with pytest.raises(BusinessValidationError, match="cannot be in the past"):
        services.validate_booking_dates(
            date(2030, 1, 1), date(2030, 1, 3), today=date(2030, 1, 2)
        )


def next_january(day: int) -> date:
    return date(timezone.localdate().year + 1, 1, day)


class AvailabilityResolverTests(TestCase):
    def setUp(self):
        self.room_101 = Room.objects.create(
            number=101, price=Decimal("100.00"), adult_capacity=2
        )
        Booking.objects.create(
            room=self.room_101,
            first_name="Booking",
            last_name="A",
            check_in_date=next_january(15),
            check_out_date=next_january(17),
            adult_capacity=2,
            status=Status.BOOKED,
        )

    def test_overlapping_request_excludes_room(self):
        room = find_available_room(2, 0, next_january(16), next_january(18))
        self.assertIsNone(room)

    def test_check_out_day_is_free_for_next_guest(self):
        room = find_available_room(2, 0, next_january(17), next_january(19))
        self.assertEqual(room, self.room_101)

    def test_request_ending_on_check_in_day_is_free(self):
        room = find_available_room(2, 0, next_january(13), next_january(15))
        self.assertEqual(room, self.room_101)

    def test_finished_bookings_do_not_block(self):
        Booking.objects.filter(room=self.room_101).update(status=Status.CHECKED_OUT)
        room = find_available_room(2, 0, next_january(16), next_january(18))
        self.assertEqual(room, self.room_101)

    def test_checked_in_booking_blocks(self):
        Booking.objects.filter(room=self.room_101).update(status=Status.CHECKED_IN)
        room = find_available_room(1, 0, next_january(14), next_january(16))
        self.assertIsNone(room)

    def test_cheapest_fitting_room_wins(self):
        Room.objects.create(number=201, price=Decimal("90.00"), adult_capacity=3)
        cheap = Room.objects.create(number=202, price=Decimal("60.00"), adult_capacity=2)
        Room.objects.create(number=203, price=Decimal("40.00"), adult_capacity=1)

        room = find_available_room(2, 0, next_january(16), next_january(18))

        self.assertEqual(room, cheap)

    def test_price_tie_goes_to_lowest_number(self):
        Room.objects.create(number=302, price=Decimal("50.00"), adult_capacity=2)
        lowest = Room.objects.create(number=301, price=Decimal("50.00"), adult_capacity=2)

        room = find_available_room(1, 0, next_january(1), next_january(3))

        self.assertEqual(room, lowest)

    def test_children_need_total_capacity(self):
        Room.objects.create(number=401, price=Decimal("10.00"), adult_capacity=2)
        family = Room.objects.create(
            number=402,
            price=Decimal("80.00"),
            adult_capacity=2,
            children_capacity=2,
        )

        room = find_available_room(2, 2, next_january(1), next_january(3))

        self.assertEqual(room, family)
        self.assertGreaterEqual(room.adult_capacity, 2)
        self.assertGreaterEqual(room.total_capacity, 4)

    def test_children_cannot_fill_adult_places(self):
        Room.objects.create(
            number=501, price=Decimal("10.00"), adult_capacity=1, children_capacity=3
        )

        room = find_available_room(2, 0, next_january(1), next_january(3))

        self.assertEqual(room, self.room_101)

    def test_is_room_available_ignores_excluded_booking(self):
        booking = Booking.objects.get(room=self.room_101)

        self.assertFalse(
            services.is_room_available(
                self.room_101, next_january(16), next_january(18)
            )
        )
        self.assertTrue(
            services.is_room_available(
                self.room_101,
                next_january(16),
                next_january(18),
                exclude_booking_id=booking.id,
            )
        )


class BookingLifecycleTests(TestCase):
    def setUp(self):
        self.owner = get_user_model().objects.create_user(
            email="owner@test.com", password="testpass123"
        )
        self.caller = CallerContext(user_id=self.owner.id)
        self.room_101 = Room.objects.create(
            number=101, price=Decimal("100.00"), adult_capacity=2
        )

    def booking_data(self, check_in_day, check_out_day, **params):
        data = {
            "room_id": self.room_101.id,
            "first_name": "Ann",
            "last_name": "Lee",
            "check_in_date": next_january(check_in_day),
            "check_out_date": next_january(check_out_day),
            "adult_capacity": 2,
            "children_capacity": 0,
        }
        data.update(params)
        return data

    def test_second_overlapping_booking_fails(self):
        first = services.create_booking(self.booking_data(15, 17), self.caller)

        with self.assertRaisesMessage(BusinessValidationError, "Room is not available"):
            services.create_booking(self.booking_data(16, 18), self.caller)

        self.assertEqual(first.status, Status.BOOKED)
        self.assertEqual(first.user_id, self.owner.id)
        self.assertEqual(first.total_amount, Decimal("200.00"))
        self.assertEqual(Booking.objects.count(), 1)

    def test_create_on_missing_room(self):
        with self.assertRaises(ResourceNotFoundError):
            services.create_booking(self.booking_data(15, 17, room_id=999), self.caller)

    def test_cancel_then_check_in_fails(self):
        booking = services.create_booking(self.booking_data(15, 17), self.caller)

        services.update_booking_status(booking.id, Status.CANCELED, self.caller)
        with self.assertRaisesMessage(
            BusinessValidationError, "Invalid status transition"
        ):
            services.update_booking_status(booking.id, Status.CHECKED_IN, self.caller)

        booking.refresh_from_db()
        self.assertEqual(booking.status, Status.CANCELED)

    def test_update_keeps_own_dates_available(self):
        booking = services.create_booking(self.booking_data(15, 17), self.caller)

        updated = services.update_booking(
            booking.id, self.booking_data(16, 20), self.caller
        )

        self.assertEqual(updated.check_out_date, next_january(20))
        self.assertEqual(updated.total_amount, Decimal("400.00"))

    def test_update_into_other_booking_fails(self):
        services.create_booking(self.booking_data(20, 22), self.caller)
        booking = services.create_booking(self.booking_data(15, 17), self.caller)

        with self.assertRaisesMessage(
            BusinessValidationError, "Room is not available for the selected dates"
        ):
            services.update_booking(booking.id, self.booking_data(16, 21), self.caller)

    def test_delete_rules(self):
        booking = services.create_booking(self.booking_data(15, 17), self.caller)
        services.update_booking_status(booking.id, Status.CHECKED_IN, self.caller)

        with self.assertRaisesMessage(BusinessValidationError, "currently checked in"):
            services.delete_booking(booking.id, self.caller)

        services.update_booking_status(booking.id, Status.CHECKED_OUT, self.caller)
        services.delete_booking(booking.id, self.caller)
        self.assertFalse(Booking.objects.filter(pk=booking.id).exists())

    def test_stranger_is_denied_admin_is_not(self):
        booking = services.create_booking(self.booking_data(15, 17), self.caller)
        stranger = CallerContext(user_id=self.owner.id + 100)

        for operation in (
            lambda caller: services.get_booking(booking.id, caller),
            lambda caller: services.update_booking_status(
                booking.id, Status.CANCELED, caller
            ),
            lambda caller: services.delete_booking(booking.id, caller),
        ):
            with self.assertRaises(AccessDeniedError):
                operation(stranger)

        self.assertEqual(
            services.get_booking(booking.id, CallerContext.admin()).id, booking.id
        )

    def test_anonymous_caller_lists_nothing(self):
        services.create_booking(self.booking_data(15, 17), self.caller)

        self.assertFalse(services.list_bookings(CallerContext(user_id=None)).exists())
        self.assertEqual(services.list_bookings(CallerContext.admin()).count(), 1)

    def test_search_by_room_id(self):
        booking = services.create_booking(self.booking_data(15, 17), self.caller)

        found = services.list_bookings(self.caller, search=str(self.room_101.id))

        self.assertIn(booking, found)
