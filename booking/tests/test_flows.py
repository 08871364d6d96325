from datetime import timedelta

from django.contrib.auth import get_user_model
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from booking.models import Booking
from room.models import Room


class BookingFlowsTests(APITestCase):
    def setUp(self):
        self.user = get_user_model().objects.create_user(
            email="test@test.com",
            password="testpass123",
        )
        self.client.force_authenticate(self.user)

        self.room = Room.objects.create(
            number=101,
            price="100.00",
            adult_capacity=2,
        )

    def create_booking(
        self, booking_status=Booking.BookingStatus.BOOKED, check_in_offset_days=5
    ):
        today = timezone.localdate()
        booking = Booking.objects.create(
            room=self.room,
            user=self.user,
            first_name="Test",
            last_name="Guest",
            check_in_date=today + timedelta(days=check_in_offset_days),
            check_out_date=today + timedelta(days=check_in_offset_days + 2),
            adult_capacity=1,
            status=booking_status,
        )
        return booking

    def test_cancel_booking_ok(self):
        booking = self.create_booking(booking_status=Booking.BookingStatus.BOOKED)

        url = reverse("booking:booking-cancel", args=[booking.id])
        response = self.client.post(url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        booking.refresh_from_db()
        self.assertEqual(booking.status, Booking.BookingStatus.CANCELED)

    def test_cancel_checked_in_booking_fails(self):
        booking = self.create_booking(booking_status=Booking.BookingStatus.CHECKED_IN)

        url = reverse("booking:booking-cancel", args=[booking.id])
        response = self.client.post(url)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(
            response.data["detail"],
            "Invalid status transition from Checked in to Canceled",
        )

    def test_check_in_ok(self):
        booking = self.create_booking(check_in_offset_days=0)

        url = reverse("booking:booking-check-in", args=[booking.id])
        response = self.client.post(url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        booking.refresh_from_db()
        self.assertEqual(booking.status, Booking.BookingStatus.CHECKED_IN)

    def test_check_out_ok(self):
        booking = self.create_booking(booking_status=Booking.BookingStatus.CHECKED_IN)

        url = reverse("booking:booking-check-out", args=[booking.id])
        response = self.client.post(url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        booking.refresh_from_db()
        self.assertEqual(booking.status, Booking.BookingStatus.CHECKED_OUT)

    def test_check_out_from_booked_fails(self):
        booking = self.create_booking()

        url = reverse("booking:booking-check-out", args=[booking.id])
        response = self.client.post(url)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        booking.refresh_from_db()
        self.assertEqual(booking.status, Booking.BookingStatus.BOOKED)

    def test_full_stay(self):
        booking = self.create_booking()

        for url_name, expected in (
            ("booking:booking-check-in", Booking.BookingStatus.CHECKED_IN),
            ("booking:booking-check-out", Booking.BookingStatus.CHECKED_OUT),
        ):
            response = self.client.post(reverse(url_name, args=[booking.id]))
            self.assertEqual(response.status_code, status.HTTP_200_OK)
            self.assertEqual(response.data["status"], expected)

    def test_cancel_then_check_in_fails(self):
        booking = self.create_booking()

        self.client.post(reverse("booking:booking-cancel", args=[booking.id]))
        response = self.client.post(
            reverse("booking:booking-check-in", args=[booking.id])
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(
            response.data["detail"],
            "Invalid status transition from Canceled to Checked in",
        )

    def test_canceled_booking_frees_the_room(self):
        booking = self.create_booking()
        self.client.post(reverse("booking:booking-cancel", args=[booking.id]))

        response = self.client.post(
            reverse("room:rooms-available-room"),
            {
                "number_of_adults": 1,
                "check_in_date": str(booking.check_in_date),
                "check_out_date": str(booking.check_out_date),
            },
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["id"], self.room.id)

    def test_delete_checked_in_booking_fails(self):
        booking = self.create_booking(booking_status=Booking.BookingStatus.CHECKED_IN)

        response = self.client.delete(
            reverse("booking:booking-detail", args=[booking.id])
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(
            response.data["detail"],
            "Cannot delete a booking that is currently checked in",
        )
        self.assertTrue(Booking.objects.filter(pk=booking.id).exists())

    def test_delete_finished_booking_ok(self):
        for booking_status in (
            Booking.BookingStatus.CHECKED_OUT,
            Booking.BookingStatus.CANCELED,
        ):
            booking = self.create_booking(booking_status=booking_status)
            response = self.client.delete(
                reverse("booking:booking-detail", args=[booking.id])
            )
            self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)

    def test_status_change_on_foreign_booking_denied(self):
        stranger = get_user_model().objects.create_user(
            email="stranger@test.com", password="testpass123"
        )
        booking = self.create_booking()
        self.client.force_authenticate(stranger)

        response = self.client.post(reverse("booking:booking-cancel", args=[booking.id]))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        booking.refresh_from_db()
        self.assertEqual(booking.status, Booking.BookingStatus.BOOKED)
