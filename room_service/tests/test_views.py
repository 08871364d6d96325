from datetime import timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from booking.models import Booking
from room.models import Room
from room_service.models import RoomService, ServiceType

SERVICE_TYPES_URL = reverse("room_service:service-types-list")
ROOM_SERVICES_URL = reverse("room_service:room-services-list")


def room_service_detail_url(room_service_id: int) -> str:
    return reverse("room_service:room-services-detail", args=[room_service_id])


def booking_services_url(booking_id: int) -> str:
    return reverse(
        "room_service:room-services-by-booking", kwargs={"booking_id": booking_id}
    )


class ServiceTypeApiTests(APITestCase):
    def setUp(self):
        self.admin = get_user_model().objects.create_superuser(
            email="admin@test.com", password="test12345"
        )
        ServiceType.objects.create(name="Breakfast", default_price=Decimal("15.00"))
        ServiceType.objects.create(name="Laundry", is_active=False)

    def test_list_for_anonymous(self):
        res = self.client.get(SERVICE_TYPES_URL)

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(len(res.data), 2)

    def test_active_filter(self):
        res = self.client.get(SERVICE_TYPES_URL, {"active": "1"})

        self.assertEqual([t["name"] for t in res.data], ["Breakfast"])

    def test_admin_creates_type(self):
        self.client.force_authenticate(self.admin)

        res = self.client.post(
            SERVICE_TYPES_URL,
            {"name": "Transfer", "default_price": "40.00"},
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["default_price"], "40.00")

    def test_negative_default_price_rejected(self):
        self.client.force_authenticate(self.admin)

        res = self.client.post(
            SERVICE_TYPES_URL,
            {"name": "Transfer", "default_price": "-1.00"},
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("default_price", res.data["errors"])


class RoomServiceApiTests(APITestCase):
    def setUp(self):
        self.guest = get_user_model().objects.create_user(
            email="guest@test.com", password="test12345"
        )
        self.stranger = get_user_model().objects.create_user(
            email="stranger@test.com", password="test12345"
        )
        self.admin = get_user_model().objects.create_superuser(
            email="admin@test.com", password="test12345"
        )
        self.room = Room.objects.create(number=101, price="100.00", adult_capacity=2)
        today = timezone.localdate()
        self.booking = Booking.objects.create(
            room=self.room,
            user=self.guest,
            first_name="Ann",
            last_name="Lee",
            check_in_date=today,
            check_out_date=today + timedelta(days=3),
            adult_capacity=2,
        )
        self.breakfast = ServiceType.objects.create(
            name="Breakfast", default_price=Decimal("15.00")
        )
        self.spa = ServiceType.objects.create(name="Spa")

    def payload(self, **params):
        data = {
            "booking_id": self.booking.id,
            "service_type_id": self.breakfast.id,
            "date": str(timezone.localdate() + timedelta(days=1)),
            "quantity": 2,
        }
        data.update(params)
        return data

    def create_service(self, **params):
        defaults = {
            "service_type": self.breakfast,
            "booking": self.booking,
            "room": self.room,
            "date": timezone.localdate(),
            "amount": Decimal("15.00"),
        }
        defaults.update(params)
        return RoomService.objects.create(**defaults)

    def test_authentication_required(self):
        res = self.client.get(ROOM_SERVICES_URL)

        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_guest_orders_service_for_own_booking(self):
        self.client.force_authenticate(self.guest)

        res = self.client.post(ROOM_SERVICES_URL, self.payload(), format="json")

        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["room"], self.room.id)
        self.assertEqual(res.data["amount"], "15.00")
        self.assertEqual(res.data["total_amount"], "30.00")
        self.assertEqual(res.data["status"], RoomService.ServiceStatus.REQUESTED)

    def test_amount_required_without_default_price(self):
        self.client.force_authenticate(self.guest)

        res = self.client.post(
            ROOM_SERVICES_URL,
            self.payload(service_type_id=self.spa.id),
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

        res = self.client.post(
            ROOM_SERVICES_URL,
            self.payload(service_type_id=self.spa.id, amount="60.00"),
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)

    def test_service_for_missing_booking(self):
        self.client.force_authenticate(self.guest)

        res = self.client.post(
            ROOM_SERVICES_URL, self.payload(booking_id=9999), format="json"
        )

        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(res.data["detail"], "Booking with ID 9999 not found.")

    def test_service_for_foreign_booking_denied(self):
        self.client.force_authenticate(self.stranger)

        res = self.client.post(ROOM_SERVICES_URL, self.payload(), format="json")

        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_service_for_canceled_booking_rejected(self):
        self.booking.status = Booking.BookingStatus.CANCELED
        self.booking.save()
        self.client.force_authenticate(self.guest)

        res = self.client.post(ROOM_SERVICES_URL, self.payload(), format="json")

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_past_service_date_rejected(self):
        self.client.force_authenticate(self.guest)

        res = self.client.post(
            ROOM_SERVICES_URL,
            self.payload(date=str(timezone.localdate() - timedelta(days=1))),
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("date", res.data["errors"])

    def test_guest_lists_only_own_services(self):
        self.create_service()
        other_booking = Booking.objects.create(
            room=self.room,
            user=self.stranger,
            first_name="Bob",
            last_name="Ray",
            check_in_date=timezone.localdate() + timedelta(days=5),
            check_out_date=timezone.localdate() + timedelta(days=6),
            adult_capacity=1,
        )
        self.create_service(booking=other_booking)
        self.client.force_authenticate(self.guest)

        res = self.client.get(ROOM_SERVICES_URL)

        self.assertEqual(len(res.data), 1)
        self.assertEqual(res.data[0]["booking"], self.booking.id)

    def test_retrieve_foreign_service_denied(self):
        room_service = self.create_service()
        self.client.force_authenticate(self.stranger)

        res = self.client.get(room_service_detail_url(room_service.id))

        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_guest_cancels_own_request(self):
        room_service = self.create_service()
        self.client.force_authenticate(self.guest)

        res = self.client.patch(
            room_service_detail_url(room_service.id),
            {"status": RoomService.ServiceStatus.CANCELLED},
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        room_service.refresh_from_db()
        self.assertEqual(room_service.status, RoomService.ServiceStatus.CANCELLED)

    def test_guest_cannot_complete_service(self):
        room_service = self.create_service()
        self.client.force_authenticate(self.guest)

        res = self.client.patch(
            room_service_detail_url(room_service.id),
            {"status": RoomService.ServiceStatus.COMPLETED},
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_staff_completes_service(self):
        room_service = self.create_service()
        self.client.force_authenticate(self.admin)

        res = self.client.patch(
            room_service_detail_url(room_service.id),
            {"status": RoomService.ServiceStatus.COMPLETED},
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["status"], RoomService.ServiceStatus.COMPLETED)

    def test_guest_cannot_change_price(self):
        room_service = self.create_service()
        self.client.force_authenticate(self.guest)

        res = self.client.patch(
            room_service_detail_url(room_service.id),
            {"amount": "0.01"},
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)
        room_service.refresh_from_db()
        self.assertEqual(room_service.amount, Decimal("15.00"))

    def test_guest_changes_quantity_with_same_price(self):
        room_service = self.create_service()
        self.client.force_authenticate(self.guest)

        res = self.client.patch(
            room_service_detail_url(room_service.id),
            {"quantity": 3, "amount": "15.00"},
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        room_service.refresh_from_db()
        self.assertEqual(room_service.quantity, 3)
        self.assertEqual(room_service.amount, Decimal("15.00"))

    def test_staff_changes_price(self):
        room_service = self.create_service()
        self.client.force_authenticate(self.admin)

        res = self.client.patch(
            room_service_detail_url(room_service.id),
            {"amount": "12.50"},
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        room_service.refresh_from_db()
        self.assertEqual(room_service.amount, Decimal("12.50"))

    def test_list_by_booking(self):
        self.create_service()
        self.create_service(service_type=self.spa, amount=Decimal("60.00"))
        self.client.force_authenticate(self.guest)

        res = self.client.get(booking_services_url(self.booking.id))

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(len(res.data), 2)

    def test_list_by_booking_refreshes_after_new_service(self):
        self.client.force_authenticate(self.guest)
        self.client.get(booking_services_url(self.booking.id))

        self.client.post(ROOM_SERVICES_URL, self.payload(), format="json")
        res = self.client.get(booking_services_url(self.booking.id))

        self.assertEqual(len(res.data), 1)

    def test_list_by_foreign_booking_denied(self):
        self.client.force_authenticate(self.stranger)

        res = self.client.get(booking_services_url(self.booking.id))

        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_delete_by_booking(self):
        self.create_service()
        self.client.force_authenticate(self.guest)

        res = self.client.delete(booking_services_url(self.booking.id))

        self.assertEqual(res.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(RoomService.objects.exists())

        res = self.client.delete(booking_services_url(self.booking.id))
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(
            res.data["detail"],
            f"Room service with booking ID {self.booking.id} does not exist.",
        )

    def test_deleting_booking_removes_services(self):
        self.create_service()
        self.client.force_authenticate(self.guest)

        res = self.client.delete(
            reverse("booking:booking-detail", args=[self.booking.id])
        )

        self.assertEqual(res.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(RoomService.objects.exists())
