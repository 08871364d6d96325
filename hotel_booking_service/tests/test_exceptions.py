from django.test import RequestFactory, SimpleTestCase
from rest_framework import status
from rest_framework.exceptions import ValidationError

from hotel_booking_service.exceptions import (
    AccessDeniedError,
    BusinessValidationError,
    ResourceNotFoundError,
    api_exception_handler,
)


class ApiExceptionHandlerTests(SimpleTestCase):
    def setUp(self):
        self.context = {"request": RequestFactory().get("/api/bookings/1/")}

    def test_not_found_message(self):
        response = api_exception_handler(
            ResourceNotFoundError("Booking", 7), self.context
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(
            response.data,
            {"status": 404, "detail": "Booking with ID 7 not found.", "errors": None},
        )

    def test_business_rule_violation(self):
        response = api_exception_handler(
            BusinessValidationError("Room is not available for the selected dates"),
            self.context,
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(
            response.data["detail"], "Room is not available for the selected dates"
        )

    def test_access_denied(self):
        response = api_exception_handler(AccessDeniedError(), self.context)

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_field_errors_are_kept(self):
        response = api_exception_handler(
            ValidationError({"check_in_date": ["Check-in date cannot be in the past."]}),
            self.context,
        )

        self.assertEqual(response.data["detail"], "Validation failed")
        self.assertEqual(
            response.data["errors"],
            {"check_in_date": ["Check-in date cannot be in the past."]},
        )

    def test_unknown_exceptions_are_left_to_django(self):
        self.assertIsNone(api_exception_handler(RuntimeError("boom"), self.context))
