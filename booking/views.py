from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import (
    OpenApiParameter,
    OpenApiResponse,
    OpenApiTypes,
    extend_schema,
)
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from booking import services
from booking.filters import BookingFilter
from booking.models import Booking
from booking.serializers import (
    BookingReadSerializer,
    BookingStatusSerializer,
    BookingWriteSerializer,
)
from guest.context import CallerContext
from hotel_booking_service.cache import get_cache
from hotel_booking_service.pagination import PageResponsePagination


class BookingViewSet(viewsets.ModelViewSet):
    serializer_class = BookingReadSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend]
    filterset_class = BookingFilter
    pagination_class = PageResponsePagination
    lookup_value_regex = r"\d+"

    @property
    def caller(self) -> CallerContext:
        return CallerContext.from_request(self.request)

    def get_queryset(self):
        params = self.request.query_params
        return services.list_bookings(
            self.caller,
            search=params.get("search"),
            sort=params.get("sort", "id"),
            direction=params.get("direction", "asc"),
        )

    def get_serializer_class(self):
        if self.action in ("create", "update"):
            return BookingWriteSerializer
        if self.action == "partial_update":
            return BookingStatusSerializer
        return BookingReadSerializer

    @extend_schema(
        summary="List bookings",
        description=(
            "Retrieve a page of bookings.\n\n"
            "- Regular users see only their own bookings.\n"
            "- Staff users see all bookings.\n"
            "- Supports search, sorting and filtering by user, room, status "
            "and date range."
        ),
        parameters=[
            OpenApiParameter(
                name="search",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                description="Guest name or status fragment, or a booking/room id",
                required=False,
            ),
            OpenApiParameter(
                name="sort",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                description=(
                    "Sort field (id, first_name, last_name, check_in_date, "
                    "check_out_date, status, total_amount, created_at, room)"
                ),
                required=False,
            ),
            OpenApiParameter(
                name="direction",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                description="asc or desc",
                required=False,
            ),
            OpenApiParameter(
                name="status",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                description="Booking status (Booked, Checked in, Checked out, Canceled)",
                required=False,
            ),
            OpenApiParameter(
                name="from_date",
                type=OpenApiTypes.DATE,
                location=OpenApiParameter.QUERY,
                description="Filter bookings with check-in date from this date",
                required=False,
            ),
            OpenApiParameter(
                name="to_date",
                type=OpenApiTypes.DATE,
                location=OpenApiParameter.QUERY,
                description="Filter bookings with check-out date to this date",
                required=False,
            ),
        ],
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    def retrieve(self, request, pk=None):
        booking = services.get_booking(int(pk), self.caller, cache=get_cache())
        return Response(BookingReadSerializer(booking).data)

    @extend_schema(request=BookingWriteSerializer, responses={201: BookingReadSerializer})
    def create(self, request, *args, **kwargs):
        """Create a booking for the current user at the room's price."""
        serializer = BookingWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = services.create_booking(
            serializer.validated_data, self.caller, cache=get_cache()
        )
        return Response(
            BookingReadSerializer(booking).data, status=status.HTTP_201_CREATED
        )

    @extend_schema(request=BookingWriteSerializer, responses={200: BookingReadSerializer})
    def update(self, request, pk=None, *args, **kwargs):
        serializer = BookingWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = services.update_booking(
            int(pk), serializer.validated_data, self.caller, cache=get_cache()
        )
        return Response(BookingReadSerializer(booking).data)

    @extend_schema(
        summary="Change booking status",
        description=(
            "Allowed transitions: Booked -> Checked in, Booked -> Canceled, "
            "Checked in -> Checked out. Checked out and Canceled are final."
        ),
        request=BookingStatusSerializer,
        responses={
            200: BookingReadSerializer,
            400: OpenApiResponse(description="Invalid status transition"),
        },
    )
    def partial_update(self, request, pk=None, *args, **kwargs):
        serializer = BookingStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return self._change_status(pk, serializer.validated_data["status"])

    def destroy(self, request, pk=None, *args, **kwargs):
        services.delete_booking(int(pk), self.caller, cache=get_cache())
        return Response(status=status.HTTP_204_NO_CONTENT)

    def _change_status(self, pk, new_status):
        booking = services.update_booking_status(
            int(pk), new_status, self.caller, cache=get_cache()
        )
        return Response(BookingReadSerializer(booking).data, status=status.HTTP_200_OK)

    @extend_schema(request=None, responses={200: BookingReadSerializer})
    @action(detail=True, methods=["post"], url_path="check-in")
    def check_in(self, request, pk=None):
        return self._change_status(pk, Booking.BookingStatus.CHECKED_IN)

    @extend_schema(request=None, responses={200: BookingReadSerializer})
    @action(detail=True, methods=["post"], url_path="check-out")
    def check_out(self, request, pk=None):
        return self._change_status(pk, Booking.BookingStatus.CHECKED_OUT)

    @extend_schema(request=None, responses={200: BookingReadSerializer})
    @action(detail=True, methods=["post"], url_path="cancel")
    def cancel(self, request, pk=None):
        return self._change_status(pk, Booking.BookingStatus.CANCELED)
