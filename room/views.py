from django.utils.dateparse import parse_date
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.viewsets import ModelViewSet

from hotel_booking_service.cache import get_cache
from hotel_booking_service.exceptions import (
    BusinessValidationError,
    ResourceNotFoundError,
)
from room.models import Room
from room.permissions import IsAdminOrReadOnly
from room.serializers import (
    RoomAvailabilityRequestSerializer,
    RoomAvailabilitySerializer,
    RoomCalendarSerializer,
    RoomSerializer,
)
from room.services import delete_room, find_available_room, get_room, room_calendar

MAX_CALENDAR_DAYS = 366


class RoomViewSet(ModelViewSet):
    queryset = Room.objects.all().order_by("number")
    serializer_class = RoomSerializer
    permission_classes = (IsAdminOrReadOnly,)
    lookup_value_regex = r"\d+"

    filter_backends = (DjangoFilterBackend,)
    filterset_fields = ("adult_capacity", "children_capacity")

    def get_serializer_class(self):
        if self.action == "get_calendar":
            return RoomCalendarSerializer
        if self.action == "available_room":
            return RoomAvailabilityRequestSerializer
        return RoomSerializer

    def get_object(self):
        room = get_room(self.kwargs["pk"], cache=get_cache())
        self.check_object_permissions(self.request, room)
        return room

    def perform_destroy(self, instance):
        delete_room(instance)

    @extend_schema(
        request=RoomAvailabilityRequestSerializer,
        responses={
            200: RoomAvailabilitySerializer,
            400: OpenApiResponse(description="Invalid party size or dates"),
            404: OpenApiResponse(description="No available room"),
        },
        description=(
                "Find the cheapest room that fits the party and is free for "
                "the whole stay.\n\n"
                "A room fits when its adult capacity covers the adults and its "
                "total capacity covers adults plus children. Bookings with "
                "status Booked or Checked in block their dates; check-out day "
                "is free for the next guest."
        ),
    )
    @action(
        methods=["POST"],
        detail=False,
        url_path="available-room",
        permission_classes=[AllowAny],
        filter_backends=[],
    )
    def available_room(self, request):
        serializer = RoomAvailabilityRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        room = find_available_room(**serializer.validated_data)
        if room is None:
            raise ResourceNotFoundError(message="No available room")

        return Response(RoomAvailabilitySerializer(room).data)

    @extend_schema(
        request=None,
        parameters=[
            OpenApiParameter(
                name="date_from",
                type=OpenApiTypes.DATE,
                location=OpenApiParameter.QUERY,
                description="First day (YYYY-MM-DD)",
                required=True,
            ),
            OpenApiParameter(
                name="date_to",
                type=OpenApiTypes.DATE,
                location=OpenApiParameter.QUERY,
                description="Last day, inclusive (YYYY-MM-DD)",
                required=True,
            ),
        ],
        responses={
            200: RoomCalendarSerializer(many=True),
            400: OpenApiResponse(
                description="Missing or invalid dates, or range over a year"
            ),
        },
        description=(
                "Get room availability calendar for a given date range.\n\n"
                "Only bookings with status Booked or Checked in occupy dates. "
                "Availability is calculated per day."
        ),
    )
    @action(methods=["GET"], detail=True, url_path="calendar", filter_backends=[])
    def get_calendar(self, request, pk=None):
        room = self.get_object()

        date_from_str = request.query_params.get("date_from")
        date_to_str = request.query_params.get("date_to")

        if not date_from_str or not date_to_str:
            raise BusinessValidationError("date_from and date_to are required")

        try:
            date_from = parse_date(date_from_str)
            date_to = parse_date(date_to_str)
        except ValueError:
            date_from = date_to = None

        if not date_from or not date_to:
            raise BusinessValidationError("Invalid date format. Use YYYY-MM-DD.")

        if date_from > date_to:
            raise BusinessValidationError("date_from must be before date_to")

        if (date_to - date_from).days >= MAX_CALENDAR_DAYS:
            raise BusinessValidationError(
                f"Date range cannot exceed {MAX_CALENDAR_DAYS} days"
            )

        serializer = RoomCalendarSerializer(
            room_calendar(room, date_from, date_to), many=True
        )
        return Response(serializer.data)
