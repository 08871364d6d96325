from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.viewsets import ModelViewSet

from guest.context import CallerContext
from hotel_booking_service.cache import get_cache
from room.permissions import IsAdminOrReadOnly
from room_service import services
from room_service.models import ServiceType
from room_service.serializers import (
    RoomServiceCreateSerializer,
    RoomServiceSerializer,
    ServiceTypeSerializer,
)


class ServiceTypeViewSet(ModelViewSet):
    queryset = ServiceType.objects.all()
    serializer_class = ServiceTypeSerializer
    permission_classes = (IsAdminOrReadOnly,)
    lookup_value_regex = r"\d+"

    @extend_schema(
        parameters=[
            OpenApiParameter(
                name="active",
                type=OpenApiTypes.BOOL,
                location=OpenApiParameter.QUERY,
                description="Only active service types",
                required=False,
            ),
        ],
    )
    def list(self, request, *args, **kwargs):
        active_only = request.query_params.get("active", "").lower() in ("true", "1")
        service_types = services.list_service_types(active_only, cache=get_cache())
        return Response(self.get_serializer(service_types, many=True).data)

    def perform_destroy(self, instance):
        services.delete_service_type(instance)


class RoomServiceViewSet(ModelViewSet):
    """Services ordered for bookings; guests see those of their own bookings."""

    serializer_class = RoomServiceSerializer
    permission_classes = (IsAuthenticated,)
    lookup_value_regex = r"\d+"

    filter_backends = (DjangoFilterBackend,)
    filterset_fields = ("booking", "room", "service_type", "status", "date")

    access_actions = {
        "update": "update",
        "partial_update": "update",
        "destroy": "delete",
    }

    @property
    def caller(self) -> CallerContext:
        return CallerContext.from_request(self.request)

    def get_queryset(self):
        return services.visible_room_services(self.caller)

    def get_serializer_class(self):
        if self.action == "create":
            return RoomServiceCreateSerializer
        return RoomServiceSerializer

    def get_object(self):
        return services.get_room_service(
            int(self.kwargs["pk"]),
            self.caller,
            action=self.access_actions.get(self.action, "view"),
        )

    @extend_schema(
        request=RoomServiceCreateSerializer,
        responses={201: RoomServiceSerializer},
    )
    def create(self, request, *args, **kwargs):
        serializer = RoomServiceCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        room_service = services.create_room_service(
            serializer.validated_data, self.caller
        )
        return Response(
            RoomServiceSerializer(room_service).data, status=status.HTTP_201_CREATED
        )

    def perform_update(self, serializer):
        services.update_room_service(
            serializer.instance, serializer.validated_data, self.caller
        )

    @extend_schema(
        request=None,
        responses={
            200: RoomServiceSerializer(many=True),
            204: None,
            404: OpenApiResponse(description="Booking or its services not found"),
        },
        description="List or remove every service ordered for one booking.",
    )
    @action(
        methods=["GET", "DELETE"],
        detail=False,
        url_path=r"booking/(?P<booking_id>\d+)",
        filter_backends=[],
    )
    def by_booking(self, request, booking_id=None):
        if request.method == "DELETE":
            services.delete_booking_services(int(booking_id), self.caller)
            return Response(status=status.HTTP_204_NO_CONTENT)

        room_services = services.list_booking_services(
            int(booking_id), self.caller, cache=get_cache()
        )
        return Response(RoomServiceSerializer(room_services, many=True).data)
