from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.viewsets import ModelViewSet

from amenity import services
from amenity.models import AmenityType, RoomAmenity
from amenity.serializers import (
    AmenityTypeSerializer,
    RoomAmenityCreateSerializer,
    RoomAmenitySerializer,
)
from hotel_booking_service.cache import get_cache
from room.permissions import IsAdminOrReadOnly


class AmenityTypeViewSet(ModelViewSet):
    queryset = AmenityType.objects.all()
    serializer_class = AmenityTypeSerializer
    permission_classes = (IsAdminOrReadOnly,)
    lookup_value_regex = r"\d+"

    @extend_schema(
        parameters=[
            OpenApiParameter(
                name="active",
                type=OpenApiTypes.BOOL,
                location=OpenApiParameter.QUERY,
                description="Only active amenity types",
                required=False,
            ),
        ],
    )
    def list(self, request, *args, **kwargs):
        active_only = request.query_params.get("active", "").lower() in ("true", "1")
        amenity_types = services.list_amenity_types(active_only, cache=get_cache())
        return Response(self.get_serializer(amenity_types, many=True).data)

    def perform_destroy(self, instance):
        services.delete_amenity_type(instance)


class RoomAmenityViewSet(ModelViewSet):
    queryset = RoomAmenity.objects.select_related("room", "amenity_type")
    serializer_class = RoomAmenitySerializer
    permission_classes = (IsAdminOrReadOnly,)
    lookup_value_regex = r"\d+"

    filter_backends = (DjangoFilterBackend,)
    filterset_fields = ("room", "amenity_type", "is_available")

    def get_serializer_class(self):
        if self.action == "create":
            return RoomAmenityCreateSerializer
        return RoomAmenitySerializer

    @extend_schema(
        request=RoomAmenityCreateSerializer,
        responses={201: RoomAmenitySerializer},
    )
    def create(self, request, *args, **kwargs):
        serializer = RoomAmenityCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        room_amenity = services.create_room_amenity(serializer.validated_data)
        return Response(
            RoomAmenitySerializer(room_amenity).data, status=status.HTTP_201_CREATED
        )

    @extend_schema(
        request=None,
        responses={
            200: RoomAmenitySerializer(many=True),
            204: None,
            404: OpenApiResponse(description="Room has no amenities"),
        },
        description="List or remove every amenity of one room.",
    )
    @action(
        methods=["GET", "DELETE"],
        detail=False,
        url_path=r"room/(?P<room_id>\d+)",
        filter_backends=[],
    )
    def by_room(self, request, room_id=None):
        if request.method == "DELETE":
            services.delete_room_amenities(int(room_id))
            return Response(status=status.HTTP_204_NO_CONTENT)

        amenities = services.list_room_amenities(int(room_id), cache=get_cache())
        return Response(RoomAmenitySerializer(amenities, many=True).data)
