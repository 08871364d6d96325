from rest_framework import serializers

from amenity.models import AmenityType, RoomAmenity


class AmenityTypeSerializer(serializers.ModelSerializer):
    name = serializers.CharField(max_length=100)

    class Meta:
        model = AmenityType
        fields = ("id", "name", "description", "is_active", "created_at", "updated_at")
        read_only_fields = ("id", "created_at", "updated_at")

    def validate_name(self, value):
        types = AmenityType.objects.filter(name__iexact=value)
        if self.instance is not None:
            types = types.exclude(pk=self.instance.pk)
        if types.exists():
            raise serializers.ValidationError(
                f"Amenity type with name {value} already exists."
            )
        return value


class RoomAmenitySerializer(serializers.ModelSerializer):
    room_number = serializers.IntegerField(source="room.number", read_only=True)
    amenity_type_name = serializers.CharField(
        source="amenity_type.name", read_only=True
    )

    class Meta:
        model = RoomAmenity
        fields = (
            "id",
            "room",
            "room_number",
            "amenity_type",
            "amenity_type_name",
            "is_available",
            "notes",
            "created_at",
            "updated_at",
        )
        read_only_fields = ("id", "room", "amenity_type", "created_at", "updated_at")


class RoomAmenityCreateSerializer(serializers.Serializer):
    room_id = serializers.IntegerField(min_value=1)
    amenity_type_id = serializers.IntegerField(min_value=1)
    is_available = serializers.BooleanField(default=True)
    notes = serializers.CharField(max_length=255, required=False, allow_blank=True)
