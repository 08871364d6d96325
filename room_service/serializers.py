from decimal import Decimal

from django.utils import timezone
from rest_framework import serializers

from room_service.models import RoomService, ServiceType


def validate_service_date(value):
    if value < timezone.localdate():
        raise serializers.ValidationError("Service date cannot be in the past.")
    return value


class ServiceTypeSerializer(serializers.ModelSerializer):
    name = serializers.CharField(max_length=100)

    class Meta:
        model = ServiceType
        fields = (
            "id",
            "name",
            "description",
            "default_price",
            "is_active",
            "created_at",
            "updated_at",
        )
        read_only_fields = ("id", "created_at", "updated_at")

    def validate_name(self, value):
        types = ServiceType.objects.filter(name__iexact=value)
        if self.instance is not None:
            types = types.exclude(pk=self.instance.pk)
        if types.exists():
            raise serializers.ValidationError(
                f"Service type with name {value} already exists."
            )
        return value


class RoomServiceSerializer(serializers.ModelSerializer):
    room_number = serializers.IntegerField(source="room.number", read_only=True)
    service_type_name = serializers.CharField(
        source="service_type.name", read_only=True
    )
    total_amount = serializers.DecimalField(
        max_digits=12, decimal_places=2, read_only=True
    )
    amount = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=Decimal("0.01")
    )
    quantity = serializers.IntegerField(min_value=1)

    class Meta:
        model = RoomService
        fields = (
            "id",
            "booking",
            "room",
            "room_number",
            "service_type",
            "service_type_name",
            "date",
            "amount",
            "quantity",
            "total_amount",
            "notes",
            "status",
            "created_at",
            "updated_at",
        )
        read_only_fields = (
            "id",
            "booking",
            "room",
            "service_type",
            "created_at",
            "updated_at",
        )

    def validate_date(self, value):
        if self.instance is not None and value == self.instance.date:
            return value
        return validate_service_date(value)


class RoomServiceCreateSerializer(serializers.Serializer):
    booking_id = serializers.IntegerField(min_value=1)
    service_type_id = serializers.IntegerField(min_value=1)
    date = serializers.DateField(validators=[validate_service_date])
    amount = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=Decimal("0.01"), required=False
    )
    quantity = serializers.IntegerField(min_value=1, default=1)
    notes = serializers.CharField(max_length=255, required=False, allow_blank=True)
