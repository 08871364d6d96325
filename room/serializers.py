from django.utils import timezone
from rest_framework import serializers

from room.models import Room


class RoomSerializer(serializers.ModelSerializer):
    number = serializers.IntegerField(min_value=1)

    class Meta:
        model = Room
        fields = (
            "id",
            "number",
            "price",
            "adult_capacity",
            "children_capacity",
            "description",
            "created_at",
            "updated_at",
        )
        read_only_fields = ("id", "created_at", "updated_at")

    def validate_number(self, value):
        rooms = Room.objects.filter(number=value)
        if self.instance is not None:
            rooms = rooms.exclude(pk=self.instance.pk)
        if rooms.exists():
            raise serializers.ValidationError(f"Room number {value} already exists.")
        return value


class RoomAvailabilityRequestSerializer(serializers.Serializer):
    number_of_adults = serializers.IntegerField(min_value=1)
    number_of_children = serializers.IntegerField(min_value=0, default=0)
    check_in_date = serializers.DateField()
    check_out_date = serializers.DateField()

    def validate_check_in_date(self, value):
        if value < timezone.localdate():
            raise serializers.ValidationError("Check-in date cannot be in the past.")
        return value

    def validate(self, attrs):
        if attrs["check_out_date"] <= attrs["check_in_date"]:
            raise serializers.ValidationError(
                "Check-out date must be after check-in date."
            )
        return attrs


class RoomAvailabilitySerializer(serializers.ModelSerializer):
    class Meta:
        model = Room
        fields = ("id", "number", "price", "adult_capacity", "children_capacity")


class RoomCalendarSerializer(serializers.Serializer):
    date = serializers.DateField()
    available = serializers.BooleanField()
