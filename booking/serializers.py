from django.utils import timezone
from rest_framework import serializers

from booking.models import Booking


class BookingReadSerializer(serializers.ModelSerializer):
    room_number = serializers.IntegerField(source="room.number", read_only=True)
    user_email = serializers.EmailField(
        source="user.email", read_only=True, allow_null=True
    )
    nights = serializers.IntegerField(read_only=True)

    class Meta:
        model = Booking
        fields = (
            "id",
            "room",
            "room_number",
            "user",
            "user_email",
            "first_name",
            "last_name",
            "email",
            "phone_number",
            "special_requests",
            "check_in_date",
            "check_out_date",
            "adult_capacity",
            "children_capacity",
            "nights",
            "status",
            "total_amount",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields


class BookingWriteSerializer(serializers.Serializer):
    """Payload for creating or replacing a booking."""

    room_id = serializers.IntegerField(min_value=1)
    first_name = serializers.CharField(max_length=100)
    last_name = serializers.CharField(max_length=100)
    email = serializers.EmailField(required=False, allow_blank=True)
    phone_number = serializers.CharField(max_length=32, required=False, allow_blank=True)
    special_requests = serializers.CharField(required=False, allow_blank=True)
    check_in_date = serializers.DateField()
    check_out_date = serializers.DateField()
    adult_capacity = serializers.IntegerField(min_value=1)
    children_capacity = serializers.IntegerField(min_value=0, default=0)

    def validate_check_in_date(self, value):
        """Validate that check-in date is not in the past."""
        if value < timezone.localdate():
            raise serializers.ValidationError("Check-in date cannot be in the past.")
        return value

    def validate(self, attrs):
        if attrs["check_out_date"] <= attrs["check_in_date"]:
            raise serializers.ValidationError(
                "Check-out date must be after check-in date."
            )
        return attrs


class BookingStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Booking.BookingStatus.choices)
