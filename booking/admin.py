from django.contrib import admin

from booking.models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "room",
        "user",
        "first_name",
        "last_name",
        "check_in_date",
        "check_out_date",
        "status",
        "total_amount",
    )

    list_filter = (
        "status",
        "check_in_date",
        "check_out_date",
        "room",
    )

    search_fields = (
        "user__email",
        "first_name",
        "last_name",
        "room__number",
    )

    ordering = ("-check_in_date",)
