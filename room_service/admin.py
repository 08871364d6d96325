from django.contrib import admin

from room_service.models import RoomService, ServiceType


@admin.register(ServiceType)
class ServiceTypeAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "default_price", "is_active")
    search_fields = ("name",)
    list_filter = ("is_active",)


@admin.register(RoomService)
class RoomServiceAdmin(admin.ModelAdmin):
    list_display = (
        "id", "service_type", "room", "booking", "date", "quantity", "status"
    )
    list_filter = ("status", "service_type", "date")
    search_fields = ("booking__last_name", "room__number")
