from django.contrib import admin

from amenity.models import AmenityType, RoomAmenity


@admin.register(AmenityType)
class AmenityTypeAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "is_active")
    search_fields = ("name",)
    list_filter = ("is_active",)


@admin.register(RoomAmenity)
class RoomAmenityAdmin(admin.ModelAdmin):
    list_display = ("id", "room", "amenity_type", "is_available")
    list_filter = ("is_available", "amenity_type")
    search_fields = ("room__number", "amenity_type__name")
