from django.contrib import admin

from room.models import Room


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = ("id", "number", "price", "adult_capacity", "children_capacity")
    search_fields = ("number",)
    list_filter = ("adult_capacity", "children_capacity")
    ordering = ("number",)
