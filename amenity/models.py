from django.db import models
from django.db.models import ForeignKey

from room.models import Room


class AmenityType(models.Model):
    name = models.CharField(max_length=100, unique=True)
    description = models.CharField(max_length=255, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("name",)

    def __str__(self):
        return self.name


class RoomAmenity(models.Model):
    amenity_type = ForeignKey(
        AmenityType, on_delete=models.PROTECT, related_name="room_amenities"
    )
    room = ForeignKey(Room, on_delete=models.CASCADE, related_name="amenities")
    is_available = models.BooleanField(default=True)
    notes = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("room__number", "amenity_type__name")
        verbose_name_plural = "room amenities"
        constraints = [
            models.UniqueConstraint(
                fields=["room", "amenity_type"],
                name="unique_amenity_per_room",
            ),
        ]

    def __str__(self):
        return f"{self.amenity_type.name} in Room {self.room.number}"
