from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import ForeignKey, Q

from booking.models import Booking
from room.models import Room


class ServiceType(models.Model):
    name = models.CharField(max_length=100, unique=True)
    description = models.CharField(max_length=255, blank=True)
    default_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("name",)

    def __str__(self):
        return self.name


class RoomService(models.Model):
    class ServiceStatus(models.TextChoices):
        REQUESTED = "Requested"
        IN_PROGRESS = "In progress"
        COMPLETED = "Completed"
        CANCELLED = "Cancelled"

    service_type = ForeignKey(
        ServiceType, on_delete=models.PROTECT, related_name="room_services"
    )
    room = ForeignKey(Room, on_delete=models.CASCADE, related_name="services")
    booking = ForeignKey(Booking, on_delete=models.CASCADE, related_name="services")
    date = models.DateField()
    amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    quantity = models.PositiveIntegerField(
        default=1, validators=[MinValueValidator(1)]
    )
    notes = models.CharField(max_length=255, blank=True)
    status = models.CharField(
        choices=ServiceStatus, max_length=20, default=ServiceStatus.REQUESTED
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("date", "id")
        constraints = [
            models.CheckConstraint(
                condition=Q(amount__gt=0),
                name="room_service_amount_positive",
            ),
            models.CheckConstraint(
                condition=Q(quantity__gte=1),
                name="room_service_quantity_at_least_one",
            ),
        ]

    @property
    def total_amount(self) -> Decimal:
        return self.amount * self.quantity

    def __str__(self):
        return f"{self.service_type.name} for booking {self.booking_id} on {self.date}"
