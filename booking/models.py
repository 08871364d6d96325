from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import F, ForeignKey, Q

from room.models import Room


class BookingQuerySet(models.QuerySet):
    def active(self):
        """Bookings that occupy their room: BOOKED or CHECKED_IN."""
        return self.filter(status__in=Booking.ACTIVE_STATUSES)

    def overlapping(self, check_in_date, check_out_date):
        """Bookings whose [check-in, check-out) meets the given range."""
        return self.filter(
            check_in_date__lt=check_out_date,
            check_out_date__gt=check_in_date,
        )


class Booking(models.Model):
    class BookingStatus(models.TextChoices):
        BOOKED = "Booked"
        CHECKED_IN = "Checked in"
        CHECKED_OUT = "Checked out"
        CANCELED = "Canceled"

    ACTIVE_STATUSES = (BookingStatus.BOOKED, BookingStatus.CHECKED_IN)

    room = ForeignKey(Room, on_delete=models.PROTECT, related_name="bookings")
    user = ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="bookings",
    )
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    email = models.EmailField(blank=True)
    phone_number = models.CharField(max_length=32, blank=True)
    special_requests = models.TextField(blank=True)
    check_in_date = models.DateField()
    check_out_date = models.DateField()
    adult_capacity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    children_capacity = models.PositiveIntegerField(default=0)
    status = models.CharField(
        choices=BookingStatus, max_length=20, default=BookingStatus.BOOKED
    )
    total_amount = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0.00")
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = BookingQuerySet.as_manager()

    class Meta:
        ordering = ("id",)
        constraints = [
            models.CheckConstraint(
                condition=Q(check_out_date__gt=F("check_in_date")),
                name="check_out_after_check_in",
            ),
        ]

    @property
    def nights(self) -> int:
        return max((self.check_out_date - self.check_in_date).days, 1)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def calculate_total_amount(self) -> Decimal:
        self.total_amount = self.room.price * self.nights
        return self.total_amount

    def __str__(self):
        return (
            f"Booking {self.id} - Room {self.room.number} "
            f"({self.check_in_date} to {self.check_out_date})"
        )
