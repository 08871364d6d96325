from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Q


class Room(models.Model):
    number = models.PositiveIntegerField(
        unique=True, validators=[MinValueValidator(1)]
    )
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    adult_capacity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    children_capacity = models.PositiveIntegerField(default=0)
    description = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("number",)
        constraints = [
            models.CheckConstraint(
                condition=Q(price__gt=0),
                name="room_price_positive",
            ),
            models.CheckConstraint(
                condition=Q(adult_capacity__gte=1),
                name="room_adult_capacity_at_least_one",
            ),
        ]

    @property
    def total_capacity(self) -> int:
        return self.adult_capacity + self.children_capacity

    def __str__(self):
        return f"Room {self.number}"
