"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/.
"""

import uuid

from django.core.validators import MaxValueValidator, MinValueValidator, RegexValidator
from django.db import models

clock_time_validator = RegexValidator(r"^([01]\d|2[0-3]):[0-5]\d$", "Use 24-hour HH:MM.")


class Account(models.Model):
    """Persistence model for identity-provider accounts."""

    class UserType(models.TextChoices):
        CUSTOMER = "customer"
        BARBER = "barber"
        ADMIN = "admin"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    full_name = models.CharField(max_length=255)
    email = models.EmailField(unique=True)
    phone = models.CharField(max_length=50, blank=True, default="")
    user_type = models.CharField(max_length=20, choices=UserType.choices)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return f"{self.full_name} <{self.email}>"


class Subscription(models.Model):
    """Persistence model for a shop owner's billing subscription."""

    class PlanType(models.TextChoices):
        STARTER = "starter"
        PRO = "pro"

    class Status(models.TextChoices):
        ACTIVE = "active"
        CANCELED = "canceled"
        PAST_DUE = "past_due"
        INCOMPLETE = "incomplete"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    account = models.OneToOneField(
        Account, on_delete=models.CASCADE, related_name="subscription"
    )
    plan_type = models.CharField(max_length=20, choices=PlanType.choices)
    status = models.CharField(max_length=20, choices=Status.choices)
    current_period_end = models.DateTimeField(null=True, blank=True)

    def __str__(self) -> str:
        return f"{self.account} - {self.plan_type} ({self.status})"


class Shop(models.Model):
    """Persistence model for shops."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    owner = models.ForeignKey(Account, on_delete=models.CASCADE, related_name="shops")
    name = models.CharField(max_length=255)
    address = models.CharField(max_length=255)
    phone = models.CharField(max_length=50, blank=True, null=True)
    description = models.TextField(blank=True, null=True)
    deployed = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return self.name


class Service(models.Model):
    """Persistence model for services sold by a shop."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    shop = models.ForeignKey(Shop, on_delete=models.CASCADE, related_name="services")
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    duration = models.PositiveIntegerField(help_text="Minutes")
    is_active = models.BooleanField(default=True)
    position = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["position", "created_at"]
        indexes = [
            models.Index(fields=["shop", "position"], name="bookings_se_shop_id_4b5e0f_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} - {self.price}"


class OpeningHours(models.Model):
    """Persistence model for one weekday of a shop's recurring hours."""

    shop = models.ForeignKey(
        Shop, on_delete=models.CASCADE, related_name="opening_hours"
    )
    day_of_week = models.PositiveSmallIntegerField(
        validators=[MaxValueValidator(6)], help_text="0 = Sunday, 6 = Saturday"
    )
    opening_time = models.CharField(max_length=5, validators=[clock_time_validator])
    closing_time = models.CharField(max_length=5, validators=[clock_time_validator])
    is_closed = models.BooleanField(default=False)

    class Meta:
        ordering = ["day_of_week"]
        constraints = [
            models.UniqueConstraint(
                fields=["shop", "day_of_week"], name="unique_opening_hours_day"
            ),
        ]
        verbose_name_plural = "opening hours"

    def __str__(self) -> str:
        if self.is_closed:
            return f"{self.shop.name} - day {self.day_of_week}: closed"
        return f"{self.shop.name} - day {self.day_of_week}: {self.opening_time}-{self.closing_time}"


class Booking(models.Model):
    """Persistence model for bookings."""

    class Status(models.TextChoices):
        PENDING = "pending"
        CONFIRMED = "confirmed"
        COMPLETED = "completed"
        CANCELLED = "cancelled"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    customer = models.ForeignKey(
        Account, on_delete=models.CASCADE, related_name="bookings"
    )
    shop = models.ForeignKey(Shop, on_delete=models.CASCADE, related_name="bookings")
    services = models.JSONField(help_text="Snapshot of booked services")
    appointment_date = models.DateField()
    appointment_time = models.CharField(max_length=5)
    status = models.CharField(
        max_length=20, choices=Status.choices, default=Status.PENDING
    )
    total_price = models.DecimalField(max_digits=10, decimal_places=2)
    total_duration = models.PositiveIntegerField(help_text="Minutes")
    notes = models.TextField(blank=True, null=True)
    rating = models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(1), MaxValueValidator(5)],
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-appointment_date", "-appointment_time"]
        indexes = [
            models.Index(fields=["shop", "appointment_date"], name="bookings_bo_shop_id_8c1d2a_idx"),
            models.Index(fields=["customer"], name="bookings_bo_custome_3e9f4b_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.shop.name} - {self.appointment_date} {self.appointment_time}"
