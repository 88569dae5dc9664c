"""Serializers for request validation and transforming domain models to API responses."""

from rest_framework import serializers

from bookings.domain import BookingStatus

TIME_REGEX = r"^([01]\d|2[0-3]):[0-5]\d$"


class BookingCreateSerializer(serializers.Serializer):
    """Input for POST /api/bookings."""

    customer_id = serializers.UUIDField()
    shop_id = serializers.UUIDField()
    service_ids = serializers.ListField(child=serializers.UUIDField(), allow_empty=True)
    appointment_date = serializers.DateField(format="%Y-%m-%d", input_formats=["%Y-%m-%d"])
    appointment_time = serializers.RegexField(TIME_REGEX)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class SlotQuerySerializer(serializers.Serializer):
    """Query parameters for GET /api/shops/{shop_id}/slots."""

    date = serializers.DateField(input_formats=["%Y-%m-%d"])
    services = serializers.CharField(required=False, allow_blank=True, default="")

    def validate_services(self, value: str) -> list[str]:
        return [item.strip() for item in value.split(",") if item.strip()]


class StatusUpdateSerializer(serializers.Serializer):
    actor_id = serializers.UUIDField()
    status = serializers.ChoiceField(choices=[status.value for status in BookingStatus])


class ActorSerializer(serializers.Serializer):
    actor_id = serializers.UUIDField()


class RatingSerializer(serializers.Serializer):
    customer_id = serializers.UUIDField()
    rating = serializers.IntegerField()


class ServiceInputSerializer(serializers.Serializer):
    actor_id = serializers.UUIDField()
    name = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    price = serializers.DecimalField(max_digits=10, decimal_places=2)
    duration = serializers.IntegerField()


class ServiceUpdateSerializer(serializers.Serializer):
    actor_id = serializers.UUIDField()
    name = serializers.CharField(max_length=255, required=False)
    # A blank description clears it; null is not accepted.
    description = serializers.CharField(required=False, allow_blank=True)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, required=False)
    duration = serializers.IntegerField(required=False)
    is_active = serializers.BooleanField(required=False)


class OpeningHoursEntrySerializer(serializers.Serializer):
    day_of_week = serializers.IntegerField()
    opening_time = serializers.CharField()
    closing_time = serializers.CharField()
    is_closed = serializers.BooleanField(default=False)


class OpeningHoursInputSerializer(serializers.Serializer):
    actor_id = serializers.UUIDField()
    hours = OpeningHoursEntrySerializer(many=True)


# Output serializers read attributes of domain models.


class ServiceSnapshotSerializer(serializers.Serializer):
    name = serializers.CharField()
    price = serializers.CharField()
    duration = serializers.IntegerField()


class BookingSerializer(serializers.Serializer):
    """Serializer for Booking domain model."""

    id = serializers.CharField()
    customer_id = serializers.CharField()
    shop_id = serializers.CharField()
    services = ServiceSnapshotSerializer(many=True)
    appointment_date = serializers.DateField(format="%Y-%m-%d")
    appointment_time = serializers.CharField()
    status = serializers.CharField(source="status.value")
    total_price = serializers.CharField()
    total_duration = serializers.IntegerField()
    notes = serializers.CharField(allow_null=True)
    rating = serializers.IntegerField(allow_null=True)


class ServiceSerializer(serializers.Serializer):
    """Serializer for Service domain model."""

    id = serializers.CharField()
    name = serializers.CharField()
    description = serializers.CharField(allow_null=True)
    price = serializers.CharField()
    duration = serializers.IntegerField()
    is_active = serializers.BooleanField()
    position = serializers.IntegerField()


class OpeningHoursSerializer(serializers.Serializer):
    """Serializer for OpeningHours domain model."""

    day_of_week = serializers.IntegerField()
    opening_time = serializers.CharField()
    closing_time = serializers.CharField()
    is_closed = serializers.BooleanField()


class SlotAvailabilitySerializer(serializers.Serializer):
    available = serializers.SerializerMethodField()
    booked = serializers.SerializerMethodField()

    def get_available(self, obj) -> list[str]:
        return [str(slot) for slot in obj.available]

    def get_booked(self, obj) -> list[str]:
        return [str(slot) for slot in obj.booked]


class BookingUsageSerializer(serializers.Serializer):
    plan = serializers.SerializerMethodField()
    max_days_ahead = serializers.IntegerField()
    last_bookable_date = serializers.DateField(format="%Y-%m-%d")
    monthly_cap = serializers.IntegerField()
    monthly_count = serializers.IntegerField()
    remaining = serializers.IntegerField()
    month_start = serializers.DateField(format="%Y-%m-%d")
    month_end = serializers.DateField(format="%Y-%m-%d")

    def get_plan(self, obj) -> str | None:
        return obj.plan.value if obj.plan else None
