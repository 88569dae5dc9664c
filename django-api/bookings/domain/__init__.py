from bookings.domain.models import (
    Account,
    Booking,
    BookingStatus,
    BookingUsage,
    NewBooking,
    OpeningHours,
    PlanType,
    Service,
    ServiceChanges,
    ServiceSnapshot,
    Shop,
    SlotAvailability,
    Subscription,
    SubscriptionStatus,
    UserType,
)
from bookings.domain.value_objects import (
    AccountId,
    BookingId,
    Money,
    ServiceId,
    ShopId,
    TimeOfDay,
)

__all__ = [
    "Account",
    "Booking",
    "BookingStatus",
    "BookingUsage",
    "NewBooking",
    "OpeningHours",
    "PlanType",
    "Service",
    "ServiceChanges",
    "ServiceSnapshot",
    "Shop",
    "SlotAvailability",
    "Subscription",
    "SubscriptionStatus",
    "UserType",
    "AccountId",
    "BookingId",
    "Money",
    "ServiceId",
    "ShopId",
    "TimeOfDay",
]
