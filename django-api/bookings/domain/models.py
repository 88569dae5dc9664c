"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in bookings/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

from bookings.domain.value_objects import (
    AccountId,
    BookingId,
    Money,
    ServiceId,
    ShopId,
    TimeOfDay,
)


class UserType(Enum):
    CUSTOMER = "customer"
    BARBER = "barber"
    ADMIN = "admin"


class BookingStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def holds_capacity(self) -> bool:
        return self is not BookingStatus.CANCELLED


class PlanType(Enum):
    STARTER = "starter"
    PRO = "pro"


class SubscriptionStatus(Enum):
    ACTIVE = "active"
    CANCELED = "canceled"
    PAST_DUE = "past_due"
    INCOMPLETE = "incomplete"


@dataclass(frozen=True)
class Account:
    """Principal as seen through the identity provider."""

    id: AccountId
    full_name: str
    email: str
    user_type: UserType
    phone: str = ""


@dataclass(frozen=True)
class Shop:
    """Domain representation of a Shop."""

    id: ShopId
    owner_id: AccountId
    name: str
    address: str
    deployed: bool = False
    phone: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class OpeningHours:
    """Recurring opening hours for one day of the week (0=Sunday..6=Saturday)."""

    day_of_week: int
    opening_time: TimeOfDay
    closing_time: TimeOfDay
    is_closed: bool = False

    def __post_init__(self) -> None:
        if not 0 <= self.day_of_week <= 6:
            raise ValueError("day_of_week must be between 0 and 6")

    @property
    def is_open(self) -> bool:
        return not self.is_closed and self.opening_time < self.closing_time


@dataclass(frozen=True)
class Service:
    """Domain representation of a sellable Service."""

    id: ServiceId
    shop_id: ShopId
    name: str
    price: Money
    duration: int
    is_active: bool = True
    description: str | None = None
    position: int = 0


@dataclass(frozen=True)
class ServiceSnapshot:
    """Immutable copy of a service taken when a booking is made."""

    name: str
    price: Money
    duration: int

    @classmethod
    def of(cls, service: Service) -> "ServiceSnapshot":
        return cls(name=service.name, price=service.price, duration=service.duration)


@dataclass(frozen=True)
class Subscription:
    """Billing state of a shop owner (read-only)."""

    plan_type: PlanType
    status: SubscriptionStatus
    current_period_end: datetime | None = None

    @property
    def is_active(self) -> bool:
        return self.status is SubscriptionStatus.ACTIVE


@dataclass(frozen=True)
class Booking:
    """Domain representation of a Booking."""

    id: BookingId
    customer_id: AccountId
    shop_id: ShopId
    services: tuple[ServiceSnapshot, ...]
    appointment_date: date
    appointment_time: TimeOfDay
    status: BookingStatus
    total_price: Money
    total_duration: int
    notes: str | None = None
    rating: int | None = None
    created_at: datetime | None = None

    @property
    def start(self) -> int:
        return self.appointment_time.minutes

    @property
    def end(self) -> int:
        return self.appointment_time.plus(self.total_duration)


@dataclass(frozen=True)
class NewBooking:
    """A validated booking that has not been persisted yet."""

    customer_id: AccountId
    shop_id: ShopId
    services: tuple[ServiceSnapshot, ...]
    appointment_date: date
    appointment_time: TimeOfDay
    total_price: Money
    total_duration: int
    notes: str | None = None
    status: BookingStatus = BookingStatus.PENDING


@dataclass(frozen=True)
class SlotAvailability:
    """Candidate start times split into available and booked, both chronological."""

    available: tuple[TimeOfDay, ...] = ()
    booked: tuple[TimeOfDay, ...] = ()


@dataclass(frozen=True)
class BookingUsage:
    """Advisory view of a shop's booking limits."""

    plan: PlanType | None
    max_days_ahead: int
    last_bookable_date: date
    monthly_cap: int
    monthly_count: int
    month_start: date
    month_end: date

    @property
    def remaining(self) -> int:
        return max(self.monthly_cap - self.monthly_count, 0)


@dataclass(frozen=True)
class ServiceChanges:
    """Partial update of a Service; ``None`` leaves a field untouched.

    An empty ``description`` clears it.
    """

    name: str | None = None
    description: str | None = None
    price: Money | None = None
    duration: int | None = None
    is_active: bool | None = None

    def as_dict(self) -> dict:
        return {key: value for key, value in self.__dict__.items() if value is not None}

