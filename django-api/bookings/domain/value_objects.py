"""Domain primitives that enforce validity at creation time."""

import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Self
from uuid import UUID

MINUTES_PER_DAY = 24 * 60

_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


@dataclass(frozen=True)
class AccountId:
    """Unique identifier for an Account supplied by the identity provider."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(str(value)))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class ShopId:
    """Unique identifier for a Shop."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(str(value)))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class ServiceId:
    """Stable identifier for a Service, assigned at creation."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(str(value)))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class BookingId:
    """Unique identifier for a Booking."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(str(value)))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Money:
    """Price representation with validation."""

    amount: Decimal

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

    def __add__(self, other: "Money") -> "Money":
        return Money(amount=self.amount + other.amount)

    def __str__(self) -> str:
        return f"{self.amount:.2f}"


@dataclass(frozen=True, order=True)
class TimeOfDay:
    """Wall-clock time within a single civil day, stored as minutes from midnight."""

    minutes: int

    def __post_init__(self) -> None:
        if not 0 <= self.minutes <= MINUTES_PER_DAY:
            raise ValueError("Time of day must be between 00:00 and 24:00")

    @classmethod
    def parse(cls, value: str) -> Self:
        """Parse a 24-hour ``HH:MM`` string."""
        match = _TIME_PATTERN.match(value or "")
        if match is None:
            raise ValueError(f"Invalid time format: {value!r}, expected HH:MM")
        return cls(minutes=int(match.group(1)) * 60 + int(match.group(2)))

    def plus(self, minutes: int) -> int:
        """Return the minute offset ``minutes`` after this time (may pass midnight)."""
        return self.minutes + minutes

    def __str__(self) -> str:
        hours, mins = divmod(self.minutes, 60)
        return f"{hours:02d}:{mins:02d}"

