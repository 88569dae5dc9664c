"""Weekly opening hours of a shop, viewed one civil day at a time."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from bookings.domain.models import OpeningHours
from bookings.domain.value_objects import TimeOfDay


@dataclass(frozen=True)
class DayWindow:
    """The open interval ``[opening, closing)`` of a single day."""

    opening: TimeOfDay
    closing: TimeOfDay

    @property
    def length(self) -> int:
        return self.closing.minutes - self.opening.minutes


def day_of_week(day: date) -> int:
    """Return 0 for Sunday through 6 for Saturday."""
    return day.isoweekday() % 7


def hours_for(opening_hours: Iterable[OpeningHours], dow: int) -> OpeningHours | None:
    for entry in opening_hours:
        if entry.day_of_week == dow:
            return entry
    return None


def day_window(opening_hours: Iterable[OpeningHours], day: date) -> DayWindow | None:
    """Return the opening window for ``day``, or None when the shop has no capacity.

    Absent entries, closed days and degenerate hours (opening >= closing)
    are all treated as closed.
    """
    entry = hours_for(opening_hours, day_of_week(day))
    if entry is None or not entry.is_open:
        return None
    return DayWindow(opening=entry.opening_time, closing=entry.closing_time)
