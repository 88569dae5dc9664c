"""Candidate start times for an appointment of a given length."""

from collections.abc import Iterator

from bookings.domain.calendar import DayWindow
from bookings.domain.value_objects import TimeOfDay

SLOT_STEP_MINUTES = 15


def generate_slots(
    window: DayWindow, duration: int, step: int = SLOT_STEP_MINUTES
) -> Iterator[TimeOfDay]:
    """Yield start times from opening up to ``closing - duration`` inclusive.

    The step is independent of the duration so that combined services of
    any length can start on every quarter hour. Yields nothing when the
    duration does not fit the window at all.
    """
    if duration <= 0 or step <= 0:
        return
    last_start = window.closing.minutes - duration
    start = window.opening.minutes
    while start <= last_start:
        yield TimeOfDay(minutes=start)
        start += step


def fits_in_window(window: DayWindow, start: TimeOfDay, duration: int) -> bool:
    return start >= window.opening and start.plus(duration) <= window.closing.minutes
