"""Overlap tests between candidate slots and existing bookings."""

from collections.abc import Iterable

from bookings.domain.models import Booking, SlotAvailability
from bookings.domain.value_objects import TimeOfDay


def overlaps(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    """Half-open interval intersection: touching intervals do not overlap."""
    return a_start < b_end and a_end > b_start


def find_conflict(
    start: TimeOfDay, duration: int, bookings: Iterable[Booking]
) -> Booking | None:
    """Return the first capacity-holding booking that overlaps ``[start, start+duration)``."""
    end = start.plus(duration)
    for booking in bookings:
        if not booking.status.holds_capacity:
            continue
        if overlaps(start.minutes, end, booking.start, booking.end):
            return booking
    return None


def resolve_availability(
    candidates: Iterable[TimeOfDay], duration: int, bookings: Iterable[Booking]
) -> SlotAvailability:
    """Split candidates into available and booked, keeping chronological order."""
    held = [booking for booking in bookings if booking.status.holds_capacity]
    available: list[TimeOfDay] = []
    booked: list[TimeOfDay] = []
    for slot in sorted(candidates):
        if find_conflict(slot, duration, held) is None:
            available.append(slot)
        else:
            booked.append(slot)
    return SlotAvailability(available=tuple(available), booked=tuple(booked))
