"""Subscription-tier booking limits.

Two independent ceilings gate every new booking: how far ahead it may be
placed, and how many bookings a shop may take per calendar month.
"""

import calendar
from dataclasses import dataclass
from datetime import date, timedelta

from bookings.domain.errors import (
    InvalidBookingDateError,
    LookAheadExceededError,
    MonthlyCapExceededError,
)
from bookings.domain.models import PlanType, Subscription


@dataclass(frozen=True)
class BookingLimits:
    plan: PlanType | None
    max_days_ahead: int
    max_monthly_bookings: int


PLAN_LIMITS = {
    PlanType.STARTER: BookingLimits(plan=PlanType.STARTER, max_days_ahead=7, max_monthly_bookings=100),
    PlanType.PRO: BookingLimits(plan=PlanType.PRO, max_days_ahead=30, max_monthly_bookings=500),
}

# No subscription, or one that is not active, gets starter ceilings.
DEFAULT_LIMITS = BookingLimits(plan=None, max_days_ahead=7, max_monthly_bookings=100)


def limits_for(subscription: Subscription | None) -> BookingLimits:
    if subscription is None or not subscription.is_active:
        return DEFAULT_LIMITS
    return PLAN_LIMITS.get(subscription.plan_type, DEFAULT_LIMITS)


def last_bookable_date(today: date, limits: BookingLimits) -> date:
    return today + timedelta(days=limits.max_days_ahead)


def month_bounds(today: date) -> tuple[date, date]:
    """First and last day (inclusive) of the calendar month containing ``today``."""
    _, days_in_month = calendar.monthrange(today.year, today.month)
    return today.replace(day=1), today.replace(day=days_in_month)


def check_look_ahead(appointment_date: date, today: date, limits: BookingLimits) -> None:
    """Reject dates in the past or beyond the plan's look-ahead window."""
    if appointment_date < today:
        raise InvalidBookingDateError()
    if appointment_date > last_bookable_date(today, limits):
        raise LookAheadExceededError(limits.max_days_ahead)


def check_monthly_cap(current_count: int, limits: BookingLimits) -> None:
    """Reject when the shop already holds its monthly allowance of bookings."""
    if current_count >= limits.max_monthly_bookings:
        raise MonthlyCapExceededError(limits.max_monthly_bookings)
