"""Unit tests for subscription booking limits.

Run with: pytest tests/test_limits.py -v
"""

from datetime import date, timedelta

import pytest

from bookings.domain import PlanType, Subscription, SubscriptionStatus
from bookings.domain.errors import (
    InvalidBookingDateError,
    LookAheadExceededError,
    MonthlyCapExceededError,
)
from bookings.domain.limits import (
    DEFAULT_LIMITS,
    check_look_ahead,
    check_monthly_cap,
    limits_for,
    month_bounds,
)
from tests.conftest import TODAY


class TestLimitsForSubscription:
    def test_starter_plan(self):
        limits = limits_for(Subscription(PlanType.STARTER, SubscriptionStatus.ACTIVE))
        assert (limits.max_days_ahead, limits.max_monthly_bookings) == (7, 100)

    def test_pro_plan(self):
        limits = limits_for(Subscription(PlanType.PRO, SubscriptionStatus.ACTIVE))
        assert (limits.max_days_ahead, limits.max_monthly_bookings) == (30, 500)

    def test_no_subscription_gets_defaults(self):
        assert limits_for(None) == DEFAULT_LIMITS

    @pytest.mark.parametrize(
        "status",
        [SubscriptionStatus.CANCELED, SubscriptionStatus.PAST_DUE, SubscriptionStatus.INCOMPLETE],
    )
    def test_inactive_pro_subscription_gets_defaults(self, status):
        limits = limits_for(Subscription(PlanType.PRO, status))
        assert limits.max_days_ahead == 7
        assert limits.plan is None


class TestLookAhead:
    def test_last_day_of_window_is_allowed(self):
        check_look_ahead(TODAY + timedelta(days=7), TODAY, DEFAULT_LIMITS)

    def test_today_is_allowed(self):
        check_look_ahead(TODAY, TODAY, DEFAULT_LIMITS)

    def test_day_after_window_is_rejected(self):
        with pytest.raises(LookAheadExceededError) as exc_info:
            check_look_ahead(TODAY + timedelta(days=8), TODAY, DEFAULT_LIMITS)
        assert "7 days" in exc_info.value.message

    def test_past_date_is_rejected(self):
        with pytest.raises(InvalidBookingDateError):
            check_look_ahead(TODAY - timedelta(days=1), TODAY, DEFAULT_LIMITS)


class TestMonthlyCap:
    def test_below_cap_is_allowed(self):
        check_monthly_cap(99, DEFAULT_LIMITS)

    def test_at_cap_is_rejected(self):
        with pytest.raises(MonthlyCapExceededError) as exc_info:
            check_monthly_cap(100, DEFAULT_LIMITS)
        assert "100 bookings" in exc_info.value.message
        assert "Upgrade" in exc_info.value.message

    @pytest.mark.parametrize(
        "today, expected",
        [
            (date(2026, 3, 2), (date(2026, 3, 1), date(2026, 3, 31))),
            (date(2028, 2, 29), (date(2028, 2, 1), date(2028, 2, 29))),
            (date(2026, 12, 31), (date(2026, 12, 1), date(2026, 12, 31))),
        ],
    )
    def test_month_bounds_are_inclusive(self, today, expected):
        assert month_bounds(today) == expected
