"""Pytest configuration and shared fixtures."""

import uuid
from datetime import date
from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from bookings.domain import (
    Account,
    AccountId,
    Money,
    OpeningHours,
    PlanType,
    Shop,
    ShopId,
    Subscription,
    SubscriptionStatus,
    TimeOfDay,
    UserType,
)
from bookings.services.booking_service import BookingService
from bookings.services.shop_service import ShopService
from tests.fakes import InMemoryBookingStore

# Monday. 2026-03-01 and 2026-03-08 are Sundays.
TODAY = date(2026, 3, 2)
TUESDAY = date(2026, 3, 3)


def weekly_hours(opening: str = "09:00", closing: str = "18:00") -> list[OpeningHours]:
    """Open every day but Sunday."""
    return [
        OpeningHours(
            day_of_week=day,
            opening_time=TimeOfDay.parse(opening),
            closing_time=TimeOfDay.parse(closing),
            is_closed=day == 0,
        )
        for day in range(7)
    ]


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def store() -> InMemoryBookingStore:
    return InMemoryBookingStore()


@pytest.fixture
def owner(store: InMemoryBookingStore) -> Account:
    account = Account(
        id=AccountId(uuid.uuid4()),
        full_name="Sam Barber",
        email="sam@example.com",
        user_type=UserType.BARBER,
    )
    store.accounts[account.id] = account
    return account


@pytest.fixture
def customer(store: InMemoryBookingStore) -> Account:
    account = Account(
        id=AccountId(uuid.uuid4()),
        full_name="Alex Customer",
        email="alex@example.com",
        user_type=UserType.CUSTOMER,
    )
    store.accounts[account.id] = account
    return account


@pytest.fixture
def other_customer(store: InMemoryBookingStore) -> Account:
    account = Account(
        id=AccountId(uuid.uuid4()),
        full_name="Jo Customer",
        email="jo@example.com",
        user_type=UserType.CUSTOMER,
    )
    store.accounts[account.id] = account
    return account


@pytest.fixture
def shop(store: InMemoryBookingStore, owner: Account) -> Shop:
    shop = Shop(id=ShopId(uuid.uuid4()), owner_id=owner.id, name="Fade Co", address="1 Main St")
    store.shops[shop.id] = shop
    store.replace_opening_hours(shop.id, weekly_hours())
    return shop


@pytest.fixture
def haircut(store: InMemoryBookingStore, shop: Shop):
    return store.add_service(shop.id, "Haircut", Money(Decimal("25.00")), 30)


@pytest.fixture
def beard_trim(store: InMemoryBookingStore, shop: Shop):
    return store.add_service(shop.id, "Beard trim", Money(Decimal("10.00")), 15)


@pytest.fixture
def subscribe(store: InMemoryBookingStore, owner: Account):
    def _subscribe(plan: PlanType, status: SubscriptionStatus = SubscriptionStatus.ACTIVE):
        store.subscriptions[owner.id] = Subscription(plan_type=plan, status=status)

    return _subscribe


@pytest.fixture
def booking_service(store: InMemoryBookingStore) -> BookingService:
    return BookingService(store)


@pytest.fixture
def shop_service(store: InMemoryBookingStore) -> ShopService:
    return ShopService(store)


# ORM-backed fixtures for handler, cache and store tests.


@pytest.fixture
def db_owner(db):
    from bookings import models as orm

    return orm.Account.objects.create(
        full_name="Sam Barber", email="sam@example.com", user_type=orm.Account.UserType.BARBER
    )


@pytest.fixture
def db_customer(db):
    from bookings import models as orm

    return orm.Account.objects.create(
        full_name="Alex Customer", email="alex@example.com", user_type=orm.Account.UserType.CUSTOMER
    )


@pytest.fixture
def db_shop(db_owner):
    from bookings import models as orm

    shop = orm.Shop.objects.create(owner=db_owner, name="Fade Co", address="1 Main St")
    for entry in weekly_hours():
        orm.OpeningHours.objects.create(
            shop=shop,
            day_of_week=entry.day_of_week,
            opening_time=str(entry.opening_time),
            closing_time=str(entry.closing_time),
            is_closed=entry.is_closed,
        )
    return shop


@pytest.fixture
def db_haircut(db_shop):
    from bookings import models as orm

    return orm.Service.objects.create(
        shop=db_shop, name="Haircut", price=Decimal("25.00"), duration=30, position=0
    )


@pytest.fixture
def db_beard_trim(db_shop):
    from bookings import models as orm

    return orm.Service.objects.create(
        shop=db_shop, name="Beard trim", price=Decimal("10.00"), duration=15, position=1
    )


@pytest.fixture
def frozen_today(monkeypatch):
    """Pin the date handlers treat as today."""
    monkeypatch.setattr("django.utils.timezone.localdate", lambda *args, **kwargs: TODAY)
    return TODAY
