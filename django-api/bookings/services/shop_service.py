"""Shop service - catalog and opening hours management for shop owners."""

import logging
from collections.abc import Sequence
from decimal import Decimal, InvalidOperation

from bookings.domain import (
    AccountId,
    Money,
    OpeningHours,
    Service,
    ServiceChanges,
    ServiceId,
    Shop,
    ShopId,
    TimeOfDay,
)
from bookings.domain.catalog import services_by_position
from bookings.domain.errors import (
    CustomerNotFoundError,
    InvalidOpeningHoursError,
    InvalidServiceSelectionError,
    ServiceNotFoundError,
    ShopNotFoundError,
    UnauthorizedError,
)
from bookings.services.booking_service import parse_id
from bookings.stores.interfaces import BookingStore

logger = logging.getLogger(__name__)


def _validate_price(price) -> Money:
    try:
        amount = Decimal(str(price))
    except (InvalidOperation, ValueError):
        raise InvalidServiceSelectionError("Service price must be a number") from None
    if not amount.is_finite() or amount <= 0:
        raise InvalidServiceSelectionError("Service price must be greater than zero")
    return Money(amount=amount)


def _validate_duration(duration) -> int:
    if isinstance(duration, bool) or not isinstance(duration, int) or duration <= 0:
        raise InvalidServiceSelectionError("Service duration must be a positive number of minutes")
    return duration


def validate_week(hours: Sequence[dict]) -> list[OpeningHours]:
    """Turn raw ``{day_of_week, opening_time, closing_time, is_closed}`` dicts into a week.

    Raises:
        InvalidOpeningHoursError: On duplicate or out-of-range days, malformed
            times, or an open day that does not close after it opens.
    """
    if len(hours) > 7:
        raise InvalidOpeningHoursError("A week has at most seven days of opening hours")
    week: list[OpeningHours] = []
    seen: set[int] = set()
    for entry in hours:
        day = entry.get("day_of_week")
        if isinstance(day, bool) or not isinstance(day, int) or not 0 <= day <= 6:
            raise InvalidOpeningHoursError("day_of_week must be between 0 (Sunday) and 6 (Saturday)")
        if day in seen:
            raise InvalidOpeningHoursError(f"Opening hours for day {day} were given twice")
        seen.add(day)
        try:
            opening = TimeOfDay.parse(entry.get("opening_time"))
            closing = TimeOfDay.parse(entry.get("closing_time"))
        except (TypeError, ValueError):
            raise InvalidOpeningHoursError("Opening and closing times must use HH:MM") from None
        is_closed = bool(entry.get("is_closed", False))
        if not is_closed and opening >= closing:
            raise InvalidOpeningHoursError(
                f"Closing time must be after opening time on day {day}"
            )
        week.append(
            OpeningHours(
                day_of_week=day,
                opening_time=opening,
                closing_time=closing,
                is_closed=is_closed,
            )
        )
    return sorted(week, key=lambda item: item.day_of_week)


class ShopService:
    """Service for the owner-managed parts of a shop."""

    def __init__(self, store: BookingStore) -> None:
        self._store = store

    def get_shop(self, shop_id: str | ShopId) -> Shop:
        shop_id = parse_id(ShopId, shop_id, "shop")
        shop = self._store.get_shop(shop_id)
        if shop is None:
            raise ShopNotFoundError(str(shop_id))
        return shop

    def list_services(self, shop_id: str | ShopId, include_inactive: bool = False) -> list[Service]:
        shop = self.get_shop(shop_id)
        return services_by_position(
            self._store.list_services(shop.id, include_inactive=include_inactive)
        )

    def service_at_position(self, shop_id: str | ShopId, position: int) -> Service:
        """Resolve a legacy index into the shop's full service list."""
        services = self.list_services(shop_id, include_inactive=True)
        if not 0 <= position < len(services):
            raise ServiceNotFoundError(str(position))
        return services[position]

    def add_service(
        self,
        actor_id: str | AccountId,
        shop_id: str | ShopId,
        name: str,
        price,
        duration: int,
        description: str | None = None,
    ) -> Service:
        shop = self._owned_shop(actor_id, shop_id)
        if not name or not name.strip():
            raise InvalidServiceSelectionError("Service name is required")
        service = self._store.add_service(
            shop.id,
            name=name.strip(),
            price=_validate_price(price),
            duration=_validate_duration(duration),
            description=description,
        )
        logger.info("Service %s added to shop %s", service.id, shop.id)
        return service

    def update_service(
        self,
        actor_id: str | AccountId,
        shop_id: str | ShopId,
        service_id: str | ServiceId,
        **changes,
    ) -> Service:
        shop = self._owned_shop(actor_id, shop_id)
        service_id = parse_id(ServiceId, service_id, "service")
        if "price" in changes and changes["price"] is not None:
            changes["price"] = _validate_price(changes["price"])
        if "duration" in changes and changes["duration"] is not None:
            changes["duration"] = _validate_duration(changes["duration"])
        if "name" in changes and changes["name"] is not None:
            if not changes["name"].strip():
                raise InvalidServiceSelectionError("Service name is required")
            changes["name"] = changes["name"].strip()
        updated = self._store.update_service(shop.id, service_id, ServiceChanges(**changes))
        if updated is None:
            raise ServiceNotFoundError(str(service_id))
        return updated

    def remove_service(
        self, actor_id: str | AccountId, shop_id: str | ShopId, service_id: str | ServiceId
    ) -> None:
        shop = self._owned_shop(actor_id, shop_id)
        service_id = parse_id(ServiceId, service_id, "service")
        if not self._store.remove_service(shop.id, service_id):
            raise ServiceNotFoundError(str(service_id))
        logger.info("Service %s removed from shop %s", service_id, shop.id)

    def get_opening_hours(self, shop_id: str | ShopId) -> list[OpeningHours]:
        shop = self.get_shop(shop_id)
        return self._store.get_opening_hours(shop.id)

    def set_opening_hours(
        self, actor_id: str | AccountId, shop_id: str | ShopId, hours: Sequence[dict]
    ) -> list[OpeningHours]:
        shop = self._owned_shop(actor_id, shop_id)
        week = validate_week(hours)
        self._store.replace_opening_hours(shop.id, week)
        return week

    def _owned_shop(self, actor_id: str | AccountId, shop_id: str | ShopId) -> Shop:
        shop = self.get_shop(shop_id)
        actor_id = parse_id(AccountId, actor_id, "account")
        actor = self._store.get_account(actor_id)
        if actor is None:
            raise CustomerNotFoundError(str(actor_id))
        if actor.id != shop.owner_id:
            raise UnauthorizedError("Only the shop owner can manage this shop")
        return shop
