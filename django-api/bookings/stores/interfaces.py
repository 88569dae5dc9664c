"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from contextlib import AbstractContextManager
from datetime import date

from bookings.domain import (
    Account,
    AccountId,
    Booking,
    BookingId,
    BookingStatus,
    Money,
    NewBooking,
    OpeningHours,
    Service,
    ServiceChanges,
    ServiceId,
    Shop,
    ShopId,
    Subscription,
)


class BookingStore(ABC):
    """Interface for shop, catalog and booking persistence operations."""

    @abstractmethod
    def get_account(self, account_id: AccountId) -> Account | None:
        """Return an account by ID, or None if not found."""
        ...

    @abstractmethod
    def get_shop(self, shop_id: ShopId) -> Shop | None:
        """Return a shop by ID, or None if not found."""
        ...

    @abstractmethod
    def get_subscription(self, owner_id: AccountId) -> Subscription | None:
        """Return the shop owner's subscription, or None if they never subscribed."""
        ...

    @abstractmethod
    def get_opening_hours(self, shop_id: ShopId) -> list[OpeningHours]:
        """Return at most seven entries, ordered by day_of_week."""
        ...

    @abstractmethod
    def replace_opening_hours(self, shop_id: ShopId, hours: Sequence[OpeningHours]) -> None:
        """Replace the shop's whole week of opening hours."""
        ...

    @abstractmethod
    def list_services(self, shop_id: ShopId, include_inactive: bool = False) -> list[Service]:
        """Return the shop's services ordered by position."""
        ...

    @abstractmethod
    def add_service(
        self,
        shop_id: ShopId,
        name: str,
        price: Money,
        duration: int,
        description: str | None = None,
    ) -> Service:
        """Append an active service to the end of the catalog."""
        ...

    @abstractmethod
    def update_service(
        self, shop_id: ShopId, service_id: ServiceId, changes: ServiceChanges
    ) -> Service | None:
        """Apply changes to a service; None if it does not exist."""
        ...

    @abstractmethod
    def remove_service(self, shop_id: ShopId, service_id: ServiceId) -> bool:
        """Remove a service; False if it does not exist."""
        ...

    @abstractmethod
    def shop_transaction(self, shop_id: ShopId) -> AbstractContextManager[None]:
        """Serialize booking commits for one shop.

        Reads and writes made inside the block see no interleaving commit
        for the same shop, and everything is rolled back if it raises.
        """
        ...

    @abstractmethod
    def list_active_bookings(self, shop_id: ShopId, on: date) -> list[Booking]:
        """Return non-cancelled bookings of the shop on a date, ordered by time."""
        ...

    @abstractmethod
    def count_active_bookings_between(self, shop_id: ShopId, start: date, end: date) -> int:
        """Count non-cancelled bookings with start <= appointment_date <= end."""
        ...

    @abstractmethod
    def insert_booking(self, booking: NewBooking) -> Booking:
        """Persist a new booking and return it with its identifier."""
        ...

    @abstractmethod
    def get_booking(self, booking_id: BookingId) -> Booking | None:
        """Return a booking by ID, or None if not found."""
        ...

    @abstractmethod
    def set_booking_status(self, booking_id: BookingId, status: BookingStatus) -> Booking:
        ...

    @abstractmethod
    def set_booking_rating(self, booking_id: BookingId, rating: int) -> Booking:
        ...

    @abstractmethod
    def list_bookings_for_customer(self, customer_id: AccountId) -> list[Booking]:
        """Return the customer's non-cancelled bookings, newest appointment first."""
        ...

    @abstractmethod
    def list_bookings_for_shop(self, shop_id: ShopId) -> list[Booking]:
        """Return the shop's non-cancelled bookings, newest appointment first."""
        ...
