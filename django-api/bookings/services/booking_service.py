"""Booking service - all booking business logic lives here.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors

The slot listing (advisory read path) and create_booking (authoritative
commit path) share the same calendar, slot and overlap functions, so the
two can never disagree about what a legal slot is.
"""

import logging
from collections.abc import Sequence
from datetime import date

from bookings.domain import (
    Account,
    AccountId,
    Booking,
    BookingId,
    BookingStatus,
    BookingUsage,
    NewBooking,
    ServiceId,
    Shop,
    ShopId,
    SlotAvailability,
    TimeOfDay,
    UserType,
)
from bookings.domain.availability import find_conflict, resolve_availability
from bookings.domain.calendar import day_window
from bookings.domain.catalog import ServiceSelection, display_duration, select_services
from bookings.domain.errors import (
    BookingNotFoundError,
    CustomerNotFoundError,
    InvalidAppointmentTimeError,
    InvalidIdentifierError,
    InvalidRatingError,
    InvalidStatusTransitionError,
    OutsideOperatingHoursError,
    RatingNotAllowedError,
    ShopClosedError,
    ShopNotFoundError,
    SlotConflictError,
    UnauthorizedError,
)
from bookings.domain.limits import (
    check_look_ahead,
    check_monthly_cap,
    last_bookable_date,
    limits_for,
    month_bounds,
)
from bookings.domain.slots import SLOT_STEP_MINUTES, fits_in_window, generate_slots
from bookings.stores.interfaces import BookingStore

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS = {
    BookingStatus.PENDING: {
        BookingStatus.CONFIRMED,
        BookingStatus.COMPLETED,
        BookingStatus.CANCELLED,
    },
    BookingStatus.CONFIRMED: {BookingStatus.COMPLETED, BookingStatus.CANCELLED},
    BookingStatus.COMPLETED: {BookingStatus.CANCELLED},
    BookingStatus.CANCELLED: set(),
}


def parse_id(id_type, value, kind: str):
    """Build a typed identifier, mapping malformed input to InvalidIdentifierError."""
    if isinstance(value, id_type):
        return value
    try:
        return id_type.from_string(value)
    except (TypeError, ValueError, AttributeError):
        raise InvalidIdentifierError(kind) from None


class BookingService:
    """Service for slot listing, booking commits and booking lifecycle."""

    def __init__(self, store: BookingStore, slot_step: int = SLOT_STEP_MINUTES) -> None:
        self._store = store
        self._slot_step = slot_step

    # Read path

    def list_available_slots(
        self,
        shop_id: str | ShopId,
        on: date,
        service_ids: Sequence[str | ServiceId] = (),
        *,
        today: date | None = None,
    ) -> SlotAvailability:
        """Return candidate start times split into available and booked.

        Closed days, degenerate hours and durations longer than the day
        yield empty lists rather than errors. When ``today`` is given, dates
        in the past or beyond the plan's look-ahead window do too.

        Raises:
            InvalidIdentifierError: If an ID is malformed.
            ShopNotFoundError: If the shop does not exist.
            InvalidServiceSelectionError: If a selected service is unknown or inactive.
        """
        shop = self._require_shop(shop_id)
        selection = None
        if service_ids:
            selection = self._select(shop, service_ids)
        duration = display_duration(selection)

        if today is not None and not self._within_look_ahead(shop, on, today):
            return SlotAvailability()
        window = day_window(self._store.get_opening_hours(shop.id), on)
        if window is None:
            return SlotAvailability()
        candidates = generate_slots(window, duration, self._slot_step)
        existing = self._store.list_active_bookings(shop.id, on)
        return resolve_availability(candidates, duration, existing)

    def booking_usage(self, shop_id: str | ShopId, today: date) -> BookingUsage:
        """Return the shop's look-ahead window and monthly usage for display."""
        shop = self._require_shop(shop_id)
        limits = limits_for(self._store.get_subscription(shop.owner_id))
        month_start, month_end = month_bounds(today)
        return BookingUsage(
            plan=limits.plan,
            max_days_ahead=limits.max_days_ahead,
            last_bookable_date=last_bookable_date(today, limits),
            monthly_cap=limits.max_monthly_bookings,
            monthly_count=self._store.count_active_bookings_between(
                shop.id, month_start, month_end
            ),
            month_start=month_start,
            month_end=month_end,
        )

    def list_customer_bookings(self, customer_id: str | AccountId) -> list[Booking]:
        customer = self._require_account(customer_id)
        return self._store.list_bookings_for_customer(customer.id)

    def list_shop_bookings(
        self, actor_id: str | AccountId, shop_id: str | ShopId
    ) -> list[Booking]:
        shop = self._require_shop(shop_id)
        self._require_owner(actor_id, shop)
        return self._store.list_bookings_for_shop(shop.id)

    def get_booking(self, booking_id: str | BookingId) -> Booking:
        booking_id = parse_id(BookingId, booking_id, "booking")
        booking = self._store.get_booking(booking_id)
        if booking is None:
            raise BookingNotFoundError(str(booking_id))
        return booking

    # Write path

    def create_booking(
        self,
        customer_id: str | AccountId,
        shop_id: str | ShopId,
        service_ids: Sequence[str | ServiceId],
        appointment_date: date,
        appointment_time: str | TimeOfDay,
        notes: str | None = None,
        *,
        today: date,
    ) -> Booking:
        """Validate and commit a new pending booking.

        Every check runs before the insert. The monthly cap and overlap
        checks are repeated inside the shop transaction so that two
        concurrent requests for overlapping slots cannot both succeed.

        Raises:
            UnauthorizedError: If the principal is not a customer.
            CustomerNotFoundError, ShopNotFoundError: If an ID does not resolve.
            InvalidServiceSelectionError: If the service selection is empty or invalid.
            InvalidBookingDateError, LookAheadExceededError: If the date is out of range.
            ShopClosedError: If the shop is closed that day.
            OutsideOperatingHoursError: If the appointment does not fit the hours.
            MonthlyCapExceededError: If the shop's monthly allowance is used up.
            SlotConflictError: If the interval overlaps an existing booking.
        """
        customer = self._require_account(customer_id)
        if customer.user_type is not UserType.CUSTOMER:
            raise UnauthorizedError("Only customers can create bookings")
        shop = self._require_shop(shop_id)
        start = self._parse_time(appointment_time)

        selection = self._select(shop, service_ids)
        limits = limits_for(self._store.get_subscription(shop.owner_id))
        check_look_ahead(appointment_date, today, limits)
        month_start, month_end = month_bounds(today)
        check_monthly_cap(
            self._store.count_active_bookings_between(shop.id, month_start, month_end),
            limits,
        )

        window = day_window(self._store.get_opening_hours(shop.id), appointment_date)
        if window is None:
            raise ShopClosedError()
        if not fits_in_window(window, start, selection.total_duration):
            raise OutsideOperatingHoursError(str(window.opening), str(window.closing))

        with self._store.shop_transaction(shop.id):
            check_monthly_cap(
                self._store.count_active_bookings_between(shop.id, month_start, month_end),
                limits,
            )
            existing = self._store.list_active_bookings(shop.id, appointment_date)
            if find_conflict(start, selection.total_duration, existing) is not None:
                logger.info(
                    "Slot conflict for shop %s on %s at %s", shop.id, appointment_date, start
                )
                raise SlotConflictError()
            booking = self._store.insert_booking(
                NewBooking(
                    customer_id=customer.id,
                    shop_id=shop.id,
                    services=selection.snapshot,
                    appointment_date=appointment_date,
                    appointment_time=start,
                    total_price=selection.total_price,
                    total_duration=selection.total_duration,
                    notes=notes or None,
                )
            )

        logger.info(
            "Booking %s created for shop %s on %s at %s",
            booking.id,
            shop.id,
            appointment_date,
            start,
        )
        return booking

    def update_status(
        self,
        actor_id: str | AccountId,
        booking_id: str | BookingId,
        new_status: BookingStatus,
    ) -> Booking:
        """Move a booking along its lifecycle; only the shop owner may do this.

        Raises:
            BookingNotFoundError: If the booking does not exist.
            UnauthorizedError: If the actor does not own the booking's shop.
            InvalidStatusTransitionError: If the transition is not allowed.
        """
        booking = self.get_booking(booking_id)
        shop = self._require_shop(booking.shop_id)
        self._require_owner(actor_id, shop)
        if booking.status is new_status:
            return booking
        if new_status not in ALLOWED_TRANSITIONS[booking.status]:
            raise InvalidStatusTransitionError(booking.status.value, new_status.value)
        updated = self._store.set_booking_status(booking.id, new_status)
        logger.info(
            "Booking %s moved from %s to %s", booking.id, booking.status.value, new_status.value
        )
        return updated

    def cancel_booking(self, actor_id: str | AccountId, booking_id: str | BookingId) -> Booking:
        """Cancel a booking on behalf of its customer or the shop owner.

        The record is kept with status cancelled and stops holding capacity.
        """
        booking = self.get_booking(booking_id)
        actor = self._require_account(actor_id)
        shop = self._require_shop(booking.shop_id)
        if actor.id != booking.customer_id and actor.id != shop.owner_id:
            raise UnauthorizedError("Only the customer or the shop owner can cancel this booking")
        if booking.status is BookingStatus.CANCELLED:
            return booking
        updated = self._store.set_booking_status(booking.id, BookingStatus.CANCELLED)
        logger.info("Booking %s cancelled by %s", booking.id, actor.id)
        return updated

    def rate_booking(
        self, customer_id: str | AccountId, booking_id: str | BookingId, rating: int
    ) -> Booking:
        """Record the customer's 1-5 rating of a completed booking.

        A later call overwrites the rating; the status is left unchanged.
        """
        if isinstance(rating, bool) or not isinstance(rating, int) or not 1 <= rating <= 5:
            raise InvalidRatingError()
        booking = self.get_booking(booking_id)
        customer = self._require_account(customer_id)
        if customer.id != booking.customer_id:
            raise UnauthorizedError("Only the customer who made the booking can rate it")
        if booking.status is not BookingStatus.COMPLETED:
            raise RatingNotAllowedError()
        return self._store.set_booking_rating(booking.id, rating)

    # Helpers

    def _within_look_ahead(self, shop: Shop, on: date, today: date) -> bool:
        limits = limits_for(self._store.get_subscription(shop.owner_id))
        return today <= on <= last_bookable_date(today, limits)

    def _require_account(self, account_id: str | AccountId) -> Account:
        account_id = parse_id(AccountId, account_id, "customer")
        account = self._store.get_account(account_id)
        if account is None:
            raise CustomerNotFoundError(str(account_id))
        return account

    def _require_shop(self, shop_id: str | ShopId) -> Shop:
        shop_id = parse_id(ShopId, shop_id, "shop")
        shop = self._store.get_shop(shop_id)
        if shop is None:
            raise ShopNotFoundError(str(shop_id))
        return shop

    def _require_owner(self, actor_id: str | AccountId, shop: Shop) -> Account:
        actor = self._require_account(actor_id)
        if actor.id != shop.owner_id:
            raise UnauthorizedError("Only the shop owner can manage this shop")
        return actor

    def _select(self, shop: Shop, service_ids: Sequence[str | ServiceId]) -> ServiceSelection:
        ids = [parse_id(ServiceId, value, "service") for value in service_ids]
        return select_services(self._store.list_services(shop.id), ids)

    @staticmethod
    def _parse_time(value: str | TimeOfDay) -> TimeOfDay:
        if isinstance(value, TimeOfDay):
            return value
        try:
            return TimeOfDay.parse(value)
        except (TypeError, ValueError):
            raise InvalidAppointmentTimeError() from None
