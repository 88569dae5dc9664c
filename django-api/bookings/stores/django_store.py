"""Django ORM implementation of the BookingStore."""

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from datetime import date
from decimal import Decimal
from functools import wraps

from django.db import DatabaseError, transaction
from django.db.models import Max

from bookings import models as orm
from bookings.domain import (
    Account,
    AccountId,
    Booking,
    BookingId,
    BookingStatus,
    Money,
    NewBooking,
    OpeningHours,
    PlanType,
    Service,
    ServiceChanges,
    ServiceId,
    ServiceSnapshot,
    Shop,
    ShopId,
    Subscription,
    SubscriptionStatus,
    TimeOfDay,
    UserType,
)
from bookings.domain.errors import StoreUnavailableError
from bookings.stores.interfaces import BookingStore

logger = logging.getLogger(__name__)

ACTIVE_STATUSES = [
    orm.Booking.Status.PENDING,
    orm.Booking.Status.CONFIRMED,
    orm.Booking.Status.COMPLETED,
]


def _wrap_database_errors(method):
    @wraps(method)
    def wrapper(*args, **kwargs):
        try:
            return method(*args, **kwargs)
        except DatabaseError as exc:
            logger.exception("Store operation %s failed", method.__name__)
            raise StoreUnavailableError(str(exc)) from exc

    return wrapper


def _to_account(row: orm.Account) -> Account:
    return Account(
        id=AccountId(row.id),
        full_name=row.full_name,
        email=row.email,
        user_type=UserType(row.user_type),
        phone=row.phone,
    )


def _to_shop(row: orm.Shop) -> Shop:
    return Shop(
        id=ShopId(row.id),
        owner_id=AccountId(row.owner_id),
        name=row.name,
        address=row.address,
        deployed=row.deployed,
        phone=row.phone,
        description=row.description,
    )


def _to_service(row: orm.Service) -> Service:
    return Service(
        id=ServiceId(row.id),
        shop_id=ShopId(row.shop_id),
        name=row.name,
        price=Money(row.price),
        duration=row.duration,
        is_active=row.is_active,
        description=row.description or None,
        position=row.position,
    )


def _to_opening_hours(row: orm.OpeningHours) -> OpeningHours | None:
    """Convert a row, or return None when it is malformed so the day reads as closed."""
    try:
        return OpeningHours(
            day_of_week=row.day_of_week,
            opening_time=TimeOfDay.parse(row.opening_time),
            closing_time=TimeOfDay.parse(row.closing_time),
            is_closed=row.is_closed,
        )
    except ValueError:
        logger.warning(
            "Ignoring malformed opening hours for shop %s on day %s", row.shop_id, row.day_of_week
        )
        return None


def _to_booking(row: orm.Booking) -> Booking:
    return Booking(
        id=BookingId(row.id),
        customer_id=AccountId(row.customer_id),
        shop_id=ShopId(row.shop_id),
        services=tuple(
            ServiceSnapshot(
                name=item["name"],
                price=Money(Decimal(str(item["price"]))),
                duration=int(item["duration"]),
            )
            for item in row.services
        ),
        appointment_date=row.appointment_date,
        appointment_time=TimeOfDay.parse(row.appointment_time),
        status=BookingStatus(row.status),
        total_price=Money(row.total_price),
        total_duration=row.total_duration,
        notes=row.notes,
        rating=row.rating,
        created_at=row.created_at,
    )


class DjangoBookingStore(BookingStore):
    """Relational booking store using Django ORM."""

    @_wrap_database_errors
    def get_account(self, account_id: AccountId) -> Account | None:
        row = orm.Account.objects.filter(pk=account_id.value).first()
        return _to_account(row) if row else None

    @_wrap_database_errors
    def get_shop(self, shop_id: ShopId) -> Shop | None:
        row = orm.Shop.objects.filter(pk=shop_id.value).first()
        return _to_shop(row) if row else None

    @_wrap_database_errors
    def get_subscription(self, owner_id: AccountId) -> Subscription | None:
        row = orm.Subscription.objects.filter(account_id=owner_id.value).first()
        if row is None:
            return None
        return Subscription(
            plan_type=PlanType(row.plan_type),
            status=SubscriptionStatus(row.status),
            current_period_end=row.current_period_end,
        )

    @_wrap_database_errors
    def get_opening_hours(self, shop_id: ShopId) -> list[OpeningHours]:
        rows = orm.OpeningHours.objects.filter(shop_id=shop_id.value).order_by("day_of_week")
        return [hours for hours in map(_to_opening_hours, rows) if hours is not None]

    @_wrap_database_errors
    def replace_opening_hours(self, shop_id: ShopId, hours: Sequence[OpeningHours]) -> None:
        with transaction.atomic():
            orm.OpeningHours.objects.filter(shop_id=shop_id.value).delete()
            for entry in hours:
                orm.OpeningHours.objects.create(
                    shop_id=shop_id.value,
                    day_of_week=entry.day_of_week,
                    opening_time=str(entry.opening_time),
                    closing_time=str(entry.closing_time),
                    is_closed=entry.is_closed,
                )

    @_wrap_database_errors
    def list_services(self, shop_id: ShopId, include_inactive: bool = False) -> list[Service]:
        rows = orm.Service.objects.filter(shop_id=shop_id.value)
        if not include_inactive:
            rows = rows.filter(is_active=True)
        return [_to_service(row) for row in rows.order_by("position", "created_at")]

    @_wrap_database_errors
    def add_service(
        self,
        shop_id: ShopId,
        name: str,
        price: Money,
        duration: int,
        description: str | None = None,
    ) -> Service:
        with transaction.atomic():
            last = orm.Service.objects.filter(shop_id=shop_id.value).aggregate(
                last=Max("position")
            )["last"]
            row = orm.Service.objects.create(
                shop_id=shop_id.value,
                name=name,
                description=description,
                price=price.amount,
                duration=duration,
                position=0 if last is None else last + 1,
            )
        return _to_service(row)

    @_wrap_database_errors
    def update_service(
        self, shop_id: ShopId, service_id: ServiceId, changes: ServiceChanges
    ) -> Service | None:
        row = orm.Service.objects.filter(shop_id=shop_id.value, pk=service_id.value).first()
        if row is None:
            return None
        for field, value in changes.as_dict().items():
            if isinstance(value, Money):
                value = value.amount
            setattr(row, field, value if value != "" else None)
        row.save()
        return _to_service(row)

    @_wrap_database_errors
    def remove_service(self, shop_id: ShopId, service_id: ServiceId) -> bool:
        # Positions of the remaining services are left with a gap; ordering is unaffected.
        deleted, _ = orm.Service.objects.filter(
            shop_id=shop_id.value, pk=service_id.value
        ).delete()
        return deleted > 0

    @contextmanager
    def shop_transaction(self, shop_id: ShopId) -> Iterator[None]:
        try:
            with transaction.atomic():
                # Row lock on the shop serializes concurrent commits for it.
                list(orm.Shop.objects.select_for_update().filter(pk=shop_id.value))
                yield
        except DatabaseError as exc:
            logger.exception("Booking transaction for shop %s failed", shop_id)
            raise StoreUnavailableError(str(exc)) from exc

    @_wrap_database_errors
    def list_active_bookings(self, shop_id: ShopId, on: date) -> list[Booking]:
        rows = orm.Booking.objects.filter(
            shop_id=shop_id.value, appointment_date=on, status__in=ACTIVE_STATUSES
        ).order_by("appointment_time")
        return [_to_booking(row) for row in rows]

    @_wrap_database_errors
    def count_active_bookings_between(self, shop_id: ShopId, start: date, end: date) -> int:
        return orm.Booking.objects.filter(
            shop_id=shop_id.value,
            appointment_date__gte=start,
            appointment_date__lte=end,
            status__in=ACTIVE_STATUSES,
        ).count()

    @_wrap_database_errors
    def insert_booking(self, booking: NewBooking) -> Booking:
        row = orm.Booking.objects.create(
            customer_id=booking.customer_id.value,
            shop_id=booking.shop_id.value,
            services=[
                {"name": item.name, "price": str(item.price), "duration": item.duration}
                for item in booking.services
            ],
            appointment_date=booking.appointment_date,
            appointment_time=str(booking.appointment_time),
            status=booking.status.value,
            total_price=booking.total_price.amount,
            total_duration=booking.total_duration,
            notes=booking.notes,
        )
        return _to_booking(row)

    @_wrap_database_errors
    def get_booking(self, booking_id: BookingId) -> Booking | None:
        row = orm.Booking.objects.filter(pk=booking_id.value).first()
        return _to_booking(row) if row else None

    @_wrap_database_errors
    def set_booking_status(self, booking_id: BookingId, status: BookingStatus) -> Booking:
        row = orm.Booking.objects.get(pk=booking_id.value)
        row.status = status.value
        row.save(update_fields=["status", "updated_at"])
        return _to_booking(row)

    @_wrap_database_errors
    def set_booking_rating(self, booking_id: BookingId, rating: int) -> Booking:
        row = orm.Booking.objects.get(pk=booking_id.value)
        row.rating = rating
        row.save(update_fields=["rating", "updated_at"])
        return _to_booking(row)

    @_wrap_database_errors
    def list_bookings_for_customer(self, customer_id: AccountId) -> list[Booking]:
        rows = orm.Booking.objects.filter(customer_id=customer_id.value).exclude(
            status=orm.Booking.Status.CANCELLED
        )
        return [_to_booking(row) for row in rows.order_by("-appointment_date", "-appointment_time")]

    @_wrap_database_errors
    def list_bookings_for_shop(self, shop_id: ShopId) -> list[Booking]:
        rows = orm.Booking.objects.filter(shop_id=shop_id.value).exclude(
            status=orm.Booking.Status.CANCELLED
        )
        return [_to_booking(row) for row in rows.order_by("-appointment_date", "-appointment_time")]
