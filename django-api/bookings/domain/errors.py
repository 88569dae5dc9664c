"""Domain error codes for the bookings module.

Every DomainError is a rejection the caller can recover from by changing
its input. Messages are user-safe and meant to be shown verbatim.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    SHOP_CLOSED = "SHOP_CLOSED"
    OUTSIDE_OPERATING_HOURS = "OUTSIDE_OPERATING_HOURS"
    SLOT_CONFLICT = "SLOT_CONFLICT"
    LOOK_AHEAD_EXCEEDED = "LOOK_AHEAD_EXCEEDED"
    MONTHLY_CAP_EXCEEDED = "MONTHLY_CAP_EXCEEDED"
    INVALID_SERVICE_SELECTION = "INVALID_SERVICE_SELECTION"
    INVALID_BOOKING_DATE = "INVALID_BOOKING_DATE"
    INVALID_APPOINTMENT_TIME = "INVALID_APPOINTMENT_TIME"
    INVALID_STATUS_TRANSITION = "INVALID_STATUS_TRANSITION"
    RATING_NOT_ALLOWED = "RATING_NOT_ALLOWED"
    INVALID_RATING = "INVALID_RATING"
    INVALID_OPENING_HOURS = "INVALID_OPENING_HOURS"
    INVALID_IDENTIFIER = "INVALID_IDENTIFIER"
    SHOP_NOT_FOUND = "SHOP_NOT_FOUND"
    CUSTOMER_NOT_FOUND = "CUSTOMER_NOT_FOUND"
    BOOKING_NOT_FOUND = "BOOKING_NOT_FOUND"
    SERVICE_NOT_FOUND = "SERVICE_NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ShopClosedError(DomainError):
    """Raised when the shop has no opening hours on the requested day."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.SHOP_CLOSED,
            message="Shop is closed on this day",
        )


class OutsideOperatingHoursError(DomainError):
    """Raised when the requested appointment does not fit the day's hours."""

    def __init__(self, opening_time: str, closing_time: str) -> None:
        super().__init__(
            code=ErrorCode.OUTSIDE_OPERATING_HOURS,
            message=(
                "The selected time is outside the shop's operating hours "
                f"({opening_time}-{closing_time}). Please pick an earlier slot."
            ),
        )


class SlotConflictError(DomainError):
    """Raised when the requested interval overlaps an existing booking."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.SLOT_CONFLICT,
            message="This time slot is already booked",
        )


class LookAheadExceededError(DomainError):
    """Raised when the requested date is beyond the plan's booking window."""

    def __init__(self, max_days: int) -> None:
        super().__init__(
            code=ErrorCode.LOOK_AHEAD_EXCEEDED,
            message=(
                f"Bookings can only be made up to {max_days} days in advance. "
                "Upgrade to the Pro plan to accept bookings up to 30 days ahead."
            ),
        )
        self.max_days = max_days


class MonthlyCapExceededError(DomainError):
    """Raised when the shop has used up its monthly booking allowance."""

    def __init__(self, cap: int) -> None:
        super().__init__(
            code=ErrorCode.MONTHLY_CAP_EXCEEDED,
            message=(
                f"This shop has reached its limit of {cap} bookings this month. "
                "Upgrade to the Pro plan to accept up to 500 bookings per month."
            ),
        )
        self.cap = cap


class InvalidServiceSelectionError(DomainError):
    """Raised when no valid, active services were selected."""

    def __init__(self, detail: str = "Please select at least one service") -> None:
        super().__init__(
            code=ErrorCode.INVALID_SERVICE_SELECTION,
            message=detail,
        )


class InvalidBookingDateError(DomainError):
    """Raised when the appointment date is in the past."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_BOOKING_DATE,
            message="Appointments cannot be booked in the past",
        )


class InvalidAppointmentTimeError(DomainError):
    """Raised when an appointment time is not a 24-hour HH:MM value."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_APPOINTMENT_TIME,
            message="Appointment time must use the 24-hour HH:MM format",
        )


class InvalidStatusTransitionError(DomainError):
    """Raised when a booking cannot move to the requested status."""

    def __init__(self, current: str, requested: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_STATUS_TRANSITION,
            message=f"A {current} booking cannot be marked as {requested}",
        )


class RatingNotAllowedError(DomainError):
    """Raised when rating a booking that is not completed."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.RATING_NOT_ALLOWED,
            message="Only completed appointments can be rated",
        )


class InvalidRatingError(DomainError):
    """Raised when a rating is outside 1..5."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_RATING,
            message="Rating must be a whole number from 1 to 5",
        )


class InvalidOpeningHoursError(DomainError):
    """Raised when a weekly schedule is malformed."""

    def __init__(self, detail: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_OPENING_HOURS,
            message=detail,
        )


class InvalidIdentifierError(DomainError):
    """Raised when an identifier is not a valid UUID."""

    def __init__(self, kind: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_IDENTIFIER,
            message=f"Invalid {kind} ID format",
        )


class ShopNotFoundError(DomainError):
    """Raised when a shop is not found."""

    def __init__(self, shop_id: str) -> None:
        super().__init__(
            code=ErrorCode.SHOP_NOT_FOUND,
            message="Shop not found",
        )
        self.shop_id = shop_id


class CustomerNotFoundError(DomainError):
    """Raised when the acting account does not exist."""

    def __init__(self, account_id: str) -> None:
        super().__init__(
            code=ErrorCode.CUSTOMER_NOT_FOUND,
            message="Customer not found",
        )
        self.account_id = account_id


class BookingNotFoundError(DomainError):
    """Raised when a booking is not found."""

    def __init__(self, booking_id: str) -> None:
        super().__init__(
            code=ErrorCode.BOOKING_NOT_FOUND,
            message="Booking not found",
        )
        self.booking_id = booking_id


class ServiceNotFoundError(DomainError):
    """Raised when a service does not belong to the shop."""

    def __init__(self, service_id: str) -> None:
        super().__init__(
            code=ErrorCode.SERVICE_NOT_FOUND,
            message="Service not found",
        )
        self.service_id = service_id


class UnauthorizedError(DomainError):
    """Raised when the principal may not perform the action."""

    def __init__(self, detail: str) -> None:
        super().__init__(
            code=ErrorCode.UNAUTHORIZED,
            message=detail,
        )


class StoreUnavailableError(Exception):
    """Raised by stores when the persistence layer fails unexpectedly.

    Not a DomainError: callers should retry rather than change their input.
    """

