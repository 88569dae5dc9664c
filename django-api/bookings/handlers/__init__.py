from bookings.handlers.views import (
    BookingCancelView,
    BookingListView,
    BookingRatingView,
    BookingStatusView,
    BookingUsageView,
    OpeningHoursView,
    ServiceDetailView,
    ServiceListView,
    ShopBookingListView,
    SlotListView,
)

__all__ = [
    "BookingCancelView",
    "BookingListView",
    "BookingRatingView",
    "BookingStatusView",
    "BookingUsageView",
    "OpeningHoursView",
    "ServiceDetailView",
    "ServiceListView",
    "ShopBookingListView",
    "SlotListView",
]
