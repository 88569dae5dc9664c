from django.urls import path

from bookings.handlers import (
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

urlpatterns = [
    path("shops/<str:shop_id>/slots", SlotListView.as_view(), name="slot-list"),
    path("shops/<str:shop_id>/usage", BookingUsageView.as_view(), name="booking-usage"),
    path(
        "shops/<str:shop_id>/bookings",
        ShopBookingListView.as_view(),
        name="shop-booking-list",
    ),
    path("shops/<str:shop_id>/services", ServiceListView.as_view(), name="service-list"),
    path(
        "shops/<str:shop_id>/services/<str:service_id>",
        ServiceDetailView.as_view(),
        name="service-detail",
    ),
    path(
        "shops/<str:shop_id>/opening-hours",
        OpeningHoursView.as_view(),
        name="opening-hours",
    ),
    path("bookings", BookingListView.as_view(), name="booking-list"),
    path(
        "bookings/<str:booking_id>/status",
        BookingStatusView.as_view(),
        name="booking-status",
    ),
    path(
        "bookings/<str:booking_id>/cancel",
        BookingCancelView.as_view(),
        name="booking-cancel",
    ),
    path(
        "bookings/<str:booking_id>/rating",
        BookingRatingView.as_view(),
        name="booking-rating",
    ),
]
