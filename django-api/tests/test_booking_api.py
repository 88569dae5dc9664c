"""Integration tests for the booking HTTP API.

These tests validate request parsing, error mapping and response shapes
against the Django-backed store.
Run with: pytest tests/test_booking_api.py -v
"""

import uuid
from datetime import date, timedelta

import pytest
from rest_framework.test import APIClient

from bookings import models as orm
from tests.conftest import TODAY, TUESDAY


def booking_payload(customer, shop, services, on=TUESDAY, time="10:00", **extra):
    payload = {
        "customer_id": str(customer.id),
        "shop_id": str(shop.id),
        "service_ids": [str(service.id) for service in services],
        "appointment_date": on.isoformat(),
        "appointment_time": time,
    }
    payload.update(extra)
    return payload


def make_booking(customer, shop, time="10:00", on=TUESDAY, duration=30, status="pending"):
    return orm.Booking.objects.create(
        customer=customer,
        shop=shop,
        services=[{"name": "Haircut", "price": "25.00", "duration": duration}],
        appointment_date=on,
        appointment_time=time,
        status=status,
        total_price="25.00",
        total_duration=duration,
    )


@pytest.mark.django_db
class TestSlotList:
    """Tests for GET /api/shops/{shop_id}/slots"""

    def test_lists_available_and_booked_slots(
        self, api_client: APIClient, frozen_today, db_shop, db_customer, db_haircut, db_beard_trim
    ):
        make_booking(db_customer, db_shop, "10:00")

        response = api_client.get(
            f"/api/shops/{db_shop.id}/slots",
            {"date": TUESDAY.isoformat(), "services": f"{db_haircut.id},{db_beard_trim.id}"},
        )

        assert response.status_code == 200
        assert response.data["booked"] == ["09:30", "09:45", "10:00", "10:15"]
        assert response.data["available"][:3] == ["09:00", "09:15", "10:30"]
        assert response.data["available"][-1] == "17:15"

    def test_closed_day_returns_empty_lists(self, api_client: APIClient, frozen_today, db_shop):
        response = api_client.get(f"/api/shops/{db_shop.id}/slots", {"date": "2026-03-08"})
        assert response.status_code == 200
        assert response.data == {"available": [], "booked": []}

    @pytest.mark.parametrize("on", ["2026-03-01", "2026-03-10"])
    def test_dates_outside_booking_window_return_empty_lists(
        self, api_client: APIClient, frozen_today, db_shop, on
    ):
        response = api_client.get(f"/api/shops/{db_shop.id}/slots", {"date": on})
        assert response.status_code == 200
        assert response.data == {"available": [], "booked": []}

    def test_malformed_stored_hours_list_day_as_closed(
        self, api_client: APIClient, frozen_today, db_shop
    ):
        orm.OpeningHours.objects.filter(shop=db_shop, day_of_week=2).update(opening_time="9:00")

        response = api_client.get(f"/api/shops/{db_shop.id}/slots", {"date": TUESDAY.isoformat()})

        assert response.status_code == 200
        assert response.data == {"available": [], "booked": []}

    def test_unknown_shop_returns_404(self, api_client: APIClient, db):
        response = api_client.get(f"/api/shops/{uuid.uuid4()}/slots", {"date": "2026-03-03"})
        assert response.status_code == 404
        assert response.data["code"] == "SHOP_NOT_FOUND"

    def test_invalid_shop_id_returns_400(self, api_client: APIClient, db):
        response = api_client.get("/api/shops/not-a-uuid/slots", {"date": "2026-03-03"})
        assert response.status_code == 400
        assert response.data["code"] == "INVALID_IDENTIFIER"

    def test_malformed_date_returns_400(self, api_client: APIClient, db_shop):
        response = api_client.get(f"/api/shops/{db_shop.id}/slots", {"date": "03/03/2026"})
        assert response.status_code == 400
        assert response.data["code"] == "INVALID_REQUEST"


@pytest.mark.django_db
class TestCreateBooking:
    """Tests for POST /api/bookings"""

    def test_creates_pending_booking(
        self, api_client: APIClient, frozen_today, db_customer, db_shop, db_haircut, db_beard_trim
    ):
        response = api_client.post(
            "/api/bookings",
            booking_payload(db_customer, db_shop, [db_haircut, db_beard_trim], notes="Short please"),
            format="json",
        )

        assert response.status_code == 201
        assert response.data["status"] == "pending"
        assert response.data["total_price"] == "35.00"
        assert response.data["total_duration"] == 45
        assert response.data["appointment_time"] == "10:00"
        assert [item["name"] for item in response.data["services"]] == ["Haircut", "Beard trim"]
        assert orm.Booking.objects.filter(pk=response.data["id"]).exists()

    def test_overlapping_booking_returns_409(
        self, api_client: APIClient, frozen_today, db_customer, db_shop, db_haircut
    ):
        make_booking(db_customer, db_shop, "10:00")

        response = api_client.post(
            "/api/bookings",
            booking_payload(db_customer, db_shop, [db_haircut], time="10:15"),
            format="json",
        )

        assert response.status_code == 409
        assert response.data["code"] == "SLOT_CONFLICT"
        assert orm.Booking.objects.count() == 1

    def test_closed_day_returns_400(
        self, api_client: APIClient, frozen_today, db_customer, db_shop, db_haircut
    ):
        response = api_client.post(
            "/api/bookings",
            booking_payload(db_customer, db_shop, [db_haircut], on=date(2026, 3, 8)),
            format="json",
        )
        assert response.status_code == 400
        assert response.data["code"] == "SHOP_CLOSED"

    def test_outside_hours_returns_400(
        self, api_client: APIClient, frozen_today, db_customer, db_shop, db_haircut
    ):
        response = api_client.post(
            "/api/bookings",
            booking_payload(db_customer, db_shop, [db_haircut], time="17:31"),
            format="json",
        )
        assert response.status_code == 400
        assert response.data["code"] == "OUTSIDE_OPERATING_HOURS"

    def test_look_ahead_returns_400_with_upgrade_hint(
        self, api_client: APIClient, frozen_today, db_customer, db_shop, db_haircut
    ):
        response = api_client.post(
            "/api/bookings",
            booking_payload(db_customer, db_shop, [db_haircut], on=TODAY + timedelta(days=8)),
            format="json",
        )
        assert response.status_code == 400
        assert response.data["code"] == "LOOK_AHEAD_EXCEEDED"
        assert "7 days" in response.data["message"]

    def test_pro_plan_books_further_ahead(
        self, api_client: APIClient, frozen_today, db_owner, db_customer, db_shop, db_haircut
    ):
        orm.Subscription.objects.create(account=db_owner, plan_type="pro", status="active")
        response = api_client.post(
            "/api/bookings",
            booking_payload(db_customer, db_shop, [db_haircut], on=TODAY + timedelta(days=30)),
            format="json",
        )
        assert response.status_code == 201

    def test_empty_service_selection_returns_400(
        self, api_client: APIClient, frozen_today, db_customer, db_shop
    ):
        response = api_client.post(
            "/api/bookings", booking_payload(db_customer, db_shop, []), format="json"
        )
        assert response.status_code == 400
        assert response.data["code"] == "INVALID_SERVICE_SELECTION"

    def test_barber_cannot_book(
        self, api_client: APIClient, frozen_today, db_owner, db_shop, db_haircut
    ):
        response = api_client.post(
            "/api/bookings", booking_payload(db_owner, db_shop, [db_haircut]), format="json"
        )
        assert response.status_code == 403
        assert response.data["code"] == "UNAUTHORIZED"

    def test_missing_fields_return_400(self, api_client: APIClient, db):
        response = api_client.post("/api/bookings", {}, format="json")
        assert response.status_code == 400
        assert response.data["code"] == "INVALID_REQUEST"
        assert "shop_id" in response.data["errors"]


@pytest.mark.django_db
class TestBookingLifecycle:
    """Tests for the status, cancel and rating endpoints."""

    def test_owner_confirms_booking(self, api_client: APIClient, db_owner, db_customer, db_shop):
        booking = make_booking(db_customer, db_shop)

        response = api_client.post(
            f"/api/bookings/{booking.id}/status",
            {"actor_id": str(db_owner.id), "status": "confirmed"},
            format="json",
        )

        assert response.status_code == 200
        assert response.data["status"] == "confirmed"

    def test_customer_cannot_confirm(self, api_client: APIClient, db_customer, db_shop):
        booking = make_booking(db_customer, db_shop)
        response = api_client.post(
            f"/api/bookings/{booking.id}/status",
            {"actor_id": str(db_customer.id), "status": "confirmed"},
            format="json",
        )
        assert response.status_code == 403

    def test_customer_cancels_and_record_is_kept(self, api_client: APIClient, db_customer, db_shop):
        booking = make_booking(db_customer, db_shop)

        response = api_client.post(
            f"/api/bookings/{booking.id}/cancel", {"actor_id": str(db_customer.id)}, format="json"
        )

        assert response.status_code == 200
        booking.refresh_from_db()
        assert booking.status == orm.Booking.Status.CANCELLED

    def test_unknown_booking_returns_404(self, api_client: APIClient, db_customer):
        response = api_client.post(
            f"/api/bookings/{uuid.uuid4()}/cancel", {"actor_id": str(db_customer.id)}, format="json"
        )
        assert response.status_code == 404
        assert response.data["code"] == "BOOKING_NOT_FOUND"

    def test_rating_pending_booking_is_rejected(self, api_client: APIClient, db_customer, db_shop):
        booking = make_booking(db_customer, db_shop)
        response = api_client.post(
            f"/api/bookings/{booking.id}/rating",
            {"customer_id": str(db_customer.id), "rating": 4},
            format="json",
        )
        assert response.status_code == 400
        assert response.data["code"] == "RATING_NOT_ALLOWED"

    def test_rating_completed_booking(self, api_client: APIClient, db_customer, db_shop):
        booking = make_booking(db_customer, db_shop, status="completed")

        response = api_client.post(
            f"/api/bookings/{booking.id}/rating",
            {"customer_id": str(db_customer.id), "rating": 4},
            format="json",
        )

        assert response.status_code == 200
        assert response.data["rating"] == 4
        assert response.data["status"] == "completed"

    def test_rating_out_of_range(self, api_client: APIClient, db_customer, db_shop):
        booking = make_booking(db_customer, db_shop, status="completed")
        response = api_client.post(
            f"/api/bookings/{booking.id}/rating",
            {"customer_id": str(db_customer.id), "rating": 6},
            format="json",
        )
        assert response.status_code == 400
        assert response.data["code"] == "INVALID_RATING"


@pytest.mark.django_db
class TestBookingListings:
    """Tests for GET /api/bookings and GET /api/shops/{shop_id}/bookings"""

    def test_customer_bookings_newest_first(self, api_client: APIClient, db_customer, db_shop):
        older = make_booking(db_customer, db_shop, "09:00")
        newer = make_booking(db_customer, db_shop, "09:00", on=TUESDAY + timedelta(days=1))
        make_booking(db_customer, db_shop, "12:00", status="cancelled")

        response = api_client.get("/api/bookings", {"customer_id": str(db_customer.id)})

        assert response.status_code == 200
        assert [item["id"] for item in response.data] == [str(newer.id), str(older.id)]

    def test_shop_bookings_for_owner(self, api_client: APIClient, db_owner, db_customer, db_shop):
        booking = make_booking(db_customer, db_shop)
        response = api_client.get(
            f"/api/shops/{db_shop.id}/bookings", {"actor_id": str(db_owner.id)}
        )
        assert response.status_code == 200
        assert [item["id"] for item in response.data] == [str(booking.id)]

    def test_shop_bookings_hidden_from_customers(
        self, api_client: APIClient, db_customer, db_shop
    ):
        response = api_client.get(
            f"/api/shops/{db_shop.id}/bookings", {"actor_id": str(db_customer.id)}
        )
        assert response.status_code == 403


@pytest.mark.django_db
class TestBookingUsage:
    """Tests for GET /api/shops/{shop_id}/usage"""

    def test_reports_plan_window_and_monthly_count(
        self, api_client: APIClient, frozen_today, db_owner, db_customer, db_shop
    ):
        orm.Subscription.objects.create(account=db_owner, plan_type="starter", status="active")
        make_booking(db_customer, db_shop, "09:00")
        make_booking(db_customer, db_shop, "10:00")
        make_booking(db_customer, db_shop, "11:00", status="cancelled")
        make_booking(db_customer, db_shop, "09:00", on=date(2026, 4, 1))

        response = api_client.get(f"/api/shops/{db_shop.id}/usage")

        assert response.status_code == 200
        assert response.data["plan"] == "starter"
        assert response.data["max_days_ahead"] == 7
        assert response.data["last_bookable_date"] == "2026-03-09"
        assert response.data["monthly_count"] == 2
        assert response.data["remaining"] == 98
        assert response.data["month_end"] == "2026-03-31"


@pytest.mark.django_db
class TestServiceCatalog:
    """Tests for /api/shops/{shop_id}/services"""

    def test_lists_active_services_in_position_order(
        self, api_client: APIClient, db_shop, db_haircut, db_beard_trim
    ):
        db_beard_trim.is_active = False
        db_beard_trim.save()

        response = api_client.get(f"/api/shops/{db_shop.id}/services")
        everything = api_client.get(f"/api/shops/{db_shop.id}/services", {"include_inactive": "true"})

        assert [item["name"] for item in response.data] == ["Haircut"]
        assert [item["name"] for item in everything.data] == ["Haircut", "Beard trim"]

    def test_owner_adds_service(self, api_client: APIClient, db_owner, db_shop, db_haircut):
        response = api_client.post(
            f"/api/shops/{db_shop.id}/services",
            {"actor_id": str(db_owner.id), "name": "Shave", "price": "12.50", "duration": 20},
            format="json",
        )
        assert response.status_code == 201
        assert response.data["position"] == 1
        assert response.data["price"] == "12.50"

    def test_non_owner_cannot_add_service(self, api_client: APIClient, db_customer, db_shop):
        response = api_client.post(
            f"/api/shops/{db_shop.id}/services",
            {"actor_id": str(db_customer.id), "name": "Shave", "price": "12.50", "duration": 20},
            format="json",
        )
        assert response.status_code == 403

    def test_owner_updates_service(self, api_client: APIClient, db_owner, db_shop, db_haircut):
        response = api_client.patch(
            f"/api/shops/{db_shop.id}/services/{db_haircut.id}",
            {"actor_id": str(db_owner.id), "duration": 40},
            format="json",
        )
        assert response.status_code == 200
        assert response.data["duration"] == 40
        assert response.data["id"] == str(db_haircut.id)

    def test_blank_description_clears_it(self, api_client: APIClient, db_owner, db_shop, db_haircut):
        db_haircut.description = "Scissors only"
        db_haircut.save()

        response = api_client.patch(
            f"/api/shops/{db_shop.id}/services/{db_haircut.id}",
            {"actor_id": str(db_owner.id), "description": ""},
            format="json",
        )

        assert response.status_code == 200
        assert response.data["description"] is None
        db_haircut.refresh_from_db()
        assert not db_haircut.description

    def test_null_description_is_rejected(self, api_client: APIClient, db_owner, db_shop, db_haircut):
        response = api_client.patch(
            f"/api/shops/{db_shop.id}/services/{db_haircut.id}",
            {"actor_id": str(db_owner.id), "description": None},
            format="json",
        )
        assert response.status_code == 400
        assert response.data["code"] == "INVALID_REQUEST"

    def test_owner_removes_service(self, api_client: APIClient, db_owner, db_shop, db_haircut):
        response = api_client.delete(
            f"/api/shops/{db_shop.id}/services/{db_haircut.id}",
            {"actor_id": str(db_owner.id)},
            format="json",
        )
        assert response.status_code == 204
        assert not orm.Service.objects.filter(pk=db_haircut.id).exists()

    def test_remove_unknown_service_returns_404(self, api_client: APIClient, db_owner, db_shop):
        response = api_client.delete(
            f"/api/shops/{db_shop.id}/services/{uuid.uuid4()}",
            {"actor_id": str(db_owner.id)},
            format="json",
        )
        assert response.status_code == 404
        assert response.data["code"] == "SERVICE_NOT_FOUND"


@pytest.mark.django_db
class TestOpeningHours:
    """Tests for /api/shops/{shop_id}/opening-hours"""

    def test_returns_week(self, api_client: APIClient, db_shop):
        response = api_client.get(f"/api/shops/{db_shop.id}/opening-hours")
        assert response.status_code == 200
        assert [item["day_of_week"] for item in response.data] == list(range(7))
        assert response.data[0]["is_closed"] is True
        assert response.data[1]["opening_time"] == "09:00"

    def test_owner_replaces_week(self, api_client: APIClient, db_owner, db_shop):
        response = api_client.put(
            f"/api/shops/{db_shop.id}/opening-hours",
            {
                "actor_id": str(db_owner.id),
                "hours": [
                    {"day_of_week": 1, "opening_time": "10:00", "closing_time": "16:00"},
                    {"day_of_week": 0, "opening_time": "00:00", "closing_time": "00:00", "is_closed": True},
                ],
            },
            format="json",
        )

        assert response.status_code == 200
        assert [item["day_of_week"] for item in response.data] == [0, 1]
        assert orm.OpeningHours.objects.filter(shop=db_shop).count() == 2

    def test_closing_before_opening_returns_400(self, api_client: APIClient, db_owner, db_shop):
        response = api_client.put(
            f"/api/shops/{db_shop.id}/opening-hours",
            {
                "actor_id": str(db_owner.id),
                "hours": [{"day_of_week": 1, "opening_time": "16:00", "closing_time": "10:00"}],
            },
            format="json",
        )
        assert response.status_code == 400
        assert response.data["code"] == "INVALID_OPENING_HOURS"
        assert orm.OpeningHours.objects.filter(shop=db_shop).count() == 7
