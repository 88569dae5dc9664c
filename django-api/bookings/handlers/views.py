"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

import logging
from functools import wraps

from django.core.cache import cache
from django.utils import timezone
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from bookings.domain import BookingStatus, ShopId
from bookings.domain.errors import DomainError, ErrorCode, StoreUnavailableError
from bookings.handlers.cache import slots_cache_key, slots_cache_timeout
from bookings.handlers.serializers import (
    ActorSerializer,
    BookingCreateSerializer,
    BookingSerializer,
    BookingUsageSerializer,
    OpeningHoursInputSerializer,
    OpeningHoursSerializer,
    RatingSerializer,
    ServiceInputSerializer,
    ServiceSerializer,
    ServiceUpdateSerializer,
    SlotAvailabilitySerializer,
    SlotQuerySerializer,
    StatusUpdateSerializer,
)
from bookings.services.booking_service import BookingService, parse_id
from bookings.services.shop_service import ShopService
from bookings.stores.django_store import DjangoBookingStore

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ErrorCode.SHOP_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.CUSTOMER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.BOOKING_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.SERVICE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.UNAUTHORIZED: status.HTTP_403_FORBIDDEN,
    ErrorCode.SLOT_CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.MONTHLY_CAP_EXCEEDED: status.HTTP_409_CONFLICT,
}


def error_response(error: DomainError) -> Response:
    return Response(
        {"code": error.code.value, "message": error.message},
        status=ERROR_STATUS.get(error.code, status.HTTP_400_BAD_REQUEST),
    )


def validation_response(errors) -> Response:
    return Response(
        {"code": "INVALID_REQUEST", "message": "Invalid request", "errors": errors},
        status=status.HTTP_400_BAD_REQUEST,
    )


def maps_domain_errors(handler):
    """Translate domain and store errors raised by a handler into responses."""

    @wraps(handler)
    def wrapper(self, request, *args, **kwargs):
        try:
            return handler(self, request, *args, **kwargs)
        except DomainError as error:
            return error_response(error)
        except StoreUnavailableError:
            logger.warning("Store unavailable while handling %s %s", request.method, request.path)
            return Response(
                {"code": "SERVICE_UNAVAILABLE", "message": "Please try again in a moment"},
                status=status.HTTP_503_SERVICE_UNAVAILABLE,
            )

    return wrapper


def booking_service() -> BookingService:
    return BookingService(DjangoBookingStore())


def shop_service() -> ShopService:
    return ShopService(DjangoBookingStore())


class SlotListView(APIView):
    """Handler for GET /api/shops/{shop_id}/slots"""

    @maps_domain_errors
    def get(self, request: Request, shop_id: str) -> Response:
        query = SlotQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return validation_response(query.errors)
        on = query.validated_data["date"]
        service_ids = query.validated_data["services"]
        today = timezone.localdate()
        # Keyed by the canonical id so commits invalidate every spelling of it.
        canonical_id = str(parse_id(ShopId, shop_id, "shop"))

        key = slots_cache_key(canonical_id, on.isoformat(), service_ids, today.isoformat())
        data = cache.get(key)
        if data is None:
            availability = booking_service().list_available_slots(
                canonical_id, on, service_ids, today=today
            )
            data = SlotAvailabilitySerializer(availability).data
            cache.set(key, data, timeout=slots_cache_timeout())
        return Response(data)


class BookingUsageView(APIView):
    """Handler for GET /api/shops/{shop_id}/usage"""

    @maps_domain_errors
    def get(self, request: Request, shop_id: str) -> Response:
        usage = booking_service().booking_usage(shop_id, today=timezone.localdate())
        return Response(BookingUsageSerializer(usage).data)


class ShopBookingListView(APIView):
    """Handler for GET /api/shops/{shop_id}/bookings?actor_id="""

    @maps_domain_errors
    def get(self, request: Request, shop_id: str) -> Response:
        query = ActorSerializer(data=request.query_params)
        if not query.is_valid():
            return validation_response(query.errors)
        bookings = booking_service().list_shop_bookings(query.validated_data["actor_id"], shop_id)
        return Response(BookingSerializer(bookings, many=True).data)


class BookingListView(APIView):
    """Handler for GET and POST /api/bookings"""

    @maps_domain_errors
    def get(self, request: Request) -> Response:
        customer_id = request.query_params.get("customer_id", "")
        bookings = booking_service().list_customer_bookings(customer_id)
        return Response(BookingSerializer(bookings, many=True).data)

    @maps_domain_errors
    def post(self, request: Request) -> Response:
        payload = BookingCreateSerializer(data=request.data)
        if not payload.is_valid():
            return validation_response(payload.errors)
        data = payload.validated_data
        booking = booking_service().create_booking(
            customer_id=str(data["customer_id"]),
            shop_id=str(data["shop_id"]),
            service_ids=[str(value) for value in data["service_ids"]],
            appointment_date=data["appointment_date"],
            appointment_time=data["appointment_time"],
            notes=data.get("notes"),
            today=timezone.localdate(),
        )
        return Response(BookingSerializer(booking).data, status=status.HTTP_201_CREATED)


class BookingStatusView(APIView):
    """Handler for POST /api/bookings/{booking_id}/status"""

    @maps_domain_errors
    def post(self, request: Request, booking_id: str) -> Response:
        payload = StatusUpdateSerializer(data=request.data)
        if not payload.is_valid():
            return validation_response(payload.errors)
        data = payload.validated_data
        service = booking_service()
        new_status = BookingStatus(data["status"])
        if new_status is BookingStatus.CANCELLED:
            booking = service.cancel_booking(str(data["actor_id"]), booking_id)
        else:
            booking = service.update_status(str(data["actor_id"]), booking_id, new_status)
        return Response(BookingSerializer(booking).data)


class BookingCancelView(APIView):
    """Handler for POST /api/bookings/{booking_id}/cancel"""

    @maps_domain_errors
    def post(self, request: Request, booking_id: str) -> Response:
        payload = ActorSerializer(data=request.data)
        if not payload.is_valid():
            return validation_response(payload.errors)
        booking = booking_service().cancel_booking(
            str(payload.validated_data["actor_id"]), booking_id
        )
        return Response(BookingSerializer(booking).data)


class BookingRatingView(APIView):
    """Handler for POST /api/bookings/{booking_id}/rating"""

    @maps_domain_errors
    def post(self, request: Request, booking_id: str) -> Response:
        payload = RatingSerializer(data=request.data)
        if not payload.is_valid():
            return validation_response(payload.errors)
        data = payload.validated_data
        booking = booking_service().rate_booking(
            str(data["customer_id"]), booking_id, data["rating"]
        )
        return Response(BookingSerializer(booking).data)


class ServiceListView(APIView):
    """Handler for GET and POST /api/shops/{shop_id}/services"""

    @maps_domain_errors
    def get(self, request: Request, shop_id: str) -> Response:
        include_inactive = request.query_params.get("include_inactive") in ("1", "true")
        services = shop_service().list_services(shop_id, include_inactive=include_inactive)
        return Response(ServiceSerializer(services, many=True).data)

    @maps_domain_errors
    def post(self, request: Request, shop_id: str) -> Response:
        payload = ServiceInputSerializer(data=request.data)
        if not payload.is_valid():
            return validation_response(payload.errors)
        data = payload.validated_data
        service = shop_service().add_service(
            str(data["actor_id"]),
            shop_id,
            name=data["name"],
            price=data["price"],
            duration=data["duration"],
            description=data.get("description"),
        )
        return Response(ServiceSerializer(service).data, status=status.HTTP_201_CREATED)


class ServiceDetailView(APIView):
    """Handler for PATCH and DELETE /api/shops/{shop_id}/services/{service_id}"""

    @maps_domain_errors
    def patch(self, request: Request, shop_id: str, service_id: str) -> Response:
        payload = ServiceUpdateSerializer(data=request.data, partial=True)
        if not payload.is_valid():
            return validation_response(payload.errors)
        changes = dict(payload.validated_data)
        actor_id = changes.pop("actor_id", None)
        if actor_id is None:
            return validation_response({"actor_id": ["This field is required."]})
        service = shop_service().update_service(str(actor_id), shop_id, service_id, **changes)
        return Response(ServiceSerializer(service).data)

    @maps_domain_errors
    def delete(self, request: Request, shop_id: str, service_id: str) -> Response:
        payload = ActorSerializer(data=request.data)
        if not payload.is_valid():
            return validation_response(payload.errors)
        shop_service().remove_service(str(payload.validated_data["actor_id"]), shop_id, service_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class OpeningHoursView(APIView):
    """Handler for GET and PUT /api/shops/{shop_id}/opening-hours"""

    @maps_domain_errors
    def get(self, request: Request, shop_id: str) -> Response:
        hours = shop_service().get_opening_hours(shop_id)
        return Response(OpeningHoursSerializer(hours, many=True).data)

    @maps_domain_errors
    def put(self, request: Request, shop_id: str) -> Response:
        payload = OpeningHoursInputSerializer(data=request.data)
        if not payload.is_valid():
            return validation_response(payload.errors)
        data = payload.validated_data
        week = shop_service().set_opening_hours(
            str(data["actor_id"]), shop_id, [dict(entry) for entry in data["hours"]]
        )
        return Response(OpeningHoursSerializer(week, many=True).data)
