"""Selection of services from a shop's catalog."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from decimal import Decimal

from bookings.domain.errors import InvalidServiceSelectionError
from bookings.domain.models import Service, ServiceSnapshot
from bookings.domain.value_objects import Money, ServiceId

DEFAULT_DISPLAY_DURATION = 30


@dataclass(frozen=True)
class ServiceSelection:
    """Snapshot of the chosen services with derived totals."""

    snapshot: tuple[ServiceSnapshot, ...]

    @property
    def total_price(self) -> Money:
        return sum((item.price for item in self.snapshot), Money(amount=Decimal("0")))

    @property
    def total_duration(self) -> int:
        return sum(item.duration for item in self.snapshot)


def select_services(
    services: Iterable[Service], selected_ids: Sequence[ServiceId]
) -> ServiceSelection:
    """Resolve selected ids against the active services of a shop.

    Raises:
        InvalidServiceSelectionError: If nothing was selected, an id is
            repeated, or an id is unknown or inactive.
    """
    if not selected_ids:
        raise InvalidServiceSelectionError()
    if len(set(selected_ids)) != len(selected_ids):
        raise InvalidServiceSelectionError("Each service can only be selected once")

    active = {service.id: service for service in services if service.is_active}
    snapshot = []
    for service_id in selected_ids:
        service = active.get(service_id)
        if service is None:
            raise InvalidServiceSelectionError(
                "One or more selected services are not available"
            )
        snapshot.append(ServiceSnapshot.of(service))

    selection = ServiceSelection(snapshot=tuple(snapshot))
    if selection.total_duration <= 0:
        raise InvalidServiceSelectionError("Selected services have no duration")
    return selection


def display_duration(selection: ServiceSelection | None) -> int:
    """Duration used to lay out slots for browsing, before services are picked."""
    if selection is None or selection.total_duration <= 0:
        return DEFAULT_DISPLAY_DURATION
    return selection.total_duration


def services_by_position(services: Iterable[Service]) -> list[Service]:
    """Positional view of the catalog for callers that still address services by index."""
    return sorted(services, key=lambda service: (service.position, service.name))
