"""Django signals for cache invalidation.

Any write that can change a shop's slot listing bumps that shop's slot
cache version.
"""

from functools import partial

from django.db import transaction
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from bookings.handlers.cache import invalidate_shop_slots
from bookings.models import Booking, OpeningHours, Service


def _invalidate_on_commit(instance) -> None:
    transaction.on_commit(partial(invalidate_shop_slots, str(instance.shop_id)))


@receiver([post_save, post_delete], sender=Booking)
def invalidate_booking_slots(sender, instance, **kwargs):
    """Invalidate slot listings when a booking is saved or deleted."""
    _invalidate_on_commit(instance)


@receiver([post_save, post_delete], sender=OpeningHours)
def invalidate_opening_hours_slots(sender, instance, **kwargs):
    """Invalidate slot listings when opening hours change."""
    _invalidate_on_commit(instance)


@receiver([post_save, post_delete], sender=Service)
def invalidate_service_slots(sender, instance, **kwargs):
    """Invalidate slot listings when a service is saved or deleted."""
    _invalidate_on_commit(instance)
