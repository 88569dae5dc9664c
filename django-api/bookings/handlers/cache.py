"""Cache keys for slot listings.

Each shop has a version counter that is part of every listing key, so
bumping it invalidates all cached listings for that shop at once.
"""

from django.conf import settings
from django.core.cache import cache


def slots_version_key(shop_id: str) -> str:
    return f"shops:{shop_id}:slots:version"


def get_slots_version(shop_id: str) -> int:
    return cache.get_or_set(slots_version_key(shop_id), 1, timeout=None)


def slots_cache_key(shop_id: str, on: str, service_ids: list[str], today: str) -> str:
    """Listing key; ``today`` is part of it because the booking window moves daily."""
    services = ",".join(sorted(item.lower() for item in service_ids)) or "-"
    return f"shops:{shop_id}:slots:v{get_slots_version(shop_id)}:{today}:{on}:{services}"


def invalidate_shop_slots(shop_id: str) -> None:
    key = slots_version_key(shop_id)
    try:
        cache.incr(key)
    except ValueError:
        cache.set(key, 2, timeout=None)


def slots_cache_timeout() -> int:
    return settings.BOOKINGS["SLOT_CACHE_TIMEOUT"]
