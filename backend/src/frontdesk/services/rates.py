"""Seasonal nightly-rate lookup."""

from datetime import date
from decimal import Decimal

from frontdesk.exceptions import RateUnavailableError
from frontdesk.models import RoomRateProfile


def _usable(rate: Decimal | None) -> bool:
    # is_finite() first: ordering comparisons on a NaN Decimal raise
    return rate is not None and rate.is_finite() and rate > 0


def resolve_base_rate(room: RoomRateProfile, on: date) -> Decimal:
    """Return the room's undiscounted nightly rate for the month of ``on``.

    The monthly table entry wins when it holds a positive number; otherwise the
    room's flat rate is used. Raises RateUnavailableError when neither is usable.
    """
    index = on.month - 1
    monthly = room.monthly_rates[index] if index < len(room.monthly_rates) else None
    if _usable(monthly):
        return monthly  # type: ignore[return-value]
    if _usable(room.rate):
        return room.rate  # type: ignore[return-value]
    raise RateUnavailableError(room.id, on.month)
