"""Which invoice lines a person may remove, decided by where the line came from.

Only hand-added charges and the discount can go. Room charges are fixed once
generated, and trips and orders are settled through their own screens, so the
billing surface refuses them whatever their status.
"""

from typing import assert_never

from frontdesk.models import (
    BookingSource,
    CustomSource,
    DiscountSource,
    InvoiceLineItem,
    OrderSource,
    Provenance,
    TripSource,
    UnknownSource,
)

LOCKED_TRIP_STATUSES = frozenset({"Confirmed", "Approved", "Completed"})
LOCKED_ORDER_STATUSES = frozenset({"Ready", "Served"})


def removal_rejection(provenance: Provenance) -> str | None:
    """Return why a line with this provenance cannot be removed, or None if it can."""
    match provenance:
        case CustomSource() | DiscountSource():
            return None
        case BookingSource():
            return "Cannot remove room charge from bill"
        case TripSource(status=status):
            if status in LOCKED_TRIP_STATUSES:
                return "Cannot remove confirmed or completed trip from bill"
            return "Cannot remove auto-calculated items. Only manually added items can be removed."
        case OrderSource(status=status):
            if status in LOCKED_ORDER_STATUSES:
                return "Cannot remove ready or served order from bill"
            return "Cannot remove auto-calculated items. Only manually added items can be removed."
        case UnknownSource():
            return "Only manually added items can be removed"
        case _:
            assert_never(provenance)


def can_remove(item: InvoiceLineItem) -> bool:
    return removal_rejection(item.provenance) is None
