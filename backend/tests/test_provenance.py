"""Unit tests for line-item removal rules."""

import pytest

from frontdesk.models import (
    BookingSource,
    CustomSource,
    DiscountSource,
    OrderSource,
    Provenance,
    TripSource,
    UnknownSource,
)
from frontdesk.services.provenance import can_remove, removal_rejection
from tests.factories import custom_line, order_line, room_line, trip_line

TRIP_STATUSES = [None, "Pending", "Confirmed", "Approved", "Completed", "Cancelled"]
ORDER_STATUSES = [None, "Pending", "Preparing", "Ready", "Served", "Cancelled"]


def test_room_charge_is_never_removable() -> None:
    assert not can_remove(room_line())
    assert removal_rejection(BookingSource()) == "Cannot remove room charge from bill"


@pytest.mark.parametrize("status", TRIP_STATUSES)
def test_trip_is_never_removable(status: str | None) -> None:
    assert not can_remove(trip_line(status=status))


@pytest.mark.parametrize("status", ORDER_STATUSES)
def test_order_is_never_removable(status: str | None) -> None:
    assert not can_remove(order_line(status=status))


@pytest.mark.parametrize(
    "provenance, message",
    [
        (TripSource(status="Confirmed"), "Cannot remove confirmed or completed trip from bill"),
        (TripSource(status="Completed"), "Cannot remove confirmed or completed trip from bill"),
        (OrderSource(status="Served"), "Cannot remove ready or served order from bill"),
        (
            TripSource(status="Pending"),
            "Cannot remove auto-calculated items. Only manually added items can be removed.",
        ),
        (
            OrderSource(status=None),
            "Cannot remove auto-calculated items. Only manually added items can be removed.",
        ),
        (UnknownSource(name="spa"), "Only manually added items can be removed"),
        (UnknownSource(), "Only manually added items can be removed"),
    ],
)
def test_rejection_message_depends_on_source_and_status(provenance: Provenance, message: str) -> None:
    assert removal_rejection(provenance) == message


@pytest.mark.parametrize("provenance", [CustomSource(), DiscountSource()])
def test_custom_and_discount_lines_are_removable(provenance: Provenance) -> None:
    assert removal_rejection(provenance) is None


def test_custom_line_is_removable() -> None:
    assert can_remove(custom_line())
