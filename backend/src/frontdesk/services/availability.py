"""Room availability over half-open date ranges."""

from collections.abc import Iterable
from datetime import date

from frontdesk.models import Booking, BookingStatus, RoomRateProfile
from frontdesk.services.pricing import ensure_valid_range

NON_BLOCKING_STATUSES = frozenset({BookingStatus.CANCELLED, BookingStatus.CHECKED_OUT})


def ranges_overlap(start: date, end: date, other_start: date, other_end: date) -> bool:
    """True when ``[start, end)`` and ``[other_start, other_end)`` share a night."""
    return start < other_end and end > other_start


def occupied_room_ids(
    bookings: Iterable[Booking],
    check_in: date,
    check_out: date,
    excluding_booking_id: str | None = None,
) -> set[str]:
    occupied: set[str] = set()
    for booking in bookings:
        if excluding_booking_id is not None and booking.id == excluding_booking_id:
            continue
        if booking.status in NON_BLOCKING_STATUSES:
            continue
        if ranges_overlap(check_in, check_out, booking.check_in, booking.check_out):
            occupied.add(booking.room_id)
    return occupied


def available_rooms(
    rooms: Iterable[RoomRateProfile],
    bookings: Iterable[Booking],
    check_in: date,
    check_out: date,
    excluding_booking_id: str | None = None,
) -> list[RoomRateProfile]:
    """Rooms with no blocking booking over ``[check_in, check_out)``, in input order.

    ``excluding_booking_id`` leaves the booking being edited out of the check
    so it does not collide with itself.
    """
    ensure_valid_range(check_in, check_out)
    occupied = occupied_room_ids(bookings, check_in, check_out, excluding_booking_id)
    return [room for room in rooms if room.id not in occupied]
