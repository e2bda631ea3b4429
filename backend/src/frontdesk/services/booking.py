"""Booking-side orchestration.

Fetches catalog and booking data through the repositories, then hands it to
the pure pricing and availability functions. Two or three independent fetches
per call; nothing is cached between requests.
"""

import asyncio
from dataclasses import dataclass
from datetime import date

import httpx

from frontdesk.exceptions import RoomUnavailableError
from frontdesk.logging import get_logger
from frontdesk.models import Booking, PricingQuote, RoomRateProfile
from frontdesk.repositories.bookings import get_booking, list_bookings, update_check_out
from frontdesk.repositories.catalog import get_room, list_deals, list_rooms
from frontdesk.services.availability import available_rooms, occupied_room_ids
from frontdesk.services.pricing import CheckoutCharge, StayDirection, price_checkout_change, quote

logger = get_logger(__name__)


@dataclass
class CheckoutChange:
    """Outcome of moving a booking's check-out date."""

    booking: Booking
    previous_check_out: date
    charge: CheckoutCharge


async def get_quote(
    backend: httpx.AsyncClient, room_id: str, check_in: date, check_out: date
) -> PricingQuote:
    room, deals = await asyncio.gather(get_room(backend, room_id), list_deals(backend))
    result = quote(room, check_in, check_out, deals)
    logger.info(
        "quote_computed",
        room_id=room_id,
        nights=result.nights,
        deal_id=result.applied_deal.id if result.applied_deal else None,
        total=str(result.total),
    )
    return result


async def get_available_rooms(
    backend: httpx.AsyncClient,
    check_in: date,
    check_out: date,
    excluding_booking_id: str | None = None,
) -> list[RoomRateProfile]:
    rooms, bookings = await asyncio.gather(list_rooms(backend), list_bookings(backend))
    return available_rooms(rooms, bookings, check_in, check_out, excluding_booking_id)


async def change_check_out(
    backend: httpx.AsyncClient, booking_id: str, new_check_out: date
) -> CheckoutChange:
    """Price a check-out change, make sure the room is free, then save it.

    Nothing is written when pricing or the availability check fails.
    """
    booking = await get_booking(backend, booking_id)
    room, deals, bookings = await asyncio.gather(
        get_room(backend, booking.room_id), list_deals(backend), list_bookings(backend)
    )

    charge = price_checkout_change(room, booking.check_in, booking.check_out, new_check_out, deals)

    if charge.direction is StayDirection.EXTEND:
        others = [b for b in bookings if b.room_id == booking.room_id]
        if occupied_room_ids(others, booking.check_out, new_check_out, excluding_booking_id=booking.id):
            raise RoomUnavailableError(
                f"Room {room.room_number or room.id} is booked before {new_check_out.isoformat()}"
            )

    updated = await update_check_out(backend, booking_id, new_check_out)
    logger.info(
        "check_out_changed",
        booking_id=booking_id,
        direction=charge.direction.value,
        nights=charge.nights,
        amount=str(charge.amount),
    )
    return CheckoutChange(booking=updated, previous_check_out=booking.check_out, charge=charge)
