"""Booking access."""

from datetime import date

import httpx

from frontdesk.models import Booking
from frontdesk.repositories.backend import parse, parse_list, request_json
from frontdesk.schemas.backend import BookingRecord, CheckoutUpdatePayload


async def list_bookings(backend: httpx.AsyncClient) -> list[Booking]:
    data = await request_json(backend, "GET", "/api/bookings", entity="Booking")
    return [record.to_domain() for record in parse_list(BookingRecord, data, "Booking")]


async def get_booking(backend: httpx.AsyncClient, booking_id: str) -> Booking:
    data = await request_json(
        backend, "GET", f"/api/bookings/{booking_id}", entity="Booking", identifier=booking_id
    )
    return parse(BookingRecord, data, "Booking").to_domain()


async def update_check_out(backend: httpx.AsyncClient, booking_id: str, check_out: date) -> Booking:
    """Move the booking's check-out date; the backend re-bills the stay."""
    data = await request_json(
        backend,
        "PUT",
        f"/api/bookings/{booking_id}",
        entity="Booking",
        identifier=booking_id,
        payload=CheckoutUpdatePayload(check_out=check_out),
    )
    return parse(BookingRecord, data, "Booking").to_domain()
