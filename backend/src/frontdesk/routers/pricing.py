"""Quote, availability and check-out change endpoints."""

from fastapi import APIRouter

from frontdesk.dependencies import Backend
from frontdesk.schemas.pricing import (
    AvailabilityRequest,
    AvailabilityResponse,
    CheckoutChangeRequest,
    CheckoutChangeResponse,
    QuoteRequest,
    QuoteResponse,
    RoomSummary,
)
from frontdesk.services.booking import change_check_out, get_available_rooms, get_quote

router = APIRouter()


@router.post("/quotes", response_model=QuoteResponse, status_code=200)
async def create_quote(body: QuoteRequest, backend: Backend) -> QuoteResponse:
    """Price a prospective stay in one room, applying the best deal."""
    result = await get_quote(backend, body.room_id, body.check_in, body.check_out)
    return QuoteResponse.from_domain(result)


@router.post("/availability", response_model=AvailabilityResponse, status_code=200)
async def check_availability(body: AvailabilityRequest, backend: Backend) -> AvailabilityResponse:
    rooms = await get_available_rooms(
        backend, body.check_in, body.check_out, body.excluding_booking_id
    )
    return AvailabilityResponse(
        check_in=body.check_in,
        check_out=body.check_out,
        rooms=[RoomSummary.from_domain(room) for room in rooms],
    )


@router.post(
    "/bookings/{booking_id}/checkout-change",
    response_model=CheckoutChangeResponse,
    status_code=200,
)
async def move_check_out(
    booking_id: str, body: CheckoutChangeRequest, backend: Backend
) -> CheckoutChangeResponse:
    """Extend or shorten a stay and return the room charge it adds."""
    change = await change_check_out(backend, booking_id, body.check_out)
    return CheckoutChangeResponse.from_domain(change)
