"""Request and response schemas for quotes, availability and check-out changes."""

from datetime import date

from pydantic import BaseModel

from frontdesk.models import Deal, PricingQuote, RoomRateProfile
from frontdesk.schemas.common import CAMEL_CONFIG, Money
from frontdesk.schemas.invoice import LineItemModel
from frontdesk.services.booking import CheckoutChange


class QuoteRequest(BaseModel):
    model_config = CAMEL_CONFIG

    room_id: str
    check_in: date
    check_out: date


class DealSummary(BaseModel):
    model_config = CAMEL_CONFIG

    id: str
    name: str
    discount: Money
    price: Money | None = None
    status: str
    start_date: date | None = None
    end_date: date | None = None
    description: str = ""

    @classmethod
    def from_domain(cls, deal: Deal) -> "DealSummary":
        return cls(
            id=deal.id,
            name=deal.name,
            discount=deal.discount,
            price=deal.price,
            status=deal.status,
            start_date=deal.start_date,
            end_date=deal.end_date,
            description=deal.description,
        )


class QuoteResponse(BaseModel):
    """Nights × rate breakdown for a prospective stay."""

    model_config = CAMEL_CONFIG

    nightly_base_rate: Money
    nights: int
    applied_deal: DealSummary | None
    discount_percent: Money
    effective_nightly_rate: Money
    subtotal: Money
    discount_amount: Money
    total: Money

    @classmethod
    def from_domain(cls, result: PricingQuote) -> "QuoteResponse":
        return cls(
            nightly_base_rate=result.nightly_base_rate,
            nights=result.nights,
            applied_deal=DealSummary.from_domain(result.applied_deal) if result.applied_deal else None,
            discount_percent=result.discount_percent,
            effective_nightly_rate=result.effective_nightly_rate,
            subtotal=result.subtotal,
            discount_amount=result.discount_amount,
            total=result.total,
        )


class AvailabilityRequest(BaseModel):
    model_config = CAMEL_CONFIG

    check_in: date
    check_out: date
    excluding_booking_id: str | None = None


class RoomSummary(BaseModel):
    model_config = CAMEL_CONFIG

    id: str
    room_number: str
    type: str
    rate: Money | None = None

    @classmethod
    def from_domain(cls, room: RoomRateProfile) -> "RoomSummary":
        return cls(id=room.id, room_number=room.room_number, type=room.type, rate=room.rate)


class AvailabilityResponse(BaseModel):
    model_config = CAMEL_CONFIG

    check_in: date
    check_out: date
    rooms: list[RoomSummary]


class CheckoutChangeRequest(BaseModel):
    model_config = CAMEL_CONFIG

    check_out: date


class CheckoutChangeResponse(BaseModel):
    """The moved booking and the room charge the move adds to its bill."""

    model_config = CAMEL_CONFIG

    booking_id: str
    check_in: date
    previous_check_out: date
    check_out: date
    direction: str
    nights: int
    nightly_rate: Money
    amount: Money
    line_item: LineItemModel

    @classmethod
    def from_domain(cls, change: CheckoutChange) -> "CheckoutChangeResponse":
        charge = change.charge
        return cls(
            booking_id=change.booking.id,
            check_in=change.booking.check_in,
            previous_check_out=change.previous_check_out,
            check_out=change.booking.check_out,
            direction=charge.direction.value,
            nights=charge.nights,
            nightly_rate=charge.nightly_rate,
            amount=charge.amount,
            line_item=LineItemModel.from_domain(charge.line_item),
        )
