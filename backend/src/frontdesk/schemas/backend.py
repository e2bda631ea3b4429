"""Records exchanged with the dashboard backend.

The backend speaks camelCase JSON with Mongo-style ``_id`` keys and sometimes
populates references (``roomId`` as a nested room object). These models absorb
those quirks and convert to the domain dataclasses; nothing past the
repositories sees them.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, Any

from pydantic import AliasChoices, BaseModel, Field, field_validator

from frontdesk.models import (
    Booking,
    Deal,
    DiscountEntry,
    Invoice,
    InvoiceLineItem,
    InvoiceStatus,
    InvoiceSubmission,
    LineItemCategory,
    RoomRateProfile,
    provenance_from_wire,
)
from frontdesk.schemas.common import CAMEL_CONFIG, Money, NightlyRate, RefId, WireDate

RecordId = Annotated[str, Field(validation_alias=AliasChoices("_id", "id"))]


class RoomRecord(BaseModel):
    model_config = CAMEL_CONFIG

    id: RecordId
    room_number: str = ""
    type: str
    rate: NightlyRate | None = None
    monthly_rates: list[NightlyRate | None] = []

    def to_domain(self) -> RoomRateProfile:
        return RoomRateProfile(
            id=self.id,
            type=self.type,
            room_number=self.room_number,
            rate=self.rate,
            monthly_rates=tuple(self.monthly_rates),
        )


class DealRecord(BaseModel):
    model_config = CAMEL_CONFIG

    id: RecordId
    deal_name: str = ""
    room_type: list[str] = []
    price: Decimal | None = None
    discount: Decimal = Decimal("0")
    start_date: WireDate | None = None
    end_date: WireDate | None = None
    status: str = ""
    description: str | None = None

    @field_validator("room_type", mode="before")
    @classmethod
    def _room_types_must_be_a_list(cls, value: Any) -> Any:
        # a bare string never matched a room type in the dashboard either
        return value if isinstance(value, list) else []

    @field_validator("discount", mode="before")
    @classmethod
    def _missing_discount_is_zero(cls, value: Any) -> Any:
        return 0 if value is None else value

    def to_domain(self) -> Deal:
        return Deal(
            id=self.id,
            name=self.deal_name,
            room_types=tuple(self.room_type),
            status=self.status,
            discount=self.discount,
            price=self.price,
            start_date=self.start_date,
            end_date=self.end_date,
            description=self.description or "",
        )


class BookingRecord(BaseModel):
    model_config = CAMEL_CONFIG

    id: RecordId
    room_id: RefId
    guest_id: RefId | None = None
    check_in: WireDate
    check_out: WireDate
    status: str = ""

    def to_domain(self) -> Booking:
        return Booking(
            id=self.id,
            room_id=self.room_id,
            guest_id=self.guest_id,
            check_in=self.check_in,
            check_out=self.check_out,
            status=self.status,
        )


class LineItemRecord(BaseModel):
    model_config = CAMEL_CONFIG

    description: str = ""
    qty: int | None = None
    amount: Decimal
    category: str | None = None
    source: str | None = None
    status: str | None = Field(
        default=None, validation_alias=AliasChoices("status", "tripStatus", "orderStatus")
    )

    def to_domain(self) -> InvoiceLineItem:
        quantity = self.qty or 1
        return InvoiceLineItem(
            description=self.description,
            quantity=quantity,
            rate=self.amount / max(quantity, 1),
            amount=self.amount,
            category=LineItemCategory.parse(self.category),
            provenance=provenance_from_wire(self.source, self.status),
        )


class InvoiceRecord(BaseModel):
    model_config = CAMEL_CONFIG

    id: RecordId
    booking_id: RefId
    guest_id: RefId | None = None
    line_items: list[LineItemRecord] = []
    subtotal: Decimal = Decimal("0")
    tax: Decimal = Decimal("0")
    total: Decimal = Decimal("0")
    status: InvoiceStatus = InvoiceStatus.PENDING
    created_at: datetime | None = None
    paid_at: datetime | None = None

    def to_domain(self) -> Invoice:
        return Invoice(
            id=self.id,
            booking_id=self.booking_id,
            guest_id=self.guest_id,
            items=tuple(item.to_domain() for item in self.line_items),
            subtotal=self.subtotal,
            tax=self.tax,
            total=self.total,
            status=self.status,
            created_at=self.created_at,
            paid_at=self.paid_at,
        )


# ---------------------------------------------------------------------------
# Outgoing
# ---------------------------------------------------------------------------
class CustomItemPayload(BaseModel):
    model_config = CAMEL_CONFIG

    description: str
    qty: int
    amount: Money
    category: str
    source: str = "custom"


class DiscountPayload(BaseModel):
    model_config = CAMEL_CONFIG

    amount: Money
    description: str = ""


class InvoiceSubmissionPayload(BaseModel):
    """Body of POST/PUT /api/invoices."""

    model_config = CAMEL_CONFIG

    booking_id: str
    custom_items: list[CustomItemPayload]
    status: InvoiceStatus
    discount_item: DiscountPayload | None

    @classmethod
    def from_submission(cls, submission: InvoiceSubmission) -> "InvoiceSubmissionPayload":
        return cls(
            booking_id=submission.booking_id,
            custom_items=[
                CustomItemPayload(
                    description=item.description,
                    qty=item.quantity,
                    amount=item.amount,
                    category=item.category.value,
                )
                for item in submission.custom_items
            ],
            status=submission.status,
            discount_item=_discount_payload(submission.discount),
        )


def _discount_payload(discount: DiscountEntry | None) -> DiscountPayload | None:
    if discount is None:
        return None
    return DiscountPayload(amount=discount.amount, description=discount.description)


class CheckoutUpdatePayload(BaseModel):
    """Body of PUT /api/bookings/{id} when only the check-out moves."""

    model_config = CAMEL_CONFIG

    check_out: date
