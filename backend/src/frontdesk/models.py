"""Domain models.

Plain dataclasses shared by the engine, the gateway and the orchestration
services. They carry no serialization logic; the HTTP boundary converts to
and from them in schemas/.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import StrEnum
from typing import ClassVar


class DealStatus(StrEnum):
    ONGOING = "Ongoing"
    NEW = "New"
    INACTIVE = "Inactive"
    FULL = "Full"
    FINISHED = "Finished"


class BookingStatus(StrEnum):
    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    CHECKED_IN = "CheckedIn"
    CHECKED_OUT = "CheckedOut"
    CANCELLED = "Cancelled"


class InvoiceStatus(StrEnum):
    PENDING = "pending"
    PAID = "paid"
    CANCELLED = "cancelled"


class LineItemCategory(StrEnum):
    ROOM = "room"
    MEAL = "meal"
    SERVICE = "service"
    OTHER = "other"
    DISCOUNT = "discount"

    @classmethod
    def parse(cls, value: str | None) -> "LineItemCategory":
        """Map a backend category onto the enum; unknown or missing means other."""
        try:
            return cls(value) if value else cls.OTHER
        except ValueError:
            return cls.OTHER


@dataclass(frozen=True)
class RoomRateProfile:
    id: str
    type: str
    room_number: str = ""
    rate: Decimal | None = None
    monthly_rates: Sequence[Decimal | None] = ()


@dataclass(frozen=True)
class Deal:
    id: str
    name: str
    room_types: tuple[str, ...]
    status: str
    discount: Decimal = Decimal("0")
    price: Decimal | None = None
    start_date: date | None = None
    end_date: date | None = None
    description: str = ""


@dataclass(frozen=True)
class Booking:
    id: str
    room_id: str
    check_in: date
    check_out: date
    status: str
    guest_id: str | None = None


# ---------------------------------------------------------------------------
# Line-item provenance: one variant per source system
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class BookingSource:
    """Room charge generated from the booking itself."""

    tag: ClassVar[str] = "booking"


@dataclass(frozen=True)
class TripSource:
    """Trip package booked through the trip desk."""

    tag: ClassVar[str] = "trip"
    status: str | None = None


@dataclass(frozen=True)
class OrderSource:
    """Restaurant or room-service order."""

    tag: ClassVar[str] = "order"
    status: str | None = None


@dataclass(frozen=True)
class CustomSource:
    """Charge added by hand at the front desk."""

    tag: ClassVar[str] = "custom"


@dataclass(frozen=True)
class DiscountSource:
    """Synthetic line derived from the draft's discount."""

    tag: ClassVar[str] = "discount"


@dataclass(frozen=True)
class UnknownSource:
    """A source tag this engine does not recognise (or none at all)."""

    tag: ClassVar[str] = "unknown"
    name: str | None = None


Provenance = BookingSource | TripSource | OrderSource | CustomSource | DiscountSource | UnknownSource


def provenance_from_wire(source: str | None, status: str | None = None) -> Provenance:
    """Build the provenance variant for a backend ``source`` tag."""
    match source:
        case "booking":
            return BookingSource()
        case "trip":
            return TripSource(status=status)
        case "order":
            return OrderSource(status=status)
        case "custom":
            return CustomSource()
        case "discount":
            return DiscountSource()
        case _:
            return UnknownSource(name=source)


def provenance_to_wire(provenance: Provenance) -> tuple[str | None, str | None]:
    """Inverse of provenance_from_wire: ``(source, status)``."""
    match provenance:
        case TripSource(status=status) | OrderSource(status=status):
            return provenance.tag, status
        case UnknownSource(name=name):
            return name, None
        case _:
            return provenance.tag, None


@dataclass(frozen=True)
class InvoiceLineItem:
    """One billable entry.

    ``amount == quantity * rate`` for every source except discount, whose
    amount is the negative contribution to the subtotal.
    """

    description: str
    quantity: int
    rate: Decimal
    amount: Decimal
    category: LineItemCategory
    provenance: Provenance

    @property
    def is_discount(self) -> bool:
        return isinstance(self.provenance, DiscountSource)


@dataclass(frozen=True)
class DiscountEntry:
    amount: Decimal
    description: str = ""


@dataclass(frozen=True)
class InvoiceDraft:
    """The in-progress edit of one invoice, owned by the caller.

    ``items`` never holds discount lines; the discount lives in ``discount``
    and ``line_items`` derives the synthetic line from it.
    """

    booking_id: str
    guest_id: str | None = None
    invoice_id: str | None = None
    status: InvoiceStatus = InvoiceStatus.PENDING
    items: tuple[InvoiceLineItem, ...] = ()
    discount: DiscountEntry | None = None
    paid_at: datetime | None = None

    @property
    def line_items(self) -> tuple[InvoiceLineItem, ...]:
        if self.discount is None:
            return self.items
        return (*self.items, discount_line(self.discount))


def discount_line(discount: DiscountEntry) -> InvoiceLineItem:
    description = f"Discount: {discount.description}" if discount.description else "Discount"
    return InvoiceLineItem(
        description=description,
        quantity=1,
        rate=-discount.amount,
        amount=-discount.amount,
        category=LineItemCategory.DISCOUNT,
        provenance=DiscountSource(),
    )


@dataclass(frozen=True)
class Invoice:
    id: str
    booking_id: str
    status: InvoiceStatus
    subtotal: Decimal
    tax: Decimal
    total: Decimal
    items: tuple[InvoiceLineItem, ...] = ()
    guest_id: str | None = None
    created_at: datetime | None = None
    paid_at: datetime | None = None


@dataclass(frozen=True)
class InvoiceSubmission:
    """What the backend receives on submit: only the edits a human made."""

    booking_id: str
    status: InvoiceStatus
    custom_items: tuple[InvoiceLineItem, ...] = ()
    discount: DiscountEntry | None = None


@dataclass(frozen=True)
class PricingQuote:
    nightly_base_rate: Decimal
    nights: int
    applied_deal: Deal | None
    discount_percent: Decimal
    effective_nightly_rate: Decimal
    subtotal: Decimal
    discount_amount: Decimal
    total: Decimal


@dataclass(frozen=True)
class InvoiceTotals:
    pre_discount_subtotal: Decimal
    tax: Decimal
    discount: Decimal
    subtotal: Decimal
    total: Decimal


@dataclass
class BillingSummary:
    """Counters shown at the top of the billing screen."""

    count: int = 0
    pending: int = 0
    paid: int = 0
    cancelled: int = 0
    total_revenue: Decimal = Decimal("0")
    pending_amount: Decimal = Decimal("0")
    total_tax: Decimal = Decimal("0")
