"""Invoice draft request and response schemas.

The draft travels with every request: the client sends it back, the service
applies one edit and answers with the new draft plus the derived line view and
totals. Nothing about a draft is stored here between calls.
"""

from dataclasses import replace
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, model_validator

from frontdesk.exceptions import ValidationFailedError
from frontdesk.models import (
    CustomSource,
    Invoice,
    InvoiceDraft,
    InvoiceLineItem,
    InvoiceStatus,
    LineItemCategory,
    provenance_from_wire,
    provenance_to_wire,
)
from frontdesk.schemas.common import CAMEL_CONFIG, Money
from frontdesk.services.drafts import custom_item, discount_entry, open_draft
from frontdesk.services.provenance import removal_rejection
from frontdesk.services.totals import compute_totals


class LineItemModel(BaseModel):
    model_config = CAMEL_CONFIG

    description: str
    quantity: int
    rate: Money
    amount: Money
    category: LineItemCategory = LineItemCategory.OTHER
    source: str | None = None
    source_status: str | None = None

    def to_domain(self) -> InvoiceLineItem:
        return InvoiceLineItem(
            description=self.description,
            quantity=self.quantity,
            rate=self.rate,
            amount=self.amount,
            category=self.category,
            provenance=provenance_from_wire(self.source, self.source_status),
        )

    @classmethod
    def from_domain(cls, item: InvoiceLineItem) -> "LineItemModel":
        source, status = provenance_to_wire(item.provenance)
        return cls(
            description=item.description,
            quantity=item.quantity,
            rate=item.rate,
            amount=item.amount,
            category=item.category,
            source=source,
            source_status=status,
        )


class DiscountModel(BaseModel):
    model_config = CAMEL_CONFIG

    amount: Money
    description: str = ""


class DraftModel(BaseModel):
    """Wire form of an InvoiceDraft. ``items`` never carries the discount line."""

    model_config = CAMEL_CONFIG

    booking_id: str
    guest_id: str | None = None
    invoice_id: str | None = None
    status: InvoiceStatus = InvoiceStatus.PENDING
    items: list[LineItemModel] = []
    discount: DiscountModel | None = None
    paid_at: datetime | None = None

    def to_domain(self) -> InvoiceDraft:
        """Rebuild the draft, holding custom items and the discount to the edit rules.

        Raises ValidationFailedError with the dotted path of the offending field.
        """
        # A discount line sent among the items is folded like a loaded one
        draft = open_draft(
            self.booking_id,
            [self._item_to_domain(index, item) for index, item in enumerate(self.items)],
            guest_id=self.guest_id,
            invoice_id=self.invoice_id,
            status=self.status,
            paid_at=self.paid_at,
        )
        if self.discount is not None:
            try:
                entry = discount_entry(self.discount.amount, self.discount.description)
            except ValidationFailedError as exc:
                raise ValidationFailedError(f"draft.discount.{exc.field}", exc.message) from exc
            draft = replace(draft, discount=entry)
        return draft

    @staticmethod
    def _item_to_domain(index: int, item: LineItemModel) -> InvoiceLineItem:
        line = item.to_domain()
        if not isinstance(line.provenance, CustomSource):
            return line
        try:
            return custom_item(line.description, line.quantity, line.rate, line.category)
        except ValidationFailedError as exc:
            raise ValidationFailedError(f"draft.items.{index}.{exc.field}", exc.message) from exc

    @classmethod
    def from_domain(cls, draft: InvoiceDraft) -> "DraftModel":
        discount = None
        if draft.discount is not None:
            discount = DiscountModel(
                amount=draft.discount.amount, description=draft.discount.description
            )
        return cls(
            booking_id=draft.booking_id,
            guest_id=draft.guest_id,
            invoice_id=draft.invoice_id,
            status=draft.status,
            items=[LineItemModel.from_domain(item) for item in draft.items],
            discount=discount,
            paid_at=draft.paid_at,
        )


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------
class OpenDraftRequest(BaseModel):
    """Open a draft for a booking's generated lines, or reopen an invoice."""

    model_config = CAMEL_CONFIG

    booking_id: str | None = None
    guest_id: str | None = None
    invoice_id: str | None = None

    @model_validator(mode="after")
    def _one_target(self) -> "OpenDraftRequest":
        if (self.booking_id is None) == (self.invoice_id is None):
            raise ValueError("Provide either bookingId or invoiceId")
        return self


class NewItemModel(BaseModel):
    model_config = CAMEL_CONFIG

    description: str
    quantity: int = 1
    rate: Decimal
    category: LineItemCategory = LineItemCategory.OTHER


class AddItemRequest(BaseModel):
    model_config = CAMEL_CONFIG

    draft: DraftModel
    item: NewItemModel


class RemoveItemRequest(BaseModel):
    model_config = CAMEL_CONFIG

    draft: DraftModel
    index: int


class DiscountRequest(BaseModel):
    """``discount: null`` clears the discount."""

    model_config = CAMEL_CONFIG

    draft: DraftModel
    discount: DiscountModel | None = None


class StatusRequest(BaseModel):
    model_config = CAMEL_CONFIG

    draft: DraftModel
    status: InvoiceStatus


class SubmitRequest(BaseModel):
    model_config = CAMEL_CONFIG

    draft: DraftModel


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------
class LineView(LineItemModel):
    """A line as shown on the bill, with whether the user may remove it."""

    index: int
    removable: bool
    locked_reason: str | None = None


class TotalsModel(BaseModel):
    model_config = CAMEL_CONFIG | {"from_attributes": True}

    pre_discount_subtotal: Money
    tax: Money
    discount: Money
    subtotal: Money
    total: Money


class DraftView(BaseModel):
    model_config = CAMEL_CONFIG

    draft: DraftModel
    lines: list[LineView]
    totals: TotalsModel

    @classmethod
    def from_domain(cls, draft: InvoiceDraft) -> "DraftView":
        lines = []
        for index, item in enumerate(draft.line_items):
            reason = removal_rejection(item.provenance)
            lines.append(
                LineView(
                    **LineItemModel.from_domain(item).model_dump(),
                    index=index,
                    removable=reason is None,
                    locked_reason=reason,
                )
            )
        return cls(
            draft=DraftModel.from_domain(draft),
            lines=lines,
            totals=TotalsModel.model_validate(compute_totals(draft.line_items)),
        )


class InvoiceResponse(BaseModel):
    model_config = CAMEL_CONFIG

    id: str
    booking_id: str
    guest_id: str | None = None
    status: InvoiceStatus
    items: list[LineItemModel]
    subtotal: Money
    tax: Money
    total: Money
    created_at: datetime | None = None
    paid_at: datetime | None = None

    @classmethod
    def from_domain(cls, invoice: Invoice) -> "InvoiceResponse":
        return cls(
            id=invoice.id,
            booking_id=invoice.booking_id,
            guest_id=invoice.guest_id,
            status=invoice.status,
            items=[LineItemModel.from_domain(item) for item in invoice.items],
            subtotal=invoice.subtotal,
            tax=invoice.tax,
            total=invoice.total,
            created_at=invoice.created_at,
            paid_at=invoice.paid_at,
        )


class BillingSummaryResponse(BaseModel):
    """Counters for the billing screen header."""

    model_config = CAMEL_CONFIG | {"from_attributes": True}

    count: int
    pending: int
    paid: int
    cancelled: int
    total_revenue: Money
    pending_amount: Money
    total_tax: Money
