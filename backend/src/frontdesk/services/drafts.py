"""Editing an invoice draft.

Every operation takes an InvoiceDraft and returns a new one; nothing is held
between calls. A rejected edit raises and leaves the caller's draft untouched,
which is what keeps unsaved work around when a submit fails.
"""

from collections.abc import Iterable
from dataclasses import replace
from datetime import UTC, datetime
from decimal import Decimal

from frontdesk.exceptions import ImmutableLineItemError, InvoiceLockedError, ValidationFailedError
from frontdesk.logging import get_logger
from frontdesk.models import (
    CustomSource,
    DiscountEntry,
    InvoiceDraft,
    InvoiceLineItem,
    InvoiceStatus,
    InvoiceSubmission,
    LineItemCategory,
)
from frontdesk.services.provenance import removal_rejection

logger = get_logger(__name__)

DISCOUNT_PREFIXES = ("Discount: ", "Discount")


def _ensure_editable(draft: InvoiceDraft) -> None:
    if draft.status == InvoiceStatus.CANCELLED:
        raise InvoiceLockedError(f"Invoice for booking {draft.booking_id} is cancelled")
    if draft.status == InvoiceStatus.PAID:
        # Allowed, but nothing stops a paid bill from changing under the guest.
        logger.warning("paid_invoice_edited", booking_id=draft.booking_id, invoice_id=draft.invoice_id)


def open_draft(
    booking_id: str,
    items: Iterable[InvoiceLineItem],
    *,
    guest_id: str | None = None,
    invoice_id: str | None = None,
    status: InvoiceStatus = InvoiceStatus.PENDING,
    paid_at: datetime | None = None,
) -> InvoiceDraft:
    """Build a draft from lines loaded from the backend.

    Discount lines are folded into the draft's single discount field. If the
    backend returns several, their magnitudes are added up and the first
    non-empty description is kept.
    """
    regular: list[InvoiceLineItem] = []
    discount_total = Decimal("0")
    description = ""
    for item in items:
        if not item.is_discount:
            regular.append(item)
            continue
        discount_total += abs(item.amount)
        if not description:
            description = _strip_discount_prefix(item.description)

    discount = DiscountEntry(discount_total, description) if discount_total > 0 else None
    return InvoiceDraft(
        booking_id=booking_id,
        guest_id=guest_id,
        invoice_id=invoice_id,
        status=status,
        items=tuple(regular),
        discount=discount,
        paid_at=paid_at,
    )


def _strip_discount_prefix(text: str) -> str:
    for prefix in DISCOUNT_PREFIXES:
        if text.startswith(prefix):
            return text[len(prefix) :].strip()
    return text.strip()


def custom_item(
    description: str,
    quantity: int,
    rate: Decimal,
    category: LineItemCategory = LineItemCategory.OTHER,
) -> InvoiceLineItem:
    """Build a hand-entered charge or raise ValidationFailedError.

    The amount is always ``rate * quantity``, whatever the caller had.
    """
    description = description.strip()
    if not description:
        raise ValidationFailedError("description", "Description is required")
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise ValidationFailedError("quantity", "Quantity must be at least 1")
    if not rate.is_finite() or rate < 0:
        raise ValidationFailedError("rate", "Rate must be 0 or greater")
    if category == LineItemCategory.DISCOUNT:
        raise ValidationFailedError("category", "Use the discount field to discount a bill")

    return InvoiceLineItem(
        description=description,
        quantity=quantity,
        rate=rate,
        amount=rate * quantity,
        category=category,
        provenance=CustomSource(),
    )


def add_custom_item(
    draft: InvoiceDraft,
    description: str,
    quantity: int,
    rate: Decimal,
    category: LineItemCategory = LineItemCategory.OTHER,
) -> InvoiceDraft:
    """Append a hand-entered charge after validating it."""
    _ensure_editable(draft)
    item = custom_item(description, quantity, rate, category)
    return replace(draft, items=(*draft.items, item))


def remove_item(draft: InvoiceDraft, index: int) -> InvoiceDraft:
    """Remove the line at ``index`` of ``draft.line_items``.

    Removing the discount line clears the discount. Protected lines raise
    ImmutableLineItemError with the reason to show the user.
    """
    _ensure_editable(draft)
    lines = draft.line_items
    if not 0 <= index < len(lines):
        raise ValidationFailedError("index", f"No line item at position {index}")

    item = lines[index]
    reason = removal_rejection(item.provenance)
    if reason is not None:
        logger.info(
            "line_item_rejected",
            booking_id=draft.booking_id,
            index=index,
            source=item.provenance.tag,
            reason=reason,
        )
        raise ImmutableLineItemError(index, reason)

    if item.is_discount:
        return replace(draft, discount=None)
    return replace(draft, items=draft.items[:index] + draft.items[index + 1 :])


def set_discount(draft: InvoiceDraft, amount: Decimal, description: str = "") -> InvoiceDraft:
    """Replace the draft's discount. The amount is the positive value taken off."""
    _ensure_editable(draft)
    return replace(draft, discount=discount_entry(amount, description))


def discount_entry(amount: Decimal, description: str = "") -> DiscountEntry:
    if not amount.is_finite() or amount <= 0:
        raise ValidationFailedError("amount", "Discount amount must be greater than 0")
    return DiscountEntry(amount=amount, description=description.strip())


def clear_discount(draft: InvoiceDraft) -> InvoiceDraft:
    _ensure_editable(draft)
    return replace(draft, discount=None)


def set_status(draft: InvoiceDraft, status: InvoiceStatus, now: datetime | None = None) -> InvoiceDraft:
    """Move the draft to ``status``; a cancelled draft cannot move anywhere.

    Becoming paid stamps ``paid_at``; leaving paid clears it.
    """
    if draft.status == InvoiceStatus.CANCELLED:
        raise InvoiceLockedError(f"Invoice for booking {draft.booking_id} is cancelled")
    if status == InvoiceStatus.PAID:
        already_stamped = draft.status == InvoiceStatus.PAID and draft.paid_at is not None
        paid_at = draft.paid_at if already_stamped else (now or datetime.now(UTC))
    else:
        paid_at = None
    return replace(draft, status=status, paid_at=paid_at)


def to_submission(draft: InvoiceDraft) -> InvoiceSubmission:
    """Keep only what a person added; room, trip and order lines are the backend's."""
    custom = tuple(item for item in draft.items if isinstance(item.provenance, CustomSource))
    return InvoiceSubmission(
        booking_id=draft.booking_id,
        status=draft.status,
        custom_items=custom,
        discount=draft.discount,
    )
