"""Invoice-side orchestration: opening drafts from the backend and submitting them."""

import httpx

from frontdesk.exceptions import BackendUnavailableError
from frontdesk.logging import get_logger
from frontdesk.models import BillingSummary, Invoice, InvoiceDraft
from frontdesk.repositories.invoices import (
    get_booking_line_items,
    get_invoice,
    list_invoices,
    save_invoice,
)
from frontdesk.services.drafts import open_draft, to_submission
from frontdesk.services.totals import summarize_invoices

logger = get_logger(__name__)


async def draft_for_booking(
    backend: httpx.AsyncClient, booking_id: str, guest_id: str | None = None
) -> InvoiceDraft:
    """Start a new invoice from the lines the backend generated for a booking."""
    items = await get_booking_line_items(backend, booking_id)
    logger.info("draft_opened", booking_id=booking_id, items=len(items))
    return open_draft(booking_id, items, guest_id=guest_id)


async def draft_for_invoice(backend: httpx.AsyncClient, invoice_id: str) -> InvoiceDraft:
    """Reopen an existing invoice for editing."""
    invoice = await get_invoice(backend, invoice_id)
    logger.info("draft_opened", booking_id=invoice.booking_id, invoice_id=invoice_id)
    return open_draft(
        invoice.booking_id,
        invoice.items,
        guest_id=invoice.guest_id,
        invoice_id=invoice.id,
        status=invoice.status,
        paid_at=invoice.paid_at,
    )


async def submit_draft(backend: httpx.AsyncClient, draft: InvoiceDraft) -> Invoice:
    """Send the draft's custom items and discount to the backend.

    The draft itself is never modified, so a failed submit can simply be
    retried with the same draft.
    """
    submission = to_submission(draft)
    try:
        invoice = await save_invoice(backend, submission, draft.invoice_id)
    except BackendUnavailableError:
        logger.warning(
            "draft_submit_failed",
            booking_id=draft.booking_id,
            invoice_id=draft.invoice_id,
            custom_items=len(submission.custom_items),
        )
        raise
    logger.info(
        "draft_submitted",
        booking_id=draft.booking_id,
        invoice_id=invoice.id,
        status=invoice.status.value,
        custom_items=len(submission.custom_items),
    )
    return invoice


async def get_billing_summary(backend: httpx.AsyncClient) -> BillingSummary:
    return summarize_invoices(await list_invoices(backend))
