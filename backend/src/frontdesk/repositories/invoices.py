"""Invoice access."""

import httpx

from frontdesk.models import Invoice, InvoiceLineItem, InvoiceSubmission
from frontdesk.repositories.backend import parse, parse_list, request_json
from frontdesk.schemas.backend import InvoiceRecord, InvoiceSubmissionPayload, LineItemRecord


async def get_booking_line_items(backend: httpx.AsyncClient, booking_id: str) -> list[InvoiceLineItem]:
    """Room, trip and order lines the backend generated for a booking."""
    data = await request_json(
        backend,
        "GET",
        f"/api/invoices/booking/{booking_id}/items",
        entity="Booking",
        identifier=booking_id,
    )
    return [record.to_domain() for record in parse_list(LineItemRecord, data, "Line item")]


async def list_invoices(backend: httpx.AsyncClient) -> list[Invoice]:
    data = await request_json(backend, "GET", "/api/invoices", entity="Invoice")
    return [record.to_domain() for record in parse_list(InvoiceRecord, data, "Invoice")]


async def get_invoice(backend: httpx.AsyncClient, invoice_id: str) -> Invoice:
    data = await request_json(
        backend, "GET", f"/api/invoices/{invoice_id}", entity="Invoice", identifier=invoice_id
    )
    return parse(InvoiceRecord, data, "Invoice").to_domain()


async def save_invoice(
    backend: httpx.AsyncClient,
    submission: InvoiceSubmission,
    invoice_id: str | None = None,
) -> Invoice:
    """Create the invoice, or update it when ``invoice_id`` is given."""
    payload = InvoiceSubmissionPayload.from_submission(submission)
    if invoice_id is None:
        data = await request_json(backend, "POST", "/api/invoices", entity="Invoice", payload=payload)
    else:
        data = await request_json(
            backend,
            "PUT",
            f"/api/invoices/{invoice_id}",
            entity="Invoice",
            identifier=invoice_id,
            payload=payload,
        )
    return parse(InvoiceRecord, data, "Invoice").to_domain()
