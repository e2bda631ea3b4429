"""Invoice draft and billing summary endpoints.

Draft edits do not touch the backend: the client posts its draft, gets the
edited one back, and only ``/invoice-drafts/submit`` writes anything.
"""

from fastapi import APIRouter

from frontdesk.dependencies import Backend
from frontdesk.schemas.invoice import (
    AddItemRequest,
    BillingSummaryResponse,
    DiscountRequest,
    DraftView,
    InvoiceResponse,
    OpenDraftRequest,
    RemoveItemRequest,
    StatusRequest,
    SubmitRequest,
)
from frontdesk.services.drafts import (
    add_custom_item,
    clear_discount,
    remove_item,
    set_discount,
    set_status,
)
from frontdesk.services.invoice import (
    draft_for_booking,
    draft_for_invoice,
    get_billing_summary,
    submit_draft,
)

router = APIRouter()


@router.post("/invoice-drafts", response_model=DraftView, status_code=200)
async def open_invoice_draft(body: OpenDraftRequest, backend: Backend) -> DraftView:
    """Start a draft from a booking's generated lines, or reopen a saved invoice."""
    if body.invoice_id is not None:
        draft = await draft_for_invoice(backend, body.invoice_id)
    else:
        draft = await draft_for_booking(backend, body.booking_id, body.guest_id)
    return DraftView.from_domain(draft)


@router.post("/invoice-drafts/items", response_model=DraftView, status_code=200)
async def add_item(body: AddItemRequest) -> DraftView:
    item = body.item
    draft = add_custom_item(
        body.draft.to_domain(), item.description, item.quantity, item.rate, item.category
    )
    return DraftView.from_domain(draft)


@router.post("/invoice-drafts/remove-item", response_model=DraftView, status_code=200)
async def remove_line(body: RemoveItemRequest) -> DraftView:
    """Remove one line by its position in ``lines``; protected lines answer 409."""
    return DraftView.from_domain(remove_item(body.draft.to_domain(), body.index))


@router.post("/invoice-drafts/discount", response_model=DraftView, status_code=200)
async def update_discount(body: DiscountRequest) -> DraftView:
    draft = body.draft.to_domain()
    if body.discount is None:
        draft = clear_discount(draft)
    else:
        draft = set_discount(draft, body.discount.amount, body.discount.description)
    return DraftView.from_domain(draft)


@router.post("/invoice-drafts/status", response_model=DraftView, status_code=200)
async def update_status(body: StatusRequest) -> DraftView:
    return DraftView.from_domain(set_status(body.draft.to_domain(), body.status))


@router.post("/invoice-drafts/submit", response_model=InvoiceResponse, status_code=200)
async def submit(body: SubmitRequest, backend: Backend) -> InvoiceResponse:
    """Save the draft's custom items and discount; the draft is left as sent."""
    invoice = await submit_draft(backend, body.draft.to_domain())
    return InvoiceResponse.from_domain(invoice)


@router.get("/invoices/summary", response_model=BillingSummaryResponse, status_code=200)
async def billing_summary(backend: Backend) -> BillingSummaryResponse:
    return BillingSummaryResponse.model_validate(await get_billing_summary(backend))
