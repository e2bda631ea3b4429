"""Invoice totals.

Tax is charged on the pre-discount subtotal: a discount lowers what the guest
pays for the goods but never the tax owed on them.
"""

from collections.abc import Iterable
from decimal import Decimal

from frontdesk.models import BillingSummary, Invoice, InvoiceLineItem, InvoiceStatus, InvoiceTotals

TAX_RATE = Decimal("0.10")

ZERO = Decimal("0")


def compute_totals(items: Iterable[InvoiceLineItem]) -> InvoiceTotals:
    """Aggregate line items into subtotal, tax and total.

    Any number of discount lines is accepted; their magnitudes are summed.
    """
    pre_discount = ZERO
    discount = ZERO
    subtotal = ZERO
    for item in items:
        subtotal += item.amount
        if item.is_discount:
            discount += abs(item.amount)
        else:
            pre_discount += item.amount

    tax = pre_discount * TAX_RATE
    return InvoiceTotals(
        pre_discount_subtotal=pre_discount,
        tax=tax,
        discount=discount,
        subtotal=subtotal,
        total=subtotal + tax,
    )


def summarize_invoices(invoices: Iterable[Invoice]) -> BillingSummary:
    """Counts plus revenue (paid totals), outstanding amount and tax collected."""
    summary = BillingSummary()
    for invoice in invoices:
        summary.count += 1
        match invoice.status:
            case InvoiceStatus.PAID:
                summary.paid += 1
                summary.total_revenue += invoice.total
                summary.total_tax += invoice.tax
            case InvoiceStatus.PENDING:
                summary.pending += 1
                summary.pending_amount += invoice.total
            case InvoiceStatus.CANCELLED:
                summary.cancelled += 1
    return summary
