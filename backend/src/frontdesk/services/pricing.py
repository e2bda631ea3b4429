"""Stay pricing.

Prices a stay as nights × nightly rate with the best deal applied, and prices
changes to the check-out date of an existing stay. The whole stay is charged
at the rate of the check-in month; rates are not blended across months.
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
from enum import StrEnum

from frontdesk.exceptions import InvalidDateRangeError
from frontdesk.models import (
    BookingSource,
    Deal,
    InvoiceLineItem,
    LineItemCategory,
    PricingQuote,
    RoomRateProfile,
)
from frontdesk.services.deals import select_best_deal
from frontdesk.services.rates import resolve_base_rate

EARLY_CHECKOUT_PENALTY_NIGHTS = 1

_ONE_DAY = timedelta(days=1)


class StayDirection(StrEnum):
    EXTEND = "extend"
    SHORTEN = "shorten"


@dataclass(frozen=True)
class StayChange:
    direction: StayDirection
    penalty_nights: int


@dataclass(frozen=True)
class CheckoutCharge:
    """What moving the check-out date adds to the bill."""

    direction: StayDirection
    nights: int
    nightly_rate: Decimal
    amount: Decimal
    line_item: InvoiceLineItem
    quote: PricingQuote | None = None


def ensure_valid_range(check_in: date, check_out: date) -> None:
    """Raise InvalidDateRangeError unless check-out falls after check-in."""
    if check_out <= check_in:
        raise InvalidDateRangeError(
            f"Check-out {check_out.isoformat()} must be after check-in {check_in.isoformat()}"
        )


def count_nights(check_in: date, check_out: date) -> int:
    """Whole nights between two dates, rounded up and never below one."""
    ensure_valid_range(check_in, check_out)
    return max(1, math.ceil((check_out - check_in) / _ONE_DAY))


def quote(
    room: RoomRateProfile,
    check_in: date,
    check_out: date,
    deals: Iterable[Deal],
) -> PricingQuote:
    """Price a stay in ``room`` from ``check_in`` to ``check_out``."""
    nights = count_nights(check_in, check_out)
    base_rate = resolve_base_rate(room, check_in)
    best = select_best_deal(room, check_in, deals)
    effective = best.effective_rate

    return PricingQuote(
        nightly_base_rate=base_rate,
        nights=nights,
        applied_deal=best.deal,
        discount_percent=best.deal.discount if best.deal else Decimal("0"),
        effective_nightly_rate=effective,
        subtotal=base_rate * nights,
        discount_amount=(base_rate - effective) * nights,
        total=effective * nights,
    )


def quote_extension(original_check_out: date, new_check_out: date) -> StayChange:
    """Classify a check-out change.

    Moving the date later extends the stay. Anything else, including the same
    date, counts as an early checkout and carries a flat one-night penalty.
    """
    if new_check_out > original_check_out:
        return StayChange(direction=StayDirection.EXTEND, penalty_nights=0)
    return StayChange(direction=StayDirection.SHORTEN, penalty_nights=EARLY_CHECKOUT_PENALTY_NIGHTS)


def price_checkout_change(
    room: RoomRateProfile,
    check_in: date,
    original_check_out: date,
    new_check_out: date,
    deals: Iterable[Deal],
) -> CheckoutCharge:
    """Price the charge produced by moving a stay's check-out date.

    Extensions are quoted as a fresh stay over the added nights. Early
    checkouts charge one night at the stay's current effective rate, however
    many nights were dropped.
    """
    if new_check_out <= check_in:
        raise InvalidDateRangeError(
            f"New check-out {new_check_out.isoformat()} must be after check-in {check_in.isoformat()}"
        )
    deals = list(deals)
    change = quote_extension(original_check_out, new_check_out)

    if change.direction is StayDirection.EXTEND:
        added = quote(room, original_check_out, new_check_out, deals)
        return CheckoutCharge(
            direction=change.direction,
            nights=added.nights,
            nightly_rate=added.effective_nightly_rate,
            amount=added.total,
            line_item=_room_line(
                f"Stay extension ({added.nights} night{'s' if added.nights > 1 else ''})",
                added.nights,
                added.effective_nightly_rate,
            ),
            quote=added,
        )

    rate = select_best_deal(room, check_in, deals).effective_rate
    nights = change.penalty_nights
    return CheckoutCharge(
        direction=change.direction,
        nights=nights,
        nightly_rate=rate,
        amount=rate * nights,
        line_item=_room_line("Early checkout penalty (1 night)", nights, rate),
    )


def _room_line(description: str, nights: int, rate: Decimal) -> InvoiceLineItem:
    return InvoiceLineItem(
        description=description,
        quantity=nights,
        rate=rate,
        amount=rate * nights,
        category=LineItemCategory.ROOM,
        provenance=BookingSource(),
    )
