"""Promotional deal matching.

A deal either fixes the nightly price outright or takes a percentage off the
room's base rate. For a given room and date the matcher keeps the applicable
deal that produces the lowest nightly rate.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from frontdesk.models import Deal, DealStatus, RoomRateProfile
from frontdesk.services.rates import resolve_base_rate

# Inactive and Full are still auto-applied; see DESIGN.md before narrowing this.
APPLICABLE_DEAL_STATUSES = frozenset(
    {DealStatus.ONGOING, DealStatus.NEW, DealStatus.INACTIVE, DealStatus.FULL}
)

HUNDRED = Decimal("100")


@dataclass(frozen=True)
class DealMatch:
    """The winning deal (or None) and the nightly rate it produces."""

    deal: Deal | None
    effective_rate: Decimal


def is_deal_applicable(deal: Deal, room_type: str, on: date) -> bool:
    """Status allowed, room type listed (case-insensitive), ``on`` inside the window.

    A deal missing either bound of its window applies on any date.
    """
    if deal.status not in APPLICABLE_DEAL_STATUSES:
        return False
    wanted = room_type.lower()
    if not any(t.lower() == wanted for t in deal.room_types):
        return False
    if deal.start_date is not None and deal.end_date is not None:
        return deal.start_date <= on <= deal.end_date
    return True


def deal_rate(deal: Deal, base_rate: Decimal) -> Decimal:
    """Nightly rate the deal yields on top of ``base_rate``."""
    price = deal.price
    if price is not None and price.is_finite() and price > 0:
        return price
    return base_rate * (1 - deal.discount / HUNDRED)


def select_best_deal(room: RoomRateProfile, on: date, deals: Iterable[Deal]) -> DealMatch:
    """Pick the applicable deal with the lowest nightly rate for ``room`` on ``on``.

    A deal has to undercut the current best (starting with the base rate) to
    replace it, so ties keep the first one seen.
    """
    base_rate = resolve_base_rate(room, on)
    best = DealMatch(deal=None, effective_rate=base_rate)
    for deal in deals:
        if not is_deal_applicable(deal, room.type, on):
            continue
        rate = deal_rate(deal, base_rate)
        if rate < best.effective_rate:
            best = DealMatch(deal=deal, effective_rate=rate)
    return best
