"""Unit tests for stay pricing and check-out changes."""

from datetime import date, timedelta
from decimal import Decimal

import pytest

from frontdesk.exceptions import InvalidDateRangeError, RateUnavailableError
from frontdesk.models import BookingSource, LineItemCategory
from frontdesk.services.pricing import (
    StayDirection,
    count_nights,
    price_checkout_change,
    quote,
    quote_extension,
)
from tests.factories import make_deal, make_room

JAN_10 = date(2025, 1, 10)
JAN_13 = date(2025, 1, 13)
JAN_15 = date(2025, 1, 15)
JAN_17 = date(2025, 1, 17)


# ---------------------------------------------------------------------------
# 1. Nights
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("days", [1, 2, 5, 31, 365])
def test_nights_is_day_difference(days: int) -> None:
    assert count_nights(JAN_10, JAN_10 + timedelta(days=days)) == days


@pytest.mark.parametrize(
    "check_out",
    [JAN_10, JAN_10 - timedelta(days=1)],
    ids=["same_day", "before_check_in"],
)
def test_check_out_not_after_check_in_is_rejected(check_out: date) -> None:
    with pytest.raises(InvalidDateRangeError):
        count_nights(JAN_10, check_out)


# ---------------------------------------------------------------------------
# 2. Quotes
# ---------------------------------------------------------------------------
def test_quote_without_deals_charges_base_rate() -> None:
    result = quote(make_room(rate=Decimal("100")), JAN_10, JAN_15, [])

    assert result.nights == 5
    assert result.applied_deal is None
    assert result.discount_percent == Decimal("0")
    assert result.nightly_base_rate == Decimal("100")
    assert result.effective_nightly_rate == Decimal("100")
    assert result.subtotal == Decimal("500")
    assert result.discount_amount == Decimal("0")
    assert result.total == Decimal("500")


def test_quote_with_percentage_deal() -> None:
    deal = make_deal(discount=Decimal("20"))

    result = quote(make_room(rate=Decimal("100")), JAN_10, JAN_13, [deal])

    assert result.applied_deal is deal
    assert result.discount_percent == Decimal("20")
    assert result.effective_nightly_rate == Decimal("80")
    assert result.subtotal == Decimal("300")
    assert result.discount_amount == Decimal("60")
    assert result.total == Decimal("240")


def test_quote_picks_deal_with_lowest_rate() -> None:
    deal_a = make_deal(id="A", price=Decimal("70"))
    deal_b = make_deal(id="B", discount=Decimal("40"))

    result = quote(make_room(rate=Decimal("100")), JAN_10, JAN_15, [deal_a, deal_b])

    assert result.applied_deal is deal_b
    assert result.total == Decimal("300")


def test_fixed_price_deal_reports_its_declared_discount() -> None:
    deal = make_deal(price=Decimal("75"), discount=Decimal("0"))

    result = quote(make_room(rate=Decimal("100")), JAN_10, JAN_13, [deal])

    assert result.discount_percent == Decimal("0")
    assert result.discount_amount == Decimal("75")
    assert result.total == Decimal("225")


def test_whole_stay_uses_check_in_month_rate() -> None:
    monthly = tuple(Decimal("100") if m == 0 else Decimal("200") for m in range(12))
    room = make_room(rate=None, monthly_rates=monthly)

    result = quote(room, date(2025, 1, 30), date(2025, 2, 3), [])

    assert result.nights == 4
    assert result.total == Decimal("400")


def test_quote_without_rate_raises() -> None:
    with pytest.raises(RateUnavailableError):
        quote(make_room(rate=None), JAN_10, JAN_15, [])


# ---------------------------------------------------------------------------
# 3. Check-out changes
# ---------------------------------------------------------------------------
def test_later_check_out_is_an_extension() -> None:
    change = quote_extension(JAN_15, JAN_17)

    assert change.direction == StayDirection.EXTEND
    assert change.penalty_nights == 0


@pytest.mark.parametrize("new", [JAN_13, JAN_15], ids=["earlier", "unchanged"])
def test_earlier_or_same_check_out_is_a_shorten(new: date) -> None:
    change = quote_extension(JAN_15, new)

    assert change.direction == StayDirection.SHORTEN
    assert change.penalty_nights == 1


def test_extension_is_priced_over_added_nights() -> None:
    room = make_room(rate=Decimal("100"))

    charge = price_checkout_change(room, JAN_10, JAN_15, JAN_17, [make_deal(discount=Decimal("20"))])

    assert charge.direction == StayDirection.EXTEND
    assert charge.nights == 2
    assert charge.nightly_rate == Decimal("80")
    assert charge.amount == Decimal("160")
    assert charge.quote is not None
    assert charge.line_item.description == "Stay extension (2 nights)"
    assert charge.line_item.quantity == 2
    assert charge.line_item.amount == Decimal("160")
    assert charge.line_item.category == LineItemCategory.ROOM
    assert charge.line_item.provenance == BookingSource()


def test_single_night_extension_label() -> None:
    charge = price_checkout_change(make_room(), JAN_10, JAN_15, JAN_15 + timedelta(days=1), [])

    assert charge.line_item.description == "Stay extension (1 night)"


def test_early_checkout_charges_exactly_one_night() -> None:
    room = make_room(rate=Decimal("100"))
    deal = make_deal(discount=Decimal("20"))

    charge = price_checkout_change(room, JAN_10, JAN_15, JAN_13, [deal])

    assert charge.direction == StayDirection.SHORTEN
    assert charge.nights == 1
    assert charge.nightly_rate == Decimal("80")
    assert charge.amount == Decimal("80")
    assert charge.quote is None
    assert charge.line_item.description == "Early checkout penalty (1 night)"


def test_early_checkout_penalty_ignores_nights_dropped() -> None:
    room = make_room(rate=Decimal("100"))

    one = price_checkout_change(room, JAN_10, JAN_15, date(2025, 1, 14), [])
    four = price_checkout_change(room, JAN_10, JAN_15, date(2025, 1, 11), [])

    assert one.amount == four.amount == Decimal("100")


def test_new_check_out_on_or_before_check_in_is_rejected() -> None:
    with pytest.raises(InvalidDateRangeError):
        price_checkout_change(make_room(), JAN_10, JAN_15, JAN_10, [])
