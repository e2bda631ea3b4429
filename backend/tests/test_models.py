from datetime import date
from decimal import Decimal

import pytest

from frontdesk.models import (
    BookingSource,
    CustomSource,
    DiscountEntry,
    DiscountSource,
    InvoiceStatus,
    InvoiceSubmission,
    LineItemCategory,
    OrderSource,
    Provenance,
    TripSource,
    UnknownSource,
    discount_line,
    provenance_from_wire,
    provenance_to_wire,
)
from frontdesk.schemas.backend import (
    BookingRecord,
    DealRecord,
    InvoiceRecord,
    InvoiceSubmissionPayload,
    LineItemRecord,
    RoomRecord,
)
from frontdesk.schemas.invoice import DraftModel
from frontdesk.services.rates import resolve_base_rate
from tests.factories import (
    booking_record,
    custom_line,
    deal_record,
    invoice_record,
    line_record,
    room_record,
)


# ---------------------------------------------------------------------------
# 1. Provenance on the wire
# ---------------------------------------------------------------------------
@pytest.mark.parametrize(
    "source, status, expected",
    [
        ("booking", None, BookingSource()),
        ("trip", "Confirmed", TripSource(status="Confirmed")),
        ("order", "Ready", OrderSource(status="Ready")),
        ("custom", None, CustomSource()),
        ("discount", None, DiscountSource()),
        ("spa", None, UnknownSource(name="spa")),
        (None, None, UnknownSource()),
    ],
)
def test_provenance_from_wire(source: str | None, status: str | None, expected: Provenance) -> None:
    assert provenance_from_wire(source, status) == expected


def test_provenance_to_wire_keeps_status_and_unknown_names() -> None:
    assert provenance_to_wire(TripSource(status="Approved")) == ("trip", "Approved")
    assert provenance_to_wire(BookingSource()) == ("booking", None)
    assert provenance_to_wire(UnknownSource(name="spa")) == ("spa", None)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("meal", LineItemCategory.MEAL),
        ("discount", LineItemCategory.DISCOUNT),
        ("laundry", LineItemCategory.OTHER),
        (None, LineItemCategory.OTHER),
        ("", LineItemCategory.OTHER),
    ],
)
def test_category_parse_falls_back_to_other(value: str | None, expected: LineItemCategory) -> None:
    assert LineItemCategory.parse(value) == expected


def test_discount_line_without_description() -> None:
    line = discount_line(DiscountEntry(Decimal("12.50")))

    assert line.description == "Discount"
    assert line.quantity == 1
    assert line.rate == line.amount == Decimal("-12.50")
    assert line.is_discount


# ---------------------------------------------------------------------------
# 2. Backend records
# ---------------------------------------------------------------------------
def test_room_record_reads_mongo_id_and_monthly_rates() -> None:
    room = RoomRecord.model_validate(
        room_record(rate=90, monthly_rates=[100, None, 120])
    ).to_domain()

    assert room.id == "room-101"
    assert room.room_number == "101"
    assert room.rate == Decimal("90")
    assert room.monthly_rates == (Decimal("100"), None, Decimal("120"))


def test_room_record_keeps_nan_rates_for_the_lookup() -> None:
    room = RoomRecord.model_validate(
        room_record(rate=90, monthly_rates=[float("nan"), float("inf"), 120])
    ).to_domain()

    assert room.monthly_rates[0].is_nan()
    assert resolve_base_rate(room, date(2025, 1, 5)) == Decimal("90")
    assert resolve_base_rate(room, date(2025, 2, 5)) == Decimal("90")
    assert resolve_base_rate(room, date(2025, 3, 5)) == Decimal("120")


def test_room_record_accepts_plain_id() -> None:
    data = room_record()
    data["id"] = data.pop("_id")

    assert RoomRecord.model_validate(data).to_domain().id == "room-101"


def test_deal_record_normalises_room_types_discount_and_dates() -> None:
    deal = DealRecord.model_validate(deal_record(room_type="Deluxe", discount=None)).to_domain()

    assert deal.room_types == ()
    assert deal.discount == Decimal("0")
    assert deal.start_date == date(2025, 1, 1)
    assert deal.end_date == date(2025, 12, 31)
    assert deal.name == "Spring Saver"


def test_deal_record_without_window() -> None:
    deal = DealRecord.model_validate(deal_record(start_date=None, end_date=None)).to_domain()

    assert deal.start_date is None
    assert deal.end_date is None


def test_booking_record_accepts_populated_references() -> None:
    data = booking_record(
        room_id={"_id": "room-202", "roomNumber": "202"},
        guest_id={"_id": "guest-9", "name": "Ada"},
        check_out="2025-01-15",
    )

    booking = BookingRecord.model_validate(data).to_domain()

    assert booking.room_id == "room-202"
    assert booking.guest_id == "guest-9"
    assert booking.check_in == date(2025, 1, 10)
    assert booking.check_out == date(2025, 1, 15)


@pytest.mark.parametrize(
    "qty, amount, quantity, rate",
    [(4, 200, 4, Decimal("50")), (None, 30, 1, Decimal("30")), (0, 30, 1, Decimal("30"))],
    ids=["quantity", "missing_quantity", "zero_quantity"],
)
def test_line_item_rate_is_amount_over_quantity(
    qty: int | None, amount: float, quantity: int, rate: Decimal
) -> None:
    item = LineItemRecord.model_validate(line_record(qty=qty, amount=amount)).to_domain()

    assert item.quantity == quantity
    assert item.rate == rate


@pytest.mark.parametrize("key", ["status", "tripStatus"])
def test_line_item_reads_trip_status_from_either_key(key: str) -> None:
    data = line_record(source="trip", category="service", **{key: "Completed"})

    item = LineItemRecord.model_validate(data).to_domain()

    assert item.provenance == TripSource(status="Completed")
    assert item.category == LineItemCategory.SERVICE


def test_invoice_record_to_domain() -> None:
    discount = line_record(description="Discount", qty=1, amount=-20, category="discount", source="discount")
    data = invoice_record(
        line_items=[line_record(), discount],
        status="paid",
        paid_at="2025-01-20T11:00:00Z",
    )

    invoice = InvoiceRecord.model_validate(data).to_domain()

    assert invoice.id == "inv-1"
    assert invoice.status == InvoiceStatus.PAID
    assert invoice.paid_at is not None
    assert [item.is_discount for item in invoice.items] == [False, True]


def test_submission_payload_shape() -> None:
    submission = InvoiceSubmission(
        booking_id="booking-1",
        status=InvoiceStatus.PENDING,
        custom_items=(custom_line(quantity=2, rate=Decimal("15")),),
        discount=DiscountEntry(Decimal("10.5"), "Loyalty"),
    )

    body = InvoiceSubmissionPayload.from_submission(submission).model_dump(mode="json", by_alias=True)

    assert body == {
        "bookingId": "booking-1",
        "customItems": [
            {"description": "Minibar", "qty": 2, "amount": 30.0, "category": "other", "source": "custom"}
        ],
        "status": "pending",
        "discountItem": {"amount": 10.5, "description": "Loyalty"},
    }


def test_submission_payload_without_discount_sends_null() -> None:
    submission = InvoiceSubmission(booking_id="booking-1", status=InvoiceStatus.PAID)

    body = InvoiceSubmissionPayload.from_submission(submission).model_dump(mode="json", by_alias=True)

    assert body["discountItem"] is None
    assert body["customItems"] == []
    assert "paidAt" not in body


# ---------------------------------------------------------------------------
# 3. Draft wire form
# ---------------------------------------------------------------------------
def _wire_item(description: str, amount: int, category: str, source: str, **extra: str) -> dict:
    return {
        "description": description,
        "quantity": 1,
        "rate": amount,
        "amount": amount,
        "category": category,
        "source": source,
        **extra,
    }


def test_draft_model_folds_discount_line_sent_as_item() -> None:
    model = DraftModel.model_validate(
        {
            "bookingId": "booking-1",
            "items": [
                _wire_item("Room", 200, "room", "booking"),
                _wire_item("Discount: VIP", -15, "discount", "discount"),
            ],
        }
    )

    draft = model.to_domain()

    assert len(draft.items) == 1
    assert draft.discount == DiscountEntry(Decimal("15"), "VIP")


def test_draft_model_round_trip_keeps_trip_status() -> None:
    model = DraftModel.model_validate(
        {
            "bookingId": "booking-1",
            "items": [_wire_item("Tour", 80, "service", "trip", sourceStatus="Approved")],
            "discount": {"amount": 10},
        }
    )

    draft = model.to_domain()

    assert draft.items[0].provenance == TripSource(status="Approved")
    assert draft.discount == DiscountEntry(Decimal("10"), "")
    items = DraftModel.from_domain(draft).model_dump(by_alias=True)["items"]
    assert items[0]["sourceStatus"] == "Approved"
