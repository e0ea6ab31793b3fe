from datetime import datetime, timedelta, timezone

from florist_orders.domain.activity import (
    append_activity, created_entry, diff_activity, edit_entry, humanize
)
from florist_orders.domain.models import (
    ActivityKind, Order, OrderActivity, OrderStatus, PaymentMethod, PaymentStatus
)


NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def make_order(**overrides) -> Order:
    data = dict(
        id="o-1",
        buyer_name="Ani",
        phone_number="0811",
        address="Jl. Melati 1",
        product_id="b-rose",
        product_name="Red Rose Bouquet",
        product_price=50000,
        delivery_price=5000,
        total_amount=55000,
        created_at=NOW,
        updated_at=NOW,
    )
    data.update(overrides)
    return Order(**data)


def test_humanize_renders_separators_as_spaces():
    assert humanize(OrderStatus.AWAITING_COURIER) == "awaiting courier"
    assert humanize(PaymentStatus.PAID_IN_FULL) == "paid in full"
    assert humanize("in-delivery") == "in delivery"
    assert humanize(PaymentMethod.NONE) == "—"


def test_created_entry_summarizes_status_and_payment():
    entry = created_entry(make_order(), NOW)
    assert entry.kind == ActivityKind.CREATED
    assert "inquiry" in entry.message
    assert "unpaid" in entry.message


def test_no_changes_produce_no_entries():
    order = make_order()
    assert diff_activity(order, order.model_copy(), NOW) == []


def test_status_change_entry():
    before = make_order()
    after = before.model_copy(update={"order_status": OrderStatus.AWAITING_COURIER})
    entries = diff_activity(before, after, NOW)
    assert [e.kind for e in entries] == [ActivityKind.STATUS]
    assert "inquiry → awaiting courier" in entries[0].message
    assert "_" not in entries[0].message


def test_payment_status_and_amount_change_coalesce_into_one_entry():
    before = make_order()
    after = before.model_copy(update={
        "down_payment_amount": 55000,
        "payment_status": PaymentStatus.PAID_IN_FULL,
    })
    entries = diff_activity(before, after, NOW)
    assert [e.kind for e in entries] == [ActivityKind.PAYMENT]
    assert "unpaid → paid in full" in entries[0].message


def test_amount_change_without_status_change():
    before = make_order()
    after = before.model_copy(update={"delivery_price": 7000, "total_amount": 57000})
    entries = diff_activity(before, after, NOW)
    assert [e.kind for e in entries] == [ActivityKind.PAYMENT]


def test_fixed_comparison_order():
    before = make_order()
    after = before.model_copy(update={
        "order_status": OrderStatus.ORDERED,
        "payment_method": PaymentMethod.BANK_TRANSFER,
        "delivery_at": NOW + timedelta(days=1),
        "product_id": "b-lily",
        "product_name": "White Lily",
    })
    kinds = [e.kind for e in diff_activity(before, after, NOW)]
    assert kinds == [
        ActivityKind.STATUS,
        ActivityKind.PAYMENT,
        ActivityKind.DELIVERY,
        ActivityKind.PRODUCT,
    ]


def test_payment_method_entry_renders_empty_as_dash():
    before = make_order()
    after = before.model_copy(update={"payment_method": PaymentMethod.BANK_TRANSFER})
    (entry,) = diff_activity(before, after, NOW)
    assert entry.message.endswith("— → bank transfer")


def test_delivery_cleared_entry():
    before = make_order(delivery_at=NOW)
    after = before.model_copy(update={"delivery_at": None})
    (entry,) = diff_activity(before, after, NOW)
    assert entry.kind == ActivityKind.DELIVERY
    assert "удалено" in entry.message


def test_append_activity_caps_to_most_recent():
    log = [edit_entry(NOW + timedelta(seconds=i)) for i in range(50)]
    new = OrderActivity(at=NOW + timedelta(minutes=5), kind=ActivityKind.STATUS, message="last")
    capped = append_activity(log, [new])
    assert len(capped) == 50
    assert capped[-1] == new
    assert capped[0] == log[1]


def test_append_activity_does_not_mutate_input():
    log = [edit_entry(NOW)]
    append_activity(log, [edit_entry(NOW)])
    assert len(log) == 1
