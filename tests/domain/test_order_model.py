from datetime import datetime, timedelta, timezone

from florist_orders.domain.models import Order, OrderStatus, next_status


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


def test_next_status_follows_flow():
    assert next_status(OrderStatus.INQUIRY) == OrderStatus.ORDERED
    assert next_status(OrderStatus.ORDERED) == OrderStatus.PROCESSING
    assert next_status(OrderStatus.PROCESSING) == OrderStatus.AWAITING_COURIER
    assert next_status(OrderStatus.AWAITING_COURIER) == OrderStatus.IN_DELIVERY
    assert next_status(OrderStatus.IN_DELIVERY) == OrderStatus.DELIVERED


def test_next_status_saturates_at_delivered():
    assert next_status(OrderStatus.DELIVERED) == OrderStatus.DELIVERED


def test_next_status_defaults_to_inquiry_start():
    assert next_status(None) == OrderStatus.ORDERED


def test_paid_and_remaining_amount():
    order = make_order(down_payment_amount=20000, additional_payment=5000)
    assert order.paid_amount == 25000
    assert order.remaining_amount == 30000

    overpaid = make_order(down_payment_amount=60000)
    assert overpaid.remaining_amount == 0


def test_is_overdue():
    past = NOW - timedelta(hours=1)
    assert make_order(delivery_at=past).is_overdue(NOW)
    assert not make_order(delivery_at=past, order_status=OrderStatus.DELIVERED).is_overdue(NOW)
    assert not make_order(delivery_at=NOW + timedelta(hours=1)).is_overdue(NOW)
    assert not make_order().is_overdue(NOW)


def test_is_linked():
    assert make_order(customer_id="cust-1").is_linked
    assert not make_order().is_linked
