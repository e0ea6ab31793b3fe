from datetime import datetime, timedelta, timezone

from florist_orders.application.create_order import CreateOrderUseCase, CreateOrderDTO
from florist_orders.application.order_stats import (
    OrderSummaryUseCase, RecentOrderStatsUseCase, summarize_orders
)
from florist_orders.domain.models import OrderStatus, PaymentStatus


async def test_recent_stats_counts_last_day(uow, catalog, order_input):
    create = CreateOrderUseCase(uow, catalog)
    fresh = await create(CreateOrderDTO(**order_input))
    old = await create(CreateOrderDTO(**order_input))
    await create(CreateOrderDTO(**{**order_input, "product_id": "b-lily"}))
    uow.orders.rows[old.id] = uow.orders.rows[old.id].model_copy(
        update={"created_at": datetime.now(timezone.utc) - timedelta(days=3)}
    )

    stats = await RecentOrderStatsUseCase(uow)()
    assert stats.count == 2
    assert stats.last_order_at is not None

    rose_stats = await RecentOrderStatsUseCase(uow)(product_id="b-rose")
    assert rose_stats.count == 1
    assert rose_stats.last_order_at == fresh.created_at


async def test_recent_stats_empty(uow):
    stats = await RecentOrderStatsUseCase(uow)()
    assert stats.count == 0
    assert stats.last_order_at is None


async def test_summary(uow, catalog, order_input):
    create = CreateOrderUseCase(uow, catalog)
    await create(CreateOrderDTO(**order_input))
    await create(CreateOrderDTO(**order_input, down_payment_amount=20000, order_status="ordered"))
    await create(CreateOrderDTO(
        **order_input, down_payment_amount=55000, delivery_at="2020-01-01T10:00:00Z"
    ))

    summary = await OrderSummaryUseCase(uow)()

    assert summary.total == 3
    assert summary.by_status[OrderStatus.INQUIRY] == 2
    assert summary.by_status[OrderStatus.ORDERED] == 1
    assert summary.by_status[OrderStatus.DELIVERED] == 0
    assert summary.by_payment[PaymentStatus.UNPAID] == 1
    assert summary.by_payment[PaymentStatus.PARTIALLY_PAID] == 1
    assert summary.by_payment[PaymentStatus.PAID_IN_FULL] == 1
    assert summary.overdue == 1
    assert summary.total_revenue == 165000
    assert summary.paid_revenue == 75000
    assert summary.pending_revenue == 90000


def test_summarize_empty():
    summary = summarize_orders([], datetime.now(timezone.utc))
    assert summary.total == 0
    assert summary.total_revenue == 0
