import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from pydantic import BaseModel

from florist_orders.application.normalization import normalize, ID_MAX, MAX_LIST_LIMIT
from florist_orders.domain.models import Order, OrderStatus, PaymentStatus


logger = logging.getLogger(__name__)

RECENT_WINDOW = timedelta(days=1)


class RecentOrderStats(BaseModel):
    count: int
    last_order_at: Optional[datetime] = None


class OrderSummary(BaseModel):
    total: int
    by_status: dict[OrderStatus, int]
    by_payment: dict[PaymentStatus, int]
    overdue: int
    total_revenue: int
    paid_revenue: int
    pending_revenue: int


def summarize_orders(orders: list[Order], now: datetime) -> OrderSummary:
    by_status = {status: 0 for status in OrderStatus}
    by_payment = {status: 0 for status in PaymentStatus}
    for order in orders:
        by_status[order.order_status] += 1
        by_payment[order.payment_status] += 1

    total_revenue = sum(o.total_amount for o in orders)
    paid_revenue = sum(o.paid_amount for o in orders)
    return OrderSummary(
        total=len(orders),
        by_status=by_status,
        by_payment=by_payment,
        overdue=sum(1 for o in orders if o.is_overdue(now)),
        total_revenue=total_revenue,
        paid_revenue=paid_revenue,
        pending_revenue=total_revenue - paid_revenue,
    )


class RecentOrderStatsUseCase:
    """Количество заказов за последние сутки и время последнего (для витрины)"""

    def __init__(self, unit_of_work):
        self._uow = unit_of_work

    async def __call__(self, product_id: Optional[str] = None) -> RecentOrderStats:
        product_id = normalize(product_id, ID_MAX) or None
        since = datetime.now(timezone.utc) - RECENT_WINDOW

        async with self._uow() as uow:
            count = await uow.orders.count_created_since(since, product_id)
            last_order_at = await uow.orders.latest_created_at(since, product_id)

        return RecentOrderStats(count=count, last_order_at=last_order_at)


class OrderSummaryUseCase:
    def __init__(self, unit_of_work):
        self._uow = unit_of_work

    async def __call__(self) -> OrderSummary:
        async with self._uow() as uow:
            orders = await uow.orders.find(limit=MAX_LIST_LIMIT)

        summary = summarize_orders(orders, datetime.now(timezone.utc))
        logger.info(f"Сводка по {summary.total} заказам, просрочено: {summary.overdue}")
        return summary
