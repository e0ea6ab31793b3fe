from datetime import datetime
from enum import Enum
from typing import Optional

from florist_orders.domain.models import (
    ACTIVITY_LOG_LIMIT, ActivityKind, Order, OrderActivity
)


MONEY_FIELDS = ("product_price", "down_payment_amount", "additional_payment", "delivery_price")


def humanize(value: Optional[Enum | str]) -> str:
    """Метка для журнала: подчёркивания заменяются пробелами, пустое значение — тире"""
    if isinstance(value, Enum):
        value = value.value
    if not value:
        return "—"
    return value.replace("_", " ").replace("-", " ")


def created_entry(order: Order, now: datetime) -> OrderActivity:
    return OrderActivity(
        at=now,
        kind=ActivityKind.CREATED,
        message=(
            f"Заказ создан • статус: {humanize(order.order_status)}"
            f" • оплата: {humanize(order.payment_status)}"
        ),
    )


def edit_entry(now: datetime) -> OrderActivity:
    return OrderActivity(at=now, kind=ActivityKind.EDIT, message="Заказ обновлён")


def diff_activity(before: Order, after: Order, now: datetime) -> list[OrderActivity]:
    """Записи журнала для изменившихся отслеживаемых полей.

    Порядок сравнения фиксирован: статус заказа, оплата (статус и суммы
    одной записью), способ оплаты, время доставки, букет.
    """
    entries = []

    def push(kind: ActivityKind, message: str):
        entries.append(OrderActivity(at=now, kind=kind, message=message))

    if before.order_status != after.order_status:
        push(
            ActivityKind.STATUS,
            f"Статус заказа: {humanize(before.order_status)} → {humanize(after.order_status)}",
        )

    payment_parts = []
    if before.payment_status != after.payment_status:
        payment_parts.append(
            f"Статус оплаты: {humanize(before.payment_status)} → {humanize(after.payment_status)}"
        )
    if any(getattr(before, f) != getattr(after, f) for f in MONEY_FIELDS):
        payment_parts.append("суммы оплаты/доставки обновлены")
    if payment_parts:
        push(ActivityKind.PAYMENT, " • ".join(payment_parts))

    if before.payment_method != after.payment_method:
        push(
            ActivityKind.PAYMENT,
            f"Способ оплаты: {humanize(before.payment_method)} → {humanize(after.payment_method)}",
        )

    if before.delivery_at != after.delivery_at:
        push(
            ActivityKind.DELIVERY,
            "Время доставки обновлено" if after.delivery_at else "Время доставки удалено",
        )

    if before.product_id != after.product_id:
        push(ActivityKind.PRODUCT, f"Букет изменён: {after.product_name}")

    return entries


def append_activity(
    log: list[OrderActivity],
    entries: list[OrderActivity],
    limit: int = ACTIVITY_LOG_LIMIT,
) -> list[OrderActivity]:
    """Добавляет записи и оставляет только последние `limit`"""
    return (list(log) + list(entries))[-limit:]
