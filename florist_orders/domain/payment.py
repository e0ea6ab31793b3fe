import math

from florist_orders.domain.models import PaymentStatus


def to_amount(value) -> int:
    """Приводит сумму к неотрицательному целому (округление half-up).

    Строки парсятся как числа, всё нечисловое и нефинитное становится 0.
    """
    if isinstance(value, bool):
        return 0
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return 0
    if not isinstance(value, (int, float)):
        return 0
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    return max(0, math.floor(value + 0.5))


def derive_payment_status(total, down_payment, additional_payment) -> PaymentStatus:
    """Статус оплаты по сумме заказа и внесённым платежам"""
    total = to_amount(total)
    paid = to_amount(down_payment) + to_amount(additional_payment)

    if total <= 0:
        return PaymentStatus.PAID_IN_FULL
    if paid <= 0:
        return PaymentStatus.UNPAID
    if paid >= total:
        return PaymentStatus.PAID_IN_FULL
    return PaymentStatus.PARTIALLY_PAID
