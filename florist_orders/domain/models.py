from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


ACTIVITY_LOG_LIMIT = 50


class OrderStatus(str, Enum):
    INQUIRY = "inquiry"
    ORDERED = "ordered"
    PROCESSING = "processing"
    AWAITING_COURIER = "awaiting_courier"
    IN_DELIVERY = "in_delivery"
    DELIVERED = "delivered"


class PaymentStatus(str, Enum):
    UNPAID = "unpaid"
    PARTIALLY_PAID = "partially_paid"
    PAID_IN_FULL = "paid_in_full"


class PaymentMethod(str, Enum):
    NONE = ""
    CASH = "cash"
    BANK_TRANSFER = "bank_transfer"
    EWALLET = "ewallet"
    QRIS = "qris"
    OTHER = "other"


class ActivityKind(str, Enum):
    CREATED = "created"
    STATUS = "status"
    PAYMENT = "payment"
    DELIVERY = "delivery"
    PRODUCT = "product"
    EDIT = "edit"


STATUS_FLOW = list(OrderStatus)


def next_status(status: Optional[OrderStatus]) -> OrderStatus:
    """Следующий этап заказа; на последнем этапе остаётся на месте"""
    current = status or OrderStatus.INQUIRY
    idx = STATUS_FLOW.index(current)
    return STATUS_FLOW[min(idx + 1, len(STATUS_FLOW) - 1)]


class OrderActivity(BaseModel):
    """Запись журнала действий по заказу (не редактируется после записи)"""
    at: datetime
    kind: ActivityKind
    message: str = Field(max_length=240)

    model_config = {"frozen": True}


class Order(BaseModel):
    """Domain Entity — заказ с копиями данных покупателя и букета"""
    id: str
    customer_id: Optional[str] = None

    buyer_name: str
    phone_number: str
    address: str

    product_id: str
    product_name: str
    product_price: int = 0

    order_status: OrderStatus = OrderStatus.INQUIRY
    payment_status: PaymentStatus = PaymentStatus.UNPAID
    payment_method: PaymentMethod = PaymentMethod.NONE

    down_payment_amount: int = 0
    additional_payment: int = 0
    delivery_price: int = 0
    total_amount: int = 0

    delivery_at: Optional[datetime] = None
    activity: list[OrderActivity] = Field(default_factory=list)

    created_at: datetime
    updated_at: datetime

    @property
    def is_linked(self) -> bool:
        return bool(self.customer_id)

    @property
    def paid_amount(self) -> int:
        return self.down_payment_amount + self.additional_payment

    @property
    def remaining_amount(self) -> int:
        return max(0, self.total_amount - self.paid_amount)

    def is_overdue(self, now: datetime) -> bool:
        """Бизнес-правило: просрочен, если время доставки прошло, а заказ не доставлен"""
        if self.delivery_at is None:
            return False
        return self.order_status != OrderStatus.DELIVERED and self.delivery_at < now


class Customer(BaseModel):
    """Value Object — покупатель (только чтение)"""
    id: str
    buyer_name: str = ""
    phone_number: str = ""
    address: str = ""


class Bouquet(BaseModel):
    """Value Object — букет из каталога (только чтение)"""
    id: str
    name: str
    price: float = 0


class ProductSnapshot(BaseModel):
    name: str
    price: int
