from pydantic import BaseModel
from datetime import datetime
from typing import Optional, Union

from florist_orders.domain.models import (
    ActivityKind, Order, OrderStatus, PaymentMethod, PaymentStatus
)

Amount = Union[int, float, str, None]


class CreateOrderRequest(BaseModel):
    customer_id: Optional[str] = None
    buyer_name: Optional[str] = None
    phone_number: Optional[str] = None
    address: Optional[str] = None
    product_id: Optional[str] = None
    product_name: Optional[str] = None
    product_price: Amount = None
    order_status: Optional[str] = None
    payment_method: Optional[str] = None
    down_payment_amount: Amount = None
    additional_payment: Amount = None
    delivery_price: Amount = None
    delivery_at: Optional[str] = None


class UpdateOrderRequest(CreateOrderRequest):
    """Передаются только изменяемые поля; customer_id="" отвязывает покупателя"""


class ActivityResponse(BaseModel):
    at: datetime
    kind: ActivityKind
    message: str


class OrderResponse(BaseModel):
    id: str
    customer_id: Optional[str] = None
    buyer_name: str
    phone_number: str
    address: str
    product_id: str
    product_name: str
    product_price: int
    order_status: OrderStatus
    payment_status: PaymentStatus
    payment_method: PaymentMethod
    down_payment_amount: int
    additional_payment: int
    delivery_price: int
    total_amount: int
    paid_amount: int
    remaining_amount: int
    delivery_at: Optional[datetime] = None
    activity: list[ActivityResponse]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, order: Order):
        return cls(
            **order.model_dump(exclude={"activity"}),
            activity=[ActivityResponse(**entry.model_dump()) for entry in order.activity],
            paid_amount=order.paid_amount,
            remaining_amount=order.remaining_amount,
        )


class ErrorDetail(BaseModel):
    message: str
    code: str
    field: Optional[str] = None


class ErrorResponse(BaseModel):
    detail: ErrorDetail
