import logging
import uuid
from datetime import datetime, timezone
from typing import Optional, Union
from pydantic import BaseModel

from florist_orders.application.interfaces import ProductLookup
from florist_orders.application.normalization import (
    normalize, parse_timestamp,
    ID_MAX, BUYER_NAME_MAX, PHONE_MAX, ADDRESS_MAX, PRODUCT_NAME_MAX, LABEL_MAX,
)
from florist_orders.application.snapshot import SnapshotResolver
from florist_orders.domain.activity import created_entry
from florist_orders.domain.exceptions import InvalidReferenceError, MissingFieldError
from florist_orders.domain.models import Order, OrderStatus, PaymentMethod
from florist_orders.domain.payment import derive_payment_status, to_amount


logger = logging.getLogger(__name__)

Amount = Union[int, float, str, None]


class CreateOrderDTO(BaseModel):
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


def parse_order_status(raw) -> Optional[OrderStatus]:
    try:
        return OrderStatus(normalize(raw, LABEL_MAX))
    except ValueError:
        return None


def parse_payment_method(raw) -> Optional[PaymentMethod]:
    try:
        return PaymentMethod(normalize(raw, LABEL_MAX))
    except ValueError:
        return None


class CreateOrderUseCase:
    def __init__(self, unit_of_work, catalog: ProductLookup):
        self._uow = unit_of_work
        self._snapshots = SnapshotResolver(catalog)

    async def __call__(self, data: CreateOrderDTO) -> Order:
        customer_id = normalize(data.customer_id, ID_MAX)
        product_id = normalize(data.product_id, ID_MAX)
        logger.info(f"Создание заказа: customer={customer_id or '-'}, букет {product_id or '-'}")

        async with self._uow() as uow:
            buyer_name = normalize(data.buyer_name, BUYER_NAME_MAX)
            phone_number = normalize(data.phone_number, PHONE_MAX)
            address = normalize(data.address, ADDRESS_MAX)

            # 1. Привязка к покупателю
            if customer_id:
                customer = await uow.customers.get_by_id(customer_id)
                if customer is None:
                    raise InvalidReferenceError("customer_id", customer_id)
                buyer_name = normalize(customer.buyer_name, BUYER_NAME_MAX)
                phone_number = normalize(customer.phone_number, PHONE_MAX)
                address = normalize(customer.address, ADDRESS_MAX)

            # 2. Снимок букета
            snapshot = await self._snapshots.resolve(
                product_id,
                normalize(data.product_name, PRODUCT_NAME_MAX),
                data.product_price,
            )

            # 3. Проверка обязательных полей
            required = {
                "buyer_name": buyer_name,
                "phone_number": phone_number,
                "address": address,
                "product_id": product_id,
                "product_name": snapshot.name,
            }
            for field, value in required.items():
                if not value:
                    raise MissingFieldError(field)

            delivery_at = parse_timestamp(data.delivery_at)

            # 4. Расчет суммы и статуса оплаты
            down_payment = to_amount(data.down_payment_amount)
            additional = to_amount(data.additional_payment)
            delivery_price = to_amount(data.delivery_price)
            total = to_amount(snapshot.price + delivery_price)

            now = datetime.now(timezone.utc)
            order = Order(
                id=str(uuid.uuid4()),
                customer_id=customer_id or None,
                buyer_name=buyer_name,
                phone_number=phone_number,
                address=address,
                product_id=product_id,
                product_name=snapshot.name,
                product_price=snapshot.price,
                order_status=parse_order_status(data.order_status) or OrderStatus.INQUIRY,
                payment_status=derive_payment_status(total, down_payment, additional),
                payment_method=parse_payment_method(data.payment_method) or PaymentMethod.NONE,
                down_payment_amount=down_payment,
                additional_payment=additional,
                delivery_price=delivery_price,
                total_amount=total,
                delivery_at=delivery_at,
                created_at=now,
                updated_at=now,
            )
            order.activity.append(created_entry(order, now))

            # 5. Сохранение
            created = await uow.orders.create(order)
            await uow.commit()

        logger.info(f"Заказ создан: {created.id}, сумма {created.total_amount}, оплата {created.payment_status.value}")
        return created
