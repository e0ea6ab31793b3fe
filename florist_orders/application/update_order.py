import logging
from datetime import datetime, timezone

from florist_orders.application.create_order import (
    CreateOrderDTO, parse_order_status, parse_payment_method
)
from florist_orders.application.interfaces import ProductLookup
from florist_orders.application.normalization import (
    normalize, parse_timestamp,
    ID_MAX, BUYER_NAME_MAX, PHONE_MAX, ADDRESS_MAX, PRODUCT_NAME_MAX,
)
from florist_orders.application.snapshot import SnapshotResolver
from florist_orders.domain.activity import append_activity, diff_activity, edit_entry
from florist_orders.domain.exceptions import (
    InvalidFieldError, InvalidReferenceError, OrderNotFoundError
)
from florist_orders.domain.models import Order
from florist_orders.domain.payment import derive_payment_status, to_amount


logger = logging.getLogger(__name__)

BUYER_FIELDS = (
    ("buyer_name", BUYER_NAME_MAX),
    ("phone_number", PHONE_MAX),
    ("address", ADDRESS_MAX),
)
AMOUNT_FIELDS = ("down_payment_amount", "additional_payment", "delivery_price")


class UpdateOrderDTO(CreateOrderDTO):
    """Частичное обновление: учитываются только переданные поля (model_fields_set)"""


class UpdateOrderUseCase:
    def __init__(self, unit_of_work, catalog: ProductLookup):
        self._uow = unit_of_work
        self._snapshots = SnapshotResolver(catalog)

    async def __call__(self, order_id: str, patch: UpdateOrderDTO) -> Order:
        order_id = normalize(order_id, ID_MAX)
        supplied = patch.model_fields_set
        logger.info(f"Обновление заказа {order_id}, поля: {sorted(supplied)}")

        async with self._uow() as uow:
            existing = await uow.orders.get_by_id(order_id) if order_id else None
            if not existing:
                raise OrderNotFoundError(order_id)

            changes = await self._collect_changes(uow, existing, patch, supplied)

            # Производные поля всегда пересчитываются
            draft = existing.model_copy(update=changes)
            total = to_amount(draft.product_price + draft.delivery_price)
            now = datetime.now(timezone.utc)
            updated = draft.model_copy(update={
                "total_amount": total,
                "payment_status": derive_payment_status(
                    total, draft.down_payment_amount, draft.additional_payment
                ),
                "updated_at": now,
            })

            entries = diff_activity(existing, updated, now) or [edit_entry(now)]
            updated = updated.model_copy(update={
                "activity": append_activity(existing.activity, entries),
            })

            saved = await uow.orders.update(order_id, updated)
            if saved is None:
                raise OrderNotFoundError(order_id)
            await uow.commit()

        logger.info(f"Заказ {order_id} обновлён, записей в журнале: {len(entries)}")
        return saved

    async def _collect_changes(self, uow, existing: Order, patch: UpdateOrderDTO, supplied: set) -> dict:
        """Проверяет патч и собирает новые значения полей; ничего не сохраняет"""
        changes = {}

        # Покупатель: привязка, отвязка или ручное редактирование
        will_be_linked = existing.is_linked
        if "customer_id" in supplied:
            customer_id = normalize(patch.customer_id, ID_MAX)
            will_be_linked = bool(customer_id)
            if not customer_id:
                changes["customer_id"] = None
            else:
                customer = await uow.customers.get_by_id(customer_id)
                if customer is None:
                    raise InvalidReferenceError("customer_id", customer_id)
                changes["customer_id"] = customer_id
                for field, max_len in BUYER_FIELDS:
                    changes[field] = normalize(getattr(customer, field), max_len)

        # Данные привязанного заказа редактируются только после отвязки
        if not will_be_linked:
            for field, max_len in BUYER_FIELDS:
                value = normalize(getattr(patch, field), max_len)
                if value:
                    changes[field] = value

        # Букет
        product_id = normalize(patch.product_id, ID_MAX)
        product_name = normalize(patch.product_name, PRODUCT_NAME_MAX)
        if product_id and product_id != existing.product_id:
            price = to_amount(patch.product_price) if "product_price" in supplied else existing.product_price
            snapshot = await self._snapshots.resolve(
                product_id, product_name or existing.product_name, price
            )
            changes["product_id"] = product_id
            changes["product_name"] = snapshot.name
            changes["product_price"] = snapshot.price
        else:
            if product_name:
                changes["product_name"] = product_name
            if "product_price" in supplied:
                changes["product_price"] = to_amount(patch.product_price)

        # Статус заказа: неизвестная метка игнорируется
        order_status = parse_order_status(patch.order_status)
        if order_status is not None:
            changes["order_status"] = order_status

        if "payment_method" in supplied:
            payment_method = parse_payment_method(patch.payment_method)
            if payment_method is None:
                raise InvalidFieldError("payment_method", patch.payment_method)
            changes["payment_method"] = payment_method

        for field in AMOUNT_FIELDS:
            if field in supplied:
                changes[field] = to_amount(getattr(patch, field))

        if "delivery_at" in supplied:
            changes["delivery_at"] = parse_timestamp(patch.delivery_at)

        return changes
