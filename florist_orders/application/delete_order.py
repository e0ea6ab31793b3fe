import logging

from florist_orders.application.normalization import normalize, ID_MAX
from florist_orders.domain.models import Order
from florist_orders.domain.exceptions import OrderNotFoundError


logger = logging.getLogger(__name__)


class DeleteOrderUseCase:
    """Полное удаление заказа вместе с журналом действий"""

    def __init__(self, unit_of_work):
        self._uow = unit_of_work

    async def __call__(self, order_id: str) -> Order:
        order_id = normalize(order_id, ID_MAX)
        async with self._uow() as uow:
            deleted = await uow.orders.delete(order_id) if order_id else None
            if deleted is None:
                raise OrderNotFoundError(order_id)
            await uow.commit()

        logger.info(f"Заказ удалён: {order_id}")
        return deleted
