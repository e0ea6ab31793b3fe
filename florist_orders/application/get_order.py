from florist_orders.application.normalization import normalize, ID_MAX
from florist_orders.domain.models import Order
from florist_orders.domain.exceptions import OrderNotFoundError


class GetOrderUseCase:
    def __init__(self, unit_of_work):
        self._uow = unit_of_work

    async def __call__(self, order_id: str) -> Order:
        order_id = normalize(order_id, ID_MAX)
        async with self._uow() as uow:
            order = await uow.orders.get_by_id(order_id) if order_id else None
            if not order:
                raise OrderNotFoundError(order_id)
            return order
