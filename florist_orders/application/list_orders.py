import logging
from typing import List, Optional

from florist_orders.application.normalization import clamp_limit, normalize, SEARCH_MAX
from florist_orders.domain.models import Order


logger = logging.getLogger(__name__)


class ListOrdersUseCase:
    """Последние заказы, новые первыми, с поиском по имени или телефону"""

    def __init__(self, unit_of_work):
        self._uow = unit_of_work

    async def __call__(self, search: Optional[str] = None, limit=None) -> List[Order]:
        search = normalize(search, SEARCH_MAX)
        limit = clamp_limit(limit)

        async with self._uow() as uow:
            orders = await uow.orders.find(search=search, limit=limit)

        logger.info(f"{len(orders)} заказов загружено (поиск={search!r}, limit={limit})")
        return orders
