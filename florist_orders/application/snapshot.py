import logging

from florist_orders.application.interfaces import ProductLookup
from florist_orders.application.normalization import normalize, PRODUCT_NAME_MAX
from florist_orders.domain.models import ProductSnapshot
from florist_orders.domain.payment import to_amount


logger = logging.getLogger(__name__)


class SnapshotResolver:
    """Снимок названия и цены букета на момент привязки к заказу.

    Ошибки каталога наружу не пробрасываются: при любой неудаче
    возвращаются значения, присланные клиентом, чтобы заказ можно было
    оформить даже для удалённого букета или при недоступном каталоге.
    """

    def __init__(self, catalog: ProductLookup):
        self._catalog = catalog

    async def resolve(self, product_id: str, fallback_name: str, fallback_price) -> ProductSnapshot:
        fallback = ProductSnapshot(name=fallback_name, price=to_amount(fallback_price))
        if not product_id:
            return fallback

        try:
            bouquet = await self._catalog.get_by_id(product_id)
        except Exception as e:
            logger.warning(f"Каталог недоступен для букета {product_id}, берём данные из запроса: {e}")
            return fallback

        if bouquet is None or not isinstance(bouquet.name, str):
            logger.warning(f"Букет {product_id} не найден в каталоге, берём данные из запроса")
            return fallback

        return ProductSnapshot(
            name=normalize(bouquet.name, PRODUCT_NAME_MAX),
            price=to_amount(bouquet.price),
        )
