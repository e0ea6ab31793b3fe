import httpx
import logging
from typing import Optional

from florist_orders.application.interfaces import ProductLookup
from florist_orders.domain.models import Bouquet
from florist_orders.domain.exceptions import CatalogServiceError

logger = logging.getLogger(__name__)


class HTTPCatalogClient(ProductLookup):
    """Букеты из внешнего сервиса каталога"""

    def __init__(self, base_url: str, api_token: str, timeout: float = 5.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._base_url = base_url.rstrip("/")
        self._api_token = api_token
        self._timeout = timeout
        self._transport = transport

    async def get_by_id(self, product_id: str) -> Optional[Bouquet]:
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.get(
                    f"{self._base_url}/api/bouquets/{product_id}",
                    headers={"X-API-Key": self._api_token},
                    timeout=self._timeout
                )

                if response.status_code == 200:
                    data = response.json()
                    return Bouquet(
                        id=str(data.get("id", data.get("_id", product_id))),
                        name=data.get("name"),
                        price=data.get("price") or 0,
                    )
                elif response.status_code == 404:
                    return None
                else:
                    raise CatalogServiceError(f"Catalog service ошибка: {response.status_code}")

        except httpx.RequestError as e:
            logger.error(f"Catalog service ошибка подключения: {e}")
            raise CatalogServiceError(f"Catalog service не доступен: {str(e)}")
