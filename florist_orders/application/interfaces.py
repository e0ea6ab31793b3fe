from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, List
from florist_orders.domain.models import Order, Customer, Bouquet


class OrderRepository(ABC):
    @abstractmethod
    async def get_by_id(self, order_id: str) -> Optional[Order]:
        pass

    @abstractmethod
    async def create(self, order: Order) -> Order:
        pass

    @abstractmethod
    async def update(self, order_id: str, order: Order) -> Optional[Order]:
        pass

    @abstractmethod
    async def find(self, search: str = "", limit: int = 100) -> List[Order]:
        """Заказы по подстроке имени/телефона, новые первыми"""
        pass

    @abstractmethod
    async def delete(self, order_id: str) -> Optional[Order]:
        pass

    @abstractmethod
    async def count_created_since(self, since: datetime, product_id: Optional[str] = None) -> int:
        pass

    @abstractmethod
    async def latest_created_at(self, since: datetime, product_id: Optional[str] = None) -> Optional[datetime]:
        pass


class CustomerLookup(ABC):
    @abstractmethod
    async def get_by_id(self, customer_id: str) -> Optional[Customer]:
        pass


class ProductLookup(ABC):
    @abstractmethod
    async def get_by_id(self, product_id: str) -> Optional[Bouquet]:
        pass

