from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional, List

import pytest

from florist_orders.application.interfaces import OrderRepository, CustomerLookup, ProductLookup
from florist_orders.domain.exceptions import CatalogServiceError
from florist_orders.domain.models import Order, Customer, Bouquet


class InMemoryOrderRepository(OrderRepository):
    def __init__(self):
        self.rows: dict[str, Order] = {}

    async def get_by_id(self, order_id: str) -> Optional[Order]:
        order = self.rows.get(order_id)
        return order.model_copy(deep=True) if order else None

    async def create(self, order: Order) -> Order:
        self.rows[order.id] = order.model_copy(deep=True)
        return order

    async def update(self, order_id: str, order: Order) -> Optional[Order]:
        if order_id not in self.rows:
            return None
        self.rows[order_id] = order.model_copy(deep=True)
        return order

    async def find(self, search: str = "", limit: int = 100) -> List[Order]:
        orders = sorted(self.rows.values(), key=lambda o: o.created_at, reverse=True)
        if search:
            needle = search.lower()
            orders = [
                o for o in orders
                if needle in o.buyer_name.lower() or needle in o.phone_number.lower()
            ]
        return orders[:limit]

    async def delete(self, order_id: str) -> Optional[Order]:
        return self.rows.pop(order_id, None)

    async def count_created_since(self, since: datetime, product_id: Optional[str] = None) -> int:
        return len(self._since(since, product_id))

    async def latest_created_at(self, since: datetime, product_id: Optional[str] = None) -> Optional[datetime]:
        dates = [o.created_at for o in self._since(since, product_id)]
        return max(dates) if dates else None

    def _since(self, since, product_id):
        return [
            o for o in self.rows.values()
            if o.created_at >= since and (product_id is None or o.product_id == product_id)
        ]


class FakeCustomers(CustomerLookup):
    def __init__(self, *customers: Customer):
        self.customers = {c.id: c for c in customers}

    async def get_by_id(self, customer_id: str) -> Optional[Customer]:
        return self.customers.get(customer_id)


class FakeCatalog(ProductLookup):
    def __init__(self, *bouquets: Bouquet):
        self.bouquets = {b.id: b for b in bouquets}
        self.unavailable = False
        self.calls = []

    async def get_by_id(self, product_id: str) -> Optional[Bouquet]:
        self.calls.append(product_id)
        if self.unavailable:
            raise CatalogServiceError("Catalog service не доступен")
        return self.bouquets.get(product_id)


class FakeUnitOfWork:
    def __init__(self, customers: FakeCustomers):
        self.orders = InMemoryOrderRepository()
        self.customers = customers
        self.commits = 0

    @asynccontextmanager
    async def __call__(self):
        yield self

    async def commit(self):
        self.commits += 1

    async def rollback(self):
        pass


@pytest.fixture
def customers():
    return FakeCustomers(
        Customer(id="cust-1", buyer_name="Ani Wijaya", phone_number="0811111111", address="Jl. Melati 1"),
        Customer(id="cust-2", buyer_name="Budi Santoso", phone_number="0822222222", address="Jl. Mawar 2"),
    )


@pytest.fixture
def catalog():
    return FakeCatalog(
        Bouquet(id="b-rose", name="Red Rose Bouquet", price=50000),
        Bouquet(id="b-lily", name="White Lily", price=75000.4),
    )


@pytest.fixture
def uow(customers):
    return FakeUnitOfWork(customers)


@pytest.fixture
def order_input():
    return {
        "buyer_name": "Citra",
        "phone_number": "0833333333",
        "address": "Jl. Anggrek 3",
        "product_id": "b-rose",
        "product_name": "Rose (from UI)",
        "product_price": 1,
        "delivery_price": 5000,
    }
