from datetime import datetime, timezone
from typing import Optional, List
from sqlalchemy import select, insert, update, delete, func, or_
from sqlalchemy.ext.asyncio import AsyncSession

from florist_orders.application.interfaces import OrderRepository, CustomerLookup, ProductLookup
from florist_orders.application.normalization import escape_like
from florist_orders.domain.models import Order, Customer, Bouquet
from florist_orders.infrastructure.db_schema import orders_tbl, customers_tbl, bouquets_tbl


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite отдаёт время без часового пояса
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SQLAlchemyOrderRepository(OrderRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, order_id: str) -> Optional[Order]:
        result = await self._session.execute(
            select(orders_tbl).where(orders_tbl.c.id == order_id)
        )
        row = result.fetchone()
        return self._to_domain(row) if row else None

    async def create(self, order: Order) -> Order:
        await self._session.execute(insert(orders_tbl).values(**self._to_row(order)))
        return order

    async def update(self, order_id: str, order: Order) -> Optional[Order]:
        values = self._to_row(order)
        values.pop("id")
        values.pop("created_at")
        result = await self._session.execute(
            update(orders_tbl).where(orders_tbl.c.id == order_id).values(**values)
        )
        if result.rowcount == 0:
            return None
        return order

    async def find(self, search: str = "", limit: int = 100) -> List[Order]:
        stmt = select(orders_tbl)
        if search:
            pattern = f"%{escape_like(search)}%"
            stmt = stmt.where(
                or_(
                    orders_tbl.c.buyer_name.ilike(pattern, escape="\\"),
                    orders_tbl.c.phone_number.ilike(pattern, escape="\\"),
                )
            )
        result = await self._session.execute(
            stmt.order_by(orders_tbl.c.created_at.desc()).limit(limit)
        )
        return [self._to_domain(row) for row in result.fetchall()]

    async def delete(self, order_id: str) -> Optional[Order]:
        existing = await self.get_by_id(order_id)
        if existing is None:
            return None
        await self._session.execute(delete(orders_tbl).where(orders_tbl.c.id == order_id))
        return existing

    async def count_created_since(self, since: datetime, product_id: Optional[str] = None) -> int:
        stmt = select(func.count()).select_from(orders_tbl).where(orders_tbl.c.created_at >= since)
        if product_id:
            stmt = stmt.where(orders_tbl.c.product_id == product_id)
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def latest_created_at(self, since: datetime, product_id: Optional[str] = None) -> Optional[datetime]:
        stmt = select(func.max(orders_tbl.c.created_at)).where(orders_tbl.c.created_at >= since)
        if product_id:
            stmt = stmt.where(orders_tbl.c.product_id == product_id)
        result = await self._session.execute(stmt)
        return _as_utc(result.scalar_one_or_none())

    def _to_row(self, order: Order) -> dict:
        """Трансформация Domain → DB"""
        row = order.model_dump(exclude={"activity"})
        row["activity"] = [entry.model_dump(mode="json") for entry in order.activity]
        return row

    def _to_domain(self, row) -> Order:
        """Трансформация DB → Domain"""
        data = dict(row._mapping)
        for key in ("delivery_at", "created_at", "updated_at"):
            data[key] = _as_utc(data[key])
        data["activity"] = data.get("activity") or []
        return Order.model_validate(data)


class SQLAlchemyCustomerRepository(CustomerLookup):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, customer_id: str) -> Optional[Customer]:
        result = await self._session.execute(
            select(customers_tbl).where(customers_tbl.c.id == customer_id)
        )
        row = result.fetchone()
        return Customer.model_validate(dict(row._mapping)) if row else None


class SQLAlchemyBouquetRepository(ProductLookup):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, product_id: str) -> Optional[Bouquet]:
        result = await self._session.execute(
            select(bouquets_tbl).where(bouquets_tbl.c.id == product_id)
        )
        row = result.fetchone()
        return Bouquet.model_validate(dict(row._mapping)) if row else None
