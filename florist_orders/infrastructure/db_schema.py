from sqlalchemy import Table, Column, String, Integer, Enum, DateTime, JSON, MetaData

from florist_orders.domain.models import OrderStatus, PaymentStatus, PaymentMethod

metadata = MetaData()


def _values(enum_cls):
    return [member.value for member in enum_cls]


# customer_id и product_id — слабые ссылки, внешних ключей нет
orders_tbl = Table(
    "orders",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("customer_id", String(64), nullable=True, index=True),
    Column("buyer_name", String(120), nullable=False),
    Column("phone_number", String(40), nullable=False),
    Column("address", String(500), nullable=False),
    Column("product_id", String(64), nullable=False, index=True),
    Column("product_name", String(200), nullable=False),
    Column("product_price", Integer, nullable=False, default=0),
    Column(
        "order_status",
        Enum(OrderStatus, values_callable=_values, native_enum=False, length=32),
        nullable=False,
        default=OrderStatus.INQUIRY,
        index=True,
    ),
    Column(
        "payment_status",
        Enum(PaymentStatus, values_callable=_values, native_enum=False, length=32),
        nullable=False,
        default=PaymentStatus.UNPAID,
        index=True,
    ),
    Column(
        "payment_method",
        Enum(PaymentMethod, values_callable=_values, native_enum=False, length=32),
        nullable=False,
        default=PaymentMethod.NONE,
    ),
    Column("down_payment_amount", Integer, nullable=False, default=0),
    Column("additional_payment", Integer, nullable=False, default=0),
    Column("delivery_price", Integer, nullable=False, default=0),
    Column("total_amount", Integer, nullable=False, default=0),
    Column("delivery_at", DateTime(timezone=True), nullable=True, index=True),
    Column("activity", JSON, nullable=False, default=list),
    Column("created_at", DateTime(timezone=True), nullable=False, index=True),
    Column("updated_at", DateTime(timezone=True), nullable=False),
)


customers_tbl = Table(
    "customers",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("buyer_name", String(120), nullable=False),
    Column("phone_number", String(40), nullable=False),
    Column("address", String(500), nullable=False, default=""),
)


bouquets_tbl = Table(
    "bouquets",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("name", String(200), nullable=False),
    Column("price", Integer, nullable=False, default=0),
)
