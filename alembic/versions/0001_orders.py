"""orders, customers, bouquets

Revision ID: 0001
Revises:
Create Date: 2026-10-19 09:00:00

"""
from alembic import op
import sqlalchemy as sa

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "orders",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("customer_id", sa.String(64), nullable=True),
        sa.Column("buyer_name", sa.String(120), nullable=False),
        sa.Column("phone_number", sa.String(40), nullable=False),
        sa.Column("address", sa.String(500), nullable=False),
        sa.Column("product_id", sa.String(64), nullable=False),
        sa.Column("product_name", sa.String(200), nullable=False),
        sa.Column("product_price", sa.Integer, nullable=False, server_default="0"),
        sa.Column("order_status", sa.String(32), nullable=False, server_default="inquiry"),
        sa.Column("payment_status", sa.String(32), nullable=False, server_default="unpaid"),
        sa.Column("payment_method", sa.String(32), nullable=False, server_default=""),
        sa.Column("down_payment_amount", sa.Integer, nullable=False, server_default="0"),
        sa.Column("additional_payment", sa.Integer, nullable=False, server_default="0"),
        sa.Column("delivery_price", sa.Integer, nullable=False, server_default="0"),
        sa.Column("total_amount", sa.Integer, nullable=False, server_default="0"),
        sa.Column("delivery_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("activity", sa.JSON, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_orders_customer_id", "orders", ["customer_id"])
    op.create_index("ix_orders_product_id", "orders", ["product_id"])
    op.create_index("ix_orders_order_status", "orders", ["order_status"])
    op.create_index("ix_orders_payment_status", "orders", ["payment_status"])
    op.create_index("ix_orders_delivery_at", "orders", ["delivery_at"])
    op.create_index("ix_orders_created_at", "orders", ["created_at"])

    op.create_table(
        "customers",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("buyer_name", sa.String(120), nullable=False),
        sa.Column("phone_number", sa.String(40), nullable=False),
        sa.Column("address", sa.String(500), nullable=False, server_default=""),
    )

    op.create_table(
        "bouquets",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("price", sa.Integer, nullable=False, server_default="0"),
    )


def downgrade() -> None:
    op.drop_table("bouquets")
    op.drop_table("customers")
    op.drop_table("orders")
