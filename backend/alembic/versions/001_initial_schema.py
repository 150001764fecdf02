"""Initial schema — store, film, inventory, customer, staff, rental, payment.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "store",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("manager_staff_id", UUID(as_uuid=True), nullable=True),
    )

    op.create_table(
        "film",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("release_year", sa.Integer, nullable=True),
        sa.Column("rental_duration", sa.Integer, nullable=False, server_default="3"),
        sa.Column("rental_rate", sa.Numeric(5, 2), nullable=False, server_default="4.99"),
        sa.Column("replacement_cost", sa.Numeric(5, 2), nullable=False, server_default="19.99"),
        sa.Column("rating", sa.String(10), nullable=True),
        sa.CheckConstraint("rental_duration >= 1", name="ck_film_rental_duration"),
    )

    op.create_table(
        "inventory",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("film_id", UUID(as_uuid=True), sa.ForeignKey("film.id"), nullable=False),
        sa.Column("store_id", UUID(as_uuid=True), sa.ForeignKey("store.id"), nullable=False),
        sa.Column("version", sa.Integer, nullable=False, server_default="0"),
    )
    op.create_index("ix_inventory_film_id", "inventory", ["film_id"])
    op.create_index("ix_inventory_store_id", "inventory", ["store_id"])

    op.create_table(
        "customer",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("first_name", sa.String(45), nullable=False),
        sa.Column("last_name", sa.String(45), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("store_id", UUID(as_uuid=True), sa.ForeignKey("store.id"), nullable=False),
        sa.Column("active", sa.Boolean, nullable=False, server_default="true"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "staff",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("first_name", sa.String(45), nullable=False),
        sa.Column("last_name", sa.String(45), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("username", sa.String(16), nullable=False, unique=True),
        sa.Column("store_id", UUID(as_uuid=True), sa.ForeignKey("store.id"), nullable=False),
        sa.Column("active", sa.Boolean, nullable=False, server_default="true"),
    )
    op.create_index("ix_staff_store_id", "staff", ["store_id"])

    op.create_table(
        "rental",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("rental_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("return_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("inventory_id", UUID(as_uuid=True), sa.ForeignKey("inventory.id"), nullable=False),
        sa.Column("customer_id", UUID(as_uuid=True), sa.ForeignKey("customer.id"), nullable=False),
        sa.Column("staff_id", UUID(as_uuid=True), sa.ForeignKey("staff.id"), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        sa.CheckConstraint("status IN ('active', 'returned')", name="ck_rental_status"),
    )
    op.create_index("ix_rental_return_date", "rental", ["return_date"])
    op.create_index("ix_rental_inventory_id", "rental", ["inventory_id"])
    op.create_index("ix_rental_customer_id", "rental", ["customer_id"])

    op.create_table(
        "payment",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("payment_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("rental_id", UUID(as_uuid=True), sa.ForeignKey("rental.id"), nullable=False),
        sa.Column("customer_id", UUID(as_uuid=True), sa.ForeignKey("customer.id"), nullable=False),
        sa.Column("staff_id", UUID(as_uuid=True), sa.ForeignKey("staff.id"), nullable=False),
    )
    op.create_index("ix_payment_payment_date", "payment", ["payment_date"])
    op.create_index("ix_payment_rental_id", "payment", ["rental_id"])
    op.create_index("ix_payment_customer_id", "payment", ["customer_id"])


def downgrade() -> None:
    op.drop_table("payment")
    op.drop_table("rental")
    op.drop_table("staff")
    op.drop_table("customer")
    op.drop_table("inventory")
    op.drop_table("film")
    op.drop_table("store")
