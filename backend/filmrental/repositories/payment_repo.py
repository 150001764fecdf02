"""Payment Repository — append-only ledger access (no update, no delete)."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from filmrental.core.domain_types import CustomerId, PaymentId, RentalId
from filmrental.models.payment import Payment


class PaymentRepo:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, payment_id: PaymentId) -> Payment | None:
        return await self.db.get(Payment, payment_id)

    async def find_by_customer(self, customer_id: CustomerId) -> list[Payment]:
        result = await self.db.execute(
            select(Payment)
            .where(Payment.customer_id == customer_id)
            .order_by(Payment.payment_date.desc())
        )
        return list(result.scalars().all())

    async def count_by_rental(self, rental_id: RentalId) -> int:
        result = await self.db.execute(
            select(func.count()).select_from(Payment)
            .where(Payment.rental_id == rental_id)
        )
        return result.scalar_one()

    async def find_by_date_range(
        self, start: datetime, end: datetime,
    ) -> list[Payment]:
        result = await self.db.execute(
            select(Payment)
            .where(Payment.payment_date.between(start, end))
            .order_by(Payment.payment_date.desc())
        )
        return list(result.scalars().all())

    async def total_by_customer(self, customer_id: CustomerId) -> Decimal:
        result = await self.db.execute(
            select(func.coalesce(func.sum(Payment.amount), 0))
            .where(Payment.customer_id == customer_id)
        )
        return Decimal(str(result.scalar_one()))

    async def add(self, payment: Payment) -> Payment:
        self.db.add(payment)
        await self.db.flush()
        return payment
