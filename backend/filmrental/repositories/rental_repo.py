"""Rental Repository — rental rows and the time-based listings.

Invariants:
    - find_active: status active and return_date > now
    - find_overdue: status active and return_date <= now, the same boundary
      classify_rental uses for the overdue state
"""

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from filmrental.core.domain_types import CustomerId, RentalId, RentalStatus
from filmrental.models.rental import Rental


class RentalRepo:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, rental_id: RentalId) -> Rental | None:
        return await self.db.get(Rental, rental_id)

    async def list_all(self) -> list[Rental]:
        result = await self.db.execute(
            select(Rental).order_by(Rental.rental_date.desc()),
        )
        return list(result.scalars().all())

    async def find_by_customer(self, customer_id: CustomerId) -> list[Rental]:
        result = await self.db.execute(
            select(Rental)
            .where(Rental.customer_id == customer_id)
            .order_by(Rental.rental_date.desc())
        )
        return list(result.scalars().all())

    async def find_active(self, now: datetime) -> list[Rental]:
        result = await self.db.execute(
            select(Rental)
            .where(Rental.status == RentalStatus.ACTIVE.value)
            .where(Rental.return_date > now)
            .order_by(Rental.rental_date.desc())
        )
        return list(result.scalars().all())

    async def find_overdue(self, now: datetime) -> list[Rental]:
        result = await self.db.execute(
            select(Rental)
            .where(Rental.status == RentalStatus.ACTIVE.value)
            .where(Rental.return_date <= now)
            .order_by(Rental.return_date.asc())
        )
        return list(result.scalars().all())

    async def add(self, rental: Rental) -> Rental:
        self.db.add(rental)
        await self.db.flush()
        return rental

    async def delete(self, rental: Rental) -> None:
        await self.db.delete(rental)
        await self.db.flush()
