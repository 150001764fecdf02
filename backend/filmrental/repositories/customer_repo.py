"""Customer Repository."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from filmrental.core.domain_types import CustomerId
from filmrental.models.customer import Customer


class CustomerRepo:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, customer_id: CustomerId) -> Customer | None:
        return await self.db.get(Customer, customer_id)

    async def get_by_email(self, email: str) -> Customer | None:
        result = await self.db.execute(
            select(Customer).where(Customer.email == email),
        )
        return result.scalar_one_or_none()

    async def add(self, customer: Customer) -> Customer:
        self.db.add(customer)
        await self.db.flush()
        return customer
