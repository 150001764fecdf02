"""Staff Repository."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from filmrental.core.domain_types import StaffId, StoreId
from filmrental.models.staff import Staff


class StaffRepo:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, staff_id: StaffId) -> Staff | None:
        return await self.db.get(Staff, staff_id)

    async def get_by_email(self, email: str) -> Staff | None:
        result = await self.db.execute(
            select(Staff).where(Staff.email == email),
        )
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> Staff | None:
        result = await self.db.execute(
            select(Staff).where(Staff.username == username),
        )
        return result.scalar_one_or_none()

    async def find_by_store(self, store_id: StoreId) -> list[Staff]:
        result = await self.db.execute(
            select(Staff)
            .where(Staff.store_id == store_id)
            .order_by(Staff.last_name, Staff.first_name)
        )
        return list(result.scalars().all())

    async def find_active(self) -> list[Staff]:
        result = await self.db.execute(
            select(Staff)
            .where(Staff.active.is_(True))
            .order_by(Staff.last_name, Staff.first_name)
        )
        return list(result.scalars().all())

    async def add(self, staff: Staff) -> Staff:
        self.db.add(staff)
        await self.db.flush()
        return staff
