"""Store Repository."""

from sqlalchemy.ext.asyncio import AsyncSession

from filmrental.core.domain_types import StoreId
from filmrental.models.store import Store


class StoreRepo:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, store_id: StoreId) -> Store | None:
        return await self.db.get(Store, store_id)
