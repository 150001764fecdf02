"""Inventory Repository — copy lookups, availability query and allocation claim.

Invariants:
    - find_available returns copies with no rental whose return_date > now
    - claim succeeds at most once per observed version
    - find_available refreshes loaded copies so the version it hands out is current
"""

from datetime import datetime

from sqlalchemy import exists, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from filmrental.core.domain_types import FilmId, InventoryId, StoreId
from filmrental.models.inventory import Inventory
from filmrental.models.rental import Rental


class InventoryRepo:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, inventory_id: InventoryId) -> Inventory | None:
        return await self.db.get(Inventory, inventory_id)

    async def find_available(
        self, film_id: FilmId, store_id: StoreId, now: datetime,
    ) -> list[Inventory]:
        occupied = (
            exists()
            .where(Rental.inventory_id == Inventory.id)
            .where(Rental.return_date > now)
        )
        result = await self.db.execute(
            select(Inventory)
            .where(Inventory.film_id == film_id)
            .where(Inventory.store_id == store_id)
            .where(~occupied)
            .order_by(Inventory.id)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def claim(self, inventory_id: InventoryId, expected_version: int) -> bool:
        """Compare-and-set on version. False when another allocation got there first."""
        result = await self.db.execute(
            update(Inventory)
            .where(Inventory.id == inventory_id)
            .where(Inventory.version == expected_version)
            .values(version=Inventory.version + 1)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
