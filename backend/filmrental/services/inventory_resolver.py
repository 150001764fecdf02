"""Inventory Availability Resolver — which copies of a title are free at a store.

Invariants:
    - A copy is free iff no rental on it has return_date > now
    - Empty result is not an error; the caller decides
    - Order is repository order (by inventory id); callers take the first that they can claim
"""

from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from filmrental.core.domain_types import FilmId, StoreId
from filmrental.core.repository_protocols import Clock
from filmrental.models.inventory import Inventory
from filmrental.repositories.inventory_repo import InventoryRepo


class InventoryResolver:
    def __init__(self, db: AsyncSession, clock: Clock):
        self.inventory = InventoryRepo(db)
        self.clock = clock

    async def find_available(
        self, film_id: FilmId, store_id: StoreId, at: datetime | None = None,
    ) -> list[Inventory]:
        return await self.inventory.find_available(
            film_id, store_id, at or self.clock.now(),
        )
