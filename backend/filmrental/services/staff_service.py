"""Staff Service — registration, lookup and activation.

Invariants:
    - Email and username are unique across staff
    - activate_staff / deactivate_staff have no precondition (unlike customers)
    - get_active_staff treats an empty result as NotFound; get_staff_by_store does not
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from filmrental.core.domain_types import StaffId, StoreId
from filmrental.core.errors import (
    DuplicateRecordError, NoResultsError, ResourceNotFoundError,
)
from filmrental.models.staff import Staff
from filmrental.repositories.staff_repo import StaffRepo
from filmrental.repositories.store_repo import StoreRepo

logger = logging.getLogger(__name__)


class StaffService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.staff = StaffRepo(db)
        self.stores = StoreRepo(db)

    async def get_staff_by_id(self, staff_id: StaffId) -> Staff:
        staff = await self.staff.get_by_id(staff_id)
        if staff is None:
            raise ResourceNotFoundError("Staff", str(staff_id))
        return staff

    async def _ensure_unique(
        self, email: str | None, username: str | None, owner: StaffId | None = None,
    ) -> None:
        if email is not None:
            existing = await self.staff.get_by_email(email)
            if existing is not None and existing.id != owner:
                raise DuplicateRecordError("Staff", "email", email)
        if username is not None:
            existing = await self.staff.get_by_username(username)
            if existing is not None and existing.id != owner:
                raise DuplicateRecordError("Staff", "username", username)

    async def register_staff(
        self,
        first_name: str,
        last_name: str,
        email: str,
        username: str,
        store_id: StoreId,
    ) -> Staff:
        await self._ensure_unique(email, username)
        if await self.stores.get_by_id(store_id) is None:
            raise ResourceNotFoundError("Store", str(store_id))

        staff = Staff(
            first_name=first_name,
            last_name=last_name,
            email=email,
            username=username,
            store_id=store_id,
            active=True,
        )
        await self.staff.add(staff)
        await self.db.commit()
        logger.info(f"Staff {staff.id} registered", extra={"staff_id": staff.id})
        return staff

    async def get_staff_by_store(self, store_id: StoreId) -> list[Staff]:
        return await self.staff.find_by_store(store_id)

    async def update_staff_info(
        self,
        staff_id: StaffId,
        first_name: str | None = None,
        last_name: str | None = None,
        email: str | None = None,
    ) -> Staff:
        staff = await self.get_staff_by_id(staff_id)
        if email is not None and email != staff.email:
            await self._ensure_unique(email, None, owner=staff.id)

        if first_name is not None:
            staff.first_name = first_name
        if last_name is not None:
            staff.last_name = last_name
        if email is not None:
            staff.email = email
        await self.db.commit()
        return staff

    async def deactivate_staff(self, staff_id: StaffId) -> Staff:
        return await self._set_active(staff_id, False)

    async def activate_staff(self, staff_id: StaffId) -> Staff:
        return await self._set_active(staff_id, True)

    async def _set_active(self, staff_id: StaffId, active: bool) -> Staff:
        staff = await self.get_staff_by_id(staff_id)
        staff.active = active
        await self.db.commit()
        logger.info(
            f"Staff {staff_id} {'activated' if active else 'deactivated'}",
            extra={"staff_id": staff_id},
        )
        return staff

    async def get_active_staff(self) -> list[Staff]:
        staff = await self.staff.find_active()
        if not staff:
            raise NoResultsError("Staff", "active status")
        return staff
