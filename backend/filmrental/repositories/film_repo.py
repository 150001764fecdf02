"""Film Repository — catalogue lookups."""

from sqlalchemy.ext.asyncio import AsyncSession

from filmrental.core.domain_types import FilmId
from filmrental.models.film import Film


class FilmRepo:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, film_id: FilmId) -> Film | None:
        return await self.db.get(Film, film_id)
