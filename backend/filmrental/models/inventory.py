"""Inventory ORM — one physical copy of a film held at a store.

Invariants:
    - (film_id, store_id) identifies which title and where; many rows may share a film
    - version only ever increases; each successful rental allocation bumps it by one

Design Decisions:
    - version is the compare-and-set marker for allocation: two requests that both saw
      the copy free cannot both bump the same version
"""

import uuid

from sqlalchemy import ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from filmrental.db.base import Base


class Inventory(Base):
    __tablename__ = "inventory"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    film_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("film.id"), nullable=False, index=True,
    )
    store_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("store.id"), nullable=False, index=True,
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
