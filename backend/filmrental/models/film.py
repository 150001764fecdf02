"""Film ORM — a title in the catalogue with its rental terms.

Invariants:
    - rental_duration is whole days (>= 1); one rental period
    - rental_rate is the charge per rental period
    - Rental terms are fixed once copies circulate; descriptive fields may change
"""

import uuid
from decimal import Decimal

from sqlalchemy import CheckConstraint, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from filmrental.db.base import Base


class Film(Base):
    __tablename__ = "film"
    __table_args__ = (
        CheckConstraint("rental_duration >= 1", name="ck_film_rental_duration"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    release_year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    rental_duration: Mapped[int] = mapped_column(
        Integer, nullable=False, default=3,
    )
    rental_rate: Mapped[Decimal] = mapped_column(
        Numeric(5, 2), nullable=False, default=Decimal("4.99"),
    )
    replacement_cost: Mapped[Decimal] = mapped_column(
        Numeric(5, 2), nullable=False, default=Decimal("19.99"),
    )
    rating: Mapped[str | None] = mapped_column(String(10), nullable=True)
