"""Rental ORM — one checkout of one inventory copy by one customer.

Invariants:
    - return_date is set at creation to the due date (rental_date + rental_duration days)
      and overwritten with the actual return instant when the copy comes back
    - status is "active" from creation and "returned" after the return path runs
    - Only the lifecycle service writes this table; billing only reads it

Design Decisions:
    - status added next to return_date: the marker keeps its meaning for the availability,
      return and deactivation predicates, the tag tells overdue apart from returned
"""

import uuid
from datetime import datetime

from sqlalchemy import CheckConstraint, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from filmrental.core.domain_types import RentalStatus
from filmrental.db.base import Base
from filmrental.db.types import UTCDateTime


class Rental(Base):
    __tablename__ = "rental"
    __table_args__ = (
        CheckConstraint(
            "status IN ('active', 'returned')", name="ck_rental_status",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    rental_date: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    return_date: Mapped[datetime] = mapped_column(
        UTCDateTime, nullable=False, index=True,
    )
    inventory_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("inventory.id"), nullable=False, index=True,
    )
    customer_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("customer.id"), nullable=False, index=True,
    )
    staff_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("staff.id"), nullable=False,
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=RentalStatus.ACTIVE.value,
    )
