"""Domain Types — identity types, rental states and billing constants.

Invariants:
    - FilmId, InventoryId, CustomerId, StaffId, StoreId, RentalId, PaymentId wrap UUIDs
    - RentalStatus is the persisted tag; RentalState is derived from (status, return_date, now)
    - LATE_FEE_MULTIPLIER is the single source of truth for the overdue surcharge

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
    - Decimal constants: money never passes through float
"""

from decimal import Decimal
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

FilmId = NewType("FilmId", UUID)
InventoryId = NewType("InventoryId", UUID)
CustomerId = NewType("CustomerId", UUID)
StaffId = NewType("StaffId", UUID)
StoreId = NewType("StoreId", UUID)
RentalId = NewType("RentalId", UUID)
PaymentId = NewType("PaymentId", UUID)


# ─── Billing Constants ───────────────────────────────────────────

LATE_FEE_MULTIPLIER = Decimal("1.5")
SECONDS_PER_DAY = 86_400
ZERO = Decimal("0.00")
CENTS = Decimal("0.01")


# ─── Enums ───────────────────────────────────────────────────────

class RentalStatus(str, Enum):
    """Persisted rental tag — maps to DB `status` column.

    Written only by the rent path (ACTIVE) and the return path (RETURNED).
    """
    ACTIVE = "active"
    RETURNED = "returned"


class RentalState(str, Enum):
    """Observable rental state at a given instant."""
    ACTIVE = "active"        # checked out, not yet due
    OVERDUE = "overdue"      # checked out, due date elapsed
    RETURNED = "returned"    # copy back in the store
