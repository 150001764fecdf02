"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO,
      but core pure functions that USE the *Like records are never async themselves —
      the shell orchestrates the async calls around the pure logic
    - Repositories return ORM rows; core rules only read the attributes listed
      in the *Like protocols
"""

from datetime import datetime
from decimal import Decimal
from typing import Protocol, Sequence
from uuid import UUID

from filmrental.core.domain_types import (
    CustomerId, FilmId, InventoryId, PaymentId, RentalId, StaffId, StoreId,
)


# ─── Record shapes read by core rules ───────────────────────────

class FilmLike(Protocol):
    id: UUID
    title: str
    rental_duration: int
    rental_rate: Decimal


class InventoryLike(Protocol):
    id: UUID
    film_id: UUID
    store_id: UUID
    version: int


class RentalLike(Protocol):
    id: UUID
    rental_date: datetime
    return_date: datetime
    inventory_id: UUID
    customer_id: UUID
    staff_id: UUID
    status: str


class PaymentLike(Protocol):
    id: UUID
    amount: Decimal
    payment_date: datetime
    rental_id: UUID
    customer_id: UUID


class AccountLike(Protocol):
    """Customer and Staff share the activation flag and display name."""
    id: UUID
    first_name: str
    last_name: str
    active: bool


# ─── Capabilities ───────────────────────────────────────────────

class Clock(Protocol):
    """Source of "now" — always timezone-aware UTC."""
    def now(self) -> datetime: ...


class FilmRepository(Protocol):
    async def get_by_id(self, film_id: FilmId) -> FilmLike | None: ...


class InventoryRepository(Protocol):
    async def get_by_id(self, inventory_id: InventoryId) -> InventoryLike | None: ...
    async def find_available(
        self, film_id: FilmId, store_id: StoreId, now: datetime,
    ) -> Sequence[InventoryLike]: ...
    async def claim(self, inventory_id: InventoryId, expected_version: int) -> bool: ...


class RentalRepository(Protocol):
    async def get_by_id(self, rental_id: RentalId) -> RentalLike | None: ...
    async def list_all(self) -> Sequence[RentalLike]: ...
    async def find_by_customer(self, customer_id: CustomerId) -> Sequence[RentalLike]: ...
    async def find_active(self, now: datetime) -> Sequence[RentalLike]: ...
    async def find_overdue(self, now: datetime) -> Sequence[RentalLike]: ...
    async def add(self, rental: RentalLike) -> RentalLike: ...
    async def delete(self, rental: RentalLike) -> None: ...


class PaymentRepository(Protocol):
    async def get_by_id(self, payment_id: PaymentId) -> PaymentLike | None: ...
    async def find_by_customer(self, customer_id: CustomerId) -> Sequence[PaymentLike]: ...
    async def count_by_rental(self, rental_id: RentalId) -> int: ...
    async def find_by_date_range(
        self, start: datetime, end: datetime,
    ) -> Sequence[PaymentLike]: ...
    async def total_by_customer(self, customer_id: CustomerId) -> Decimal: ...
    async def add(self, payment: PaymentLike) -> PaymentLike: ...


class CustomerRepository(Protocol):
    async def get_by_id(self, customer_id: CustomerId) -> AccountLike | None: ...
    async def get_by_email(self, email: str) -> AccountLike | None: ...
    async def add(self, customer: AccountLike) -> AccountLike: ...


class StaffRepository(Protocol):
    async def get_by_id(self, staff_id: StaffId) -> AccountLike | None: ...
    async def get_by_email(self, email: str) -> AccountLike | None: ...
    async def get_by_username(self, username: str) -> AccountLike | None: ...
    async def find_by_store(self, store_id: StoreId) -> Sequence[AccountLike]: ...
    async def find_active(self) -> Sequence[AccountLike]: ...
    async def add(self, staff: AccountLike) -> AccountLike: ...
