"""Rental Lifecycle Manager — rent, return, extend, delete, late fees.

Invariants:
    - rent_film: customer exists and active, film exists, staff exists and active,
      a copy is free, and the copy's version claim succeeds — else a typed error
    - rent_film sets return_date = now + film.rental_duration days, status active
    - return_film fails with AlreadyReturnedError once the marker is in the past
    - extend_rental adds days to return_date whatever it currently encodes
    - delete_rental has no state check; only ledger references block it
    - Lifecycle never writes Payment rows

Design Decisions:
    - Availability check and rental insert share one transaction, tied together by
      the compare-and-set on Inventory.version: a stale read loses the claim
    - Losing the claim on one copy falls through to the next candidate before
      giving up with AllocationConflictError
"""

import logging
from decimal import Decimal

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from filmrental.core.account_rules import ensure_active
from filmrental.core.billing_rules import has_unpaid_overdue
from filmrental.core.domain_types import (
    CustomerId, FilmId, RentalId, RentalState, RentalStatus, StaffId, StoreId,
)
from filmrental.core.errors import (
    AllocationConflictError, ErrorContext, NoAvailabilityError, NoResultsError,
    RecordInUseError, ResourceNotFoundError,
)
from filmrental.core.rental_rules import (
    check_returnable, classify_rental, compute_due_date, extend_return_date,
    late_fee, validate_extension_days,
)
from filmrental.core.repository_protocols import Clock
from filmrental.models.customer import Customer
from filmrental.models.film import Film
from filmrental.models.rental import Rental
from filmrental.models.staff import Staff
from filmrental.repositories.customer_repo import CustomerRepo
from filmrental.repositories.film_repo import FilmRepo
from filmrental.repositories.inventory_repo import InventoryRepo
from filmrental.repositories.payment_repo import PaymentRepo
from filmrental.repositories.rental_repo import RentalRepo
from filmrental.repositories.staff_repo import StaffRepo
from filmrental.services.inventory_resolver import InventoryResolver

logger = logging.getLogger(__name__)


class RentalService:
    """Creates and transitions rentals."""

    def __init__(self, db: AsyncSession, clock: Clock):
        self.db = db
        self.clock = clock
        self.rentals = RentalRepo(db)
        self.inventory = InventoryRepo(db)
        self.films = FilmRepo(db)
        self.customers = CustomerRepo(db)
        self.staff = StaffRepo(db)
        self.payments = PaymentRepo(db)
        self.resolver = InventoryResolver(db, clock)

    # ─── Lookups shared with billing ────────────────────────────

    async def get_rental(self, rental_id: RentalId) -> Rental:
        rental = await self.rentals.get_by_id(rental_id)
        if rental is None:
            raise ResourceNotFoundError("Rental", str(rental_id))
        return rental

    async def get_customer(self, customer_id: CustomerId) -> Customer:
        customer = await self.customers.get_by_id(customer_id)
        if customer is None:
            raise ResourceNotFoundError("Customer", str(customer_id))
        return customer

    async def get_staff(self, staff_id: StaffId) -> Staff:
        staff = await self.staff.get_by_id(staff_id)
        if staff is None:
            raise ResourceNotFoundError("Staff", str(staff_id))
        return staff

    async def get_film_for_rental(self, rental: Rental) -> Film:
        """Follow Rental -> Inventory -> Film, NotFound at any gap."""
        inventory = await self.inventory.get_by_id(rental.inventory_id)
        if inventory is None:
            raise ResourceNotFoundError("Inventory", str(rental.inventory_id))
        film = await self.films.get_by_id(inventory.film_id)
        if film is None:
            raise ResourceNotFoundError("Film", str(inventory.film_id))
        return film

    # ─── Lifecycle ──────────────────────────────────────────────

    async def rent_film(
        self,
        customer_id: CustomerId,
        film_id: FilmId,
        store_id: StoreId,
        staff_id: StaffId,
    ) -> Rental:
        now = self.clock.now()

        customer = await self.get_customer(customer_id)
        ensure_active(customer, "Customer")

        film = await self.films.get_by_id(film_id)
        if film is None:
            raise ResourceNotFoundError("Film", str(film_id))

        staff = await self.get_staff(staff_id)
        ensure_active(staff, "Staff")

        candidates = await self.resolver.find_available(film_id, store_id, at=now)
        if not candidates:
            raise NoAvailabilityError(str(film_id), str(store_id))

        due = compute_due_date(now, film.rental_duration)
        for copy in candidates:
            if not await self.inventory.claim(copy.id, copy.version):
                logger.warning(
                    f"Lost allocation race on inventory {copy.id}",
                    extra={"inventory_id": copy.id, "customer_id": customer_id},
                )
                continue
            rental = Rental(
                rental_date=now,
                return_date=due,
                inventory_id=copy.id,
                customer_id=customer_id,
                staff_id=staff_id,
                status=RentalStatus.ACTIVE.value,
            )
            await self.rentals.add(rental)
            await self.db.commit()
            logger.info(
                f"Rental {rental.id} created, due {due.isoformat()}",
                extra={
                    "rental_id": rental.id, "inventory_id": copy.id,
                    "customer_id": customer_id, "staff_id": staff_id,
                },
            )
            return rental

        await self.db.rollback()
        raise AllocationConflictError(
            f"All {len(candidates)} free copies of film '{film_id}' were "
            "allocated concurrently",
            ErrorContext(customer_id=str(customer_id)),
        )

    async def return_film(self, rental_id: RentalId) -> Rental:
        now = self.clock.now()
        rental = await self.get_rental(rental_id)
        check_returnable(rental, now)

        rental.return_date = now
        rental.status = RentalStatus.RETURNED.value
        await self.db.commit()
        logger.info(
            f"Rental {rental_id} returned", extra={"rental_id": rental_id},
        )
        return rental

    async def extend_rental(self, rental_id: RentalId, extra_days: int) -> Rental:
        validate_extension_days(extra_days)
        rental = await self.get_rental(rental_id)

        rental.return_date = extend_return_date(rental.return_date, extra_days)
        await self.db.commit()
        logger.info(
            f"Rental {rental_id} extended by {extra_days} day(s)",
            extra={"rental_id": rental_id},
        )
        return rental

    async def delete_rental(self, rental_id: RentalId) -> None:
        rental = await self.get_rental(rental_id)
        billed = await self.payments.count_by_rental(rental_id)
        if billed:
            raise RecordInUseError("Rental", str(rental_id), billed)

        try:
            await self.rentals.delete(rental)
            await self.db.commit()
        except IntegrityError:
            # a payment landed after the count above
            await self.db.rollback()
            billed = await self.payments.count_by_rental(rental_id)
            raise RecordInUseError("Rental", str(rental_id), billed) from None
        logger.info(f"Rental {rental_id} deleted", extra={"rental_id": rental_id})

    async def calculate_late_fee(self, rental_id: RentalId) -> Decimal:
        rental = await self.get_rental(rental_id)
        film = await self.get_film_for_rental(rental)
        return late_fee(rental.return_date, self.clock.now(), film.rental_rate)

    async def get_rental_state(self, rental_id: RentalId) -> RentalState:
        rental = await self.get_rental(rental_id)
        return classify_rental(rental, self.clock.now())

    # ─── Listings (empty result is an error for each of these) ──

    async def get_all_rentals(self) -> list[Rental]:
        rentals = await self.rentals.list_all()
        if not rentals:
            raise NoResultsError("Rental", "any customer")
        return rentals

    async def get_rentals_by_customer(self, customer_id: CustomerId) -> list[Rental]:
        rentals = await self.rentals.find_by_customer(customer_id)
        if not rentals:
            raise NoResultsError("Rental", f"customer '{customer_id}'")
        return rentals

    async def get_active_rentals(self) -> list[Rental]:
        rentals = await self.rentals.find_active(self.clock.now())
        if not rentals:
            raise NoResultsError("Rental", "active status")
        return rentals

    async def get_overdue_rentals(self) -> list[Rental]:
        rentals = await self.rentals.find_overdue(self.clock.now())
        if not rentals:
            raise NoResultsError("Rental", "overdue status")
        return rentals

    async def has_unpaid_overdue_rentals(self, customer_id: CustomerId) -> bool:
        rentals = await self.rentals.find_by_customer(customer_id)
        payments = await self.payments.find_by_customer(customer_id)
        return has_unpaid_overdue(rentals, payments, self.clock.now())
