"""Customer Service — registration, profile, history and activation gating.

Invariants:
    - Email is unique across customers
    - deactivate_customer raises HasActiveRentalsError while any rental has return_date > now
    - activate_customer has no precondition
    - get_rental_history / get_payment_history: NotFound for a missing customer and
      for an empty history
"""

import logging
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from filmrental.core.account_rules import (
    CustomerProfile, build_profile, check_customer_deactivation,
)
from filmrental.core.domain_types import CENTS, CustomerId, StoreId
from filmrental.core.errors import (
    DuplicateRecordError, NoResultsError, ResourceNotFoundError,
)
from filmrental.core.repository_protocols import Clock
from filmrental.models.customer import Customer
from filmrental.models.payment import Payment
from filmrental.models.rental import Rental
from filmrental.repositories.customer_repo import CustomerRepo
from filmrental.repositories.payment_repo import PaymentRepo
from filmrental.repositories.rental_repo import RentalRepo
from filmrental.repositories.store_repo import StoreRepo

logger = logging.getLogger(__name__)


class CustomerService:
    def __init__(self, db: AsyncSession, clock: Clock):
        self.db = db
        self.clock = clock
        self.customers = CustomerRepo(db)
        self.rentals = RentalRepo(db)
        self.payments = PaymentRepo(db)
        self.stores = StoreRepo(db)

    async def get_customer(self, customer_id: CustomerId) -> Customer:
        customer = await self.customers.get_by_id(customer_id)
        if customer is None:
            raise ResourceNotFoundError("Customer", str(customer_id))
        return customer

    async def _ensure_store(self, store_id: StoreId) -> None:
        if await self.stores.get_by_id(store_id) is None:
            raise ResourceNotFoundError("Store", str(store_id))

    async def _ensure_email_free(self, email: str, owner: CustomerId | None = None) -> None:
        existing = await self.customers.get_by_email(email)
        if existing is not None and existing.id != owner:
            raise DuplicateRecordError("Customer", "email", email)

    async def register_customer(
        self, first_name: str, last_name: str, email: str, store_id: StoreId,
    ) -> Customer:
        await self._ensure_email_free(email)
        await self._ensure_store(store_id)

        customer = Customer(
            first_name=first_name,
            last_name=last_name,
            email=email,
            store_id=store_id,
            active=True,
            created_at=self.clock.now(),
        )
        await self.customers.add(customer)
        await self.db.commit()
        logger.info(
            f"Customer {customer.id} registered", extra={"customer_id": customer.id},
        )
        return customer

    async def update_customer_info(
        self,
        customer_id: CustomerId,
        first_name: str | None = None,
        last_name: str | None = None,
        email: str | None = None,
        store_id: StoreId | None = None,
    ) -> Customer:
        customer = await self.get_customer(customer_id)
        if email is not None and email != customer.email:
            await self._ensure_email_free(email, owner=customer.id)
        if store_id is not None and store_id != customer.store_id:
            await self._ensure_store(store_id)

        if first_name is not None:
            customer.first_name = first_name
        if last_name is not None:
            customer.last_name = last_name
        if email is not None:
            customer.email = email
        if store_id is not None:
            customer.store_id = store_id
        await self.db.commit()
        return customer

    async def get_customer_profile(self, customer_id: CustomerId) -> CustomerProfile:
        customer = await self.get_customer(customer_id)
        rentals = await self.rentals.find_by_customer(customer_id)
        total_spent: Decimal = await self.payments.total_by_customer(customer_id)
        return build_profile(
            customer, rentals, total_spent.quantize(CENTS), self.clock.now(),
        )

    async def get_rental_history(self, customer_id: CustomerId) -> list[Rental]:
        await self.get_customer(customer_id)
        rentals = await self.rentals.find_by_customer(customer_id)
        if not rentals:
            raise NoResultsError("Rental", f"customer '{customer_id}'")
        return rentals

    async def get_payment_history(self, customer_id: CustomerId) -> list[Payment]:
        await self.get_customer(customer_id)
        payments = await self.payments.find_by_customer(customer_id)
        if not payments:
            raise NoResultsError("Payment", f"customer '{customer_id}'")
        return payments

    async def deactivate_customer(self, customer_id: CustomerId) -> Customer:
        customer = await self.get_customer(customer_id)
        rentals = await self.rentals.find_by_customer(customer_id)
        check_customer_deactivation(customer, rentals, self.clock.now())

        customer.active = False
        await self.db.commit()
        logger.info(
            f"Customer {customer_id} deactivated", extra={"customer_id": customer_id},
        )
        return customer

    async def activate_customer(self, customer_id: CustomerId) -> Customer:
        customer = await self.get_customer(customer_id)
        customer.active = True
        await self.db.commit()
        logger.info(
            f"Customer {customer_id} activated", extra={"customer_id": customer_id},
        )
        return customer
