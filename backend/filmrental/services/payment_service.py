"""Fee & Billing Calculator — payments as append-only ledger entries.

Invariants:
    - process_rental_payment resolves Rental -> Inventory -> Film (NotFound at any gap)
    - amount = film.rental_rate, plus the late fee when return_date is already past
    - payment_date = now; the Rental row is never written here
    - get_total_paid_by_customer returns 0 for no payments; the other listings raise

Design Decisions:
    - Composes RentalService for the shared lookups instead of duplicating the chain
"""

import logging
from datetime import datetime
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from filmrental.core.account_rules import ensure_active
from filmrental.core.billing_rules import (
    PaymentReceipt, build_receipt, payment_amount, sum_amounts, validate_date_range,
)
from filmrental.core.domain_types import (
    CENTS, CustomerId, PaymentId, RentalId, StaffId,
)
from filmrental.core.errors import NoResultsError, ResourceNotFoundError
from filmrental.core.repository_protocols import Clock
from filmrental.models.payment import Payment
from filmrental.repositories.payment_repo import PaymentRepo
from filmrental.services.rental_service import RentalService

logger = logging.getLogger(__name__)


class PaymentService:
    """Records payments and reports on the ledger."""

    def __init__(self, db: AsyncSession, clock: Clock):
        self.db = db
        self.clock = clock
        self.payments = PaymentRepo(db)
        self.rental_service = RentalService(db, clock)

    async def process_rental_payment(
        self,
        rental_id: RentalId,
        customer_id: CustomerId,
        staff_id: StaffId,
    ) -> Payment:
        now = self.clock.now()
        rental = await self.rental_service.get_rental(rental_id)
        film = await self.rental_service.get_film_for_rental(rental)
        await self.rental_service.get_customer(customer_id)
        staff = await self.rental_service.get_staff(staff_id)
        ensure_active(staff, "Staff")

        payment = Payment(
            amount=payment_amount(film, rental, now),
            payment_date=now,
            rental_id=rental_id,
            customer_id=customer_id,
            staff_id=staff_id,
        )
        await self.payments.add(payment)
        await self.db.commit()
        logger.info(
            f"Payment {payment.id} of {payment.amount} recorded",
            extra={
                "payment_id": payment.id, "rental_id": rental_id,
                "customer_id": customer_id, "staff_id": staff_id,
            },
        )
        return payment

    async def get_payments_by_customer(self, customer_id: CustomerId) -> list[Payment]:
        payments = await self.payments.find_by_customer(customer_id)
        if not payments:
            raise NoResultsError("Payment", f"customer '{customer_id}'")
        return payments

    async def get_total_paid_by_customer(self, customer_id: CustomerId) -> Decimal:
        total = await self.payments.total_by_customer(customer_id)
        return total.quantize(CENTS)

    async def get_payments_by_date_range(
        self, start: datetime, end: datetime,
    ) -> list[Payment]:
        validate_date_range(start, end)
        payments = await self.payments.find_by_date_range(start, end)
        if not payments:
            raise NoResultsError(
                "Payment", f"{start.isoformat()} to {end.isoformat()}",
            )
        return payments

    async def get_revenue_by_date_range(
        self, start: datetime, end: datetime,
    ) -> Decimal:
        return sum_amounts(await self.get_payments_by_date_range(start, end))

    async def get_payment_receipt(self, payment_id: PaymentId) -> PaymentReceipt:
        payment = await self.payments.get_by_id(payment_id)
        if payment is None:
            raise ResourceNotFoundError("Payment", str(payment_id))
        rental = await self.rental_service.get_rental(payment.rental_id)
        customer = await self.rental_service.get_customer(payment.customer_id)
        film = await self.rental_service.get_film_for_rental(rental)
        return build_receipt(payment, rental, customer, film)
