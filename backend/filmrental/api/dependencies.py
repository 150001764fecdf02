"""Request Dependencies — build services from the request's DB session and app clock.

Invariants:
    - One AsyncSession per request, from the DatabaseSessionManager on app.state
    - The clock comes from app.state so tests can substitute a fixed one
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from filmrental.core.repository_protocols import Clock
from filmrental.infrastructure.database import get_db
from filmrental.services.customer_service import CustomerService
from filmrental.services.payment_service import PaymentService
from filmrental.services.rental_service import RentalService
from filmrental.services.staff_service import StaffService


def get_clock(request: Request) -> Clock:
    return request.app.state.clock


def get_rental_service(
    db: AsyncSession = Depends(get_db), clock: Clock = Depends(get_clock),
) -> RentalService:
    return RentalService(db, clock)


def get_payment_service(
    db: AsyncSession = Depends(get_db), clock: Clock = Depends(get_clock),
) -> PaymentService:
    return PaymentService(db, clock)


def get_customer_service(
    db: AsyncSession = Depends(get_db), clock: Clock = Depends(get_clock),
) -> CustomerService:
    return CustomerService(db, clock)


def get_staff_service(db: AsyncSession = Depends(get_db)) -> StaffService:
    return StaffService(db)
