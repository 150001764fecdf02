"""Billing Rules — payment amounts, revenue sums and receipt assembly.

Invariants:
    - Base charge is one rental period: film.rental_rate (not rate * duration)
    - Late fee is added only when return_date < payment time
    - Payments are append-only ledger entries: nothing here mutates a record
    - Date-range bounds are inclusive and start must not be after end

Design Decisions:
    - PaymentReceipt as frozen dataclass: presentation object, built once and never edited
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from filmrental.core.domain_types import CENTS, ZERO
from filmrental.core.errors import RentalValidationError
from filmrental.core.rental_rules import late_fee
from filmrental.core.repository_protocols import (
    AccountLike, FilmLike, PaymentLike, RentalLike,
)


@dataclass(frozen=True)
class PaymentReceipt:
    """Payment joined with its rental, customer name and film title."""
    payment: PaymentLike
    rental: RentalLike
    customer_name: str
    film_title: str


def rental_charge(film: FilmLike) -> Decimal:
    return Decimal(film.rental_rate or ZERO).quantize(CENTS, rounding=ROUND_HALF_UP)


def payment_amount(film: FilmLike, rental: RentalLike, now: datetime) -> Decimal:
    """Rental charge plus the late fee when the marker is already in the past."""
    amount = rental_charge(film)
    if rental.return_date < now:
        amount += late_fee(rental.return_date, now, film.rental_rate or ZERO)
    return amount


def sum_amounts(payments: Iterable[PaymentLike]) -> Decimal:
    total = ZERO
    for p in payments:
        total += Decimal(p.amount)
    return total.quantize(CENTS, rounding=ROUND_HALF_UP)


def validate_date_range(start: datetime, end: datetime) -> None:
    if start > end:
        raise RentalValidationError(
            f"start ({start.isoformat()}) must not be after end ({end.isoformat()})",
            field="start_date",
        )


def has_unpaid_overdue(
    rentals: Iterable[RentalLike], payments: Iterable[PaymentLike], now: datetime,
) -> bool:
    """True when some rental whose marker has elapsed has no payment against it."""
    paid_rental_ids = {p.rental_id for p in payments}
    return any(
        r.return_date < now and r.id not in paid_rental_ids
        for r in rentals
    )


def build_receipt(
    payment: PaymentLike,
    rental: RentalLike,
    customer: AccountLike,
    film: FilmLike,
) -> PaymentReceipt:
    return PaymentReceipt(
        payment=payment,
        rental=rental,
        customer_name=f"{customer.first_name} {customer.last_name}",
        film_title=film.title,
    )
