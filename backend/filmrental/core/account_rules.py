"""Account Rules — activation gating for customers and staff.

Invariants:
    - An inactive customer cannot rent; an inactive staff member cannot transact
    - Customer deactivation is refused while any rental has return_date > now
    - Customer activation and staff (de)activation have no precondition

Design Decisions:
    - Staff (de)activation is unconditional; only customers are checked for rentals out
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Sequence

from filmrental.core.errors import HasActiveRentalsError, InactiveAccountError
from filmrental.core.rental_rules import is_marker_pending
from filmrental.core.repository_protocols import AccountLike, RentalLike


@dataclass(frozen=True)
class CustomerProfile:
    customer: AccountLike
    active_rentals: int
    total_rentals: int
    total_spent: Decimal


def ensure_active(account: AccountLike, account_type: str) -> None:
    if not account.active:
        raise InactiveAccountError(account_type, str(account.id))


def count_pending_rentals(rentals: Iterable[RentalLike], now: datetime) -> int:
    return sum(1 for r in rentals if is_marker_pending(r.return_date, now))


def check_customer_deactivation(
    customer: AccountLike, rentals: Iterable[RentalLike], now: datetime,
) -> None:
    pending = count_pending_rentals(rentals, now)
    if pending > 0:
        raise HasActiveRentalsError(str(customer.id), pending)


def build_profile(
    customer: AccountLike,
    rentals: Sequence[RentalLike],
    total_spent: Decimal,
    now: datetime,
) -> CustomerProfile:
    return CustomerProfile(
        customer=customer,
        active_rentals=count_pending_rentals(rentals, now),
        total_rentals=len(rentals),
        total_spent=total_spent,
    )
