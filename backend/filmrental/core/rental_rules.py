"""Rental Rules — due dates, state classification, occupancy and late fees.

Invariants:
    - return_date is the due date until the return path overwrites it with the
      actual return instant; every predicate below reads that single marker
    - A copy is occupied exactly when some rental on it has return_date > now
    - A rental is returnable only while return_date > now (marker not yet elapsed)
    - Late fee = ceil(overdue days) * rental_rate * LATE_FEE_MULTIPLIER, 0 when not overdue
    - All functions are pure: `now` is always passed in

Design Decisions:
    - RentalStatus tag is consulted only for classification and listings; the
      availability/return/deactivation predicates stay on return_date alone so the
      observable behavior of the marker convention is unchanged
    - Partial days round up: one second late is one day late
"""

import math
from datetime import datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from filmrental.core.domain_types import (
    CENTS, LATE_FEE_MULTIPLIER, SECONDS_PER_DAY, ZERO,
    RentalState, RentalStatus,
)
from filmrental.core.errors import AlreadyReturnedError, RentalValidationError
from filmrental.core.repository_protocols import RentalLike


MIN_EXTENSION_DAYS: int = 1


def compute_due_date(rental_date: datetime, rental_duration: int) -> datetime:
    """Scheduled due date: rental_date + rental_duration whole days."""
    if rental_duration < 1:
        raise RentalValidationError(
            f"rental_duration must be at least 1 day, got {rental_duration}",
            field="rental_duration",
        )
    return rental_date + timedelta(days=rental_duration)


def is_marker_pending(return_date: datetime, now: datetime) -> bool:
    """True while the due/return marker lies strictly in the future."""
    return return_date > now


def is_copy_occupied(rentals: Iterable[RentalLike], now: datetime) -> bool:
    """Mirror of the availability query for an already-loaded rental list."""
    return any(is_marker_pending(r.return_date, now) for r in rentals)


def classify_rental(rental: RentalLike, now: datetime) -> RentalState:
    if rental.status == RentalStatus.RETURNED.value:
        return RentalState.RETURNED
    if now >= rental.return_date:
        return RentalState.OVERDUE
    return RentalState.ACTIVE


def check_returnable(rental: RentalLike, now: datetime) -> None:
    """Raise AlreadyReturnedError unless the marker is still pending."""
    if (
        rental.status == RentalStatus.RETURNED.value
        or not is_marker_pending(rental.return_date, now)
    ):
        raise AlreadyReturnedError(str(rental.id))


def validate_extension_days(extra_days: int) -> None:
    if isinstance(extra_days, bool) or not isinstance(extra_days, int):
        raise RentalValidationError(
            f"extra_days must be an integer, got {extra_days!r}",
            field="extra_days",
        )
    if extra_days < MIN_EXTENSION_DAYS:
        raise RentalValidationError(
            f"extra_days must be at least {MIN_EXTENSION_DAYS}, got {extra_days}",
            field="extra_days",
        )


def extend_return_date(return_date: datetime, extra_days: int) -> datetime:
    """Push the marker forward regardless of what it currently encodes."""
    validate_extension_days(extra_days)
    try:
        return return_date + timedelta(days=extra_days)
    except OverflowError:
        raise RentalValidationError(
            f"extra_days={extra_days} moves the return date past the supported range",
            field="extra_days",
        ) from None


def overdue_days(return_date: datetime, now: datetime) -> int:
    """Whole overdue days, rounded up. 0 when now <= return_date."""
    if now <= return_date:
        return 0
    elapsed = (now - return_date).total_seconds()
    return math.ceil(elapsed / SECONDS_PER_DAY)


def late_fee(return_date: datetime, now: datetime, rental_rate: Decimal) -> Decimal:
    days = overdue_days(return_date, now)
    if days == 0:
        return ZERO
    fee = Decimal(days) * Decimal(rental_rate) * LATE_FEE_MULTIPLIER
    return fee.quantize(CENTS, rounding=ROUND_HALF_UP)
