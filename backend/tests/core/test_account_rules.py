"""Account Rules — activation gating and customer profiles.

Tests:
    - ensure_active raises InactiveAccountError with 403
    - Deactivation refused while any rental marker is pending
    - build_profile counts pending and total rentals
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from types import SimpleNamespace
from uuid import uuid4

import pytest

from filmrental.core.account_rules import (
    build_profile, check_customer_deactivation, count_pending_rentals, ensure_active,
)
from filmrental.core.errors import HasActiveRentalsError, InactiveAccountError

T0 = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def _account(active=True):
    return SimpleNamespace(id=uuid4(), first_name="Jon", last_name="Stephens",
                           active=active)


def _rental(return_date):
    return SimpleNamespace(id=uuid4(), return_date=return_date)


def test_active_account_passes():
    ensure_active(_account(), "Customer")


def test_inactive_account_rejected():
    with pytest.raises(InactiveAccountError) as exc:
        ensure_active(_account(active=False), "Staff")
    assert exc.value.http_status == 403
    assert exc.value.account_type == "Staff"


def test_deactivation_blocked_by_pending_rental():
    rentals = [_rental(T0 + timedelta(days=3))]
    with pytest.raises(HasActiveRentalsError) as exc:
        check_customer_deactivation(_account(), rentals, T0)
    assert exc.value.active_count == 1


def test_deactivation_allowed_once_markers_elapsed():
    rentals = [_rental(T0 - timedelta(days=1)), _rental(T0)]
    check_customer_deactivation(_account(), rentals, T0)


def test_count_pending():
    rentals = [_rental(T0 + timedelta(days=1)), _rental(T0 - timedelta(days=1))]
    assert count_pending_rentals(rentals, T0) == 1


def test_profile_counts():
    customer = _account()
    rentals = [_rental(T0 + timedelta(days=1)), _rental(T0 - timedelta(days=1))]
    profile = build_profile(customer, rentals, Decimal("4.00"), T0)
    assert profile.customer is customer
    assert profile.active_rentals == 1
    assert profile.total_rentals == 2
    assert profile.total_spent == Decimal("4.00")
