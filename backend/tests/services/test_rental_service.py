"""Rental Service — rent, return, extend, delete, late fees and listings.

Tests:
    - rent_film gating order: customer, film, staff, availability
    - rent_film sets due date from rental_duration and bumps the copy version
    - A stale availability snapshot loses the version claim (AllocationConflictError)
      and falls through to the next free copy when there is one
    - return_film only while the marker is pending; the copy is free afterwards
    - extend_rental validates first and moves any marker forward
    - delete_rental refuses billed rentals, including a payment that lands mid-delete
    - Two sessions racing for one copy: one rental, one AllocationConflictError
    - The overdue listing and the overdue state share the due-instant boundary
    - Listings raise NoResultsError when empty
"""

import asyncio
from datetime import timedelta
from decimal import Decimal
from types import SimpleNamespace
from uuid import uuid4

import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from filmrental.core.domain_types import RentalState, RentalStatus
from filmrental.core.errors import (
    AllocationConflictError, AlreadyReturnedError, InactiveAccountError,
    NoAvailabilityError, NoResultsError, RecordInUseError, RentalValidationError,
    ResourceNotFoundError,
)
from filmrental.models.inventory import Inventory
from filmrental.models.payment import Payment
from filmrental.models.rental import Rental
from filmrental.services.rental_service import RentalService


@pytest.fixture
def service(test_db, clock):
    return RentalService(test_db, clock)


# ─── rent_film ──────────────────────────────────────────────────

async def test_rent_sets_dates_and_status(service, rent_args, clock, seed_inventory):
    rental = await service.rent_film(*rent_args)

    assert rental.rental_date == clock.now()
    assert rental.return_date == clock.now() + timedelta(days=3)
    assert rental.status == RentalStatus.ACTIVE.value
    assert rental.inventory_id == seed_inventory.id


async def test_rent_bumps_inventory_version(service, rent_args, test_db, seed_inventory):
    await service.rent_film(*rent_args)
    await test_db.refresh(seed_inventory)
    assert seed_inventory.version == 1


async def test_rent_unknown_customer(service, rent_args):
    _, film_id, store_id, staff_id = rent_args
    with pytest.raises(ResourceNotFoundError):
        await service.rent_film(uuid4(), film_id, store_id, staff_id)


async def test_rent_inactive_customer(service, rent_args, seed_customer, test_db):
    seed_customer.active = False
    await test_db.commit()
    with pytest.raises(InactiveAccountError):
        await service.rent_film(*rent_args)


async def test_rent_unknown_film(service, rent_args):
    customer_id, _, store_id, staff_id = rent_args
    with pytest.raises(ResourceNotFoundError) as exc:
        await service.rent_film(customer_id, uuid4(), store_id, staff_id)
    assert exc.value.resource_type == "Film"


async def test_rent_inactive_staff(service, rent_args, seed_staff, test_db):
    seed_staff.active = False
    await test_db.commit()
    with pytest.raises(InactiveAccountError) as exc:
        await service.rent_film(*rent_args)
    assert exc.value.account_type == "Staff"


async def test_rent_unknown_staff(service, rent_args):
    customer_id, film_id, store_id, _ = rent_args
    with pytest.raises(ResourceNotFoundError):
        await service.rent_film(customer_id, film_id, store_id, uuid4())


async def test_rent_when_only_copy_is_out(service, rent_args):
    await service.rent_film(*rent_args)
    with pytest.raises(NoAvailabilityError):
        await service.rent_film(*rent_args)


async def test_rent_at_other_store_has_no_copy(service, rent_args):
    customer_id, film_id, _, staff_id = rent_args
    with pytest.raises(NoAvailabilityError):
        await service.rent_film(customer_id, film_id, uuid4(), staff_id)


async def test_stale_snapshot_loses_claim(service, rent_args, seed_inventory, monkeypatch):
    """Two requests saw the copy free at version 0; only the first claim lands."""
    snapshot = [SimpleNamespace(id=seed_inventory.id, version=0)]
    winner_id = (await service.rent_film(*rent_args)).id

    async def _stale_snapshot(film_id, store_id, at=None):
        return snapshot

    monkeypatch.setattr(service.resolver, "find_available", _stale_snapshot)

    with pytest.raises(AllocationConflictError):
        await service.rent_film(*rent_args)
    assert [r.id for r in await service.get_all_rentals()] == [winner_id]


async def test_lost_claim_falls_through_to_next_copy(
    service, rent_args, test_db, seed_film, seed_store, seed_inventory, monkeypatch,
):
    second = Inventory(film_id=seed_film.id, store_id=seed_store.id)
    test_db.add(second)
    await test_db.commit()
    candidates = [
        SimpleNamespace(id=seed_inventory.id, version=99),
        SimpleNamespace(id=second.id, version=0),
    ]

    async def _snapshot(film_id, store_id, at=None):
        return candidates

    monkeypatch.setattr(service.resolver, "find_available", _snapshot)

    rental = await service.rent_film(*rent_args)
    assert rental.inventory_id == second.id


async def test_two_copies_rent_twice(service, rent_args, test_db, seed_film, seed_store):
    test_db.add(Inventory(film_id=seed_film.id, store_id=seed_store.id))
    await test_db.commit()

    first = await service.rent_film(*rent_args)
    second = await service.rent_film(*rent_args)
    assert first.inventory_id != second.inventory_id


# ─── return_film ────────────────────────────────────────────────

async def test_return_marks_rental_returned(service, rent_args, clock):
    rental = await service.rent_film(*rent_args)
    clock.advance(days=1)

    returned = await service.return_film(rental.id)
    assert returned.status == RentalStatus.RETURNED.value
    assert returned.return_date == clock.now()


async def test_returned_copy_can_be_rented_again(service, rent_args, clock):
    rental = await service.rent_film(*rent_args)
    clock.advance(days=1)
    await service.return_film(rental.id)
    clock.advance(seconds=1)

    again = await service.rent_film(*rent_args)
    assert again.inventory_id == rental.inventory_id


async def test_return_twice_rejected(service, rent_args, clock):
    rental = await service.rent_film(*rent_args)
    clock.advance(hours=1)
    await service.return_film(rental.id)
    with pytest.raises(AlreadyReturnedError):
        await service.return_film(rental.id)


async def test_return_after_due_date_rejected(service, rent_args, clock):
    rental = await service.rent_film(*rent_args)
    clock.advance(days=4)
    with pytest.raises(AlreadyReturnedError):
        await service.return_film(rental.id)


async def test_return_unknown_rental(service):
    with pytest.raises(ResourceNotFoundError):
        await service.return_film(uuid4())


# ─── extend_rental ──────────────────────────────────────────────

async def test_extend_moves_due_date(service, rent_args, clock):
    rental = await service.rent_film(*rent_args)
    extended = await service.extend_rental(rental.id, 2)
    assert extended.return_date == clock.now() + timedelta(days=5)


async def test_extend_rejects_zero_before_lookup(service):
    with pytest.raises(RentalValidationError):
        await service.extend_rental(uuid4(), 0)


async def test_extend_returned_rental_moves_marker(service, rent_args, clock):
    rental = await service.rent_film(*rent_args)
    clock.advance(days=1)
    await service.return_film(rental.id)
    returned_at = clock.now()

    extended = await service.extend_rental(rental.id, 1)
    assert extended.return_date == returned_at + timedelta(days=1)


# ─── delete_rental ──────────────────────────────────────────────

async def test_delete_unbilled_rental(service, rent_args):
    rental = await service.rent_film(*rent_args)
    await service.delete_rental(rental.id)
    with pytest.raises(ResourceNotFoundError):
        await service.get_rental(rental.id)


async def test_delete_billed_rental_refused(service, rent_args, test_db, clock):
    rental = await service.rent_film(*rent_args)
    test_db.add(Payment(
        amount=Decimal("2.00"), payment_date=clock.now(), rental_id=rental.id,
        customer_id=rental.customer_id, staff_id=rental.staff_id,
    ))
    await test_db.commit()

    with pytest.raises(RecordInUseError) as exc:
        await service.delete_rental(rental.id)
    assert exc.value.dependents == 1


# ─── Late fee & state ───────────────────────────────────────────

async def test_late_fee_zero_before_due(service, rent_args):
    rental = await service.rent_film(*rent_args)
    assert await service.calculate_late_fee(rental.id) == Decimal("0.00")


async def test_late_fee_two_days_over(service, rent_args, clock):
    rental = await service.rent_film(*rent_args)
    clock.advance(days=5)
    assert await service.calculate_late_fee(rental.id) == Decimal("6.00")


async def test_state_transitions(service, rent_args, clock):
    rental = await service.rent_film(*rent_args)
    assert await service.get_rental_state(rental.id) == RentalState.ACTIVE

    clock.advance(days=4)
    assert await service.get_rental_state(rental.id) == RentalState.OVERDUE


async def test_state_returned(service, rent_args, clock):
    rental = await service.rent_film(*rent_args)
    clock.advance(days=1)
    await service.return_film(rental.id)
    clock.advance(days=10)
    assert await service.get_rental_state(rental.id) == RentalState.RETURNED


# ─── Listings ───────────────────────────────────────────────────

async def test_listings_empty_raise(service, rent_args):
    with pytest.raises(NoResultsError):
        await service.get_all_rentals()
    with pytest.raises(NoResultsError):
        await service.get_active_rentals()
    with pytest.raises(NoResultsError):
        await service.get_overdue_rentals()
    with pytest.raises(NoResultsError):
        await service.get_rentals_by_customer(rent_args[0])


async def test_active_then_overdue(service, rent_args, clock):
    rental = await service.rent_film(*rent_args)
    assert [r.id for r in await service.get_active_rentals()] == [rental.id]

    clock.advance(days=4)
    assert [r.id for r in await service.get_overdue_rentals()] == [rental.id]
    with pytest.raises(NoResultsError):
        await service.get_active_rentals()


async def test_returned_rental_is_not_overdue(service, rent_args, clock):
    rental = await service.rent_film(*rent_args)
    clock.advance(days=1)
    await service.return_film(rental.id)
    clock.advance(days=10)
    with pytest.raises(NoResultsError):
        await service.get_overdue_rentals()
    assert len(await service.get_rentals_by_customer(rent_args[0])) == 1


async def test_unpaid_overdue_flag(service, rent_args, clock, test_db):
    rental = await service.rent_film(*rent_args)
    assert not await service.has_unpaid_overdue_rentals(rent_args[0])

    clock.advance(days=4)
    assert await service.has_unpaid_overdue_rentals(rent_args[0])

    test_db.add(Payment(
        amount=Decimal("5.00"), payment_date=clock.now(), rental_id=rental.id,
        customer_id=rental.customer_id, staff_id=rental.staff_id,
    ))
    await test_db.commit()
    assert not await service.has_unpaid_overdue_rentals(rent_args[0])


async def test_overdue_listing_includes_exact_due_instant(service, rent_args, clock):
    rental = await service.rent_film(*rent_args)
    clock.advance(days=3)

    assert await service.get_rental_state(rental.id) == RentalState.OVERDUE
    assert [r.id for r in await service.get_overdue_rentals()] == [rental.id]


async def test_payment_racing_delete_is_record_in_use(service, rent_args, monkeypatch):
    """A payment committed between the billing check and the delete."""
    rental = await service.rent_film(*rent_args)
    rental_id = rental.id
    counts = iter([0, 1])

    async def _count_by_rental(rid):
        return next(counts)

    async def _delete_hits_fk(row):
        raise IntegrityError(
            "DELETE FROM rental", {}, Exception("FOREIGN KEY constraint failed"),
        )

    monkeypatch.setattr(service.payments, "count_by_rental", _count_by_rental)
    monkeypatch.setattr(service.rentals, "delete", _delete_hits_fk)

    with pytest.raises(RecordInUseError) as exc:
        await service.delete_rental(rental_id)
    assert exc.value.dependents == 1
    assert exc.value.http_status == 409


async def test_concurrent_rents_of_one_copy(test_session_factory, clock, rent_args):
    """Two requests, each with its own session, race for the only copy."""
    async with test_session_factory() as first, test_session_factory() as second:
        results = await asyncio.gather(
            RentalService(first, clock).rent_film(*rent_args),
            RentalService(second, clock).rent_film(*rent_args),
            return_exceptions=True,
        )

    rentals = [r for r in results if isinstance(r, Rental)]
    conflicts = [r for r in results if isinstance(r, AllocationConflictError)]
    assert len(rentals) == 1
    assert len(conflicts) == 1

    async with test_session_factory() as check:
        stored = (await check.execute(select(Rental))).scalars().all()
    assert [r.id for r in stored] == [rentals[0].id]
