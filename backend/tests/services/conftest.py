"""Service test fixtures — async in-memory DB, fixed clock and seed rows.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - The clock starts at 2026-03-01T12:00Z and only moves when a test moves it
    - Seed film: rental_duration 3 days, rental_rate 2.00
    - client swaps app.state.db_manager and app.state.clock for the test ones

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for service tests
    - StaticPool: every session shares the one in-memory connection
"""

from decimal import Decimal

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from fake_clock import FixedClock
from filmrental.db.base import Base
from filmrental.infrastructure.database import DatabaseSessionManager
from filmrental.main import app
import filmrental.models  # noqa: F401
from filmrental.models.customer import Customer
from filmrental.models.film import Film
from filmrental.models.inventory import Inventory
from filmrental.models.staff import Staff
from filmrental.models.store import Store


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
async def seed_store(test_db):
    store = Store(name="Lethbridge")
    test_db.add(store)
    await test_db.commit()
    return store


@pytest.fixture
async def seed_film(test_db):
    film = Film(
        title="Academy Dinosaur", rental_duration=3, rental_rate=Decimal("2.00"),
    )
    test_db.add(film)
    await test_db.commit()
    return film


@pytest.fixture
async def seed_inventory(test_db, seed_film, seed_store):
    copy = Inventory(film_id=seed_film.id, store_id=seed_store.id)
    test_db.add(copy)
    await test_db.commit()
    return copy


@pytest.fixture
async def seed_customer(test_db, seed_store, clock):
    customer = Customer(
        first_name="Mary", last_name="Smith", email="mary.smith@example.com",
        store_id=seed_store.id, created_at=clock.now(),
    )
    test_db.add(customer)
    await test_db.commit()
    return customer


@pytest.fixture
async def seed_staff(test_db, seed_store):
    staff = Staff(
        first_name="Mike", last_name="Hillyer", email="mike@example.com",
        username="mike", store_id=seed_store.id,
    )
    test_db.add(staff)
    await test_db.commit()
    return staff


@pytest.fixture
async def rent_args(seed_customer, seed_film, seed_store, seed_staff, seed_inventory):
    """Positional arguments for RentalService.rent_film against the seed rows."""
    return (seed_customer.id, seed_film.id, seed_store.id, seed_staff.id)


@pytest.fixture
async def client(test_engine, clock):
    """FastAPI test client bound to the test DB and the fixed clock."""
    app.state.db_manager = DatabaseSessionManager.from_engine(test_engine)
    app.state.clock = clock

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    del app.state.db_manager
    del app.state.clock
