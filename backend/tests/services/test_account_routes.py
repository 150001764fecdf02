"""Customer & Staff Routes — registration, profile and activation over HTTP.

Tests:
    - Registration returns 201; duplicates return 409 DUPLICATE_RECORD
    - Deactivation with a rental out returns 409 HAS_ACTIVE_RENTALS
    - Profile aggregates rentals and spend
    - Staff by store is an empty list, active staff listing is 404 when empty
"""

from decimal import Decimal

from filmrental.models.store import Store


async def test_register_customer(client, seed_store):
    res = await client.post("/api/v1/customers", json={
        "first_name": "  Linda ", "last_name": "Williams",
        "email": "linda@example.com", "store_id": str(seed_store.id),
    })
    assert res.status_code == 201
    assert res.json()["first_name"] == "Linda"
    assert res.json()["active"] is True


async def test_register_customer_bad_email(client, seed_store):
    res = await client.post("/api/v1/customers", json={
        "first_name": "Linda", "last_name": "Williams",
        "email": "not-an-email", "store_id": str(seed_store.id),
    })
    assert res.status_code == 400


async def test_duplicate_customer_email(client, seed_customer, seed_store):
    res = await client.post("/api/v1/customers", json={
        "first_name": "Mary", "last_name": "Smith",
        "email": "mary.smith@example.com", "store_id": str(seed_store.id),
    })
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "DUPLICATE_RECORD"


async def test_deactivate_with_rental_out(client, rent_args):
    customer_id, film_id, store_id, staff_id = rent_args
    await client.post("/api/v1/rentals", json={
        "customer_id": str(customer_id), "film_id": str(film_id),
        "store_id": str(store_id), "staff_id": str(staff_id),
    })

    res = await client.patch(f"/api/v1/customers/{customer_id}/deactivate")
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "HAS_ACTIVE_RENTALS"

    profile = await client.get(f"/api/v1/customers/{customer_id}/profile")
    assert profile.json()["active_rentals"] == 1
    assert profile.json()["customer"]["id"] == str(customer_id)
    assert Decimal(profile.json()["total_spent"]) == Decimal("0.00")


async def test_deactivate_and_activate_customer(client, seed_customer):
    res = await client.patch(f"/api/v1/customers/{seed_customer.id}/deactivate")
    assert res.json()["active"] is False
    res = await client.patch(f"/api/v1/customers/{seed_customer.id}/activate")
    assert res.json()["active"] is True


async def test_update_customer(client, seed_customer):
    res = await client.patch(
        f"/api/v1/customers/{seed_customer.id}", json={"last_name": "Jones"},
    )
    assert res.status_code == 200
    assert res.json()["last_name"] == "Jones"
    assert res.json()["email"] == "mary.smith@example.com"


async def test_customer_histories_empty(client, seed_customer):
    rentals = await client.get(f"/api/v1/customers/{seed_customer.id}/rentals")
    payments = await client.get(f"/api/v1/customers/{seed_customer.id}/payments")
    assert rentals.status_code == 404
    assert payments.status_code == 404


async def test_register_staff(client, seed_store):
    res = await client.post("/api/v1/staff", json={
        "first_name": "Jon", "last_name": "Stephens", "email": "jon@example.com",
        "username": "jon", "store_id": str(seed_store.id),
    })
    assert res.status_code == 201
    staff_id = res.json()["id"]

    fetched = await client.get(f"/api/v1/staff/{staff_id}")
    assert fetched.json()["username"] == "jon"


async def test_staff_by_store_empty_list(client, test_db):
    store = Store(name="Woodridge")
    test_db.add(store)
    await test_db.commit()

    res = await client.get(f"/api/v1/staff/store/{store.id}")
    assert res.status_code == 200
    assert res.json() == []


async def test_active_staff_listing(client, seed_staff):
    res = await client.get("/api/v1/staff/active")
    assert [s["id"] for s in res.json()] == [str(seed_staff.id)]

    await client.patch(f"/api/v1/staff/{seed_staff.id}/deactivate")
    res = await client.get("/api/v1/staff/active")
    assert res.status_code == 404


async def test_health(client):
    res = await client.get("/api/v1/health/")
    assert res.json()["status"] == "healthy"
    ready = await client.get("/api/v1/health/ready")
    assert ready.status_code == 200
