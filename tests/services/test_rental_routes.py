"""Rental Routes — borrow/return lifecycle and stock accounting over HTTP.

Invariants:
    - POST /libros/alquilar -> 201 + book with the new borrowed rental
    - Unknown title -> 404; quantity above stock -> 400 INSUFFICIENT_STOCK, book unchanged
    - PATCH /libros/devolver/{id} -> 200, stock credited back by the rental quantity
    - Second return -> 400 ALREADY_RETURNED, stock unchanged
    - /libros/alquilados/prestados never lists returned rentals
"""

from uuid import uuid4


async def _rent(client, payload):
    return await client.post("/libros/alquilar", json=payload)


async def _book(client, book_id):
    res = await client.get(f"/libros/{book_id}")
    assert res.status_code == 200
    return res.json()


# ─── RequestRental ───────────────────────────────────────────────

async def test_rental_decrements_stock_and_records_borrowed(
    client, seed_book, make_rental_payload,
):
    book = await seed_book("Dune", 3)

    res = await _rent(client, make_rental_payload("Dune", 2))

    assert res.status_code == 201
    body = res.json()
    assert body["id"] == str(book.id)
    assert body["available_copies"] == 1
    assert len(body["rentals"]) == 1
    rental = body["rentals"][0]
    assert rental["status"] == "borrowed"
    assert rental["quantity"] == 2
    assert rental["borrower_first_name"] == "Ana"
    assert rental["returned_at"] is None


async def test_rental_of_unknown_title_returns_404(client, make_rental_payload):
    res = await _rent(client, make_rental_payload("No Such Book", 1))
    assert res.status_code == 404
    assert res.json()["code"] == "RESOURCE_NOT_FOUND"


async def test_title_match_is_case_sensitive(client, seed_book, make_rental_payload):
    await seed_book("Dune", 3)
    res = await _rent(client, make_rental_payload("dune", 1))
    assert res.status_code == 404


async def test_rental_above_stock_is_rejected_and_book_untouched(
    client, seed_book, make_rental_payload,
):
    book = await seed_book("Dune", 1)

    res = await _rent(client, make_rental_payload("Dune", 2))

    assert res.status_code == 400
    assert res.json()["code"] == "INSUFFICIENT_STOCK"
    after = await _book(client, book.id)
    assert after["available_copies"] == 1
    assert after["rentals"] == []


async def test_rental_of_entire_stock_is_allowed(client, seed_book, make_rental_payload):
    await seed_book("Dune", 2)
    res = await _rent(client, make_rental_payload("Dune", 2))
    assert res.status_code == 201
    assert res.json()["available_copies"] == 0


async def test_zero_quantity_is_a_validation_error(client, seed_book, make_rental_payload):
    await seed_book("Dune", 3)
    res = await _rent(client, make_rental_payload("Dune", 0))
    assert res.status_code == 400
    assert res.json()["code"] == "VALIDATION_ERROR"


async def test_due_date_before_checkout_is_rejected(
    client, seed_book, make_rental_payload,
):
    await seed_book("Dune", 3)
    payload = make_rental_payload(
        "Dune", 1,
        checkout_date="2026-03-10T00:00:00+00:00",
        due_date="2026-03-01T00:00:00+00:00",
    )
    res = await _rent(client, payload)
    assert res.status_code == 400


# ─── ReturnRental ────────────────────────────────────────────────

async def test_return_restores_stock_and_marks_returned(
    client, seed_book, make_rental_payload,
):
    book = await seed_book("Dune", 3)
    rented = (await _rent(client, make_rental_payload("Dune", 2))).json()
    rental_id = rented["rentals"][0]["id"]

    res = await client.patch(f"/libros/devolver/{rental_id}")

    assert res.status_code == 200
    body = res.json()
    assert body["id"] == str(book.id)
    assert body["available_copies"] == 3
    assert body["rentals"][0]["status"] == "returned"
    assert body["rentals"][0]["returned_at"] is not None


async def test_second_return_reports_already_returned(
    client, seed_book, make_rental_payload,
):
    book = await seed_book("Dune", 3)
    rented = (await _rent(client, make_rental_payload("Dune", 1))).json()
    rental_id = rented["rentals"][0]["id"]
    await client.patch(f"/libros/devolver/{rental_id}")

    res = await client.patch(f"/libros/devolver/{rental_id}")

    assert res.status_code == 400
    assert res.json()["code"] == "ALREADY_RETURNED"
    assert (await _book(client, book.id))["available_copies"] == 3


async def test_return_of_unknown_rental_returns_404(client):
    res = await client.patch(f"/libros/devolver/{uuid4()}")
    assert res.status_code == 404


async def test_return_with_malformed_id_is_a_validation_error(client):
    res = await client.patch("/libros/devolver/not-a-uuid")
    assert res.status_code == 400


async def test_dune_scenario(client, seed_book, make_rental_payload):
    """3 copies; rent 2; rent 2 again fails; return the first -> 3."""
    book = await seed_book("Dune", 3)

    first = await _rent(client, make_rental_payload("Dune", 2))
    assert first.json()["available_copies"] == 1
    first_id = first.json()["rentals"][0]["id"]

    second = await _rent(client, make_rental_payload("Dune", 2))
    assert second.status_code == 400
    assert second.json()["code"] == "INSUFFICIENT_STOCK"
    assert (await _book(client, book.id))["available_copies"] == 1

    returned = await client.patch(f"/libros/devolver/{first_id}")
    assert returned.json()["available_copies"] == 3
    statuses = {r["id"]: r["status"] for r in returned.json()["rentals"]}
    assert statuses == {first_id: "returned"}


# ─── Listings ────────────────────────────────────────────────────

async def test_list_all_rentals_flattens_across_books(
    client, seed_book, make_rental_payload,
):
    await seed_book("Dune", 3)
    await seed_book("Emma", 3)
    await _rent(client, make_rental_payload("Dune", 1))
    await _rent(client, make_rental_payload("Emma", 2))
    await _rent(client, make_rental_payload("Dune", 1))

    res = await client.get("/libros/alquilados")

    assert res.status_code == 200
    rentals = res.json()
    assert len(rentals) == 3
    dune = [r for r in rentals if r["book_title"] == "Dune"]
    assert [r["quantity"] for r in dune] == [1, 1]
    assert {r["book_title"] for r in rentals} == {"Dune", "Emma"}


async def test_outstanding_rentals_exclude_returned(
    client, seed_book, make_rental_payload,
):
    await seed_book("Dune", 5)
    first = (await _rent(client, make_rental_payload("Dune", 1))).json()
    await _rent(client, make_rental_payload("Dune", 2))
    await client.patch(f"/libros/devolver/{first['rentals'][0]['id']}")

    outstanding = (await client.get("/libros/alquilados/prestados")).json()
    everything = (await client.get("/libros/alquilados")).json()

    assert len(everything) == 2
    assert len(outstanding) == 1
    assert all(r["status"] == "borrowed" for r in outstanding)
    assert outstanding[0]["quantity"] == 2


async def test_listings_are_empty_without_rentals(client):
    assert (await client.get("/libros/alquilados")).json() == []
    assert (await client.get("/libros/alquilados/prestados")).json() == []


async def test_quantity_beyond_column_range_is_insufficient_stock(
    client, seed_book, make_rental_payload,
):
    book = await seed_book("Dune", 3)

    res = await _rent(client, make_rental_payload("Dune", 2**63))

    assert res.status_code == 400
    assert res.json()["code"] == "INSUFFICIENT_STOCK"
    assert (await _book(client, book.id))["available_copies"] == 3
