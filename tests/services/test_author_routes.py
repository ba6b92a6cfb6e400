"""Author Routes — name-only CRUD under /autores."""

from uuid import uuid4


async def test_author_lifecycle(client):
    created = await client.post("/autores", json={"name": "Borges"})
    assert created.status_code == 201
    author_id = created.json()["id"]

    fetched = await client.get(f"/autores/{author_id}")
    assert fetched.json()["name"] == "Borges"

    renamed = await client.put(
        f"/autores/{author_id}", json={"name": "Jorge Luis Borges"},
    )
    assert renamed.status_code == 200
    assert renamed.json()["name"] == "Jorge Luis Borges"

    listed = await client.get("/autores")
    assert [a["name"] for a in listed.json()] == ["Jorge Luis Borges"]

    deleted = await client.delete(f"/autores/{author_id}")
    assert deleted.json() == {"message": "Author deleted"}
    assert (await client.get(f"/autores/{author_id}")).status_code == 404


async def test_empty_author_name_is_rejected(client):
    res = await client.post("/autores", json={"name": ""})
    assert res.status_code == 400
    assert res.json()["code"] == "VALIDATION_ERROR"


async def test_missing_author_returns_404(client):
    assert (await client.get(f"/autores/{uuid4()}")).status_code == 404
    assert (await client.delete(f"/autores/{uuid4()}")).status_code == 404


async def test_author_rename_does_not_touch_books(client, seed_book):
    await seed_book("Ficciones", 1, author="Borges")
    created = (await client.post("/autores", json={"name": "Borges"})).json()
    await client.put(f"/autores/{created['id']}", json={"name": "J. L. Borges"})

    books = (await client.get("/libros")).json()
    assert books[0]["author"] == "Borges"
