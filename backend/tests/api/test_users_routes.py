"""User Routes — public CRUD, status codes, password never serialized.

Invariants:
    - /users/* needs no credential
    - Create → 201, missing id → 404, malformed body → 400
    - Positional mode re-indexes after delete; keyed mode keeps ids stable
"""

from datetime import datetime

import pytest


def _ts(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


async def _create(client, name: str, email: str, password: str = "secret"):
    res = await client.post(
        "/users/", json={"name": name, "email": email, "password": password},
    )
    assert res.status_code == 201
    return res.json()


async def test_create_user_returns_201_and_assigns_ids(client):
    first = await _create(client, "Alice", "a@x.com")
    second = await _create(client, "Bob", "b@x.com")
    assert first["id"] == 1
    assert second["id"] == 2
    assert first["name"] == "Alice"
    assert first["email"] == "a@x.com"
    assert first["created_at"] == first["updated_at"]


async def test_create_user_without_trailing_slash(client):
    res = await client.post("/users", json={"name": "Alice"})
    assert res.status_code == 201


async def test_password_never_serialized(client):
    created = await _create(client, "Alice", "a@x.com", password="hunter2")
    assert "password" not in created

    listed = (await client.get("/users/")).json()
    fetched = (await client.get("/users/1")).json()
    updated = (await client.put(
        "/users/1", json={"name": "A", "email": "a@x.com", "password": "new"},
    )).json()

    for body in (listed[0], fetched, updated):
        assert "password" not in body
    assert "hunter2" not in (await client.get("/users/")).text


async def test_list_users_in_creation_order(client):
    await _create(client, "Alice", "a@x.com")
    await _create(client, "Bob", "b@x.com")
    res = await client.get("/users/")
    assert res.status_code == 200
    assert [u["name"] for u in res.json()] == ["Alice", "Bob"]


async def test_list_users_empty(client):
    res = await client.get("/users/")
    assert res.status_code == 200
    assert res.json() == []


@pytest.mark.parametrize("raw_id", [
    "0", "-1", "2", "abc", "1.5",
    pytest.param("9223372036854775808", id="above-int64"),
    pytest.param("9" * 5000, id="5000-digits"),
])
async def test_get_user_invalid_id_returns_404(client, raw_id):
    await _create(client, "Alice", "a@x.com")
    res = await client.get(f"/users/{raw_id}")
    assert res.status_code == 404
    assert res.json()["error"]["message"] == "User not found"
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_update_user_full_replace(client):
    created = await _create(client, "Alice", "a@x.com")
    res = await client.put("/users/1", json={"name": "Alicia"})
    assert res.status_code == 200
    body = res.json()
    assert body["id"] == 1
    assert body["name"] == "Alicia"
    assert body["email"] == ""
    assert body["created_at"] == created["created_at"]
    assert _ts(body["updated_at"]) >= _ts(created["updated_at"])


async def test_update_user_ignores_client_supplied_identity_fields(client):
    created = await _create(client, "Alice", "a@x.com")
    res = await client.put(
        "/users/1",
        json={"id": 99, "name": "Alice", "created_at": "2000-01-01T00:00:00Z"},
    )
    assert res.json()["id"] == 1
    assert res.json()["created_at"] == created["created_at"]


async def test_update_missing_user_returns_404(client):
    res = await client.put("/users/5", json={"name": "Ghost"})
    assert res.status_code == 404


async def test_update_unknown_user_with_malformed_body_returns_404(client):
    res = await client.put(
        "/users/99", content=b"{not json", headers={"Content-Type": "application/json"},
    )
    assert res.status_code == 404
    assert res.json()["error"]["message"] == "User not found"


async def test_update_user_malformed_body_returns_400(client):
    await _create(client, "Alice", "a@x.com")
    res = await client.put(
        "/users/1", content=b"{not json", headers={"Content-Type": "application/json"},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"
    assert (await client.get("/users/1")).json()["name"] == "Alice"


async def test_create_user_wrong_field_type_returns_400(client):
    res = await client.post("/users/", json={"name": 123})
    assert res.status_code == 400
    assert res.json()["error"]["details"][0]["field"] == "body.name"
    assert (await client.get("/users/")).json() == []


async def test_create_user_unparseable_body_returns_400(client):
    res = await client.post(
        "/users/", content=b"{not json", headers={"Content-Type": "application/json"},
    )
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["details"][0]["field"] == "body"
    assert error["details"][0]["type"] == "json_invalid"
    assert (await client.get("/users/")).json() == []


async def test_delete_user_returns_message(client):
    await _create(client, "Alice", "a@x.com")
    res = await client.delete("/users/1")
    assert res.status_code == 200
    assert res.json() == {"message": "User deleted"}


async def test_delete_missing_user_returns_404(client):
    res = await client.delete("/users/1")
    assert res.status_code == 404


async def test_delete_keeps_other_ids_stable_by_default(client):
    await _create(client, "Alice", "a@x.com")
    await _create(client, "Bob", "b@x.com")

    await client.delete("/users/1")

    assert (await client.get("/users/1")).status_code == 404
    bob = await client.get("/users/2")
    assert bob.status_code == 200
    assert bob.json()["name"] == "Bob"


async def test_positional_delete_reindexes_later_users(positional_client):
    alice = await _create(positional_client, "Alice", "a@x.com")
    bob = await _create(positional_client, "Bob", "b@x.com")
    assert alice["id"] == 1
    assert bob["id"] == 2

    res = await positional_client.delete("/users/1")
    assert res.status_code == 200

    moved = await positional_client.get("/users/1")
    assert moved.status_code == 200
    assert moved.json()["name"] == "Bob"
    assert moved.json()["email"] == "b@x.com"
    assert (await positional_client.get("/users/2")).status_code == 404


async def test_users_need_no_token(client):
    res = await client.get("/users/")
    assert res.status_code == 200
