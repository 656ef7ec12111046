"""Users API — registration and listing over HTTP.

Invariants:
    - POST /api/users returns 201 {"_id", "username"}
    - Duplicate username returns 409 DUPLICATE_USERNAME envelope
    - GET /api/users returns every user once
"""

from uuid import UUID


async def test_create_user_returns_id_and_username(client):
    res = await client.post("/api/users", json={"username": "alice"})
    assert res.status_code == 201
    body = res.json()
    assert body["username"] == "alice"
    UUID(body["_id"])


async def test_create_user_strips_whitespace(client):
    res = await client.post("/api/users", json={"username": "  bob  "})
    assert res.json()["username"] == "bob"


async def test_duplicate_username_returns_409(client, alice):
    res = await client.post("/api/users", json={"username": "alice"})
    assert res.status_code == 409
    error = res.json()["error"]
    assert error["code"] == "DUPLICATE_USERNAME"
    assert error["category"] == "conflict"

    users = (await client.get("/api/users")).json()
    assert [u["username"] for u in users] == ["alice"]


async def test_blank_username_is_validation_error(client):
    res = await client.post("/api/users", json={"username": "   "})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_missing_username_is_validation_error(client):
    res = await client.post("/api/users", json={})
    assert res.status_code == 400
    assert res.json()["error"]["details"][0]["field"] == "body.username"


async def test_list_users(client, alice):
    await client.post("/api/users", json={"username": "bob"})
    res = await client.get("/api/users")
    assert res.status_code == 200
    users = res.json()
    assert sorted(u["username"] for u in users) == ["alice", "bob"]
    assert {"_id": alice["_id"], "username": "alice"} in users


async def test_list_users_empty(client):
    res = await client.get("/api/users")
    assert res.json() == []


async def test_create_user_from_form_post(client):
    res = await client.post("/api/users", data={"username": "carol"})
    assert res.status_code == 201
    assert res.json()["username"] == "carol"


async def test_blank_form_username_is_validation_error(client):
    res = await client.post("/api/users", data={"username": ""})
    assert res.status_code == 400
    assert res.json()["error"]["details"][0]["field"] == "body.username"


async def test_malformed_json_is_validation_error(client):
    res = await client.post(
        "/api/users", content=b"{not json",
        headers={"content-type": "application/json"},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"
