"""User API tests."""

import uuid


def _unique():
    return uuid.uuid4().hex[:6]


def test_create_user_returns_201(client):
    uid = _unique()
    r = client.post("/api/users", json={"username": f"alice_{uid}", "email": f"alice_{uid}@test.com"})
    assert r.status_code == 201
    data = r.json()
    assert data["username"] == f"alice_{uid}"
    assert data["email"] == f"alice_{uid}@test.com"
    assert isinstance(data["id"], int)
    assert data["created_at"]
    assert set(data) == {"id", "username", "email", "created_at"}


def test_duplicate_username_is_409_and_creates_nothing(client):
    uid = _unique()
    first = client.post("/api/users", json={"username": f"dup_{uid}", "email": f"dup_{uid}@test.com"})
    assert first.status_code == 201
    before = len(client.get("/api/users").json())

    r = client.post("/api/users", json={"username": f"dup_{uid}", "email": f"other_{uid}@test.com"})
    assert r.status_code == 409
    assert r.json()["detail"] == "Username or email already exists"
    assert len(client.get("/api/users").json()) == before


def test_duplicate_email_is_409(client):
    uid = _unique()
    client.post("/api/users", json={"username": f"a_{uid}", "email": f"same_{uid}@test.com"})
    r = client.post("/api/users", json={"username": f"b_{uid}", "email": f"same_{uid}@test.com"})
    assert r.status_code == 409


def test_missing_or_blank_fields_are_400(client):
    assert client.post("/api/users", json={"username": "nobody"}).status_code == 400
    assert client.post("/api/users", json={"email": "nobody@test.com"}).status_code == 400
    assert client.post("/api/users", json={"username": "   ", "email": "blank@test.com"}).status_code == 400


def test_invalid_email_is_400(client):
    r = client.post("/api/users", json={"username": f"bad_{_unique()}", "email": "not-an-email"})
    assert r.status_code == 400
    assert "email" in r.json()["detail"]


def test_get_user_by_id(client, make_user):
    user = make_user("getme")
    r = client.get(f"/api/users/{user['id']}")
    assert r.status_code == 200
    assert r.json() == user


def test_get_unknown_user_is_404(client):
    r = client.get("/api/users/999999")
    assert r.status_code == 404
    assert r.json()["detail"] == "User not found"


def test_list_users_newest_first(client, make_user):
    first = make_user("older")
    second = make_user("newer")
    ids = [u["id"] for u in client.get("/api/users").json()]
    assert ids.index(second["id"]) < ids.index(first["id"])
