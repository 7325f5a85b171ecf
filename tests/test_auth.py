import pytest

from sqlstudio.auth import authenticate_user, hash_password, verify_password
from sqlstudio.models.user import User

ALICE = {"name": "Alice", "email": "Alice@Example.com", "password": "s3cret-pass"}


def _register(client, **overrides):
    return client.post("/api/auth/register", json={**ALICE, **overrides})


def test_hash_password_is_salted_argon2():
    first = hash_password("hunter22")
    second = hash_password("hunter22")
    assert first.startswith("$argon2")
    assert first != second
    assert verify_password("hunter22", first)
    assert not verify_password("hunter23", first)
    assert not verify_password("hunter22", None)


def test_register_returns_public_profile(client, db):
    res = _register(client)
    assert res.status_code == 201
    body = res.json()
    assert set(body) == {"id", "name", "email", "role"}
    assert body["name"] == "Alice"
    assert body["email"] == "alice@example.com"
    assert body["role"] == "Free Member"

    user = db.query(User).one()
    assert user.password != ALICE["password"]
    assert user.password.startswith("$argon2")


def test_duplicate_email_conflicts_and_creates_nothing(client, db):
    assert _register(client).status_code == 201
    res = _register(client, name="Other Alice", email="alice@example.com ")
    assert res.status_code == 400
    assert res.json()["error"] == "Email already exists"
    assert db.query(User).count() == 1


@pytest.mark.parametrize("payload", [
    {"email": "x@example.com", "password": "longenough"},
    {"name": "X", "password": "longenough"},
    {"name": "X", "email": "x@example.com"},
])
def test_register_missing_field_is_400(client, payload):
    res = client.post("/api/auth/register", json=payload)
    assert res.status_code == 400


def test_register_short_password_is_400(client, db):
    res = _register(client, password="abc")
    assert res.status_code == 400
    assert "at least 6" in res.json()["error"]
    assert db.query(User).count() == 0


def test_login_success(client):
    created = _register(client).json()
    res = client.post("/api/auth/login", json={"email": "ALICE@example.com", "password": ALICE["password"]})
    assert res.status_code == 200
    assert res.json() == created


def test_login_failures_are_indistinguishable(client):
    _register(client)
    wrong_password = client.post("/api/auth/login", json={"email": ALICE["email"], "password": "nope-nope"})
    unknown_email = client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "nope-nope"})
    assert wrong_password.status_code == 401
    assert unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()
    assert wrong_password.json()["error"] == "Invalid credentials"


def test_authenticate_user(client, db):
    _register(client)
    assert authenticate_user(db, "alice@example.com", ALICE["password"]).name == "Alice"
    assert authenticate_user(db, "alice@example.com", "wrong-pass") is None
    assert authenticate_user(db, "nobody@example.com", ALICE["password"]) is None
