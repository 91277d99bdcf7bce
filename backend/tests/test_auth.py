# Auth API tests: register / login / getUser and the bearer-token gate
from datetime import datetime, timedelta, timezone

import jwt
from beanie import PydanticObjectId

from fintrack.core.security import create_access_token
from fintrack.models.user import User

from conftest import bearer, register


REGISTER = "/api/v1/auth/register"
LOGIN = "/api/v1/auth/login"
GET_USER = "/api/v1/auth/getUser"


async def _find_user(email):
    return await User.find_one(User.email == email)


async def _count_users(email):
    return await User.find(User.email == email).count()


def test_register_login_get_user_flow(client):
    r = client.post(REGISTER, json={"fullName": "A", "email": "a@x.com", "password": "secret"})
    assert r.status_code == 201
    body = r.json()
    assert body["token"]
    assert body["_id"] == body["user"]["_id"]
    assert body["user"]["fullName"] == "A"
    assert body["user"]["profileImageUrl"] is None

    r = client.post(LOGIN, json={"email": "a@x.com", "password": "wrong"})
    assert r.status_code == 401
    assert r.json() == {"message": "Invalid credentials"}

    r = client.post(LOGIN, json={"email": "a@x.com", "password": "secret"})
    assert r.status_code == 200
    token = r.json()["token"]
    assert r.json()["_id"] == body["_id"]

    r = client.get(GET_USER, headers=bearer(token))
    assert r.status_code == 200
    user = r.json()
    assert user["email"] == "a@x.com"
    assert user["_id"] == body["_id"]
    assert user["createdAt"].endswith("Z")
    assert user["updatedAt"].endswith("Z")


def test_password_never_returned(client):
    body = register(client, password="topsecret")
    for payload in (body, body["user"]):
        assert "password" not in payload
        assert "passwordHash" not in payload
    assert "topsecret" not in str(body)

    r = client.get(GET_USER, headers=bearer(body["token"]))
    assert "password" not in r.json()
    assert "passwordHash" not in r.json()


def test_password_is_stored_hashed(client):
    register(client, password="secret")
    user = client.portal.call(_find_user, "a@x.com")
    assert user.password_hash != "secret"
    assert user.password_hash.startswith("$2b$10$")


def test_register_keeps_profile_image_url(client):
    r = client.post(
        REGISTER,
        json={"fullName": "A", "email": "a@x.com", "password": "secret", "profileImageUrl": "http://img/a.png"},
    )
    assert r.status_code == 201
    assert r.json()["user"]["profileImageUrl"] == "http://img/a.png"


def test_duplicate_email_rejected_without_second_record(client):
    register(client)
    r = client.post(REGISTER, json={"fullName": "B", "email": "a@x.com", "password": "other"})
    assert r.status_code == 400
    assert r.json() == {"message": "Email already in use."}
    assert client.portal.call(_count_users, "a@x.com") == 1


def test_email_is_case_sensitive(client):
    register(client, email="a@x.com")
    r = client.post(REGISTER, json={"fullName": "B", "email": "A@x.com", "password": "secret"})
    assert r.status_code == 201


def test_register_missing_fields(client):
    for payload in (
        {"email": "a@x.com", "password": "secret"},
        {"fullName": "A", "password": "secret"},
        {"fullName": "A", "email": "a@x.com"},
        {"fullName": "", "email": "a@x.com", "password": "secret"},
        {},
    ):
        r = client.post(REGISTER, json=payload)
        assert r.status_code == 400
        assert r.json() == {"message": "All fields are required."}


def test_login_missing_fields(client):
    r = client.post(LOGIN, json={"email": "a@x.com"})
    assert r.status_code == 400
    assert r.json() == {"message": "All fields are required."}


def test_login_unknown_email_same_error_as_wrong_password(client):
    r = client.post(LOGIN, json={"email": "nobody@x.com", "password": "secret"})
    assert r.status_code == 401
    assert r.json() == {"message": "Invalid credentials"}


def test_unparseable_body_is_400(client):
    r = client.post(LOGIN, content=b"not json", headers={"Content-Type": "application/json"})
    assert r.status_code == 400
    assert "message" in r.json()


# ---- auth gate ----

def _assert_not_authorized(r):
    assert r.status_code == 401
    assert r.json() == {"message": "Not Authorized"}


def test_get_user_without_header(client):
    _assert_not_authorized(client.get(GET_USER))


def test_get_user_with_non_bearer_scheme(client):
    token = register(client)["token"]
    _assert_not_authorized(client.get(GET_USER, headers={"Authorization": f"Basic {token}"}))
    _assert_not_authorized(client.get(GET_USER, headers={"Authorization": token}))
    _assert_not_authorized(client.get(GET_USER, headers={"Authorization": "Bearer"}))


def test_get_user_with_garbage_token(client):
    _assert_not_authorized(client.get(GET_USER, headers=bearer("garbage")))


def test_get_user_with_foreign_signature(client):
    user_id = register(client)["_id"]
    forged = jwt.encode(
        {"id": user_id, "exp": datetime.now(tz=timezone.utc) + timedelta(hours=1)},
        "another-secret-that-is-long-enough-0123456789abcdef",
        algorithm="HS256",
    )
    _assert_not_authorized(client.get(GET_USER, headers=bearer(forged)))


def test_token_expiry_boundary(client, settings):
    user_id = register(client)["_id"]
    now = datetime.now(tz=timezone.utc)

    fresh = create_access_token(user_id, settings, now=now - timedelta(minutes=59, seconds=50))
    assert client.get(GET_USER, headers=bearer(fresh)).status_code == 200

    stale = create_access_token(user_id, settings, now=now - timedelta(hours=1))
    _assert_not_authorized(client.get(GET_USER, headers=bearer(stale)))


def test_token_for_missing_user_is_rejected(client, settings):
    token = create_access_token(str(PydanticObjectId()), settings)
    _assert_not_authorized(client.get(GET_USER, headers=bearer(token)))


def test_token_with_non_object_id_subject_is_rejected(client, settings):
    token = create_access_token("user123", settings)
    _assert_not_authorized(client.get(GET_USER, headers=bearer(token)))


def test_health(client):
    assert client.get("/health").json()["status"] == "ok"
