
from datetime import UTC, datetime, timedelta

import jwt
import pytest
from google.oauth2 import id_token

from back.config import SECRET, Config
from back.schemas import UserSchema
from back.token import AccessToken
from config import settings
from database.repositories import UserRepository

from .helpers import register


@pytest.mark.asyncio
async def test_register_returns_token_and_user(client) -> None:
    response = await client.post("/api/auth/register",
                                 json={"email": "Ada@Example.com", "password": "password123",
                                       "name": "Ada Lovelace"})
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["user"]["email"] == "ada@example.com"
    assert data["user"]["name"] == "Ada Lovelace"

    me = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {data['token']}"})
    assert me.status_code == 200
    assert me.json()["data"]["id"] == data["user"]["id"]


@pytest.mark.asyncio
async def test_register_duplicate_email_conflicts(client) -> None:
    await register(client, "ada@example.com")
    response = await client.post("/api/auth/register",
                                 json={"email": "ADA@example.com", "password": "password123"})
    assert response.status_code == 409
    assert response.json() == {"message": "Account already exists"}


@pytest.mark.asyncio
async def test_register_validation_failure_lists_issues(client) -> None:
    response = await client.post("/api/auth/register", json={"email": "not-an-email", "password": "short"})
    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Validation failed"
    assert {tuple(issue["path"][-1:]) for issue in body["issues"]} >= {("email",), ("password",)}


@pytest.mark.asyncio
async def test_login_with_valid_and_invalid_credentials(client) -> None:
    account = await register(client, "grace@example.com")

    ok = await client.post("/api/auth/login", json={"email": "grace@example.com", "password": "password123"})
    assert ok.status_code == 200
    assert ok.json()["data"]["user"]["id"] == account.id

    bad = await client.post("/api/auth/login", json={"email": "grace@example.com", "password": "wrong-password"})
    assert bad.status_code == 401
    assert bad.json()["message"] == "Invalid email or password"


@pytest.mark.asyncio
async def test_login_is_throttled_per_ip(client, redis) -> None:
    await register(client, "grace@example.com")
    for _ in range(Config.ip_buffer):
        response = await client.post("/api/auth/login",
                                     json={"email": "grace@example.com", "password": "wrong-password"})
        assert response.status_code == 401

    blocked = await client.post("/api/auth/login",
                                json={"email": "grace@example.com", "password": "password123"})
    assert blocked.status_code == 401
    assert "Too many failed login attempts" in blocked.json()["message"]
    assert set(redis.expiry.values()) == {Config.ip_buffer_lifetime}


@pytest.mark.asyncio
async def test_protected_routes_require_bearer_token(client) -> None:
    missing = await client.get("/api/tasks")
    assert missing.status_code == 401
    assert missing.json() == {"message": "Authentication required"}

    garbage = await client.get("/api/projects", headers={"Authorization": "Bearer not.a.jwt"})
    assert garbage.status_code == 401

    wrong_scheme = await client.get("/api/auth/me", headers={"Authorization": "Basic abc"})
    assert wrong_scheme.status_code == 401


@pytest.mark.asyncio
async def test_expired_token_is_rejected(client) -> None:
    account = await register(client, "ada@example.com")
    user = UserSchema(id=account.id, email=account.email)
    issued = datetime.now(UTC).replace(tzinfo=None) - timedelta(seconds=Config.access_token_lifetime + 60)
    token = AccessToken(user, issued).to_token()

    response = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid or expired token"


def test_access_token_round_trip_keeps_claims() -> None:
    user = UserSchema(id="7d8f3c8e-6c9a-4bde-9a55-2b2f0f0b6a11", email="ada@example.com", name="Ada")
    token = AccessToken(user).to_token()
    claims = jwt.decode(token, SECRET, algorithms=[Config.algorithm])
    assert claims["sub"] == str(user.id)
    assert claims["name"] == "Ada"
    assert claims["exp"] - claims["iat"] == Config.access_token_lifetime
    assert AccessToken.from_token(token).user == user


@pytest.mark.asyncio
async def test_health_and_unknown_route(client) -> None:
    health = await client.get("/api/health")
    assert health.status_code == 200
    assert health.json()["status"] == "ok"

    missing = await client.get("/api/nowhere")
    assert missing.status_code == 404
    assert missing.json() == {"message": "Route GET /api/nowhere was not found"}


GOOGLE_CLIENT_ID = "1234567890-test.apps.googleusercontent.com"
GOOGLE_TOKEN = "google-id-token-" + "x" * 32


@pytest.fixture
def google_claims(monkeypatch) -> dict:
    """Claims returned by a stubbed Google verifier; set `error` to reject."""
    claims = {"sub": "google-sub-1", "email": "Ada@Gmail.com", "name": "Ada Google", "error": None}

    def verify(token, request, audience):
        assert token == GOOGLE_TOKEN
        assert audience == GOOGLE_CLIENT_ID
        if claims["error"] is not None:
            raise claims["error"]
        return {key: value for key, value in claims.items() if key != "error" and value is not None}

    monkeypatch.setattr(id_token, "verify_oauth2_token", verify)
    monkeypatch.setattr(settings, "google_client_id", GOOGLE_CLIENT_ID)
    return claims


async def google_sign_in(client):
    return await client.post("/api/auth/google", json={"idToken": GOOGLE_TOKEN})


@pytest.mark.asyncio
async def test_google_sign_in_requires_configuration(client, monkeypatch) -> None:
    monkeypatch.setattr(settings, "google_client_id", None)
    response = await google_sign_in(client)
    assert response.status_code == 500
    assert response.json() == {"message": "Google authentication is not configured"}


@pytest.mark.asyncio
async def test_google_sign_in_creates_account(client, db, google_claims) -> None:
    response = await google_sign_in(client)
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["user"]["email"] == "ada@gmail.com"
    assert data["user"]["name"] == "Ada Google"

    me = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {data['token']}"})
    assert me.json()["data"]["id"] == data["user"]["id"]

    async with db.context_session() as session:
        user = await UserRepository(session).get_by_email("ada@gmail.com")
        assert (user.provider, user.provider_id, user.password_hash) == ("google", "google-sub-1", None)

    again = await google_sign_in(client)
    assert again.json()["data"]["user"]["id"] == data["user"]["id"]


@pytest.mark.asyncio
async def test_google_sign_in_links_existing_account(client, db, google_claims) -> None:
    account = await register(client, "ada@gmail.com", name="Ada Lovelace")
    response = await google_sign_in(client)
    assert response.status_code == 200
    assert response.json()["data"]["user"]["id"] == account.id
    assert response.json()["data"]["user"]["name"] == "Ada Lovelace"

    google_claims["email"] = "ada.renamed@gmail.com"
    by_subject = await google_sign_in(client)
    assert by_subject.json()["data"]["user"]["id"] == account.id

    login = await client.post("/api/auth/login", json={"email": "ada@gmail.com", "password": "password123"})
    assert login.status_code == 200


@pytest.mark.asyncio
@pytest.mark.parametrize("field, value", [("error", ValueError("Token expired")), ("email", None), ("sub", None)])
async def test_google_sign_in_rejects_unverified_token(client, google_claims, field, value) -> None:
    google_claims[field] = value
    response = await google_sign_in(client)
    assert response.status_code == 400
    assert response.json() == {"message": "Unable to verify Google account"}


@pytest.mark.asyncio
async def test_google_sign_in_validates_body(client, google_claims) -> None:
    response = await client.post("/api/auth/google", json={"idToken": "short"})
    assert response.status_code == 400
    assert response.json()["message"] == "Validation failed"
