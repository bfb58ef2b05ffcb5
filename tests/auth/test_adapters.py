"""Unit tests for the JWT and no-auth adapters."""

from datetime import UTC, datetime, timedelta

import jwt
import pytest

from courseware.auth.adapters.base import AuthenticationError
from courseware.auth.adapters.jwt import JWTAuthAdapter
from courseware.auth.adapters.none import NoAuthAdapter
from courseware.auth.context import principal_is_admin


@pytest.fixture
def secret_key():
    return "test-secret-key-for-testing-only"


@pytest.fixture
def jwt_adapter(secret_key):
    return JWTAuthAdapter(
        secret_key=secret_key,
        algorithm="HS256",
        issuer="test-courseware",
        audience="test-api",
    )


def make_token(secret_key, **overrides):
    now = datetime.now(UTC)
    payload = {
        "iss": "test-courseware",
        "aud": "test-api",
        "sub": "learner-123",
        "email": "learner@example.com",
        "name": "Test Learner",
        "iat": now,
        "nbf": now,
        "exp": now + timedelta(hours=1),
    }
    payload.update(overrides)
    return jwt.encode(payload, secret_key, algorithm="HS256")


class TestJWTAdapter:
    @pytest.mark.asyncio
    async def test_verify_valid_token(self, jwt_adapter, secret_key):
        principal = await jwt_adapter.verify_token(make_token(secret_key, admin=True))

        assert principal["provider"] == "jwt"
        assert principal["subject"] == "learner-123"
        assert principal["email"] == "learner@example.com"
        assert principal["display_name"] == "Test Learner"
        assert principal["claims"]["admin"] is True

    @pytest.mark.asyncio
    async def test_expired_token(self, jwt_adapter, secret_key):
        past = datetime.now(UTC) - timedelta(hours=2)
        token = make_token(secret_key, iat=past, nbf=past, exp=past + timedelta(hours=1))

        with pytest.raises(AuthenticationError, match="Invalid token"):
            await jwt_adapter.verify_token(token)

    @pytest.mark.asyncio
    async def test_wrong_secret(self, jwt_adapter):
        with pytest.raises(AuthenticationError):
            await jwt_adapter.verify_token(make_token("another-secret-key-entirely"))

    @pytest.mark.asyncio
    async def test_wrong_audience(self, jwt_adapter, secret_key):
        with pytest.raises(AuthenticationError):
            await jwt_adapter.verify_token(make_token(secret_key, aud="someone-else"))

    @pytest.mark.asyncio
    async def test_missing_subject(self, jwt_adapter, secret_key):
        now = datetime.now(UTC)
        token = jwt.encode(
            {"iss": "test-courseware", "aud": "test-api", "iat": now, "nbf": now,
             "exp": now + timedelta(hours=1)},
            secret_key,
            algorithm="HS256",
        )
        with pytest.raises(AuthenticationError, match="Missing 'sub'"):
            await jwt_adapter.verify_token(token)

    @pytest.mark.asyncio
    async def test_issue_then_verify(self, jwt_adapter):
        token = await jwt_adapter.issue_token("learner-9", {"roles": ["admin"]})
        principal = await jwt_adapter.verify_token(token)

        assert principal["subject"] == "learner-9"
        assert principal["claims"]["roles"] == ["admin"]

    @pytest.mark.asyncio
    async def test_issue_admin_token_with_roles(self, jwt_adapter):
        token = await jwt_adapter.issue_token("boss", {"roles": ["editor"]}, roles=["admin"])
        principal = await jwt_adapter.verify_token(token)

        assert principal["claims"]["roles"] == ["admin", "editor"]
        assert principal_is_admin(principal) is True

    @pytest.mark.asyncio
    async def test_claims_cannot_override_subject(self, jwt_adapter):
        token = await jwt_adapter.issue_token("learner-9", {"sub": "boss", "iss": "evil"})
        principal = await jwt_adapter.verify_token(token)

        assert principal["subject"] == "learner-9"

    @pytest.mark.asyncio
    async def test_issue_requires_subject(self, jwt_adapter):
        with pytest.raises(ValueError):
            await jwt_adapter.issue_token(None)


class TestNoAuthAdapter:
    @pytest.mark.asyncio
    async def test_any_token_is_default_user(self):
        principal = await NoAuthAdapter(default_user_id="dev").verify_token("whatever")

        assert principal["provider"] == "none"
        assert principal["subject"] == "dev"
        assert principal["claims"]["admin"] is True

    @pytest.mark.asyncio
    async def test_non_admin_mode(self):
        principal = await NoAuthAdapter(default_admin=False).verify_token("t")
        assert principal["claims"]["admin"] is False

    @pytest.mark.asyncio
    async def test_empty_token_rejected(self):
        with pytest.raises(AuthenticationError):
            await NoAuthAdapter().verify_token("")

    def test_refuses_production(self, monkeypatch):
        monkeypatch.setenv("COURSEWARE_ENVIRONMENT", "production")
        with pytest.raises(RuntimeError, match="production"):
            NoAuthAdapter()

    @pytest.mark.asyncio
    async def test_issue_token(self):
        token = await NoAuthAdapter().issue_token("u1", {"admin": True})
        assert token == "dev-token|u1|no-auth-mode|admin=True"
