"""Tests for building an AuthContext from the Authorization header."""

from unittest.mock import patch

import pytest
from fastapi import HTTPException

from courseware.auth.adapters.jwt import JWTAuthAdapter
from courseware.auth.adapters.none import NoAuthAdapter
from courseware.auth.factory import get_auth_adapter, get_auth_adapter_cached
from courseware.auth.middleware import get_auth_context, get_auth_context_optional
from courseware.config import settings


@pytest.fixture
def jwt_adapter():
    return JWTAuthAdapter(secret_key="middleware-test-secret-key-0123456789")


class TestGetAuthContext:
    @pytest.mark.asyncio
    async def test_missing_header_in_no_auth_mode(self):
        auth = await get_auth_context(None, NoAuthAdapter(default_user_id="dev"))

        assert auth.user_id == "dev"
        assert auth.is_admin is True
        assert auth.token == "dev-token"

    @pytest.mark.asyncio
    async def test_missing_header_is_anonymous(self, jwt_adapter):
        auth = await get_auth_context(None, jwt_adapter)
        assert auth.is_authenticated is False

    @pytest.mark.asyncio
    async def test_valid_learner_token(self, jwt_adapter):
        token = await jwt_adapter.issue_token("learner-1")
        auth = await get_auth_context(f"Bearer {token}", jwt_adapter)

        assert auth.user_id == "learner-1"
        assert auth.is_authenticated is True
        assert auth.is_admin is False

    @pytest.mark.asyncio
    async def test_admin_claim(self, jwt_adapter):
        token = await jwt_adapter.issue_token("boss", {"admin": True})
        auth = await get_auth_context(f"Bearer {token}", jwt_adapter)
        assert auth.is_admin is True

    @pytest.mark.asyncio
    async def test_admin_subjects_setting(self, jwt_adapter, monkeypatch):
        monkeypatch.setattr(settings, "admin_subjects", ["boss"])
        token = await jwt_adapter.issue_token("boss")

        auth = await get_auth_context(f"Bearer {token}", jwt_adapter)
        assert auth.is_admin is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize("header", ["Token abc", "Bearer ", "Bearer not-a-jwt"])
    async def test_bad_headers_raise_401(self, jwt_adapter, header):
        with pytest.raises(HTTPException) as exc_info:
            await get_auth_context(header, jwt_adapter)
        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_optional_falls_back_to_anonymous(self, jwt_adapter):
        auth = await get_auth_context_optional("Bearer not-a-jwt", jwt_adapter)
        assert auth.is_authenticated is False


class TestFactory:
    def test_none_provider(self):
        adapter = get_auth_adapter("none", {"default_user_id": "x", "default_admin": False})
        assert isinstance(adapter, NoAuthAdapter)
        assert adapter.default_user_id == "x"
        assert adapter.default_admin is False

    def test_jwt_provider_requires_secret(self, monkeypatch):
        monkeypatch.setattr(settings, "jwt_secret", None)
        with pytest.raises(ValueError, match="JWT secret key is required"):
            get_auth_adapter("jwt", {})

    def test_jwt_provider(self):
        adapter = get_auth_adapter("jwt", {"secret_key": "s3cret", "issuer": "me"})
        assert isinstance(adapter, JWTAuthAdapter)
        assert adapter.issuer == "me"

    def test_unknown_provider(self):
        with pytest.raises(ValueError, match="Unsupported auth provider"):
            get_auth_adapter("saml", {})

    @pytest.mark.asyncio
    async def test_adapter_built_once_per_configuration(self, monkeypatch):
        with patch("courseware.auth.factory.get_auth_adapter", wraps=get_auth_adapter) as factory:
            for _ in range(3):
                await get_auth_context_optional(None)
            assert factory.call_count == 1
            assert isinstance(get_auth_adapter_cached(), NoAuthAdapter)

            monkeypatch.setattr(settings, "auth_provider", "jwt")
            monkeypatch.setattr(settings, "jwt_secret", "rotated-secret-0123456789abcdef")
            assert isinstance(get_auth_adapter_cached(), JWTAuthAdapter)
            assert get_auth_adapter_cached() is get_auth_adapter_cached()
            assert factory.call_count == 2
