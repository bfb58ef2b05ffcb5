"""Factory for creating auth adapters based on configuration."""

from __future__ import annotations

import json
from functools import lru_cache

from ..config import settings
from .adapters.base import AuthAdapter
from .adapters.jwt import JWTAuthAdapter
from .adapters.none import NoAuthAdapter


def get_auth_adapter(provider: str | None = None, config: dict | None = None) -> AuthAdapter:
    """Create and return the configured auth adapter."""
    provider = provider or settings.auth_provider
    config = settings.auth_config if config is None else config

    if provider == "none":
        return NoAuthAdapter(
            default_user_id=config.get("default_user_id", "dev-user"),
            default_admin=config.get("default_admin", True),
        )

    elif provider == "jwt":
        secret_key = config.get("secret_key") or settings.jwt_secret
        if not secret_key:
            raise ValueError(
                "JWT secret key is required. Set COURSEWARE_JWT_SECRET or provide in config."
            )

        return JWTAuthAdapter(
            secret_key=secret_key,
            algorithm=config.get("algorithm", settings.jwt_algorithm),
            issuer=config.get("issuer", "courseware"),
            audience=config.get("audience", "courseware-api"),
        )

    else:
        raise ValueError(f"Unsupported auth provider: {provider}")


@lru_cache(maxsize=4)
def _cached_adapter(
    provider: str, config_json: str, jwt_secret: str | None, jwt_algorithm: str
) -> AuthAdapter:
    _ = jwt_secret, jwt_algorithm
    return get_auth_adapter(provider, json.loads(config_json))


def get_auth_adapter_cached() -> AuthAdapter:
    """
    Return the adapter for the current settings, building it once per configuration.

    The cache key covers every setting the factory reads, so changing the
    provider or secret yields a fresh adapter.
    """
    return _cached_adapter(
        settings.auth_provider,
        json.dumps(settings.auth_config, sort_keys=True),
        settings.jwt_secret,
        settings.jwt_algorithm,
    )


def clear_auth_adapter_cache() -> None:
    _cached_adapter.cache_clear()
