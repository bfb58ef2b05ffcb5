"""No-auth adapter for local development without authentication."""

from __future__ import annotations

import os

from ...logging import get_logger
from .base import AuthenticationError, Principal

logger = get_logger(__name__)


class NoAuthAdapter:
    """
    No-auth adapter that bypasses authentication for local development.

    Every request is treated as coming from one default user, who is an
    administrator unless ``default_admin`` is False.
    WARNING: Only use this in development environments!
    """

    def __init__(self, default_user_id: str = "dev-user", default_admin: bool = True):
        self.default_user_id = default_user_id
        self.default_admin = default_admin

        environment = os.getenv("COURSEWARE_ENVIRONMENT", "").lower()
        if environment in ("production", "prod"):
            logger.error(
                "NoAuthAdapter detected in production environment! "
                "This is a security risk and should never be used in production.",
                environment=environment,
            )
            raise RuntimeError(
                "NoAuthAdapter cannot be used in production environments. "
                "Please configure a proper authentication provider."
            )

        logger.warning(
            "NoAuthAdapter is active - ALL requests will be treated as authenticated! "
            "This should ONLY be used in development.",
            user_id=default_user_id,
            admin=default_admin,
        )

    async def verify_token(self, token: str) -> Principal:
        """Accept any non-empty token and return the default principal."""
        if not token:
            raise AuthenticationError("Token required (even in no-auth mode)")

        return Principal(
            provider="none",
            subject=self.default_user_id,
            email="dev@example.com",
            display_name="Development User",
            claims={"mode": "development", "admin": self.default_admin},
        )

    async def issue_token(self, subject: str | None = None, claims: dict | None = None) -> str:
        """Issue a fake development token."""
        token_parts = ["dev-token", subject or self.default_user_id, "no-auth-mode"]

        if claims:
            token_parts.extend(f"{k}={v}" for k, v in claims.items())

        return "|".join(token_parts)
