"""HS256 tokens for learners and course administrators."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime, timedelta

import jwt
from jwt.exceptions import InvalidTokenError, MissingRequiredClaimError

from ...logging import get_logger
from .base import AuthenticationError, Principal

logger = get_logger(__name__)


class JWTAuthAdapter:
    """
    Verifies and issues self-signed courseware tokens.

    ``sub`` is the learner id progress is stored under. Admin rights travel as
    ``admin: true`` or as ``"admin"`` in the ``roles`` claim; tokens issued
    here use ``roles``.
    """

    required_claims = ("sub", "exp", "iat")

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        issuer: str = "courseware",
        audience: str = "courseware-api",
        ttl: timedelta = timedelta(hours=24),
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.issuer = issuer
        self.audience = audience
        self.ttl = ttl

    def _decode(self, token: str) -> dict:
        try:
            return jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                issuer=self.issuer,
                audience=self.audience,
                options={"require": list(self.required_claims)},
            )
        except MissingRequiredClaimError as e:
            logger.warning("Token rejected", missing_claim=e.claim)
            raise AuthenticationError(f"Missing '{e.claim}' claim in token") from e
        except InvalidTokenError as e:
            logger.warning("Token rejected", error=str(e))
            raise AuthenticationError("Invalid token") from e

    async def verify_token(self, token: str) -> Principal:
        claims = self._decode(token)
        if not claims["sub"]:
            raise AuthenticationError("Missing 'sub' claim in token")

        principal = Principal(provider="jwt", subject=claims["sub"], claims=claims)
        if email := claims.get("email"):
            principal["email"] = email
        if name := claims.get("name"):
            principal["display_name"] = name
        return principal

    async def issue_token(
        self,
        subject: str | None = None,
        claims: dict | None = None,
        roles: Sequence[str] = (),
    ) -> str:
        """Sign a token for ``subject``; pass ``roles=["admin"]`` for an administrator."""
        if not subject:
            raise ValueError("Courseware tokens need a subject")

        now = datetime.now(UTC)
        payload = dict(claims or {})
        if roles:
            payload["roles"] = sorted(set(payload.get("roles", ())) | set(roles))
        payload.update(
            iss=self.issuer,
            aud=self.audience,
            sub=subject,
            iat=now,
            nbf=now,
            exp=now + self.ttl,
        )
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)
