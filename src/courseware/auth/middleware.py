"""Authentication dependencies for FastAPI."""

from __future__ import annotations

from fastapi import Header, HTTPException

from ..config import settings
from ..logging import get_logger
from .adapters.base import AuthAdapter, AuthenticationError
from .adapters.none import NoAuthAdapter
from .context import AuthContext, principal_is_admin
from .factory import get_auth_adapter_cached

logger = get_logger(__name__)


async def get_auth_context(
    authorization: str | None = Header(None),
    adapter: AuthAdapter | None = None,
) -> AuthContext:
    """
    Extract authentication context from the Authorization header.

    For no-auth mode, a missing header is treated as "Bearer dev-token".

    Raises:
        HTTPException: 401 for a malformed header or a token the adapter rejects
    """
    adapter = adapter or get_auth_adapter_cached()

    if not authorization:
        if isinstance(adapter, NoAuthAdapter):
            authorization = "Bearer dev-token"
        else:
            return AuthContext.anonymous()

    if not authorization.startswith("Bearer "):
        logger.warning("Invalid authorization format received")
        raise HTTPException(
            status_code=401,
            detail="Invalid authorization format. Expected: Bearer <token>",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = authorization[7:]
    if not token:
        logger.warning("Empty token provided")
        raise HTTPException(
            status_code=401,
            detail="Empty token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        principal = await adapter.verify_token(token)
    except AuthenticationError as e:
        logger.warning("Authentication failed", error=str(e))
        raise HTTPException(
            status_code=401,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        ) from e

    is_admin = principal_is_admin(principal, settings.admin_subjects)
    logger.debug(
        "Request authenticated",
        provider=principal["provider"],
        subject=principal["subject"],
        is_admin=is_admin,
    )

    return AuthContext(
        user_id=principal["subject"],
        principal=principal,
        token=token,
        is_admin=is_admin,
    )


async def get_auth_context_optional(
    authorization: str | None = Header(None),
    adapter: AuthAdapter | None = None,
) -> AuthContext:
    """
    Optional authentication - returns an anonymous context instead of failing.

    Use this where gated operations report their own Unauthorized errors.
    """
    try:
        return await get_auth_context(authorization, adapter)
    except HTTPException:
        return AuthContext.anonymous()
