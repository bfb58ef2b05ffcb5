"""Role checks run at the top of every mutation, before any store access."""

from __future__ import annotations

from ..errors import Unauthorized
from ..logging import get_logger
from .context import AuthContext

logger = get_logger(__name__)


def require_admin(auth: AuthContext | None) -> AuthContext:
    """Raise Unauthorized unless the caller is an administrator."""
    if auth is None or not auth.is_authenticated or not auth.is_admin:
        logger.info("Admin access denied", user_id=auth.user_id if auth else None)
        raise Unauthorized("Unauthorized Access! - Only for admins")
    return auth


def require_user(auth: AuthContext | None) -> str:
    """Raise Unauthorized unless the caller is logged in; returns the user id."""
    if auth is None or not auth.is_authenticated or auth.user_id is None:
        logger.info("Anonymous access denied")
        raise Unauthorized("Unauthorized Access! - Only for loggedIn users")
    return auth.user_id
