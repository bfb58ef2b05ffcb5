"""Authentication context for request handling."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .adapters.base import ADMIN_ROLE, Principal


@dataclass(frozen=True)
class AuthContext:
    """Runtime authentication context for a request."""

    user_id: str | None
    principal: Principal | None
    token: str | None
    is_admin: bool = False

    @property
    def is_authenticated(self) -> bool:
        """Check if the request is authenticated."""
        return self.user_id is not None and self.principal is not None

    @property
    def provider(self) -> str | None:
        """Get the authentication provider name."""
        return self.principal["provider"] if self.principal else None

    @classmethod
    def anonymous(cls) -> AuthContext:
        return cls(user_id=None, principal=None, token=None)


def principal_is_admin(principal: Principal, admin_subjects: Iterable[str] = ()) -> bool:
    """
    Decide whether a verified principal holds the admin role.

    Admin is granted by an ``admin: true`` claim, by ``"admin"`` in a
    ``roles`` claim, or by listing the subject in ``admin_subjects``.
    """
    if principal["subject"] in set(admin_subjects):
        return True

    claims = principal.get("claims") or {}
    if claims.get("admin") is True:
        return True

    roles = claims.get("roles")
    return isinstance(roles, list | tuple) and ADMIN_ROLE in roles
