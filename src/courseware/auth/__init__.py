"""Authentication and authorization for Courseware."""

from .adapters.base import AuthAdapter, Principal
from .context import AuthContext
from .factory import get_auth_adapter, get_auth_adapter_cached
from .guards import require_admin, require_user
from .middleware import get_auth_context, get_auth_context_optional

__all__ = [
    "AuthAdapter",
    "Principal",
    "AuthContext",
    "get_auth_context",
    "get_auth_context_optional",
    "get_auth_adapter",
    "get_auth_adapter_cached",
    "require_admin",
    "require_user",
]
