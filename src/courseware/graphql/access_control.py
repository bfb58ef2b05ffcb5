"""
Access to per-request collaborators stored in the GraphQL context
"""

import strawberry

from ..auth.context import AuthContext
from ..logging import get_logger
from ..store.base import DocumentStore

logger = get_logger(__name__)


def get_auth_context_from_info(info: strawberry.Info) -> AuthContext:
    """
    Extract the caller's auth context from the GraphQL info object.

    Returns an anonymous context when none was established, so guards
    report Unauthorized instead of failing on a missing key.
    """
    auth = info.context.get("auth")
    if auth is None:
        logger.warning("Auth context not found in GraphQL context")
        return AuthContext.anonymous()
    return auth


def get_store_from_info(info: strawberry.Info) -> DocumentStore:
    """Extract the document store injected into the GraphQL context."""
    store = info.context.get("store")
    if store is None:
        raise RuntimeError("Document store not found in GraphQL context")
    return store
