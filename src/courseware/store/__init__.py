"""Document store backends."""

from ..config import settings
from ..logging import get_logger
from .base import Collection, Document, DocumentStore, apply_update, get_path
from .memory import MemoryDocumentStore

logger = get_logger(__name__)


def create_store(backend: str | None = None) -> DocumentStore:
    """Create the document store selected by ``backend`` or the settings."""
    backend = backend or settings.store_backend

    if backend == "memory":
        logger.warning("Using in-memory document store; data is lost on restart")
        return MemoryDocumentStore()

    if backend == "sql":
        from ..database import init_database
        from .sql import SQLDocumentStore

        init_database()
        return SQLDocumentStore()

    raise ValueError(f"Unsupported store backend: {backend}")


__all__ = [
    "Collection",
    "Document",
    "DocumentStore",
    "MemoryDocumentStore",
    "apply_update",
    "create_store",
    "get_path",
]
