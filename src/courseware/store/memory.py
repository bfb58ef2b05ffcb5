"""In-process document store for development and tests."""

from __future__ import annotations

import asyncio
import copy
from collections.abc import Mapping
from typing import Any

from ..logging import get_logger
from .base import ID_FIELD, Document, apply_update

logger = get_logger(__name__)


class MemoryCollection:
    """Dictionary-backed collection; writes are serialized by the store lock."""

    def __init__(self, name: str, lock: asyncio.Lock):
        self.name = name
        self._lock = lock
        self._documents: dict[str, Document] = {}

    async def find_one(self, doc_id: str) -> Document | None:
        document = self._documents.get(doc_id)
        return copy.deepcopy(document) if document is not None else None

    async def replace(self, doc_id: str, document: Mapping[str, Any]) -> None:
        stored = copy.deepcopy(dict(document))
        stored[ID_FIELD] = doc_id
        async with self._lock:
            self._documents[doc_id] = stored

    async def update(
        self,
        doc_id: str,
        set_fields: Mapping[str, Any],
        push_fields: Mapping[str, Any] | None = None,
    ) -> None:
        async with self._lock:
            current = copy.deepcopy(self._documents.get(doc_id, {ID_FIELD: doc_id}))
            # Apply to a copy so a bad path leaves the stored document intact
            self._documents[doc_id] = apply_update(
                current, copy.deepcopy(dict(set_fields)), copy.deepcopy(push_fields)
            )

    async def delete(self, doc_id: str) -> int:
        async with self._lock:
            return 1 if self._documents.pop(doc_id, None) is not None else 0

    async def delete_all(self) -> int:
        async with self._lock:
            count = len(self._documents)
            self._documents.clear()
            return count

    def __len__(self) -> int:
        return len(self._documents)


class MemoryDocumentStore:
    """Document store keeping every collection in process memory."""

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._collections: dict[str, MemoryCollection] = {}

    def collection(self, name: str) -> MemoryCollection:
        if name not in self._collections:
            self._collections[name] = MemoryCollection(name, self._lock)
        return self._collections[name]

    async def close(self) -> None:
        logger.debug("Memory document store closed", collections=list(self._collections))
