"""Document store interface and dotted-path merge helpers."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

Document = dict[str, Any]

ID_FIELD = "_id"


class Collection(Protocol):
    """A named set of documents addressed by string id."""

    name: str

    async def find_one(self, doc_id: str) -> Document | None:
        """Return a copy of the document, or None if it does not exist."""
        ...

    async def replace(self, doc_id: str, document: Mapping[str, Any]) -> None:
        """Insert or fully overwrite the document stored under ``doc_id``."""
        ...

    async def update(
        self,
        doc_id: str,
        set_fields: Mapping[str, Any],
        push_fields: Mapping[str, Any] | None = None,
    ) -> None:
        """
        Merge fields into a document, creating it if needed.

        Keys are dotted paths. ``set_fields`` assigns the value at each path;
        ``push_fields`` appends the value to the list at each path. Fields
        outside the given paths are left untouched, and the whole update is
        applied atomically per document.
        """
        ...

    async def delete(self, doc_id: str) -> int:
        """Delete one document; returns the number removed (0 or 1)."""
        ...

    async def delete_all(self) -> int:
        """Delete every document in the collection; returns the number removed."""
        ...


class DocumentStore(Protocol):
    """Factory for named collections backed by one storage engine."""

    def collection(self, name: str) -> Collection: ...

    async def close(self) -> None: ...


def split_path(path: str) -> list[str]:
    """Split a dotted path, rejecting empty segments."""
    parts = path.split(".")
    if any(not part for part in parts):
        raise ValueError(f"Invalid document path: {path!r}")
    return parts


def _parent_of(document: Document, parts: list[str]) -> Document:
    node = document
    for part in parts[:-1]:
        child = node.get(part)
        if not isinstance(child, dict):
            child = {}
            node[part] = child
        node = child
    return node


def apply_update(
    document: Document,
    set_fields: Mapping[str, Any],
    push_fields: Mapping[str, Any] | None = None,
) -> Document:
    """Apply a dotted-path merge to ``document`` in place and return it."""
    for path, value in set_fields.items():
        parts = split_path(path)
        _parent_of(document, parts)[parts[-1]] = value

    for path, value in (push_fields or {}).items():
        parts = split_path(path)
        parent = _parent_of(document, parts)
        current = parent.get(parts[-1])
        if not isinstance(current, list):
            current = []
            parent[parts[-1]] = current
        current.append(value)

    return document


def get_path(document: Mapping[str, Any] | None, path: str) -> Any:
    """Read the value at a dotted path, or None if any segment is missing."""
    node: Any = document
    for part in split_path(path):
        if not isinstance(node, Mapping):
            return None
        node = node.get(part)
    return node
