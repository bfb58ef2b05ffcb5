"""SQLAlchemy-backed document store."""

from __future__ import annotations

import copy
from collections.abc import Callable, Mapping
from contextlib import AbstractAsyncContextManager
from typing import Any

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..database.connection import get_async_engine, get_async_session
from ..database.models import Documents
from ..logging import get_logger
from .base import ID_FIELD, Document, apply_update

logger = get_logger(__name__)

SessionFactory = Callable[[], AbstractAsyncContextManager[AsyncSession]]


class SQLCollection:
    """
    Collection stored as rows of the ``documents`` table.

    Every write locks the target row for the duration of its transaction, so
    a dotted-path merge never interleaves with another write to the same
    document.
    """

    def __init__(self, name: str, session_factory: SessionFactory):
        self.name = name
        self._session_factory = session_factory

    async def _get_for_update(self, session: AsyncSession, doc_id: str) -> Documents | None:
        return await session.get(
            Documents, (self.name, doc_id), with_for_update=True, populate_existing=True
        )

    async def _lock_or_create(self, session: AsyncSession, doc_id: str) -> Documents:
        row = await self._get_for_update(session, doc_id)
        if row is not None:
            return row

        try:
            async with session.begin_nested():
                row = Documents(collection=self.name, id=doc_id, body={ID_FIELD: doc_id})
                session.add(row)
            return row
        except IntegrityError:
            # Another transaction inserted the document first
            logger.debug("Concurrent document insert", collection=self.name, doc_id=doc_id)
            row = await self._get_for_update(session, doc_id)
            if row is None:
                raise
            return row

    async def find_one(self, doc_id: str) -> Document | None:
        async with self._session_factory() as session:
            row = await session.get(Documents, (self.name, doc_id))
            return copy.deepcopy(row.body) if row is not None else None

    async def replace(self, doc_id: str, document: Mapping[str, Any]) -> None:
        body = copy.deepcopy(dict(document))
        body[ID_FIELD] = doc_id
        async with self._session_factory() as session:
            row = await self._lock_or_create(session, doc_id)
            row.body = body

    async def update(
        self,
        doc_id: str,
        set_fields: Mapping[str, Any],
        push_fields: Mapping[str, Any] | None = None,
    ) -> None:
        async with self._session_factory() as session:
            row = await self._lock_or_create(session, doc_id)
            row.body = apply_update(copy.deepcopy(row.body), set_fields, push_fields)

    async def delete(self, doc_id: str) -> int:
        async with self._session_factory() as session:
            result = await session.execute(
                delete(Documents).where(Documents.collection == self.name, Documents.id == doc_id)
            )
            return result.rowcount or 0

    async def delete_all(self) -> int:
        async with self._session_factory() as session:
            result = await session.execute(
                delete(Documents).where(Documents.collection == self.name)
            )
            return result.rowcount or 0


class SQLDocumentStore:
    """Document store persisting collections through SQLAlchemy."""

    def __init__(self, session_factory: SessionFactory = get_async_session):
        self._session_factory = session_factory

    def collection(self, name: str) -> SQLCollection:
        return SQLCollection(name, self._session_factory)

    async def close(self) -> None:
        await get_async_engine().dispose()
        logger.info("SQL document store closed")
