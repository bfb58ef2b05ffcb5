"""Lesson lifecycle, keyed by the composite id ``courseId--id``."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from ..auth.context import AuthContext
from ..auth.guards import require_admin
from ..logging import bind_course_scope, get_logger
from ..store.base import Document, DocumentStore
from .courses import LESSONS
from .identifiers import (
    LESSON_KEY_SEPARATOR,
    validate_course_id,
    validate_identifier,
    validate_step_ids,
)

logger = get_logger(__name__)


def lesson_key(course_id: str, lesson_id: str) -> str:
    """Composite identity of a lesson; used for create, read and delete alike."""
    return f"{course_id}{LESSON_KEY_SEPARATOR}{lesson_id}"


def find_step(lesson: Mapping[str, Any], step_id: str) -> Document | None:
    """Return the step with ``step_id`` from a lesson document, if any."""
    for step in lesson.get("steps") or []:
        if step.get("id") == step_id:
            return step
    return None


class LessonRegistry:
    """Owns documents in the ``lessons`` collection."""

    def __init__(self, store: DocumentStore):
        self._lessons = store.collection(LESSONS)

    async def create_or_replace(
        self,
        auth: AuthContext | None,
        course_id: str,
        id: str,
        name: str,
        intro: str,
        position: int,
        steps: Sequence[Mapping[str, Any]] | None = None,
    ) -> Document:
        """
        Store a lesson, replacing every field including the whole step list.

        Returns the lesson as re-read from the store.
        """
        require_admin(auth)
        validate_course_id(course_id)
        validate_identifier(id, "id")
        bind_course_scope(course_id, id)
        step_documents = [dict(step) for step in steps or []]
        validate_step_ids(step_documents)

        key = lesson_key(course_id, id)
        await self._lessons.replace(
            key,
            {
                "courseId": course_id,
                "id": id,
                "name": name,
                "intro": intro,
                "position": position,
                "steps": step_documents,
            },
        )
        lesson = await self._lessons.find_one(key)
        if lesson is None:
            raise RuntimeError(f"Lesson '{key}' missing after write")

        logger.info("Lesson saved", step_count=len(lesson["steps"]))
        return lesson

    async def get(self, course_id: str, id: str) -> Document | None:
        return await self._lessons.find_one(lesson_key(course_id, id))

    async def remove(self, auth: AuthContext | None, course_id: str, id: str) -> bool:
        """Delete a lesson; succeeds whether or not it existed."""
        require_admin(auth)
        validate_course_id(course_id)
        validate_identifier(id, "id")
        bind_course_scope(course_id, id)

        removed = await self._lessons.delete(lesson_key(course_id, id))
        logger.info("Lesson removed", existed=bool(removed))
        return True
