"""Course lifecycle: create/replace, remove and bulk removal."""

from __future__ import annotations

from ..auth.context import AuthContext
from ..auth.guards import require_admin
from ..logging import bind_course_scope, get_logger
from ..store.base import Document, DocumentStore
from .identifiers import validate_course_id

logger = get_logger(__name__)

COURSES = "courses"
LESSONS = "lessons"


class CourseRegistry:
    """Owns documents in the ``courses`` collection."""

    def __init__(self, store: DocumentStore):
        self._courses = store.collection(COURSES)
        self._lessons = store.collection(LESSONS)

    async def create_or_replace(
        self, auth: AuthContext | None, id: str, name: str, position: int
    ) -> Document:
        """
        Store a course under ``id``, fully overwriting any previous version.

        Returns the course as re-read from the store.
        """
        require_admin(auth)
        validate_course_id(id, "id")
        bind_course_scope(id)

        await self._courses.replace(id, {"name": name, "position": position})
        course = await self._courses.find_one(id)
        if course is None:
            raise RuntimeError(f"Course '{id}' missing after write")

        logger.info("Course saved", position=position)
        return course

    async def get(self, id: str) -> Document | None:
        return await self._courses.find_one(id)

    async def remove(self, auth: AuthContext | None, id: str) -> bool:
        """Delete a course; succeeds whether or not it existed."""
        require_admin(auth)
        validate_course_id(id, "id")
        bind_course_scope(id)

        removed = await self._courses.delete(id)
        logger.info("Course removed", existed=bool(removed))
        return True

    async def remove_all(self, auth: AuthContext | None) -> bool:
        """Delete every course and every lesson. Progress records are kept."""
        require_admin(auth)

        courses = await self._courses.delete_all()
        lessons = await self._lessons.delete_all()
        logger.warning("All courses and lessons removed", courses=courses, lessons=lessons)
        return True
