"""
Root GraphQL query definitions
"""

import strawberry

from ..types.course import Course, Lesson


@strawberry.type
class Query:
    """Root GraphQL query type."""

    @strawberry.field
    async def course(self, info: strawberry.Info, id: str) -> Course | None:
        """Get a course by id."""
        from ..resolvers.course import resolve_course

        return await resolve_course(info, id)

    @strawberry.field
    async def lesson(self, info: strawberry.Info, course_id: str, id: str) -> Lesson | None:
        """Get a lesson by course id and lesson id."""
        from ..resolvers.lesson import resolve_lesson

        return await resolve_lesson(info, course_id, id)

    @strawberry.field(name="myProgress")
    async def my_progress(
        self, info: strawberry.Info
    ) -> strawberry.scalars.JSON:  # type: ignore[reportInvalidTypeForm]
        """Get the authenticated user's progress, keyed by course, lesson and step."""
        from ..resolvers.progress import resolve_my_progress

        return await resolve_my_progress(info)
