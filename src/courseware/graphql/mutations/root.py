"""
Root GraphQL mutation definitions
"""

import strawberry

from ..types.course import Course, Lesson
from ..types.step import Step, StepInput


@strawberry.type
class Mutation:
    """Root GraphQL mutation type."""

    # Course mutations
    @strawberry.mutation(name="createCourse")
    async def create_course(
        self, info: strawberry.Info, id: str, name: str, position: int
    ) -> Course:
        """Create a course, replacing any course with the same id."""
        from ..resolvers.course import create_course

        return await create_course(info, id, name, position)

    @strawberry.mutation(name="removeCourse")
    async def remove_course(self, info: strawberry.Info, id: str) -> bool:
        """Remove a course."""
        from ..resolvers.course import remove_course

        return await remove_course(info, id)

    @strawberry.mutation(name="removeAll")
    async def remove_all(self, info: strawberry.Info) -> bool:
        """Remove every course and lesson; learner progress is kept."""
        from ..resolvers.course import remove_all

        return await remove_all(info)

    # Lesson mutations
    @strawberry.mutation(name="createLesson")
    async def create_lesson(
        self,
        info: strawberry.Info,
        course_id: str,
        id: str,
        name: str,
        intro: str,
        position: int,
        steps: list[StepInput] | None = None,
    ) -> Lesson:
        """Create a lesson, replacing any lesson with the same course and id."""
        from ..resolvers.lesson import create_lesson

        return await create_lesson(info, course_id, id, name, intro, position, steps)

    @strawberry.mutation(name="removeLesson")
    async def remove_lesson(self, info: strawberry.Info, course_id: str, id: str) -> bool:
        """Remove a lesson."""
        from ..resolvers.lesson import remove_lesson

        return await remove_lesson(info, course_id, id)

    # Progress mutations
    @strawberry.mutation(
        name="markVisited", description="Mark a given step in a lesson as visited"
    )
    async def mark_visited(
        self, info: strawberry.Info, course_id: str, lesson_id: str, step_id: str
    ) -> bool:
        from ..resolvers.progress import mark_visited

        return await mark_visited(info, course_id, lesson_id, step_id)

    @strawberry.mutation(
        name="submitAnswer", description="Submit an answer to a multiple-choice step"
    )
    async def submit_answer(
        self,
        info: strawberry.Info,
        course_id: str,
        lesson_id: str,
        step_id: str,
        answer: str,
    ) -> Step:
        from ..resolvers.progress import submit_answer

        return await submit_answer(info, course_id, lesson_id, step_id, answer)
