from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

from ...services.lessons import LessonRegistry
from ..access_control import get_auth_context_from_info, get_store_from_info

if TYPE_CHECKING:
    from ..types.course import Lesson
    from ..types.step import StepInput


async def resolve_lesson(info: strawberry.Info, course_id: str, id: str) -> Lesson | None:
    """Resolve a lesson by course id and lesson id; no authentication required."""
    from ..types.course import Lesson as LessonType

    document = await LessonRegistry(get_store_from_info(info)).get(course_id, id)
    return LessonType.from_document(document) if document else None


async def create_lesson(
    info: strawberry.Info,
    course_id: str,
    id: str,
    name: str,
    intro: str,
    position: int,
    steps: list[StepInput] | None = None,
) -> Lesson:
    """Create or fully replace a lesson and its step list. Admin only."""
    registry = LessonRegistry(get_store_from_info(info))
    document = await registry.create_or_replace(
        get_auth_context_from_info(info),
        course_id=course_id,
        id=id,
        name=name,
        intro=intro,
        position=position,
        steps=[step.to_document() for step in steps or []],
    )

    from ..types.course import Lesson as LessonType

    return LessonType.from_document(document)


async def remove_lesson(info: strawberry.Info, course_id: str, id: str) -> bool:
    """Delete a lesson. Admin only; idempotent."""
    registry = LessonRegistry(get_store_from_info(info))
    return await registry.remove(get_auth_context_from_info(info), course_id, id)
