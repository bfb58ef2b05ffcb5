from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

from ...services.courses import CourseRegistry
from ..access_control import get_auth_context_from_info, get_store_from_info

if TYPE_CHECKING:
    from ..types.course import Course


async def resolve_course(info: strawberry.Info, id: str) -> Course | None:
    """Resolve a course by id; no authentication required."""
    from ..types.course import Course as CourseType

    document = await CourseRegistry(get_store_from_info(info)).get(id)
    return CourseType.from_document(document) if document else None


async def create_course(info: strawberry.Info, id: str, name: str, position: int) -> Course:
    """Create or fully replace a course. Admin only."""
    registry = CourseRegistry(get_store_from_info(info))

    document = await registry.create_or_replace(
        get_auth_context_from_info(info), id=id, name=name, position=position
    )

    from ..types.course import Course as CourseType

    return CourseType.from_document(document)


async def remove_course(info: strawberry.Info, id: str) -> bool:
    """Delete a course. Admin only; idempotent."""
    registry = CourseRegistry(get_store_from_info(info))
    return await registry.remove(get_auth_context_from_info(info), id)


async def remove_all(info: strawberry.Info) -> bool:
    """Delete every course and lesson. Admin only."""
    registry = CourseRegistry(get_store_from_info(info))
    return await registry.remove_all(get_auth_context_from_info(info))
