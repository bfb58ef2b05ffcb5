from __future__ import annotations

from typing import TYPE_CHECKING, Any

import strawberry

from ...services.progress import ProgressTracker
from ..access_control import get_auth_context_from_info, get_store_from_info

if TYPE_CHECKING:
    from ..types.step import Step


async def mark_visited(info: strawberry.Info, course_id: str, lesson_id: str, step_id: str) -> bool:
    """Mark a step visited for the calling user."""
    tracker = ProgressTracker(get_store_from_info(info))
    return await tracker.mark_visited(
        get_auth_context_from_info(info), course_id, lesson_id, step_id
    )


async def submit_answer(
    info: strawberry.Info, course_id: str, lesson_id: str, step_id: str, answer: str
) -> Step:
    """Grade and record the calling user's answer to a multiple-choice step."""
    tracker = ProgressTracker(get_store_from_info(info))
    step = await tracker.submit_answer(
        get_auth_context_from_info(info), course_id, lesson_id, step_id, answer
    )

    from ..types.step import Step as StepType

    return StepType.from_document(step, reveal_answer=True)


async def resolve_my_progress(info: strawberry.Info) -> dict[str, Any]:
    """Resolve the calling user's progress record."""
    tracker = ProgressTracker(get_store_from_info(info))
    return await tracker.get_progress(get_auth_context_from_info(info))
