"""
Per-user progress tracking.

Each user owns one document in the ``progress`` collection. Step progress
lives at the nested path ``courseId.lessonId.stepId`` and is written with
dotted-path merges, so visiting a step and answering it accumulate fields in
the same entry without clearing each other.
"""

from __future__ import annotations

import copy
from collections.abc import Callable
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from ..auth.context import AuthContext
from ..auth.guards import require_user
from ..config import settings
from ..errors import (
    AlreadyAnswered,
    LessonNotFound,
    NotMultipleChoice,
    StepNotFound,
)
from ..logging import bind_course_scope, get_logger
from ..store.base import ID_FIELD, Document, DocumentStore, get_path
from .identifiers import validate_course_id, validate_identifier
from .lessons import LessonRegistry, find_step

logger = get_logger(__name__)

PROGRESS = "progress"
MCQ = "mcq"


class ResubmissionPolicy(str, Enum):
    """What submit_answer does when the step already has an answer."""

    OVERWRITE = "overwrite"
    REJECT = "reject"
    APPEND_HISTORY = "append_history"


def _utcnow() -> datetime:
    return datetime.now(UTC)


def progress_path(course_id: str, lesson_id: str, step_id: str) -> str:
    """Dotted path of a step's entry inside a progress document."""
    validate_course_id(course_id)
    validate_identifier(lesson_id, "lessonId")
    validate_identifier(step_id, "stepId")
    return f"{course_id}.{lesson_id}.{step_id}"


class ProgressTracker:
    """Records step visits and answers into per-user progress documents."""

    def __init__(
        self,
        store: DocumentStore,
        lessons: LessonRegistry | None = None,
        resubmission: ResubmissionPolicy | str | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._progress = store.collection(PROGRESS)
        self._lessons = lessons or LessonRegistry(store)
        self.resubmission = ResubmissionPolicy(resubmission or settings.answer_resubmission)
        self._clock = clock

    async def _find_step(self, course_id: str, lesson_id: str, step_id: str) -> Document:
        lesson = await self._lessons.get(course_id, lesson_id)
        if lesson is None:
            raise LessonNotFound(course_id, lesson_id)

        step = find_step(lesson, step_id)
        if step is None:
            raise StepNotFound(lesson_id, step_id)
        return step

    def _now(self) -> str:
        return self._clock().isoformat()

    async def mark_visited(
        self, auth: AuthContext | None, course_id: str, lesson_id: str, step_id: str
    ) -> bool:
        """Mark a step visited, snapshotting its type and points."""
        user_id = require_user(auth)
        path = progress_path(course_id, lesson_id, step_id)
        bind_course_scope(course_id, lesson_id)
        step = await self._find_step(course_id, lesson_id, step_id)

        await self._progress.update(
            user_id,
            {
                f"{path}.visited": True,
                f"{path}.visitedAt": self._now(),
                f"{path}.type": step.get("type"),
                f"{path}.points": step.get("points"),
            },
        )

        logger.info("Step visited", step_id=step_id)
        return True

    async def submit_answer(
        self,
        auth: AuthContext | None,
        course_id: str,
        lesson_id: str,
        step_id: str,
        answer: str,
    ) -> Document:
        """
        Grade an answer to a multiple-choice step and record it.

        Returns a copy of the step carrying ``givenAnswer``; the lesson itself
        is not modified.

        Raises:
            LessonNotFound, StepNotFound: the step does not exist
            NotMultipleChoice: the step is not of type "mcq"
            AlreadyAnswered: the policy is REJECT and an answer is on record
        """
        user_id = require_user(auth)
        path = progress_path(course_id, lesson_id, step_id)
        bind_course_scope(course_id, lesson_id)
        step = await self._find_step(course_id, lesson_id, step_id)

        if step.get("type") != MCQ:
            raise NotMultipleChoice(step_id, step.get("type"))

        if self.resubmission is ResubmissionPolicy.REJECT:
            record = await self._progress.find_one(user_id)
            if get_path(record, f"{path}.answeredAt") is not None:
                logger.info("Answer resubmission rejected", step_id=step_id)
                raise AlreadyAnswered(step_id)

        is_correct = answer == step.get("correctAnswer")
        answered_at = self._now()

        set_fields: dict[str, Any] = {
            f"{path}.givenAnswer": answer,
            f"{path}.isCorrectAnswer": is_correct,
            f"{path}.answeredAt": answered_at,
            f"{path}.type": step.get("type"),
            f"{path}.points": step.get("points"),
        }
        push_fields = None
        if self.resubmission is ResubmissionPolicy.APPEND_HISTORY:
            push_fields = {
                f"{path}.history": {
                    "givenAnswer": answer,
                    "isCorrectAnswer": is_correct,
                    "answeredAt": answered_at,
                }
            }

        await self._progress.update(user_id, set_fields, push_fields)

        logger.info("Answer submitted", step_id=step_id, is_correct=is_correct)

        result = copy.deepcopy(step)
        result["givenAnswer"] = answer
        return result

    async def get_progress(self, auth: AuthContext | None) -> Document:
        """Return the caller's progress record, or an empty mapping."""
        user_id = require_user(auth)
        record = await self._progress.find_one(user_id) or {}
        record.pop(ID_FIELD, None)
        return record
