"""
Step GraphQL type definitions
"""

from collections.abc import Mapping
from typing import Any

import strawberry

from ..access_control import get_auth_context_from_info


@strawberry.type
class Step:
    """A single unit of lesson content; "mcq" steps are graded."""

    id: str
    type: str
    points: float | None = None
    text: str | None = None
    options: list[str] | None = None
    given_answer: str | None = None
    answer_key: strawberry.Private[str | None] = None
    reveal_answer: strawberry.Private[bool] = False

    @strawberry.field
    def correct_answer(self, info: strawberry.Info) -> str | None:
        """Only admins see the answer key, except on a graded submission."""
        if self.reveal_answer or get_auth_context_from_info(info).is_admin:
            return self.answer_key
        return None

    @classmethod
    def from_document(cls, document: Mapping[str, Any], reveal_answer: bool = False) -> "Step":
        return cls(
            id=document["id"],
            type=document["type"],
            points=document.get("points"),
            text=document.get("text"),
            options=document.get("options"),
            given_answer=document.get("givenAnswer"),
            answer_key=document.get("correctAnswer"),
            reveal_answer=reveal_answer,
        )


@strawberry.input
class StepInput:
    """Step definition supplied with createLesson."""

    id: str
    type: str
    points: float = 0
    text: str | None = None
    options: list[str] | None = None
    correct_answer: str | None = None

    def to_document(self) -> dict[str, Any]:
        document: dict[str, Any] = {"id": self.id, "type": self.type, "points": self.points}
        if self.text is not None:
            document["text"] = self.text
        if self.options is not None:
            document["options"] = list(self.options)
        if self.correct_answer is not None:
            document["correctAnswer"] = self.correct_answer
        return document
