"""
Course and Lesson GraphQL type definitions
"""

from collections.abc import Mapping
from typing import Any

import strawberry

from .step import Step


@strawberry.type
class Course:
    """Top-level content grouping, ordered by position."""

    id: str
    name: str
    position: int

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "Course":
        return cls(id=document["_id"], name=document["name"], position=document["position"])


@strawberry.type
class Lesson:
    """Content unit belonging to a course."""

    composite_id: str
    course_id: str
    id: str
    name: str
    intro: str
    position: int
    steps: list[Step]

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "Lesson":
        return cls(
            composite_id=document["_id"],
            course_id=document["courseId"],
            id=document["id"],
            name=document["name"],
            intro=document["intro"],
            position=document["position"],
            steps=[Step.from_document(step) for step in document.get("steps") or []],
        )
