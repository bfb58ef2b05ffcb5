"""
Identifier checks run by the services once the caller has been authorized.

Identifiers become segments of dotted document paths, so they may not be
empty, contain "." or start with "$". Course ids also form the prefix of the
composite lesson key and may not contain its separator.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from ..errors import InvalidArgument

LESSON_KEY_SEPARATOR = "--"


def validate_identifier(value: str, field: str) -> str:
    if not value or not value.strip():
        raise InvalidArgument(f"'{field}' must not be empty")
    if "." in value:
        raise InvalidArgument(f"'{field}' must not contain '.'")
    if value.startswith("$"):
        raise InvalidArgument(f"'{field}' must not start with '$'")
    return value


def validate_course_id(value: str, field: str = "courseId") -> str:
    validate_identifier(value, field)
    if LESSON_KEY_SEPARATOR in value:
        raise InvalidArgument(f"'{field}' must not contain '{LESSON_KEY_SEPARATOR}'")
    return value


def validate_step_ids(steps: Sequence[Mapping[str, Any]]) -> None:
    """Check every step id and reject duplicates within one lesson."""
    seen: set[str] = set()
    for step in steps:
        step_id = step.get("id") or ""
        validate_identifier(step_id, "steps.id")
        if step_id in seen:
            raise InvalidArgument(f"Duplicate step id '{step_id}'")
        seen.add(step_id)
