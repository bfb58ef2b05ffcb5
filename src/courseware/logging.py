"""
structlog setup for the courseware API.

While a request is in flight every log line carries its request id and, as
they become known, the caller, the GraphQL operation and the course or lesson
being touched. These live in structlog's context variables, so services log
plain events and the request scope is merged in by the processor chain.
"""

import logging
import sys
import uuid
from typing import Any

import structlog
from structlog.contextvars import (
    bind_contextvars,
    clear_contextvars,
    get_contextvars,
    merge_contextvars,
)

REQUEST_SCOPE_KEYS = ("request_id", "user_id", "operation", "course_id", "lesson_id")


def drop_unset_scope(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Leave request-scope keys that are bound to None out of the rendered line."""
    for key in REQUEST_SCOPE_KEYS:
        if key in event_dict and event_dict[key] is None:
            del event_dict[key]
    return event_dict


def configure_logging(debug: bool = False, level: str | None = None) -> None:
    """Configure structlog and the stdlib root logger it writes through.

    Args:
        debug: Render coloured console lines instead of JSON.
        level: Explicit level name; defaults to DEBUG in debug mode, else INFO.
    """
    log_level = getattr(logging, level.upper()) if level else (
        logging.DEBUG if debug else logging.INFO
    )
    logging.basicConfig(level=log_level, stream=sys.stdout, format="%(message)s", force=True)

    renderer = (
        structlog.dev.ConsoleRenderer(colors=True)
        if debug
        else structlog.processors.JSONRenderer()
    )
    structlog.configure(
        processors=[
            merge_contextvars,
            drop_unset_scope,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="ISO", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def generate_request_id() -> str:
    return uuid.uuid4().hex[:16]


def set_request_context(request_id: str | None = None, user_id: str | None = None) -> str:
    """Start a fresh request scope and return its request id."""
    request_id = request_id or generate_request_id()
    clear_contextvars()
    bind_contextvars(request_id=request_id, user_id=user_id)
    return request_id


def bind_user_id(user_id: str | None) -> None:
    bind_contextvars(user_id=user_id)


def bind_operation(operation: str | None) -> None:
    """Record the GraphQL operation name for the rest of the request."""
    bind_contextvars(operation=operation)


def bind_course_scope(course_id: str | None, lesson_id: str | None = None) -> None:
    """Record which course (and lesson) the current mutation is working on."""
    bind_contextvars(course_id=course_id, lesson_id=lesson_id)


def clear_request_context() -> None:
    clear_contextvars()


def get_request_id() -> str | None:
    return get_contextvars().get("request_id")


def get_user_id() -> str | None:
    return get_contextvars().get("user_id")


def get_course_scope() -> tuple[str | None, str | None]:
    context = get_contextvars()
    return context.get("course_id"), context.get("lesson_id")
