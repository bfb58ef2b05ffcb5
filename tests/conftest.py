"""
Shared pytest fixtures and configuration for all tests.
"""

import os
from collections.abc import Generator
from datetime import UTC, datetime
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
import strawberry

from courseware.auth.context import AuthContext
from courseware.auth.factory import clear_auth_adapter_cache
from courseware.services import CourseRegistry, LessonRegistry
from courseware.store.memory import MemoryDocumentStore

FIXED_NOW = datetime(2024, 3, 1, 12, 0, 0, tzinfo=UTC)

SAMPLE_STEPS = [
    {"id": "intro", "type": "text", "points": 0, "text": "Welcome"},
    {
        "id": "q1",
        "type": "mcq",
        "points": 5,
        "text": "2 + 2?",
        "options": ["3", "4", "5"],
        "correctAnswer": "4",
    },
]


@pytest.fixture
def store() -> MemoryDocumentStore:
    return MemoryDocumentStore()


@pytest.fixture
def admin_auth() -> AuthContext:
    return AuthContext(
        user_id="admin-1",
        principal={"provider": "jwt", "subject": "admin-1", "claims": {"admin": True}},
        token="admin-token",
        is_admin=True,
    )


@pytest.fixture
def user_auth() -> AuthContext:
    return AuthContext(
        user_id="learner-1",
        principal={"provider": "jwt", "subject": "learner-1", "claims": {}},
        token="learner-token",
    )


@pytest.fixture
def anonymous_auth() -> AuthContext:
    return AuthContext.anonymous()


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def mock_store() -> MagicMock:
    """A store whose collections are AsyncMocks, to assert that nothing was touched."""
    collections: dict[str, AsyncMock] = {}
    store = MagicMock()
    store.collection.side_effect = lambda name: collections.setdefault(name, AsyncMock())
    store.collections = collections
    return store


def assert_untouched(mock_store: MagicMock) -> None:
    for name, collection in mock_store.collections.items():
        assert collection.mock_calls == [], f"collection {name!r} was accessed"


@pytest_asyncio.fixture
async def seeded_store(store: MemoryDocumentStore, admin_auth: AuthContext) -> MemoryDocumentStore:
    """Store holding course 'py' with lesson 'basics' (a text step and an mcq step)."""
    await CourseRegistry(store).create_or_replace(admin_auth, "py", "Python", 1)
    await LessonRegistry(store).create_or_replace(
        admin_auth, "py", "basics", "Basics", "Start here", 1, SAMPLE_STEPS
    )
    return store


def make_info(store: Any, auth: AuthContext | None) -> MagicMock:
    """Create a mock GraphQL info object carrying a store and auth context."""
    info = MagicMock(spec=strawberry.Info)
    info.context = {"request": MagicMock(), "store": store, "auth": auth}
    return info


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables and the cached auth adapter for each test."""
    clear_auth_adapter_cache()
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)
