"""Tests for request logging helpers."""

import pytest

from courseware.logging import (
    bind_course_scope,
    bind_user_id,
    clear_request_context,
    drop_unset_scope,
    generate_request_id,
    get_course_scope,
    get_request_id,
    get_user_id,
    set_request_context,
)
from courseware.middleware import operation_name_from_payload, sanitize_query_params


class TestSanitizeQueryParams:
    def test_redacts_sensitive_keys(self):
        params = {"access_token": "abc", "page": "2", "API_KEY": "k"}
        assert sanitize_query_params(params) == {
            "access_token": "[REDACTED]",
            "page": "2",
            "API_KEY": "[REDACTED]",
        }


class TestOperationName:
    @pytest.mark.parametrize(
        ("payload", "expected"),
        [
            ({"operationName": "CreateCourse"}, "CreateCourse"),
            ({"query": "query GetCourse { course(id: \"a\") { id } }"}, "GetCourse"),
            ({"query": "mutation Submit { removeAll }"}, "mutation:Submit"),
            ({"query": "mutation { removeAll }"}, "mutation:unnamed_operation"),
            ({"query": "{ myProgress }"}, "unnamed_operation"),
            ({"query": "query IntrospectionQuery { __schema { types { name } } }"},
             "__introspection"),
            ({}, None),
        ],
    )
    def test_operation_names(self, payload, expected):
        assert operation_name_from_payload(payload) == expected


class TestRequestContext:
    def test_set_and_clear(self):
        set_request_context(user_id="u1")
        assert get_request_id()
        assert get_user_id() == "u1"

        bind_user_id("u2")
        assert get_user_id() == "u2"

        clear_request_context()
        assert get_request_id() is None
        assert get_user_id() is None

    def test_request_ids_are_unique(self):
        assert len({generate_request_id() for _ in range(100)}) == 100

    def test_new_request_drops_previous_course_scope(self):
        set_request_context()
        bind_course_scope("py", "basics")
        assert get_course_scope() == ("py", "basics")

        request_id = set_request_context(request_id="req-2")
        assert request_id == "req-2"
        assert get_course_scope() == (None, None)
        clear_request_context()

    def test_unset_scope_keys_are_not_rendered(self):
        event = {"event": "Course saved", "request_id": "r1", "lesson_id": None, "user_id": None}
        assert drop_unset_scope(None, "info", event) == {"event": "Course saved", "request_id": "r1"}

    @pytest.mark.asyncio
    async def test_services_bind_course_scope(self, seeded_store, user_auth):
        from courseware.services import ProgressTracker

        await ProgressTracker(seeded_store).mark_visited(user_auth, "py", "basics", "q1")
        assert get_course_scope() == ("py", "basics")
