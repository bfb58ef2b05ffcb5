"""
Main GraphQL schema definition using Strawberry
"""

from collections.abc import Iterator
from typing import Any

import strawberry
from fastapi import Request
from graphql import validate_schema as gql_validate_schema
from strawberry.extensions import SchemaExtension
from strawberry.fastapi import GraphQLRouter

from ..auth.middleware import get_auth_context_optional
from ..errors import CoursewareError
from ..logging import bind_user_id, get_logger
from ..store.base import DocumentStore
from .mutations.root import Mutation
from .queries.root import Query

logger = get_logger(__name__)


class ErrorCodeExtension(SchemaExtension):
    """Copy the ``code`` of Courseware errors into GraphQL error extensions."""

    def on_operation(self) -> Iterator[None]:
        yield
        result = self.execution_context.result
        if not result or not result.errors:
            return

        for error in result.errors:
            original = error.original_error
            if isinstance(original, CoursewareError):
                error.extensions = {**(error.extensions or {}), "code": original.code}


schema = strawberry.Schema(
    query=Query,
    mutation=Mutation,
    extensions=[ErrorCodeExtension],
)


def validate_schema() -> None:
    """Validate the GraphQL schema at startup.

    Raises:
        Exception: If the schema is invalid or has unresolved types
    """
    try:
        graphql_schema = schema._schema

        errors = gql_validate_schema(graphql_schema)
        if errors:
            error_messages = [str(e) for e in errors]
            raise Exception(f"GraphQL schema validation failed: {'; '.join(error_messages)}")

        from graphql import get_introspection_query, graphql_sync

        result = graphql_sync(graphql_schema, get_introspection_query())
        if result.errors:
            error_messages = [str(e) for e in result.errors]
            raise Exception(f"GraphQL introspection failed: {'; '.join(error_messages)}")

        logger.info("GraphQL schema validation successful")

    except Exception as e:
        logger.error("GraphQL schema validation failed", error=str(e))
        raise


def create_graphql_router(
    store: DocumentStore, graphiql: bool = True
) -> GraphQLRouter[dict[str, Any], None]:
    """Create a GraphQL router for FastAPI bound to one document store."""

    async def get_context(request: Request) -> dict[str, Any]:
        """Build the per-request context handed to every resolver."""
        auth = await get_auth_context_optional(request.headers.get("authorization"))
        bind_user_id(auth.user_id)
        return {
            "request": request,
            "store": store,
            "auth": auth,
        }

    return GraphQLRouter(
        schema,
        path="/graphql",
        graphiql=graphiql,
        context_getter=get_context,
    )
