"""
Main FastAPI application for the Courseware backend
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..config import settings
from ..logging import configure_logging, get_logger
from ..middleware import LoggingContextMiddleware
from ..store import DocumentStore, create_store
from ..store.sql import SQLDocumentStore

logger = get_logger(__name__)


def create_app(store: DocumentStore | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        store: Document store to serve; defaults to the configured backend.
    """
    configure_logging(debug=settings.debug, level=settings.log_level)
    store = store or create_store()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "Starting Courseware API...",
            store_backend=type(store).__name__,
            answer_resubmission=settings.answer_resubmission,
        )
        if isinstance(store, SQLDocumentStore):
            from ..database.connection import check_database_connection

            ok, error = await check_database_connection()
            if not ok:
                logger.error("Database connection check failed", error=error)
                if settings.environment.lower() in ("production", "prod"):
                    raise RuntimeError(error)

        yield

        logger.info("Shutting down Courseware API...")
        await store.close()

    app = FastAPI(
        title="Courseware API",
        description="Courses, lessons and learner progress",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )
    app.state.store = store

    app.add_middleware(LoggingContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():  # pyright: ignore [reportUnusedFunction]
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    from ..graphql.schema import create_graphql_router, validate_schema

    logger.info("Validating GraphQL schema...")
    validate_schema()
    app.include_router(create_graphql_router(store, graphiql=settings.debug), prefix="")
    logger.info("GraphQL endpoint initialized successfully", endpoint="/graphql")

    return app
