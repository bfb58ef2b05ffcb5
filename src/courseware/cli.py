#!/usr/bin/env python3
"""
Main CLI entry point for the Courseware backend server.
"""

import asyncio
import os
import sys

import click
import uvicorn

from courseware import __version__
from courseware.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="courseware")
def cli() -> None:
    """Courseware CLI - run the API server and manage the database."""
    pass


@cli.command()
@click.option("--host", default="0.0.0.0", help="Host to bind to (default: 0.0.0.0)")
@click.option("--port", default=8000, type=int, help="Port to bind to (default: 8000)")
@click.option("--reload", is_flag=True, default=False, help="Enable auto-reload for development")
@click.option("--workers", default=1, type=int, help="Number of worker processes (default: 1)")
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
def serve(host: str, port: int, reload: bool, workers: int, log_level: str) -> None:
    """Start the Courseware API server."""
    configure_logging(debug=(log_level == "debug"))

    logger.info(
        "Starting Courseware API server",
        host=host,
        port=port,
        reload=reload,
        workers=workers,
        log_level=log_level,
    )

    # Settings are read at import time in each worker process
    if log_level == "debug":
        os.environ["COURSEWARE_DEBUG"] = "true"
        os.environ["COURSEWARE_LOG_LEVEL"] = "debug"
    else:
        os.environ.setdefault("COURSEWARE_DEBUG", "false")
        os.environ.setdefault("COURSEWARE_LOG_LEVEL", log_level)

    try:
        uvicorn.run(
            "courseware.api.app:create_app",
            factory=True,
            host=host,
            port=port,
            reload=reload,
            workers=(workers if not reload else 1),
            log_level=log_level,
            access_log=True,
        )
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Server startup failed", error=str(e))
        sys.exit(1)


@cli.group()
def db() -> None:
    """Manage the SQL document store."""
    pass


@db.command("init")
def init_db() -> None:
    """Create the documents table."""
    from courseware.database.connection import create_tables

    configure_logging()
    try:
        asyncio.run(create_tables())
        click.echo("✓ Database tables created")
    except Exception as e:
        logger.error("Database initialization failed", error=str(e))
        click.echo(f"✗ Error creating tables: {e}", err=True)
        sys.exit(1)


@db.command("drop")
@click.confirmation_option(prompt="Drop all courses, lessons and progress?")
def drop_db() -> None:
    """Drop the documents table and everything in it."""
    from courseware.database.connection import drop_tables

    configure_logging()
    try:
        asyncio.run(drop_tables())
        click.echo("✓ Database tables dropped")
    except Exception as e:
        logger.error("Dropping database tables failed", error=str(e))
        click.echo(f"✗ Error dropping tables: {e}", err=True)
        sys.exit(1)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
