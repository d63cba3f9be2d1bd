"""Logfire setup for the forum API.

Usage:
    import logfire

    logfire.info("Thread created", thread_id=str(thread.id))

    with logfire.span("thread_service.mutate", thread_id=str(thread_id)):
        ...
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from forum.config import Settings

SERVICE_NAME = "forum-api"

# Probes hit these every few seconds
UNTRACED_URLS = "/health,/health/ready"


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire once per process.

    Telemetry leaves the process only when `settings.observability` says
    so; otherwise spans and logs go to the console.
    """
    observability = settings.observability
    send = observability.should_send

    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=settings.git_sha,
        environment=settings.environment,
        send_to_logfire=send,
        token=observability.logfire_token,
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request except health probes.

    Headers are not captured; they carry the auth_token cookie.
    """
    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        excluded_urls=UNTRACED_URLS,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace every SQL statement on the engine."""
    logfire.instrument_sqlalchemy(
        engine=engine.sync_engine,
        # Tag statements with the span context for pg_stat_statements
        enable_commenter=True,
    )
