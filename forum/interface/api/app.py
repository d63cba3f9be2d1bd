"""FastAPI application."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from forum.config import Settings
from forum.interface.api.routes import (
    categories,
    health,
    replies,
    tags,
    threads,
    users,
    votes,
)
from forum.util.di.container import create_container, setup_di
from forum.util.observability import instrument_fastapi


def create_app() -> FastAPI:
    """Create FastAPI application.

    Dependency injection is not wired here; callers pass a container to
    `setup_di`. Logfire should be configured before calling this function.
    """
    settings = Settings()

    app_instance = FastAPI(
        title="Forum API",
        description="Backend API for a discussion forum with threaded replies, votes and reputation",
        version="0.1.0",
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.allowed_origins,
        # The auth_token cookie is sent cross-origin
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept"],
        max_age=600,
    )

    app_instance.include_router(health.router)
    app_instance.include_router(threads.router)
    app_instance.include_router(replies.router)
    app_instance.include_router(votes.router)
    app_instance.include_router(categories.router)
    app_instance.include_router(tags.router)
    app_instance.include_router(users.router)

    return app_instance


def create_production_app() -> FastAPI:
    """Create the application wired to the production container."""
    app_instance = create_app()
    setup_di(app_instance, create_container())
    return app_instance
