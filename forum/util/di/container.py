"""Dependency injection container."""

from typing import Collection

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI
import logfire

from forum.util.di import Component, resolve_providers


def create_container(mocked: Collection[Component] = ()) -> AsyncContainer:
    """Build the application container.

    Production passes nothing and gets Postgres persistence. Tests name
    the components they want in memory.

    Args:
        mocked: Components to back with their in-memory variant
    """
    providers = resolve_providers(mocked)
    logfire.info("DI container built", mocked=sorted(mocked))
    return make_async_container(*providers, FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach the container to the app and close it on shutdown."""
    setup_dishka(container, app)
