"""Shared fixtures for end-to-end API tests."""

import asyncio

import pytest
from fastapi.testclient import TestClient

from forum.config import Settings
from forum.domain.model import User
from forum.domain.repository import UserRepository
from forum.domain.service import JWTService
from forum.domain.value import UserRole
from forum.interface.api.app import create_app
from forum.util.di.container import setup_di
from tests.factories import make_user
from tests.di import build_test_container


@pytest.fixture
def container():
    """Test container with in-memory persistence."""
    return build_test_container()


@pytest.fixture
def client(container):
    """Create test client with test container."""
    app_instance = create_app()
    setup_di(app_instance, container)
    return TestClient(app_instance)


@pytest.fixture
def jwt_service():
    return JWTService(Settings().auth)


@pytest.fixture
def register(container, jwt_service):
    """Store a user and return them with their auth cookies."""

    def _register(
        handle: str, role: UserRole = UserRole.USER, reputation: int = 0
    ) -> tuple[User, dict[str, str]]:
        user = make_user(handle, role=role, reputation=reputation)

        async def _save() -> None:
            user_repo = await container.get(UserRepository)
            await user_repo.save(user)

        asyncio.run(_save())
        token = jwt_service.create_token(str(user.id), handle, role)
        return user, {"auth_token": token}

    return _register


@pytest.fixture
def admin(register):
    return register("admin", role=UserRole.ADMIN)


@pytest.fixture
def category_id(client, admin):
    """ID of a freshly created category."""
    _, cookies = admin
    response = client.post("/categories", json={"name": "General"}, cookies=cookies)
    assert response.status_code == 201
    return response.json()["category_id"]
