"""Mock persistence providers for testing."""

from dishka import Scope, provide

from forum.domain.repository import (
    CategoryRepository,
    TagRepository,
    ThreadRepository,
    UserRepository,
)
from forum.persistence.repository.inmemory import (
    InMemoryCategoryRepository,
    InMemoryTagRepository,
    InMemoryThreadRepository,
    InMemoryUserRepository,
)
from forum.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Repositories are APP-scoped so state survives across the requests of one
    container; every test builds its own container, which keeps tests
    isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_user_repository(self) -> UserRepository:
        """Provide in-memory user repository."""
        return InMemoryUserRepository()

    @provide(scope=Scope.APP)
    def get_thread_repository(self) -> ThreadRepository:
        """Provide in-memory thread repository."""
        return InMemoryThreadRepository()

    @provide(scope=Scope.APP)
    def get_category_repository(self) -> CategoryRepository:
        """Provide in-memory category repository."""
        return InMemoryCategoryRepository()

    @provide(scope=Scope.APP)
    def get_tag_repository(self) -> TagRepository:
        """Provide in-memory tag repository."""
        return InMemoryTagRepository()
