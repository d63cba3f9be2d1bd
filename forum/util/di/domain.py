"""Domain layer DI providers."""

from dishka import Scope, provide

from forum.config import AuthSettings, ForumSettings
from forum.domain.repository import (
    CategoryRepository,
    TagRepository,
    ThreadRepository,
    UserRepository,
)
from forum.domain.service import (
    CategoryService,
    JWTService,
    ReplyService,
    ReputationService,
    TagService,
    ThreadService,
    UserService,
    VoteService,
)
from forum.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_user_service(
        self, user_repository: UserRepository, thread_repository: ThreadRepository
    ) -> UserService:
        """Provide user domain service."""
        return UserService(
            user_repository=user_repository, thread_repository=thread_repository
        )

    @provide
    def get_reputation_service(
        self, user_repository: UserRepository
    ) -> ReputationService:
        """Provide reputation domain service."""
        return ReputationService(user_repository=user_repository)

    @provide
    def get_category_service(
        self, category_repository: CategoryRepository
    ) -> CategoryService:
        """Provide category domain service."""
        return CategoryService(category_repository=category_repository)

    @provide
    def get_tag_service(
        self, tag_repository: TagRepository, thread_repository: ThreadRepository
    ) -> TagService:
        """Provide tag domain service."""
        return TagService(
            tag_repository=tag_repository, thread_repository=thread_repository
        )

    @provide
    def get_thread_service(
        self,
        thread_repository: ThreadRepository,
        category_service: CategoryService,
        tag_service: TagService,
        forum_settings: ForumSettings,
    ) -> ThreadService:
        """Provide thread domain service."""
        return ThreadService(
            thread_repository=thread_repository,
            category_service=category_service,
            tag_service=tag_service,
            forum_settings=forum_settings,
        )

    @provide
    def get_reply_service(self, thread_service: ThreadService) -> ReplyService:
        """Provide reply domain service."""
        return ReplyService(thread_service=thread_service)

    @provide
    def get_vote_service(
        self,
        thread_service: ThreadService,
        reputation_service: ReputationService,
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            thread_service=thread_service, reputation_service=reputation_service
        )
