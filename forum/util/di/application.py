"""Application layer DI providers."""

from dishka import Scope, provide

from forum.application.usecase.category import (
    CreateCategoryUseCase,
    DeleteCategoryUseCase,
    GetCategoryUseCase,
    ListCategoriesUseCase,
    UpdateCategoryUseCase,
)
from forum.application.usecase.reply import (
    AddReplyUseCase,
    DeleteReplyUseCase,
    UpdateReplyUseCase,
)
from forum.application.usecase.tag import (
    DeleteTagUseCase,
    GetTagUseCase,
    ListTagsUseCase,
    MergeTagsUseCase,
    PopularTagsUseCase,
    SuggestTagsUseCase,
    UpdateTagUseCase,
)
from forum.application.usecase.thread import (
    CreateThreadUseCase,
    DeleteThreadUseCase,
    GetThreadUseCase,
    ListThreadsUseCase,
    ModerateThreadUseCase,
    UpdateThreadUseCase,
)
from forum.application.usecase.user import (
    GetUserProfileUseCase,
    ListUserThreadsUseCase,
    SearchUsersUseCase,
)
from forum.application.usecase.vote import CastVoteUseCase, GetVoteStatsUseCase
from forum.config import ForumSettings
from forum.domain.service import (
    CategoryService,
    ReplyService,
    TagService,
    ThreadService,
    UserService,
    VoteService,
)
from forum.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Thread use cases
    @provide(scope=Scope.REQUEST)
    def get_create_thread_use_case(
        self, thread_service: ThreadService, tag_service: TagService
    ) -> CreateThreadUseCase:
        """Provide create thread use case."""
        return CreateThreadUseCase(
            thread_service=thread_service, tag_service=tag_service
        )

    @provide(scope=Scope.REQUEST)
    def get_get_thread_use_case(
        self, thread_service: ThreadService, tag_service: TagService
    ) -> GetThreadUseCase:
        """Provide get thread use case."""
        return GetThreadUseCase(thread_service=thread_service, tag_service=tag_service)

    @provide(scope=Scope.REQUEST)
    def get_list_threads_use_case(
        self,
        thread_service: ThreadService,
        tag_service: TagService,
        forum_settings: ForumSettings,
    ) -> ListThreadsUseCase:
        """Provide list threads use case."""
        return ListThreadsUseCase(
            thread_service=thread_service,
            tag_service=tag_service,
            forum_settings=forum_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_update_thread_use_case(
        self, thread_service: ThreadService, tag_service: TagService
    ) -> UpdateThreadUseCase:
        """Provide update thread use case."""
        return UpdateThreadUseCase(
            thread_service=thread_service, tag_service=tag_service
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_thread_use_case(
        self, thread_service: ThreadService
    ) -> DeleteThreadUseCase:
        """Provide delete thread use case."""
        return DeleteThreadUseCase(thread_service=thread_service)

    @provide(scope=Scope.REQUEST)
    def get_moderate_thread_use_case(
        self, thread_service: ThreadService
    ) -> ModerateThreadUseCase:
        """Provide moderate thread use case."""
        return ModerateThreadUseCase(thread_service=thread_service)

    # Reply use cases
    @provide(scope=Scope.REQUEST)
    def get_add_reply_use_case(self, reply_service: ReplyService) -> AddReplyUseCase:
        """Provide add reply use case."""
        return AddReplyUseCase(reply_service=reply_service)

    @provide(scope=Scope.REQUEST)
    def get_update_reply_use_case(
        self, reply_service: ReplyService
    ) -> UpdateReplyUseCase:
        """Provide update reply use case."""
        return UpdateReplyUseCase(reply_service=reply_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_reply_use_case(
        self, reply_service: ReplyService
    ) -> DeleteReplyUseCase:
        """Provide delete reply use case."""
        return DeleteReplyUseCase(reply_service=reply_service)

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_cast_vote_use_case(self, vote_service: VoteService) -> CastVoteUseCase:
        """Provide cast vote use case."""
        return CastVoteUseCase(vote_service=vote_service)

    @provide(scope=Scope.REQUEST)
    def get_vote_stats_use_case(
        self, vote_service: VoteService
    ) -> GetVoteStatsUseCase:
        """Provide vote stats use case."""
        return GetVoteStatsUseCase(vote_service=vote_service)

    # Category use cases
    @provide(scope=Scope.REQUEST)
    def get_list_categories_use_case(
        self, category_service: CategoryService
    ) -> ListCategoriesUseCase:
        """Provide list categories use case."""
        return ListCategoriesUseCase(category_service=category_service)

    @provide(scope=Scope.REQUEST)
    def get_get_category_use_case(
        self, category_service: CategoryService
    ) -> GetCategoryUseCase:
        """Provide get category use case."""
        return GetCategoryUseCase(category_service=category_service)

    @provide(scope=Scope.REQUEST)
    def get_create_category_use_case(
        self, category_service: CategoryService
    ) -> CreateCategoryUseCase:
        """Provide create category use case."""
        return CreateCategoryUseCase(category_service=category_service)

    @provide(scope=Scope.REQUEST)
    def get_update_category_use_case(
        self, category_service: CategoryService
    ) -> UpdateCategoryUseCase:
        """Provide update category use case."""
        return UpdateCategoryUseCase(category_service=category_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_category_use_case(
        self, category_service: CategoryService
    ) -> DeleteCategoryUseCase:
        """Provide delete category use case."""
        return DeleteCategoryUseCase(category_service=category_service)

    # Tag use cases
    @provide(scope=Scope.REQUEST)
    def get_list_tags_use_case(self, tag_service: TagService) -> ListTagsUseCase:
        """Provide list tags use case."""
        return ListTagsUseCase(tag_service=tag_service)

    @provide(scope=Scope.REQUEST)
    def get_get_tag_use_case(
        self,
        tag_service: TagService,
        thread_service: ThreadService,
        forum_settings: ForumSettings,
    ) -> GetTagUseCase:
        """Provide get tag use case."""
        return GetTagUseCase(
            tag_service=tag_service,
            thread_service=thread_service,
            forum_settings=forum_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_popular_tags_use_case(self, tag_service: TagService) -> PopularTagsUseCase:
        """Provide popular tags use case."""
        return PopularTagsUseCase(tag_service=tag_service)

    @provide(scope=Scope.REQUEST)
    def get_suggest_tags_use_case(self, tag_service: TagService) -> SuggestTagsUseCase:
        """Provide suggest tags use case."""
        return SuggestTagsUseCase(tag_service=tag_service)

    @provide(scope=Scope.REQUEST)
    def get_update_tag_use_case(self, tag_service: TagService) -> UpdateTagUseCase:
        """Provide update tag use case."""
        return UpdateTagUseCase(tag_service=tag_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_tag_use_case(self, tag_service: TagService) -> DeleteTagUseCase:
        """Provide delete tag use case."""
        return DeleteTagUseCase(tag_service=tag_service)

    @provide(scope=Scope.REQUEST)
    def get_merge_tags_use_case(self, tag_service: TagService) -> MergeTagsUseCase:
        """Provide merge tags use case."""
        return MergeTagsUseCase(tag_service=tag_service)

    # User use cases
    @provide(scope=Scope.REQUEST)
    def get_get_user_profile_use_case(
        self, user_service: UserService
    ) -> GetUserProfileUseCase:
        """Provide get user profile use case."""
        return GetUserProfileUseCase(user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_search_users_use_case(
        self, user_service: UserService
    ) -> SearchUsersUseCase:
        """Provide search users use case."""
        return SearchUsersUseCase(user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_list_user_threads_use_case(
        self,
        user_service: UserService,
        thread_service: ThreadService,
        tag_service: TagService,
        forum_settings: ForumSettings,
    ) -> ListUserThreadsUseCase:
        """Provide list user threads use case."""
        return ListUserThreadsUseCase(
            user_service=user_service,
            thread_service=thread_service,
            tag_service=tag_service,
            forum_settings=forum_settings,
        )
