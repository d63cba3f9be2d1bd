"""Configuration providers."""

from dishka import Scope, provide

from forum.config import AuthSettings, ForumSettings, Settings
from forum.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Settings and the sections services depend on.

    Services take only their own section, so tests can build them with a
    hand-made AuthSettings or ForumSettings.
    """

    scope = Scope.APP

    @provide
    def provide_settings(self) -> Settings:
        return Settings()

    @provide
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        return settings.auth

    @provide
    def provide_forum_settings(self, settings: Settings) -> ForumSettings:
        return settings.forum
