"""Reputation domain service."""

import logfire

from forum.domain.repository import UserRepository
from forum.domain.value import UserId

from .base import Service


class ReputationService(Service):
    """Applies vote deltas to authors' reputation.

    Reputation never drops below zero and has no ceiling.
    """

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize reputation service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def adjust(self, user_id: UserId, delta: int) -> int | None:
        """Atomically add delta to a user's reputation, clamped at 0.

        A missing user is logged and skipped so that voting on content by
        a deleted account still succeeds.

        Args:
            user_id: Author whose reputation changes
            delta: Signed change

        Returns:
            New reputation, or None if the user no longer exists
        """
        with logfire.span(
            "reputation_service.adjust", user_id=str(user_id), delta=delta
        ):
            if delta == 0:
                user = await self.user_repository.find_by_id(user_id)
                return user.reputation if user else None

            reputation = await self.user_repository.adjust_reputation(user_id, delta)
            if reputation is None:
                logfire.warn(
                    "Reputation adjustment skipped for missing user",
                    user_id=str(user_id),
                    delta=delta,
                )
                return None

            logfire.info(
                "Reputation adjusted",
                user_id=str(user_id),
                delta=delta,
                reputation=reputation,
            )
            return reputation
