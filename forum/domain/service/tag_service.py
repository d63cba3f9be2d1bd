"""Tag domain service."""

from datetime import datetime
from typing import Optional
from uuid import uuid4

import logfire
from pydantic import ValidationError

from forum.domain.error import ConflictError, InvalidInputError, NotFoundError
from forum.domain.model.tag import Tag
from forum.domain.repository import TagRepository, TagSortOrder, ThreadRepository
from forum.domain.value import TagId, TagName

from .base import Service

SUGGEST_MIN_LENGTH = 2


class TagService(Service):
    """Domain service for tag operations."""

    def __init__(
        self, tag_repository: TagRepository, thread_repository: ThreadRepository
    ) -> None:
        """Initialize tag service.

        Args:
            tag_repository: Tag repository
            thread_repository: Thread repository, used to repoint threads on merge
        """
        self.tag_repository = tag_repository
        self.thread_repository = thread_repository

    @staticmethod
    def normalize_names(names: list[str]) -> list[TagName]:
        """Normalize raw tag names, dropping duplicates but keeping order.

        Raises:
            InvalidInputError: If a name is empty or longer than 30 characters
        """
        unique: dict[str, TagName] = {}
        for raw in names:
            try:
                name = TagName(raw)
            except ValidationError:
                raise InvalidInputError(
                    f"Invalid tag name: {raw!r} (must be 1-30 characters)"
                )
            unique.setdefault(name.root, name)
        return list(unique.values())

    async def ensure_tags(self, names: list[str]) -> list[Tag]:
        """Resolve tag names to tags, creating any that do not exist.

        Names are matched after trimming and lowercasing, so 'React' and
        'react' resolve to the same tag. Usage counters are left unchanged.

        Args:
            names: Raw tag names

        Returns:
            One tag per distinct normalized name, in first-seen order
        """
        tag_names = self.normalize_names(names)
        with logfire.span(
            "tag_service.ensure_tags", tags=[name.root for name in tag_names]
        ):
            tags = []
            for name in tag_names:
                tag = await self.tag_repository.find_by_name(name)
                if not tag:
                    tag = await self.tag_repository.save(
                        Tag(id=TagId(uuid4()), name=name)
                    )
                    logfire.info("Tag created", tag_id=str(tag.id), tag_name=name.root)
                tags.append(tag)
            return tags

    async def increment_usage(self, tag_ids: list[TagId]) -> None:
        """Add one use to each tag."""
        with logfire.span("tag_service.increment_usage", count=len(tag_ids)):
            for tag_id in tag_ids:
                await self.tag_repository.increment_usage(tag_id)

    async def decrement_usage(self, tag_ids: list[TagId]) -> None:
        """Remove one use from each tag (minimum 0)."""
        with logfire.span("tag_service.decrement_usage", count=len(tag_ids)):
            for tag_id in tag_ids:
                await self.tag_repository.decrement_usage(tag_id)

    async def discard_unused(self, tag_ids: list[TagId]) -> None:
        """Delete the given tags that no thread uses.

        Used to roll back tags resolved for a write that did not happen.
        """
        with logfire.span("tag_service.discard_unused", count=len(tag_ids)):
            for tag in await self.tag_repository.find_by_ids(tag_ids):
                if tag.usage_count == 0:
                    await self.tag_repository.delete(tag.id)
                    logfire.info("Unused tag discarded", tag_id=str(tag.id))

    async def get_tags_by_ids(self, tag_ids: list[TagId]) -> list[Tag]:
        """Get tags by ID, in the order requested."""
        if not tag_ids:
            return []
        found = {tag.id: tag for tag in await self.tag_repository.find_by_ids(tag_ids)}
        return [found[tag_id] for tag_id in tag_ids if tag_id in found]

    async def list_tags(
        self,
        search: Optional[str] = None,
        sort: TagSortOrder = TagSortOrder.USAGE,
        limit: int = 50,
    ) -> list[Tag]:
        """List tags.

        Args:
            search: Case-insensitive substring of the name
            sort: Sort order
            limit: Maximum number of tags to return

        Returns:
            List of tags
        """
        with logfire.span(
            "tag_service.list_tags", search=search, sort=sort.value, limit=limit
        ):
            tags = await self.tag_repository.find_all(
                search=search, sort=sort, limit=limit
            )
            logfire.info("Tags retrieved", count=len(tags))
            return tags

    async def get_popular_tags(self, limit: int = 20) -> list[Tag]:
        """List tags in use, most used first."""
        with logfire.span("tag_service.get_popular_tags", limit=limit):
            return await self.tag_repository.find_popular(limit=limit)

    async def suggest_tags(self, partial: str, limit: int = 10) -> list[Tag]:
        """Suggest tags whose name starts with partial.

        Prefixes shorter than two characters produce no suggestions.
        """
        prefix = partial.strip().lower()
        with logfire.span("tag_service.suggest_tags", prefix=prefix):
            if len(prefix) < SUGGEST_MIN_LENGTH:
                return []
            return await self.tag_repository.find_by_prefix(prefix, limit=limit)

    async def get_tag(self, tag_id: TagId) -> Tag:
        """Get a tag by ID.

        Raises:
            NotFoundError: If the tag does not exist
        """
        with logfire.span("tag_service.get_tag", tag_id=str(tag_id)):
            tag = await self.tag_repository.find_by_id(tag_id)
            if not tag:
                logfire.warn("Tag not found", tag_id=str(tag_id))
                raise NotFoundError("Tag", str(tag_id))
            return tag

    async def update_tag(
        self,
        tag_id: TagId,
        name: Optional[str] = None,
        description: Optional[str] = None,
        color: Optional[str] = None,
    ) -> Tag:
        """Rename or describe a tag.

        Raises:
            NotFoundError: If the tag does not exist
            ConflictError: If the normalized name belongs to another tag
        """
        with logfire.span("tag_service.update_tag", tag_id=str(tag_id)):
            tag = await self.get_tag(tag_id)

            update: dict[str, object] = {"updated_at": datetime.now()}
            if name is not None:
                [tag_name] = self.normalize_names([name])
                existing = await self.tag_repository.find_by_name(tag_name)
                if existing and existing.id != tag_id:
                    logfire.warn("Duplicate tag name", tag_name=tag_name.root)
                    raise ConflictError(f"Tag already exists: {tag_name.root}")
                update["name"] = tag_name
            if description is not None:
                update["description"] = description.strip()
            if color is not None:
                update["color"] = color

            updated = Tag.model_validate(dict(tag) | update)
            saved = await self.tag_repository.save(updated)
            logfire.info("Tag updated", tag_id=str(tag_id))
            return saved

    async def delete_tag(self, tag_id: TagId) -> None:
        """Delete a tag that no thread uses.

        Raises:
            NotFoundError: If the tag does not exist
            ConflictError: If threads still reference the tag
        """
        with logfire.span("tag_service.delete_tag", tag_id=str(tag_id)):
            tag = await self.get_tag(tag_id)
            if tag.usage_count > 0:
                logfire.warn(
                    "Cannot delete tag in use",
                    tag_id=str(tag_id),
                    usage_count=tag.usage_count,
                )
                raise ConflictError(
                    f"Tag is used by {tag.usage_count} thread(s) and cannot be deleted"
                )
            await self.tag_repository.delete(tag_id)
            logfire.info("Tag deleted", tag_id=str(tag_id))

    async def merge_tags(self, source_id: TagId, target_id: TagId) -> Tag:
        """Merge one tag into another.

        Every thread referencing the source now references the target, the
        target's usage counter absorbs the source's, and the source is
        deleted.

        Args:
            source_id: Tag to merge away
            target_id: Tag that survives

        Returns:
            The target tag after the merge

        Raises:
            InvalidInputError: If source and target are the same tag
            NotFoundError: If either tag does not exist
        """
        with logfire.span(
            "tag_service.merge_tags", source_id=str(source_id), target_id=str(target_id)
        ):
            if source_id == target_id:
                raise InvalidInputError("Cannot merge a tag with itself")

            source = await self.get_tag(source_id)
            await self.get_tag(target_id)

            repointed = await self.thread_repository.replace_tag(source_id, target_id)
            if source.usage_count:
                await self.tag_repository.increment_usage(
                    target_id, amount=source.usage_count
                )
            await self.tag_repository.delete(source_id)

            logfire.info(
                "Tags merged",
                source_id=str(source_id),
                target_id=str(target_id),
                threads=repointed,
            )
            return await self.get_tag(target_id)
