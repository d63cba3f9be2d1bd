"""In-memory implementation of Tag repository for testing."""

from copy import deepcopy
from typing import Optional

from forum.domain.model.tag import Tag
from forum.domain.repository.tag import TagRepository, TagSortOrder
from forum.domain.value import TagId, TagName


class InMemoryTagRepository(TagRepository):
    """In-memory implementation of TagRepository for testing."""

    def __init__(self) -> None:
        """Initialize empty repository."""
        self._tags: dict[TagId, Tag] = {}
        self._name_index: dict[str, TagId] = {}

    async def save(self, tag: Tag) -> Tag:
        """Save or update a tag."""
        previous = self._tags.get(tag.id)
        if previous:
            self._name_index.pop(previous.name.root, None)
        self._tags[tag.id] = deepcopy(tag)
        self._name_index[tag.name.root] = tag.id
        return deepcopy(tag)

    async def find_by_id(self, tag_id: TagId) -> Optional[Tag]:
        """Find tag by ID."""
        tag = self._tags.get(tag_id)
        return deepcopy(tag) if tag else None

    async def find_by_ids(self, tag_ids: list[TagId]) -> list[Tag]:
        """Find multiple tags by ID."""
        return [deepcopy(self._tags[t]) for t in tag_ids if t in self._tags]

    async def find_by_name(self, name: TagName) -> Optional[Tag]:
        """Find tag by name."""
        tag_id = self._name_index.get(name.root)
        if tag_id:
            tag = self._tags.get(tag_id)
            return deepcopy(tag) if tag else None
        return None

    async def find_all(
        self,
        search: Optional[str] = None,
        sort: TagSortOrder = TagSortOrder.USAGE,
        limit: int = 50,
    ) -> list[Tag]:
        """Find tags."""
        tags = list(self._tags.values())
        if search:
            term = search.strip().lower()
            tags = [t for t in tags if term in t.name.root]

        # Sort by requested field
        if sort == TagSortOrder.ALPHABETICAL:
            tags.sort(key=lambda t: t.name.root)
        elif sort == TagSortOrder.RECENT:
            tags.sort(key=lambda t: t.created_at, reverse=True)
        else:
            tags.sort(key=lambda t: (-t.usage_count, t.name.root))

        return [deepcopy(tag) for tag in tags[:limit]]

    async def find_popular(self, limit: int = 20) -> list[Tag]:
        """Find tags in use, most used first."""
        tags = [t for t in self._tags.values() if t.usage_count > 0]
        tags.sort(key=lambda t: (-t.usage_count, t.name.root))
        return [deepcopy(tag) for tag in tags[:limit]]

    async def find_by_prefix(self, prefix: str, limit: int = 10) -> list[Tag]:
        """Find tags whose name starts with prefix."""
        tags = [t for t in self._tags.values() if t.name.root.startswith(prefix)]
        tags.sort(key=lambda t: (-t.usage_count, t.name.root))
        return [deepcopy(tag) for tag in tags[:limit]]

    async def increment_usage(self, tag_id: TagId, amount: int = 1) -> None:
        """Add to the usage counter."""
        tag = self._tags.get(tag_id)
        if tag:
            self._tags[tag_id] = tag.model_copy(
                update={"usage_count": tag.usage_count + amount}
            )

    async def decrement_usage(self, tag_id: TagId) -> None:
        """Subtract one from the usage counter (minimum 0)."""
        tag = self._tags.get(tag_id)
        if tag:
            self._tags[tag_id] = tag.model_copy(
                update={"usage_count": max(0, tag.usage_count - 1)}
            )

    async def delete(self, tag_id: TagId) -> bool:
        """Delete a tag."""
        tag = self._tags.pop(tag_id, None)
        if tag:
            self._name_index.pop(tag.name.root, None)
        return tag is not None
