"""Tag administration use cases.

Renaming, deleting and merging tags is reserved to admins.
"""

from uuid import UUID

import logfire
from pydantic import BaseModel

from forum.application.usecase.category import require_admin
from forum.application.usecase.common import TagItem
from forum.domain.service import TagService
from forum.domain.value import Authenticated, TagId


class UpdateTagRequest(BaseModel):
    """Update tag request; None fields are not changed."""

    tag_id: str  # UUID string
    requester: Authenticated
    name: str | None = None
    description: str | None = None
    color: str | None = None


class UpdateTagUseCase:
    """Use case for renaming or describing a tag."""

    def __init__(self, tag_service: TagService) -> None:
        """Initialize update tag use case.

        Args:
            tag_service: Tag domain service
        """
        self.tag_service = tag_service

    async def execute(self, request: UpdateTagRequest) -> TagItem:
        """Execute update tag flow.

        Raises:
            ForbiddenError: If the requester is not an admin
            NotFoundError: If the tag does not exist
            ConflictError: If the normalized name is already taken
        """
        require_admin(request.requester)
        tag = await self.tag_service.update_tag(
            TagId(UUID(request.tag_id)),
            name=request.name,
            description=request.description,
            color=request.color,
        )
        return TagItem.from_tag(tag)


class DeleteTagRequest(BaseModel):
    """Delete tag request."""

    tag_id: str  # UUID string
    requester: Authenticated


class DeleteTagResponse(BaseModel):
    """Delete tag response."""

    tag_id: str
    deleted: bool


class DeleteTagUseCase:
    """Use case for deleting an unused tag."""

    def __init__(self, tag_service: TagService) -> None:
        """Initialize delete tag use case.

        Args:
            tag_service: Tag domain service
        """
        self.tag_service = tag_service

    async def execute(self, request: DeleteTagRequest) -> DeleteTagResponse:
        """Execute delete tag flow.

        Raises:
            ForbiddenError: If the requester is not an admin
            NotFoundError: If the tag does not exist
            ConflictError: If threads still use the tag
        """
        require_admin(request.requester)
        await self.tag_service.delete_tag(TagId(UUID(request.tag_id)))
        return DeleteTagResponse(tag_id=request.tag_id, deleted=True)


class MergeTagsRequest(BaseModel):
    """Merge tags request."""

    source_tag_id: str  # UUID string, deleted by the merge
    target_tag_id: str  # UUID string, survives the merge
    requester: Authenticated


class MergeTagsResponse(BaseModel):
    """Merge tags response."""

    merged_tag_id: str
    target: TagItem


class MergeTagsUseCase:
    """Use case for merging one tag into another."""

    def __init__(self, tag_service: TagService) -> None:
        """Initialize merge tags use case.

        Args:
            tag_service: Tag domain service
        """
        self.tag_service = tag_service

    async def execute(self, request: MergeTagsRequest) -> MergeTagsResponse:
        """Execute merge tags flow.

        Raises:
            ForbiddenError: If the requester is not an admin
            InvalidInputError: If both IDs name the same tag
            NotFoundError: If either tag does not exist
        """
        with logfire.span(
            "merge_tags.execute",
            source_tag_id=request.source_tag_id,
            target_tag_id=request.target_tag_id,
        ):
            require_admin(request.requester)
            target = await self.tag_service.merge_tags(
                TagId(UUID(request.source_tag_id)),
                TagId(UUID(request.target_tag_id)),
            )
            return MergeTagsResponse(
                merged_tag_id=request.source_tag_id,
                target=TagItem.from_tag(target),
            )
