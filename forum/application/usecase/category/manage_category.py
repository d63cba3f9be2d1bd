"""Category administration use cases.

Creating, editing and deleting categories is reserved to admins.
"""

from uuid import UUID

import logfire
from pydantic import BaseModel

from forum.application.usecase.common import CategoryItem
from forum.domain.error import ForbiddenError
from forum.domain.service import CategoryService
from forum.domain.value import Authenticated, CategoryId


def require_admin(requester: Authenticated) -> None:
    """Raise ForbiddenError unless the requester is an admin."""
    if not requester.is_admin:
        logfire.warn("Admin access denied", requester_id=str(requester.user_id))
        raise ForbiddenError("Admin access required")


class CreateCategoryRequest(BaseModel):
    """Create category request."""

    requester: Authenticated
    name: str
    description: str = ""
    color: str | None = None


class CreateCategoryUseCase:
    """Use case for creating a category."""

    def __init__(self, category_service: CategoryService) -> None:
        """Initialize create category use case.

        Args:
            category_service: Category domain service
        """
        self.category_service = category_service

    async def execute(self, request: CreateCategoryRequest) -> CategoryItem:
        """Execute create category flow.

        Raises:
            ForbiddenError: If the requester is not an admin
            ConflictError: If the name is already taken
        """
        require_admin(request.requester)
        category = await self.category_service.create_category(
            name=request.name,
            description=request.description,
            color=request.color,
        )
        return CategoryItem.from_category(category)


class UpdateCategoryRequest(BaseModel):
    """Update category request; None fields are not changed."""

    category_id: str  # UUID string
    requester: Authenticated
    name: str | None = None
    description: str | None = None
    color: str | None = None


class UpdateCategoryUseCase:
    """Use case for renaming or restyling a category."""

    def __init__(self, category_service: CategoryService) -> None:
        """Initialize update category use case.

        Args:
            category_service: Category domain service
        """
        self.category_service = category_service

    async def execute(self, request: UpdateCategoryRequest) -> CategoryItem:
        """Execute update category flow.

        Raises:
            ForbiddenError: If the requester is not an admin
            NotFoundError: If the category does not exist
            ConflictError: If the new name is already taken
        """
        require_admin(request.requester)
        category = await self.category_service.update_category(
            CategoryId(UUID(request.category_id)),
            name=request.name,
            description=request.description,
            color=request.color,
        )
        return CategoryItem.from_category(category)


class DeleteCategoryRequest(BaseModel):
    """Delete category request."""

    category_id: str  # UUID string
    requester: Authenticated


class DeleteCategoryResponse(BaseModel):
    """Delete category response."""

    category_id: str
    deleted: bool


class DeleteCategoryUseCase:
    """Use case for deleting an unused category."""

    def __init__(self, category_service: CategoryService) -> None:
        """Initialize delete category use case.

        Args:
            category_service: Category domain service
        """
        self.category_service = category_service

    async def execute(self, request: DeleteCategoryRequest) -> DeleteCategoryResponse:
        """Execute delete category flow.

        Raises:
            ForbiddenError: If the requester is not an admin
            NotFoundError: If the category does not exist
            ConflictError: If threads still use the category
        """
        require_admin(request.requester)
        await self.category_service.delete_category(
            CategoryId(UUID(request.category_id))
        )
        return DeleteCategoryResponse(category_id=request.category_id, deleted=True)
