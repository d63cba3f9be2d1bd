"""List and get category use cases."""

from uuid import UUID

from pydantic import BaseModel

from forum.application.usecase.common import CategoryItem
from forum.domain.service import CategoryService
from forum.domain.value import CategoryId


class ListCategoriesResponse(BaseModel):
    """List categories response."""

    categories: list[CategoryItem]


class ListCategoriesUseCase:
    """Use case for listing active categories."""

    def __init__(self, category_service: CategoryService) -> None:
        """Initialize list categories use case.

        Args:
            category_service: Category domain service
        """
        self.category_service = category_service

    async def execute(self) -> ListCategoriesResponse:
        """Execute list categories flow."""
        categories = await self.category_service.list_categories()
        return ListCategoriesResponse(
            categories=[CategoryItem.from_category(c) for c in categories]
        )


class GetCategoryRequest(BaseModel):
    """Get category request."""

    category_id: str  # UUID string


class GetCategoryUseCase:
    """Use case for reading one category."""

    def __init__(self, category_service: CategoryService) -> None:
        """Initialize get category use case.

        Args:
            category_service: Category domain service
        """
        self.category_service = category_service

    async def execute(self, request: GetCategoryRequest) -> CategoryItem:
        """Execute get category flow.

        Raises:
            NotFoundError: If the category is missing or inactive
        """
        category = await self.category_service.get_category(
            CategoryId(UUID(request.category_id))
        )
        return CategoryItem.from_category(category)
