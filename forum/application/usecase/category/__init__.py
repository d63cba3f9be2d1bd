"""Category use cases."""

from .list_categories import (
    GetCategoryRequest,
    GetCategoryUseCase,
    ListCategoriesResponse,
    ListCategoriesUseCase,
)
from .manage_category import (
    CreateCategoryRequest,
    CreateCategoryUseCase,
    DeleteCategoryRequest,
    DeleteCategoryResponse,
    DeleteCategoryUseCase,
    UpdateCategoryRequest,
    UpdateCategoryUseCase,
    require_admin,
)

__all__ = [
    "CreateCategoryRequest",
    "CreateCategoryUseCase",
    "DeleteCategoryRequest",
    "DeleteCategoryResponse",
    "DeleteCategoryUseCase",
    "GetCategoryRequest",
    "GetCategoryUseCase",
    "ListCategoriesResponse",
    "ListCategoriesUseCase",
    "UpdateCategoryRequest",
    "UpdateCategoryUseCase",
    "require_admin",
]
