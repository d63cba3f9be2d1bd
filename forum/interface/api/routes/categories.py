"""Category routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, status
from pydantic import BaseModel, Field

from forum.application.usecase.category import (
    CreateCategoryRequest,
    CreateCategoryUseCase,
    DeleteCategoryRequest,
    DeleteCategoryResponse,
    DeleteCategoryUseCase,
    GetCategoryRequest,
    GetCategoryUseCase,
    ListCategoriesResponse,
    ListCategoriesUseCase,
    UpdateCategoryRequest,
    UpdateCategoryUseCase,
)
from forum.application.usecase.common import CategoryItem
from forum.domain.error import DomainError
from forum.domain.service import JWTService
from forum.interface.api.auth import authenticate
from forum.interface.error import internal_error, to_http_exception

router = APIRouter(prefix="/categories", tags=["categories"], route_class=DishkaRoute)


class CreateCategoryAPIRequest(BaseModel):
    """API request for creating a category."""

    name: str = Field(max_length=100)
    description: str = Field(default="", max_length=500)
    color: str | None = None


class UpdateCategoryAPIRequest(BaseModel):
    """API request for updating a category."""

    name: str | None = Field(default=None, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    color: str | None = None


@router.get("", response_model=ListCategoriesResponse)
async def list_categories(
    use_case: FromDishka[ListCategoriesUseCase],
) -> ListCategoriesResponse:
    """List active categories by name."""
    return await use_case.execute()


@router.post("", response_model=CategoryItem, status_code=status.HTTP_201_CREATED)
async def create_category(
    request: CreateCategoryAPIRequest,
    use_case: FromDishka[CreateCategoryUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> CategoryItem:
    """Create a category (admin only)."""
    requester = authenticate(
        jwt_service, auth_token, authorization, "create categories"
    )
    try:
        return await use_case.execute(
            CreateCategoryRequest(
                requester=requester,
                name=request.name,
                description=request.description,
                color=request.color,
            )
        )
    except DomainError as e:
        raise to_http_exception(e, "create category")
    except Exception as e:
        raise internal_error(e, "create category")


@router.get("/{category_id}", response_model=CategoryItem)
async def get_category(
    category_id: UUID,
    use_case: FromDishka[GetCategoryUseCase],
) -> CategoryItem:
    """Get an active category."""
    try:
        return await use_case.execute(GetCategoryRequest(category_id=str(category_id)))
    except DomainError as e:
        raise to_http_exception(e, "get category")


@router.put("/{category_id}", response_model=CategoryItem)
async def update_category(
    category_id: UUID,
    request: UpdateCategoryAPIRequest,
    use_case: FromDishka[UpdateCategoryUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> CategoryItem:
    """Update a category (admin only)."""
    requester = authenticate(
        jwt_service, auth_token, authorization, "update categories"
    )
    try:
        return await use_case.execute(
            UpdateCategoryRequest(
                category_id=str(category_id),
                requester=requester,
                name=request.name,
                description=request.description,
                color=request.color,
            )
        )
    except DomainError as e:
        raise to_http_exception(e, "update category")
    except Exception as e:
        raise internal_error(e, "update category")


@router.delete("/{category_id}", response_model=DeleteCategoryResponse)
async def delete_category(
    category_id: UUID,
    use_case: FromDishka[DeleteCategoryUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> DeleteCategoryResponse:
    """Delete a category no thread uses (admin only)."""
    requester = authenticate(
        jwt_service, auth_token, authorization, "delete categories"
    )
    try:
        return await use_case.execute(
            DeleteCategoryRequest(category_id=str(category_id), requester=requester)
        )
    except DomainError as e:
        raise to_http_exception(e, "delete category")
    except Exception as e:
        raise internal_error(e, "delete category")
