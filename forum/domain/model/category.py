"""Category entity for grouping threads."""

from datetime import datetime

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import CategoryId

DEFAULT_CATEGORY_COLOR = "#007bff"


class Category(DomainModel):
    """Category entity.

    Every thread belongs to exactly one category. `thread_count` is a
    denormalized counter kept in step with thread create, move and delete.
    """

    id: CategoryId
    name: str = Field(min_length=2, max_length=50)  # Unique, case-insensitive
    description: str = Field(default="", max_length=200)
    color: str = DEFAULT_CATEGORY_COLOR
    is_active: bool = True
    thread_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
