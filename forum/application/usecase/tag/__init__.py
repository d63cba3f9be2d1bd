"""Tag use cases."""

from .get_tag import GetTagRequest, GetTagResponse, GetTagUseCase
from .list_tags import (
    ListTagsRequest,
    ListTagsResponse,
    ListTagsUseCase,
    PopularTagsRequest,
    PopularTagsUseCase,
    SuggestTagsRequest,
    SuggestTagsUseCase,
)
from .manage_tag import (
    DeleteTagRequest,
    DeleteTagResponse,
    DeleteTagUseCase,
    MergeTagsRequest,
    MergeTagsResponse,
    MergeTagsUseCase,
    UpdateTagRequest,
    UpdateTagUseCase,
)

__all__ = [
    "DeleteTagRequest",
    "DeleteTagResponse",
    "DeleteTagUseCase",
    "GetTagRequest",
    "GetTagResponse",
    "GetTagUseCase",
    "ListTagsRequest",
    "ListTagsResponse",
    "ListTagsUseCase",
    "MergeTagsRequest",
    "MergeTagsResponse",
    "MergeTagsUseCase",
    "PopularTagsRequest",
    "PopularTagsUseCase",
    "SuggestTagsRequest",
    "SuggestTagsUseCase",
    "UpdateTagRequest",
    "UpdateTagUseCase",
]
