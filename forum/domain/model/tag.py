"""Tag entity for labelling threads."""

from datetime import datetime

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import TagId, TagName

DEFAULT_TAG_COLOR = "#6c757d"


class Tag(DomainModel):
    """Tag entity.

    Tags are created on demand when a thread names one that does not exist
    yet. `usage_count` equals the number of threads referencing the tag.
    """

    id: TagId
    name: TagName  # Unique, lowercase
    description: str = Field(default="", max_length=100)
    usage_count: int = Field(default=0, ge=0)
    color: str = DEFAULT_TAG_COLOR
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
