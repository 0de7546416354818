"""Post entity as seen by the taxonomy.

Posts are owned by the publishing system; the taxonomy only reads them and
replaces their tag associations.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from taxon.domain.model.common import DomainModel, utcnow
from taxon.domain.value import PostId, TagId


class Post(DomainModel):
    """Post with its tag associations."""

    id: PostId
    title: str = Field(min_length=1, max_length=300)
    tag_ids: list[TagId] = Field(default_factory=list)
    published_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)
