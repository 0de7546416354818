"""Response models shared by tag use cases."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from taxon.domain.model import BulkResult, Tag


class TagItem(BaseModel):
    """Tag item in response."""

    id: str
    name: str
    slug: str
    description: Optional[str]
    color: Optional[str]
    icon: Optional[str]
    meta_title: Optional[str]
    meta_description: Optional[str]
    og_image: Optional[str]
    parent_id: Optional[str]
    path: Optional[str]
    label: Optional[str]
    level: int
    usage_count: int
    featured: bool
    trending: bool
    locked: bool
    protected: bool
    synonyms: list[str]
    synonym_hits: int
    linked_tag_ids: list[str]
    merge_count: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, tag: Tag) -> "TagItem":
        """Convert domain Tag to response model."""
        return cls(
            id=str(tag.id),
            name=tag.name,
            slug=tag.slug.root,
            description=tag.description,
            color=tag.color,
            icon=tag.icon,
            meta_title=tag.meta_title,
            meta_description=tag.meta_description,
            og_image=tag.og_image,
            parent_id=str(tag.parent_id) if tag.parent_id else None,
            path=tag.path,
            label=tag.label,
            level=tag.level,
            usage_count=tag.usage_count,
            featured=tag.featured,
            trending=tag.trending,
            locked=tag.locked,
            protected=tag.protected,
            synonyms=list(tag.synonyms),
            synonym_hits=tag.synonym_hits,
            linked_tag_ids=[str(linked) for linked in tag.linked_tag_ids],
            merge_count=tag.merge_count,
            created_at=tag.created_at,
            updated_at=tag.updated_at,
        )


class BulkFailureItem(BaseModel):
    """Item a bulk operation refused."""

    id: str
    reason: str


class BulkResultResponse(BaseModel):
    """Bulk operation response."""

    count: int
    succeeded: list[str]
    failed: list[BulkFailureItem]

    @classmethod
    def from_domain(cls, result: BulkResult) -> "BulkResultResponse":
        """Convert domain BulkResult to response model."""
        return cls(
            count=result.count,
            succeeded=[str(tag_id) for tag_id in result.succeeded],
            failed=[
                BulkFailureItem(id=str(failure.id), reason=failure.reason)
                for failure in result.failed
            ],
        )
