"""Tag entity: a node of the taxonomy."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from taxon.domain.model.common import DomainModel, utcnow
from taxon.domain.value import Slug, TagId
from taxon.domain.value.common import ValueObject


class Tag(DomainModel):
    """Taxonomy node.

    Hierarchy is stored as a parent id plus a materialized ``path`` (slugs
    from the root down to this tag, joined with ``/``), the display ``label``
    and the ``level`` (root = 1). ``usage_count`` mirrors the number of
    distinct posts associated with the tag and is recomputed on merge.
    """

    id: TagId
    name: str = Field(min_length=1, max_length=255)
    slug: Slug
    description: Optional[str] = None
    color: Optional[str] = None
    icon: Optional[str] = None

    # SEO
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    og_image: Optional[str] = None

    # Hierarchy
    parent_id: Optional[TagId] = None
    path: Optional[str] = None
    label: Optional[str] = None
    level: int = Field(default=1, ge=1)

    # Usage and flags
    usage_count: int = Field(default=0, ge=0)
    featured: bool = False
    trending: bool = False
    locked: bool = False
    protected: bool = False

    # Matching aids
    synonyms: list[str] = Field(default_factory=list)
    synonym_hits: int = Field(default=0, ge=0)
    linked_tag_ids: list[TagId] = Field(default_factory=list)

    merge_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def summary(self) -> "TagSummary":
        """Lightweight projection used by duplicate detection."""
        return TagSummary(
            id=self.id,
            name=self.name,
            slug=self.slug.root,
            usage_count=self.usage_count,
        )


class TagSummary(ValueObject):
    """Minimal tag projection: identity, name and usage."""

    id: TagId
    name: str
    slug: str
    usage_count: int


class TreeFields(ValueObject):
    """Materialized hierarchy fields computed for a tag."""

    path: Optional[str]
    label: Optional[str]
    level: int


class TagDraft(ValueObject):
    """Input for creating a tag.

    ``name`` is trimmed (and lowercased under ``force_lowercase``); ``slug``
    is derived from it when omitted.
    """

    name: str
    slug: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None
    icon: Optional[str] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    og_image: Optional[str] = None
    parent_id: Optional[TagId] = None
    featured: bool = False
    locked: bool = False
    protected: bool = False
    synonyms: list[str] = Field(default_factory=list)
    linked_tag_ids: list[TagId] = Field(default_factory=list)


class TagChanges(ValueObject):
    """Partial update of a tag.

    Only explicitly set fields are applied, so ``parent_id=None`` moves the
    tag to the root while an omitted ``parent_id`` leaves it in place.
    """

    name: Optional[str] = None
    slug: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None
    icon: Optional[str] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    og_image: Optional[str] = None
    parent_id: Optional[TagId] = None
    featured: Optional[bool] = None
    locked: Optional[bool] = None
    protected: Optional[bool] = None
    synonyms: Optional[list[str]] = None
    linked_tag_ids: Optional[list[TagId]] = None

    # Allows editing a locked tag
    force_unlock: bool = False


class TagStyle(ValueObject):
    """Presentation fields applied by bulk style updates."""

    color: Optional[str] = None
    icon: Optional[str] = None
    featured: Optional[bool] = None
