"""Builders for domain objects used across tests."""

from datetime import datetime
from typing import Optional
from uuid import uuid4

from taxon.domain.model import Post, Tag
from taxon.domain.value import PostId, Slug, TagId, slugify


def make_tag(name: str, **overrides) -> Tag:
    """Build a root tag with a slug derived from its name.

    Hierarchy fields default to a root tag; pass ``parent_id``, ``path`` and
    ``level`` together for children, or run a rebuild afterwards.
    """
    slug = overrides.pop("slug", None) or slugify(name)
    fields = {
        "id": TagId(uuid4()),
        "name": name,
        "slug": Slug(slug),
        "path": slug,
        "label": name,
        "level": 1,
    }
    fields.update(overrides)
    return Tag(**fields)


def make_post(
    tag_ids: list[TagId],
    title: str = "Test Post",
    published_at: Optional[datetime] = None,
) -> Post:
    """Build a post carrying the given tags."""
    return Post(
        id=PostId(uuid4()),
        title=title,
        tag_ids=tag_ids,
        published_at=published_at,
    )
