"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from taxon.domain.model import Post, Tag, TagFollow
from taxon.domain.value import PostId, Slug, TagFollowId, TagId, UserId


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_tag(row: Dict[str, Any]) -> Tag:
    """Convert database row to Tag domain model.

    Args:
        row: Database row as dict

    Returns:
        Tag domain model
    """
    return Tag(
        id=TagId(_uuid(row["id"])),
        name=row["name"],
        slug=Slug(row["slug"]),
        description=row.get("description"),
        color=row.get("color"),
        icon=row.get("icon"),
        meta_title=row.get("meta_title"),
        meta_description=row.get("meta_description"),
        og_image=row.get("og_image"),
        parent_id=TagId(_uuid(row["parent_id"])) if row.get("parent_id") else None,
        path=row.get("path"),
        label=row.get("label"),
        level=row["level"],
        usage_count=row["usage_count"],
        featured=row["featured"],
        trending=row["trending"],
        locked=row["locked"],
        protected=row["protected"],
        synonyms=list(row.get("synonyms") or []),
        synonym_hits=row["synonym_hits"],
        linked_tag_ids=[TagId(_uuid(v)) for v in row.get("linked_tag_ids") or []],
        merge_count=row["merge_count"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def tag_to_dict(tag: Tag) -> Dict[str, Any]:
    """Convert Tag domain model to database dict.

    Args:
        tag: Tag domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = tag.model_dump()
    data["slug"] = tag.slug.root
    return data


def row_to_post(row: Dict[str, Any], tag_ids: list[UUID]) -> Post:
    """Convert database row plus its tag ids to Post domain model.

    Args:
        row: Database row as dict
        tag_ids: Ids of the tags attached to the post

    Returns:
        Post domain model
    """
    return Post(
        id=PostId(_uuid(row["id"])),
        title=row["title"],
        tag_ids=[TagId(_uuid(tag_id)) for tag_id in tag_ids],
        published_at=row.get("published_at"),
        created_at=row["created_at"],
    )


def post_to_dict(post: Post) -> Dict[str, Any]:
    """Convert Post domain model to a posts row (tag ids live in post_tags)."""
    return post.model_dump(exclude={"tag_ids"})


def row_to_tag_follow(row: Dict[str, Any]) -> TagFollow:
    """Convert database row to TagFollow domain model."""
    return TagFollow(
        id=TagFollowId(_uuid(row["id"])),
        tag_id=TagId(_uuid(row["tag_id"])),
        user_id=UserId(_uuid(row["user_id"])),
        weight=row["weight"],
        created_at=row["created_at"],
    )


def tag_follow_to_dict(follow: TagFollow) -> Dict[str, Any]:
    """Convert TagFollow domain model to database dict."""
    return follow.model_dump()
