"""In-memory implementation of Tag repository for testing."""

from copy import deepcopy
from typing import Any, Optional

from taxon.domain.model.tag import Tag, TagSummary
from taxon.domain.repository.tag import TagRepository
from taxon.domain.value import Slug, TagId, TagSortField


def _sort_key(tag: Tag, order_by: TagSortField) -> Any:
    if order_by == TagSortField.SLUG:
        return tag.slug.root
    return getattr(tag, order_by.value)


class InMemoryTagRepository(TagRepository):
    """In-memory implementation of TagRepository for testing."""

    def __init__(self) -> None:
        """Initialize empty repository."""
        self._tags: dict[TagId, Tag] = {}

    async def save(self, tag: Tag) -> Tag:
        """Save or update a tag."""
        self._tags[tag.id] = deepcopy(tag)
        return deepcopy(tag)

    async def find_by_id(self, tag_id: TagId) -> Optional[Tag]:
        """Find tag by ID."""
        tag = self._tags.get(tag_id)
        return deepcopy(tag) if tag else None

    async def find_by_ids(self, tag_ids: list[TagId]) -> list[Tag]:
        """Find multiple tags by ID."""
        return [deepcopy(self._tags[tag_id]) for tag_id in tag_ids if tag_id in self._tags]

    async def find_by_slug(self, slug: Slug) -> Optional[Tag]:
        """Find tag by slug."""
        for tag in self._tags.values():
            if tag.slug == slug:
                return deepcopy(tag)
        return None

    async def find_conflicting(
        self,
        name: str,
        slug: Slug,
        case_sensitive: bool,
        exclude_id: Optional[TagId] = None,
    ) -> Optional[Tag]:
        """Find a tag that already uses the given name or slug."""
        for tag in self._tags.values():
            if tag.id == exclude_id:
                continue
            if case_sensitive:
                same_name = tag.name == name
            else:
                same_name = tag.name.lower() == name.lower()
            if same_name or tag.slug == slug:
                return deepcopy(tag)
        return None

    async def find_all(
        self,
        order_by: TagSortField = TagSortField.NAME,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> list[Tag]:
        """Find all tags."""
        tags = sorted(self._tags.values(), key=lambda t: t.name)
        tags.sort(key=lambda t: _sort_key(t, order_by), reverse=descending)
        if limit is not None:
            tags = tags[:limit]
        return [deepcopy(tag) for tag in tags]

    async def find_children(self, parent_id: Optional[TagId]) -> list[Tag]:
        """Find direct children of a tag, ordered by name."""
        children = [tag for tag in self._tags.values() if tag.parent_id == parent_id]
        children.sort(key=lambda t: t.name)
        return [deepcopy(tag) for tag in children]

    async def find_summaries(self) -> list[TagSummary]:
        """Load summaries for every tag, ordered by name."""
        tags = sorted(self._tags.values(), key=lambda t: t.name)
        return [tag.summary() for tag in tags]

    async def update_many(self, tag_ids: list[TagId], values: dict[str, Any]) -> int:
        """Apply the same column values to several tags."""
        updated = 0
        for tag_id in tag_ids:
            tag = self._tags.get(tag_id)
            if tag:
                self._tags[tag_id] = tag.model_copy(update=deepcopy(values))
                updated += 1
        return updated

    async def delete(self, tag_id: TagId) -> None:
        """Delete a tag."""
        self._tags.pop(tag_id, None)

    async def delete_many(self, tag_ids: list[TagId]) -> int:
        """Delete several tags."""
        deleted = 0
        for tag_id in tag_ids:
            if self._tags.pop(tag_id, None):
                deleted += 1
        return deleted

    async def count(self) -> int:
        """Count all tags."""
        return len(self._tags)
