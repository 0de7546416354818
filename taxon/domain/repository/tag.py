"""Tag repository interface."""

from abc import ABC, abstractmethod
from typing import Any, Optional

from taxon.domain.model.tag import Tag, TagSummary
from taxon.domain.value import Slug, TagId, TagSortField


class TagRepository(ABC):
    """Repository interface for the Tag collection.

    Tags form a flat, id-keyed table; hierarchy is expressed only through
    ``parent_id`` references.
    """

    @abstractmethod
    async def save(self, tag: Tag) -> Tag:
        """Save or update a tag.

        Args:
            tag: Tag to save

        Returns:
            Saved tag
        """
        pass

    @abstractmethod
    async def find_by_id(self, tag_id: TagId) -> Optional[Tag]:
        """Find tag by ID.

        Args:
            tag_id: Tag identifier

        Returns:
            Tag if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, tag_ids: list[TagId]) -> list[Tag]:
        """Find multiple tags by ID in a single query.

        Args:
            tag_ids: Tag identifiers

        Returns:
            Found tags (may be fewer than requested)
        """
        pass

    @abstractmethod
    async def find_by_slug(self, slug: Slug) -> Optional[Tag]:
        """Find tag by slug.

        Args:
            slug: Tag slug

        Returns:
            Tag if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_conflicting(
        self,
        name: str,
        slug: Slug,
        case_sensitive: bool,
        exclude_id: Optional[TagId] = None,
    ) -> Optional[Tag]:
        """Find a tag that already uses the given name or slug.

        Args:
            name: Candidate name
            slug: Candidate slug
            case_sensitive: Whether names differing only in case conflict
            exclude_id: Tag to ignore (the one being updated)

        Returns:
            First conflicting tag, None if the name and slug are free
        """
        pass

    @abstractmethod
    async def find_all(
        self,
        order_by: TagSortField = TagSortField.NAME,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> list[Tag]:
        """Find all tags.

        Args:
            order_by: Field to order by
            descending: Reverse the ordering
            limit: Maximum number of tags, None for all

        Returns:
            List of tags
        """
        pass

    @abstractmethod
    async def find_children(self, parent_id: Optional[TagId]) -> list[Tag]:
        """Find direct children of a tag, ordered by name.

        Args:
            parent_id: Parent tag, None for root tags

        Returns:
            Child tags
        """
        pass

    @abstractmethod
    async def find_summaries(self) -> list[TagSummary]:
        """Load (id, name, slug, usage_count) for every tag, ordered by name.

        Returns:
            Tag summaries
        """
        pass

    @abstractmethod
    async def update_many(self, tag_ids: list[TagId], values: dict[str, Any]) -> int:
        """Apply the same column values to several tags.

        Args:
            tag_ids: Tags to update
            values: Column values (e.g. ``{"locked": True}``)

        Returns:
            Number of tags updated
        """
        pass

    @abstractmethod
    async def delete(self, tag_id: TagId) -> None:
        """Delete a tag.

        Args:
            tag_id: Tag identifier
        """
        pass

    @abstractmethod
    async def delete_many(self, tag_ids: list[TagId]) -> int:
        """Delete several tags.

        Args:
            tag_ids: Tag identifiers

        Returns:
            Number of tags deleted
        """
        pass

    @abstractmethod
    async def count(self) -> int:
        """Count all tags."""
        pass
