"""TagFollow repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from taxon.domain.model.tag_follow import TagFollow
from taxon.domain.value import TagId, UserId


class TagFollowRepository(ABC):
    """Repository interface for tag subscriptions."""

    @abstractmethod
    async def save(self, follow: TagFollow) -> TagFollow:
        """Save a follow.

        Args:
            follow: Follow to save

        Returns:
            Saved follow
        """
        pass

    @abstractmethod
    async def find(self, tag_id: TagId, user_id: UserId) -> Optional[TagFollow]:
        """Find the follow for a (tag, user) pair.

        Args:
            tag_id: Tag identifier
            user_id: User identifier

        Returns:
            Follow if it exists, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user(self, user_id: UserId) -> list[TagFollow]:
        """Find every follow of a user, heaviest weight first.

        Args:
            user_id: User identifier

        Returns:
            Follows ordered by weight descending
        """
        pass

    @abstractmethod
    async def delete(self, tag_id: TagId, user_id: UserId) -> bool:
        """Delete the follow for a (tag, user) pair.

        Args:
            tag_id: Tag identifier
            user_id: User identifier

        Returns:
            True if a follow was deleted, False if none existed
        """
        pass

    @abstractmethod
    async def delete_by_tags(self, tag_ids: list[TagId]) -> int:
        """Delete every follow pointing at any of the given tags.

        Args:
            tag_ids: Tag identifiers

        Returns:
            Number of follows deleted
        """
        pass

    @abstractmethod
    async def reassign(self, from_tag_ids: list[TagId], to_tag_id: TagId) -> int:
        """Point follows of several tags at another tag.

        Keeps (tag, user) unique: a user who already follows ``to_tag_id``
        keeps that follow and loses the others; a user following several
        source tags keeps the heaviest of them.

        Args:
            from_tag_ids: Tags whose followers move
            to_tag_id: Tag receiving the followers

        Returns:
            Number of follows now pointing at ``to_tag_id`` that were moved
        """
        pass

    @abstractmethod
    async def count(self) -> int:
        """Count all follows."""
        pass

    @abstractmethod
    async def count_by_tag(self, tag_id: TagId) -> int:
        """Count followers of a tag.

        Args:
            tag_id: Tag identifier

        Returns:
            Number of follows
        """
        pass
