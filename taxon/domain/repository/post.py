"""Post repository interface.

The taxonomy needs read access to post/tag associations and the ability to
replace the full set of posts attached to a tag.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from taxon.domain.model.post import Post
from taxon.domain.value import PostId, TagId


class PostRepository(ABC):
    """Repository interface for posts and their tag associations."""

    @abstractmethod
    async def save(self, post: Post) -> Post:
        """Save or update a post together with its tag associations.

        Args:
            post: Post to save

        Returns:
            Saved post
        """
        pass

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID.

        Args:
            post_id: Post identifier

        Returns:
            Post if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_post_ids_by_tag(self, tag_id: TagId) -> set[PostId]:
        """Find ids of every post associated with a tag.

        Args:
            tag_id: Tag identifier

        Returns:
            Set of post ids
        """
        pass

    @abstractmethod
    async def set_tag_posts(self, tag_id: TagId, post_ids: set[PostId]) -> None:
        """Replace the set of posts attached to a tag.

        Posts not in ``post_ids`` lose the tag, posts in it gain the tag.
        An empty set detaches the tag from every post.

        Args:
            tag_id: Tag identifier
            post_ids: Complete new set of associated posts
        """
        pass

    @abstractmethod
    async def count_posts_by_tag(self) -> dict[TagId, int]:
        """Count associated posts per tag.

        Returns:
            Mapping of tag id to post count (tags without posts omitted)
        """
        pass

    @abstractmethod
    async def find_published_since(self, cutoff: datetime) -> list[Post]:
        """Find posts published at or after a cutoff.

        Args:
            cutoff: Earliest publication time

        Returns:
            Published posts with their tag ids
        """
        pass

    @abstractmethod
    async def count_tags_for_post(self, post_id: PostId) -> int:
        """Count tags currently attached to a post.

        Args:
            post_id: Post identifier

        Returns:
            Number of tags (0 if the post does not exist)
        """
        pass
