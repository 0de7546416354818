"""In-memory implementation of Post repository for testing."""

from collections import Counter
from copy import deepcopy
from datetime import datetime
from typing import Optional

from taxon.domain.model.post import Post
from taxon.domain.repository.post import PostRepository
from taxon.domain.value import PostId, TagId


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self) -> None:
        """Initialize empty repository."""
        self._posts: dict[PostId, Post] = {}

    async def save(self, post: Post) -> Post:
        """Save or update a post."""
        stored = post.model_copy(update={"tag_ids": list(dict.fromkeys(post.tag_ids))})
        self._posts[post.id] = deepcopy(stored)
        return deepcopy(stored)

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        post = self._posts.get(post_id)
        return deepcopy(post) if post else None

    async def find_post_ids_by_tag(self, tag_id: TagId) -> set[PostId]:
        """Find ids of every post associated with a tag."""
        return {post.id for post in self._posts.values() if tag_id in post.tag_ids}

    async def set_tag_posts(self, tag_id: TagId, post_ids: set[PostId]) -> None:
        """Replace the set of posts attached to a tag."""
        for post_id, post in self._posts.items():
            has_tag = tag_id in post.tag_ids
            if post_id in post_ids and not has_tag:
                tag_ids = [*post.tag_ids, tag_id]
            elif post_id not in post_ids and has_tag:
                tag_ids = [t for t in post.tag_ids if t != tag_id]
            else:
                continue
            self._posts[post_id] = post.model_copy(update={"tag_ids": tag_ids})

    async def count_posts_by_tag(self) -> dict[TagId, int]:
        """Count associated posts per tag."""
        return dict(Counter(tag_id for post in self._posts.values() for tag_id in post.tag_ids))

    async def find_published_since(self, cutoff: datetime) -> list[Post]:
        """Find posts published at or after a cutoff."""
        return [
            deepcopy(post)
            for post in self._posts.values()
            if post.published_at is not None and post.published_at >= cutoff
        ]

    async def count_tags_for_post(self, post_id: PostId) -> int:
        """Count tags currently attached to a post."""
        post = self._posts.get(post_id)
        return len(post.tag_ids) if post else 0
