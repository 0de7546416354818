"""PostgreSQL implementation of Post repository."""

from collections import defaultdict
from datetime import datetime
from typing import Optional
from uuid import UUID

import logfire
from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from taxon.domain.model import Post
from taxon.domain.repository.post import PostRepository
from taxon.domain.value import PostId, TagId
from taxon.persistence.mappers import post_to_dict, row_to_post
from taxon.persistence.tables import post_tags_table, posts_table


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _fetch_tags_for_posts(self, post_ids: list[UUID]) -> dict[UUID, list[UUID]]:
        """Fetch tag ids for multiple posts in a single query.

        Args:
            post_ids: List of post IDs

        Returns:
            Dict mapping post_id -> list of tag ids
        """
        if not post_ids:
            return {}

        stmt = select(post_tags_table.c.post_id, post_tags_table.c.tag_id).where(
            post_tags_table.c.post_id.in_(post_ids)
        )
        result = await self.session.execute(stmt)

        post_tag_map: dict[UUID, list[UUID]] = defaultdict(list)
        for row in result.fetchall():
            post_tag_map[row.post_id].append(row.tag_id)

        return post_tag_map

    async def save(self, post: Post) -> Post:
        """Save or update a post together with its tag associations."""
        with logfire.span("post_repository.save", post_id=str(post.id)):
            post_dict = post_to_dict(post)

            existing = await self.session.execute(
                select(posts_table.c.id).where(posts_table.c.id == post.id)
            )
            if existing.fetchone():
                await self.session.execute(
                    update(posts_table)
                    .where(posts_table.c.id == post.id)
                    .values(**post_dict)
                )
            else:
                await self.session.execute(insert(posts_table).values(**post_dict))

            # Replace tag associations
            await self.session.execute(
                delete(post_tags_table).where(post_tags_table.c.post_id == post.id)
            )
            tag_ids = list(dict.fromkeys(post.tag_ids))
            if tag_ids:
                await self.session.execute(
                    insert(post_tags_table),
                    [{"post_id": post.id, "tag_id": tag_id} for tag_id in tag_ids],
                )

            await self.session.flush()
            return post

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        stmt = select(posts_table).where(posts_table.c.id == post_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        if not row:
            return None

        post_tag_map = await self._fetch_tags_for_posts([post_id])
        return row_to_post(row._asdict(), tag_ids=post_tag_map.get(post_id, []))

    async def find_post_ids_by_tag(self, tag_id: TagId) -> set[PostId]:
        """Find ids of every post associated with a tag."""
        stmt = select(post_tags_table.c.post_id).where(
            post_tags_table.c.tag_id == tag_id
        )
        result = await self.session.execute(stmt)
        return {PostId(row.post_id) for row in result.fetchall()}

    async def set_tag_posts(self, tag_id: TagId, post_ids: set[PostId]) -> None:
        """Replace the set of posts attached to a tag."""
        with logfire.span(
            "post_repository.set_tag_posts", tag_id=str(tag_id), count=len(post_ids)
        ):
            await self.session.execute(
                delete(post_tags_table).where(post_tags_table.c.tag_id == tag_id)
            )
            if post_ids:
                await self.session.execute(
                    insert(post_tags_table),
                    [{"post_id": post_id, "tag_id": tag_id} for post_id in post_ids],
                )
            await self.session.flush()

    async def count_posts_by_tag(self) -> dict[TagId, int]:
        """Count associated posts per tag."""
        stmt = select(
            post_tags_table.c.tag_id, func.count(post_tags_table.c.post_id.distinct())
        ).group_by(post_tags_table.c.tag_id)
        result = await self.session.execute(stmt)
        return {TagId(tag_id): count for tag_id, count in result.fetchall()}

    async def find_published_since(self, cutoff: datetime) -> list[Post]:
        """Find posts published at or after a cutoff."""
        with logfire.span("post_repository.find_published_since"):
            stmt = select(posts_table).where(posts_table.c.published_at >= cutoff)
            result = await self.session.execute(stmt)
            rows = result.fetchall()
            if not rows:
                return []

            post_tag_map = await self._fetch_tags_for_posts([row.id for row in rows])
            posts = [
                row_to_post(row._asdict(), tag_ids=post_tag_map.get(row.id, []))
                for row in rows
            ]
            logfire.info("Found published posts", count=len(posts))
            return posts

    async def count_tags_for_post(self, post_id: PostId) -> int:
        """Count tags currently attached to a post."""
        stmt = (
            select(func.count())
            .select_from(post_tags_table)
            .where(post_tags_table.c.post_id == post_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0
