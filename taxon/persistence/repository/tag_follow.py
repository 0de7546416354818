"""PostgreSQL implementation of TagFollow repository."""

from typing import Optional
from uuid import UUID

import logfire
from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from taxon.domain.model import TagFollow
from taxon.domain.repository.tag_follow import TagFollowRepository
from taxon.domain.value import TagId, UserId
from taxon.persistence.mappers import row_to_tag_follow, tag_follow_to_dict
from taxon.persistence.tables import tag_follows_table


def plan_reassignment(
    source_follows: list[TagFollow], target_user_ids: set[UserId]
) -> tuple[list[TagFollow], list[TagFollow]]:
    """Split source follows into those to move and those to drop.

    A user already following the target keeps that follow; a user following
    several sources keeps the heaviest one (first seen on ties).

    Returns:
        (follows to move, follows to drop)
    """
    best: dict[UserId, TagFollow] = {}
    for follow in source_follows:
        if follow.user_id in target_user_ids:
            continue
        current = best.get(follow.user_id)
        if current is None or follow.weight > current.weight:
            best[follow.user_id] = follow

    keep = {follow.id for follow in best.values()}
    moved = [follow for follow in source_follows if follow.id in keep]
    dropped = [follow for follow in source_follows if follow.id not in keep]
    return moved, dropped


class PostgresTagFollowRepository(TagFollowRepository):
    """PostgreSQL implementation of TagFollowRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def save(self, follow: TagFollow) -> TagFollow:
        """Save a follow."""
        stmt = insert(tag_follows_table).values(**tag_follow_to_dict(follow))
        await self.session.execute(stmt)
        await self.session.flush()
        return follow

    async def find(self, tag_id: TagId, user_id: UserId) -> Optional[TagFollow]:
        """Find the follow for a (tag, user) pair."""
        stmt = select(tag_follows_table).where(
            tag_follows_table.c.tag_id == tag_id,
            tag_follows_table.c.user_id == user_id,
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_tag_follow(row._asdict()) if row else None

    async def find_by_user(self, user_id: UserId) -> list[TagFollow]:
        """Find every follow of a user, heaviest weight first."""
        stmt = (
            select(tag_follows_table)
            .where(tag_follows_table.c.user_id == user_id)
            .order_by(tag_follows_table.c.weight.desc(), tag_follows_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_tag_follow(row._asdict()) for row in result.fetchall()]

    async def delete(self, tag_id: TagId, user_id: UserId) -> bool:
        """Delete the follow for a (tag, user) pair."""
        stmt = delete(tag_follows_table).where(
            tag_follows_table.c.tag_id == tag_id,
            tag_follows_table.c.user_id == user_id,
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def delete_by_tags(self, tag_ids: list[TagId]) -> int:
        """Delete every follow pointing at any of the given tags."""
        if not tag_ids:
            return 0

        stmt = delete(tag_follows_table).where(tag_follows_table.c.tag_id.in_(tag_ids))
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def reassign(self, from_tag_ids: list[TagId], to_tag_id: TagId) -> int:
        """Point follows of several tags at another tag."""
        if not from_tag_ids:
            return 0

        with logfire.span(
            "tag_follow_repository.reassign",
            to_tag_id=str(to_tag_id),
            source_count=len(from_tag_ids),
        ):
            result = await self.session.execute(
                select(tag_follows_table)
                .where(tag_follows_table.c.tag_id.in_(from_tag_ids))
                .order_by(tag_follows_table.c.created_at)
            )
            source_follows = [row_to_tag_follow(row._asdict()) for row in result.fetchall()]

            result = await self.session.execute(
                select(tag_follows_table.c.user_id).where(
                    tag_follows_table.c.tag_id == to_tag_id
                )
            )
            target_user_ids = {UserId(row.user_id) for row in result.fetchall()}

            moved, dropped = plan_reassignment(source_follows, target_user_ids)

            dropped_ids: list[UUID] = [follow.id for follow in dropped]
            if dropped_ids:
                await self.session.execute(
                    delete(tag_follows_table).where(
                        tag_follows_table.c.id.in_(dropped_ids)
                    )
                )
            moved_ids: list[UUID] = [follow.id for follow in moved]
            if moved_ids:
                await self.session.execute(
                    update(tag_follows_table)
                    .where(tag_follows_table.c.id.in_(moved_ids))
                    .values(tag_id=to_tag_id)
                )

            await self.session.flush()
            logfire.info("Followers reassigned", moved=len(moved), dropped=len(dropped))
            return len(moved)

    async def count(self) -> int:
        """Count all follows."""
        stmt = select(func.count()).select_from(tag_follows_table)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def count_by_tag(self, tag_id: TagId) -> int:
        """Count followers of a tag."""
        stmt = (
            select(func.count())
            .select_from(tag_follows_table)
            .where(tag_follows_table.c.tag_id == tag_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0
