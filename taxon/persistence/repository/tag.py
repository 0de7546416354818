"""PostgreSQL implementation of Tag repository."""

from typing import Any, Optional

from sqlalchemy import delete, func, insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from taxon.domain.model.tag import Tag, TagSummary
from taxon.domain.repository.tag import TagRepository
from taxon.domain.value import Slug, TagId, TagSortField
from taxon.persistence.mappers import row_to_tag, tag_to_dict
from taxon.persistence.tables import tags_table


class PostgresTagRepository(TagRepository):
    """PostgreSQL implementation of TagRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def save(self, tag: Tag) -> Tag:
        """Save or update a tag."""
        tag_dict = tag_to_dict(tag)

        # Try to find existing tag
        existing = await self.find_by_id(tag.id)

        if existing:
            stmt = (
                update(tags_table).where(tags_table.c.id == tag.id).values(**tag_dict)
            )
            await self.session.execute(stmt)
        else:
            stmt = insert(tags_table).values(**tag_dict)
            await self.session.execute(stmt)

        await self.session.flush()
        return tag

    async def find_by_id(self, tag_id: TagId) -> Optional[Tag]:
        """Find tag by ID."""
        stmt = select(tags_table).where(tags_table.c.id == tag_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_tag(row._asdict()) if row else None

    async def find_by_ids(self, tag_ids: list[TagId]) -> list[Tag]:
        """Find multiple tags by ID in a single query."""
        if not tag_ids:
            return []

        stmt = select(tags_table).where(tags_table.c.id.in_(tag_ids))
        result = await self.session.execute(stmt)
        return [row_to_tag(row._asdict()) for row in result.fetchall()]

    async def find_by_slug(self, slug: Slug) -> Optional[Tag]:
        """Find tag by slug."""
        stmt = select(tags_table).where(tags_table.c.slug == slug.root)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_tag(row._asdict()) if row else None

    async def find_conflicting(
        self,
        name: str,
        slug: Slug,
        case_sensitive: bool,
        exclude_id: Optional[TagId] = None,
    ) -> Optional[Tag]:
        """Find a tag that already uses the given name or slug."""
        if case_sensitive:
            name_clause = tags_table.c.name == name
        else:
            name_clause = func.lower(tags_table.c.name) == name.lower()

        stmt = select(tags_table).where(or_(tags_table.c.slug == slug.root, name_clause))
        if exclude_id is not None:
            stmt = stmt.where(tags_table.c.id != exclude_id)

        result = await self.session.execute(stmt.limit(1))
        row = result.fetchone()
        return row_to_tag(row._asdict()) if row else None

    async def find_all(
        self,
        order_by: TagSortField = TagSortField.NAME,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> list[Tag]:
        """Find all tags."""
        column = tags_table.c[order_by.value]
        stmt = select(tags_table).order_by(
            column.desc() if descending else column, tags_table.c.name
        )
        if limit is not None:
            stmt = stmt.limit(limit)

        result = await self.session.execute(stmt)
        return [row_to_tag(row._asdict()) for row in result.fetchall()]

    async def find_children(self, parent_id: Optional[TagId]) -> list[Tag]:
        """Find direct children of a tag, ordered by name."""
        if parent_id is None:
            condition = tags_table.c.parent_id.is_(None)
        else:
            condition = tags_table.c.parent_id == parent_id

        stmt = select(tags_table).where(condition).order_by(tags_table.c.name)
        result = await self.session.execute(stmt)
        return [row_to_tag(row._asdict()) for row in result.fetchall()]

    async def find_summaries(self) -> list[TagSummary]:
        """Load (id, name, slug, usage_count) for every tag."""
        stmt = select(
            tags_table.c.id,
            tags_table.c.name,
            tags_table.c.slug,
            tags_table.c.usage_count,
        ).order_by(tags_table.c.name)
        result = await self.session.execute(stmt)
        return [TagSummary(**row._asdict()) for row in result.fetchall()]

    async def update_many(self, tag_ids: list[TagId], values: dict[str, Any]) -> int:
        """Apply the same column values to several tags."""
        if not tag_ids:
            return 0

        stmt = update(tags_table).where(tags_table.c.id.in_(tag_ids)).values(**values)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def delete(self, tag_id: TagId) -> None:
        """Delete a tag."""
        stmt = delete(tags_table).where(tags_table.c.id == tag_id)
        await self.session.execute(stmt)
        await self.session.flush()

    async def delete_many(self, tag_ids: list[TagId]) -> int:
        """Delete several tags."""
        if not tag_ids:
            return 0

        stmt = delete(tags_table).where(tags_table.c.id.in_(tag_ids))
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def count(self) -> int:
        """Count all tags."""
        stmt = select(func.count()).select_from(tags_table)
        result = await self.session.execute(stmt)
        return result.scalar() or 0
