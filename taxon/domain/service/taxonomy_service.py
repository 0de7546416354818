"""Taxonomy orchestrator.

Single entry point over the tag, hierarchy, duplicate, merge, analytics and
follow services. It owns the configuration cell, so a settings change made
here is seen by every operation that starts afterwards.
"""

from collections.abc import Iterable
from typing import Any, Optional

import logfire
from pydantic import ValidationError as PydanticValidationError

from taxon.config import ConfigCell, TaxonomySettings
from taxon.domain.error import ValidationError
from taxon.domain.model import (
    BulkMergeResult,
    BulkResult,
    CleanupResult,
    DuplicateCandidate,
    DuplicateGroup,
    FollowedTag,
    Tag,
    TagAnalytics,
    TagChanges,
    TagDraft,
    TagFollow,
    TagStyle,
)
from taxon.domain.value import PostId, TagId, TagSortField, UserId

from .analytics_service import AnalyticsService
from .base import Service
from .duplicate_service import DuplicateService
from .follow_service import FollowService
from .hierarchy_service import HierarchyService, TagTreeNode
from .merge_service import MergeService
from .tag_service import TagService


class TaxonomyService(Service):
    """Cohesive taxonomy API delegating to the specialised services."""

    def __init__(
        self,
        tag_service: TagService,
        hierarchy_service: HierarchyService,
        duplicate_service: DuplicateService,
        merge_service: MergeService,
        analytics_service: AnalyticsService,
        follow_service: FollowService,
        config_cell: ConfigCell,
    ) -> None:
        self.tag_service = tag_service
        self.hierarchy_service = hierarchy_service
        self.duplicate_service = duplicate_service
        self.merge_service = merge_service
        self.analytics_service = analytics_service
        self.follow_service = follow_service
        self.config_cell = config_cell

    @property
    def config(self) -> TaxonomySettings:
        """Configuration in effect right now."""
        return self.config_cell.current

    def update_config(self, **changes: Any) -> TaxonomySettings:
        """Validate and apply configuration changes.

        Operations already running keep the configuration they started with.

        Returns:
            The new configuration

        Raises:
            ValidationError: If a value is invalid; nothing changes then
        """
        with logfire.span("taxonomy_service.update_config", fields=sorted(changes)):
            try:
                config = self.config_cell.replace(**changes)
            except PydanticValidationError as e:
                logfire.warn("Configuration update rejected", error=str(e))
                raise ValidationError(f"Invalid configuration: {e}") from e

            logfire.info("Configuration updated", fields=sorted(changes))
            return config

    # Tags

    async def create_tag(self, draft: TagDraft) -> Tag:
        return await self.tag_service.create_tag(draft)

    async def update_tag(self, tag_id: TagId, changes: TagChanges) -> Tag:
        return await self.tag_service.update_tag(tag_id, changes)

    async def delete_tag(self, tag_id: TagId) -> None:
        await self.tag_service.delete_tag(tag_id)

    async def get_tag(self, tag_id: TagId) -> Tag:
        return await self.tag_service.get_tag(tag_id)

    async def get_tag_by_slug(self, slug: str) -> Tag:
        return await self.tag_service.get_tag_by_slug(slug)

    async def list_tags(
        self,
        order_by: TagSortField = TagSortField.NAME,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> list[Tag]:
        return await self.tag_service.list_tags(order_by, descending, limit)

    # Duplicates and merging

    async def find_duplicate_tags(
        self, threshold: Optional[float] = None
    ) -> list[DuplicateCandidate]:
        return await self.duplicate_service.find_duplicate_tags(threshold)

    async def group_duplicates(
        self,
        threshold: Optional[float] = None,
        exclude_ids: Optional[Iterable[TagId]] = None,
    ) -> list[DuplicateGroup]:
        return await self.duplicate_service.group_duplicates(threshold, exclude_ids)

    async def bulk_merge_duplicates(
        self,
        threshold: Optional[float] = None,
        dry_run: bool = False,
        exclude_ids: Optional[Iterable[TagId]] = None,
    ) -> BulkMergeResult:
        return await self.merge_service.bulk_merge_duplicates(
            threshold, dry_run, exclude_ids
        )

    async def merge_tags(self, source_ids: list[TagId], target_id: TagId) -> Tag:
        return await self.merge_service.merge_tags(source_ids, target_id)

    # Hierarchy

    async def rebuild_tree_paths(self) -> int:
        return await self.hierarchy_service.rebuild_tree_paths()

    async def get_ancestors(self, tag_id: TagId) -> list[Tag]:
        return await self.hierarchy_service.get_ancestors(tag_id)

    async def get_descendants(self, tag_id: TagId) -> list[Tag]:
        return await self.hierarchy_service.get_descendants(tag_id)

    async def get_siblings(self, tag_id: TagId) -> list[Tag]:
        return await self.hierarchy_service.get_siblings(tag_id)

    async def get_nested_tree(
        self, parent_id: Optional[TagId] = None
    ) -> list[TagTreeNode]:
        return await self.hierarchy_service.get_nested_tree(parent_id)

    # Analytics

    async def get_analytics(self) -> TagAnalytics:
        return await self.analytics_service.get_analytics()

    # Bulk operations

    async def bulk_set_parent(
        self, tag_ids: list[TagId], parent_id: Optional[TagId]
    ) -> BulkResult:
        return await self.tag_service.bulk_set_parent(tag_ids, parent_id)

    async def bulk_update_style(self, tag_ids: list[TagId], style: TagStyle) -> BulkResult:
        return await self.tag_service.bulk_update_style(tag_ids, style)

    async def bulk_lock(self, tag_ids: list[TagId], locked: bool) -> BulkResult:
        return await self.tag_service.bulk_lock(tag_ids, locked)

    async def bulk_delete(self, tag_ids: list[TagId]) -> BulkResult:
        return await self.tag_service.bulk_delete(tag_ids)

    # Linked tags, trending, cleanup, limits

    async def expand_linked_tags(self, tag_ids: list[TagId]) -> list[TagId]:
        return await self.tag_service.expand_linked_tags(tag_ids)

    async def update_trending_tags(self) -> int:
        return await self.tag_service.update_trending_tags()

    async def get_trending_tags(self) -> list[Tag]:
        return await self.tag_service.get_trending_tags()

    async def cleanup_orphaned_tags(self) -> CleanupResult:
        return await self.tag_service.cleanup_orphaned_tags()

    async def validate_tag_count(
        self, post_id: PostId, additional_tag_ids: list[TagId]
    ) -> None:
        await self.tag_service.validate_tag_count(post_id, additional_tag_ids)

    # Following

    async def follow_tag(self, tag_id: TagId, user_id: UserId, weight: int = 1) -> TagFollow:
        return await self.follow_service.follow_tag(tag_id, user_id, weight)

    async def unfollow_tag(self, tag_id: TagId, user_id: UserId) -> None:
        await self.follow_service.unfollow_tag(tag_id, user_id)

    async def get_followed_tags(self, user_id: UserId) -> list[FollowedTag]:
        return await self.follow_service.get_followed_tags(user_id)

    async def is_following(self, tag_id: TagId, user_id: UserId) -> bool:
        return await self.follow_service.is_following(tag_id, user_id)
