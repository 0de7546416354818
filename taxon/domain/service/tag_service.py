"""Tag domain service."""

from collections import Counter
from datetime import timedelta
from typing import Any, Optional
from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError

from taxon.config import ConfigCell, TaxonomySettings
from taxon.domain.error import (
    BulkLimitExceededError,
    CycleDetectedError,
    DuplicateNameOrSlugError,
    SelfParentError,
    TagCountExceededError,
    TagLockedError,
    TagNotFoundError,
    TagProtectedError,
    TreeTooDeepError,
    ValidationError,
)
from taxon.domain.model import (
    BulkFailure,
    BulkResult,
    CleanupResult,
    Tag,
    TagChanges,
    TagDraft,
    TagStyle,
)
from taxon.domain.model.common import utcnow
from taxon.domain.repository import PostRepository, TagFollowRepository, TagRepository
from taxon.domain.value import PostId, Slug, TagId, TagSortField, fold, slugify

from .base import Service
from .hierarchy_service import HierarchyService

# Plain fields copied from TagChanges when explicitly set
_SIMPLE_FIELDS = (
    "description",
    "color",
    "icon",
    "meta_title",
    "meta_description",
    "og_image",
    "featured",
    "locked",
    "protected",
)


class TagService(Service):
    """Domain service for tag lifecycle and bulk operations."""

    def __init__(
        self,
        tag_repository: TagRepository,
        post_repository: PostRepository,
        follow_repository: TagFollowRepository,
        hierarchy_service: HierarchyService,
        config_cell: ConfigCell,
    ) -> None:
        """Initialize tag service.

        Args:
            tag_repository: Tag repository
            post_repository: Post repository (tag associations)
            follow_repository: Tag follow repository
            hierarchy_service: Hierarchy service for tree fields
            config_cell: Live taxonomy configuration
        """
        self.tag_repository = tag_repository
        self.post_repository = post_repository
        self.follow_repository = follow_repository
        self.hierarchy_service = hierarchy_service
        self.config_cell = config_cell

    async def create_tag(self, draft: TagDraft) -> Tag:
        """Create a new tag.

        Args:
            draft: Tag fields

        Returns:
            Created tag

        Raises:
            ValidationError: If the name, synonyms or links are invalid
            DuplicateNameOrSlugError: If the name or slug is taken
            TagNotFoundError: If the parent or a linked tag does not exist
            TreeTooDeepError: If the tag would sit too deep in the tree
        """
        config = self.config_cell.current

        with logfire.span("tag_service.create_tag", name=draft.name):
            name = self._normalize_name(draft.name, config)
            slug = self._make_slug(draft.slug or name, config)

            conflict = await self.tag_repository.find_conflicting(
                name, slug, config.case_sensitive
            )
            if conflict:
                logfire.warn("Tag name or slug taken", name=name, slug=slug.root)
                raise DuplicateNameOrSlugError(name, slug.root)

            if draft.parent_id is not None:
                parent = await self.tag_repository.find_by_id(draft.parent_id)
                if parent is None:
                    raise TagNotFoundError(str(draft.parent_id))

            tag_id = TagId(uuid4())
            fields = await self.hierarchy_service.compute_tree_fields(
                name, draft.parent_id, slug.root, config
            )
            self.hierarchy_service.check_depth(fields, config)

            tag = Tag(
                id=tag_id,
                name=name,
                slug=slug,
                description=draft.description,
                color=draft.color or config.default_color,
                icon=draft.icon,
                meta_title=draft.meta_title,
                meta_description=draft.meta_description,
                og_image=draft.og_image,
                parent_id=draft.parent_id,
                path=fields.path,
                label=fields.label,
                level=fields.level,
                featured=draft.featured,
                locked=draft.locked,
                protected=draft.protected,
                synonyms=self._normalize_synonyms(draft.synonyms, config),
                linked_tag_ids=await self._normalize_linked(
                    draft.linked_tag_ids, tag_id, config
                ),
            )
            saved = await self.tag_repository.save(tag)

            logfire.info("Tag created", tag_id=str(saved.id), slug=saved.slug.root)
            return saved

    async def update_tag(self, tag_id: TagId, changes: TagChanges) -> Tag:
        """Apply a partial update to a tag.

        Tree fields are recomputed when the name, slug or parent changes, and
        descendant paths follow a slug or parent change.

        Args:
            tag_id: Tag to update
            changes: Fields to change

        Returns:
            Updated tag

        Raises:
            TagNotFoundError: If the tag, new parent or a linked tag is missing
            TagLockedError: If the tag is locked and ``force_unlock`` is unset
            SelfParentError: If the tag would become its own parent
            CycleDetectedError: If the new parent is a descendant
            DuplicateNameOrSlugError: If the new name or slug is taken
            TreeTooDeepError: If the tag would sit too deep in the tree
        """
        config = self.config_cell.current
        requested = changes.model_fields_set

        with logfire.span(
            "tag_service.update_tag", tag_id=str(tag_id), fields=sorted(requested)
        ):
            existing = await self._get_tag(tag_id)
            if existing.locked and not changes.force_unlock:
                logfire.warn("Update refused, tag locked", tag_id=str(tag_id))
                raise TagLockedError(str(tag_id))

            update: dict[str, Any] = {
                field: getattr(changes, field)
                for field in _SIMPLE_FIELDS
                if field in requested and getattr(changes, field) is not None
            }

            name = existing.name
            if changes.name is not None:
                name = self._normalize_name(changes.name, config)
                update["name"] = name

            slug = existing.slug
            if changes.slug or changes.name is not None:
                slug = self._make_slug(changes.slug or name, config)
                update["slug"] = slug

            parent_id = existing.parent_id
            parent_changed = "parent_id" in requested and changes.parent_id != parent_id
            if parent_changed:
                if changes.parent_id is not None:
                    await self.hierarchy_service.validate_parent(tag_id, changes.parent_id)
                parent_id = changes.parent_id
                update["parent_id"] = parent_id

            if name != existing.name or slug != existing.slug:
                conflict = await self.tag_repository.find_conflicting(
                    name, slug, config.case_sensitive, exclude_id=tag_id
                )
                if conflict:
                    logfire.warn("Tag name or slug taken", name=name, slug=slug.root)
                    raise DuplicateNameOrSlugError(name, slug.root)

            slug_changed = slug != existing.slug
            if "name" in update or slug_changed or parent_changed:
                fields = await self.hierarchy_service.compute_tree_fields(
                    name, parent_id, slug.root, config
                )
                self.hierarchy_service.check_depth(fields, config)
                update.update(path=fields.path, label=fields.label, level=fields.level)

            if changes.synonyms is not None:
                update["synonyms"] = self._normalize_synonyms(changes.synonyms, config)
            if changes.linked_tag_ids is not None:
                update["linked_tag_ids"] = await self._normalize_linked(
                    changes.linked_tag_ids, tag_id, config
                )

            update["updated_at"] = utcnow()
            saved = await self.tag_repository.save(existing.model_copy(update=update))

            if slug_changed or parent_changed:
                await self.hierarchy_service.refresh_descendants(tag_id)

            logfire.info("Tag updated", tag_id=str(tag_id))
            return saved

    async def delete_tag(self, tag_id: TagId) -> None:
        """Delete a tag, detaching its posts, followers and children.

        Children move to the root level.

        Args:
            tag_id: Tag to delete

        Raises:
            TagNotFoundError: If the tag does not exist
            TagLockedError: If the tag is locked
            TagProtectedError: If the tag is protected and ``protect_all`` is on
        """
        config = self.config_cell.current

        with logfire.span("tag_service.delete_tag", tag_id=str(tag_id)):
            existing = await self._get_tag(tag_id)
            if existing.locked:
                logfire.warn("Delete refused, tag locked", tag_id=str(tag_id))
                raise TagLockedError(str(tag_id))
            if existing.protected and config.protect_all:
                logfire.warn("Delete refused, tag protected", tag_id=str(tag_id))
                raise TagProtectedError(str(tag_id))

            await self._remove([tag_id])
            logfire.info("Tag deleted", tag_id=str(tag_id))

    async def get_tag(self, tag_id: TagId) -> Tag:
        """Get a tag by ID.

        Raises:
            TagNotFoundError: If the tag does not exist
        """
        with logfire.span("tag_service.get_tag", tag_id=str(tag_id)):
            return await self._get_tag(tag_id)

    async def get_tag_by_slug(self, slug: str) -> Tag:
        """Get a tag by slug.

        Raises:
            TagNotFoundError: If no tag has that slug
        """
        with logfire.span("tag_service.get_tag_by_slug", slug=slug):
            try:
                parsed = Slug(slug)
            except PydanticValidationError as e:
                raise TagNotFoundError(slug) from e

            tag = await self.tag_repository.find_by_slug(parsed)
            if tag is None:
                logfire.warn("Tag not found", slug=slug)
                raise TagNotFoundError(slug)
            return tag

    async def list_tags(
        self,
        order_by: TagSortField = TagSortField.NAME,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> list[Tag]:
        """List tags.

        Args:
            order_by: Field to order by
            descending: Reverse the ordering
            limit: Maximum number of tags, None for all

        Returns:
            List of tags
        """
        with logfire.span(
            "tag_service.list_tags", order_by=order_by.value, limit=limit
        ):
            tags = await self.tag_repository.find_all(
                order_by=order_by, descending=descending, limit=limit
            )
            logfire.info("Tags retrieved", count=len(tags))
            return tags

    async def bulk_set_parent(
        self, tag_ids: list[TagId], parent_id: Optional[TagId]
    ) -> BulkResult:
        """Move several tags under a parent (or to the root).

        Locked tags and moves that would create a cycle are reported as
        failures; the other tags are moved one by one.

        Raises:
            BulkLimitExceededError: If too many ids are given
            TagNotFoundError: If the parent does not exist
        """
        config = self.config_cell.current
        tag_ids = self._check_bulk(tag_ids, config)

        with logfire.span(
            "tag_service.bulk_set_parent",
            count=len(tag_ids),
            parent_id=str(parent_id) if parent_id else None,
        ):
            if parent_id is not None and await self.tag_repository.find_by_id(parent_id) is None:
                raise TagNotFoundError(str(parent_id))

            succeeded: list[TagId] = []
            failed: list[BulkFailure] = []
            for tag_id in tag_ids:
                tag = await self.tag_repository.find_by_id(tag_id)
                if tag is None:
                    failed.append(BulkFailure(id=tag_id, reason="Tag not found"))
                    continue
                if tag.locked:
                    failed.append(BulkFailure(id=tag_id, reason="Tag is locked"))
                    continue

                try:
                    if parent_id is not None:
                        await self.hierarchy_service.validate_parent(tag_id, parent_id)
                    fields = await self.hierarchy_service.compute_tree_fields(
                        tag.name, parent_id, tag.slug.root, config
                    )
                    self.hierarchy_service.check_depth(fields, config)
                except (SelfParentError, CycleDetectedError, TreeTooDeepError) as e:
                    failed.append(BulkFailure(id=tag_id, reason=str(e)))
                    continue

                await self.tag_repository.save(
                    tag.model_copy(
                        update={
                            "parent_id": parent_id,
                            "path": fields.path,
                            "label": fields.label,
                            "level": fields.level,
                            "updated_at": utcnow(),
                        }
                    )
                )
                await self.hierarchy_service.refresh_descendants(tag_id)
                succeeded.append(tag_id)

            logfire.info(
                "Bulk parent set", succeeded=len(succeeded), failed=len(failed)
            )
            return BulkResult(succeeded=succeeded, failed=failed)

    async def bulk_update_style(self, tag_ids: list[TagId], style: TagStyle) -> BulkResult:
        """Apply color, icon or featured flag to several tags.

        Raises:
            BulkLimitExceededError: If too many ids are given
            ValidationError: If the style sets no field
        """
        config = self.config_cell.current
        tag_ids = self._check_bulk(tag_ids, config)

        values = {
            field: value
            for field, value in style.model_dump(include=style.model_fields_set).items()
            if value is not None
        }
        if not values:
            raise ValidationError("No style fields to update")

        with logfire.span(
            "tag_service.bulk_update_style", count=len(tag_ids), fields=sorted(values)
        ):
            result = await self._bulk_update(tag_ids, values, skip_locked=True)
            logfire.info(
                "Bulk style updated",
                succeeded=len(result.succeeded),
                failed=len(result.failed),
            )
            return result

    async def bulk_lock(self, tag_ids: list[TagId], locked: bool) -> BulkResult:
        """Lock or unlock several tags.

        Raises:
            BulkLimitExceededError: If too many ids are given
        """
        config = self.config_cell.current
        tag_ids = self._check_bulk(tag_ids, config)

        with logfire.span("tag_service.bulk_lock", count=len(tag_ids), locked=locked):
            result = await self._bulk_update(
                tag_ids, {"locked": locked}, skip_locked=False
            )
            logfire.info("Bulk lock applied", succeeded=len(result.succeeded))
            return result

    async def bulk_delete(self, tag_ids: list[TagId]) -> BulkResult:
        """Delete several tags.

        Locked and protected tags are never deleted here; they are reported
        as failures.

        Raises:
            BulkLimitExceededError: If too many ids are given
        """
        config = self.config_cell.current
        tag_ids = self._check_bulk(tag_ids, config)

        with logfire.span("tag_service.bulk_delete", count=len(tag_ids)):
            found = {tag.id: tag for tag in await self.tag_repository.find_by_ids(tag_ids)}

            allowed: list[TagId] = []
            failed: list[BulkFailure] = []
            for tag_id in tag_ids:
                tag = found.get(tag_id)
                if tag is None:
                    failed.append(BulkFailure(id=tag_id, reason="Tag not found"))
                elif tag.locked:
                    failed.append(BulkFailure(id=tag_id, reason="Tag is locked"))
                elif tag.protected:
                    failed.append(BulkFailure(id=tag_id, reason="Tag is protected"))
                else:
                    allowed.append(tag_id)

            if allowed:
                await self._remove(allowed)

            logfire.info("Bulk delete completed", deleted=len(allowed), failed=len(failed))
            return BulkResult(succeeded=allowed, failed=failed)

    async def expand_linked_tags(self, tag_ids: list[TagId]) -> list[TagId]:
        """Add the linked companions of the given tags.

        Args:
            tag_ids: Tags chosen for a post

        Returns:
            The given ids followed by their linked ids, without repeats
        """
        if not tag_ids:
            return []

        with logfire.span("tag_service.expand_linked_tags", count=len(tag_ids)):
            expanded = dict.fromkeys(tag_ids)
            for tag in await self.tag_repository.find_by_ids(list(expanded)):
                expanded.update(dict.fromkeys(tag.linked_tag_ids))
            return list(expanded)

    async def update_trending_tags(self) -> int:
        """Recompute the trending flag from recently published posts.

        The tags used by the most posts published within the trending window
        become trending; every other tag loses the flag.

        Returns:
            Number of trending tags
        """
        config = self.config_cell.current

        with logfire.span(
            "tag_service.update_trending_tags", window_days=config.trending_window_days
        ):
            cutoff = utcnow() - timedelta(days=config.trending_window_days)
            posts = await self.post_repository.find_published_since(cutoff)

            usage: Counter[TagId] = Counter(
                tag_id for post in posts for tag_id in set(post.tag_ids)
            )
            trending_ids = [
                tag_id for tag_id, _ in usage.most_common(config.trending_limit)
            ]

            tags = await self.tag_repository.find_all()
            previous = [tag.id for tag in tags if tag.trending]
            if previous:
                await self.tag_repository.update_many(previous, {"trending": False})
            if trending_ids:
                await self.tag_repository.update_many(trending_ids, {"trending": True})

            logfire.info(
                "Trending tags updated", post_count=len(posts), trending=len(trending_ids)
            )
            return len(trending_ids)

    async def get_trending_tags(self) -> list[Tag]:
        """Get trending tags, most used first."""
        config = self.config_cell.current

        with logfire.span("tag_service.get_trending_tags"):
            tags = await self.tag_repository.find_all(
                order_by=TagSortField.USAGE_COUNT, descending=True
            )
            return [tag for tag in tags if tag.trending][: config.trending_limit]

    async def cleanup_orphaned_tags(self) -> CleanupResult:
        """Delete unused tags that have no posts and no children.

        Locked, featured and protected tags are kept. With ``protect_all``
        nothing is deleted. With ``auto_cleanup_days`` only tags older than
        that many days are considered.

        Returns:
            Deleted count and count of candidates kept because they still
            had posts or children
        """
        config = self.config_cell.current

        with logfire.span("tag_service.cleanup_orphaned_tags"):
            if config.protect_all:
                logfire.info("Cleanup skipped, all tags protected")
                return CleanupResult(deleted=0, skipped=0)

            cutoff = None
            if config.auto_cleanup_days > 0:
                cutoff = utcnow() - timedelta(days=config.auto_cleanup_days)

            tags = await self.tag_repository.find_all()
            post_counts = await self.post_repository.count_posts_by_tag()
            parent_ids = {tag.parent_id for tag in tags if tag.parent_id is not None}

            candidates = [
                tag
                for tag in tags
                if tag.usage_count == 0
                and not tag.locked
                and not tag.featured
                and not tag.protected
                and (cutoff is None or tag.created_at < cutoff)
            ]

            orphans: list[TagId] = []
            skipped = 0
            for tag in candidates:
                if post_counts.get(tag.id, 0) == 0 and tag.id not in parent_ids:
                    orphans.append(tag.id)
                else:
                    skipped += 1

            if orphans:
                await self.follow_repository.delete_by_tags(orphans)
                await self.tag_repository.delete_many(orphans)

            logfire.info("Orphaned tags cleaned up", deleted=len(orphans), skipped=skipped)
            return CleanupResult(deleted=len(orphans), skipped=skipped)

    async def validate_tag_count(
        self, post_id: PostId, additional_tag_ids: list[TagId]
    ) -> None:
        """Check a post can take more tags.

        Args:
            post_id: Post receiving tags
            additional_tag_ids: Tags about to be added

        Raises:
            TagCountExceededError: If the post would exceed ``max_tags_per_post``
        """
        config = self.config_cell.current
        if config.max_tags_per_post <= 0:
            return

        current = await self.post_repository.count_tags_for_post(post_id)
        if current + len(additional_tag_ids) > config.max_tags_per_post:
            logfire.warn(
                "Tag limit exceeded",
                post_id=str(post_id),
                current=current,
                adding=len(additional_tag_ids),
            )
            raise TagCountExceededError(
                len(additional_tag_ids), current, config.max_tags_per_post
            )

    async def _get_tag(self, tag_id: TagId) -> Tag:
        tag = await self.tag_repository.find_by_id(tag_id)
        if tag is None:
            logfire.warn("Tag not found", tag_id=str(tag_id))
            raise TagNotFoundError(str(tag_id))
        return tag

    async def _bulk_update(
        self, tag_ids: list[TagId], values: dict[str, Any], skip_locked: bool
    ) -> BulkResult:
        found = {tag.id: tag for tag in await self.tag_repository.find_by_ids(tag_ids)}

        allowed: list[TagId] = []
        failed: list[BulkFailure] = []
        for tag_id in tag_ids:
            tag = found.get(tag_id)
            if tag is None:
                failed.append(BulkFailure(id=tag_id, reason="Tag not found"))
            elif skip_locked and tag.locked:
                failed.append(BulkFailure(id=tag_id, reason="Tag is locked"))
            else:
                allowed.append(tag_id)

        if allowed:
            await self.tag_repository.update_many(
                allowed, {**values, "updated_at": utcnow()}
            )
        return BulkResult(succeeded=allowed, failed=failed)

    async def _remove(self, tag_ids: list[TagId]) -> None:
        """Detach posts, followers and children, then delete the tags."""
        removed = set(tag_ids)
        for tag_id in tag_ids:
            await self.post_repository.set_tag_posts(tag_id, set())
            for child in await self.tag_repository.find_children(tag_id):
                if child.id not in removed:
                    await self._detach_child(child)

        await self.follow_repository.delete_by_tags(tag_ids)
        await self.tag_repository.delete_many(tag_ids)

    async def _detach_child(self, child: Tag) -> None:
        """Move a child to the root level and refresh its subtree."""
        fields = await self.hierarchy_service.compute_tree_fields(
            child.name, None, child.slug.root
        )
        await self.tag_repository.save(
            child.model_copy(
                update={
                    "parent_id": None,
                    "path": fields.path,
                    "label": fields.label,
                    "level": fields.level,
                }
            )
        )
        await self.hierarchy_service.refresh_descendants(child.id)

    @staticmethod
    def _check_bulk(tag_ids: list[TagId], config: TaxonomySettings) -> list[TagId]:
        """Drop repeated ids and enforce ``max_bulk_ids``."""
        unique = list(dict.fromkeys(tag_ids))
        if len(unique) > config.max_bulk_ids:
            logfire.warn(
                "Bulk limit exceeded", requested=len(unique), limit=config.max_bulk_ids
            )
            raise BulkLimitExceededError(len(unique), config.max_bulk_ids)
        return unique

    @staticmethod
    def _normalize_name(name: str, config: TaxonomySettings) -> str:
        normalized = name.strip()
        if config.force_lowercase:
            normalized = normalized.lower()
        if not normalized:
            raise ValidationError("Tag name cannot be empty")
        if len(normalized) > config.max_name_length:
            raise ValidationError(
                f"Tag name must be at most {config.max_name_length} characters"
            )
        return normalized

    @staticmethod
    def _make_slug(text: str, config: TaxonomySettings) -> Slug:
        slug = slugify(text, config.max_slug_length)
        if not slug:
            raise ValidationError(f"Cannot derive a slug from '{text}'")
        return Slug(slug)

    @staticmethod
    def _normalize_synonyms(synonyms: list[str], config: TaxonomySettings) -> list[str]:
        """Fold, drop blanks and repeats, enforce ``max_synonyms``."""
        normalized = list(dict.fromkeys(fold(s) for s in synonyms if s.strip()))
        if len(normalized) > config.max_synonyms:
            raise ValidationError(f"A tag can have at most {config.max_synonyms} synonyms")
        return normalized

    async def _normalize_linked(
        self, linked_ids: list[TagId], tag_id: TagId, config: TaxonomySettings
    ) -> list[TagId]:
        """Drop repeats and self-links, check the linked tags exist."""
        unique = [linked for linked in dict.fromkeys(linked_ids) if linked != tag_id]
        if len(unique) > config.max_linked_tags:
            raise ValidationError(
                f"A tag can link at most {config.max_linked_tags} other tags"
            )
        if unique:
            found = {tag.id for tag in await self.tag_repository.find_by_ids(unique)}
            for linked in unique:
                if linked not in found:
                    raise TagNotFoundError(str(linked))
        return unique
