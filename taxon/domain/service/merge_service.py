"""Tag merge domain service."""

from collections.abc import Iterable
from typing import Optional

import logfire

from taxon.config import ConfigCell
from taxon.domain.error import (
    BulkLimitExceededError,
    TagLockedError,
    TagNotFoundError,
    ValidationError,
)
from taxon.domain.model import BulkMergeResult, MergeReceipt, SkippedCluster, Tag
from taxon.domain.model.common import utcnow
from taxon.domain.repository import PostRepository, TagFollowRepository, TagRepository
from taxon.domain.value import PostId, TagId, TagSortField, fold

from .base import Service
from .duplicate_service import DuplicateService
from .hierarchy_service import HierarchyService


def merge_synonyms(survivor: Tag, duplicates: list[Tag]) -> list[str]:
    """Synonyms of a survivor after absorbing ``duplicates``.

    Keeps the survivor's synonyms, then adds each duplicate's folded name
    and synonyms. The survivor's own folded name is never a synonym.
    """
    merged = dict.fromkeys(survivor.synonyms)
    for duplicate in duplicates:
        merged[fold(duplicate.name)] = None
        merged.update(dict.fromkeys(fold(synonym) for synonym in duplicate.synonyms))
    merged.pop(fold(survivor.name), None)
    return list(merged)


class MergeService(Service):
    """Domain service folding duplicate tags into a survivor.

    A merge moves every post, follower and child tag of the duplicates onto
    the survivor, records the duplicates' names as synonyms, then deletes
    the duplicates.
    """

    def __init__(
        self,
        tag_repository: TagRepository,
        post_repository: PostRepository,
        follow_repository: TagFollowRepository,
        duplicate_service: DuplicateService,
        hierarchy_service: HierarchyService,
        config_cell: ConfigCell,
    ) -> None:
        """Initialize merge service.

        Args:
            tag_repository: Tag repository
            post_repository: Post repository (tag associations)
            follow_repository: Tag follow repository
            duplicate_service: Duplicate detection service
            hierarchy_service: Tag hierarchy service
            config_cell: Live taxonomy configuration
        """
        self.tag_repository = tag_repository
        self.post_repository = post_repository
        self.follow_repository = follow_repository
        self.duplicate_service = duplicate_service
        self.hierarchy_service = hierarchy_service
        self.config_cell = config_cell

    async def merge_tags(self, source_ids: list[TagId], target_id: TagId) -> Tag:
        """Merge source tags into a target tag.

        All checks run before the first write.

        Args:
            source_ids: Tags to absorb and delete
            target_id: Tag that survives

        Returns:
            The updated target tag

        Raises:
            ValidationError: If no sources are given or the target is a source
            BulkLimitExceededError: If there are more sources than allowed
            TagNotFoundError: If the target or a source does not exist
            TagLockedError: If the target or a source is locked
        """
        config = self.config_cell.current
        source_ids = list(dict.fromkeys(source_ids))

        with logfire.span(
            "merge_service.merge_tags",
            target_id=str(target_id),
            source_count=len(source_ids),
        ):
            if not source_ids:
                raise ValidationError("At least one source tag is required")
            if len(source_ids) > config.max_bulk_ids:
                raise BulkLimitExceededError(len(source_ids), config.max_bulk_ids)
            if target_id in source_ids:
                raise ValidationError("Target tag cannot be one of its own sources")

            target = await self.tag_repository.find_by_id(target_id)
            if target is None:
                raise TagNotFoundError(str(target_id))

            sources = await self.tag_repository.find_by_ids(source_ids)
            found = {source.id for source in sources}
            for source_id in source_ids:
                if source_id not in found:
                    raise TagNotFoundError(str(source_id))

            for tag in [target, *sources]:
                if tag.locked:
                    logfire.warn("Merge refused, tag locked", tag_id=str(tag.id))
                    raise TagLockedError(str(tag.id))

            survivor, receipt = await self._absorb(target, sources)

            logfire.info(
                "Tags merged",
                target_id=str(target_id),
                merged_count=len(receipt.merged_ids),
                posts_relinked=receipt.posts_relinked,
            )
            return survivor

    async def bulk_merge_duplicates(
        self,
        threshold: Optional[float] = None,
        dry_run: bool = False,
        exclude_ids: Optional[Iterable[TagId]] = None,
    ) -> BulkMergeResult:
        """Detect duplicate clusters and merge each into its survivor.

        Locked tags never take part. Clusters are processed one after
        another; a cluster that can no longer be loaded is skipped and
        reported, and clusters already merged stay merged.

        Args:
            threshold: Minimum similarity, configured default if None
            dry_run: Report the planned merges without writing anything
            exclude_ids: Extra tags to keep out of every cluster

        Returns:
            Merge receipts and skipped clusters
        """
        with logfire.span(
            "merge_service.bulk_merge_duplicates", dry_run=dry_run
        ):
            excluded = set(exclude_ids or ())
            excluded.update(await self._locked_tag_ids())

            groups = await self.duplicate_service.group_duplicates(threshold, excluded)

            if dry_run:
                receipts = [
                    MergeReceipt(
                        survivor_id=group.survivor.id,
                        survivor_name=group.survivor.name,
                        merged_ids=[duplicate.id for duplicate in group.duplicates],
                        posts_relinked=0,
                    )
                    for group in groups
                ]
                logfire.info("Bulk merge planned", group_count=len(groups))
                return BulkMergeResult(
                    dry_run=True,
                    groups_merged=len(receipts),
                    tags_deleted=sum(len(receipt.merged_ids) for receipt in receipts),
                    merges=receipts,
                )

            receipts: list[MergeReceipt] = []
            skipped: list[SkippedCluster] = []
            for group in groups:
                duplicate_ids = [duplicate.id for duplicate in group.duplicates]

                survivor = await self.tag_repository.find_by_id(group.survivor.id)
                if survivor is None:
                    skipped.append(
                        SkippedCluster(
                            survivor_id=group.survivor.id,
                            survivor_name=group.survivor.name,
                            duplicate_ids=duplicate_ids,
                            reason="Survivor tag not found",
                        )
                    )
                    logfire.warn(
                        "Cluster skipped, survivor missing",
                        survivor_id=str(group.survivor.id),
                    )
                    continue

                duplicates = await self.tag_repository.find_by_ids(duplicate_ids)
                if not duplicates:
                    skipped.append(
                        SkippedCluster(
                            survivor_id=survivor.id,
                            survivor_name=survivor.name,
                            duplicate_ids=duplicate_ids,
                            reason="Duplicate tags no longer exist",
                        )
                    )
                    logfire.warn(
                        "Cluster skipped, duplicates missing",
                        survivor_id=str(survivor.id),
                    )
                    continue

                _, receipt = await self._absorb(survivor, duplicates)
                receipts.append(receipt)

            logfire.info(
                "Bulk merge completed",
                groups_merged=len(receipts),
                skipped_count=len(skipped),
            )
            return BulkMergeResult(
                dry_run=False,
                groups_merged=len(receipts),
                tags_deleted=sum(len(receipt.merged_ids) for receipt in receipts),
                merges=receipts,
                skipped=skipped,
            )

    async def _absorb(
        self, survivor: Tag, duplicates: list[Tag]
    ) -> tuple[Tag, MergeReceipt]:
        """Run the merge steps for one survivor and its duplicates."""
        duplicate_ids = [duplicate.id for duplicate in duplicates]

        post_ids: set[PostId] = set(
            await self.post_repository.find_post_ids_by_tag(survivor.id)
        )
        for duplicate in duplicates:
            post_ids |= await self.post_repository.find_post_ids_by_tag(duplicate.id)

        moved = await self.follow_repository.reassign(duplicate_ids, survivor.id)

        updated = survivor.model_copy(
            update={
                "usage_count": len(post_ids),
                "merge_count": survivor.merge_count + len(duplicates),
                "synonyms": merge_synonyms(survivor, duplicates),
                "updated_at": utcnow(),
            }
        )
        await self.tag_repository.save(updated)
        await self.post_repository.set_tag_posts(survivor.id, post_ids)

        children_moved = await self._rehome_children(survivor.id, duplicate_ids)

        for duplicate_id in duplicate_ids:
            await self.post_repository.set_tag_posts(duplicate_id, set())
        await self.tag_repository.delete_many(duplicate_ids)

        # Re-read: rehoming may have moved the survivor itself
        saved = await self.tag_repository.find_by_id(survivor.id)

        logfire.info(
            "Duplicates absorbed",
            survivor_id=str(survivor.id),
            merged_count=len(duplicate_ids),
            followers_moved=moved,
            children_moved=children_moved,
        )
        return saved, MergeReceipt(
            survivor_id=survivor.id,
            survivor_name=survivor.name,
            merged_ids=duplicate_ids,
            posts_relinked=len(post_ids),
        )

    async def _rehome_children(
        self, survivor_id: TagId, duplicate_ids: list[TagId]
    ) -> int:
        """Move the children of the duplicates under the survivor.

        A child that is the survivor or one of its ancestors becomes a root
        tag instead. Each moved subtree gets fresh tree fields.

        Returns:
            Number of children moved
        """
        removed = set(duplicate_ids)
        moved = 0
        for duplicate_id in duplicate_ids:
            for child in await self.tag_repository.find_children(duplicate_id):
                if child.id in removed:
                    continue

                parent_id: Optional[TagId] = survivor_id
                if child.id == survivor_id or await self.hierarchy_service.would_cycle(
                    child.id, survivor_id
                ):
                    parent_id = None

                fields = await self.hierarchy_service.compute_tree_fields(
                    child.name, parent_id, child.slug.root
                )
                await self.tag_repository.save(
                    child.model_copy(
                        update={
                            "parent_id": parent_id,
                            "path": fields.path,
                            "label": fields.label,
                            "level": fields.level,
                        }
                    )
                )
                await self.hierarchy_service.refresh_descendants(child.id)
                moved += 1
        return moved

    async def _locked_tag_ids(self) -> set[TagId]:
        tags = await self.tag_repository.find_all(order_by=TagSortField.NAME)
        return {tag.id for tag in tags if tag.locked}
