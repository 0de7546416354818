"""Bulk merge duplicates use case."""

from typing import Optional
from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from taxon.domain.service import TaxonomyService
from taxon.domain.value import TagId


class MergeDuplicatesRequest(BaseModel):
    """Bulk merge duplicates request."""

    threshold: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    dry_run: bool = False
    exclude_ids: list[UUID] = Field(default_factory=list)


class MergeReceiptItem(BaseModel):
    """One survivor absorbing its duplicates."""

    survivor_id: str
    survivor_name: str
    merged_ids: list[str]
    posts_relinked: int


class SkippedClusterItem(BaseModel):
    """Cluster left untouched."""

    survivor_id: str
    survivor_name: str
    duplicate_ids: list[str]
    reason: str


class MergeDuplicatesResponse(BaseModel):
    """Bulk merge duplicates response."""

    dry_run: bool
    groups_merged: int
    tags_deleted: int
    merges: list[MergeReceiptItem]
    skipped: list[SkippedClusterItem]


class MergeDuplicatesUseCase:
    """Use case for detecting and merging every duplicate cluster."""

    def __init__(self, taxonomy_service: TaxonomyService) -> None:
        """Initialize merge duplicates use case.

        Args:
            taxonomy_service: Taxonomy domain service
        """
        self.taxonomy_service = taxonomy_service

    async def execute(self, request: MergeDuplicatesRequest) -> MergeDuplicatesResponse:
        """Execute bulk merge flow.

        Args:
            request: Threshold, dry-run flag and excluded tags

        Returns:
            Merge receipts (planned ones in a dry run) and skipped clusters
        """
        with logfire.span(
            "merge_duplicates.execute",
            threshold=request.threshold,
            dry_run=request.dry_run,
        ):
            result = await self.taxonomy_service.bulk_merge_duplicates(
                threshold=request.threshold,
                dry_run=request.dry_run,
                exclude_ids=[TagId(tag_id) for tag_id in request.exclude_ids],
            )

            return MergeDuplicatesResponse(
                dry_run=result.dry_run,
                groups_merged=result.groups_merged,
                tags_deleted=result.tags_deleted,
                merges=[
                    MergeReceiptItem(
                        survivor_id=str(receipt.survivor_id),
                        survivor_name=receipt.survivor_name,
                        merged_ids=[str(tag_id) for tag_id in receipt.merged_ids],
                        posts_relinked=receipt.posts_relinked,
                    )
                    for receipt in result.merges
                ],
                skipped=[
                    SkippedClusterItem(
                        survivor_id=str(cluster.survivor_id),
                        survivor_name=cluster.survivor_name,
                        duplicate_ids=[str(tag_id) for tag_id in cluster.duplicate_ids],
                        reason=cluster.reason,
                    )
                    for cluster in result.skipped
                ],
            )
