"""Merge tags use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from taxon.domain.service import TaxonomyService
from taxon.domain.value import TagId

from .common import TagItem


class MergeTagsRequest(BaseModel):
    """Merge tags request."""

    source_ids: list[UUID] = Field(min_length=1)
    target_id: UUID


class MergeTagsResponse(BaseModel):
    """Merge tags response."""

    tag: TagItem


class MergeTagsUseCase:
    """Use case for merging chosen tags into a target."""

    def __init__(self, taxonomy_service: TaxonomyService) -> None:
        self.taxonomy_service = taxonomy_service

    async def execute(self, request: MergeTagsRequest) -> MergeTagsResponse:
        """Execute merge tags flow.

        Raises:
            TagNotFoundError: If the target or a source does not exist
            TagLockedError: If any involved tag is locked
            BulkLimitExceededError: If there are too many sources
        """
        with logfire.span(
            "merge_tags.execute",
            target_id=str(request.target_id),
            source_count=len(request.source_ids),
        ):
            tag = await self.taxonomy_service.merge_tags(
                [TagId(source_id) for source_id in request.source_ids],
                TagId(request.target_id),
            )
            return MergeTagsResponse(tag=TagItem.from_domain(tag))
