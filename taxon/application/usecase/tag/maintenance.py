"""Taxonomy maintenance use cases: trending and orphan cleanup."""

import logfire
from pydantic import BaseModel

from taxon.domain.service import TaxonomyService

from .common import TagItem


class RefreshTrendingResponse(BaseModel):
    """Refresh trending response."""

    trending: int


class GetTrendingTagsResponse(BaseModel):
    """Trending tags response."""

    tags: list[TagItem]


class CleanupOrphansResponse(BaseModel):
    """Orphan cleanup response."""

    deleted: int
    skipped: int


class RefreshTrendingUseCase:
    """Use case recomputing trending flags from recent posts."""

    def __init__(self, taxonomy_service: TaxonomyService) -> None:
        self.taxonomy_service = taxonomy_service

    async def execute(self) -> RefreshTrendingResponse:
        with logfire.span("refresh_trending.execute"):
            count = await self.taxonomy_service.update_trending_tags()
            return RefreshTrendingResponse(trending=count)


class GetTrendingTagsUseCase:
    """Use case listing trending tags, most used first."""

    def __init__(self, taxonomy_service: TaxonomyService) -> None:
        self.taxonomy_service = taxonomy_service

    async def execute(self) -> GetTrendingTagsResponse:
        tags = await self.taxonomy_service.get_trending_tags()
        return GetTrendingTagsResponse(tags=[TagItem.from_domain(tag) for tag in tags])


class CleanupOrphansUseCase:
    """Use case deleting unused tags without posts or children."""

    def __init__(self, taxonomy_service: TaxonomyService) -> None:
        self.taxonomy_service = taxonomy_service

    async def execute(self) -> CleanupOrphansResponse:
        with logfire.span("cleanup_orphans.execute"):
            result = await self.taxonomy_service.cleanup_orphaned_tags()
            return CleanupOrphansResponse(deleted=result.deleted, skipped=result.skipped)
