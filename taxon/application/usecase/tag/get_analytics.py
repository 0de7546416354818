"""Get taxonomy analytics use case."""

from datetime import datetime
from typing import Optional

import logfire
from pydantic import BaseModel

from taxon.domain.model import TagCreation
from taxon.domain.service import TaxonomyService

from .find_duplicates import TagSummaryItem


class TagCreationItem(BaseModel):
    """Tag with its creation time."""

    id: str
    name: str
    created_at: datetime

    @classmethod
    def from_domain(cls, creation: TagCreation) -> "TagCreationItem":
        """Convert domain TagCreation to response model."""
        return cls(id=str(creation.id), name=creation.name, created_at=creation.created_at)


class ParentGroupItem(BaseModel):
    """Tag count under one parent (null = root level)."""

    parent_name: Optional[str]
    count: int


class SynonymUtilizationItem(BaseModel):
    """Synonym statistics."""

    total_synonyms: int
    total_hits: int
    avg_hits_per_tag: float


class GetAnalyticsResponse(BaseModel):
    """Taxonomy health report."""

    total_tags: int
    orphaned_tags: int
    duplicate_candidates: int
    avg_usage_count: float
    top_tags: list[TagSummaryItem]
    recently_created: list[TagCreationItem]
    unused_tags: list[TagCreationItem]
    tags_by_parent: list[ParentGroupItem]
    synonym_utilization: SynonymUtilizationItem
    health_score: int
    recommendations: list[str]


class GetAnalyticsUseCase:
    """Use case for the taxonomy health report."""

    def __init__(self, taxonomy_service: TaxonomyService) -> None:
        """Initialize get analytics use case.

        Args:
            taxonomy_service: Taxonomy domain service
        """
        self.taxonomy_service = taxonomy_service

    async def execute(self) -> GetAnalyticsResponse:
        """Execute get analytics flow.

        Returns:
            Statistics, health score and recommendations
        """
        with logfire.span("get_analytics.execute"):
            analytics = await self.taxonomy_service.get_analytics()

            return GetAnalyticsResponse(
                total_tags=analytics.total_tags,
                orphaned_tags=analytics.orphaned_tags,
                duplicate_candidates=analytics.duplicate_candidates,
                avg_usage_count=analytics.avg_usage_count,
                top_tags=[TagSummaryItem.from_domain(s) for s in analytics.top_tags],
                recently_created=[
                    TagCreationItem.from_domain(c) for c in analytics.recently_created
                ],
                unused_tags=[TagCreationItem.from_domain(c) for c in analytics.unused_tags],
                tags_by_parent=[
                    ParentGroupItem(parent_name=group.parent_name, count=group.count)
                    for group in analytics.tags_by_parent
                ],
                synonym_utilization=SynonymUtilizationItem(
                    **analytics.synonym_utilization.model_dump()
                ),
                health_score=analytics.health_score,
                recommendations=list(analytics.recommendations),
            )
