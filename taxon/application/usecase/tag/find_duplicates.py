"""Find duplicate tags use cases."""

from typing import Optional
from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from taxon.domain.model import DuplicateGroup, TagSummary
from taxon.domain.service import TaxonomyService
from taxon.domain.value import TagId


class TagSummaryItem(BaseModel):
    """Tag summary in response."""

    id: str
    name: str
    slug: str
    usage_count: int

    @classmethod
    def from_domain(cls, summary: TagSummary) -> "TagSummaryItem":
        """Convert domain TagSummary to response model."""
        return cls(
            id=str(summary.id),
            name=summary.name,
            slug=summary.slug,
            usage_count=summary.usage_count,
        )


class DuplicateCandidateItem(BaseModel):
    """Pair of similar tags."""

    a: TagSummaryItem
    b: TagSummaryItem
    score: float


class DuplicateGroupItem(BaseModel):
    """Cluster of similar tags with its survivor."""

    survivor: TagSummaryItem
    duplicates: list[TagSummaryItem]
    max_score: float

    @classmethod
    def from_domain(cls, group: DuplicateGroup) -> "DuplicateGroupItem":
        """Convert domain DuplicateGroup to response model."""
        return cls(
            survivor=TagSummaryItem.from_domain(group.survivor),
            duplicates=[TagSummaryItem.from_domain(d) for d in group.duplicates],
            max_score=group.max_score,
        )


class FindDuplicatesRequest(BaseModel):
    """Find duplicates request."""

    threshold: Optional[float] = Field(default=None, ge=0.0, le=1.0)


class FindDuplicatesResponse(BaseModel):
    """Find duplicates response."""

    candidates: list[DuplicateCandidateItem]


class GroupDuplicatesRequest(BaseModel):
    """Group duplicates request."""

    threshold: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    exclude_ids: list[UUID] = Field(default_factory=list)


class GroupDuplicatesResponse(BaseModel):
    """Group duplicates response."""

    groups: list[DuplicateGroupItem]


class FindDuplicatesUseCase:
    """Use case for listing similar tag pairs."""

    def __init__(self, taxonomy_service: TaxonomyService) -> None:
        """Initialize find duplicates use case.

        Args:
            taxonomy_service: Taxonomy domain service
        """
        self.taxonomy_service = taxonomy_service

    async def execute(self, request: FindDuplicatesRequest) -> FindDuplicatesResponse:
        """Execute find duplicates flow.

        Args:
            request: Threshold, configured default if omitted

        Returns:
            Candidate pairs, highest score first
        """
        with logfire.span("find_duplicates.execute", threshold=request.threshold):
            candidates = await self.taxonomy_service.find_duplicate_tags(
                request.threshold
            )
            return FindDuplicatesResponse(
                candidates=[
                    DuplicateCandidateItem(
                        a=TagSummaryItem.from_domain(candidate.a),
                        b=TagSummaryItem.from_domain(candidate.b),
                        score=candidate.score,
                    )
                    for candidate in candidates
                ]
            )


class GroupDuplicatesUseCase:
    """Use case for clustering similar tags into merge groups."""

    def __init__(self, taxonomy_service: TaxonomyService) -> None:
        self.taxonomy_service = taxonomy_service

    async def execute(self, request: GroupDuplicatesRequest) -> GroupDuplicatesResponse:
        """Execute group duplicates flow."""
        with logfire.span("group_duplicates.execute", threshold=request.threshold):
            groups = await self.taxonomy_service.group_duplicates(
                request.threshold, [TagId(tag_id) for tag_id in request.exclude_ids]
            )
            return GroupDuplicatesResponse(
                groups=[DuplicateGroupItem.from_domain(group) for group in groups]
            )
