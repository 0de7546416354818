"""Taxonomy-wide statistics and health report."""

from datetime import datetime
from typing import Optional

from taxon.domain.model.tag import TagSummary
from taxon.domain.value import TagId
from taxon.domain.value.common import ValueObject


class TagCreation(ValueObject):
    """Tag identity with its creation time."""

    id: TagId
    name: str
    created_at: datetime


class ParentGroup(ValueObject):
    """Number of tags sharing a parent (``None`` = root level)."""

    parent_name: Optional[str]
    count: int


class SynonymUtilization(ValueObject):
    """Synonyms defined versus synonym matches recorded."""

    total_synonyms: int
    total_hits: int
    avg_hits_per_tag: float


class TagAnalytics(ValueObject):
    """Health report over the full tag corpus."""

    total_tags: int
    orphaned_tags: int
    duplicate_candidates: int
    avg_usage_count: float
    top_tags: list[TagSummary]
    recently_created: list[TagCreation]
    unused_tags: list[TagCreation]
    tags_by_parent: list[ParentGroup]
    synonym_utilization: SynonymUtilization
    health_score: int
    recommendations: list[str]
