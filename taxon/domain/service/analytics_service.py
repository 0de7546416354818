"""Taxonomy analytics domain service."""

from collections import Counter
from typing import Optional

import logfire

from taxon.config import ConfigCell, HealthThresholds
from taxon.domain.model import (
    ParentGroup,
    SynonymUtilization,
    Tag,
    TagAnalytics,
    TagCreation,
)
from taxon.domain.repository import PostRepository, TagRepository
from taxon.domain.value import TagId, TagSortField

from .base import Service
from .duplicate_service import DuplicateService

TOP_TAGS_LIMIT = 20
RECENT_TAGS_LIMIT = 10
UNUSED_TAGS_LIMIT = 20

HEALTHY_MESSAGE = "Tag taxonomy is healthy! All metrics look good."


class AnalyticsService(Service):
    """Domain service computing taxonomy statistics and a health score."""

    def __init__(
        self,
        tag_repository: TagRepository,
        post_repository: PostRepository,
        duplicate_service: DuplicateService,
        config_cell: ConfigCell,
    ) -> None:
        self.tag_repository = tag_repository
        self.post_repository = post_repository
        self.duplicate_service = duplicate_service
        self.config_cell = config_cell

    async def get_analytics(self) -> TagAnalytics:
        """Compute the taxonomy health report.

        Returns:
            Statistics, health score (0-100) and recommendations
        """
        with logfire.span("analytics_service.get_analytics"):
            health = self.config_cell.current.health

            tags = await self.tag_repository.find_all(order_by=TagSortField.NAME)
            post_counts = await self.post_repository.count_posts_by_tag()
            duplicates = await self.duplicate_service.find_duplicate_tags(
                health.duplicate_threshold
            )

            total = len(tags)
            parent_ids = {tag.parent_id for tag in tags if tag.parent_id is not None}
            orphaned = sum(
                1
                for tag in tags
                if post_counts.get(tag.id, 0) == 0 and tag.id not in parent_ids
            )
            avg_usage = sum(tag.usage_count for tag in tags) / total if total else 0.0
            root_count = sum(1 for tag in tags if tag.parent_id is None)
            synonymless = sum(1 for tag in tags if not tag.synonyms)

            total_synonyms = sum(len(tag.synonyms) for tag in tags)
            total_hits = sum(tag.synonym_hits for tag in tags)

            health_score, recommendations = score_health(
                health,
                total=total,
                orphaned=orphaned,
                duplicate_pairs=len(duplicates),
                root_count=root_count,
                synonymless=synonymless,
                avg_usage=avg_usage,
            )

            analytics = TagAnalytics(
                total_tags=total,
                orphaned_tags=orphaned,
                duplicate_candidates=len(duplicates),
                avg_usage_count=round(avg_usage, 1),
                top_tags=[
                    tag.summary()
                    for tag in sorted(tags, key=lambda tag: -tag.usage_count)[
                        :TOP_TAGS_LIMIT
                    ]
                ],
                recently_created=[
                    _creation(tag)
                    for tag in sorted(tags, key=lambda tag: tag.created_at, reverse=True)[
                        :RECENT_TAGS_LIMIT
                    ]
                ],
                unused_tags=[
                    _creation(tag)
                    for tag in sorted(
                        (tag for tag in tags if tag.usage_count == 0),
                        key=lambda tag: tag.created_at,
                    )[:UNUSED_TAGS_LIMIT]
                ],
                tags_by_parent=group_by_parent(tags),
                synonym_utilization=SynonymUtilization(
                    total_synonyms=total_synonyms,
                    total_hits=total_hits,
                    avg_hits_per_tag=round(total_hits / total, 1) if total else 0.0,
                ),
                health_score=health_score,
                recommendations=recommendations,
            )

            logfire.info(
                "Analytics computed",
                total_tags=total,
                health_score=health_score,
                recommendation_count=len(recommendations),
            )
            return analytics


def score_health(
    health: HealthThresholds,
    *,
    total: int,
    orphaned: int,
    duplicate_pairs: int,
    root_count: int,
    synonymless: int,
    avg_usage: float,
) -> tuple[int, list[str]]:
    """Apply the health deduction rules.

    Returns:
        Score floored at 0 and one recommendation per triggered rule, or a
        single positive message when nothing triggers
    """
    score = 100
    recommendations: list[str] = []

    if orphaned > total * health.orphan_ratio:
        score -= 15
        percent = round(orphaned / total * 100)
        recommendations.append(
            f"{orphaned} orphaned tags ({percent}%): consider cleanup"
        )
    if duplicate_pairs > health.max_duplicate_pairs:
        score -= 10
        recommendations.append(
            f"{duplicate_pairs} potential duplicate pairs: merge them"
        )
    if root_count > health.max_root_tags:
        score -= 10
        recommendations.append(
            f"{root_count} root-level tags: organize into hierarchy"
        )
    if synonymless > total * health.synonymless_ratio:
        score -= 5
        recommendations.append(
            f"{synonymless} tags lack synonyms: add some for better matching"
        )
    if avg_usage < health.min_avg_usage:
        score -= 10
        recommendations.append("Low average usage: tag more posts to improve coverage")

    if not recommendations:
        recommendations.append(HEALTHY_MESSAGE)

    return max(0, score), recommendations


def group_by_parent(tags: list[Tag]) -> list[ParentGroup]:
    """Count tags per parent name, largest group first (root = None)."""
    names: dict[TagId, str] = {tag.id: tag.name for tag in tags}
    counts: Counter[Optional[str]] = Counter(
        names.get(tag.parent_id) if tag.parent_id is not None else None for tag in tags
    )
    return [
        ParentGroup(parent_name=name, count=count)
        for name, count in counts.most_common()
    ]


def _creation(tag: Tag) -> TagCreation:
    return TagCreation(id=tag.id, name=tag.name, created_at=tag.created_at)
