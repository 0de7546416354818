"""Get tag relatives use case."""

from enum import Enum
from uuid import UUID

import logfire
from pydantic import BaseModel

from taxon.domain.service import TaxonomyService
from taxon.domain.value import TagId

from .common import TagItem


class TagRelation(str, Enum):
    """Which relatives of a tag to fetch."""

    ANCESTORS = "ancestors"
    DESCENDANTS = "descendants"
    SIBLINGS = "siblings"


class GetTagRelativesResponse(BaseModel):
    """Get tag relatives response."""

    relation: TagRelation
    tags: list[TagItem]


class GetTagRelativesUseCase:
    """Use case for ancestors (root first), descendants or siblings of a tag."""

    def __init__(self, taxonomy_service: TaxonomyService) -> None:
        self.taxonomy_service = taxonomy_service

    async def execute(
        self, tag_id: UUID, relation: TagRelation
    ) -> GetTagRelativesResponse:
        """Execute get tag relatives flow.

        Raises:
            TagNotFoundError: If the tag does not exist
        """
        with logfire.span(
            "get_tag_relatives.execute", tag_id=str(tag_id), relation=relation.value
        ):
            if relation == TagRelation.ANCESTORS:
                tags = await self.taxonomy_service.get_ancestors(TagId(tag_id))
            elif relation == TagRelation.DESCENDANTS:
                tags = await self.taxonomy_service.get_descendants(TagId(tag_id))
            else:
                tags = await self.taxonomy_service.get_siblings(TagId(tag_id))

            return GetTagRelativesResponse(
                relation=relation, tags=[TagItem.from_domain(tag) for tag in tags]
            )
