"""List tags use case."""

from typing import Optional

import logfire
from pydantic import BaseModel, Field

from taxon.domain.service import TaxonomyService
from taxon.domain.value import TagSortField

from .common import TagItem


class ListTagsRequest(BaseModel):
    """List tags request."""

    limit: Optional[int] = Field(default=None, ge=1)
    order_by: TagSortField = TagSortField.NAME
    descending: bool = False


class ListTagsResponse(BaseModel):
    """List tags response."""

    tags: list[TagItem]


class ListTagsUseCase:
    """Use case for listing tags."""

    def __init__(self, taxonomy_service: TaxonomyService) -> None:
        """Initialize list tags use case.

        Args:
            taxonomy_service: Taxonomy domain service
        """
        self.taxonomy_service = taxonomy_service

    async def execute(self, request: ListTagsRequest) -> ListTagsResponse:
        """Execute list tags flow.

        Args:
            request: List tags request

        Returns:
            Tags in the requested order
        """
        with logfire.span(
            "list_tags.execute",
            limit=request.limit,
            order_by=request.order_by.value,
        ):
            tags = await self.taxonomy_service.list_tags(
                order_by=request.order_by,
                descending=request.descending,
                limit=request.limit,
            )

            tag_items = [TagItem.from_domain(tag) for tag in tags]
            logfire.info("Tags listed", count=len(tag_items))

            return ListTagsResponse(tags=tag_items)
