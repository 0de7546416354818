"""Resolve post tags use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from taxon.domain.service import TaxonomyService
from taxon.domain.value import PostId, TagId


class ResolvePostTagsRequest(BaseModel):
    """Tags an editor picked for a post."""

    tag_ids: list[UUID] = Field(default_factory=list)


class ResolvePostTagsResponse(BaseModel):
    """Tags to attach, linked companions included."""

    tag_ids: list[str]


class ResolvePostTagsUseCase:
    """Use case preparing a tag assignment for a post.

    Expands the chosen tags with their linked companions, then checks the
    post stays within the per-post tag limit.
    """

    def __init__(self, taxonomy_service: TaxonomyService) -> None:
        """Initialize resolve post tags use case.

        Args:
            taxonomy_service: Taxonomy domain service
        """
        self.taxonomy_service = taxonomy_service

    async def execute(
        self, post_id: UUID, request: ResolvePostTagsRequest
    ) -> ResolvePostTagsResponse:
        """Execute resolve flow.

        Args:
            post_id: Post receiving the tags
            request: Chosen tags

        Returns:
            Expanded tag ids

        Raises:
            TagCountExceededError: If the post would carry too many tags
        """
        with logfire.span(
            "resolve_post_tags.execute", post_id=str(post_id), count=len(request.tag_ids)
        ):
            expanded = await self.taxonomy_service.expand_linked_tags(
                [TagId(tag_id) for tag_id in request.tag_ids]
            )
            await self.taxonomy_service.validate_tag_count(PostId(post_id), expanded)
            return ResolvePostTagsResponse(tag_ids=[str(tag_id) for tag_id in expanded])
