"""Post tagging routes."""

from uuid import UUID

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from taxon.application.usecase.tag import (
    ResolvePostTagsRequest,
    ResolvePostTagsResponse,
    ResolvePostTagsUseCase,
)

router = APIRouter(prefix="/posts", tags=["posts"], route_class=DishkaRoute)


@router.post(
    "/{post_id}/tags/resolve",
    response_model=ResolvePostTagsResponse,
    summary="Resolve tags for a post",
    description="Expand chosen tags with their linked tags and check the per-post limit.",
)
async def resolve_post_tags(
    post_id: UUID,
    request: ResolvePostTagsRequest,
    use_case: FromDishka[ResolvePostTagsUseCase],
) -> ResolvePostTagsResponse:
    """Resolve the tag set a post should carry.

    Example:
        POST /posts/{post_id}/tags/resolve {"tag_ids": ["..."]}
    """
    with logfire.span("api.resolve_post_tags", post_id=str(post_id)):
        return await use_case.execute(post_id, request)
