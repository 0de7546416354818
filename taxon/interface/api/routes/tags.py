"""Tag routes.

Static paths are registered before ``/{tag_id}`` so they are never read as
tag ids.
"""

from typing import Optional
from uuid import UUID

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query, status

from taxon.application.usecase.tag import (
    BulkAction,
    BulkResultResponse,
    BulkUpdateRequest,
    BulkUpdateUseCase,
    CleanupOrphansResponse,
    CleanupOrphansUseCase,
    CreateTagRequest,
    CreateTagResponse,
    CreateTagUseCase,
    DeleteTagUseCase,
    FindDuplicatesRequest,
    FindDuplicatesResponse,
    FindDuplicatesUseCase,
    FollowTagRequest,
    FollowTagResponse,
    FollowTagUseCase,
    GetAnalyticsResponse,
    GetAnalyticsUseCase,
    GetFollowedTagsResponse,
    GetFollowedTagsUseCase,
    GetSettingsUseCase,
    GetTagRelativesResponse,
    GetTagRelativesUseCase,
    GetTagRequest,
    GetTagTreeResponse,
    GetTagTreeUseCase,
    GetTagUseCase,
    GetTrendingTagsResponse,
    GetTrendingTagsUseCase,
    GroupDuplicatesRequest,
    GroupDuplicatesResponse,
    GroupDuplicatesUseCase,
    ListTagsRequest,
    ListTagsResponse,
    ListTagsUseCase,
    MergeDuplicatesRequest,
    MergeDuplicatesResponse,
    MergeDuplicatesUseCase,
    MergeTagsRequest,
    MergeTagsResponse,
    MergeTagsUseCase,
    RebuildTreeResponse,
    RebuildTreeUseCase,
    RefreshTrendingResponse,
    RefreshTrendingUseCase,
    TagItem,
    TagRelation,
    UnfollowTagUseCase,
    UpdateSettingsRequest,
    UpdateSettingsUseCase,
    UpdateTagRequest,
    UpdateTagResponse,
    UpdateTagUseCase,
)
from taxon.config import TaxonomySettings
from taxon.domain.value import TagSortField

router = APIRouter(
    prefix="/tags",
    tags=["tags"],
    route_class=DishkaRoute,
)


@router.get(
    "",
    response_model=ListTagsResponse,
    summary="List tags",
)
async def list_tags(
    use_case: FromDishka[ListTagsUseCase],
    limit: Optional[int] = Query(default=None, ge=1),
    order_by: TagSortField = TagSortField.NAME,
    descending: bool = False,
) -> ListTagsResponse:
    """List tags.

    Example:
        GET /tags?order_by=usage_count&descending=true&limit=10
    """
    with logfire.span("api.list_tags", limit=limit, order_by=order_by.value):
        request = ListTagsRequest(limit=limit, order_by=order_by, descending=descending)
        return await use_case.execute(request)


@router.post(
    "",
    response_model=CreateTagResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a tag",
)
async def create_tag(
    request: CreateTagRequest,
    use_case: FromDishka[CreateTagUseCase],
) -> CreateTagResponse:
    """Create a tag; the slug is derived from the name when omitted."""
    with logfire.span("api.create_tag", name=request.name):
        return await use_case.execute(request)


# Hierarchy


@router.get("/tree", response_model=GetTagTreeResponse, summary="Nested tag tree")
async def get_tag_tree(
    use_case: FromDishka[GetTagTreeUseCase],
    parent_id: Optional[UUID] = None,
) -> GetTagTreeResponse:
    """Nested tree from the roots, or from below ``parent_id``."""
    with logfire.span("api.get_tag_tree"):
        return await use_case.execute(parent_id)


@router.post(
    "/tree/rebuild",
    response_model=RebuildTreeResponse,
    summary="Recompute every path, label and level",
)
async def rebuild_tree(use_case: FromDishka[RebuildTreeUseCase]) -> RebuildTreeResponse:
    with logfire.span("api.rebuild_tree"):
        return await use_case.execute()


# Duplicates and merging


@router.get(
    "/duplicates",
    response_model=FindDuplicatesResponse,
    summary="Similar tag pairs",
)
async def find_duplicates(
    use_case: FromDishka[FindDuplicatesUseCase],
    threshold: Optional[float] = Query(default=None, ge=0.0, le=1.0),
) -> FindDuplicatesResponse:
    """Pairs of tags whose names are at least ``threshold`` similar."""
    with logfire.span("api.find_duplicates", threshold=threshold):
        return await use_case.execute(FindDuplicatesRequest(threshold=threshold))


@router.get(
    "/duplicates/groups",
    response_model=GroupDuplicatesResponse,
    summary="Duplicate clusters",
)
async def group_duplicates(
    use_case: FromDishka[GroupDuplicatesUseCase],
    threshold: Optional[float] = Query(default=None, ge=0.0, le=1.0),
    exclude_ids: list[UUID] = Query(default=[]),
) -> GroupDuplicatesResponse:
    """Clusters of transitively similar tags with their chosen survivor."""
    with logfire.span("api.group_duplicates", threshold=threshold):
        request = GroupDuplicatesRequest(threshold=threshold, exclude_ids=exclude_ids)
        return await use_case.execute(request)


@router.post(
    "/duplicates/merge",
    response_model=MergeDuplicatesResponse,
    summary="Merge every duplicate cluster",
)
async def merge_duplicates(
    request: MergeDuplicatesRequest,
    use_case: FromDishka[MergeDuplicatesUseCase],
) -> MergeDuplicatesResponse:
    """Merge each cluster into its survivor; ``dry_run`` only reports.

    Example:
        POST /tags/duplicates/merge {"threshold": 0.3, "dry_run": true}
    """
    with logfire.span(
        "api.merge_duplicates", threshold=request.threshold, dry_run=request.dry_run
    ):
        return await use_case.execute(request)


@router.post("/merge", response_model=MergeTagsResponse, summary="Merge tags")
async def merge_tags(
    request: MergeTagsRequest,
    use_case: FromDishka[MergeTagsUseCase],
) -> MergeTagsResponse:
    """Merge the source tags into the target tag."""
    with logfire.span(
        "api.merge_tags",
        target_id=str(request.target_id),
        source_count=len(request.source_ids),
    ):
        return await use_case.execute(request)


# Analytics and maintenance


@router.get(
    "/analytics",
    response_model=GetAnalyticsResponse,
    summary="Taxonomy health report",
)
async def get_analytics(
    use_case: FromDishka[GetAnalyticsUseCase],
) -> GetAnalyticsResponse:
    with logfire.span("api.get_analytics"):
        return await use_case.execute()


@router.post(
    "/bulk/{action}",
    response_model=BulkResultResponse,
    summary="Bulk operation",
)
async def bulk_update(
    action: BulkAction,
    request: BulkUpdateRequest,
    use_case: FromDishka[BulkUpdateUseCase],
) -> BulkResultResponse:
    """Apply one operation to many tags; refused items are listed, not raised.

    Example:
        POST /tags/bulk/lock {"tag_ids": ["..."]}
    """
    with logfire.span("api.bulk_update", action=action.value):
        return await use_case.execute(action, request)


@router.get(
    "/trending",
    response_model=GetTrendingTagsResponse,
    summary="Trending tags",
)
async def get_trending_tags(
    use_case: FromDishka[GetTrendingTagsUseCase],
) -> GetTrendingTagsResponse:
    return await use_case.execute()


@router.post(
    "/trending/refresh",
    response_model=RefreshTrendingResponse,
    summary="Recompute trending flags",
)
async def refresh_trending(
    use_case: FromDishka[RefreshTrendingUseCase],
) -> RefreshTrendingResponse:
    with logfire.span("api.refresh_trending"):
        return await use_case.execute()


@router.post(
    "/cleanup",
    response_model=CleanupOrphansResponse,
    summary="Delete orphaned tags",
)
async def cleanup_orphans(
    use_case: FromDishka[CleanupOrphansUseCase],
) -> CleanupOrphansResponse:
    with logfire.span("api.cleanup_orphans"):
        return await use_case.execute()


# Settings


@router.get("/settings", response_model=TaxonomySettings, summary="Taxonomy settings")
async def get_settings(use_case: FromDishka[GetSettingsUseCase]) -> TaxonomySettings:
    return await use_case.execute()


@router.patch(
    "/settings",
    response_model=TaxonomySettings,
    summary="Change taxonomy settings",
)
async def update_settings(
    request: UpdateSettingsRequest,
    use_case: FromDishka[UpdateSettingsUseCase],
) -> TaxonomySettings:
    """Change settings for every operation started afterwards.

    Example:
        PATCH /tags/settings {"duplicate_threshold": 0.4}
    """
    with logfire.span("api.update_settings"):
        return await use_case.execute(request)


# Following


@router.get(
    "/followed",
    response_model=GetFollowedTagsResponse,
    summary="Tags a user follows",
)
async def get_followed_tags(
    user_id: UUID,
    use_case: FromDishka[GetFollowedTagsUseCase],
) -> GetFollowedTagsResponse:
    return await use_case.execute(user_id)


# Single tag


@router.get("/slug/{slug}", response_model=TagItem, summary="Get a tag by slug")
async def get_tag_by_slug(
    slug: str,
    use_case: FromDishka[GetTagUseCase],
) -> TagItem:
    with logfire.span("api.get_tag_by_slug", slug=slug):
        return await use_case.execute(GetTagRequest(slug=slug))


@router.get("/{tag_id}", response_model=TagItem, summary="Get a tag")
async def get_tag(
    tag_id: UUID,
    use_case: FromDishka[GetTagUseCase],
) -> TagItem:
    with logfire.span("api.get_tag", tag_id=str(tag_id)):
        return await use_case.execute(GetTagRequest(tag_id=tag_id))


@router.patch("/{tag_id}", response_model=UpdateTagResponse, summary="Update a tag")
async def update_tag(
    tag_id: UUID,
    request: UpdateTagRequest,
    use_case: FromDishka[UpdateTagUseCase],
) -> UpdateTagResponse:
    """Change only the fields present in the body.

    Locked tags refuse changes unless ``force_unlock`` is set.
    """
    with logfire.span("api.update_tag", tag_id=str(tag_id)):
        return await use_case.execute(tag_id, request)


@router.delete(
    "/{tag_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a tag",
)
async def delete_tag(
    tag_id: UUID,
    use_case: FromDishka[DeleteTagUseCase],
) -> None:
    """Delete a tag; its children move to the root level."""
    with logfire.span("api.delete_tag", tag_id=str(tag_id)):
        await use_case.execute(tag_id)


@router.get(
    "/{tag_id}/{relation}",
    response_model=GetTagRelativesResponse,
    summary="Ancestors, descendants or siblings of a tag",
)
async def get_tag_relatives(
    tag_id: UUID,
    relation: TagRelation,
    use_case: FromDishka[GetTagRelativesUseCase],
) -> GetTagRelativesResponse:
    """Relatives of a tag along the hierarchy.

    Example:
        GET /tags/{tag_id}/ancestors
    """
    with logfire.span(
        "api.get_tag_relatives", tag_id=str(tag_id), relation=relation.value
    ):
        return await use_case.execute(tag_id, relation)


@router.post(
    "/{tag_id}/follow",
    response_model=FollowTagResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Follow a tag",
)
async def follow_tag(
    tag_id: UUID,
    use_case: FromDishka[FollowTagUseCase],
    user_id: UUID = Query(),
    weight: int = Query(default=1, ge=1),
) -> FollowTagResponse:
    with logfire.span("api.follow_tag", tag_id=str(tag_id), user_id=str(user_id)):
        request = FollowTagRequest(tag_id=tag_id, user_id=user_id, weight=weight)
        return await use_case.execute(request)


@router.delete(
    "/{tag_id}/follow",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Unfollow a tag",
)
async def unfollow_tag(
    tag_id: UUID,
    use_case: FromDishka[UnfollowTagUseCase],
    user_id: UUID = Query(),
) -> None:
    with logfire.span("api.unfollow_tag", tag_id=str(tag_id), user_id=str(user_id)):
        await use_case.execute(tag_id, user_id)
