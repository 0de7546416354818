"""Tag following use cases."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from taxon.domain.service import TaxonomyService
from taxon.domain.value import TagId, UserId

from .common import TagItem


class FollowTagRequest(BaseModel):
    """Follow tag request."""

    tag_id: UUID
    user_id: UUID
    weight: int = Field(default=1, ge=1)


class FollowTagResponse(BaseModel):
    """Follow tag response."""

    follow_id: str
    tag_id: str
    user_id: str
    weight: int
    created_at: datetime


class FollowedTagItem(BaseModel):
    """Followed tag with the follow weight."""

    tag: TagItem
    weight: int


class GetFollowedTagsResponse(BaseModel):
    """Followed tags response."""

    tags: list[FollowedTagItem]


class FollowTagUseCase:
    """Use case for following a tag."""

    def __init__(self, taxonomy_service: TaxonomyService) -> None:
        """Initialize follow tag use case.

        Args:
            taxonomy_service: Taxonomy domain service
        """
        self.taxonomy_service = taxonomy_service

    async def execute(self, request: FollowTagRequest) -> FollowTagResponse:
        """Execute follow flow.

        Raises:
            FollowingDisabledError: If following is switched off
            AlreadyFollowingError: If the user already follows the tag
        """
        with logfire.span(
            "follow_tag.execute",
            tag_id=str(request.tag_id),
            user_id=str(request.user_id),
        ):
            follow = await self.taxonomy_service.follow_tag(
                TagId(request.tag_id), UserId(request.user_id), request.weight
            )
            return FollowTagResponse(
                follow_id=str(follow.id),
                tag_id=str(follow.tag_id),
                user_id=str(follow.user_id),
                weight=follow.weight,
                created_at=follow.created_at,
            )


class UnfollowTagUseCase:
    """Use case for unfollowing a tag."""

    def __init__(self, taxonomy_service: TaxonomyService) -> None:
        self.taxonomy_service = taxonomy_service

    async def execute(self, tag_id: UUID, user_id: UUID) -> None:
        """Execute unfollow flow.

        Raises:
            NotFollowingError: If the user does not follow the tag
        """
        with logfire.span(
            "unfollow_tag.execute", tag_id=str(tag_id), user_id=str(user_id)
        ):
            await self.taxonomy_service.unfollow_tag(TagId(tag_id), UserId(user_id))


class GetFollowedTagsUseCase:
    """Use case for a user's followed tags, heaviest first."""

    def __init__(self, taxonomy_service: TaxonomyService) -> None:
        self.taxonomy_service = taxonomy_service

    async def execute(self, user_id: UUID) -> GetFollowedTagsResponse:
        followed = await self.taxonomy_service.get_followed_tags(UserId(user_id))
        return GetFollowedTagsResponse(
            tags=[
                FollowedTagItem(tag=TagItem.from_domain(item.tag), weight=item.weight)
                for item in followed
            ]
        )
