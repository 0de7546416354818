"""Tag following domain service."""

from uuid import uuid4

import logfire

from taxon.config import ConfigCell
from taxon.domain.error import (
    AlreadyFollowingError,
    FollowingDisabledError,
    NotFollowingError,
    TagNotFoundError,
    ValidationError,
)
from taxon.domain.model import FollowedTag, TagFollow
from taxon.domain.repository import TagFollowRepository, TagRepository
from taxon.domain.value import TagFollowId, TagId, UserId

from .base import Service


class FollowService(Service):
    """Domain service for users subscribing to tags."""

    def __init__(
        self,
        tag_repository: TagRepository,
        follow_repository: TagFollowRepository,
        config_cell: ConfigCell,
    ) -> None:
        """Initialize follow service.

        Args:
            tag_repository: Tag repository
            follow_repository: Tag follow repository
            config_cell: Live taxonomy configuration
        """
        self.tag_repository = tag_repository
        self.follow_repository = follow_repository
        self.config_cell = config_cell

    async def follow_tag(self, tag_id: TagId, user_id: UserId, weight: int = 1) -> TagFollow:
        """Follow a tag.

        Args:
            tag_id: Tag to follow
            user_id: Following user
            weight: Ordering weight, at least 1

        Returns:
            Created follow

        Raises:
            FollowingDisabledError: If following is switched off
            ValidationError: If weight is below 1
            TagNotFoundError: If the tag does not exist
            AlreadyFollowingError: If the user already follows the tag
        """
        with logfire.span(
            "follow_service.follow_tag", tag_id=str(tag_id), user_id=str(user_id)
        ):
            self._ensure_enabled()
            if weight < 1:
                raise ValidationError("Follow weight must be at least 1")

            if await self.tag_repository.find_by_id(tag_id) is None:
                raise TagNotFoundError(str(tag_id))

            if await self.follow_repository.find(tag_id, user_id):
                logfire.warn(
                    "Already following tag", tag_id=str(tag_id), user_id=str(user_id)
                )
                raise AlreadyFollowingError(str(tag_id), str(user_id))

            follow = TagFollow(
                id=TagFollowId(uuid4()), tag_id=tag_id, user_id=user_id, weight=weight
            )
            saved = await self.follow_repository.save(follow)

            logfire.info("Tag followed", tag_id=str(tag_id), user_id=str(user_id))
            return saved

    async def unfollow_tag(self, tag_id: TagId, user_id: UserId) -> None:
        """Stop following a tag.

        Raises:
            FollowingDisabledError: If following is switched off
            NotFollowingError: If the user does not follow the tag
        """
        with logfire.span(
            "follow_service.unfollow_tag", tag_id=str(tag_id), user_id=str(user_id)
        ):
            self._ensure_enabled()
            if not await self.follow_repository.delete(tag_id, user_id):
                raise NotFollowingError(str(tag_id), str(user_id))

            logfire.info("Tag unfollowed", tag_id=str(tag_id), user_id=str(user_id))

    async def get_followed_tags(self, user_id: UserId) -> list[FollowedTag]:
        """Get the tags a user follows, heaviest weight first."""
        with logfire.span("follow_service.get_followed_tags", user_id=str(user_id)):
            follows = await self.follow_repository.find_by_user(user_id)
            tags = {
                tag.id: tag
                for tag in await self.tag_repository.find_by_ids(
                    [follow.tag_id for follow in follows]
                )
            }
            return [
                FollowedTag(tag=tags[follow.tag_id], weight=follow.weight)
                for follow in follows
                if follow.tag_id in tags
            ]

    async def is_following(self, tag_id: TagId, user_id: UserId) -> bool:
        """Check whether a user follows a tag."""
        return await self.follow_repository.find(tag_id, user_id) is not None

    def _ensure_enabled(self) -> None:
        if not self.config_cell.current.enable_following:
            raise FollowingDisabledError()
