"""Unit tests for FollowService."""

from uuid import uuid4

import pytest

from taxon.domain.error import (
    AlreadyFollowingError,
    FollowingDisabledError,
    NotFollowingError,
    TagNotFoundError,
    ValidationError,
)
from taxon.domain.model import TagDraft
from taxon.domain.service import FollowService, TaxonomyService
from taxon.domain.value import TagId, UserId
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestFollowService:
    """Tests for FollowService."""

    @pytest.mark.asyncio
    async def test_follow_and_list(self, unit_env):
        """Followed tags come back heaviest first."""
        # Arrange
        taxonomy = await unit_env.get(TaxonomyService)
        follow_service = await unit_env.get(FollowService)
        rust = await taxonomy.create_tag(TagDraft(name="Rust"))
        go = await taxonomy.create_tag(TagDraft(name="Go"))
        user_id = UserId(uuid4())

        # Act
        await follow_service.follow_tag(rust.id, user_id, weight=1)
        created = await follow_service.follow_tag(go.id, user_id, weight=4)
        followed = await follow_service.get_followed_tags(user_id)

        # Assert
        assert created.weight == 4
        assert [(item.tag.id, item.weight) for item in followed] == [
            (go.id, 4),
            (rust.id, 1),
        ]
        assert await follow_service.is_following(rust.id, user_id)

    @pytest.mark.asyncio
    async def test_follow_twice(self, unit_env):
        """A user follows a tag at most once."""
        # Arrange
        taxonomy = await unit_env.get(TaxonomyService)
        tag = await taxonomy.create_tag(TagDraft(name="Elixir"))
        user_id = UserId(uuid4())
        await taxonomy.follow_tag(tag.id, user_id)

        # Act & Assert
        with pytest.raises(AlreadyFollowingError):
            await taxonomy.follow_tag(tag.id, user_id)

    @pytest.mark.asyncio
    async def test_follow_unknown_tag(self, unit_env):
        follow_service = await unit_env.get(FollowService)

        with pytest.raises(TagNotFoundError):
            await follow_service.follow_tag(TagId(uuid4()), UserId(uuid4()))

    @pytest.mark.asyncio
    async def test_follow_weight_must_be_positive(self, unit_env):
        """Weights below 1 are rejected."""
        taxonomy = await unit_env.get(TaxonomyService)
        tag = await taxonomy.create_tag(TagDraft(name="Zig"))

        with pytest.raises(ValidationError):
            await taxonomy.follow_tag(tag.id, UserId(uuid4()), weight=0)

    @pytest.mark.asyncio
    async def test_unfollow(self, unit_env):
        """Unfollowing removes the follow; a second time fails."""
        # Arrange
        taxonomy = await unit_env.get(TaxonomyService)
        tag = await taxonomy.create_tag(TagDraft(name="Haskell"))
        user_id = UserId(uuid4())
        await taxonomy.follow_tag(tag.id, user_id)

        # Act
        await taxonomy.unfollow_tag(tag.id, user_id)

        # Assert
        assert not await taxonomy.is_following(tag.id, user_id)
        with pytest.raises(NotFollowingError):
            await taxonomy.unfollow_tag(tag.id, user_id)

    @pytest.mark.asyncio
    async def test_following_disabled(self, unit_env):
        """With following switched off, follow and unfollow both fail."""
        # Arrange
        taxonomy = await unit_env.get(TaxonomyService)
        tag = await taxonomy.create_tag(TagDraft(name="OCaml"))
        taxonomy.update_config(enable_following=False)

        # Act & Assert
        with pytest.raises(FollowingDisabledError):
            await taxonomy.follow_tag(tag.id, UserId(uuid4()))
        with pytest.raises(FollowingDisabledError):
            await taxonomy.unfollow_tag(tag.id, UserId(uuid4()))
