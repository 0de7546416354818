"""Unit tests for the follow use cases."""

from uuid import uuid4

import pytest

from taxon.application.usecase.tag import (
    FollowTagRequest,
    FollowTagUseCase,
    GetFollowedTagsUseCase,
    UnfollowTagUseCase,
)
from taxon.domain.error import NotFollowingError
from taxon.domain.model import TagDraft
from taxon.domain.service import TaxonomyService
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestFollowUseCases:
    """Tests for follow, unfollow and listing followed tags."""

    @pytest.mark.asyncio
    async def test_follow_list_unfollow(self, unit_env):
        # Arrange
        taxonomy = await unit_env.get(TaxonomyService)
        tag = await taxonomy.create_tag(TagDraft(name="Svelte"))
        user_id = uuid4()

        # Act
        followed = await FollowTagUseCase(taxonomy_service=taxonomy).execute(
            FollowTagRequest(tag_id=tag.id, user_id=user_id, weight=2)
        )
        listed = await GetFollowedTagsUseCase(taxonomy_service=taxonomy).execute(user_id)
        await UnfollowTagUseCase(taxonomy_service=taxonomy).execute(tag.id, user_id)
        after = await GetFollowedTagsUseCase(taxonomy_service=taxonomy).execute(user_id)

        # Assert
        assert followed.tag_id == str(tag.id)
        assert followed.weight == 2
        assert [(item.tag.id, item.weight) for item in listed.tags] == [(str(tag.id), 2)]
        assert after.tags == []

    @pytest.mark.asyncio
    async def test_unfollow_without_follow(self, unit_env):
        taxonomy = await unit_env.get(TaxonomyService)
        tag = await taxonomy.create_tag(TagDraft(name="Solid"))

        with pytest.raises(NotFollowingError):
            await UnfollowTagUseCase(taxonomy_service=taxonomy).execute(tag.id, uuid4())
