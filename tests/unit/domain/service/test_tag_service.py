"""Unit tests for TagService."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from taxon.domain.error import (
    BulkLimitExceededError,
    DuplicateNameOrSlugError,
    TagCountExceededError,
    TagLockedError,
    TagNotFoundError,
    TagProtectedError,
    TreeTooDeepError,
    ValidationError,
)
from taxon.domain.model import TagChanges, TagDraft, TagStyle
from taxon.domain.repository import PostRepository, TagFollowRepository, TagRepository
from taxon.domain.service import TaxonomyService
from taxon.domain.value import PostId, TagId, UserId
from tests.factories import make_post, make_tag
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestCreateTag:
    """Tests for tag creation."""

    @pytest.mark.asyncio
    async def test_create_tag_derives_slug_and_color(self, unit_env):
        """Slug comes from the name, color from the configured default."""
        # Arrange
        taxonomy = await unit_env.get(TaxonomyService)

        # Act
        tag = await taxonomy.create_tag(
            TagDraft(name="  Machine Learning ", synonyms=["ML", "ml", " "])
        )

        # Assert
        assert tag.name == "Machine Learning"
        assert tag.slug.root == "machine-learning"
        assert tag.color == "#3b82f6"
        assert tag.path == "machine-learning"
        assert tag.level == 1
        assert tag.synonyms == ["ml"]

    @pytest.mark.asyncio
    async def test_create_tag_duplicate_name_case_insensitive(self, unit_env):
        """Names differing only in case conflict by default."""
        # Arrange
        taxonomy = await unit_env.get(TaxonomyService)
        await taxonomy.create_tag(TagDraft(name="Python"))

        # Act & Assert
        with pytest.raises(DuplicateNameOrSlugError):
            await taxonomy.create_tag(TagDraft(name="PYTHON", slug="python-lang"))

    @pytest.mark.asyncio
    async def test_create_tag_duplicate_slug(self, unit_env):
        """A taken slug conflicts even under a different name."""
        # Arrange
        taxonomy = await unit_env.get(TaxonomyService)
        await taxonomy.create_tag(TagDraft(name="Go"))

        # Act & Assert
        with pytest.raises(DuplicateNameOrSlugError):
            await taxonomy.create_tag(TagDraft(name="Golang", slug="go"))

    @pytest.mark.asyncio
    async def test_create_tag_force_lowercase(self, unit_env):
        """Names are lowercased when configured."""
        # Arrange
        taxonomy = await unit_env.get(TaxonomyService)
        taxonomy.update_config(force_lowercase=True)

        # Act
        tag = await taxonomy.create_tag(TagDraft(name="Rust"))

        # Assert
        assert tag.name == "rust"

    @pytest.mark.asyncio
    async def test_create_tag_rejects_unsluggable_name(self, unit_env):
        """A name with no slug-safe characters is invalid."""
        taxonomy = await unit_env.get(TaxonomyService)

        with pytest.raises(ValidationError):
            await taxonomy.create_tag(TagDraft(name="!!!"))

    @pytest.mark.asyncio
    async def test_create_tag_missing_parent(self, unit_env):
        """An unknown parent id is reported as not found."""
        taxonomy = await unit_env.get(TaxonomyService)

        with pytest.raises(TagNotFoundError):
            await taxonomy.create_tag(TagDraft(name="Child", parent_id=TagId(uuid4())))

    @pytest.mark.asyncio
    async def test_create_tag_too_deep(self, unit_env):
        """Tags deeper than the maximum tree depth are refused."""
        # Arrange
        taxonomy = await unit_env.get(TaxonomyService)
        taxonomy.update_config(max_tree_depth=2)
        top = await taxonomy.create_tag(TagDraft(name="Top"))
        middle = await taxonomy.create_tag(TagDraft(name="Middle", parent_id=top.id))

        # Act & Assert
        with pytest.raises(TreeTooDeepError):
            await taxonomy.create_tag(TagDraft(name="Bottom", parent_id=middle.id))

    @pytest.mark.asyncio
    async def test_create_tag_linked_tags(self, unit_env):
        """Linked ids are deduplicated and must exist."""
        # Arrange
        taxonomy = await unit_env.get(TaxonomyService)
        react = await taxonomy.create_tag(TagDraft(name="React"))

        # Act
        jsx = await taxonomy.create_tag(
            TagDraft(name="JSX", linked_tag_ids=[react.id, react.id])
        )

        # Assert
        assert jsx.linked_tag_ids == [react.id]
        with pytest.raises(TagNotFoundError):
            await taxonomy.create_tag(
                TagDraft(name="TSX", linked_tag_ids=[TagId(uuid4())])
            )


class TestUpdateTag:
    """Tests for tag updates."""

    @pytest.mark.asyncio
    async def test_update_locked_tag_requires_force_unlock(self, unit_env):
        """Locked tags only change with force_unlock."""
        # Arrange
        taxonomy = await unit_env.get(TaxonomyService)
        tag = await taxonomy.create_tag(TagDraft(name="Stable", locked=True))

        # Act & Assert
        with pytest.raises(TagLockedError):
            await taxonomy.update_tag(tag.id, TagChanges(description="New"))

        updated = await taxonomy.update_tag(
            tag.id, TagChanges(description="New", locked=False, force_unlock=True)
        )
        assert updated.description == "New"
        assert not updated.locked

    @pytest.mark.asyncio
    async def test_update_moves_tag_to_root(self, unit_env):
        """An explicit parent_id of None detaches the tag."""
        # Arrange
        taxonomy = await unit_env.get(TaxonomyService)
        parent = await taxonomy.create_tag(TagDraft(name="Parent"))
        child = await taxonomy.create_tag(TagDraft(name="Child", parent_id=parent.id))

        # Act
        moved = await taxonomy.update_tag(child.id, TagChanges(parent_id=None))

        # Assert
        assert moved.parent_id is None
        assert moved.path == "child"
        assert moved.level == 1

    @pytest.mark.asyncio
    async def test_update_omitted_parent_keeps_position(self, unit_env):
        """Leaving parent_id out does not move the tag."""
        # Arrange
        taxonomy = await unit_env.get(TaxonomyService)
        parent = await taxonomy.create_tag(TagDraft(name="Parent"))
        child = await taxonomy.create_tag(TagDraft(name="Child", parent_id=parent.id))

        # Act
        updated = await taxonomy.update_tag(child.id, TagChanges(color="#000000"))

        # Assert
        assert updated.parent_id == parent.id
        assert updated.color == "#000000"

    @pytest.mark.asyncio
    async def test_rename_to_taken_name(self, unit_env):
        """Renaming onto another tag's name conflicts."""
        # Arrange
        taxonomy = await unit_env.get(TaxonomyService)
        await taxonomy.create_tag(TagDraft(name="Vue"))
        svelte = await taxonomy.create_tag(TagDraft(name="Svelte"))

        # Act & Assert
        with pytest.raises(DuplicateNameOrSlugError):
            await taxonomy.update_tag(svelte.id, TagChanges(name="vue"))

    @pytest.mark.asyncio
    async def test_too_many_synonyms(self, unit_env):
        """Synonym lists longer than the maximum are rejected."""
        # Arrange
        taxonomy = await unit_env.get(TaxonomyService)
        taxonomy.update_config(max_synonyms=2)
        tag = await taxonomy.create_tag(TagDraft(name="Kotlin"))

        # Act & Assert
        with pytest.raises(ValidationError):
            await taxonomy.update_tag(tag.id, TagChanges(synonyms=["kt", "kts", "kotl"]))


class TestDeleteTag:
    """Tests for single tag deletion."""

    @pytest.mark.asyncio
    async def test_delete_detaches_posts_followers_and_children(self, unit_env):
        """Children move to the root; posts and follows lose the tag."""
        # Arrange
        taxonomy = await unit_env.get(TaxonomyService)
        post_repo = await unit_env.get(PostRepository)
        follow_repo = await unit_env.get(TagFollowRepository)
        parent = await taxonomy.create_tag(TagDraft(name="Parent"))
        child = await taxonomy.create_tag(TagDraft(name="Child", parent_id=parent.id))
        post = await post_repo.save(make_post([parent.id, child.id]))
        await taxonomy.follow_tag(parent.id, UserId(uuid4()))

        # Act
        await taxonomy.delete_tag(parent.id)

        # Assert
        with pytest.raises(TagNotFoundError):
            await taxonomy.get_tag(parent.id)
        orphan = await taxonomy.get_tag(child.id)
        assert orphan.parent_id is None
        assert orphan.path == "child"
        assert (await post_repo.find_by_id(post.id)).tag_ids == [child.id]
        assert await follow_repo.count_by_tag(parent.id) == 0

    @pytest.mark.asyncio
    async def test_delete_locked_tag(self, unit_env):
        """Locked tags cannot be deleted."""
        taxonomy = await unit_env.get(TaxonomyService)
        tag = await taxonomy.create_tag(TagDraft(name="Pinned", locked=True))

        with pytest.raises(TagLockedError):
            await taxonomy.delete_tag(tag.id)

    @pytest.mark.asyncio
    async def test_delete_protected_tag(self, unit_env):
        """Protected tags are deletable one by one unless protect_all is on."""
        # Arrange
        taxonomy = await unit_env.get(TaxonomyService)
        first = await taxonomy.create_tag(TagDraft(name="First", protected=True))
        second = await taxonomy.create_tag(TagDraft(name="Second", protected=True))

        # Act
        await taxonomy.delete_tag(first.id)
        taxonomy.update_config(protect_all=True)

        # Assert
        with pytest.raises(TagProtectedError):
            await taxonomy.delete_tag(second.id)


class TestBulkOperations:
    """Tests for bulk tag operations."""

    @pytest.mark.asyncio
    async def test_bulk_limit(self, unit_env):
        """More ids than max_bulk_ids are refused before any change."""
        # Arrange
        taxonomy = await unit_env.get(TaxonomyService)
        taxonomy.update_config(max_bulk_ids=2)
        ids = [TagId(uuid4()) for _ in range(3)]

        # Act & Assert
        with pytest.raises(BulkLimitExceededError):
            await taxonomy.bulk_lock(ids, True)

    @pytest.mark.asyncio
    async def test_bulk_limit_counts_unique_ids(self, unit_env):
        """Repeated ids are counted once."""
        # Arrange
        taxonomy = await unit_env.get(TaxonomyService)
        taxonomy.update_config(max_bulk_ids=1)
        tag = await taxonomy.create_tag(TagDraft(name="Once"))

        # Act
        result = await taxonomy.bulk_lock([tag.id, tag.id], True)

        # Assert
        assert result.succeeded == [tag.id]

    @pytest.mark.asyncio
    async def test_bulk_delete_reports_ineligible_tags(self, unit_env):
        """Locked, protected and missing tags are reported, others deleted."""
        # Arrange
        taxonomy = await unit_env.get(TaxonomyService)
        plain = await taxonomy.create_tag(TagDraft(name="Plain"))
        locked = await taxonomy.create_tag(TagDraft(name="Locked", locked=True))
        protected = await taxonomy.create_tag(TagDraft(name="Protected", protected=True))
        missing = TagId(uuid4())

        # Act
        result = await taxonomy.bulk_delete([plain.id, locked.id, protected.id, missing])

        # Assert
        assert result.succeeded == [plain.id]
        assert result.count == 1
        assert {(f.id, f.reason) for f in result.failed} == {
            (locked.id, "Tag is locked"),
            (protected.id, "Tag is protected"),
            (missing, "Tag not found"),
        }
        assert len(await taxonomy.list_tags()) == 2

    @pytest.mark.asyncio
    async def test_bulk_style_skips_locked(self, unit_env):
        """Style updates leave locked tags alone."""
        # Arrange
        taxonomy = await unit_env.get(TaxonomyService)
        open_tag = await taxonomy.create_tag(TagDraft(name="Open"))
        locked = await taxonomy.create_tag(TagDraft(name="Closed", locked=True))

        # Act
        result = await taxonomy.bulk_update_style(
            [open_tag.id, locked.id], TagStyle(color="#ff0000", featured=True)
        )

        # Assert
        assert result.succeeded == [open_tag.id]
        styled = await taxonomy.get_tag(open_tag.id)
        assert styled.color == "#ff0000"
        assert styled.featured
        assert (await taxonomy.get_tag(locked.id)).color == "#3b82f6"

    @pytest.mark.asyncio
    async def test_bulk_style_requires_a_field(self, unit_env):
        """An empty style is a validation error."""
        taxonomy = await unit_env.get(TaxonomyService)
        tag = await taxonomy.create_tag(TagDraft(name="Blank"))

        with pytest.raises(ValidationError):
            await taxonomy.bulk_update_style([tag.id], TagStyle())

    @pytest.mark.asyncio
    async def test_bulk_unlock_applies_to_locked_tags(self, unit_env):
        """Unlocking is allowed on locked tags."""
        # Arrange
        taxonomy = await unit_env.get(TaxonomyService)
        tag = await taxonomy.create_tag(TagDraft(name="Frozen", locked=True))

        # Act
        result = await taxonomy.bulk_lock([tag.id], False)

        # Assert
        assert result.succeeded == [tag.id]
        assert not (await taxonomy.get_tag(tag.id)).locked

    @pytest.mark.asyncio
    async def test_bulk_set_parent(self, unit_env):
        """Tags move under the parent; a cyclic move fails on its own."""
        # Arrange
        taxonomy = await unit_env.get(TaxonomyService)
        parent = await taxonomy.create_tag(TagDraft(name="Parent"))
        loose = await taxonomy.create_tag(TagDraft(name="Loose"))
        ancestor = await taxonomy.create_tag(TagDraft(name="Ancestor"))
        await taxonomy.update_tag(parent.id, TagChanges(parent_id=ancestor.id))

        # Act
        result = await taxonomy.bulk_set_parent([loose.id, ancestor.id], parent.id)

        # Assert
        assert result.succeeded == [loose.id]
        assert [failure.id for failure in result.failed] == [ancestor.id]
        moved = await taxonomy.get_tag(loose.id)
        assert moved.path == "ancestor/parent/loose"
        assert moved.level == 3


class TestPostTagHelpers:
    """Tests for linked tags, trending, cleanup and per-post limits."""

    @pytest.mark.asyncio
    async def test_expand_linked_tags(self, unit_env):
        """Linked companions are appended without repeats."""
        # Arrange
        taxonomy = await unit_env.get(TaxonomyService)
        js = await taxonomy.create_tag(TagDraft(name="JavaScript"))
        react = await taxonomy.create_tag(TagDraft(name="React", linked_tag_ids=[js.id]))

        # Act
        expanded = await taxonomy.expand_linked_tags([react.id, js.id])

        # Assert
        assert expanded == [react.id, js.id]
        assert await taxonomy.expand_linked_tags([react.id]) == [react.id, js.id]
        assert await taxonomy.expand_linked_tags([]) == []

    @pytest.mark.asyncio
    async def test_update_trending_tags(self, unit_env):
        """Only tags on recent posts trend; stale flags are cleared."""
        # Arrange
        taxonomy = await unit_env.get(TaxonomyService)
        tag_repo = await unit_env.get(TagRepository)
        post_repo = await unit_env.get(PostRepository)
        hot = await tag_repo.save(make_tag("Hot"))
        warm = await tag_repo.save(make_tag("Warm"))
        stale = await tag_repo.save(make_tag("Stale", trending=True))
        now = datetime.now(timezone.utc)
        await post_repo.save(make_post([hot.id, warm.id], published_at=now))
        await post_repo.save(make_post([hot.id], published_at=now - timedelta(days=1)))
        await post_repo.save(make_post([warm.id], published_at=now - timedelta(days=90)))
        taxonomy.update_config(trending_limit=1)

        # Act
        count = await taxonomy.update_trending_tags()

        # Assert
        assert count == 1
        assert (await tag_repo.find_by_id(hot.id)).trending
        assert not (await tag_repo.find_by_id(warm.id)).trending
        assert not (await tag_repo.find_by_id(stale.id)).trending
        assert [tag.id for tag in await taxonomy.get_trending_tags()] == [hot.id]

    @pytest.mark.asyncio
    async def test_cleanup_orphaned_tags(self, unit_env):
        """Unused childless tags go, flagged or parent tags stay."""
        # Arrange
        taxonomy = await unit_env.get(TaxonomyService)
        tag_repo = await unit_env.get(TagRepository)
        post_repo = await unit_env.get(PostRepository)
        orphan = await tag_repo.save(make_tag("Orphan"))
        featured = await tag_repo.save(make_tag("Featured", featured=True))
        parent = await tag_repo.save(make_tag("Parent"))
        await tag_repo.save(make_tag("Kid", parent_id=parent.id, usage_count=1))
        stale_count = await tag_repo.save(make_tag("Stale Count"))
        await post_repo.save(make_post([stale_count.id]))

        # Act
        result = await taxonomy.cleanup_orphaned_tags()

        # Assert
        assert result.deleted == 1
        assert result.skipped == 2
        assert await tag_repo.find_by_id(orphan.id) is None
        assert await tag_repo.find_by_id(featured.id) is not None
        assert await tag_repo.find_by_id(parent.id) is not None

    @pytest.mark.asyncio
    async def test_cleanup_disabled_by_protect_all(self, unit_env):
        """protect_all turns cleanup into a no-op."""
        # Arrange
        taxonomy = await unit_env.get(TaxonomyService)
        tag_repo = await unit_env.get(TagRepository)
        await tag_repo.save(make_tag("Orphan"))
        taxonomy.update_config(protect_all=True)

        # Act
        result = await taxonomy.cleanup_orphaned_tags()

        # Assert
        assert result.deleted == 0
        assert await tag_repo.count() == 1

    @pytest.mark.asyncio
    async def test_cleanup_respects_age_limit(self, unit_env):
        """Only tags older than auto_cleanup_days are removed."""
        # Arrange
        taxonomy = await unit_env.get(TaxonomyService)
        tag_repo = await unit_env.get(TagRepository)
        old = await tag_repo.save(
            make_tag("Old", created_at=datetime.now(timezone.utc) - timedelta(days=60))
        )
        new = await taxonomy.create_tag(TagDraft(name="New"))
        assert new.created_at.tzinfo is not None
        taxonomy.update_config(auto_cleanup_days=30)

        # Act
        result = await taxonomy.cleanup_orphaned_tags()

        # Assert
        assert result.deleted == 1
        assert await tag_repo.find_by_id(old.id) is None
        assert await tag_repo.find_by_id(new.id) is not None

    @pytest.mark.asyncio
    async def test_validate_tag_count(self, unit_env):
        """Posts cannot exceed max_tags_per_post; 0 means unlimited."""
        # Arrange
        taxonomy = await unit_env.get(TaxonomyService)
        post_repo = await unit_env.get(PostRepository)
        tags = [TagId(uuid4()) for _ in range(3)]
        post = await post_repo.save(make_post(tags[:2]))

        # Act & Assert
        await taxonomy.validate_tag_count(post.id, tags)

        taxonomy.update_config(max_tags_per_post=3)
        await taxonomy.validate_tag_count(post.id, tags[2:])
        await taxonomy.validate_tag_count(PostId(uuid4()), tags)
        with pytest.raises(TagCountExceededError):
            await taxonomy.validate_tag_count(post.id, tags[1:])
