"""In-memory implementation of TagFollow repository for testing."""

from copy import deepcopy
from typing import Optional

from taxon.domain.model.tag_follow import TagFollow
from taxon.domain.repository.tag_follow import TagFollowRepository
from taxon.domain.value import TagFollowId, TagId, UserId
from taxon.persistence.repository.tag_follow import plan_reassignment


class InMemoryTagFollowRepository(TagFollowRepository):
    """In-memory implementation of TagFollowRepository for testing."""

    def __init__(self) -> None:
        """Initialize empty repository."""
        self._follows: dict[TagFollowId, TagFollow] = {}

    async def save(self, follow: TagFollow) -> TagFollow:
        """Save a follow."""
        self._follows[follow.id] = deepcopy(follow)
        return deepcopy(follow)

    async def find(self, tag_id: TagId, user_id: UserId) -> Optional[TagFollow]:
        """Find the follow for a (tag, user) pair."""
        for follow in self._follows.values():
            if follow.tag_id == tag_id and follow.user_id == user_id:
                return deepcopy(follow)
        return None

    async def find_by_user(self, user_id: UserId) -> list[TagFollow]:
        """Find every follow of a user, heaviest weight first."""
        follows = [f for f in self._follows.values() if f.user_id == user_id]
        follows.sort(key=lambda f: f.weight, reverse=True)
        return [deepcopy(follow) for follow in follows]

    async def delete(self, tag_id: TagId, user_id: UserId) -> bool:
        """Delete the follow for a (tag, user) pair."""
        follow = await self.find(tag_id, user_id)
        if follow is None:
            return False
        del self._follows[follow.id]
        return True

    async def delete_by_tags(self, tag_ids: list[TagId]) -> int:
        """Delete every follow pointing at any of the given tags."""
        doomed = [f.id for f in self._follows.values() if f.tag_id in tag_ids]
        for follow_id in doomed:
            del self._follows[follow_id]
        return len(doomed)

    async def reassign(self, from_tag_ids: list[TagId], to_tag_id: TagId) -> int:
        """Point follows of several tags at another tag."""
        sources = [f for f in self._follows.values() if f.tag_id in from_tag_ids]
        target_users = {
            f.user_id for f in self._follows.values() if f.tag_id == to_tag_id
        }

        moved, dropped = plan_reassignment(sources, target_users)
        for follow in dropped:
            del self._follows[follow.id]
        for follow in moved:
            self._follows[follow.id] = follow.model_copy(update={"tag_id": to_tag_id})
        return len(moved)

    async def count(self) -> int:
        """Count all follows."""
        return len(self._follows)

    async def count_by_tag(self, tag_id: TagId) -> int:
        """Count followers of a tag."""
        return sum(1 for f in self._follows.values() if f.tag_id == tag_id)
