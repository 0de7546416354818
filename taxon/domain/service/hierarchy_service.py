"""Tag hierarchy domain service."""

from collections import defaultdict, deque
from dataclasses import dataclass
from typing import Optional

import logfire

from taxon.config import ConfigCell, TaxonomySettings
from taxon.domain.error import (
    CycleDetectedError,
    SelfParentError,
    TagNotFoundError,
    TreeTooDeepError,
)
from taxon.domain.model import Tag, TreeFields
from taxon.domain.repository import TagRepository
from taxon.domain.value import TagId, TagSortField, slugify

from .base import Service

PATH_SEPARATOR = "/"


@dataclass
class TagTreeNode:
    """Node of the nested tag tree."""

    tag: Tag
    children: list["TagTreeNode"]


def compute_label(name: str, separator: str) -> str:
    """Last non-empty separator-delimited segment of a name, or the name."""
    segments = [segment.strip() for segment in name.split(separator)]
    segments = [segment for segment in segments if segment]
    return segments[-1] if segments else name


class HierarchyService(Service):
    """Domain service maintaining the tag tree.

    The tree lives in the flat tag table as ``parent_id`` references.
    Every walk is an id lookup with a visited set, so a corrupted parent
    chain is reported instead of looping forever.
    """

    def __init__(self, tag_repository: TagRepository, config_cell: ConfigCell) -> None:
        """Initialize hierarchy service.

        Args:
            tag_repository: Tag repository
            config_cell: Live taxonomy configuration
        """
        self.tag_repository = tag_repository
        self.config_cell = config_cell

    async def compute_tree_fields(
        self,
        name: str,
        parent_id: Optional[TagId],
        slug: Optional[str] = None,
        config: Optional[TaxonomySettings] = None,
    ) -> TreeFields:
        """Compute path, label and level for a tag.

        Walks the parent chain upward, prepending each ancestor's slug.
        No depth limit is applied here; see ``check_depth``.

        Args:
            name: Tag name (may be compound, e.g. ``"Lang/Python"``)
            parent_id: Parent tag, None for a root tag
            slug: The tag's own slug, derived from ``name`` when omitted
            config: Configuration snapshot, current one when omitted

        Returns:
            Tree fields for the tag

        Raises:
            CycleDetectedError: If the stored parent chain loops
        """
        config = config or self.config_cell.current
        if not config.enable_tree:
            return TreeFields(path=None, label=None, level=1)

        own_slug = slug or slugify(name, config.max_slug_length)
        label = compute_label(name, config.tree_separator)

        if parent_id is None:
            return TreeFields(path=own_slug, label=label, level=1)

        parts = [own_slug]
        visited: set[TagId] = set()
        current_id: Optional[TagId] = parent_id
        while current_id is not None:
            if current_id in visited:
                raise CycleDetectedError(str(parent_id), str(current_id))
            visited.add(current_id)

            parent = await self.tag_repository.find_by_id(current_id)
            if parent is None:
                break
            parts.insert(0, parent.slug.root)
            current_id = parent.parent_id

        return TreeFields(path=PATH_SEPARATOR.join(parts), label=label, level=len(parts))

    @staticmethod
    def check_depth(fields: TreeFields, config: TaxonomySettings) -> None:
        """Reject tree fields deeper than the configured maximum.

        Raises:
            TreeTooDeepError: If ``fields.level`` exceeds ``max_tree_depth``
        """
        if config.max_tree_depth and fields.level > config.max_tree_depth:
            raise TreeTooDeepError(fields.level, config.max_tree_depth)

    async def would_cycle(self, tag_id: TagId, candidate_parent_id: TagId) -> bool:
        """Check whether making ``candidate_parent_id`` the parent closes a loop.

        Args:
            tag_id: Tag being moved
            candidate_parent_id: Proposed parent

        Returns:
            True if the walk up from the candidate reaches ``tag_id`` or
            revisits a node (pre-existing corruption)
        """
        current_id: Optional[TagId] = candidate_parent_id
        visited: set[TagId] = set()
        while current_id is not None:
            if current_id == tag_id or current_id in visited:
                return True
            visited.add(current_id)
            parent = await self.tag_repository.find_by_id(current_id)
            current_id = parent.parent_id if parent else None
        return False

    async def validate_parent(self, tag_id: TagId, parent_id: TagId) -> Tag:
        """Validate a parent assignment before it is persisted.

        Args:
            tag_id: Tag being moved
            parent_id: Proposed parent

        Returns:
            The parent tag

        Raises:
            SelfParentError: If ``parent_id == tag_id``
            TagNotFoundError: If the parent does not exist
            CycleDetectedError: If the parent is a descendant of the tag
        """
        if parent_id == tag_id:
            logfire.warn("Self-parent rejected", tag_id=str(tag_id))
            raise SelfParentError(str(tag_id))

        parent = await self.tag_repository.find_by_id(parent_id)
        if parent is None:
            raise TagNotFoundError(str(parent_id))

        if await self.would_cycle(tag_id, parent_id):
            logfire.warn(
                "Hierarchy cycle rejected", tag_id=str(tag_id), parent_id=str(parent_id)
            )
            raise CycleDetectedError(str(tag_id), str(parent_id))

        return parent

    async def rebuild_tree_paths(self) -> int:
        """Recompute path, label and level for every tag.

        Tags are processed in name order against a single id -> tag snapshot;
        only tags whose fields change are written, so a second run updates
        nothing.

        Returns:
            Number of tags updated
        """
        with logfire.span("hierarchy_service.rebuild_tree_paths"):
            config = self.config_cell.current
            if not config.enable_tree:
                logfire.info("Tree disabled, rebuild skipped")
                return 0

            tags = await self.tag_repository.find_all(order_by=TagSortField.NAME)
            arena = {tag.id: tag for tag in tags}

            updated = 0
            for tag in tags:
                if await self._apply_fields(tag, arena, config):
                    updated += 1

            logfire.info("Tree paths rebuilt", total=len(tags), updated=updated)
            return updated

    async def refresh_descendants(self, tag_id: TagId) -> int:
        """Recompute tree fields of every descendant of a tag.

        Called after a tag's slug or parent changes, since descendant paths
        embed ancestor slugs.

        Args:
            tag_id: Tag whose subtree changed

        Returns:
            Number of descendants updated
        """
        with logfire.span("hierarchy_service.refresh_descendants", tag_id=str(tag_id)):
            config = self.config_cell.current
            if not config.enable_tree:
                return 0

            tags = await self.tag_repository.find_all()
            arena = {tag.id: tag for tag in tags}
            children = self._children_map(tags)

            updated = 0
            for descendant in self._walk_down(tag_id, children):
                if await self._apply_fields(descendant, arena, config):
                    updated += 1

            logfire.info("Descendants refreshed", tag_id=str(tag_id), updated=updated)
            return updated

    async def get_ancestors(self, tag_id: TagId) -> list[Tag]:
        """Get ancestors of a tag, root first.

        Raises:
            TagNotFoundError: If the tag does not exist
        """
        with logfire.span("hierarchy_service.get_ancestors", tag_id=str(tag_id)):
            tag = await self._get_tag(tag_id)

            ancestors: list[Tag] = []
            visited = {tag.id}
            current_id = tag.parent_id
            while current_id is not None and current_id not in visited:
                visited.add(current_id)
                parent = await self.tag_repository.find_by_id(current_id)
                if parent is None:
                    break
                ancestors.insert(0, parent)
                current_id = parent.parent_id

            return ancestors

    async def get_descendants(self, tag_id: TagId) -> list[Tag]:
        """Get every descendant of a tag, breadth first.

        Raises:
            TagNotFoundError: If the tag does not exist
        """
        with logfire.span("hierarchy_service.get_descendants", tag_id=str(tag_id)):
            await self._get_tag(tag_id)

            result: list[Tag] = []
            visited = {tag_id}
            queue: deque[TagId] = deque([tag_id])
            while queue:
                parent_id = queue.popleft()
                for child in await self.tag_repository.find_children(parent_id):
                    if child.id in visited:
                        continue
                    visited.add(child.id)
                    result.append(child)
                    queue.append(child.id)

            logfire.info("Descendants found", tag_id=str(tag_id), count=len(result))
            return result

    async def get_siblings(self, tag_id: TagId) -> list[Tag]:
        """Get tags sharing the tag's parent, ordered by name.

        Raises:
            TagNotFoundError: If the tag does not exist
        """
        with logfire.span("hierarchy_service.get_siblings", tag_id=str(tag_id)):
            tag = await self._get_tag(tag_id)
            siblings = await self.tag_repository.find_children(tag.parent_id)
            return [sibling for sibling in siblings if sibling.id != tag_id]

    async def get_nested_tree(
        self, parent_id: Optional[TagId] = None
    ) -> list[TagTreeNode]:
        """Build the nested tag tree below a parent.

        Loads the tag table once and assembles the tree from an adjacency
        map. Children at each level are sorted by name.

        Args:
            parent_id: Subtree root, None for the whole forest

        Returns:
            Tree nodes for the direct children of ``parent_id``

        Raises:
            TagNotFoundError: If ``parent_id`` does not exist
        """
        with logfire.span(
            "hierarchy_service.get_nested_tree",
            parent_id=str(parent_id) if parent_id else None,
        ):
            if parent_id is not None:
                await self._get_tag(parent_id)

            tags = await self.tag_repository.find_all(order_by=TagSortField.NAME)
            children = self._children_map(tags)

            def build_subtree(tag: Tag, seen: frozenset[TagId]) -> TagTreeNode:
                """Build tree recursively from a tag node."""
                return TagTreeNode(
                    tag=tag,
                    children=[
                        build_subtree(child, seen | {child.id})
                        for child in children.get(tag.id, [])
                        if child.id not in seen
                    ],
                )

            roots = children.get(parent_id, [])
            tree = [build_subtree(root, frozenset({root.id})) for root in roots]
            logfire.info("Built tag tree", root_count=len(tree))
            return tree

    async def _get_tag(self, tag_id: TagId) -> Tag:
        tag = await self.tag_repository.find_by_id(tag_id)
        if tag is None:
            logfire.warn("Tag not found", tag_id=str(tag_id))
            raise TagNotFoundError(str(tag_id))
        return tag

    async def _apply_fields(
        self, tag: Tag, arena: dict[TagId, Tag], config: TaxonomySettings
    ) -> bool:
        """Recompute a tag's fields from the arena and save them if changed."""
        fields = self._fields_from_arena(tag, arena, config)
        if (tag.path, tag.label, tag.level) == (fields.path, fields.label, fields.level):
            return False

        updated = tag.model_copy(
            update={"path": fields.path, "label": fields.label, "level": fields.level}
        )
        arena[tag.id] = await self.tag_repository.save(updated)
        return True

    @staticmethod
    def _fields_from_arena(
        tag: Tag, arena: dict[TagId, Tag], config: TaxonomySettings
    ) -> TreeFields:
        """In-memory counterpart of ``compute_tree_fields``."""
        label = compute_label(tag.name, config.tree_separator)
        parts = [tag.slug.root]
        visited = {tag.id}
        current_id = tag.parent_id
        while current_id is not None:
            if current_id in visited:
                raise CycleDetectedError(str(tag.id), str(current_id))
            visited.add(current_id)
            parent = arena.get(current_id)
            if parent is None:
                break
            parts.insert(0, parent.slug.root)
            current_id = parent.parent_id
        return TreeFields(path=PATH_SEPARATOR.join(parts), label=label, level=len(parts))

    @staticmethod
    def _children_map(tags: list[Tag]) -> dict[Optional[TagId], list[Tag]]:
        """Adjacency map parent_id -> children, preserving input order."""
        children: dict[Optional[TagId], list[Tag]] = defaultdict(list)
        for tag in tags:
            children[tag.parent_id].append(tag)
        return children

    @staticmethod
    def _walk_down(
        tag_id: TagId, children: dict[Optional[TagId], list[Tag]]
    ) -> list[Tag]:
        """Descendants of ``tag_id`` in breadth-first order."""
        result: list[Tag] = []
        visited = {tag_id}
        queue: deque[TagId] = deque([tag_id])
        while queue:
            for child in children.get(queue.popleft(), []):
                if child.id in visited:
                    continue
                visited.add(child.id)
                result.append(child)
                queue.append(child.id)
        return result
