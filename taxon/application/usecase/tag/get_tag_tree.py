"""Get tag tree use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from taxon.domain.service import TagTreeNode, TaxonomyService
from taxon.domain.value import TagId


class TagTreeNodeResponse(BaseModel):
    """Tag tree node for API response.

    Recursive structure mirroring the domain tree.
    """

    id: str
    name: str
    slug: str
    label: Optional[str]
    path: Optional[str]
    level: int
    usage_count: int
    children: list["TagTreeNodeResponse"]

    @classmethod
    def from_domain(cls, node: TagTreeNode) -> "TagTreeNodeResponse":
        """Convert domain TagTreeNode to response model.

        Args:
            node: Domain tag tree node

        Returns:
            API response model with children recursively converted
        """
        return cls(
            id=str(node.tag.id),
            name=node.tag.name,
            slug=node.tag.slug.root,
            label=node.tag.label,
            path=node.tag.path,
            level=node.tag.level,
            usage_count=node.tag.usage_count,
            children=[cls.from_domain(child) for child in node.children],
        )


class GetTagTreeResponse(BaseModel):
    """Get tag tree response."""

    roots: list[TagTreeNodeResponse]
    total_tags: int


class GetTagTreeUseCase:
    """Use case for the nested tag tree.

    Children are sorted by name at every level.
    """

    def __init__(self, taxonomy_service: TaxonomyService) -> None:
        """Initialize get tag tree use case.

        Args:
            taxonomy_service: Taxonomy domain service
        """
        self.taxonomy_service = taxonomy_service

    async def execute(self, parent_id: Optional[UUID] = None) -> GetTagTreeResponse:
        """Execute get tag tree flow.

        Args:
            parent_id: Subtree root, None for the whole forest

        Returns:
            Tree roots and the number of tags in the tree
        """
        roots = await self.taxonomy_service.get_nested_tree(
            TagId(parent_id) if parent_id else None
        )

        def count_nodes(node: TagTreeNode) -> int:
            return 1 + sum(count_nodes(child) for child in node.children)

        return GetTagTreeResponse(
            roots=[TagTreeNodeResponse.from_domain(root) for root in roots],
            total_tags=sum(count_nodes(root) for root in roots),
        )
