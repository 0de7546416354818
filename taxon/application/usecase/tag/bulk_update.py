"""Bulk tag update use case."""

from enum import Enum
from typing import Optional
from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from taxon.domain.model import TagStyle
from taxon.domain.service import TaxonomyService
from taxon.domain.value import TagId

from .common import BulkResultResponse


class BulkAction(str, Enum):
    """Bulk operations on tags."""

    SET_PARENT = "set_parent"
    STYLE = "style"
    LOCK = "lock"
    UNLOCK = "unlock"
    DELETE = "delete"


class BulkUpdateRequest(BaseModel):
    """Bulk update request.

    ``parent_id`` is used by ``set_parent`` (null = move to root);
    ``color``, ``icon`` and ``featured`` by ``style``.
    """

    tag_ids: list[UUID] = Field(min_length=1)
    parent_id: Optional[UUID] = None
    color: Optional[str] = None
    icon: Optional[str] = None
    featured: Optional[bool] = None


class BulkUpdateUseCase:
    """Use case dispatching bulk tag operations."""

    def __init__(self, taxonomy_service: TaxonomyService) -> None:
        """Initialize bulk update use case.

        Args:
            taxonomy_service: Taxonomy domain service
        """
        self.taxonomy_service = taxonomy_service

    async def execute(
        self, action: BulkAction, request: BulkUpdateRequest
    ) -> BulkResultResponse:
        """Execute a bulk operation.

        Args:
            action: Operation to run
            request: Target tags and operation parameters

        Returns:
            Succeeded ids and per-item failures

        Raises:
            BulkLimitExceededError: If too many ids are given
        """
        tag_ids = [TagId(tag_id) for tag_id in request.tag_ids]

        with logfire.span(
            "bulk_update.execute", action=action.value, count=len(tag_ids)
        ):
            if action == BulkAction.SET_PARENT:
                parent_id = TagId(request.parent_id) if request.parent_id else None
                result = await self.taxonomy_service.bulk_set_parent(tag_ids, parent_id)
            elif action == BulkAction.STYLE:
                style = TagStyle.model_validate(
                    request.model_dump(
                        include={"color", "icon", "featured"} & request.model_fields_set
                    )
                )
                result = await self.taxonomy_service.bulk_update_style(tag_ids, style)
            elif action in (BulkAction.LOCK, BulkAction.UNLOCK):
                result = await self.taxonomy_service.bulk_lock(
                    tag_ids, action == BulkAction.LOCK
                )
            else:
                result = await self.taxonomy_service.bulk_delete(tag_ids)

            return BulkResultResponse.from_domain(result)
