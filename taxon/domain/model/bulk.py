"""Outcome of bulk tag operations."""

from pydantic import Field

from taxon.domain.value import TagId
from taxon.domain.value.common import ValueObject


class BulkFailure(ValueObject):
    """An item a bulk operation refused, and why."""

    id: TagId
    reason: str


class BulkResult(ValueObject):
    """Succeeded ids plus per-item failures.

    Bulk operations never raise for an individual ineligible item; they
    report it here instead.
    """

    succeeded: list[TagId] = Field(default_factory=list)
    failed: list[BulkFailure] = Field(default_factory=list)

    @property
    def count(self) -> int:
        """Number of items actually affected."""
        return len(self.succeeded)


class CleanupResult(ValueObject):
    """Outcome of an orphan cleanup run."""

    deleted: int
    skipped: int
