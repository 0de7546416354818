"""Strongly typed identifiers for taxonomy entities.

Every relationship in the taxonomy (parent links, follows, post
associations) is resolved by id lookup, never by embedded object
references.
"""

from typing import NewType
from uuid import UUID

TagId = NewType("TagId", UUID)
PostId = NewType("PostId", UUID)
UserId = NewType("UserId", UUID)
TagFollowId = NewType("TagFollowId", UUID)
