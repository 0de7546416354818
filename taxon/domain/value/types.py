"""Domain value objects for the tag taxonomy.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and normalization logic.
"""

import re
import unicodedata
from enum import Enum

from pydantic import field_validator

from taxon.domain.value.common import RootValueObject

_SLUG_INVALID_CHARS = re.compile(r"[^a-z0-9\s-]")
_SLUG_WHITESPACE = re.compile(r"\s+")
_SLUG_HYPHENS = re.compile(r"-+")


class TagSortField(str, Enum):
    """Fields a tag listing can be ordered by."""

    NAME = "name"
    SLUG = "slug"
    USAGE_COUNT = "usage_count"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"
    SYNONYM_HITS = "synonym_hits"


class Slug(RootValueObject[str]):
    """URL-safe tag slug.

    Must be lowercase, alphanumeric with single hyphens, 1-200 characters.
    Examples: 'frontend', 'machine-learning', 'react-native'
    """

    @field_validator("root")
    @classmethod
    def validate_slug_format(cls, v: str) -> str:
        """Validate slug format."""
        if not re.match(r"^[a-z0-9]+(?:-[a-z0-9]+)*$", v):
            raise ValueError(
                "Slug must be lowercase alphanumeric with hyphens, "
                "no leading/trailing hyphens or consecutive hyphens"
            )
        if len(v) > 200:
            raise ValueError("Slug must be 1-200 characters")
        return v


def slugify(text: str, max_length: int = 200) -> str:
    """Turn free text into a slug string.

    Accents are stripped (``Café`` -> ``cafe``), anything outside
    ``[a-z0-9]`` is dropped, whitespace runs become single hyphens.

    Args:
        text: Source text, usually a tag name
        max_length: Maximum slug length

    Returns:
        Slug string, possibly empty if nothing slug-safe remains
    """
    decomposed = unicodedata.normalize("NFD", text)
    stripped = "".join(c for c in decomposed if not unicodedata.combining(c))
    slug = _SLUG_INVALID_CHARS.sub("", stripped.lower())
    slug = _SLUG_WHITESPACE.sub("-", slug)
    slug = _SLUG_HYPHENS.sub("-", slug).strip("-")
    return slug[:max_length].strip("-")


def fold(name: str) -> str:
    """Lowercase a trimmed tag name for comparisons and synonym storage."""
    return name.strip().lower()
