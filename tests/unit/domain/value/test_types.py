"""Unit tests for slug and name helpers."""

import pytest
from pydantic import ValidationError

from taxon.domain.value import Slug, fold, slugify


class TestSlugify:
    """Tests for slugify."""

    def test_lowercases_and_hyphenates(self):
        assert slugify("Machine Learning") == "machine-learning"

    def test_strips_accents(self):
        assert slugify("Café Crème") == "cafe-creme"

    def test_drops_punctuation(self):
        assert slugify("C++ & Rust!") == "c-rust"

    def test_collapses_hyphens_and_trims(self):
        assert slugify("  --Node -- JS--  ") == "node-js"

    def test_truncates_without_trailing_hyphen(self):
        assert slugify("abc def", max_length=4) == "abc"

    def test_nothing_slug_safe_gives_empty(self):
        assert slugify("!!!") == ""


class TestSlug:
    """Tests for the Slug value object."""

    def test_accepts_valid_slug(self):
        assert Slug("react-native").root == "react-native"

    @pytest.mark.parametrize("value", ["React", "-react", "react-", "re--act", ""])
    def test_rejects_invalid_slug(self, value):
        with pytest.raises(ValidationError):
            Slug(value)


class TestFold:
    """Tests for fold."""

    def test_trims_and_lowercases(self):
        assert fold("  ReactJS ") == "reactjs"

    def test_keeps_sharp_s(self):
        """Lowercasing does not expand characters the way casefolding does."""
        assert fold("Straße") == "straße"
