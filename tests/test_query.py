"""Tests for query normalization."""

from __future__ import annotations

import pytest

from thesisfinder.index.query import normalize
from thesisfinder.models import FieldScope


class TestNormalize:
    """Test normalize function."""

    def test_trims_and_lowercases(self) -> None:
        query = normalize("  Machine Learning ")

        assert query.normalized_text == "machine learning"
        assert query.raw_text == "  Machine Learning "

    @pytest.mark.parametrize("text", ["", "   ", "\t\n"])
    def test_blank_is_no_search(self, text: str) -> None:
        assert normalize(text).is_empty

    def test_default_filters(self) -> None:
        query = normalize("ai")

        assert query.folder_filter == "all"
        assert query.year_filter == "all"
        assert query.field_scope is FieldScope.ALL

    def test_missing_filters_mean_all(self) -> None:
        query = normalize("ai", None, "  ")

        assert query.folder_filter == "all"
        assert query.year_filter == "all"

    def test_scope_from_string(self) -> None:
        assert normalize("ai", field_scope="abstract").field_scope is FieldScope.ABSTRACT

    def test_invalid_scope(self) -> None:
        with pytest.raises(ValueError):
            normalize("ai", field_scope="filename")

    def test_unknown_filter_values_kept(self) -> None:
        """Filters are not validated against the corpus."""
        query = normalize("ai", "No Such Folder", "1850")

        assert query.folder_filter == "No Such Folder"
        assert query.year_filter == "1850"
