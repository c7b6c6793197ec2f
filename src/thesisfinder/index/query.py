"""Turn raw user input into a canonical :class:`Query`."""

from __future__ import annotations

from thesisfinder.models import ALL, FieldScope, Query


def _filter_value(value: str | None) -> str:
    if value is None or not value.strip():
        return ALL
    return value


def normalize(
    raw_text: str,
    folder_filter: str | None = ALL,
    year_filter: str | None = ALL,
    field_scope: FieldScope | str = FieldScope.ALL,
) -> Query:
    """Build a query; whitespace-only text yields the "no search" query.

    Filter values are not checked against the corpus facets. A value that no record
    carries is legal and simply matches nothing.
    """
    return Query(
        raw_text=raw_text,
        normalized_text=raw_text.strip().lower(),
        folder_filter=_filter_value(folder_filter),
        year_filter=_filter_value(year_filter),
        field_scope=FieldScope(field_scope),
    )
