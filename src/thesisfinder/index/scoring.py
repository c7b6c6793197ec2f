"""Substring relevance scoring for a single record."""

from __future__ import annotations

from typing import NamedTuple, Optional

from thesisfinder.index.corpus import facet_value
from thesisfinder.models import ALL, DocumentRecord, FieldScope, MatchedField, Query
from thesisfinder.utils.text import literal_pattern

TITLE_WEIGHT = 3
ABSTRACT_WEIGHT = 2
FILENAME_WEIGHT = 1


class Match(NamedTuple):
    score: int
    matched_fields: frozenset[MatchedField]


def _passes_facet(value: str | None, wanted: str) -> bool:
    return wanted == ALL or facet_value(value) == wanted


def score(record: DocumentRecord, query: Query) -> Optional[Match]:
    """Score ``record`` against ``query``; ``None`` means the record does not match.

    Facet filters are hard gates. With an empty query every record passing the
    gates is a candidate with score 0. Filename only counts when the scope is
    :attr:`FieldScope.ALL`.
    """
    if not _passes_facet(record.folder, query.folder_filter):
        return None
    if not _passes_facet(record.year_range, query.year_filter):
        return None

    if query.is_empty:
        return Match(0, frozenset())

    pattern = literal_pattern(query.normalized_text)

    scope = query.field_scope
    total = 0
    matched: set[MatchedField] = set()

    if scope in (FieldScope.ALL, FieldScope.TITLE) and pattern.search(record.title):
        total += TITLE_WEIGHT
        matched.add(MatchedField.TITLE)
    if scope in (FieldScope.ALL, FieldScope.ABSTRACT) and pattern.search(record.abstract):
        total += ABSTRACT_WEIGHT
        matched.add(MatchedField.ABSTRACT)
    if scope is FieldScope.ALL and pattern.search(record.filename):
        total += FILENAME_WEIGHT
        matched.add(MatchedField.FILENAME)

    if total == 0:
        return None
    return Match(total, frozenset(matched))
