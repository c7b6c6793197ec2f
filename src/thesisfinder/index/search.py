"""Ranking and the search interface shared by every call site."""

from __future__ import annotations

import logging
import time
from typing import List

from thesisfinder.index.corpus import CorpusStore
from thesisfinder.index.query import normalize
from thesisfinder.index.scoring import score
from thesisfinder.models import FieldScope, Query, ScoredMatch, SearchOutcome, SearchResult
from thesisfinder.utils.text import highlight

LOGGER = logging.getLogger(__name__)


def rank(corpus: CorpusStore, query: Query, limit: int) -> List[ScoredMatch]:
    """Score every record, keep matches, and return the best ``limit`` of them.

    Equal scores keep corpus load order. A "no search" query returns an empty list
    without scoring anything.
    """
    if limit < 0:
        raise ValueError(f"limit must be non-negative, got {limit}")
    if query.is_empty:
        return []

    matches: List[ScoredMatch] = []
    for record in corpus.all():
        found = score(record, query)
        if found is None:
            continue
        matches.append(ScoredMatch(record, found.score, found.matched_fields))

    # list.sort is stable, so ties stay in load order.
    matches.sort(key=lambda match: -match.score)
    return matches[:limit]


class Searcher:
    """High-level API: rank a query and highlight the returned window."""

    def __init__(self, store: CorpusStore) -> None:
        self.store = store

    def search(self, query: Query, *, limit: int) -> SearchOutcome:
        if query.is_empty:
            return SearchOutcome(is_searching=False, query=query)

        started = time.perf_counter()
        ranked = rank(self.store, query, limit)
        results = [
            SearchResult(
                match=match,
                title_spans=highlight(match.record.title, query.normalized_text),
                abstract_spans=highlight(match.record.abstract, query.normalized_text),
            )
            for match in ranked
        ]
        LOGGER.debug(
            "Query %r matched %d records in %.2f ms",
            query.normalized_text,
            len(results),
            (time.perf_counter() - started) * 1000,
        )
        return SearchOutcome(is_searching=True, query=query, results=results)

    def search_text(
        self,
        text: str,
        *,
        limit: int,
        folder: str | None = None,
        year: str | None = None,
        scope: FieldScope | str = FieldScope.ALL,
    ) -> SearchOutcome:
        """Normalize raw input and search in one call."""
        return self.search(normalize(text, folder, year, scope), limit=limit)
