"""Text helpers for rendering search hits."""

from __future__ import annotations

import re
from functools import lru_cache
from typing import List, Pattern

from thesisfinder.models import HighlightedText, HighlightSpan


@lru_cache(maxsize=256)
def literal_pattern(query_normalized_text: str) -> Pattern[str]:
    """Case-insensitive pattern matching ``query_normalized_text`` literally.

    Scoring and highlighting both match through this pattern, so a field counted
    as a hit always has at least one highlighted span.
    """
    return re.compile(re.escape(query_normalized_text), re.IGNORECASE)


def highlight(text: str, query_normalized_text: str) -> HighlightedText:
    """Split ``text`` into matched and unmatched spans.

    Matching is case-insensitive and literal: the query is escaped, so characters
    such as ``.`` or ``(`` only ever match themselves. Occurrences are taken left to
    right without overlap, and joining the span texts gives back ``text`` unchanged.
    """
    if not query_normalized_text:
        return (HighlightSpan(text, False),)

    pattern = literal_pattern(query_normalized_text)
    spans: List[HighlightSpan] = []
    cursor = 0
    for found in pattern.finditer(text):
        start, end = found.span()
        if start > cursor:
            spans.append(HighlightSpan(text[cursor:start], False))
        spans.append(HighlightSpan(text[start:end], True))
        cursor = end

    if not spans:
        return (HighlightSpan(text, False),)
    if cursor < len(text):
        spans.append(HighlightSpan(text[cursor:], False))
    return tuple(spans)


def join_spans(spans: HighlightedText) -> str:
    """Concatenate span texts back into the original string."""
    return "".join(span.text for span in spans)
