"""Core ThesisFinder data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple


ALL = "all"


class FieldScope(str, Enum):
    """Which record fields a query is matched against."""

    ALL = "all"
    TITLE = "title"
    ABSTRACT = "abstract"


class MatchedField(str, Enum):
    TITLE = "title"
    ABSTRACT = "abstract"
    FILENAME = "filename"


class RelevanceTier(str, Enum):
    """Coarse display bucket derived from a numeric score."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @classmethod
    def from_score(cls, score: int) -> "RelevanceTier":
        if score >= 3:
            return cls.HIGH
        if score == 2:
            return cls.MEDIUM
        if score == 1:
            return cls.LOW
        raise ValueError(f"No relevance tier for score {score}")


@dataclass(frozen=True, slots=True)
class DocumentRecord:
    """A single thesis in the corpus."""

    id: str | int
    title: str
    abstract: str
    filename: str
    folder: str | None = None
    year_range: str | None = None
    source: str = ""
    word_count: int = 0


@dataclass(frozen=True, slots=True)
class FacetValueSet:
    """Distinct folder and year-range values present in the corpus."""

    folders: frozenset[str] = frozenset()
    years: frozenset[str] = frozenset()

    def folder_choices(self) -> List[str]:
        return [ALL, *sorted(self.folders)]

    def year_choices(self) -> List[str]:
        return [ALL, *sorted(self.years)]


@dataclass(frozen=True, slots=True)
class Query:
    """Canonical search request built by :func:`thesisfinder.index.query.normalize`."""

    raw_text: str
    normalized_text: str
    folder_filter: str = ALL
    year_filter: str = ALL
    field_scope: FieldScope = FieldScope.ALL

    @property
    def is_empty(self) -> bool:
        """An empty query means "no search", not a search with zero matches."""
        return not self.normalized_text


@dataclass(frozen=True, slots=True)
class ScoredMatch:
    record: DocumentRecord
    score: int
    matched_fields: frozenset[MatchedField] = frozenset()

    @property
    def tier(self) -> RelevanceTier:
        return RelevanceTier.from_score(self.score)


@dataclass(frozen=True, slots=True)
class HighlightSpan:
    text: str
    is_match: bool


HighlightedText = Tuple[HighlightSpan, ...]


@dataclass(frozen=True, slots=True)
class SearchResult:
    """Ranked match decorated with highlighted title and abstract."""

    match: ScoredMatch
    title_spans: HighlightedText
    abstract_spans: HighlightedText

    @property
    def record(self) -> DocumentRecord:
        return self.match.record

    @property
    def score(self) -> int:
        return self.match.score

    @property
    def tier(self) -> RelevanceTier:
        return self.match.tier


@dataclass(slots=True)
class SearchOutcome:
    """Payload delivered to UI collaborators whenever a search settles."""

    is_searching: bool
    query: Query
    results: List[SearchResult] = field(default_factory=list)

    def summary(self) -> str:
        if not self.is_searching:
            return ""
        count = len(self.results)
        noun = "result" if count == 1 else "results"
        return f'{count} {noun} found for "{self.query.raw_text.strip()}"'
