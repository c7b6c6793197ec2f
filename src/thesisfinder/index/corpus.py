"""In-memory corpus store."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Tuple

from thesisfinder.errors import InvalidCorpus
from thesisfinder.models import DocumentRecord, FacetValueSet

LOGGER = logging.getLogger(__name__)

UNKNOWN = "unknown"


def facet_value(value: str | None) -> str | None:
    """Return the facet value, or ``None`` for absent/"unknown" values."""
    if value is None:
        return None
    stripped = value.strip()
    if not stripped or stripped.lower() == UNKNOWN:
        return None
    return value


class CorpusStore:
    """Read-only snapshot of document records plus their facet values."""

    def __init__(self, records: Tuple[DocumentRecord, ...], facets: FacetValueSet) -> None:
        self._records = records
        self._facets = facets
        self._by_id = {record.id: record for record in records}

    @classmethod
    def load(cls, records: Iterable[DocumentRecord]) -> "CorpusStore":
        """Validate ``records`` and build the store in a single pass."""
        snapshot = tuple(records)
        seen: set[Any] = set()
        folders: set[str] = set()
        years: set[str] = set()

        for position, record in enumerate(snapshot):
            if record.id in seen:
                raise InvalidCorpus(f"Duplicate record id {record.id!r} at position {position}")
            if record.word_count < 0:
                raise InvalidCorpus(
                    f"Record {record.id!r} has a negative word count ({record.word_count})"
                )
            seen.add(record.id)

            folder = facet_value(record.folder)
            if folder is not None:
                folders.add(folder)
            year = facet_value(record.year_range)
            if year is not None:
                years.add(year)

        facets = FacetValueSet(folders=frozenset(folders), years=frozenset(years))
        LOGGER.info(
            "Loaded corpus: %d records, %d folders, %d year ranges",
            len(snapshot),
            len(folders),
            len(years),
        )
        return cls(snapshot, facets)

    def facets(self) -> FacetValueSet:
        return self._facets

    def all(self) -> Tuple[DocumentRecord, ...]:
        """Records in load order."""
        return self._records

    def get(self, record_id: Any) -> DocumentRecord | None:
        return self._by_id.get(record_id)

    def stats(self) -> Dict[str, int]:
        return {
            "document_count": len(self._records),
            "total_word_count": sum(record.word_count for record in self._records),
        }

    def __len__(self) -> int:
        return len(self._records)
