"""Decode JSON corpus files into document records."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, List

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from thesisfinder.errors import InvalidCorpus
from thesisfinder.models import DocumentRecord
from thesisfinder.utils.files import iter_json_paths

LOGGER = logging.getLogger(__name__)


class RecordPayload(BaseModel):
    """Wire shape of one corpus entry (camelCase keys, snake_case also accepted)."""

    model_config = ConfigDict(populate_by_name=True)

    id: int | str
    title: str
    abstract: str
    filename: str
    folder: str | None = None
    year_range: str | None = Field(default=None, alias="yearRange")
    source: str = ""
    word_count: int = Field(default=0, ge=0, alias="wordCount")

    def to_record(self) -> DocumentRecord:
        return DocumentRecord(
            id=self.id,
            title=self.title,
            abstract=self.abstract,
            filename=self.filename,
            folder=self.folder,
            year_range=self.year_range,
            source=self.source,
            word_count=self.word_count,
        )


def _entries(document: Any, path: Path) -> List[Any]:
    if isinstance(document, dict) and "records" in document:
        document = document["records"]
    if not isinstance(document, list):
        raise InvalidCorpus(f"{path}: expected a list of records")
    return document


def read_records(path: Path) -> List[DocumentRecord]:
    """Parse a single JSON file."""
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise InvalidCorpus(f"{path}: {exc}") from exc

    records: List[DocumentRecord] = []
    for index, entry in enumerate(_entries(document, path)):
        try:
            payload = RecordPayload.model_validate(entry)
        except ValidationError as exc:
            raise InvalidCorpus(f"{path}: record {index} is malformed: {exc}") from exc
        records.append(payload.to_record())
    return records


def load_records(paths: Iterable[Path]) -> List[DocumentRecord]:
    """Read every JSON file under ``paths`` in a stable order."""
    records: List[DocumentRecord] = []
    for path in iter_json_paths(paths):
        batch = read_records(path)
        LOGGER.debug("Read %d records from %s", len(batch), path)
        records.extend(batch)
    return records
