"""Utility helpers for working with corpus files."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator, Tuple

FileSignature = Tuple[str, int, int]


def iter_json_paths(inputs: Iterable[Path]) -> Iterator[Path]:
    """Yield JSON paths from input paths, descending into directories."""
    for item in inputs:
        if item.is_dir():
            yield from iter_json_paths(sorted(child for child in item.rglob("*.json")))
        elif item.is_file() and item.suffix.lower() == ".json":
            yield item


def corpus_signature(inputs: Iterable[Path]) -> Tuple[FileSignature, ...]:
    """Path, modification time and size of every corpus file.

    Only ``stat`` is called, so checking a large corpus for changes stays cheap.
    """
    signature = []
    for path in iter_json_paths(inputs):
        stat = path.stat()
        signature.append((str(path), stat.st_mtime_ns, stat.st_size))
    return tuple(signature)
