"""Application configuration defaults."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path


def _get_default_corpus_path() -> Path:
    """Get the default corpus location based on execution context."""
    user_corpus = Path.home() / "Documents" / "ThesisFinder" / "corpus.json"

    # Bundled apps never look at the working directory
    if getattr(sys, "frozen", False):
        return user_corpus

    local_corpus = Path("data/corpus.json")
    if local_corpus.exists():
        return local_corpus

    return user_corpus


@dataclass(slots=True)
class AppConfig:
    corpus_path: Path | None = None
    debounce_seconds: float = 0.3
    header_limit: int = 10
    page_limit: int = 20
    max_limit: int = 50
    store_cache_size: int = 8

    def __post_init__(self) -> None:
        if self.corpus_path is None:
            self.corpus_path = _get_default_corpus_path()

    def resolve_corpus_path(self, base_dir: Path | None = None) -> Path:
        if self.corpus_path is None:
            self.corpus_path = _get_default_corpus_path()
        if Path(self.corpus_path).is_absolute() or base_dir is None:
            return Path(self.corpus_path)
        return base_dir / self.corpus_path

    def clamp_limit(self, limit: int) -> int:
        return max(1, min(limit, self.max_limit))
