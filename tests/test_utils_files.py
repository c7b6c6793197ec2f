"""Tests for file utility functions."""

from __future__ import annotations

import os
from pathlib import Path

from thesisfinder.utils.files import corpus_signature, iter_json_paths


class TestIterJsonPaths:
    """Test iter_json_paths function."""

    def test_single_file(self, tmp_path: Path) -> None:
        """Should yield a single JSON file."""
        corpus = tmp_path / "corpus.json"
        corpus.write_text("[]")

        assert list(iter_json_paths([corpus])) == [corpus]

    def test_directory_sorted(self, tmp_path: Path) -> None:
        """Should find JSON files in a stable order."""
        (tmp_path / "b.json").write_text("[]")
        (tmp_path / "a.json").write_text("[]")
        (tmp_path / "notes.txt").write_text("text")

        names = [path.name for path in iter_json_paths([tmp_path])]

        assert names == ["a.json", "b.json"]

    def test_nested_directories(self, tmp_path: Path) -> None:
        subdir = tmp_path / "2019"
        subdir.mkdir()
        (tmp_path / "root.json").write_text("[]")
        (subdir / "nested.json").write_text("[]")

        names = {path.name for path in iter_json_paths([tmp_path])}

        assert names == {"root.json", "nested.json"}

    def test_skips_other_files(self, tmp_path: Path) -> None:
        other = tmp_path / "thesis.pdf"
        other.write_text("dummy")

        assert list(iter_json_paths([other])) == []

    def test_missing_path(self, tmp_path: Path) -> None:
        assert list(iter_json_paths([tmp_path / "missing.json"])) == []


class TestCorpusSignature:
    """Test corpus_signature function."""

    def test_stable(self, tmp_path: Path) -> None:
        corpus = tmp_path / "corpus.json"
        corpus.write_text('[{"id": 1}]')

        assert corpus_signature([corpus]) == corpus_signature([corpus])
        assert corpus_signature([corpus])[0][0] == str(corpus)

    def test_changes_with_size(self, tmp_path: Path) -> None:
        corpus = tmp_path / "corpus.json"
        corpus.write_text("[]")
        before = corpus_signature([corpus])

        corpus.write_text('[{"id": 1}]')

        assert corpus_signature([corpus]) != before

    def test_changes_with_mtime(self, tmp_path: Path) -> None:
        corpus = tmp_path / "corpus.json"
        corpus.write_text("[1]")
        before = corpus_signature([corpus])

        stat = corpus.stat()
        os.utime(corpus, ns=(stat.st_atime_ns, stat.st_mtime_ns + 1_000_000_000))

        assert corpus_signature([corpus]) != before

    def test_directory_lists_every_file(self, tmp_path: Path) -> None:
        (tmp_path / "a.json").write_text("[]")
        (tmp_path / "b.json").write_text("[]")

        names = [Path(entry[0]).name for entry in corpus_signature([tmp_path])]

        assert names == ["a.json", "b.json"]
