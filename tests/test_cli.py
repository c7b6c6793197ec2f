"""Tests for CLI commands."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from thesisfinder.cli import _setup_logging, app


runner = CliRunner()


@pytest.fixture
def corpus(tmp_path: Path) -> Path:
    path = tmp_path / "corpus.json"
    path.write_text(
        json.dumps(
            [
                {
                    "id": 1,
                    "title": "AI in Education",
                    "abstract": "uses AI",
                    "filename": "edu.pdf",
                    "folder": "CS",
                    "yearRange": "2020-2021",
                    "wordCount": 100,
                },
                {
                    "id": 2,
                    "title": "Database Systems",
                    "abstract": "AI is mentioned",
                    "filename": "db.pdf",
                    "folder": "CS",
                    "yearRange": "2019",
                    "wordCount": 40,
                },
                {
                    "id": 3,
                    "title": "Power Grids",
                    "abstract": "energy",
                    "filename": "grid.pdf",
                    "folder": "unknown",
                    "yearRange": "unknown",
                },
            ]
        ),
        encoding="utf-8",
    )
    return path


class TestSetupLogging:
    """Tests for _setup_logging helper."""

    def test_setup_logging_verbose(self) -> None:
        """Verbose mode sets DEBUG level."""
        with patch("thesisfinder.cli.logging.basicConfig") as mock_config:
            _setup_logging(verbose=True)
            mock_config.assert_called_once()
            assert mock_config.call_args[1]["level"] == logging.DEBUG

    def test_setup_logging_normal(self) -> None:
        """Normal mode sets INFO level."""
        with patch("thesisfinder.cli.logging.basicConfig") as mock_config:
            _setup_logging(verbose=False)
            mock_config.assert_called_once()
            assert mock_config.call_args[1]["level"] == logging.INFO


class TestSearchCommand:
    """Tests for the search command."""

    def test_search_corpus_not_found(self, tmp_path: Path) -> None:
        """Fails when the corpus file doesn't exist."""
        result = runner.invoke(app, ["search", "ai", "--corpus", str(tmp_path / "missing.json")])
        assert result.exit_code != 0

    def test_search_invalid_corpus(self, tmp_path: Path) -> None:
        """Duplicate ids are rejected."""
        path = tmp_path / "dupes.json"
        entry = {"id": 1, "title": "t", "abstract": "a", "filename": "f.pdf"}
        path.write_text(json.dumps([entry, entry]), encoding="utf-8")

        result = runner.invoke(app, ["search", "t", "--corpus", str(path)])
        assert result.exit_code != 0

    def test_search_with_results(self, corpus: Path) -> None:
        result = runner.invoke(app, ["search", "AI", "--corpus", str(corpus)])

        assert result.exit_code == 0
        assert "2 results found" in result.stdout
        assert "high" in result.stdout
        assert "medium" in result.stdout

    def test_search_no_results(self, corpus: Path) -> None:
        result = runner.invoke(app, ["search", "AI", "--folder", "EE", "--corpus", str(corpus)])

        assert result.exit_code == 0
        assert "No matches found" in result.stdout

    def test_search_blank_query(self, corpus: Path) -> None:
        result = runner.invoke(app, ["search", "   ", "--corpus", str(corpus)])

        assert result.exit_code == 0
        assert "Enter some text" in result.stdout

    def test_search_scope_and_limit(self, corpus: Path) -> None:
        result = runner.invoke(
            app, ["search", "AI", "--scope", "abstract", "--limit", "1", "--corpus", str(corpus)]
        )

        assert result.exit_code == 0
        assert "1 result found" in result.stdout

    def test_search_verbose(self, corpus: Path) -> None:
        result = runner.invoke(app, ["search", "AI", "--corpus", str(corpus), "-v"])
        assert result.exit_code == 0


class TestFacetsCommand:
    """Tests for the facets command."""

    def test_facets(self, corpus: Path) -> None:
        result = runner.invoke(app, ["facets", "--corpus", str(corpus)])

        assert result.exit_code == 0
        assert "all, CS" in result.stdout
        assert "all, 2019, 2020-2021" in result.stdout
        assert "unknown" not in result.stdout


class TestDocumentsCommand:
    """Tests for the documents command."""

    def test_documents(self, corpus: Path) -> None:
        result = runner.invoke(app, ["documents", "--corpus", str(corpus)])

        assert result.exit_code == 0
        assert "Documents: 3, words: 140" in result.stdout


class TestWebCommand:
    """Tests for the web command."""

    def test_web_starts_server(self, corpus: Path) -> None:
        """Starts uvicorn server with correct parameters."""
        with patch("uvicorn.run") as mock_uvicorn_run:
            result = runner.invoke(
                app, ["web", "--host", "0.0.0.0", "--port", "9000", "--corpus", str(corpus)]
            )
            assert result.exit_code == 0
            mock_uvicorn_run.assert_called_once()
            call_kwargs = mock_uvicorn_run.call_args[1]
            assert call_kwargs["host"] == "0.0.0.0"
            assert call_kwargs["port"] == 9000

    def test_web_warns_missing_corpus(self, tmp_path: Path) -> None:
        """Shows warning when the corpus doesn't exist."""
        with patch("uvicorn.run"):
            result = runner.invoke(app, ["web", "--corpus", str(tmp_path / "missing.json")])
            assert result.exit_code == 0
            assert "corpus not found" in result.stdout.lower()
