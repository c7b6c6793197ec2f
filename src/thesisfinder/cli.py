"""Command line interface for ThesisFinder."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from thesisfinder.config import AppConfig
from thesisfinder.errors import InvalidCorpus
from thesisfinder.index.corpus import CorpusStore
from thesisfinder.index.search import Searcher
from thesisfinder.ingestion.json_loader import load_records
from thesisfinder.models import FieldScope, HighlightedText


console = Console()
app = typer.Typer(help="ThesisFinder - search a thesis corpus by title, abstract and filename")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _load_store(corpus: Path | None) -> CorpusStore:
    config = AppConfig(corpus_path=corpus if corpus is not None else AppConfig().corpus_path)
    resolved = config.resolve_corpus_path(Path.cwd())
    if not resolved.exists():
        raise typer.BadParameter(f"Corpus not found: {resolved}")
    try:
        return CorpusStore.load(load_records([resolved]))
    except InvalidCorpus as exc:
        raise typer.BadParameter(f"Invalid corpus: {exc}") from exc


def _render_spans(spans: HighlightedText) -> Text:
    rendered = Text()
    for span in spans:
        rendered.append(span.text, style="bold yellow" if span.is_match else None)
    return rendered


@app.command()
def search(
    query: str = typer.Argument(..., help="Query text"),
    corpus: Path = typer.Option(None, "--corpus", help="Corpus JSON file or directory"),
    folder: str = typer.Option("all", help="Only match records in this folder"),
    year: str = typer.Option("all", help="Only match records with this year range"),
    scope: FieldScope = typer.Option(FieldScope.ALL, help="Fields to search"),
    limit: int = typer.Option(AppConfig().page_limit, help="Number of results to display"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Rank the corpus against a query."""
    _setup_logging(verbose)
    store = _load_store(corpus)
    searcher = Searcher(store)

    outcome = searcher.search_text(
        query, limit=AppConfig().clamp_limit(limit), folder=folder, year=year, scope=scope
    )
    if not outcome.is_searching:
        console.print("[yellow]Enter some text to search.[/yellow]")
        return
    if not outcome.results:
        console.print("[yellow]No matches found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Score")
    table.add_column("Relevance")
    table.add_column("Title")
    table.add_column("Folder")
    table.add_column("Year")
    table.add_column("Abstract")

    for result in outcome.results:
        record = result.record
        table.add_row(
            str(result.score),
            result.tier.value,
            _render_spans(result.title_spans),
            record.folder or "-",
            record.year_range or "-",
            _render_spans(result.abstract_spans)[:180],
        )

    console.print(table)
    console.print(outcome.summary())


@app.command()
def facets(
    corpus: Path = typer.Option(None, "--corpus", help="Corpus JSON file or directory"),
) -> None:
    """List the folder and year-range filter values."""
    store = _load_store(corpus)
    values = store.facets()
    console.print(f"[bold]Folders:[/bold] {', '.join(values.folder_choices())}")
    console.print(f"[bold]Years:[/bold] {', '.join(values.year_choices())}")


@app.command()
def documents(
    corpus: Path = typer.Option(None, "--corpus", help="Corpus JSON file or directory"),
) -> None:
    """List every record in the corpus."""
    store = _load_store(corpus)

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("ID")
    table.add_column("Title")
    table.add_column("File")
    table.add_column("Words")
    for record in store.all():
        table.add_row(str(record.id), record.title, record.filename, str(record.word_count))

    console.print(table)
    stats = store.stats()
    console.print(
        f"Documents: {stats['document_count']}, words: {stats['total_word_count']}"
    )


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8000, help="Server port"),
    corpus: Path = typer.Option(None, "--corpus", help="Corpus JSON file or directory"),
) -> None:
    """Start the HTTP API."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - optional dependency
        raise typer.BadParameter(
            "uvicorn is not installed. Install the web extras with \"python -m pip install '.[web]'\""
        ) from exc

    from thesisfinder.web.app import app as web_app, configure

    config = AppConfig(corpus_path=corpus if corpus is not None else AppConfig().corpus_path)
    resolved = config.resolve_corpus_path(Path.cwd())
    if not resolved.exists():
        console.print("[yellow]Warning: corpus not found, searches will fail.[/yellow]")
    configure(config)

    console.print(f"Starting web interface on http://{host}:{port} (corpus: {resolved})")
    uvicorn.run(
        web_app,
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )
