"""FastAPI application exposing the search engine over HTTP."""

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
from collections import OrderedDict
from pathlib import Path
from typing import Any, Dict, List, Tuple

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from thesisfinder.config import AppConfig
from thesisfinder.errors import InvalidCorpus
from thesisfinder.index.corpus import CorpusStore
from thesisfinder.index.search import Searcher
from thesisfinder.ingestion.json_loader import load_records
from thesisfinder.models import DocumentRecord, FieldScope, HighlightedText, SearchOutcome
from thesisfinder.session import SearchSession
from thesisfinder.utils.files import FileSignature, corpus_signature

LOGGER = logging.getLogger(__name__)

app = FastAPI(title="ThesisFinder API", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

_CONFIG: AppConfig | None = None
# resolved path -> (signature, store), least recently used first
_STORES: "OrderedDict[str, Tuple[Tuple[FileSignature, ...], CorpusStore]]" = OrderedDict()


class SearchPayload(BaseModel):
    query: str
    folder: str = "all"
    year: str = "all"
    scope: FieldScope = FieldScope.ALL
    limit: int | None = None
    corpus: Path | None = None


def configure(config: AppConfig) -> None:
    """Install the configuration used by every endpoint and drop cached corpora."""
    global _CONFIG
    _CONFIG = config
    _STORES.clear()


def _config() -> AppConfig:
    return _CONFIG if _CONFIG is not None else AppConfig()


def _resolve_corpus_path(corpus: Path | None) -> Path:
    config = AppConfig(corpus_path=corpus if corpus is not None else _config().corpus_path)
    return config.resolve_corpus_path(Path.cwd())


def _get_store(corpus: Path | None) -> CorpusStore:
    resolved = _resolve_corpus_path(corpus)
    if not resolved.exists():
        raise HTTPException(status_code=404, detail=f"Corpus not found at {resolved}")

    key = str(resolved)
    signature = corpus_signature([resolved])
    cached = _STORES.get(key)
    if cached is not None and cached[0] == signature:
        _STORES.move_to_end(key)
        return cached[1]

    try:
        store = CorpusStore.load(load_records([resolved]))
    except InvalidCorpus as exc:
        LOGGER.error("Rejected corpus %s: %s", resolved, exc)
        raise HTTPException(status_code=422, detail=f"Invalid corpus: {exc}") from exc

    _STORES[key] = (signature, store)
    _STORES.move_to_end(key)
    while len(_STORES) > _config().store_cache_size:
        evicted, _ = _STORES.popitem(last=False)
        LOGGER.debug("Evicted cached corpus %s", evicted)
    return store


async def _load_store(corpus: Path | None) -> CorpusStore:
    """Resolve the store off the event loop; loading reads and parses files."""
    return await asyncio.to_thread(_get_store, corpus)


def _serialize_spans(spans: HighlightedText) -> List[Dict[str, Any]]:
    return [{"text": span.text, "is_match": span.is_match} for span in spans]


def _serialize_record(record: DocumentRecord) -> Dict[str, Any]:
    return {
        "id": record.id,
        "title": record.title,
        "abstract": record.abstract,
        "filename": record.filename,
        "folder": record.folder,
        "year_range": record.year_range,
        "source": record.source,
        "word_count": record.word_count,
    }


def _serialize_outcome(outcome: SearchOutcome) -> Dict[str, Any]:
    return {
        "is_searching": outcome.is_searching,
        "query": outcome.query.raw_text,
        "summary": outcome.summary(),
        "results": [
            {
                "record": _serialize_record(result.record),
                "score": result.score,
                "tier": result.tier.value,
                "matched_fields": sorted(field.value for field in result.match.matched_fields),
                "title_spans": _serialize_spans(result.title_spans),
                "abstract_spans": _serialize_spans(result.abstract_spans),
            }
            for result in outcome.results
        ],
    }


@app.on_event("startup")
async def startup_event() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")


@app.post("/search")
async def search_documents(payload: SearchPayload) -> Dict[str, Any]:
    config = _config()
    limit = config.clamp_limit(payload.limit if payload.limit is not None else config.page_limit)

    store = await _load_store(payload.corpus)
    searcher = Searcher(store)
    outcome = searcher.search_text(
        payload.query,
        limit=limit,
        folder=payload.folder,
        year=payload.year,
        scope=payload.scope,
    )
    return _serialize_outcome(outcome)


@app.get("/facets")
async def list_facets(corpus: Path | None = None) -> Dict[str, List[str]]:
    facets = (await _load_store(corpus)).facets()
    return {"folders": facets.folder_choices(), "years": facets.year_choices()}


@app.get("/documents")
async def list_documents(corpus: Path | None = None) -> Dict[str, Any]:
    """List every record in the corpus."""
    store = await _load_store(corpus)
    return {
        "documents": [_serialize_record(record) for record in store.all()],
        "stats": store.stats(),
    }


async def _pump(websocket: WebSocket, outbox: "asyncio.Queue[Dict[str, Any]]") -> None:
    while True:
        message = await outbox.get()
        await websocket.send_json(message)


@app.websocket("/ws/search")
async def search_socket(
    websocket: WebSocket, corpus: Path | None = None, limit: int | None = None
) -> None:
    """Live search: push one settled outcome per burst of input messages."""
    await websocket.accept()
    try:
        store = await _load_store(corpus)
    except HTTPException as exc:
        await websocket.close(code=1008, reason=str(exc.detail))
        return

    config = _config()
    outbox: asyncio.Queue[Dict[str, Any]] = asyncio.Queue()
    session = SearchSession(
        Searcher(store),
        lambda outcome: outbox.put_nowait(_serialize_outcome(outcome)),
        limit=config.clamp_limit(limit if limit is not None else config.header_limit),
        debounce_seconds=config.debounce_seconds,
    )
    sender = asyncio.create_task(_pump(websocket, outbox))

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                message = json.loads(raw)
            except json.JSONDecodeError:
                outbox.put_nowait({"error": "Message is not valid JSON"})
                continue
            if not isinstance(message, dict):
                outbox.put_nowait({"error": "Message must be a JSON object"})
                continue

            kind = message.get("type")
            if kind == "search":
                session.on_search_change(str(message.get("text", "")))
            elif kind == "filter":
                value = message.get("value")
                try:
                    session.on_filter_change(
                        str(message.get("kind")), None if value is None else str(value)
                    )
                except ValueError as exc:
                    outbox.put_nowait({"error": str(exc)})
            else:
                outbox.put_nowait({"error": f"Unknown message type {kind!r}"})
    except WebSocketDisconnect:
        LOGGER.debug("Search socket closed")
    finally:
        session.close()
        sender.cancel()
        try:
            with contextlib.suppress(asyncio.CancelledError):
                await sender
        except Exception:
            LOGGER.debug("Search socket sender failed", exc_info=True)
