"""Debounced search session driven by UI input events.

A session moves between three states:

* ``IDLE``: no query text; nothing is shown.
* ``PENDING``: input changed and the debounce timer is running.
* ``SETTLED``: the latest input has been searched and its outcome emitted.

Every input change bumps a generation counter and cancels the pending pass. A pass
that finishes after a newer input arrived drops its outcome, so the listener only
ever sees results for the most recent input.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Callable, Optional

from thesisfinder.index.query import normalize
from thesisfinder.index.search import Searcher
from thesisfinder.models import ALL, FieldScope, Query, SearchOutcome

LOGGER = logging.getLogger(__name__)

Listener = Callable[[SearchOutcome], None]

FILTER_KINDS = ("folder", "year", "scope")


class SessionState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    SETTLED = "settled"


class SearchSession:
    """Owns the latest input and delivers settled outcomes to ``listener``.

    Must be driven from inside a running asyncio event loop.
    """

    def __init__(
        self,
        searcher: Searcher,
        listener: Listener,
        *,
        limit: int,
        debounce_seconds: float = 0.3,
    ) -> None:
        self.searcher = searcher
        self.listener = listener
        self.limit = limit
        self.debounce_seconds = debounce_seconds
        self._text = ""
        self._folder = ALL
        self._year = ALL
        self._scope = FieldScope.ALL
        self._state = SessionState.IDLE
        self._generation = 0
        self._pending: Optional[asyncio.Task[None]] = None

    @property
    def state(self) -> SessionState:
        return self._state

    def current_query(self) -> Query:
        return normalize(self._text, self._folder, self._year, self._scope)

    def on_search_change(self, text: str) -> None:
        self._text = text
        if not text.strip():
            self._clear()
            return
        self._schedule()

    def on_filter_change(self, kind: str, value: str | None) -> None:
        if kind == "folder":
            self._folder = value or ALL
        elif kind == "year":
            self._year = value or ALL
        elif kind == "scope":
            self._scope = FieldScope(value or FieldScope.ALL)
        else:
            raise ValueError(f"Unknown filter kind {kind!r}, expected one of {FILTER_KINDS}")

        if self._text.strip():
            self._schedule()

    async def wait_settled(self) -> None:
        """Wait for the pending pass, if any, to finish or be superseded."""
        while self._pending is not None and not self._pending.done():
            task = self._pending
            try:
                await asyncio.shield(task)
            except asyncio.CancelledError:
                if not task.cancelled():
                    raise

    def close(self) -> None:
        self._cancel_pending()

    def _clear(self) -> None:
        self._generation += 1
        self._cancel_pending()
        self._state = SessionState.IDLE
        self.listener(SearchOutcome(is_searching=False, query=self.current_query()))

    def _schedule(self) -> None:
        self._generation += 1
        self._cancel_pending()
        self._state = SessionState.PENDING
        loop = asyncio.get_running_loop()
        self._pending = loop.create_task(self._settle(self._generation, self.current_query()))

    def _cancel_pending(self) -> None:
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None

    async def _settle(self, generation: int, query: Query) -> None:
        await asyncio.sleep(self.debounce_seconds)
        try:
            outcome = await asyncio.to_thread(self.searcher.search, query, limit=self.limit)
            if generation != self._generation:
                LOGGER.debug("Discarding stale results for %r", query.raw_text)
                return
            self._state = SessionState.SETTLED
            self.listener(outcome)
        except Exception:
            LOGGER.exception("Search pass for %r failed", query.raw_text)
