"""Debounced tracker search with stale-while-revalidate results.

One controller backs one search surface (the suggestion box, a deep-linked
tracker view). It debounces raw input, dispatches eligible normalized
queries to a ``SearchLookup``, and keeps the last non-empty result set so
the surface does not blank out while the next query is being fetched.
"""

import asyncio
from dataclasses import dataclass, field

from loguru import logger

from ballot_tracker.lib.lookup.base import IDLE, LookupSnapshot, SearchLookup
from ballot_tracker.lib.tracker_search.debounce import CancellableTimer
from ballot_tracker.lib.tracker_search.query import (
    DEFAULT_MINIMUM_QUERY_LENGTH,
    is_eligible_query,
    normalize_query,
)
from ballot_tracker.schemas.tracking import TrackedBallot

DEFAULT_DEBOUNCE_DELAY = 0.25


@dataclass(frozen=True)
class SearchView:
    """What a surface renders: results, a loading flag, and the last error.

    ``results`` may still hold the previous query's ballots while
    ``is_loading`` is True.
    """

    results: list[TrackedBallot] = field(default_factory=list)
    is_loading: bool = True
    error: Exception | None = None


class DebouncedSearchController:
    """Owns the lifecycle of a tracker search.

    Args:
        lookup: Source of search results for normalized keys.
        minimum_query_length: Shortest normalized query that is searched
            and displayed.
        debounce_delay: Quiet period in seconds before a query is applied.
            ``0`` applies on the next loop tick.
        loop: Event loop for the debounce timer. Defaults to the running loop.
    """

    def __init__(
        self,
        lookup: SearchLookup,
        *,
        minimum_query_length: int = DEFAULT_MINIMUM_QUERY_LENGTH,
        debounce_delay: float = DEFAULT_DEBOUNCE_DELAY,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._lookup = lookup
        self.minimum_query_length = minimum_query_length
        self._query = ""
        # Last non-empty results, kept across queries for stale-while-revalidate
        self._latest_query = ""
        self._latest_results: list[TrackedBallot] = []
        self._timer = CancellableTimer(debounce_delay, self._apply_query, loop=loop)
        self._unsubscribe = lookup.subscribe(self._on_settled)

    @property
    def debounce_delay(self) -> float:
        return self._timer.delay

    @property
    def query(self) -> str:
        """The raw query currently applied (after debouncing)."""
        return self._query

    @property
    def normalized_query(self) -> str:
        return normalize_query(self._query)

    @property
    def is_valid_query(self) -> bool:
        return is_eligible_query(self.normalized_query, self.minimum_query_length)

    @property
    def latest_query(self) -> str:
        """The raw query whose results fill the stale-while-revalidate slot."""
        return self._latest_query

    @property
    def pending(self) -> bool:
        """Whether a debounced query is waiting to be applied."""
        return self._timer.pending

    def search(self, raw: str) -> None:
        """Schedule ``raw`` to become the query once input goes quiet.

        Calls made before the debounce delay elapses replace each other;
        only the last one is applied and dispatched.
        """
        self._timer.schedule(raw)

    set_query = search

    def clear(self) -> None:
        """Discard any pending query and reset to an empty query immediately."""
        discarded = self._timer.cancel()
        self._query = ""
        logger.debug("Search cleared (pending query discarded: {})", discarded)

    @property
    def results(self) -> list[TrackedBallot]:
        """Ballots to display for the current query.

        Empty when the query is too short. Otherwise the current query's
        results, or the last non-empty results while those are pending.
        A failed fetch for the current query yields no results.
        """
        if not self.is_valid_query:
            return []
        snapshot = self._current_snapshot()
        if snapshot.data is not None:
            return list(snapshot.data)
        if snapshot.error is not None and not snapshot.is_fetching:
            return []
        return list(self._latest_results)

    @property
    def is_loading(self) -> bool:
        """True until the current query has produced a defined result.

        An idle lookup (nothing requested yet) counts as loading.
        """
        snapshot = self._current_snapshot()
        return snapshot.is_idle or snapshot.is_loading

    @property
    def error(self) -> Exception | None:
        return self._current_snapshot().error

    def view(self) -> SearchView:
        """Return a consistent snapshot of results, loading flag and error."""
        return SearchView(results=self.results, is_loading=self.is_loading, error=self.error)

    def close(self) -> None:
        """Cancel the pending query and stop listening to the lookup."""
        self._timer.cancel()
        self._unsubscribe()

    async def __aenter__(self) -> "DebouncedSearchController":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.close()

    def _current_snapshot(self) -> LookupSnapshot:
        if not self.is_valid_query:
            return IDLE
        return self._lookup.peek(self.normalized_query)

    def _apply_query(self, raw: str) -> None:
        self._query = raw or ""
        if not self.is_valid_query:
            logger.debug("Query {!r} is below the minimum length; not searching", self._query)
            return
        key = self.normalized_query
        logger.debug("Dispatching search for {!r}", key)
        self._remember(self._query, self._lookup.lookup(key, True))

    def _on_settled(self, key: str, snapshot: LookupSnapshot) -> None:
        if not self.is_valid_query or key != self.normalized_query:
            logger.debug("Discarding results for superseded key {!r}", key)
            return
        self._remember(self._query, snapshot)

    def _remember(self, query: str, snapshot: LookupSnapshot) -> None:
        if snapshot.data:
            self._latest_query = query
            self._latest_results = list(snapshot.data)
