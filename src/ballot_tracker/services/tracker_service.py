"""Tracker service — the suggestion box and tracker result surfaces.

Each surface owns its own DebouncedSearchController over a shared lookup,
mirroring how a page shows a search box and, once a suggestion is picked
or a tracker link is opened, a result view for that tracker.
"""

import asyncio
from collections.abc import Callable

from loguru import logger

from ballot_tracker.core.config import Settings
from ballot_tracker.lib.lookup import BallotFetcher, BallotSearchClient, QueryCache, SearchLookup
from ballot_tracker.lib.tracker_search import (
    DEFAULT_DEBOUNCE_DELAY,
    DEFAULT_MINIMUM_QUERY_LENGTH,
    DebouncedSearchController,
    SearchView,
    find_ballot,
    resolve_tracker,
)
from ballot_tracker.schemas.tracking import DisplayState, TrackedBallot

DEFAULT_MAX_SUGGESTIONS = 5
_POLL_INTERVAL = 0.02


def build_client(settings: Settings, election_id: str | None = None) -> BallotSearchClient:
    """Create a verification API client for an election."""
    return BallotSearchClient(
        settings.api_base_url,
        election_id or settings.election_id,
        timeout=settings.lookup_timeout,
    )


def build_lookup(settings: Settings, fetcher: BallotFetcher) -> QueryCache:
    """Create the shared search cache with retry and staleness from settings."""
    return QueryCache(
        fetcher,
        stale_after=settings.lookup_stale_after,
        retry_attempts=settings.lookup_retry_attempts,
        retry_delay=settings.lookup_retry_delay,
        max_entries=settings.lookup_max_entries,
    )


async def _wait_while(condition: Callable[[], bool], timeout: float) -> bool:
    """Poll until ``condition`` is false or ``timeout`` elapses.

    Returns:
        True if the condition cleared before the timeout.
    """
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while condition():
        if loop.time() >= deadline:
            return False
        await asyncio.sleep(_POLL_INTERVAL)
    return True


class TrackerSuggestions:
    """Search-as-you-type suggestions for partial tracker codes."""

    def __init__(
        self,
        lookup: SearchLookup,
        *,
        max_suggestions: int = DEFAULT_MAX_SUGGESTIONS,
        minimum_query_length: int = DEFAULT_MINIMUM_QUERY_LENGTH,
        debounce_delay: float = DEFAULT_DEBOUNCE_DELAY,
    ) -> None:
        self._lookup = lookup
        self.max_suggestions = max_suggestions
        self.input_value = ""
        self.controller = DebouncedSearchController(
            lookup,
            minimum_query_length=minimum_query_length,
            debounce_delay=debounce_delay,
        )

    @classmethod
    def from_settings(cls, lookup: SearchLookup, settings: Settings) -> "TrackerSuggestions":
        return cls(
            lookup,
            max_suggestions=settings.search_max_suggestions,
            minimum_query_length=settings.search_minimum_query_length,
            debounce_delay=settings.search_debounce_seconds,
        )

    @property
    def suggestions(self) -> list[TrackedBallot]:
        return self.controller.results[: self.max_suggestions]

    @property
    def is_loading(self) -> bool:
        return self.controller.is_loading

    def on_input(self, value: str) -> None:
        """Record the raw input and schedule a debounced search for it."""
        self.input_value = value
        self.controller.search(value)

    def on_clear(self) -> None:
        self.input_value = ""
        self.controller.clear()

    def select(self, ballot: TrackedBallot) -> "TrackerResultView":
        """Open the result view for a picked suggestion."""
        logger.info("Selected tracker {}", ballot.tracker_words)
        return TrackerResultView(
            self._lookup,
            ballot.tracker_words,
            selected_ballot=ballot,
            minimum_query_length=self.controller.minimum_query_length,
        )

    async def wait_until_settled(self, timeout: float) -> SearchView:
        """Wait for the pending input to be searched, then return the view."""
        await _wait_while(lambda: self.controller.pending or self.controller.is_loading, timeout)
        return self.controller.view()

    def close(self) -> None:
        self.controller.close()

    async def __aenter__(self) -> "TrackerSuggestions":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.close()


class TrackerResultView:
    """Verification status for a single tracker code.

    When opened from a suggestion the ballot is already known. When opened
    from a tracker link only the code is known, so it is searched for
    without debouncing.
    """

    def __init__(
        self,
        lookup: SearchLookup,
        tracker: str,
        *,
        selected_ballot: TrackedBallot | None = None,
        minimum_query_length: int = DEFAULT_MINIMUM_QUERY_LENGTH,
    ) -> None:
        self.tracker = tracker
        self.selected_ballot = selected_ballot
        self.controller = DebouncedSearchController(
            lookup,
            minimum_query_length=minimum_query_length,
            debounce_delay=0,
        )

    def open(self) -> None:
        if self.selected_ballot is None:
            self.controller.search(self.tracker)

    @property
    def ballot(self) -> TrackedBallot | None:
        if self.selected_ballot is not None:
            return self.selected_ballot
        return find_ballot(self.controller.results, self.tracker)

    @property
    def display_state(self) -> DisplayState:
        return resolve_tracker(
            self.tracker,
            self.controller.results,
            self.controller.is_loading,
            selected_ballot=self.selected_ballot,
        )

    @property
    def error(self) -> Exception | None:
        return self.controller.error

    async def wait_until_settled(self, timeout: float) -> DisplayState:
        """Wait for the display state to leave ``loading``, up to ``timeout``."""
        settled = await _wait_while(lambda: self.display_state == DisplayState.LOADING, timeout)
        if not settled:
            logger.warning("Tracker {} still loading after {}s", self.tracker, timeout)
        return self.display_state

    def close(self) -> None:
        self.controller.close()

    async def __aenter__(self) -> "TrackerResultView":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.close()
