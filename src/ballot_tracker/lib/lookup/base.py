"""Lookup capability interface consumed by the search controller."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from ballot_tracker.schemas.tracking import TrackedBallot


class LookupFetchError(Exception):
    """Raised when fetching search results from the transport fails."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class LookupSnapshot:
    """Point-in-time view of the lookup state for one search key.

    ``data`` is None until a successful response for the key exists.
    ``is_idle`` is True when the lookup is disabled or no fetch has started.
    ``is_loading`` is True while the first fetch for the key is outstanding;
    ``is_fetching`` also covers background refetches of cached data.
    """

    data: list[TrackedBallot] | None = None
    is_idle: bool = True
    is_loading: bool = False
    is_fetching: bool = False
    error: Exception | None = None


IDLE = LookupSnapshot()

SettledListener = Callable[[str, LookupSnapshot], None]


class SearchLookup(Protocol):
    """Protocol for a cached, retrying source of search results."""

    def lookup(self, key: str, enabled: bool) -> LookupSnapshot:
        """Return the state for ``key``, starting a fetch if enabled and needed.

        Args:
            key: Normalized search key.
            enabled: When False, no fetch is started and an idle snapshot is
                returned.

        Returns:
            The current snapshot for the key.
        """
        ...

    def peek(self, key: str) -> LookupSnapshot:
        """Return the snapshot for ``key`` without starting a fetch."""
        ...

    def subscribe(self, listener: SettledListener) -> Callable[[], None]:
        """Register a listener called whenever a fetch settles.

        Args:
            listener: Called as ``listener(key, snapshot)``.

        Returns:
            A callable that removes the listener.
        """
        ...
