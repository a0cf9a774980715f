"""Tracker search library — normalize, debounce, cache, and resolve tracker codes.

Public API:
    - normalize_query / is_eligible_query: Canonical search keys
    - CancellableTimer: Trailing-edge debounce timer
    - DebouncedSearchController: Search lifecycle with stale-while-revalidate
    - SearchView: Rendered view of a controller
    - find_ballot / resolve_display_state / resolve_tracker: Display state derivation
"""

from ballot_tracker.lib.tracker_search.controller import (
    DEFAULT_DEBOUNCE_DELAY,
    DebouncedSearchController,
    SearchView,
)
from ballot_tracker.lib.tracker_search.debounce import CancellableTimer
from ballot_tracker.lib.tracker_search.query import (
    DEFAULT_MINIMUM_QUERY_LENGTH,
    is_eligible_query,
    normalize_query,
)
from ballot_tracker.lib.tracker_search.resolution import find_ballot, resolve_display_state, resolve_tracker

__all__ = [
    "DEFAULT_DEBOUNCE_DELAY",
    "DEFAULT_MINIMUM_QUERY_LENGTH",
    "CancellableTimer",
    "DebouncedSearchController",
    "SearchView",
    "find_ballot",
    "is_eligible_query",
    "normalize_query",
    "resolve_display_state",
    "resolve_tracker",
]
