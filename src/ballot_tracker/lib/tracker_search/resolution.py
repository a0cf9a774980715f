"""Tracker resolution — derive a display state for a tracker code.

The display state is never stored. It is recomputed from the resolved
ballot (if any) and the search loading flag whenever either changes.
"""

from collections.abc import Iterable

from ballot_tracker.schemas.tracking import BallotState, DisplayState, TrackedBallot


def find_ballot(results: Iterable[TrackedBallot], tracker: str) -> TrackedBallot | None:
    """Return the result whose tracker words exactly equal ``tracker``.

    Matching is case-sensitive; normalization only applies to the query.
    """
    for ballot in results:
        if ballot.tracker_words == tracker:
            return ballot
    return None


def resolve_display_state(ballot: TrackedBallot | None, is_loading: bool) -> DisplayState:
    """Map a resolved ballot and loading flag to a display state.

    Args:
        ballot: The resolved ballot, or None if none matched.
        is_loading: Whether the search backing the lookup is still loading.

    Returns:
        ``LOADING`` while unresolved and loading, ``CONFIRMED`` for a cast
        ballot, ``SPOILED`` for any other ballot state, else ``UNKNOWN``.
    """
    if ballot is None:
        return DisplayState.LOADING if is_loading else DisplayState.UNKNOWN
    if ballot.state == BallotState.CAST:
        return DisplayState.CONFIRMED
    return DisplayState.SPOILED


def resolve_tracker(
    tracker: str,
    results: Iterable[TrackedBallot],
    is_loading: bool,
    selected_ballot: TrackedBallot | None = None,
) -> DisplayState:
    """Resolve a tracker code against search results.

    A directly selected ballot bypasses matching against ``results``.
    """
    ballot = selected_ballot if selected_ballot is not None else find_ballot(results, tracker)
    return resolve_display_state(ballot, is_loading)
