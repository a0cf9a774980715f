"""Unit tests for tracker display-state resolution."""

import pytest

from ballot_tracker.lib.tracker_search.resolution import find_ballot, resolve_display_state, resolve_tracker
from ballot_tracker.schemas.tracking import DisplayState


class TestFindBallot:
    """Tests for find_ballot()."""

    def test_exact_match(self, ballot_factory) -> None:
        wanted = ballot_factory("ABC-123")
        results = [ballot_factory("ABC-124"), wanted]
        assert find_ballot(results, "ABC-123") is wanted

    def test_match_is_case_sensitive(self, ballot_factory) -> None:
        assert find_ballot([ballot_factory("ABC-123")], "abc-123") is None

    def test_no_results(self) -> None:
        assert find_ballot([], "ABC-123") is None


class TestResolveDisplayState:
    """Tests for resolve_display_state()."""

    @pytest.mark.parametrize(
        ("state", "is_loading", "expected"),
        [
            ("Cast", False, DisplayState.CONFIRMED),
            ("Cast", True, DisplayState.CONFIRMED),
            ("Spoiled", False, DisplayState.SPOILED),
            ("Spoiled", True, DisplayState.SPOILED),
            ("Unknown", False, DisplayState.SPOILED),
        ],
    )
    def test_resolved_ballot(self, ballot_factory, state, is_loading, expected) -> None:
        assert resolve_display_state(ballot_factory(state=state), is_loading) == expected

    def test_unresolved_and_loading(self) -> None:
        assert resolve_display_state(None, True) == DisplayState.LOADING

    def test_unresolved_and_settled(self) -> None:
        assert resolve_display_state(None, False) == DisplayState.UNKNOWN


class TestResolveTracker:
    """End-to-end tracker resolution scenarios."""

    def test_selected_cast_ballot_is_confirmed(self, ballot_factory) -> None:
        ballot = ballot_factory("ABC-123", "Cast")
        assert resolve_tracker("ABC-123", [], True, selected_ballot=ballot) == DisplayState.CONFIRMED

    def test_selected_spoiled_ballot_is_spoiled(self, ballot_factory) -> None:
        ballot = ballot_factory("ABC-123", "Spoiled")
        assert resolve_tracker("ABC-123", [], False, selected_ballot=ballot) == DisplayState.SPOILED

    def test_selected_ballot_bypasses_results(self, ballot_factory) -> None:
        selected = ballot_factory("ABC-123", "Cast")
        results = [ballot_factory("ABC-123", "Spoiled")]
        assert resolve_tracker("ABC-123", results, False, selected_ballot=selected) == DisplayState.CONFIRMED

    def test_unresolvable_while_loading(self) -> None:
        assert resolve_tracker("ABC-123", [], True) == DisplayState.LOADING

    def test_unresolvable_when_settled(self, ballot_factory) -> None:
        assert resolve_tracker("ABC-123", [ballot_factory("ABC-999")], False) == DisplayState.UNKNOWN

    def test_found_in_results(self, ballot_factory) -> None:
        results = [ballot_factory("ABC-999"), ballot_factory("ABC-123", "Spoiled")]
        assert resolve_tracker("ABC-123", results, True) == DisplayState.SPOILED
