"""Shared test fixtures: settings, ballots, and a hand-driven lookup."""

from collections.abc import Callable, Iterable

import pytest

from ballot_tracker.core.config import Settings
from ballot_tracker.lib.lookup import IDLE, LookupSnapshot, SettledListener
from ballot_tracker.schemas.tracking import BallotState, TrackedBallot


class FakeLookup:
    """SearchLookup whose fetches are settled explicitly by the test.

    Every enabled ``lookup()`` call is recorded in ``calls`` so tests can
    assert exactly which keys the controller dispatched.
    """

    def __init__(self) -> None:
        self.calls: list[str] = []
        self.listeners: list[SettledListener] = []
        self._snapshots: dict[str, LookupSnapshot] = {}

    def lookup(self, key: str, enabled: bool) -> LookupSnapshot:
        if not enabled:
            return IDLE
        self.calls.append(key)
        if key not in self._snapshots:
            self._snapshots[key] = LookupSnapshot(is_idle=False, is_loading=True, is_fetching=True)
        return self._snapshots[key]

    def peek(self, key: str) -> LookupSnapshot:
        return self._snapshots.get(key, IDLE)

    def subscribe(self, listener: SettledListener) -> Callable[[], None]:
        self.listeners.append(listener)
        return lambda: self.listeners.remove(listener)

    def resolve(self, key: str, data: Iterable[TrackedBallot]) -> None:
        self._settle(key, LookupSnapshot(data=list(data), is_idle=False))

    def fail(self, key: str, error: Exception) -> None:
        self._settle(key, LookupSnapshot(is_idle=False, error=error))

    def _settle(self, key: str, snapshot: LookupSnapshot) -> None:
        self._snapshots[key] = snapshot
        for listener in list(self.listeners):
            listener(key, snapshot)


def make_ballot(tracker_words: str = "ABC-123", state: str = "Cast") -> TrackedBallot:
    """Build a tracked ballot for tests."""
    return TrackedBallot(tracker_words=tracker_words, state=BallotState(state))


@pytest.fixture
def settings() -> Settings:
    """Test application settings."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        api_base_url="https://verify.example.com/api",
        election_id="general-2026",
        lookup_retry_attempts=0,
        lookup_retry_delay=0,
        track_wait_timeout=1.0,
    )


@pytest.fixture
def fake_lookup() -> FakeLookup:
    """A lookup settled by hand."""
    return FakeLookup()


@pytest.fixture
def ballot_factory() -> Callable[..., TrackedBallot]:
    """Factory for tracked ballots."""
    return make_ballot
