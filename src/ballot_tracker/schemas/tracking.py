"""Pydantic v2 schemas for tracked ballots.

A tracked ballot is what the verification API returns for a tracker code
search: the human-readable tracker words plus the ballot's final state.
"""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BallotState(StrEnum):
    """Final state of a ballot as reported by the verification API."""

    CAST = "Cast"
    SPOILED = "Spoiled"
    UNKNOWN = "Unknown"


class DisplayState(StrEnum):
    """UI-facing outcome of resolving a tracker code."""

    LOADING = "loading"
    CONFIRMED = "confirmed"
    SPOILED = "spoiled"
    UNKNOWN = "unknown"


class TrackedBallot(BaseModel):
    """A ballot located by its tracker code. Immutable once returned."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    tracker_words: str = Field(min_length=1)
    state: BallotState

    @field_validator("state", mode="before")
    @classmethod
    def coerce_unrecognised_state(cls, v: object) -> object:
        # Unrecognised states still count as "not cast" downstream
        if isinstance(v, str) and v not in {s.value for s in BallotState}:
            return BallotState.UNKNOWN
        return v
