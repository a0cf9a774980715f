"""Ballot tracker — tracker-code lookup for cast and spoiled ballots."""

__version__ = "0.1.0"
