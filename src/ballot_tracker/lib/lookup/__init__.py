"""Lookup library — cached, retrying tracker searches over HTTP.

Public API:
    - SearchLookup: Protocol consumed by the search controller
    - LookupSnapshot: Point-in-time lookup state for one key
    - QueryCache: In-memory SearchLookup over an async fetcher
    - BallotSearchClient: httpx transport for the verification API
    - LookupFetchError: Transport/parse error type
"""

from ballot_tracker.lib.lookup.base import IDLE, LookupFetchError, LookupSnapshot, SearchLookup, SettledListener
from ballot_tracker.lib.lookup.cache import BallotFetcher, QueryCache
from ballot_tracker.lib.lookup.client import BallotSearchClient

__all__ = [
    "IDLE",
    "BallotFetcher",
    "BallotSearchClient",
    "LookupFetchError",
    "LookupSnapshot",
    "QueryCache",
    "SearchLookup",
    "SettledListener",
]
