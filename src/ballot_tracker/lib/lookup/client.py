"""Verification API client for tracker code searches.

Uses httpx for async HTTP requests with timeout and error handling.
"""

import httpx
from loguru import logger
from pydantic import TypeAdapter, ValidationError

from ballot_tracker.lib.lookup.base import LookupFetchError
from ballot_tracker.schemas.tracking import TrackedBallot

_BALLOT_LIST = TypeAdapter(list[TrackedBallot])


class BallotSearchClient:
    """Searches an election's ballots by (partial) tracker words.

    Args:
        base_url: Verification API base URL.
        election_id: Election whose ballots are searched.
        timeout: HTTP request timeout in seconds.
        transport: Optional httpx transport, for tests.
    """

    def __init__(
        self,
        base_url: str,
        election_id: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.election_id = election_id
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            follow_redirects=False,
            transport=transport,
        )

    async def search_ballots(self, query: str) -> list[TrackedBallot]:
        """Fetch the ballots whose tracker words match a normalized query.

        Args:
            query: Normalized search key.

        Returns:
            Matching ballots, possibly empty.

        Raises:
            LookupFetchError: If the request fails or the response is invalid.
        """
        path = f"/election/{self.election_id}/ballots"
        try:
            logger.debug("Searching ballots in election {} for {!r}", self.election_id, query)
            response = await self._client.get(path, params={"tracker_words": query})
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            msg = f"Timeout searching ballots at {path}"
            logger.error(msg)
            raise LookupFetchError(msg) from exc
        except httpx.HTTPStatusError as exc:
            msg = f"HTTP {exc.response.status_code} searching ballots at {path}"
            logger.error(msg)
            raise LookupFetchError(msg, status_code=exc.response.status_code) from exc
        except httpx.HTTPError as exc:
            msg = f"HTTP error searching ballots at {path}: {exc}"
            logger.error(msg)
            raise LookupFetchError(msg) from exc

        try:
            raw_json = response.json()
        except ValueError as exc:
            msg = f"Invalid JSON response from {path}"
            logger.error(msg)
            raise LookupFetchError(msg) from exc

        try:
            return _BALLOT_LIST.validate_python(raw_json)
        except ValidationError as exc:
            msg = f"Failed to parse ballot search response from {path}: {exc}"
            logger.error(msg)
            raise LookupFetchError(msg) from exc

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "BallotSearchClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
