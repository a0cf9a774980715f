"""In-memory query cache for tracker searches.

Keeps one entry per normalized search key. Concurrent lookups of the same
key share a single in-flight fetch, failed fetches are retried with linear
back-off, and cached data older than ``stale_after`` is refetched in the
background while the old data keeps being served. Once more than
``max_entries`` keys are cached, the least recently used settled entries
are evicted.
"""

import asyncio
from collections import OrderedDict
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass

from loguru import logger

from ballot_tracker.lib.lookup.base import IDLE, LookupSnapshot, SettledListener
from ballot_tracker.schemas.tracking import TrackedBallot

BallotFetcher = Callable[[str], Awaitable[Iterable[TrackedBallot]]]


@dataclass
class _Entry:
    data: list[TrackedBallot] | None = None
    error: Exception | None = None
    updated_at: float | None = None
    task: asyncio.Task[None] | None = None

    @property
    def fetching(self) -> bool:
        return self.task is not None and not self.task.done()


class QueryCache:
    """Cached, de-duplicating, retrying implementation of ``SearchLookup``.

    Args:
        fetcher: Async callable returning the ballots matching a key.
        stale_after: Seconds after which cached data is refetched on the
            next ``lookup()``. ``0`` refetches on every lookup.
        retry_attempts: Retries after the first failed attempt.
        retry_delay: Base back-off in seconds, multiplied by the attempt number.
        max_entries: Most keys kept before least recently used ones are evicted.
        loop: Event loop for fetch tasks. Defaults to the running loop.
    """

    def __init__(
        self,
        fetcher: BallotFetcher,
        *,
        stale_after: float = 30.0,
        retry_attempts: int = 3,
        retry_delay: float = 0.5,
        max_entries: int = 100,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._fetcher = fetcher
        self.stale_after = stale_after
        self.retry_attempts = retry_attempts
        self.retry_delay = retry_delay
        self.max_entries = max_entries
        self._loop = loop
        self._entries: OrderedDict[str, _Entry] = OrderedDict()
        self._listeners: list[SettledListener] = []

    def lookup(self, key: str, enabled: bool) -> LookupSnapshot:
        """Return the snapshot for ``key``, starting a fetch when needed."""
        if not enabled:
            return IDLE

        entry = self._entries.setdefault(key, _Entry())
        self._entries.move_to_end(key)
        if not entry.fetching and self._needs_fetch(entry):
            self._start(key, entry)
        self._evict()
        return self._snapshot(entry)

    def peek(self, key: str) -> LookupSnapshot:
        """Return the snapshot for ``key`` without starting a fetch."""
        entry = self._entries.get(key)
        if entry is None:
            return IDLE
        self._entries.move_to_end(key)
        return self._snapshot(entry)

    def subscribe(self, listener: SettledListener) -> Callable[[], None]:
        """Register a settlement listener and return its unsubscribe callable."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def invalidate(self, key: str | None = None) -> None:
        """Drop one cached key, or every key when ``key`` is None."""
        keys = [key] if key is not None else list(self._entries)
        for k in keys:
            entry = self._entries.pop(k, None)
            if entry is not None and entry.fetching:
                entry.task.cancel()  # type: ignore[union-attr]

    async def aclose(self) -> None:
        """Cancel every in-flight fetch and wait for the tasks to finish."""
        tasks = [e.task for e in self._entries.values() if e.task is not None and e.fetching]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    def _evict(self) -> None:
        # In-flight entries are kept; their fetch still has subscribers waiting
        excess = len(self._entries) - self.max_entries
        if excess <= 0:
            return
        for key in [k for k, e in self._entries.items() if not e.fetching][:excess]:
            del self._entries[key]
            logger.debug("Evicted cached search key {!r}", key)

    def _needs_fetch(self, entry: _Entry) -> bool:
        if entry.updated_at is None or entry.error is not None:
            return True
        loop = self._loop or asyncio.get_running_loop()
        return loop.time() - entry.updated_at >= self.stale_after

    def _start(self, key: str, entry: _Entry) -> None:
        loop = self._loop or asyncio.get_running_loop()
        logger.debug("Fetching search results for key {!r}", key)
        entry.task = loop.create_task(self._run(key, entry))

    async def _run(self, key: str, entry: _Entry) -> None:
        last_error: Exception | None = None
        for attempt in range(self.retry_attempts + 1):
            try:
                results = await self._fetcher(key)
            except Exception as exc:
                last_error = exc
                logger.warning(
                    "Search for key {!r} failed (attempt {}/{}): {}",
                    key,
                    attempt + 1,
                    self.retry_attempts + 1,
                    exc,
                )
                if attempt < self.retry_attempts:
                    await asyncio.sleep(self.retry_delay * (attempt + 1))
                continue
            entry.data = list(results)
            entry.error = None
            break
        else:
            logger.error("Search for key {!r} gave up after {} attempt(s)", key, self.retry_attempts + 1)
            entry.error = last_error

        loop = self._loop or asyncio.get_running_loop()
        entry.updated_at = loop.time()
        entry.task = None

        # Entry was invalidated while in flight
        if self._entries.get(key) is not entry:
            return
        snapshot = self._snapshot(entry)
        for listener in list(self._listeners):
            try:
                listener(key, snapshot)
            except Exception:
                logger.exception("Settlement listener failed for key {!r}", key)
        self._evict()

    @staticmethod
    def _snapshot(entry: _Entry) -> LookupSnapshot:
        fetching = entry.fetching
        return LookupSnapshot(
            data=entry.data,
            is_idle=not fetching and entry.updated_at is None,
            is_loading=fetching and entry.data is None,
            is_fetching=fetching,
            error=entry.error,
        )
