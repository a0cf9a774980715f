"""Cancellable timer used to debounce search input.

Wraps an asyncio timer handle so that at most one dispatch is ever pending:
scheduling again tears the previous handle down first.
"""

import asyncio
from collections.abc import Callable
from typing import Any


class CancellableTimer:
    """Trailing-edge debounce timer bound to an event loop.

    Args:
        delay: Quiet period in seconds. ``0`` dispatches on the next loop
            tick via ``call_soon``.
        callback: Called with the arguments of the last ``schedule()`` call.
        loop: Event loop to schedule on. Defaults to the running loop at
            the time of the first ``schedule()``.
    """

    def __init__(
        self,
        delay: float,
        callback: Callable[..., Any],
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        if delay < 0:
            msg = f"delay must be >= 0, got {delay}"
            raise ValueError(msg)
        self.delay = delay
        self._callback = callback
        self._loop = loop
        self._handle: asyncio.Handle | None = None

    @property
    def pending(self) -> bool:
        """Whether a dispatch is scheduled and has not yet fired."""
        return self._handle is not None and not self._handle.cancelled()

    def schedule(self, *args: Any) -> None:
        """Cancel any pending dispatch and schedule a new one with ``args``."""
        self.cancel()
        loop = self._loop or asyncio.get_running_loop()
        if self.delay == 0:
            self._handle = loop.call_soon(self._fire, *args)
        else:
            self._handle = loop.call_later(self.delay, self._fire, *args)

    def cancel(self) -> bool:
        """Cancel the pending dispatch, if any.

        Returns:
            True if a pending dispatch was discarded.
        """
        handle, self._handle = self._handle, None
        if handle is None or handle.cancelled():
            return False
        handle.cancel()
        return True

    def _fire(self, *args: Any) -> None:
        self._handle = None
        self._callback(*args)

    def __enter__(self) -> "CancellableTimer":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.cancel()
