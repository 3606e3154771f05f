"""Timer-based coalescing of rapidly changing input."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

T = TypeVar("T")

_UNSET = object()


class Debouncer(Generic[T]):
    """Dispatches a value once it has been stable for ``quiet_period`` seconds.

    Each ``push`` restarts the countdown. When it expires the value is
    dispatched unless it equals the last dispatched value. Cancelling the
    countdown never cancels a dispatch already under way.
    """

    def __init__(self, quiet_period: float, dispatch: Callable[[T], Awaitable[None]]):
        self.quiet_period = quiet_period
        self.dispatch = dispatch
        self._timer: asyncio.Task | None = None
        self._dispatches: set[asyncio.Task] = set()
        self._last_dispatched = _UNSET

    @property
    def pending(self) -> bool:
        return self._timer is not None and not self._timer.done()

    def push(self, value: T) -> None:
        """Restart the countdown with ``value``; requires a running loop."""
        self.cancel()
        self._timer = asyncio.get_running_loop().create_task(self._countdown(value))

    def cancel(self) -> None:
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = None

    async def flush(self) -> None:
        """Wait for the pending countdown and any dispatch it started."""
        if self._timer is not None:
            await asyncio.wait({self._timer})
        if self._dispatches:
            await asyncio.gather(*list(self._dispatches))

    async def _countdown(self, value: T) -> None:
        await asyncio.sleep(self.quiet_period)
        if value == self._last_dispatched:
            return
        self._last_dispatched = value
        task = asyncio.get_running_loop().create_task(self.dispatch(value))
        self._dispatches.add(task)
        task.add_done_callback(self._dispatches.discard)
