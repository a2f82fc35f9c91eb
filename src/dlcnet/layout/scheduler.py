"""
Frame schedulers for the layout engine.

A scheduler runs one callback per frame. The engine only ever keeps one
callback pending, so ticks never overlap; cancelling the handle is all
``stop()`` needs to leave nothing behind.

- ManualScheduler: frames are pumped by the caller (tests, headless runs).
- AsyncioFrameScheduler: frames fire from an asyncio event loop.
"""

import asyncio
import itertools
from typing import Any, Callable, Dict, Optional, Protocol

FrameCallback = Callable[[], None]


class FrameScheduler(Protocol):
    """Anything that can run a callback on the next frame and cancel it."""

    def schedule(self, callback: FrameCallback) -> Any:
        ...

    def cancel(self, handle: Any) -> None:
        ...


class ManualScheduler:
    """
    Scheduler whose frames only advance when ``run_next()`` is called.

    Example:
        ```python
        scheduler = ManualScheduler()
        engine = LayoutEngine(nodes, edges, scheduler=scheduler)
        engine.start()
        scheduler.run_until_idle()
        ```
    """

    def __init__(self):
        self._counter = itertools.count(1)
        self._pending: Dict[int, FrameCallback] = {}

    def schedule(self, callback: FrameCallback) -> int:
        handle = next(self._counter)
        self._pending[handle] = callback
        return handle

    def cancel(self, handle: int) -> None:
        self._pending.pop(handle, None)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def run_next(self) -> bool:
        """Run the oldest pending frame. Returns False if nothing was pending."""
        if not self._pending:
            return False
        handle = next(iter(self._pending))
        callback = self._pending.pop(handle)
        callback()
        return True

    def run_until_idle(self, limit: Optional[int] = None) -> int:
        """Pump frames until none are pending or ``limit`` frames ran."""
        frames = 0
        while limit is None or frames < limit:
            if not self.run_next():
                break
            frames += 1
        return frames


class AsyncioFrameScheduler:
    """Runs frames on an asyncio loop every ``interval`` seconds."""

    def __init__(self, interval: float, loop: Optional[asyncio.AbstractEventLoop] = None):
        self.interval = interval
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def schedule(self, callback: FrameCallback) -> asyncio.TimerHandle:
        return self.loop.call_later(self.interval, callback)

    def cancel(self, handle: asyncio.TimerHandle) -> None:
        handle.cancel()
