from __future__ import annotations

import asyncio
from typing import Callable, Optional, Protocol

class Ticker(Protocol):
    def start(self, callback: Callable[[], None]) -> None: ...

    def stop(self) -> None: ...

class AsyncioTicker:
    """Calls ``callback`` every ``interval`` seconds on an asyncio loop.

    Uses ``loop.call_later`` so everything stays on the loop's thread. The
    callback may call ``stop()`` from inside itself.
    """

    def __init__(self, interval: float = 0.1, loop: Optional[asyncio.AbstractEventLoop] = None):
        self.interval = interval
        self._loop = loop
        self._callback: Optional[Callable[[], None]] = None
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def running(self) -> bool:
        return self._callback is not None

    def start(self, callback: Callable[[], None]) -> None:
        self.stop()
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        self._callback = callback
        self._schedule()

    def stop(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._callback = None

    def _schedule(self) -> None:
        self._handle = self._loop.call_later(self.interval, self._fire)

    def _fire(self) -> None:
        self._handle = None
        callback = self._callback
        if callback is None:
            return
        callback()
        if self._callback is callback and self._handle is None:
            self._schedule()
