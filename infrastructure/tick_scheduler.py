"""
Tick schedulers and clocks for driving a wheel.

ManualTickScheduler/ManualClock drive the physics with synthetic timestamps
(tests, offline GIF rendering). AsyncioTickScheduler drives a live wheel from
an asyncio event loop at a fixed frame rate.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable

import config
from services.interfaces import ITickScheduler


class ManualClock:
    """Monotonic millisecond clock that only moves when told to."""

    def __init__(self, start: float = 0.0):
        self.now = float(start)

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> float:
        self.now += ms
        return self.now


class ManualTickScheduler(ITickScheduler):
    """Records the pending tick; the caller fires it explicitly."""

    def __init__(self):
        self._callback: Callable[[float], None] | None = None
        self.request_count = 0

    @property
    def pending(self) -> bool:
        return self._callback is not None

    def request_tick(self, callback: Callable[[float], None]) -> None:
        self._callback = callback
        self.request_count += 1

    def cancel_tick(self) -> None:
        self._callback = None

    def fire(self, now: float) -> bool:
        """Deliver the pending tick. Returns False if none was pending."""
        callback = self._callback
        if callback is None:
            return False
        self._callback = None
        callback(now)
        return True

    def run(self, clock: ManualClock, frame_ms: float = 1000 / 60, max_frames: int = 100_000) -> int:
        """
        Fire ticks every ``frame_ms`` of clock time until none is pending.

        Returns:
            Number of ticks delivered.
        """
        frames = 0
        while self.pending and frames < max_frames:
            clock.advance(frame_ms)
            self.fire(clock())
            frames += 1
        return frames


class AsyncioTickScheduler(ITickScheduler):
    """
    Delivers ticks from the running asyncio loop at ``frame_rate`` per second.

    Timestamps are ``loop.time()`` in milliseconds, which shares its base with
    ``time.monotonic()`` (the wheel's default clock).
    """

    def __init__(self, frame_rate: int | None = None, loop: asyncio.AbstractEventLoop | None = None):
        self.frame_rate = frame_rate or config.WHEEL_FRAME_RATE
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None
        self._callback: Callable[[float], None] | None = None
        self._idle: asyncio.Event | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def _get_idle_event(self) -> asyncio.Event:
        if self._idle is None:
            self._idle = asyncio.Event()
            self._idle.set()
        return self._idle

    def request_tick(self, callback: Callable[[float], None]) -> None:
        self._callback = callback
        self._get_idle_event().clear()
        if self._handle is None:
            self._handle = self._get_loop().call_later(1 / self.frame_rate, self._fire)

    def cancel_tick(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._callback = None
        if self._idle is not None:
            self._idle.set()

    def _fire(self) -> None:
        self._handle = None
        callback, self._callback = self._callback, None
        if callback is not None:
            try:
                callback(self._get_loop().time() * 1000)
            except Exception:
                self.cancel_tick()
                raise
        if self._handle is None:
            self._get_idle_event().set()

    async def wait_idle(self) -> None:
        """Wait until a tick completes without requesting another."""
        await self._get_idle_event().wait()
