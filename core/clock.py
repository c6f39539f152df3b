"""
core/clock.py
────────────────────────────────────────────────────────────────────────
Wall-clock header: greeting plus formatted date/time, refreshed by a
repeating tick. Shares nothing with MealStore.

`ClockTicker` owns exactly one asyncio task; `stop()` (or leaving the
`async with` block) cancels it and waits for it to finish, so the tick
never outlives its owner.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Callable

_LOG = logging.getLogger(__name__)


def greeting(hour: int) -> str:
    if hour < 12:
        return "Good morning!!"
    if hour < 18:
        return "Good afternoon!!"
    return "Good evening!!"


def format_date(dt: datetime) -> str:
    return f"{dt.day} {dt:%B %Y}"          # 18 October 2026


def format_time(dt: datetime) -> str:
    return dt.strftime("%I:%M:%S %p")      # 09:05:07 AM


class ClockDisplay:
    """Latest tick, rendered for the header."""

    def __init__(self, now: Callable[[], datetime] = datetime.now) -> None:
        self._now = now
        self.current: datetime = now()

    def update(self, dt: datetime) -> None:
        self.current = dt

    def snapshot(self) -> dict[str, str]:
        dt = self.current
        return {
            "now": dt.isoformat(timespec="seconds"),
            "date": format_date(dt),
            "time": format_time(dt),
            "greeting": greeting(dt.hour),
        }


class ClockTicker:
    def __init__(
        self,
        interval: float,
        on_tick: Callable[[datetime], None],
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._interval = interval
        self._on_tick = on_tick
        self._now = now
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())
        _LOG.debug("clock tick started (every %.2fs)", self._interval)

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        _LOG.debug("clock tick stopped")

    async def _run(self) -> None:
        while True:
            try:
                self._on_tick(self._now())
            except Exception:
                # a bad tick must not stop the header clock
                _LOG.exception("clock tick callback failed")
            await asyncio.sleep(self._interval)

    async def __aenter__(self) -> "ClockTicker":
        self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.stop()
