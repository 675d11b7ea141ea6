from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Callable

_LOGGER = logging.getLogger(__name__)

TickCallback = Callable[[], None]


class TickDriver(ABC):
    """Fires a callback every ``interval_ms``; at most one pending fire."""

    def __init__(self) -> None:
        self.interval_ms: int = 0
        self._callback: TickCallback | None = None

    @property
    def running(self) -> bool:
        """True between start() and cancel()."""
        return self._callback is not None

    def start(self, interval_ms: int, callback: TickCallback) -> None:
        _check_interval(interval_ms)
        self.cancel()
        self._callback = callback
        self.interval_ms = interval_ms
        self._arm()

    def reschedule(self, interval_ms: int) -> None:
        """Drop the pending fire and arm a new one at *interval_ms*."""
        _check_interval(interval_ms)
        was_running = self.running
        self._disarm()
        self.interval_ms = interval_ms
        if was_running:
            _LOGGER.debug("Tick driver rescheduled at %d ms", interval_ms)
            self._arm()

    def cancel(self) -> None:
        self._disarm()
        self._callback = None

    def _fire(self) -> None:
        callback = self._callback
        if callback is None:
            return
        self._mark_fired()
        callback()
        # The callback may have rescheduled or cancelled us already.
        if self._callback is not None and not self._pending:
            self._arm()

    @property
    @abstractmethod
    def _pending(self) -> bool: ...

    @abstractmethod
    def _arm(self) -> None: ...

    @abstractmethod
    def _disarm(self) -> None: ...

    @abstractmethod
    def _mark_fired(self) -> None: ...


def _check_interval(interval_ms: int) -> None:
    if interval_ms <= 0:
        raise ValueError(f"Tick interval must be positive, got {interval_ms}")


class AsyncioTickDriver(TickDriver):
    """Timer on an asyncio event loop via ``call_later``."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        super().__init__()
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None

    @property
    def _pending(self) -> bool:
        return self._handle is not None

    def _arm(self) -> None:
        loop = self._loop or asyncio.get_running_loop()
        self._handle = loop.call_later(self.interval_ms / 1000, self._fire)

    def _disarm(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _mark_fired(self) -> None:
        self._handle = None


class ManualTickDriver(TickDriver):
    """Simulated-clock driver; time moves only through :meth:`advance`."""

    def __init__(self) -> None:
        super().__init__()
        self.now_ms: float = 0.0
        self.due_ms: float | None = None
        self.arm_count = 0
        self.cancel_count = 0
        self.fire_count = 0

    @property
    def _pending(self) -> bool:
        return self.due_ms is not None

    def advance(self, ms: float) -> int:
        """Move the clock forward *ms*, firing every tick that falls due."""
        if ms < 0:
            raise ValueError(f"Cannot advance by a negative amount: {ms}")
        target = self.now_ms + ms
        fired = 0
        while self.due_ms is not None and self.due_ms <= target:
            self.now_ms = self.due_ms
            self._fire()
            fired += 1
        self.now_ms = target
        return fired

    def _arm(self) -> None:
        self.due_ms = self.now_ms + self.interval_ms
        self.arm_count += 1

    def _disarm(self) -> None:
        if self.due_ms is not None:
            self.due_ms = None
            self.cancel_count += 1

    def _mark_fired(self) -> None:
        self.due_ms = None
        self.fire_count += 1
