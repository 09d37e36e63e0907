"""Injectable clocks and the deadline-based idle timer.

Timers never fire on their own: owners poll ``IdleTimer.expired()`` (or call
their own ``process_timeouts``) so tests can advance a ``ManualClock`` instead
of sleeping on wall-clock time.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Optional, Protocol


class Clock(Protocol):
    """Source of monotonic time in seconds."""

    def now(self) -> float:
        ...


class MonotonicClock:
    def now(self) -> float:
        return time.monotonic()


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, start: float = 0.0) -> None:
        self._now = start

    def now(self) -> float:
        return self._now

    def advance(self, milliseconds: float) -> None:
        if milliseconds < 0:
            raise ValueError("cannot move a clock backwards")
        self._now += milliseconds / 1000.0


@dataclass
class PendingDeadline:
    deadline: float
    generation: int


class IdleTimer:
    """Cancellable, restartable timeout measured against an injected clock."""

    def __init__(self, timeout_ms: int, *, clock: Optional[Clock] = None) -> None:
        if timeout_ms <= 0:
            raise ValueError("timeout_ms must be positive")
        self.timeout_ms = timeout_ms
        self.clock: Clock = clock or MonotonicClock()
        self._pending: Optional[PendingDeadline] = None
        self._generation = 0

    @property
    def armed(self) -> bool:
        return self._pending is not None

    @property
    def generation(self) -> int:
        return self._generation

    def arm(self) -> None:
        """Start the timer, or restart it if already running."""

        self._generation += 1
        self._pending = PendingDeadline(
            deadline=self.clock.now() + self.timeout_ms / 1000.0,
            generation=self._generation,
        )

    def cancel(self) -> None:
        self._pending = None

    def expired(self) -> bool:
        if self._pending is None:
            return False
        return self.clock.now() >= self._pending.deadline

    def remaining_ms(self) -> Optional[float]:
        if self._pending is None:
            return None
        return max(0.0, (self._pending.deadline - self.clock.now()) * 1000.0)


__all__ = ["Clock", "MonotonicClock", "ManualClock", "IdleTimer", "PendingDeadline"]
