"""Runtime services: telemetry and timing."""

from .clock import Clock, IdleTimer, ManualClock, MonotonicClock

__all__ = ["Clock", "IdleTimer", "ManualClock", "MonotonicClock"]
