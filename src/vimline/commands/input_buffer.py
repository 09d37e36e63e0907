"""Keystroke accumulator sitting in front of the command parser."""

from __future__ import annotations

from typing import Optional

from vimline.runtime import telemetry
from vimline.runtime.clock import Clock, IdleTimer

from .models import Command
from .parser import CommandParser

DEFAULT_IDLE_TIMEOUT_MS = 3000


class InputBuffer:
    """Collects keystrokes until they form a complete command.

    A failed ``parse`` keeps the keys so multi-key sequences (``d``, ``di``,
    ``diw``) build up one stroke at a time. After ``timeout_ms`` without a
    keystroke the contents are dropped silently; the parser is not consulted.
    """

    def __init__(
        self,
        parser: CommandParser,
        *,
        timeout_ms: int = DEFAULT_IDLE_TIMEOUT_MS,
        clock: Optional[Clock] = None,
    ) -> None:
        self.parser = parser
        self._keys = ""
        self._timer = IdleTimer(timeout_ms, clock=clock)

    @property
    def text(self) -> str:
        self.process_timeouts()
        return self._keys

    @property
    def timer(self) -> IdleTimer:
        return self._timer

    def __len__(self) -> int:
        return len(self.text)

    def has_pending(self) -> bool:
        return bool(self.text)

    def push(self, char: str) -> None:
        self.process_timeouts()
        self._keys += char
        self._timer.arm()

    def pop(self) -> Optional[str]:
        self.process_timeouts()
        if not self._keys:
            return None
        last = self._keys[-1]
        self._keys = self._keys[:-1]
        return last

    def clear(self) -> None:
        self._keys = ""
        self._timer.cancel()

    def parse(self) -> Optional[Command]:
        """Parse the buffered keys; clear only when a full command comes back."""

        keys = self.text
        if not keys:
            return None
        command = self.parser.parse(keys)
        if command is None or command.pending:
            return None
        self.clear()
        return command

    def process_timeouts(self) -> bool:
        """Drop stale keys if the idle deadline passed. Returns True if cleared."""

        if not self._timer.expired():
            return False
        dropped = self._keys
        self.clear()
        if dropped:
            telemetry.record_event(
                "input.timeout", level="debug", data={"dropped": dropped}
            )
        return bool(dropped)


__all__ = ["InputBuffer", "DEFAULT_IDLE_TIMEOUT_MS"]
