"""Positions, ranges and the long-lived per-session editing state."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Optional

from vimline.runtime import telemetry

from .registers import DEFAULT_REGISTER, RegisterBank, RegisterValue

if TYPE_CHECKING:
    from vimline.commands.models import Command

MODES = ("normal", "insert", "visual", "replace")


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """Zero-based ``(line, column)`` location."""

    line: int = 0
    column: int = 0

    def with_column(self, column: int) -> "Position":
        return Position(self.line, column)


@dataclass(frozen=True, slots=True)
class Range:
    """Span between two positions; ``end`` is inclusive unless noted."""

    start: Position
    end: Position

    @property
    def single_line(self) -> bool:
        return self.start.line == self.end.line

    @classmethod
    def between(cls, a: Position, b: Position) -> "Range":
        return cls(a, b) if a <= b else cls(b, a)


@dataclass(frozen=True, slots=True)
class CharSearch:
    """Last ``f``/``F``/``t``/``T`` target, replayed by ``;`` and ``,``."""

    char: str
    forward: bool
    till: bool = False

    def __post_init__(self) -> None:
        if len(self.char) != 1:
            raise ValueError("char search expects exactly one character")

    @classmethod
    def from_motion(cls, motion: str) -> "CharSearch":
        key, char = motion[0], motion[1:]
        return cls(char=char, forward=key in "ft", till=key in "tT")

    def motion(self, *, reverse: bool = False) -> str:
        key = "t" if self.till else "f"
        forward = self.forward != reverse
        return (key if forward else key.upper()) + self.char


@dataclass(slots=True)
class SessionState:
    """State owned by one editing session and handed to the engine by reference."""

    mode: str = "normal"
    position: Position = field(default_factory=Position)
    registers: RegisterBank = field(default_factory=RegisterBank)
    marks: Dict[str, Position] = field(default_factory=dict)
    last_char_search: Optional[CharSearch] = None
    last_command: Optional["Command"] = None
    visual_start: Optional[Position] = None

    def set_mode(self, mode: str) -> None:
        if mode not in MODES:
            raise ValueError(f"Unknown mode '{mode}'")
        previous = self.mode
        self.mode = mode
        if mode == "normal":
            self.visual_start = None
        if previous != mode:
            telemetry.record_event(
                "session.mode", data={"from": previous, "to": mode}
            )

    def set_position(self, position: Position) -> None:
        self.position = position

    def start_visual(self, anchor: Optional[Position] = None) -> None:
        self.set_mode("visual")
        self.visual_start = anchor or self.position

    def end_visual(self) -> None:
        self.set_mode("normal")

    def visual_range(self) -> Optional[Range]:
        if self.visual_start is None:
            return None
        return Range.between(self.visual_start, self.position)

    def set_mark(self, name: str, position: Optional[Position] = None) -> None:
        if len(name) != 1 or not name.isascii() or not name.isalpha():
            raise ValueError(f"Invalid mark name '{name}'")
        self.marks[name] = position or self.position

    def get_mark(self, name: str) -> Optional[Position]:
        return self.marks.get(name)

    def remember_char_search(self, search: CharSearch) -> None:
        self.last_char_search = search

    def remember_command(self, command: "Command") -> None:
        self.last_command = command

    def store_register(
        self, name: Optional[str], text: str, *, linewise: bool = False
    ) -> RegisterValue:
        return self.registers.store(
            name, text, register_type="line" if linewise else "character"
        )

    def register_text(self, name: Optional[str] = None) -> str:
        return self.registers.text(name or DEFAULT_REGISTER)


__all__ = [
    "MODES",
    "Position",
    "Range",
    "CharSearch",
    "SessionState",
]
