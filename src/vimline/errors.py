"""Exceptions raised for caller errors (never for incomplete input)."""

from __future__ import annotations

from typing import Optional

from vimline.state.session import Position


class EngineValidationError(RuntimeError):
    """Raised when a host hands the engine an out-of-bounds cursor."""

    def __init__(self, message: str, *, position: Optional[Position] = None) -> None:
        super().__init__(message)
        self.position = position


def ensure_position(lines, position: Position) -> Position:
    if position.line < 0 or position.line >= len(lines):
        raise EngineValidationError("Line out of range", position=position)
    if position.column < 0 or position.column > len(lines[position.line]):
        raise EngineValidationError("Column out of range", position=position)
    return position


__all__ = ["EngineValidationError", "ensure_position"]
