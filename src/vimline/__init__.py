"""Vim-style command engine for single-line and readline-like editing."""

from .commands import Command, CommandParser, InputBuffer, TextObject
from .config import EngineConfig
from .engine import EngineResult, LineEngine
from .errors import EngineValidationError
from .state import Position, Range, RegisterBank, SessionState

__all__ = [
    "Command",
    "CommandParser",
    "EngineConfig",
    "EngineResult",
    "EngineValidationError",
    "InputBuffer",
    "LineEngine",
    "Position",
    "Range",
    "RegisterBank",
    "SessionState",
    "TextObject",
]

__version__ = "0.1.0"
