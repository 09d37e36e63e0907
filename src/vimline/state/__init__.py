"""Session state: cursor positions, registers, marks and mode."""

from .registers import DEFAULT_REGISTER, RegisterBank, RegisterValue
from .session import MODES, CharSearch, Position, Range, SessionState

__all__ = [
    "DEFAULT_REGISTER",
    "MODES",
    "CharSearch",
    "Position",
    "Range",
    "RegisterBank",
    "RegisterValue",
    "SessionState",
]
