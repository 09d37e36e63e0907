"""Value types produced by the command parser."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

# Operators that take a motion or text object.
RANGE_OPERATORS = ("d", "c", "y", ">", "<")
# Operators that act immediately at the cursor.
STANDALONE_OPERATORS = ("p", "P", "J")
OPERATORS = RANGE_OPERATORS + STANDALONE_OPERATORS

CHAR_SEARCH_KEYS = ("f", "F", "t", "T")
WORD_MOTIONS = ("w", "W", "b", "B", "e", "E")
LINE_MOTIONS = ("0", "^", "$")
SIMPLE_MOTIONS = WORD_MOTIONS + LINE_MOTIONS
LINEWISE_MOTIONS = ("dd", "cc", "yy", ">>", "<<")

TEXT_OBJECT_TYPES = ("word", "WORD", "quote", "paren", "bracket", "brace")

# key after ``i``/``a`` -> (type, recorded character)
TEXT_OBJECT_KEYS = {
    "w": ("word", None),
    "W": ("WORD", None),
    '"': ("quote", '"'),
    "'": ("quote", "'"),
    "(": ("paren", "("),
    ")": ("paren", "("),
    "[": ("bracket", "["),
    "]": ("bracket", "["),
    "{": ("brace", "{"),
    "}": ("brace", "{"),
}

DELIMITERS = {"paren": ("(", ")"), "bracket": ("[", "]"), "brace": ("{", "}")}


@dataclass(frozen=True, slots=True)
class TextObject:
    """``iw``/``a"``/``i(``... ``inclusive`` is the "around" variant."""

    type: str
    inclusive: bool
    character: Optional[str] = None

    def __post_init__(self) -> None:
        if self.type not in TEXT_OBJECT_TYPES:
            raise ValueError(f"Unknown text object type '{self.type}'")
        if self.type == "quote" and not self.character:
            raise ValueError("quote text objects need a quote character")

    @classmethod
    def from_keys(cls, scope: str, key: str) -> Optional["TextObject"]:
        if scope not in ("i", "a"):
            return None
        entry = TEXT_OBJECT_KEYS.get(key)
        if entry is None:
            return None
        kind, character = entry
        return cls(type=kind, inclusive=scope == "a", character=character)

    @property
    def scope(self) -> str:
        return "a" if self.inclusive else "i"

    @property
    def keys(self) -> str:
        if self.type == "word":
            return self.scope + "w"
        if self.type == "WORD":
            return self.scope + "W"
        return self.scope + (self.character or DELIMITERS[self.type][0])


@dataclass(frozen=True, slots=True)
class Command:
    """One completed keystroke sequence; built, executed and dropped."""

    operator: Optional[str] = None
    motion: Optional[str] = None
    count: Optional[int] = None
    text_object: Optional[TextObject] = None
    register: Optional[str] = None

    def __post_init__(self) -> None:
        if self.operator is not None and self.operator not in OPERATORS:
            raise ValueError(f"Unknown operator '{self.operator}'")
        if self.count is not None and self.count < 1:
            raise ValueError("count must be a positive integer")
        if self.motion is not None and self.text_object is not None:
            raise ValueError("a command takes a motion or a text object, not both")

    @property
    def effective_count(self) -> int:
        return self.count or 1

    @property
    def pending(self) -> bool:
        """True for an operator still waiting for its motion (``d``, ``3y``)."""

        return (
            self.operator in RANGE_OPERATORS
            and self.motion is None
            and self.text_object is None
        )

    @property
    def linewise(self) -> bool:
        return self.motion in LINEWISE_MOTIONS


__all__ = [
    "Command",
    "TextObject",
    "OPERATORS",
    "RANGE_OPERATORS",
    "STANDALONE_OPERATORS",
    "CHAR_SEARCH_KEYS",
    "WORD_MOTIONS",
    "LINE_MOTIONS",
    "SIMPLE_MOTIONS",
    "LINEWISE_MOTIONS",
    "TEXT_OBJECT_TYPES",
    "TEXT_OBJECT_KEYS",
    "DELIMITERS",
]
