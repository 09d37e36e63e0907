"""Motion resolution against a single line.

``resolve_motion`` returns the span between the cursor and the motion target
as an ordered ``Range`` (``start <= end``); ``None`` means the motion cannot be
satisfied and the caller must leave buffer and cursor alone.
"""

from __future__ import annotations

from typing import Optional, Sequence

from vimline.commands.models import CHAR_SEARCH_KEYS
from vimline.runtime.telemetry import span
from vimline.state.session import Position, Range

from .spans import first_non_blank, word_spans

# Motions whose target column is not part of an operator's range.
EXCLUSIVE_MOTIONS = frozenset({"w", "W", "b", "B", "0", "^"})


def is_char_search(token: str) -> bool:
    return len(token) == 2 and token[0] in CHAR_SEARCH_KEYS


def is_exclusive(token: str) -> bool:
    if is_char_search(token):
        return token[0] in ("F", "T")
    return token in EXCLUSIVE_MOTIONS


def find_char(
    line: str, column: int, char: str, *, forward: bool, till: bool
) -> Optional[int]:
    """Column reached by ``f``/``F``/``t``/``T``, or ``None`` if ``char`` is absent."""

    if forward:
        for index in range(column + 1, len(line)):
            if line[index] == char:
                return index - 1 if till else index
    else:
        for index in range(column - 1, -1, -1):
            if line[index] == char:
                return index + 1 if till else index
    return None


def _next_word_start(line: str, column: int, big: bool) -> Optional[int]:
    for word in word_spans(line, big=big):
        if word.start > column:
            return word.start
    return None


def _prev_word_start(line: str, column: int, big: bool) -> Optional[int]:
    for word in reversed(word_spans(line, big=big)):
        if word.end <= column:
            return word.start
    return None


def _word_end(line: str, column: int, big: bool) -> Optional[int]:
    for word in word_spans(line, big=big):
        if word.start > column or word.contains(column):
            return word.last
    return None


def motion_target(token: str, position: Position, line: str) -> Optional[Position]:
    """Where the cursor lands after ``token``; ``None`` when unreachable."""

    column = position.column
    target: Optional[int]
    if is_char_search(token):
        key, char = token[0], token[1]
        target = find_char(
            line, column, char, forward=key in "ft", till=key in "tT"
        )
    elif token in ("w", "W"):
        target = _next_word_start(line, column, token == "W")
    elif token in ("b", "B"):
        target = _prev_word_start(line, column, token == "B")
    elif token in ("e", "E"):
        target = _word_end(line, column, token == "E")
    elif token == "0":
        target = 0
    elif token == "^":
        target = first_non_blank(line)
    elif token == "$":
        target = max(0, len(line) - 1)
    else:
        target = None

    if target is None:
        return None
    return position.with_column(target)


def resolve_motion(token: str, position: Position, line: str) -> Optional[Range]:
    with span(
        "motions::resolve", component="motions", metadata={"motion": token}
    ) as handle:
        target = motion_target(token, position, line)
        handle.add_metadata("status", "miss" if target is None else "hit")
    if target is None:
        return None
    return Range.between(position, target)


def operator_range(token: str, motion_range: Range) -> Optional[Range]:
    """Trim the target column off exclusive motions; ``None`` if nothing is left."""

    if not is_exclusive(token):
        return motion_range
    start, end = motion_range.start, motion_range.end
    if start.line == end.line and end.column <= start.column:
        return None
    return Range(start, end.with_column(end.column - 1))


def linewise_range(position: Position, lines: Sequence[str], count: int = 1) -> Range:
    """Whole lines from the cursor line down, ``count`` of them at most."""

    last = min(position.line + max(count, 1) - 1, len(lines) - 1)
    return Range(
        Position(position.line, 0),
        Position(last, max(0, len(lines[last]) - 1)),
    )


__all__ = [
    "EXCLUSIVE_MOTIONS",
    "find_char",
    "is_char_search",
    "is_exclusive",
    "linewise_range",
    "motion_target",
    "operator_range",
    "resolve_motion",
]
