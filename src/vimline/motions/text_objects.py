"""Text object lookup (``iw``, ``a"``, ``i(``...) within one line.

Quotes and brackets are matched on the cursor line only; nothing spans lines.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from vimline.commands.models import DELIMITERS, TextObject
from vimline.runtime.telemetry import span
from vimline.state.session import Position, Range

from .spans import span_at


@dataclass(frozen=True, slots=True)
class TextObjectMatch:
    start: Position
    end: Position
    text: str

    @property
    def range(self) -> Range:
        return Range(self.start, self.end)


def _word_bounds(
    line: str, column: int, *, big: bool, inclusive: bool
) -> Optional[Tuple[int, int]]:
    word = span_at(line, column, big=big)
    if word is None:
        return None
    if not inclusive:
        return word.start, word.last
    # around: one column either side of the word, clamped to the line
    return max(0, word.start - 1), min(word.end, len(line) - 1)


def _quote_positions(line: str, quote: str) -> List[int]:
    return [
        index
        for index, char in enumerate(line)
        if char == quote and (index == 0 or line[index - 1] != "\\")
    ]


def _quote_bounds(line: str, column: int, quote: str) -> Optional[Tuple[int, int]]:
    positions = _quote_positions(line, quote)
    for open_index, close_index in zip(positions[0::2], positions[1::2]):
        if open_index <= column <= close_index:
            return open_index, close_index
    return None


def _bracket_bounds(
    line: str, column: int, opening: str, closing: str
) -> Optional[Tuple[int, int]]:
    stack: List[int] = []
    pairs: List[Tuple[int, int]] = []
    for index, char in enumerate(line):
        if char == opening:
            stack.append(index)
        elif char == closing and stack:
            open_index = stack.pop()
            if not stack:
                pairs.append((open_index, index))
    for open_index, close_index in pairs:
        if open_index <= column <= close_index:
            return open_index, close_index
    return None


def find_text_object(
    line: str, column: int, text_object: TextObject, *, row: int = 0
) -> Optional[TextObjectMatch]:
    """Locate ``text_object`` around ``column``; ``row`` labels the positions."""

    with span(
        "text_objects::find",
        component="text_objects",
        metadata={"object": text_object.keys},
    ) as handle:
        bounds = _find_bounds(line, column, text_object)
        handle.add_metadata("status", "miss" if bounds is None else "hit")

    if bounds is None:
        return None
    start, end = bounds
    return TextObjectMatch(
        start=Position(row, start),
        end=Position(row, end),
        text=line[start : end + 1],
    )


def _find_bounds(
    line: str, column: int, text_object: TextObject
) -> Optional[Tuple[int, int]]:
    kind = text_object.type
    if kind in ("word", "WORD"):
        return _word_bounds(
            line, column, big=kind == "WORD", inclusive=text_object.inclusive
        )

    if kind == "quote":
        pair = _quote_bounds(line, column, text_object.character or '"')
    else:
        opening, closing = DELIMITERS[kind]
        pair = _bracket_bounds(line, column, opening, closing)

    if pair is None:
        return None
    open_index, close_index = pair
    if text_object.inclusive:
        return open_index, close_index
    return open_index + 1, close_index - 1


__all__ = ["TextObjectMatch", "find_text_object"]
