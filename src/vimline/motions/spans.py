"""Word and WORD span scanning shared by motions and text objects."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional

_WORD_RE = re.compile(r"\w+")
_BIG_WORD_RE = re.compile(r"[^ \t]+")
_LEADING_BLANKS_RE = re.compile(r"^\s*")


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open ``[start, end)`` column interval."""

    start: int
    end: int

    def contains(self, column: int) -> bool:
        return self.start <= column < self.end

    @property
    def last(self) -> int:
        return self.end - 1


def word_spans(line: str, *, big: bool = False) -> List[Span]:
    """``\\w+`` runs for words, runs of non-blanks for WORDs."""

    pattern = _BIG_WORD_RE if big else _WORD_RE
    return [Span(match.start(), match.end()) for match in pattern.finditer(line)]


def span_at(line: str, column: int, *, big: bool = False) -> Optional[Span]:
    for span in word_spans(line, big=big):
        if span.contains(column):
            return span
    return None


def first_non_blank(line: str) -> int:
    match = _LEADING_BLANKS_RE.match(line)
    width = match.end() if match else 0
    return min(width, max(0, len(line) - 1))


__all__ = ["Span", "word_spans", "span_at", "first_non_blank"]
