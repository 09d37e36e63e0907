"""Operators applied to resolved ranges.

Every operator works on a copy of the host's lines and returns the new lines,
the extracted text and the cursor; nothing here touches session state.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

from vimline.motions.resolver import linewise_range
from vimline.motions.spans import first_non_blank
from vimline.runtime.telemetry import span
from vimline.state.session import Position, Range

DEFAULT_TAB_WIDTH = 2

_LEADING_WS_RE = re.compile(r"^\s*")


@dataclass(slots=True)
class OperatorResult:
    result: List[str]
    deleted: str
    cursor: Position

    @property
    def lines(self) -> List[str]:
        return self.result


@dataclass(frozen=True, slots=True)
class IndentStyle:
    tab_width: int = DEFAULT_TAB_WIDTH
    use_spaces: bool = True

    @property
    def unit(self) -> str:
        return " " * self.tab_width if self.use_spaces else "\t"


def _extract(range_: Range, lines: Sequence[str]) -> str:
    start, end = range_.start, range_.end
    end_line = min(end.line, len(lines) - 1)
    if start.line == end_line:
        return lines[start.line][start.column : end.column + 1]
    return "\n".join(
        [
            lines[start.line][start.column :],
            *lines[start.line + 1 : end_line],
            lines[end_line][: end.column + 1],
        ]
    )


def _in_bounds(range_: Range, lines: Sequence[str]) -> bool:
    return 0 <= range_.start.line < len(lines)


def delete_operator(
    range_: Range, lines: Sequence[str], count: int, style: IndentStyle
) -> Optional[OperatorResult]:
    if not _in_bounds(range_, lines):
        return None
    start, end = range_.start, range_.end
    end_line = min(end.line, len(lines) - 1)
    deleted = _extract(range_, lines)
    result = list(lines)
    head = result[start.line][: start.column]
    tail = result[end_line][end.column + 1 :]
    result[start.line : end_line + 1] = [head + tail]
    return OperatorResult(result=result, deleted=deleted, cursor=start)


def yank_operator(
    range_: Range, lines: Sequence[str], count: int, style: IndentStyle
) -> Optional[OperatorResult]:
    # A count repeats the yanked block rather than widening it.
    if not _in_bounds(range_, lines):
        return None
    block = _extract(range_, lines)
    text = "\n".join([block] * count) if count > 1 else block
    return OperatorResult(result=list(lines), deleted=text, cursor=range_.start)


def change_operator(
    range_: Range, lines: Sequence[str], count: int, style: IndentStyle
) -> Optional[OperatorResult]:
    # Switching the session to insert mode is the caller's job.
    return delete_operator(range_, lines, count, style)


def indent_operator(
    range_: Range, lines: Sequence[str], count: int, style: IndentStyle
) -> Optional[OperatorResult]:
    if not _in_bounds(range_, lines):
        return None
    first = range_.start.line
    last = min(first + max(count, 1), len(lines))
    unit = style.unit
    result = list(lines)
    for index in range(first, last):
        result[index] = unit + result[index]
    cursor = Position(first, range_.start.column + len(unit))
    return OperatorResult(result=result, deleted="", cursor=cursor)


def _dedent_width(line: str, style: IndentStyle) -> int:
    if not style.use_spaces and line.startswith("\t"):
        return 1
    leading = _LEADING_WS_RE.match(line)
    return min(leading.end() if leading else 0, style.tab_width)


def dedent_operator(
    range_: Range, lines: Sequence[str], count: int, style: IndentStyle
) -> Optional[OperatorResult]:
    if not _in_bounds(range_, lines):
        return None
    first = range_.start.line
    last = min(first + max(count, 1), len(lines))
    result = list(lines)
    for index in range(first, last):
        result[index] = result[index][_dedent_width(result[index], style) :]
    cursor = Position(first, max(0, range_.start.column - style.tab_width))
    return OperatorResult(result=result, deleted="", cursor=cursor)


def join_operator(
    range_: Range, lines: Sequence[str], count: int, style: IndentStyle
) -> Optional[OperatorResult]:
    """Join ``count`` lines (at least two) starting at the range's line."""

    first = range_.start.line
    total = max(count, 2)
    if first < 0 or first + total > len(lines):
        return OperatorResult(
            result=list(lines), deleted="", cursor=Position(max(first, 0), 0)
        )

    head = lines[first].strip()
    pieces = [head] + [line.lstrip() for line in lines[first + 1 : first + total]]
    joined = " ".join(piece for piece in pieces if piece)
    result = list(lines)
    result[first : first + total] = [joined]
    column = min(len(head), max(0, len(joined) - 1))
    return OperatorResult(result=result, deleted="", cursor=Position(first, column))


OperatorFunc = Callable[
    [Range, Sequence[str], int, IndentStyle], Optional[OperatorResult]
]

OPERATOR_HANDLERS: Dict[str, OperatorFunc] = {
    "d": delete_operator,
    "y": yank_operator,
    "c": change_operator,
    ">": indent_operator,
    "<": dedent_operator,
    "J": join_operator,
}


def apply_operator(
    operator: str,
    range_: Range,
    lines: Sequence[str],
    count: int = 1,
    *,
    tab_width: int = DEFAULT_TAB_WIDTH,
    use_spaces: bool = True,
) -> Optional[OperatorResult]:
    """Run ``operator`` over ``range_``; ``None`` for operators it does not know."""

    handler = OPERATOR_HANDLERS.get(operator)
    if handler is None:
        return None
    with span(
        f"operator::{operator}",
        component="operators",
        metadata={"start": range_.start, "end": range_.end, "count": count},
    ):
        style = IndentStyle(tab_width=tab_width, use_spaces=use_spaces)
        return handler(range_, lines, count, style)


def apply_linewise(
    operator: str,
    position: Position,
    lines: Sequence[str],
    count: int = 1,
    *,
    tab_width: int = DEFAULT_TAB_WIDTH,
    use_spaces: bool = True,
) -> Optional[OperatorResult]:
    """Doubled operators: ``dd``, ``cc``, ``yy``, ``>>``, ``<<``."""

    if not 0 <= position.line < len(lines):
        return None
    if operator in (">", "<"):
        return apply_operator(
            operator,
            Range(position, position),
            lines,
            count,
            tab_width=tab_width,
            use_spaces=use_spaces,
        )
    if operator == "y":
        # yy always covers the cursor line; the count multiplies the block.
        row = position.line
        whole = Range(Position(row, 0), Position(row, max(0, len(lines[row]) - 1)))
        return apply_operator("y", whole, lines, count)
    if operator not in ("d", "c"):
        return None

    with span(
        f"operator::{operator * 2}",
        component="operators",
        metadata={"line": position.line, "count": count},
    ):
        rows = linewise_range(position, lines, count)
        first, last = rows.start.line, rows.end.line
        removed = list(lines[first : last + 1])
        result = list(lines)
        if operator == "c":
            indent = _LEADING_WS_RE.match(removed[0])
            prefix = indent.group(0) if indent else ""
            result[first : last + 1] = [prefix]
            cursor = Position(first, len(prefix))
        else:
            result[first : last + 1] = []
            if not result:
                result = [""]
            row = min(first, len(result) - 1)
            cursor = Position(row, first_non_blank(result[row]))
        return OperatorResult(result=result, deleted="\n".join(removed), cursor=cursor)


def apply_paste(
    text: str,
    position: Position,
    lines: Sequence[str],
    *,
    before: bool = False,
    linewise: bool = False,
    count: int = 1,
) -> Optional[OperatorResult]:
    """``p``/``P``: put ``text`` after/before the cursor (below/above if linewise)."""

    if not text or not 0 <= position.line < len(lines):
        return None
    result = list(lines)
    row = position.line

    if linewise:
        block = text.split("\n") * max(count, 1)
        at = row if before else row + 1
        result[at:at] = block
        return OperatorResult(
            result=result,
            deleted="",
            cursor=Position(at, first_non_blank(block[0])),
        )

    payload = text * max(count, 1)
    line = result[row]
    column = position.column
    if not before and line:
        column = min(position.column + 1, len(line))
    pieces = (line[:column] + payload + line[column:]).split("\n")
    result[row : row + 1] = pieces
    if len(pieces) == 1:
        cursor = Position(row, column + len(payload) - 1)
    else:
        cursor = Position(row, column)
    return OperatorResult(result=result, deleted="", cursor=cursor)


__all__ = [
    "DEFAULT_TAB_WIDTH",
    "IndentStyle",
    "OperatorResult",
    "OPERATOR_HANDLERS",
    "apply_operator",
    "apply_linewise",
    "apply_paste",
    "delete_operator",
    "yank_operator",
    "change_operator",
    "indent_operator",
    "dedent_operator",
    "join_operator",
]
