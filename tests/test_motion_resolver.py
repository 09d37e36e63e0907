from __future__ import annotations

import pytest

from vimline.motions.resolver import (
    find_char,
    is_exclusive,
    linewise_range,
    motion_target,
    operator_range,
    resolve_motion,
)
from vimline.motions.spans import first_non_blank, word_spans
from vimline.state.session import Position, Range


def span(start: int, end: int, line: int = 0) -> Range:
    return Range(Position(line, start), Position(line, end))


def test_find_and_till_forward() -> None:
    line = "foo(bar)baz"
    origin = Position(0, 0)

    assert resolve_motion("fb", origin, line) == span(0, 4)
    assert resolve_motion("tb", origin, line) == span(0, 3)


def test_find_and_till_backward() -> None:
    line = "foo(bar)baz"
    origin = Position(0, 10)

    assert resolve_motion("Fb", origin, line) == span(8, 10)
    assert resolve_motion("Tb", origin, line) == span(9, 10)


def test_find_skips_the_cursor_column() -> None:
    assert find_char("abab", 0, "a", forward=True, till=False) == 2
    assert find_char("abab", 2, "a", forward=False, till=False) == 0


def test_missing_character_is_unresolved() -> None:
    assert resolve_motion("fz", Position(0, 0), "abc") is None
    assert resolve_motion("Fa", Position(0, 0), "abc") is None


def test_word_forward() -> None:
    assert resolve_motion("w", Position(0, 0), "hello world") == span(0, 6)
    assert resolve_motion("w", Position(0, 0), "foo.bar baz") == span(0, 4)
    assert resolve_motion("W", Position(0, 0), "foo.bar baz") == span(0, 8)


def test_word_forward_from_last_word_is_unresolved() -> None:
    assert resolve_motion("w", Position(0, 7), "hello world") is None


def test_word_backward() -> None:
    assert resolve_motion("b", Position(0, 8), "hello world") == span(0, 8)
    assert resolve_motion("B", Position(0, 4), "a.b c.d") == span(0, 4)
    assert resolve_motion("b", Position(0, 0), "hello") is None


def test_word_end() -> None:
    assert resolve_motion("e", Position(0, 0), "hello world") == span(0, 4)
    assert resolve_motion("e", Position(0, 5), "hello world") == span(5, 10)
    assert resolve_motion("E", Position(0, 0), "a.b c") == span(0, 2)


@pytest.mark.parametrize(
    "token, column, expected",
    [
        ("0", 4, span(0, 4)),
        ("^", 5, span(3, 5)),
        ("^", 0, span(0, 3)),
        ("$", 0, span(0, 5)),
    ],
)
def test_line_motions(token: str, column: int, expected: Range) -> None:
    assert resolve_motion(token, Position(0, column), "   abc") == expected


def test_dollar_on_empty_line_clamps_to_zero() -> None:
    assert resolve_motion("$", Position(0, 0), "") == span(0, 0)


def test_unknown_token_is_unresolved() -> None:
    assert motion_target("q", Position(0, 0), "abc") is None


def test_ranges_keep_the_line_index() -> None:
    assert resolve_motion("w", Position(2, 0), "a b") == span(0, 2, line=2)


def test_exclusive_motions_drop_the_target_column() -> None:
    assert is_exclusive("w") and is_exclusive("Fx") and is_exclusive("Tx")
    assert not is_exclusive("e") and not is_exclusive("fx")

    assert operator_range("w", span(0, 6)) == span(0, 5)
    assert operator_range("fb", span(0, 4)) == span(0, 4)
    assert operator_range("Fb", span(8, 10)) == span(8, 9)


def test_exclusive_motion_that_goes_nowhere_is_empty() -> None:
    assert operator_range("0", span(0, 0)) is None


def test_linewise_range_clamps_to_the_buffer() -> None:
    lines = ["one", "two", "three"]

    assert linewise_range(Position(1, 2), lines, 5) == Range(
        Position(1, 0), Position(2, 4)
    )
    assert linewise_range(Position(0, 0), lines) == Range(
        Position(0, 0), Position(0, 2)
    )


def test_word_spans_and_first_non_blank() -> None:
    assert [(s.start, s.end) for s in word_spans("foo.bar baz")] == [
        (0, 3),
        (4, 7),
        (8, 11),
    ]
    assert [(s.start, s.end) for s in word_spans("foo.bar baz", big=True)] == [
        (0, 7),
        (8, 11),
    ]
    assert first_non_blank("\t x") == 2
    assert first_non_blank("   ") == 2
    assert first_non_blank("") == 0
