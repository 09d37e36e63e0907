from __future__ import annotations

from typing import Optional, Tuple

import pytest

from vimline.commands.models import TextObject
from vimline.motions.text_objects import find_text_object
from vimline.state.session import Position


def bounds(line: str, column: int, keys: str) -> Optional[Tuple[int, int, str]]:
    text_object = TextObject.from_keys(keys[0], keys[1])
    assert text_object is not None
    match = find_text_object(line, column, text_object)
    if match is None:
        return None
    return match.start.column, match.end.column, match.text


def test_inner_and_around_word() -> None:
    assert bounds("hello world", 7, "iw") == (6, 10, "world")
    assert bounds("hello world", 7, "aw") == (5, 10, " world")
    assert bounds("foo bar baz", 5, "aw") == (3, 7, " bar ")
    assert bounds("foo.bar baz", 1, "aW") == (0, 7, "foo.bar ")


def test_around_word_at_line_start_clamps() -> None:
    assert bounds("hello world", 0, "aw") == (0, 5, "hello ")
    assert bounds("one", 1, "aw") == (0, 2, "one")


def test_big_word_spans_punctuation() -> None:
    assert bounds("foo.bar baz", 1, "iW") == (0, 6, "foo.bar")
    assert bounds("foo.bar baz", 1, "iw") == (0, 2, "foo")


def test_word_on_whitespace_is_unresolved() -> None:
    assert bounds("hello world", 5, "iw") is None


def test_quotes() -> None:
    line = 'say "hi there" ok'

    assert bounds(line, 6, 'i"') == (5, 12, "hi there")
    assert bounds(line, 6, 'a"') == (4, 13, '"hi there"')
    assert bounds(line, 4, 'i"') == (5, 12, "hi there")


def test_escaped_quotes_are_skipped() -> None:
    line = r'a "b\"c" d'

    assert bounds(line, 3, 'i"') == (3, 6, r'b\"c')
    assert bounds(line, 0, 'i"') is None


def test_single_quotes_do_not_match_double() -> None:
    assert bounds("it's \"x\"", 6, "i'") is None
    assert bounds("'a' \"b\"", 1, "i'") == (1, 1, "a")


@pytest.mark.parametrize(
    "line, column, keys",
    [
        ('say "hi there" ok', 7, '"'),
        ("call(a, b)", 6, "("),
        ("x[1, 2]", 3, "["),
        ("{ k: v }", 3, "{"),
    ],
)
def test_around_is_two_longer_than_inner(line: str, column: int, keys: str) -> None:
    inner = bounds(line, column, "i" + keys)
    around = bounds(line, column, "a" + keys)

    assert inner is not None and around is not None
    assert len(around[2]) == len(inner[2]) + 2


def test_brackets_pick_the_outermost_pair() -> None:
    line = "f(a, (b), c)"

    assert bounds(line, 6, "i(") == (2, 10, "a, (b), c")
    assert bounds(line, 6, "a)") == (1, 11, "(a, (b), c)")


def test_bracket_kinds() -> None:
    assert bounds("x[1]", 2, "i]") == (2, 2, "1")
    assert bounds("{ k }", 2, "a{") == (0, 4, "{ k }")


def test_no_enclosing_pair() -> None:
    assert bounds("abc", 1, "i(") is None
    assert bounds("(a) b", 4, "i(") is None
    assert bounds("a)b(", 1, "a(") is None


def test_row_is_carried_into_positions() -> None:
    match = find_text_object("a b", 2, TextObject("word", False), row=3)

    assert match is not None
    assert match.start == Position(3, 2)
    assert match.range.end == Position(3, 2)
