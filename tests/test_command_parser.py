from __future__ import annotations

import pytest

from vimline.commands.models import Command, TextObject
from vimline.commands.parser import CommandParser
from vimline.state.session import CharSearch, SessionState


def make_parser() -> CommandParser:
    return CommandParser(SessionState())


@pytest.mark.parametrize("count", [1, 2, 9, 12, 100])
@pytest.mark.parametrize("operator", ["d", "c", "y", ">", "<"])
def test_count_and_operator_are_recorded(count: int, operator: str) -> None:
    command = make_parser().parse(f"{count}{operator}")

    assert command is not None
    assert command.count == count
    assert command.operator == operator
    assert command.pending


def test_yy_and_Y_are_equivalent() -> None:
    parser = make_parser()

    assert parser.parse("yy") == parser.parse("Y")
    assert parser.parse("Y") == Command(operator="y", motion="yy")


@pytest.mark.parametrize("keys", ["dd", "cc", ">>", "<<"])
def test_doubled_operators_become_linewise_motions(keys: str) -> None:
    command = make_parser().parse(keys)

    assert command == Command(operator=keys[0], motion=keys)
    assert command.linewise


def test_operator_with_motion_and_count() -> None:
    parser = make_parser()

    assert parser.parse("dw") == Command(operator="d", motion="w")
    assert parser.parse("3dw") == Command(operator="d", motion="w", count=3)
    assert parser.parse("d2e") == Command(operator="d", motion="e", count=2)
    assert parser.parse("2d3w") == Command(operator="d", motion="w", count=6)


def test_count_is_unset_without_digits() -> None:
    command = make_parser().parse("w")

    assert command == Command(motion="w")
    assert command.count is None
    assert command.effective_count == 1


def test_zero_is_a_motion_not_a_count() -> None:
    assert make_parser().parse("0") == Command(motion="0")
    assert make_parser().parse("10w") == Command(motion="w", count=10)


@pytest.mark.parametrize("keys", ["p", "P", "J"])
def test_standalone_operators(keys: str) -> None:
    assert make_parser().parse(keys) == Command(operator=keys)


def test_standalone_operator_rejects_trailing_keys() -> None:
    assert make_parser().parse("pp") is None
    assert make_parser().parse("3J") == Command(operator="J", count=3)


def test_char_search_updates_history() -> None:
    session = SessionState()
    parser = CommandParser(session)

    assert parser.parse("fx") == Command(motion="fx")
    assert session.last_char_search == CharSearch("x", forward=True, till=False)

    assert parser.parse("dTb") == Command(operator="d", motion="Tb")
    assert session.last_char_search == CharSearch("b", forward=False, till=True)


def test_word_motions_leave_search_history_alone() -> None:
    session = SessionState()
    parser = CommandParser(session)

    parser.parse("fx")
    parser.parse("dw")
    parser.parse("$")

    assert session.last_char_search == CharSearch("x", forward=True)


def test_text_objects() -> None:
    parser = make_parser()

    assert parser.parse("ciw") == Command(
        operator="c", text_object=TextObject("word", inclusive=False)
    )
    assert parser.parse('da"') == Command(
        operator="d", text_object=TextObject("quote", inclusive=True, character='"')
    )
    closing = parser.parse("ya)")
    assert closing is not None and closing.text_object is not None
    assert closing.text_object.type == "paren"
    assert closing.text_object.keys == "a("


def test_bare_text_object_defaults_to_delete() -> None:
    command = make_parser().parse("i(")

    assert command is not None
    assert command.operator == "d"
    assert command.text_object == TextObject("paren", inclusive=False, character="(")


def test_register_prefix() -> None:
    parser = make_parser()

    assert parser.parse('"ayy') == Command(operator="y", motion="yy", register="a")
    assert parser.parse('"B3dw') == Command(
        operator="d", motion="w", count=3, register="B"
    )


@pytest.mark.parametrize(
    "keys",
    ["", "x", "f", "dq", "dfab", "ddd", "iz", '"', '"!dw', "d$x", "Yy"],
)
def test_incomplete_or_invalid_input_yields_none(keys: str) -> None:
    assert make_parser().parse(keys) is None


def test_repetition_requires_history() -> None:
    parser = make_parser()

    assert parser.parse(";") is None
    assert parser.parse(",") is None


def test_repetition_keeps_and_reverses_direction() -> None:
    parser = make_parser()
    parser.parse("fb")

    assert parser.parse(";") == Command(operator="d", motion="fb")
    assert parser.parse(",") == Command(operator="d", motion="Fb")


def test_repetition_keeps_till_searches() -> None:
    parser = make_parser()
    parser.parse("Tb")

    assert parser.parse(";") == Command(operator="d", motion="Tb")
    assert parser.parse(",") == Command(operator="d", motion="tb")


def test_repetition_reuses_last_range_operator() -> None:
    session = SessionState()
    parser = CommandParser(session)
    parser.parse("fb")

    session.remember_command(Command(operator="y", motion="w"))
    assert parser.parse(";") == Command(operator="y", motion="fb")

    session.remember_command(Command(operator="p"))
    assert parser.parse(";") == Command(operator="d", motion="fb")
