from __future__ import annotations

from typing import List, Optional

import pytest

from vimline.commands.input_buffer import InputBuffer
from vimline.commands.models import Command, TextObject
from vimline.commands.parser import CommandParser
from vimline.runtime.clock import IdleTimer, ManualClock
from vimline.state.session import SessionState


def make_buffer(clock: ManualClock, timeout_ms: int = 3000) -> InputBuffer:
    return InputBuffer(
        CommandParser(SessionState()), timeout_ms=timeout_ms, clock=clock
    )


class RecordingParser:
    def __init__(self) -> None:
        self.calls: List[str] = []

    def parse(self, text: str) -> Optional[Command]:
        self.calls.append(text)
        return None


def test_multi_key_sequences_accumulate() -> None:
    buffer = make_buffer(ManualClock())

    buffer.push("d")
    assert buffer.parse() is None
    buffer.push("i")
    assert buffer.parse() is None
    assert buffer.text == "di"

    buffer.push("w")
    command = buffer.parse()

    assert command == Command(operator="d", text_object=TextObject("word", False))
    assert buffer.text == ""
    assert not buffer.timer.armed


def test_operator_waiting_for_motion_is_retained() -> None:
    buffer = make_buffer(ManualClock())

    for key in "3d":
        buffer.push(key)

    assert buffer.parse() is None
    assert buffer.text == "3d"


def test_invalid_input_is_retained() -> None:
    buffer = make_buffer(ManualClock())
    buffer.push("x")

    assert buffer.parse() is None
    assert buffer.has_pending()
    assert len(buffer) == 1


def test_idle_timeout_clears_buffer() -> None:
    clock = ManualClock()
    buffer = make_buffer(clock)
    buffer.push("d")

    clock.advance(2999)
    assert buffer.text == "d"

    clock.advance(1)
    assert buffer.text == ""


def test_push_restarts_the_idle_timer() -> None:
    clock = ManualClock()
    buffer = make_buffer(clock)

    buffer.push("d")
    clock.advance(2000)
    buffer.push("i")
    clock.advance(2000)

    assert buffer.text == "di"
    assert buffer.timer.remaining_ms() == pytest.approx(1000)


def test_process_timeouts_reports_once() -> None:
    clock = ManualClock()
    buffer = make_buffer(clock, timeout_ms=500)
    buffer.push("y")

    clock.advance(500)

    assert buffer.process_timeouts() is True
    assert buffer.process_timeouts() is False


def test_timeout_never_consults_the_parser() -> None:
    clock = ManualClock()
    parser = RecordingParser()
    buffer = InputBuffer(parser, timeout_ms=100, clock=clock)  # type: ignore[arg-type]

    buffer.push("d")
    clock.advance(100)
    buffer.process_timeouts()

    assert parser.calls == []


def test_keys_after_a_timeout_start_fresh() -> None:
    clock = ManualClock()
    buffer = make_buffer(clock)
    buffer.push("d")
    clock.advance(3000)

    buffer.push("w")

    assert buffer.parse() == Command(motion="w")


def test_pop_and_clear() -> None:
    buffer = make_buffer(ManualClock())
    buffer.push("d")
    buffer.push("w")

    assert buffer.pop() == "w"
    assert buffer.text == "d"

    buffer.clear()
    assert buffer.pop() is None
    assert not buffer.timer.armed


def test_idle_timer_rejects_non_positive_timeouts() -> None:
    with pytest.raises(ValueError):
        IdleTimer(0, clock=ManualClock())


def test_idle_timer_generation_counts_restarts() -> None:
    clock = ManualClock()
    timer = IdleTimer(100, clock=clock)

    assert timer.remaining_ms() is None
    timer.arm()
    timer.arm()

    assert timer.generation == 2
    timer.cancel()
    clock.advance(500)
    assert not timer.expired()


def test_manual_clock_only_moves_forward() -> None:
    with pytest.raises(ValueError):
        ManualClock().advance(-1)
