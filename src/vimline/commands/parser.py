"""Staged parser turning buffered keystrokes into a ``Command``.

Stages run in order (register, count, operator, motion) over a shared
``CommandDraft``. A stage returns the unconsumed keys, or ``None`` when the
input is incomplete or invalid; either way the parser answers ``None`` and the
caller keeps its buffer.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Sequence

from vimline.runtime import telemetry
from vimline.state.registers import is_register_name
from vimline.state.session import CharSearch, SessionState

from .models import (
    CHAR_SEARCH_KEYS,
    RANGE_OPERATORS,
    SIMPLE_MOTIONS,
    STANDALONE_OPERATORS,
    Command,
    TextObject,
)

_COUNT_RE = re.compile(r"^[1-9]\d*")

REPEAT_KEYS = (";", ",")


@dataclass(slots=True)
class CommandDraft:
    register: Optional[str] = None
    count: Optional[int] = None
    operator: Optional[str] = None
    motion: Optional[str] = None
    text_object: Optional[TextObject] = None
    complete: bool = False

    def build(self) -> Command:
        return Command(
            operator=self.operator,
            motion=self.motion,
            count=self.count,
            text_object=self.text_object,
            register=self.register,
        )


class RegisterParser:
    def parse(self, keys: str, draft: CommandDraft) -> Optional[str]:
        if not keys.startswith('"'):
            return keys
        if len(keys) < 2 or not is_register_name(keys[1]):
            return None
        draft.register = keys[1]
        return keys[2:]


class CountParser:
    def parse(self, keys: str, draft: CommandDraft) -> Optional[str]:
        match = _COUNT_RE.match(keys)
        if match is None:
            return keys
        draft.count = int(match.group(0))
        return keys[match.end() :]


class OperatorParser:
    def parse(self, keys: str, draft: CommandDraft) -> Optional[str]:
        if not keys:
            return None
        first, rest = keys[0], keys[1:]

        if first == "Y":
            draft.operator, draft.motion = "y", "yy"
            draft.complete = True
            return "" if not rest else None

        if first in STANDALONE_OPERATORS:
            draft.operator = first
            draft.complete = True
            return "" if not rest else None

        if first not in RANGE_OPERATORS:
            return keys

        draft.operator = first
        # A second count between operator and motion multiplies: 2d3w == 6w.
        match = _COUNT_RE.match(rest)
        if match is not None:
            draft.count = (draft.count or 1) * int(match.group(0))
            rest = rest[match.end() :]
        if rest[:1] == first:
            # doubled operator: yy, dd, cc, >>, <<
            draft.motion = first * 2
            draft.complete = True
            return "" if len(rest) == 1 else None
        if not rest:
            draft.complete = True
        return rest


class MotionParser:
    def __init__(self, session: SessionState) -> None:
        self.session = session

    def parse(self, keys: str, draft: CommandDraft) -> Optional[str]:
        if draft.complete:
            return keys
        if not keys:
            return None
        first = keys[0]

        if first in CHAR_SEARCH_KEYS:
            if len(keys) != 2:
                return None
            draft.motion = keys
            self.session.remember_char_search(CharSearch.from_motion(keys))
            return ""

        if first in ("i", "a"):
            if len(keys) != 2:
                return None
            text_object = TextObject.from_keys(first, keys[1])
            if text_object is None:
                return None
            draft.text_object = text_object
            if draft.operator is None:
                draft.operator = "d"
            return ""

        if keys in SIMPLE_MOTIONS:
            draft.motion = keys
            return ""
        return None


class CommandParser:
    """Parses keystroke strings against one session's search history."""

    def __init__(
        self, session: SessionState, *, logger_name: Optional[str] = None
    ) -> None:
        self.session = session
        self._logger_name = logger_name
        self._stages: Sequence = (
            RegisterParser(),
            CountParser(),
            OperatorParser(),
            MotionParser(session),
        )

    def parse(self, text: str) -> Optional[Command]:
        with telemetry.span(
            "parser::parse",
            logger_name=self._logger_name,
            component="parser",
            metadata={"input": text},
        ) as handle:
            command = self._parse(text)
            handle.add_metadata("status", "match" if command else "miss")
        return command

    def parse_repetition(self, key: str) -> Optional[Command]:
        """``;`` replays the last char search, ``,`` replays it reversed."""

        search = self.session.last_char_search
        if search is None:
            return None
        last = self.session.last_command
        operator = "d"
        if last is not None and last.operator in RANGE_OPERATORS:
            operator = last.operator
        return Command(operator=operator, motion=search.motion(reverse=key == ","))

    def _parse(self, text: str) -> Optional[Command]:
        if not text:
            return None
        if text in REPEAT_KEYS:
            return self.parse_repetition(text)

        draft = CommandDraft()
        remaining: Optional[str] = text
        for stage in self._stages:
            remaining = stage.parse(remaining, draft)
            if remaining is None:
                return None
        if remaining:
            return None
        return draft.build()


__all__ = [
    "CommandParser",
    "CommandDraft",
    "RegisterParser",
    "CountParser",
    "OperatorParser",
    "MotionParser",
]
