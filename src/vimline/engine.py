"""Line engine: keystrokes in, edited lines and session updates out."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from vimline.commands.input_buffer import InputBuffer
from vimline.commands.models import Command
from vimline.commands.parser import CommandParser
from vimline.config import EngineConfig
from vimline.errors import ensure_position
from vimline.motions.resolver import motion_target, operator_range, resolve_motion
from vimline.motions.text_objects import find_text_object
from vimline.operators.executor import (
    OperatorResult,
    apply_linewise,
    apply_operator,
    apply_paste,
)
from vimline.runtime import telemetry
from vimline.runtime.clock import Clock
from vimline.state.session import Position, Range, SessionState

ESCAPE_KEYS = ("\x1b", "<Esc>", "ESC")
REGISTER_OPERATORS = ("d", "c", "y")
# Column offset applied before repeating a motion from its own target.
REPEAT_NUDGE = {"e": 1, "E": 1, "t": 1, "T": -1}


@dataclass(slots=True)
class EngineResult:
    """What the host applies after a command ran (or declined to run)."""

    command: Command
    lines: List[str]
    cursor: Position
    deleted: str = ""
    register: Optional[str] = None
    status: str = "ok"

    @property
    def noop(self) -> bool:
        return self.status == "noop"


class LineEngine:
    """Owns the input buffer and parser for one session.

    The host supplies the current lines with every call and keeps whatever
    ``EngineResult.lines`` comes back; the engine itself stores no text.
    """

    def __init__(
        self,
        session: Optional[SessionState] = None,
        *,
        config: Optional[EngineConfig] = None,
        clock: Optional[Clock] = None,
        logger_name: Optional[str] = None,
    ) -> None:
        self.session = session or SessionState()
        self.config = config or EngineConfig()
        self.parser = CommandParser(self.session, logger_name=logger_name)
        self.input = InputBuffer(
            self.parser, timeout_ms=self.config.idle_timeout_ms, clock=clock
        )

    @property
    def pending_keys(self) -> str:
        return self.input.text

    def feed(
        self, key: str, lines: Sequence[str], *, cursor: Optional[Position] = None
    ) -> Optional[EngineResult]:
        """Push one normal-mode key; run the command it completes, if any."""

        if key in ESCAPE_KEYS:
            self.input.clear()
            self.session.set_mode("normal")
            return None
        if self.session.mode == "insert":
            return None

        self.input.push(key)
        command = self.input.parse()
        if command is None:
            return None
        return self.execute(command, lines, cursor=cursor)

    def run(
        self, keys: str, lines: Sequence[str], *, cursor: Optional[Position] = None
    ) -> List[EngineResult]:
        """Feed ``keys`` one by one, threading each result's lines into the next."""

        results: List[EngineResult] = []
        current = list(lines)
        position = cursor
        for key in keys:
            outcome = self.feed(key, current, cursor=position)
            if outcome is None:
                continue
            results.append(outcome)
            current = outcome.lines
            position = outcome.cursor
        return results

    def execute(
        self,
        command: Command,
        lines: Sequence[str],
        *,
        cursor: Optional[Position] = None,
    ) -> EngineResult:
        position = ensure_position(lines, cursor or self.session.position)
        with telemetry.span(
            "engine::execute",
            component="engine",
            metadata={
                "operator": command.operator or "",
                "motion": command.motion or "",
                "count": command.effective_count,
            },
        ) as handle:
            outcome = self._dispatch(command, position, lines)
            handle.add_metadata("status", "noop" if outcome is None else "ok")

        if outcome is None:
            telemetry.record_event(
                "engine.noop", level="debug", data={"command": repr(command)}
            )
            return EngineResult(
                command=command, lines=list(lines), cursor=position, status="noop"
            )
        return self._commit(command, outcome)

    def process_timeouts(self) -> bool:
        cleared = self.input.process_timeouts()
        if cleared:
            telemetry.record_event("engine.timeout", level="debug")
        return cleared

    def set_mark(self, name: str, position: Optional[Position] = None) -> None:
        self.session.set_mark(name, position)

    def jump_to_mark(self, name: str) -> Optional[Position]:
        position = self.session.get_mark(name)
        if position is not None:
            self.session.set_position(position)
        return position

    def _dispatch(
        self, command: Command, position: Position, lines: Sequence[str]
    ) -> Optional[OperatorResult]:
        operator = command.operator
        count = command.effective_count
        style = {
            "tab_width": self.config.tab_width,
            "use_spaces": self.config.use_spaces,
        }

        if command.pending:
            return None
        if operator in ("p", "P"):
            value = self.session.registers.get(command.register or '"')
            return apply_paste(
                value.text,
                position,
                lines,
                before=operator == "P",
                linewise=value.linewise,
                count=count,
            )
        if operator == "J":
            return apply_operator("J", Range(position, position), lines, count, **style)
        if command.linewise and operator is not None:
            return apply_linewise(operator, position, lines, count, **style)

        if command.text_object is not None and operator is not None:
            match = find_text_object(
                lines[position.line],
                position.column,
                command.text_object,
                row=position.line,
            )
            if match is None:
                return None
            return apply_operator(operator, match.range, lines, 1, **style)

        if command.motion is None:
            return None
        motion_range = self._resolve(command.motion, position, lines, count)
        if motion_range is None:
            return None
        if operator is None:
            target = motion_range.end
            if motion_range.start != position:
                target = motion_range.start
            return OperatorResult(result=list(lines), deleted="", cursor=target)
        trimmed = operator_range(command.motion, motion_range)
        if trimmed is None:
            return None
        return apply_operator(operator, trimmed, lines, 1, **style)

    def _resolve(
        self, motion: str, position: Position, lines: Sequence[str], count: int
    ) -> Optional[Range]:
        line = lines[position.line]
        if count == 1:
            return resolve_motion(motion, position, line)
        # Repeat the motion, keeping the furthest target reached. Motions that
        # land on or beside their match step off it before searching again.
        target = position
        nudge = REPEAT_NUDGE.get(motion[0], 0)
        for index in range(count):
            origin = target
            if index and nudge:
                origin = target.with_column(target.column + nudge)
            step = motion_target(motion, origin, line)
            if step is None or step == target:
                break
            target = step
        if target == position:
            return resolve_motion(motion, position, line)
        return Range.between(position, target)

    def _commit(self, command: Command, outcome: OperatorResult) -> EngineResult:
        register: Optional[str] = None
        if command.operator in REGISTER_OPERATORS and (
            outcome.deleted or command.linewise
        ):
            self.session.store_register(
                command.register, outcome.deleted, linewise=command.linewise
            )
            register = command.register or '"'
        if command.operator == "c":
            self.session.set_mode("insert")
        self.session.set_position(outcome.cursor)
        self.session.remember_command(command)
        telemetry.record_event(
            "engine.command",
            data={
                "operator": command.operator or "",
                "motion": command.motion or "",
                "register": register or "",
            },
        )
        return EngineResult(
            command=command,
            lines=outcome.result,
            cursor=outcome.cursor,
            deleted=outcome.deleted,
            register=register,
        )


__all__ = ["LineEngine", "EngineResult", "ESCAPE_KEYS"]
