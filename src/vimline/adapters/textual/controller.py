"""Host bridge that keeps a line list and a cursor in step with the engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

from vimline.engine import ESCAPE_KEYS, EngineResult, LineEngine
from vimline.state.session import Position


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


MODE_LABELS: Dict[str, str] = {
    "normal": "-- NORMAL --",
    "insert": "-- INSERT --",
    "visual": "-- VISUAL --",
    "replace": "-- REPLACE --",
}

INSERT_KEYS = ("i", "a", "I", "A")


@dataclass(frozen=True, slots=True)
class LineSnapshot:
    """Immutable copy of the host text handed to UI callbacks."""

    lines: tuple[str, ...]
    cursor: Position

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


@dataclass(slots=True)
class LineEditorHooks:
    """Callbacks invoked by the adapter to update host widgets."""

    update_line: Callable[[LineSnapshot], None]
    update_mode: Callable[[str], None] = _noop
    update_status: Callable[[str], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


class LineEditorAdapter:
    """Owns the text for a host widget and routes keys through a ``LineEngine``."""

    def __init__(
        self,
        engine: LineEngine,
        lines: Sequence[str] = ("",),
        hooks: Optional[LineEditorHooks] = None,
    ) -> None:
        self.engine = engine
        self.lines: List[str] = list(lines) or [""]
        self.hooks = hooks or LineEditorHooks(update_line=_noop)
        self._refresh()

    @property
    def cursor(self) -> Position:
        return self.engine.session.position

    @property
    def mode(self) -> str:
        return self.engine.session.mode

    def snapshot(self) -> LineSnapshot:
        return LineSnapshot(lines=tuple(self.lines), cursor=self.cursor)

    def handle_key(self, key: str, *, text: Optional[str] = None) -> bool:
        """Dispatch one host key. Returns True if the key changed anything."""

        self.hooks.log(f"key -> key={key!r} mode={self.mode}")
        if key in ESCAPE_KEYS:
            self._leave_insert()
            return True
        if self.mode == "insert":
            return self._insert(text if text is not None else key)
        if key in INSERT_KEYS and not self.engine.pending_keys:
            self._enter_insert(key)
            return True

        result = self.engine.feed(key, self.lines, cursor=self.cursor)
        if result is None:
            self.hooks.update_status(self.engine.pending_keys)
            return False
        self._apply(result)
        return not result.noop

    def process_timeouts(self) -> bool:
        cleared = self.engine.process_timeouts()
        if cleared:
            self.hooks.update_status("")
            self.hooks.log("timeout -> pending keys dropped")
        return cleared

    def _apply(self, result: EngineResult) -> None:
        self.lines = list(result.lines)
        if result.noop:
            self.hooks.update_status(f"noop:{result.command.operator or 'motion'}")
        elif result.register is not None:
            self.hooks.update_status(f'"{result.register}')
        else:
            self.hooks.update_status("")
        self.hooks.log(
            f"result <- status={result.status} "
            f"cursor=({result.cursor.line}, {result.cursor.column})"
        )
        self._refresh()

    def _enter_insert(self, key: str) -> None:
        line = self.lines[self.cursor.line]
        column = self.cursor.column
        if key == "a" and line:
            column = min(column + 1, len(line))
        elif key == "I":
            column = 0
        elif key == "A":
            column = len(line)
        self.engine.session.set_position(self.cursor.with_column(column))
        self.engine.session.set_mode("insert")
        self._refresh()

    def _leave_insert(self) -> None:
        was_insert = self.mode == "insert"
        self.engine.feed("<Esc>", self.lines)
        if was_insert and self.cursor.column > 0:
            # Vim steps back onto the last inserted character.
            self.engine.session.set_position(
                self.cursor.with_column(self.cursor.column - 1)
            )
        self.hooks.update_status("")
        self._refresh()

    def _insert(self, text: str) -> bool:
        if not text:
            return False
        row, column = self.cursor.line, self.cursor.column
        line = self.lines[row]
        if text in ("\x7f", "\b", "backspace"):
            if column == 0:
                return False
            self.lines[row] = line[: column - 1] + line[column:]
            column -= 1
        elif len(text) != 1 or not text.isprintable():
            return False
        else:
            self.lines[row] = line[:column] + text + line[column:]
            column += 1
        self.engine.session.set_position(Position(row, column))
        self._refresh()
        return True

    def _refresh(self) -> None:
        self.hooks.update_line(self.snapshot())
        self.hooks.update_mode(MODE_LABELS.get(self.mode, self.mode))


__all__ = [
    "LineEditorAdapter",
    "LineEditorHooks",
    "LineSnapshot",
    "MODE_LABELS",
]
