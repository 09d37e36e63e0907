"""Executable Textual app that hosts the line engine."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use vimline.adapters.textual.app"
    ) from exc

from vimline.config import EngineConfig
from vimline.engine import LineEngine

from .controller import LineEditorAdapter, LineEditorHooks, LineSnapshot

CURSOR_STYLE = "reverse"


def render_line(snapshot: LineSnapshot) -> str:
    """Markup for the text with the cursor cell highlighted."""

    rendered = []
    for row, line in enumerate(snapshot.lines):
        escaped = line.replace("[", r"\[")
        if row != snapshot.cursor.line:
            rendered.append(escaped)
            continue
        column = snapshot.cursor.column
        head = line[:column].replace("[", r"\[")
        cell = (line[column : column + 1] or " ").replace("[", r"\[")
        tail = line[column + 1 :].replace("[", r"\[")
        rendered.append(f"{head}[{CURSOR_STYLE}]{cell}[/{CURSOR_STYLE}]{tail}")
    return "\n".join(rendered)


@dataclass
class UIState:
    line_text: str = ""
    mode_text: str = ""
    status_text: str = ""


class LineEditorApp(App[None]):
    """Minimal Textual UI embedding the line engine."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#line-view {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
		content-align: left top;
		overflow: auto;
	}

	#mode-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-2;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        *,
        text: str = "",
        config: Optional[EngineConfig] = None,
    ) -> None:
        super().__init__()
        self._state = UIState()
        self._initial_lines = text.split("\n")
        self._config = config or EngineConfig()
        self.adapter: LineEditorAdapter | None = None
        self._line_widget: Static | None = None
        self._mode_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="line-area"):
            self._line_widget = Static("", id="line-view")
            yield self._line_widget
        self._mode_widget = Static("", id="mode-line")
        self._status_widget = Static("", id="status-line")
        yield self._mode_widget
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        hooks = LineEditorHooks(
            update_line=self._update_line,
            update_mode=self._update_mode,
            update_status=self._update_status,
        )
        engine = LineEngine(config=self._config)
        self.adapter = LineEditorAdapter(engine, self._initial_lines, hooks)
        self.set_interval(0.1, self._process_timeouts)

    def _process_timeouts(self) -> None:
        if self.adapter:
            self.adapter.process_timeouts()

    def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        normalized = self._normalize_key(event)
        if normalized is None:
            return
        key, text = normalized
        self.adapter.handle_key(key, text=text)
        event.stop()

    def _update_line(self, snapshot: LineSnapshot) -> None:
        self._state.line_text = snapshot.text
        if self._line_widget:
            self._line_widget.update(render_line(snapshot))

    def _update_mode(self, label: str) -> None:
        self._state.mode_text = label
        if self._mode_widget:
            self._mode_widget.update(label)

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    @staticmethod
    def _normalize_key(event: events.Key) -> Optional[Tuple[str, Optional[str]]]:
        key = event.key
        if key in {"ctrl+c", "ctrl+q"}:
            return None
        if key == "escape":
            return ("<Esc>", None)
        if key == "backspace":
            return ("backspace", "backspace")
        if event.character and event.is_printable:
            return (event.character, event.character)
        return None


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the line engine Textual demo.")
    parser.add_argument(
        "--text",
        default="hello world",
        help="Initial text; use \\n for extra lines (default: 'hello world')",
    )
    parser.add_argument(
        "--tab-width",
        type=int,
        default=None,
        help="Indent width for > and < (default: VIMLINE_TAB_WIDTH or 2)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    config = EngineConfig.from_env()
    if args.tab_width is not None:
        config = EngineConfig(
            tab_width=args.tab_width,
            use_spaces=config.use_spaces,
            idle_timeout_ms=config.idle_timeout_ms,
            lang=config.lang,
        )
    text = args.text.replace("\\n", "\n")
    app = LineEditorApp(text=text, config=config)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
