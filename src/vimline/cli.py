"""``vimline`` command: inspect how keystrokes parse and what they do to a line."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from vimline.commands.formatting import (
    SUPPORTED_LANGS,
    format_command,
    is_valid_command,
)
from vimline.commands.parser import CommandParser
from vimline.config import EngineConfig
from vimline.engine import LineEngine
from vimline.errors import EngineValidationError
from vimline.runtime import telemetry
from vimline.state.session import Position, SessionState


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vimline", description="Vim-style line editing commands."
    )
    sub = parser.add_subparsers(dest="command", required=True)

    test = sub.add_parser("test", help="Parse a keystroke sequence and describe it")
    test.add_argument("keys", help="Keystrokes, e.g. 3dw or ci\"")
    test.add_argument("--lang", choices=SUPPORTED_LANGS, default=None)

    run = sub.add_parser("run", help="Apply keystrokes to a line of text")
    run.add_argument("keys", help="Keystrokes fed one at a time")
    run.add_argument("--line", default="", help="Text to edit; \\n splits lines")
    run.add_argument("--cursor", type=int, default=0, help="Cursor column")
    run.add_argument("--row", type=int, default=0, help="Cursor line")
    run.add_argument("--tab-width", type=int, default=None)
    for command in (test, run):
        command.add_argument(
            "--verbose", action="store_true", help="Log engine telemetry to the console"
        )
    return parser


def _cmd_test(args: argparse.Namespace) -> int:
    lang = args.lang or EngineConfig.from_env().lang
    valid = is_valid_command(args.keys)
    print(f"input:     {args.keys}")
    print(f"valid:     {'yes' if valid else 'no'}")
    command = CommandParser(SessionState()).parse(args.keys)
    if command is None:
        return 0 if valid else 1
    print(f"operator:  {command.operator or '-'}")
    print(f"motion:    {command.motion or '-'}")
    print(f"count:     {command.count or '-'}")
    text_object = command.text_object.keys if command.text_object else "-"
    print(f"object:    {text_object}")
    print(f"register:  {command.register or '-'}")
    print(f"described: {format_command(command, lang)}")
    return 0


def _cmd_run(args: argparse.Namespace) -> int:
    config = EngineConfig.from_env()
    if args.tab_width is not None:
        config = EngineConfig(
            tab_width=args.tab_width,
            use_spaces=config.use_spaces,
            idle_timeout_ms=config.idle_timeout_ms,
            lang=config.lang,
        )
    lines = args.line.replace("\\n", "\n").split("\n")
    engine = LineEngine(config=config)
    try:
        results = engine.run(args.keys, lines, cursor=Position(args.row, args.cursor))
    except EngineValidationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if not results:
        print(f"pending:   {engine.pending_keys or '-'}")
        return 1
    last = results[-1]
    for line in last.lines:
        print(line)
    print(f"cursor:    {last.cursor.line}:{last.cursor.column}")
    print(f"mode:      {engine.session.mode}")
    if last.register is not None:
        print(f'register:  "{last.register} = {last.deleted!r}')
    return 0 if not last.noop else 1


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    if not args.verbose:
        telemetry.configure(preset="quiet")
    if args.command == "test":
        return _cmd_test(args)
    return _cmd_run(args)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
