"""Human-readable descriptions of parsed commands."""

from __future__ import annotations

from typing import Dict

from vimline.state.session import SessionState

from .models import Command
from .parser import REPEAT_KEYS, CommandParser

SUPPORTED_LANGS = ("en", "zh-CN")

_COMMAND_TYPES = {
    "d": "delete",
    "c": "change",
    "y": "yank",
    "p": "paste",
    "P": "paste-before",
    ">": "indent",
    "<": "dedent",
    "J": "join",
}

_LABELS: Dict[str, Dict[str, str]] = {
    "en": {
        "delete": "Delete",
        "change": "Change",
        "yank": "Yank",
        "paste": "Paste",
        "paste-before": "Paste Before",
        "indent": "Indent",
        "dedent": "Dedent",
        "join": "Join",
        "motion": "Motion",
    },
    "zh-CN": {
        "delete": "删除",
        "change": "修改",
        "yank": "复制",
        "paste": "粘贴",
        "paste-before": "粘贴到前面",
        "indent": "缩进",
        "dedent": "减少缩进",
        "join": "合并",
        "motion": "移动",
    },
}


def is_valid_command(text: str) -> bool:
    """Whether ``text`` parses on its own, ignoring search history."""

    if text in REPEAT_KEYS:
        return True
    return CommandParser(SessionState()).parse(text) is not None


def command_type(command: Command) -> str:
    if command.operator is None:
        return "motion"
    return _COMMAND_TYPES.get(command.operator, "unknown")


def format_command(command: Command, lang: str = "en") -> str:
    if lang not in SUPPORTED_LANGS:
        raise ValueError(f"Unsupported language '{lang}'")
    kind = command_type(command)
    parts = [_LABELS[lang].get(kind, kind)]
    if command.count:
        parts.append(f"x{command.count}")
    if command.motion:
        parts.append(f"({command.motion})")
    if command.text_object:
        parts.append(f"({command.text_object.keys})")
    if command.register:
        parts.append(f'["{command.register}]')
    return " ".join(parts)


__all__ = [
    "SUPPORTED_LANGS",
    "is_valid_command",
    "command_type",
    "format_command",
]
