"""Command grammar: models, parser, input buffering and formatting."""

from .formatting import command_type, format_command, is_valid_command
from .input_buffer import DEFAULT_IDLE_TIMEOUT_MS, InputBuffer
from .models import Command, TextObject
from .parser import CommandParser

__all__ = [
    "Command",
    "TextObject",
    "CommandParser",
    "InputBuffer",
    "DEFAULT_IDLE_TIMEOUT_MS",
    "command_type",
    "format_command",
    "is_valid_command",
]
