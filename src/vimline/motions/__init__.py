"""Motion and text object resolution."""

from .resolver import (
    linewise_range,
    motion_target,
    operator_range,
    resolve_motion,
)
from .spans import Span, word_spans
from .text_objects import TextObjectMatch, find_text_object

__all__ = [
    "Span",
    "TextObjectMatch",
    "find_text_object",
    "linewise_range",
    "motion_target",
    "operator_range",
    "resolve_motion",
    "word_spans",
]
