"""Operator execution over resolved ranges."""

from .executor import (
    OperatorResult,
    apply_linewise,
    apply_operator,
    apply_paste,
)

__all__ = ["OperatorResult", "apply_linewise", "apply_operator", "apply_paste"]
