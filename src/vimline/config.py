"""Engine settings handed in by the host (never read from disk here)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from vimline.commands.formatting import SUPPORTED_LANGS
from vimline.commands.input_buffer import DEFAULT_IDLE_TIMEOUT_MS
from vimline.operators.executor import DEFAULT_TAB_WIDTH

ENV_PREFIX = "VIMLINE_"


def _env(name: str) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}")


def _env_flag(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = _env(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from exc


@dataclass(slots=True)
class EngineConfig:
    tab_width: int = DEFAULT_TAB_WIDTH
    use_spaces: bool = True
    idle_timeout_ms: int = DEFAULT_IDLE_TIMEOUT_MS
    lang: str = "en"

    def __post_init__(self) -> None:
        if self.tab_width <= 0:
            raise ValueError("tab_width must be positive")
        if self.idle_timeout_ms <= 0:
            raise ValueError("idle_timeout_ms must be positive")
        if self.lang not in SUPPORTED_LANGS:
            raise ValueError(f"Unsupported language '{self.lang}'")

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Defaults overridden by ``VIMLINE_TAB_WIDTH`` and friends."""

        return cls(
            tab_width=_env_int("TAB_WIDTH", DEFAULT_TAB_WIDTH),
            use_spaces=_env_flag("USE_SPACES", True),
            idle_timeout_ms=_env_int("IDLE_TIMEOUT_MS", DEFAULT_IDLE_TIMEOUT_MS),
            lang=_env("LANG") or "en",
        )


__all__ = ["EngineConfig", "ENV_PREFIX"]
