"""Register storage for yanked, deleted and changed text."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping

DEFAULT_REGISTER = '"'
REGISTER_TYPES = ("character", "line")


@dataclass(frozen=True, slots=True)
class RegisterValue:
    text: str
    type: str = "character"

    def __post_init__(self) -> None:
        if self.type not in REGISTER_TYPES:
            raise ValueError(f"Unknown register type '{self.type}'")

    @property
    def linewise(self) -> bool:
        return self.type == "line"


def is_register_name(name: str) -> bool:
    return len(name) == 1 and (name == DEFAULT_REGISTER or name.isalnum())


class RegisterBank:
    """Unnamed register plus named ``a``-``z`` / ``0``-``9`` slots.

    Every write lands in the unnamed register as well as in the target, and an
    uppercase name appends to its lowercase register.
    """

    def __init__(self) -> None:
        self._registers: Dict[str, RegisterValue] = {
            DEFAULT_REGISTER: RegisterValue(text="")
        }

    def get(self, name: str = DEFAULT_REGISTER) -> RegisterValue:
        return self._registers.get(name.lower(), RegisterValue(text=""))

    def text(self, name: str = DEFAULT_REGISTER) -> str:
        return self.get(name).text

    def set(self, name: str, value: RegisterValue) -> None:
        if not is_register_name(name):
            raise ValueError(f"Invalid register name '{name}'")
        if name.isupper():
            self.append(name.lower(), value.text)
            return
        self._registers[name] = value
        if name != DEFAULT_REGISTER:
            self._registers[DEFAULT_REGISTER] = value

    def append(self, name: str, text: str) -> None:
        existing = self.get(name)
        self.set(name, RegisterValue(text=existing.text + text, type=existing.type))

    def store(
        self, name: str | None, text: str, *, register_type: str = "character"
    ) -> RegisterValue:
        value = RegisterValue(text=text, type=register_type)
        self.set(name or DEFAULT_REGISTER, value)
        return self.get(name or DEFAULT_REGISTER)

    def snapshot(self) -> Mapping[str, RegisterValue]:
        return dict(self._registers)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._registers


__all__ = [
    "DEFAULT_REGISTER",
    "RegisterBank",
    "RegisterValue",
    "is_register_name",
]
