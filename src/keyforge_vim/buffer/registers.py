"""Unnamed and single-character registers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

UNNAMED = '"'


@dataclass(frozen=True, slots=True)
class RegisterValue:
    text: str = ""
    linewise: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.text


class RegisterBank:
    """Holds the unnamed register plus one slot per register character.

    Writing to any named register also updates the unnamed register. An
    upper-case name appends to the matching lower-case register.
    """

    def __init__(self) -> None:
        self._registers: Dict[str, RegisterValue] = {UNNAMED: RegisterValue()}

    @property
    def unnamed(self) -> str:
        return self._registers[UNNAMED].text

    @staticmethod
    def is_valid_name(name: str) -> bool:
        return len(name) == 1 and (name == UNNAMED or name.isalnum() or name == "-")

    def get(self, name: str = UNNAMED) -> RegisterValue:
        return self._registers.get(name.lower(), RegisterValue())

    def set(self, name: str, value: RegisterValue) -> None:
        if name.isupper():
            existing = self._registers.get(name.lower())
            if existing is not None and existing.text:
                separator = "\n" if existing.linewise or value.linewise else ""
                value = RegisterValue(
                    text=existing.text + separator + value.text,
                    linewise=existing.linewise or value.linewise,
                )
        self._registers[name.lower()] = value
        if name != UNNAMED:
            self._registers[UNNAMED] = value

    def yank_to(self, name: str | None, text: str, *, linewise: bool = False) -> None:
        self.set(name or UNNAMED, RegisterValue(text=text, linewise=linewise))


__all__ = ["RegisterBank", "RegisterValue", "UNNAMED"]
