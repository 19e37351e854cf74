"""Engine configuration sourced from keyword arguments or the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .telemetry import ENV_PREFIX, PRESETS


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Tunables shared by every Editor built with this config."""

    tab_text: str = "\t"
    undo_limit: int = 0  # 0 keeps every snapshot
    telemetry_preset: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.tab_text:
            raise ValueError("tab_text cannot be empty")
        if "\n" in self.tab_text:
            raise ValueError("tab_text cannot contain a line separator")
        if self.undo_limit < 0:
            raise ValueError("undo_limit must be >= 0")
        if self.telemetry_preset and self.telemetry_preset.lower() not in PRESETS:
            raise ValueError(f"Unknown telemetry preset '{self.telemetry_preset}'")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "EngineConfig":
        env = os.environ if environ is None else environ

        def read(name: str) -> Optional[str]:
            return env.get(f"{ENV_PREFIX}{name}")

        undo_raw = read("UNDO_LIMIT")
        try:
            undo_limit = int(undo_raw) if undo_raw else 0
        except ValueError as exc:
            raise ValueError(f"{ENV_PREFIX}UNDO_LIMIT must be an integer") from exc

        tab_raw = read("TAB_TEXT")
        return cls(
            tab_text=tab_raw.replace("\\t", "\t") if tab_raw else "\t",
            undo_limit=undo_limit,
            telemetry_preset=read("TELEMETRY_PRESET") or None,
        )


__all__ = ["EngineConfig"]
