"""Modal (vim-style) text-editing engine for keystroke challenges."""

from .buffer import Buffer, Position, Range
from .editor import Editor
from .modes import EditorMode, WaitingFor
from .render import RenderSnapshot
from .runtime import EngineConfig
from .validation import ChallengeSpec, ChallengeSpecError, ValidationResult, validate

__all__ = [
    "Buffer",
    "ChallengeSpec",
    "ChallengeSpecError",
    "Editor",
    "EditorMode",
    "EngineConfig",
    "Position",
    "Range",
    "RenderSnapshot",
    "ValidationResult",
    "WaitingFor",
    "validate",
]

__version__ = "0.1.0"
