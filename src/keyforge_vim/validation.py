"""Challenge validation: compare a finished session against its goal.

Validation only reads the Editor (buffer text, cursor, keystroke count).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Mapping, Optional

from keyforge_vim.runtime.telemetry import record_event

if TYPE_CHECKING:  # pragma: no cover
    from keyforge_vim.editor import Editor


class ValidationKind:
    EXACT_MATCH = "exact_match"
    CONTAINS = "contains"
    CURSOR_POSITION = "cursor_position"
    DIFFERENT = "different"
    PATTERN = "pattern"
    FUNCTION_EXISTS = "function_exists"


class ChallengeSpecError(ValueError):
    """Raised when a challenge mapping cannot describe a valid goal."""


@dataclass(frozen=True, slots=True)
class ChallengeSpec:
    validation_type: str
    expected_buffer: str = ""
    expected_content: str = ""
    expected_cursor: Optional[tuple[int, int]] = None
    pattern: str = ""
    function_name: str = ""
    initial_buffer: str = ""
    par_keystrokes: int = 0

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ChallengeSpec":
        """Build a spec from challenge data; unrelated keys are ignored."""

        kind = data.get("validation_type")
        if not kind:
            raise ChallengeSpecError("challenge is missing 'validation_type'")

        cursor = data.get("expected_cursor")
        expected_cursor: Optional[tuple[int, int]] = None
        if cursor is not None:
            if isinstance(cursor, (str, bytes)):
                raise ChallengeSpecError(
                    f"'expected_cursor' must be [line, col], got {cursor!r}"
                )
            try:
                line, col = (int(value) for value in cursor)
            except (TypeError, ValueError) as exc:
                raise ChallengeSpecError(
                    f"'expected_cursor' must be [line, col], got {cursor!r}"
                ) from exc
            expected_cursor = (line, col)

        try:
            par = int(data.get("par_keystrokes") or 0)
        except (TypeError, ValueError) as exc:
            raise ChallengeSpecError("'par_keystrokes' must be an integer") from exc

        return cls(
            validation_type=str(kind),
            expected_buffer=str(data.get("expected_buffer") or ""),
            expected_content=str(data.get("expected_content") or ""),
            expected_cursor=expected_cursor,
            pattern=str(data.get("pattern") or ""),
            function_name=str(data.get("function_name") or ""),
            initial_buffer=str(data.get("initial_buffer") or ""),
            par_keystrokes=par,
        )


@dataclass(frozen=True, slots=True)
class ValidationResult:
    success: bool
    efficiency: float = 0.0
    message: str = ""


def normalize_buffer(text: str) -> str:
    return text.rstrip("\r\n").replace("\r\n", "\n")


def function_patterns(name: str) -> tuple[str, ...]:
    quoted = re.escape(name)
    return (
        rf"function\s+{quoted}\s*\(",
        rf"def\s+{quoted}\s*\(",
        rf"func\s+{quoted}\s*\(",
        rf"{quoted}\s*=\s*function",
        rf"const\s+{quoted}\s*=",
        rf"{quoted}\s*=\s*\(",
    )


def function_exists(content: str, name: str) -> bool:
    return any(re.search(pattern, content) for pattern in function_patterns(name))


def _check(editor: "Editor", spec: ChallengeSpec) -> tuple[bool, str]:
    text = editor.buffer.text
    kind = spec.validation_type

    if kind == ValidationKind.EXACT_MATCH:
        ok = normalize_buffer(text) == normalize_buffer(spec.expected_buffer)
        return ok, "" if ok else "Buffer content doesn't match expected"
    if kind == ValidationKind.CONTAINS:
        ok = spec.expected_content in text
        return ok, "" if ok else f"Buffer should contain: {spec.expected_content}"
    if kind == ValidationKind.CURSOR_POSITION:
        if spec.expected_cursor is None:
            return False, "Challenge has no expected cursor position"
        ok = editor.cursor.as_tuple() == tuple(spec.expected_cursor)
        return ok, "" if ok else "Cursor not at expected position"
    if kind == ValidationKind.DIFFERENT:
        ok = normalize_buffer(text) != normalize_buffer(spec.initial_buffer)
        return ok, "" if ok else "Buffer content unchanged"
    if kind == ValidationKind.PATTERN:
        try:
            ok = re.search(spec.pattern, text) is not None
        except re.error as exc:
            return False, f"Invalid pattern: {exc}"
        return ok, "" if ok else "Buffer doesn't match required pattern"
    if kind == ValidationKind.FUNCTION_EXISTS:
        ok = function_exists(text, spec.function_name)
        return ok, "" if ok else f"Function {spec.function_name} not found"
    # unknown kinds pass
    return True, ""


def efficiency(success: bool, par: int, actual: int) -> float:
    """``par / actual`` capped at 1.0; 1.0 on success without a par; 0.0 on failure."""

    if not success:
        return 0.0
    if par > 0 and actual > 0:
        return min(par / actual, 1.0)
    return 1.0


def validate(editor: "Editor", spec: ChallengeSpec) -> ValidationResult:
    success, message = _check(editor, spec)
    result = ValidationResult(
        success=success,
        efficiency=efficiency(success, spec.par_keystrokes, editor.keystroke_count),
        message=message,
    )
    record_event(
        "challenge.validate",
        level="info" if success else "warning",
        data={
            "kind": spec.validation_type,
            "success": success,
            "efficiency": round(result.efficiency, 3),
            "keystrokes": editor.keystroke_count,
        },
    )
    return result


__all__ = [
    "ChallengeSpec",
    "ChallengeSpecError",
    "ValidationKind",
    "ValidationResult",
    "efficiency",
    "function_exists",
    "normalize_buffer",
    "validate",
]
