from __future__ import annotations

from typing import Any

import pytest

from keyforge_vim import ChallengeSpec, ChallengeSpecError, Editor, validate
from keyforge_vim.validation import efficiency, function_exists, normalize_buffer


def make_spec(**data: Any) -> ChallengeSpec:
    return ChallengeSpec.from_mapping(data)


def test_exact_match_ignores_trailing_newline() -> None:
    editor = Editor("hello world")
    editor.handle_keys(["d", "w"])

    result = validate(editor, make_spec(validation_type="exact_match", expected_buffer="world\n"))

    assert result.success
    assert result.message == ""


def test_exact_match_failure_message() -> None:
    result = validate(
        Editor("hello"), make_spec(validation_type="exact_match", expected_buffer="bye")
    )

    assert not result.success
    assert result.efficiency == 0.0
    assert result.message == "Buffer content doesn't match expected"


def test_contains() -> None:
    spec = make_spec(validation_type="contains", expected_content="needle")

    assert validate(Editor("hay needle hay"), spec).success
    failed = validate(Editor("hay"), spec)
    assert failed.message == "Buffer should contain: needle"


def test_cursor_position() -> None:
    spec = make_spec(validation_type="cursor_position", expected_cursor=[0, 4])
    editor = Editor("hello world")

    editor.handle_keys(["f", "o"])

    assert validate(editor, spec).success
    editor.handle_key("l")
    assert validate(editor, spec).message == "Cursor not at expected position"


def test_cursor_position_without_expected_cursor_fails() -> None:
    result = validate(Editor("x"), make_spec(validation_type="cursor_position"))

    assert not result.success
    assert result.message == "Challenge has no expected cursor position"


def test_different() -> None:
    spec = make_spec(validation_type="different", initial_buffer="abc")
    editor = Editor("abc")

    assert validate(editor, spec).message == "Buffer content unchanged"
    editor.handle_key("x")
    assert validate(editor, spec).success


def test_pattern() -> None:
    spec = make_spec(validation_type="pattern", pattern=r"^\d+ items$")

    assert validate(Editor("42 items"), spec).success
    assert validate(Editor("many items"), spec).message == "Buffer doesn't match required pattern"


def test_invalid_pattern_is_a_failed_validation() -> None:
    result = validate(Editor("x"), make_spec(validation_type="pattern", pattern="("))

    assert not result.success
    assert result.message.startswith("Invalid pattern:")


@pytest.mark.parametrize(
    "source",
    [
        "function greet(name) {}",
        "def greet(name):",
        "func greet() {",
        "greet = function () {}",
        "const greet = () => 1",
        "greet = (x) => x",
    ],
)
def test_function_exists_patterns(source: str) -> None:
    assert function_exists(source, "greet")


def test_function_exists_failure_message() -> None:
    result = validate(
        Editor("def other():"), make_spec(validation_type="function_exists", function_name="greet")
    )

    assert not result.success
    assert result.message == "Function greet not found"


def test_function_name_is_escaped() -> None:
    assert not function_exists("def greetXing():", "greet.ing")


def test_unknown_kind_passes() -> None:
    assert validate(Editor(""), make_spec(validation_type="mystery")).success


def test_efficiency_against_par() -> None:
    assert efficiency(True, par=4, actual=8) == 0.5
    assert efficiency(True, par=4, actual=2) == 1.0
    assert efficiency(True, par=0, actual=9) == 1.0
    assert efficiency(False, par=4, actual=4) == 0.0


def test_validate_uses_keystroke_count() -> None:
    editor = Editor("hello world")
    editor.handle_keys(["d", "w", "u", "d", "w"])

    result = validate(
        editor,
        make_spec(validation_type="exact_match", expected_buffer="world", par_keystrokes=2),
    )

    assert result.success
    assert result.efficiency == pytest.approx(0.4)


def test_from_mapping_requires_kind() -> None:
    with pytest.raises(ChallengeSpecError):
        ChallengeSpec.from_mapping({"expected_buffer": "x"})


@pytest.mark.parametrize("cursor", ["0,1", [1], [1, "x"], 5])
def test_from_mapping_rejects_malformed_cursor(cursor: Any) -> None:
    with pytest.raises(ChallengeSpecError):
        ChallengeSpec.from_mapping({"validation_type": "cursor_position", "expected_cursor": cursor})


def test_from_mapping_rejects_bad_par() -> None:
    with pytest.raises(ChallengeSpecError):
        ChallengeSpec.from_mapping({"validation_type": "different", "par_keystrokes": "many"})


def test_from_mapping_ignores_unrelated_keys() -> None:
    spec = ChallengeSpec.from_mapping(
        {"validation_type": "exact_match", "expected_buffer": "x", "name": "demo", "hint": "dw"}
    )

    assert spec.expected_buffer == "x"
    assert spec.expected_cursor is None


def test_normalize_buffer() -> None:
    assert normalize_buffer("a\r\nb\n") == "a\nb"
