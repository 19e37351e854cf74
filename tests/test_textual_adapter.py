from __future__ import annotations

from typing import Any, Dict, List

import pytest

from keyforge_vim import ChallengeSpecError, Position
from keyforge_vim.adapters.textual import ChallengeController, ChallengeUIHooks, translate_key
from keyforge_vim.adapters.textual.controller import parse_cursor
from keyforge_vim.render import RenderSnapshot

CHALLENGE: Dict[str, Any] = {
    "name": "delete a word",
    "validation_type": "exact_match",
    "initial_buffer": "hello world",
    "expected_buffer": "world",
    "par_keystrokes": 2,
}


def make_controller(
    data: Dict[str, Any] | None = None,
) -> tuple[ChallengeController, List[RenderSnapshot], List[str], List[tuple[str, object | None]]]:
    snapshots: List[RenderSnapshot] = []
    statuses: List[str] = []
    events: List[tuple[str, object | None]] = []
    hooks = ChallengeUIHooks(
        update_snapshot=snapshots.append,
        update_status=statuses.append,
        handle_event=lambda name, payload: events.append((name, payload)),
    )
    controller = ChallengeController.from_challenge(data or CHALLENGE, hooks)
    return controller, snapshots, statuses, events


def test_controller_publishes_initial_snapshot() -> None:
    _, snapshots, _, _ = make_controller()

    assert snapshots[-1].lines == ("hello world",)
    assert snapshots[-1].mode_label == "NORMAL"


def test_controller_feeds_keys_and_relays_events() -> None:
    controller, snapshots, _, events = make_controller()

    assert controller.feed_key("d") is True
    assert snapshots[-1].pending_label == "d"
    assert controller.feed_key("w") is False

    assert snapshots[-1].lines == ("world",)
    assert ("buffer.change", "delete") in events
    assert any(name == "register.write" for name, _ in events)


def test_controller_validate_success_reports_efficiency() -> None:
    controller, _, statuses, _ = make_controller()

    controller.feed_keys(["d", "w"])
    result = controller.validate()

    assert result.success
    assert controller.last_result is result
    assert statuses[-1] == "Solved in 2 keys (100% efficiency)"


def test_controller_validate_failure_reports_message() -> None:
    controller, _, statuses, _ = make_controller()

    result = controller.validate()

    assert not result.success
    assert statuses[-1] == "Buffer content doesn't match expected"


def test_controller_restart_resets_session() -> None:
    controller, snapshots, statuses, _ = make_controller()
    controller.feed_keys(["x", "x"])

    controller.restart()

    assert controller.editor.text == "hello world"
    assert controller.editor.keystroke_count == 0
    assert snapshots[-1].lines == ("hello world",)
    assert statuses[-1] == "Restarted"


def test_controller_applies_cursor_start() -> None:
    controller, _, _, _ = make_controller({**CHALLENGE, "cursor_start": [0, 6]})

    controller.feed_keys(["d", "w"])

    assert controller.editor.text == "hello "


def test_controller_relays_engine_status() -> None:
    controller, _, statuses, _ = make_controller()

    controller.feed_key("u")

    assert statuses[-1] == "Already at oldest change"


def test_controller_rejects_bad_challenge() -> None:
    hooks = ChallengeUIHooks(update_snapshot=lambda snapshot: None)

    with pytest.raises(ChallengeSpecError):
        ChallengeController.from_challenge({"initial_buffer": "x"}, hooks)


@pytest.mark.parametrize(
    ("key", "character", "expected"),
    [
        ("escape", None, "Escape"),
        ("enter", "\r", "Enter"),
        ("backspace", None, "Backspace"),
        ("space", " ", " "),
        ("ctrl+r", None, "ctrl+r"),
        ("ctrl+left_square_bracket", None, "ctrl+["),
        ("a", "a", "a"),
        ("dollar_sign", "$", "$"),
        ("f5", None, None),
    ],
)
def test_translate_key(key: str, character: str | None, expected: str | None) -> None:
    assert translate_key(key, character) == expected


def test_parse_cursor() -> None:
    assert parse_cursor(None) is None
    assert parse_cursor([2, 3]) == Position(2, 3)
    with pytest.raises(ChallengeSpecError):
        parse_cursor("2,3")
