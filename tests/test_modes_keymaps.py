from __future__ import annotations

from keyforge_vim import Editor, EditorMode, Position
from keyforge_vim.keymaps import ActionRef, Binding, KeySequence, KeymapRegistry
from keyforge_vim.keymaps.defaults import load_default_keymaps
from keyforge_vim.modes import (
    GPrefix,
    InsertMode,
    ModeBus,
    NormalMode,
    NormalState,
    OperatorPendingState,
)
from keyforge_vim.modes.base_mode import is_count_digit, is_printable


def make_registry() -> KeymapRegistry:
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    return registry


def test_normal_mode_uses_keymap_binding() -> None:
    editor = Editor("abc")
    mode = NormalMode(editor)

    result = mode.handle_key("i")

    assert result.consumed is True
    assert result.pending is False
    assert editor.mode is EditorMode.INSERT


def test_insert_mode_escape_binding() -> None:
    editor = Editor("abc")
    editor.enter_insert()
    mode = InsertMode(editor)

    result = mode.handle_key("Escape")

    assert result.consumed is True
    assert editor.mode is EditorMode.NORMAL


def test_normal_mode_pending_sequence() -> None:
    editor = Editor("one\ntwo", cursor=Position(1, 0))
    mode = NormalMode(editor)

    pending = mode.handle_key("g")
    assert pending.status == "pending"
    assert pending.consumed is True
    assert editor.state == NormalState(GPrefix(("g",)))

    mode.handle_key("g")
    assert editor.cursor == Position(0, 0)
    assert editor.state == NormalState()


def test_pending_prefix_then_unknown_key_resets() -> None:
    editor = Editor("abc")

    editor.handle_keys(["g", "x"])

    assert editor.state == NormalState()
    assert editor.text == "abc"


def test_custom_multi_key_binding() -> None:
    registry = make_registry()
    registry.register_binding(
        Binding(
            id="normal.core.delete_char[g x]",
            mode="normal",
            sequence=KeySequence.from_strings("g", "x"),
            action_id="core.delete_char",
        )
    )
    editor = Editor("abc", registry=registry)

    assert editor.handle_key("g") is True
    editor.handle_key("x")

    assert editor.text == "bc"


def test_custom_action_receives_editor_and_match() -> None:
    registry = make_registry()
    calls: list[tuple[object, str]] = []
    registry.register_action(
        ActionRef(
            id="custom.record",
            handler=lambda editor, match: calls.append((editor, match.binding.id)),
            metadata={"tag": "demo"},
        )
    )
    registry.register_binding(
        Binding(
            id="normal.custom.record[Q]",
            mode="normal",
            sequence=KeySequence.from_strings("Q"),
            action_id="custom.record",
            when=("!operator_pending",),
        )
    )
    editor = Editor("abc", registry=registry)

    editor.handle_keys(["2", "Q", "l"])

    assert calls == [(editor, "normal.custom.record[Q]")]
    assert editor.count == 0
    assert editor.cursor == Position(0, 1)


def test_rebinding_a_command_key() -> None:
    registry = make_registry()
    editor = Editor("abc", registry=registry)

    registry.update_binding(
        "normal.core.delete_char[x]", sequence=KeySequence.from_strings("Q")
    )
    editor.handle_key("x")
    assert editor.text == "abc"

    editor.handle_key("Q")
    assert editor.text == "bc"


def test_operator_pending_flag_routes_i() -> None:
    editor = Editor("hello world")

    editor.handle_key("d")
    assert isinstance(editor.state, OperatorPendingState)

    editor.handle_keys(["i", "w"])
    assert editor.text == " world"
    assert editor.mode is EditorMode.NORMAL


def test_count_digit_rules() -> None:
    assert is_count_digit("1", 0)
    assert not is_count_digit("0", 0)
    assert is_count_digit("0", 3)
    assert not is_count_digit("Enter", 0)


def test_is_printable() -> None:
    assert is_printable("a")
    assert is_printable("é")
    assert not is_printable("Tab")
    assert not is_printable("\t")


def test_mode_bus_unsubscribe() -> None:
    bus = ModeBus()
    seen: list[object] = []

    bus.subscribe("status", seen.append)
    bus.emit("status", "one")
    bus.unsubscribe("status", seen.append)
    bus.emit("status", "two")

    assert seen == ["one"]
