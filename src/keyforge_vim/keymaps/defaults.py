"""Built-in keymaps that seed each mode with the standard command set."""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from keyforge_vim.actions import core as core_actions
from keyforge_vim.actions import insert as insert_actions
from keyforge_vim.actions import visual as visual_actions
from keyforge_vim.actions.motions import MotionKind

from .models import ActionRef, Binding, KeySequence
from .registry import KeymapRegistry

ESCAPE_TOKENS = ("Escape", "ctrl+c", "ctrl+[")
NOT_PENDING = ("!operator_pending",)
PENDING = ("operator_pending",)

MOTION_KEYS: Mapping[MotionKind, tuple[tuple[str, ...], ...]] = {
    MotionKind.LEFT: (("h",), ("Left",)),
    MotionKind.RIGHT: (("l",), ("Right",)),
    MotionKind.UP: (("k",), ("Up",)),
    MotionKind.DOWN: (("j",), ("Down",)),
    MotionKind.LINE_START: (("0",),),
    MotionKind.LINE_END: (("$",),),
    MotionKind.FIRST_NON_BLANK: (("^",),),
    MotionKind.WORD_FORWARD: (("w",),),
    MotionKind.WORD_BACKWARD: (("b",),),
    MotionKind.WORD_END: (("e",),),
    MotionKind.BIG_WORD_FORWARD: (("W",),),
    MotionKind.BIG_WORD_BACKWARD: (("B",),),
    MotionKind.BIG_WORD_END: (("E",),),
    MotionKind.FILE_START: (("g", "g"),),
    MotionKind.FILE_END: (("G",),),
    MotionKind.MATCH_BRACKET: (("%",),),
}


def _motion_actions() -> tuple[ActionRef, ...]:
    return tuple(
        ActionRef(
            id=f"motion.{kind.value}",
            handler=core_actions.motion,
            description=f"Move by {kind.value.replace('_', ' ')}",
            metadata={"motion": kind.value},
        )
        for kind in MotionKind
    )


DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    *_motion_actions(),
    ActionRef("find.f", core_actions.begin_find, "Find character forward",
              {"forward": True, "till": False}),
    ActionRef("find.F", core_actions.begin_find, "Find character backward",
              {"forward": False, "till": False}),
    ActionRef("find.t", core_actions.begin_find, "Till character forward",
              {"forward": True, "till": True}),
    ActionRef("find.T", core_actions.begin_find, "Till character backward",
              {"forward": False, "till": True}),
    ActionRef("find.repeat", core_actions.repeat_find, "Repeat last find"),
    ActionRef("find.reverse", core_actions.repeat_find, "Repeat last find reversed",
              {"reverse": True}),
    ActionRef("operator.delete", core_actions.operator, "Delete operator", {"operator": "d"}),
    ActionRef("operator.change", core_actions.operator, "Change operator", {"operator": "c"}),
    ActionRef("operator.yank", core_actions.operator, "Yank operator", {"operator": "y"}),
    ActionRef("text_object.inner", core_actions.begin_text_object, "Inner text object",
              {"inner": True}),
    ActionRef("text_object.around", core_actions.begin_text_object, "Around text object",
              {"inner": False}),
    ActionRef("core.select_register", core_actions.select_register, "Select a register"),
    ActionRef("core.replace", core_actions.begin_replace, "Replace characters"),
    ActionRef("core.delete_char", core_actions.delete_char, "Delete under cursor"),
    ActionRef("core.delete_char_before", core_actions.delete_char_before,
              "Delete before cursor"),
    ActionRef("core.substitute", core_actions.substitute, "Substitute characters"),
    ActionRef("core.substitute_line", core_actions.substitute_line, "Substitute lines"),
    ActionRef("core.insert", core_actions.insert, "Insert before cursor", {"where": "cursor"}),
    ActionRef("core.insert_line_start", core_actions.insert, "Insert at first non-blank",
              {"where": "first_non_blank"}),
    ActionRef("core.append", core_actions.insert, "Append after cursor", {"where": "after"}),
    ActionRef("core.append_line_end", core_actions.insert, "Append at line end",
              {"where": "line_end"}),
    ActionRef("core.open_below", core_actions.open_line, "Open line below", {"below": True}),
    ActionRef("core.open_above", core_actions.open_line, "Open line above", {"below": False}),
    ActionRef("core.paste_after", core_actions.paste, "Paste after", {"before": False}),
    ActionRef("core.paste_before", core_actions.paste, "Paste before", {"before": True}),
    ActionRef("core.join", core_actions.join, "Join lines"),
    ActionRef("core.undo", core_actions.undo, "Undo"),
    ActionRef("core.redo", core_actions.redo, "Redo"),
    ActionRef("core.enter_visual", core_actions.enter_visual, "Enter visual mode",
              {"linewise": False}),
    ActionRef("core.enter_visual_line", core_actions.enter_visual, "Enter visual line mode",
              {"linewise": True}),
    ActionRef("core.escape", core_actions.escape, "Abort pending command"),
    ActionRef("visual.delete", visual_actions.operate, "Delete selection", {"operator": "d"}),
    ActionRef("visual.change", visual_actions.operate, "Change selection", {"operator": "c"}),
    ActionRef("visual.yank", visual_actions.operate, "Yank selection", {"operator": "y"}),
    ActionRef("visual.toggle", visual_actions.toggle, "Toggle visual mode", {"linewise": False}),
    ActionRef("visual.toggle_line", visual_actions.toggle, "Toggle visual line mode",
              {"linewise": True}),
    ActionRef("visual.swap_anchor", visual_actions.swap_anchor, "Swap selection anchor"),
    ActionRef("visual.exit", visual_actions.exit_visual, "Leave visual mode"),
    ActionRef("insert.exit", insert_actions.exit_insert, "Leave insert mode"),
    ActionRef("insert.backspace", insert_actions.backspace, "Delete before cursor"),
    ActionRef("insert.delete", insert_actions.delete, "Delete under cursor"),
    ActionRef("insert.newline", insert_actions.newline, "Split line"),
    ActionRef("insert.tab", insert_actions.tab, "Insert tab text"),
    ActionRef("insert.left", insert_actions.move, "Cursor left", {"direction": "left"}),
    ActionRef("insert.right", insert_actions.move, "Cursor right", {"direction": "right"}),
    ActionRef("insert.up", insert_actions.move, "Cursor up", {"direction": "up"}),
    ActionRef("insert.down", insert_actions.move, "Cursor down", {"direction": "down"}),
)


def _binding(
    mode: str,
    keys: str | Sequence[str],
    action_id: str,
    *,
    when: Sequence[str] = (),
) -> Binding:
    tokens = (keys,) if isinstance(keys, str) else tuple(keys)
    return Binding(
        id=f"{mode}.{action_id}[{' '.join(tokens)}]",
        mode=mode,
        sequence=KeySequence.from_strings(*tokens),
        action_id=action_id,
        when=tuple(when),
    )


def _shared_bindings(mode: str) -> list[Binding]:
    """Motions and finds: identical in Normal, Operator-pending and Visual."""

    bindings = [
        _binding(mode, keys, f"motion.{kind.value}")
        for kind, sequences in MOTION_KEYS.items()
        for keys in sequences
    ]
    bindings += [
        _binding(mode, "f", "find.f"),
        _binding(mode, "F", "find.F"),
        _binding(mode, "t", "find.t"),
        _binding(mode, "T", "find.T"),
        _binding(mode, ";", "find.repeat"),
        _binding(mode, ",", "find.reverse"),
    ]
    return bindings


_NORMAL_COMMANDS = (
    ('"', "core.select_register"),
    ("r", "core.replace"),
    ("x", "core.delete_char"),
    ("X", "core.delete_char_before"),
    ("s", "core.substitute"),
    ("S", "core.substitute_line"),
    ("i", "core.insert"),
    ("I", "core.insert_line_start"),
    ("a", "core.append"),
    ("A", "core.append_line_end"),
    ("o", "core.open_below"),
    ("O", "core.open_above"),
    ("p", "core.paste_after"),
    ("P", "core.paste_before"),
    ("J", "core.join"),
    ("u", "core.undo"),
    ("ctrl+r", "core.redo"),
    ("v", "core.enter_visual"),
    ("V", "core.enter_visual_line"),
)


def _normal_bindings() -> list[Binding]:
    bindings = _shared_bindings("normal")
    bindings += [
        _binding("normal", "d", "operator.delete"),
        _binding("normal", "c", "operator.change"),
        _binding("normal", "y", "operator.yank"),
        _binding("normal", "i", "text_object.inner", when=PENDING),
        _binding("normal", "a", "text_object.around", when=PENDING),
    ]
    bindings += [
        _binding("normal", key, action_id, when=NOT_PENDING)
        for key, action_id in _NORMAL_COMMANDS
    ]
    bindings += [_binding("normal", key, "core.escape") for key in ESCAPE_TOKENS]
    return bindings


def _visual_bindings() -> list[Binding]:
    bindings = _shared_bindings("visual")
    bindings += [
        _binding("visual", "i", "text_object.inner"),
        _binding("visual", "a", "text_object.around"),
        _binding("visual", "d", "visual.delete"),
        _binding("visual", "x", "visual.delete"),
        _binding("visual", "c", "visual.change"),
        _binding("visual", "s", "visual.change"),
        _binding("visual", "y", "visual.yank"),
        _binding("visual", "v", "visual.toggle"),
        _binding("visual", "V", "visual.toggle_line"),
        _binding("visual", "o", "visual.swap_anchor"),
    ]
    bindings += [_binding("visual", key, "visual.exit") for key in ESCAPE_TOKENS]
    return bindings


def _insert_bindings() -> list[Binding]:
    bindings = [_binding("insert", key, "insert.exit") for key in ESCAPE_TOKENS]
    bindings += [
        _binding("insert", "Backspace", "insert.backspace"),
        _binding("insert", "ctrl+h", "insert.backspace"),
        _binding("insert", "Delete", "insert.delete"),
        _binding("insert", "Enter", "insert.newline"),
        _binding("insert", "Tab", "insert.tab"),
        _binding("insert", "Left", "insert.left"),
        _binding("insert", "Right", "insert.right"),
        _binding("insert", "Up", "insert.up"),
        _binding("insert", "Down", "insert.down"),
    ]
    return bindings


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    *_normal_bindings(),
    *_visual_bindings(),
    *_insert_bindings(),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    include_actions: Sequence[str] | None = None,
    exclude_actions: Sequence[str] | None = None,
    include_bindings: Sequence[str] | None = None,
    exclude_bindings: Sequence[str] | None = None,
    per_mode_overrides: Mapping[str, Iterable[Binding]] | None = None,
) -> None:
    """Register built-in actions and bindings for every mode."""

    allowed_actions = _build_filters(include_actions, exclude_actions)
    allowed_bindings = _build_filters(include_bindings, exclude_bindings)

    for action in DEFAULT_ACTIONS:
        if not _selected(action.id, allowed_actions):
            continue
        registry.register_action(action, replace=replace)

    for binding in DEFAULT_BINDINGS:
        if not _selected(binding.id, allowed_bindings):
            continue
        if not _selected(binding.action_id, allowed_actions):
            continue
        registry.register_binding(binding, replace=replace)

    if extra_bindings:
        for binding in extra_bindings:
            registry.register_binding(binding, replace=replace)

    if per_mode_overrides:
        for mode, bindings in per_mode_overrides.items():
            for binding in bindings:
                if binding.mode != mode:
                    raise ValueError(
                        f"Override binding '{binding.id}' must target mode '{mode}'"
                    )
                registry.register_binding(binding, replace=True)


def _build_filters(
    include: Sequence[str] | None, exclude: Sequence[str] | None
) -> tuple[set[str] | None, set[str]]:
    include_set = set(include) if include else None
    exclude_set = set(exclude or ())
    return include_set, exclude_set


def _selected(item_id: str, filters: tuple[set[str] | None, set[str]]) -> bool:
    include, exclude = filters
    if include is not None and item_id not in include:
        return False
    if item_id in exclude:
        return False
    return True


__all__ = ["DEFAULT_ACTIONS", "DEFAULT_BINDINGS", "ESCAPE_TOKENS", "load_default_keymaps"]
