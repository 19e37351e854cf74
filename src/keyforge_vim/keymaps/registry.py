"""Keymap registry storing actions and the bindings that reference them."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Iterable, Iterator, Optional, Sequence

from keyforge_vim.runtime.telemetry import span

from .models import ActionRef, Binding


@dataclass(slots=True)
class RegistryStats:
    action_count: int
    binding_count: int
    modes: tuple[str, ...]


class KeymapConflictError(RuntimeError):
    """Raised when a new binding collides with an existing one."""

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]):
        conflicts_tuple = tuple(conflicts)
        super().__init__(
            f"Binding '{binding.id}' conflicts with {[b.id for b in conflicts_tuple]}"
        )
        self.binding = binding
        self.conflicts = conflicts_tuple


class KeymapRegistry:
    """Owns action references and binding metadata, indexed per mode."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._mode_index: Dict[str, Dict[str, set[str]]] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def get_action(self, action_id: str) -> ActionRef:
        try:
            return self._actions[action_id]
        except KeyError as exc:
            raise KeyError(f"Action '{action_id}' is not registered") from exc

    def get_binding(self, binding_id: str) -> Binding:
        try:
            return self._bindings[binding_id]
        except KeyError as exc:
            raise KeyError(f"Binding '{binding_id}' is not registered") from exc

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        if not replace and action.id in self._actions:
            raise ValueError(f"Action '{action.id}' already registered")
        self._actions[action.id] = action
        return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            metadata={"binding_id": binding.id, "mode": binding.mode},
        ) as handle:
            if binding.action_id not in self._actions:
                handle.add_metadata("missing_action", binding.action_id)
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action '{binding.action_id}'"
                )

            conflicts = self.detect_conflicts(binding, ignore=(binding.id,))
            if conflicts and not replace:
                handle.add_metadata("conflicts", ",".join(c.id for c in conflicts))
                raise KeymapConflictError(binding, conflicts)

            existing = self._bindings.get(binding.id)
            if existing is not None and not replace:
                raise ValueError(f"Binding id '{binding.id}' already registered")

            for stale in [*conflicts, *([existing] if existing else [])]:
                self._remove_binding(stale)
                self._bindings.pop(stale.id, None)

            self._bindings[binding.id] = binding
            self._index_binding(binding)
            self._revision += 1
            return binding

    def update_binding(self, binding_id: str, **changes: object) -> Binding:
        """Rebind an existing binding, e.g. ``sequence=KeySequence.from_strings("Q")``."""

        with span(
            "keymaps::update_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding_id},
        ) as handle:
            if binding_id not in self._bindings:
                handle.fail("missing_binding")
                raise KeyError(f"Binding '{binding_id}' not found")

            current = self._bindings[binding_id]
            updated = replace(current, **changes)
            if updated.action_id not in self._actions:
                handle.add_metadata("missing_action", updated.action_id)
                raise KeyError(
                    f"Binding '{binding_id}' references unknown action '{updated.action_id}'"
                )

            self._remove_binding(current)
            conflicts = self.detect_conflicts(updated)
            if conflicts:
                self._index_binding(current)
                handle.add_metadata("conflicts", ",".join(c.id for c in conflicts))
                raise KeymapConflictError(updated, conflicts)

            self._bindings[binding_id] = updated
            self._index_binding(updated)
            self._revision += 1
            return updated

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        binding = self._bindings.pop(binding_id, None)
        if binding is None:
            return None
        self._remove_binding(binding)
        self._revision += 1
        return binding

    def iter_bindings(self, mode: Optional[str] = None) -> Iterator[Binding]:
        if mode is None:
            yield from self._bindings.values()
            return
        for bucket in self._mode_index.get(mode, {}).values():
            for binding_id in sorted(bucket):
                yield self._bindings[binding_id]

    def stats(self) -> RegistryStats:
        return RegistryStats(
            action_count=len(self._actions),
            binding_count=len(self._bindings),
            modes=tuple(sorted(self._mode_index)),
        )

    def detect_conflicts(
        self, binding: Binding, *, ignore: Sequence[str] | None = None
    ) -> list[Binding]:
        ignored = set(ignore or ())
        conflicts: list[Binding] = []
        bucket = self._mode_index.get(binding.mode, {}).get(binding.key_signature, set())
        for match_id in sorted(bucket):
            if match_id in ignored:
                continue
            existing = self._bindings[match_id]
            if _contexts_overlap(binding, existing):
                conflicts.append(existing)
        return conflicts

    def _index_binding(self, binding: Binding) -> None:
        by_signature = self._mode_index.setdefault(binding.mode, {})
        by_signature.setdefault(binding.key_signature, set()).add(binding.id)

    def _remove_binding(self, binding: Binding) -> None:
        mode_bucket = self._mode_index.get(binding.mode)
        if not mode_bucket:
            return
        signatures = mode_bucket.get(binding.key_signature)
        if not signatures:
            return
        signatures.discard(binding.id)
        if not signatures:
            mode_bucket.pop(binding.key_signature, None)
        if not mode_bucket:
            self._mode_index.pop(binding.mode, None)


def _contexts_overlap(left: Binding, right: Binding) -> bool:
    """True when some flag assignment would enable both bindings."""

    left_map = left.when_map
    right_map = right.when_map
    for flag, expected in left_map.items():
        if flag in right_map and right_map[flag] != expected:
            return False
    if left.priority != right.priority and left.when != right.when:
        # the resolver orders by priority, so the tie is resolved explicitly
        return False
    return True


__all__ = [
    "KeymapConflictError",
    "KeymapRegistry",
    "RegistryStats",
]
