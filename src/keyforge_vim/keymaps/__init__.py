"""Declarative keymap registry and trie resolver.

The default command set lives in :mod:`keyforge_vim.keymaps.defaults`; it is
imported on demand because it pulls in the action handlers.
"""

from .models import ActionRef, Binding, KeySequence, KeyStroke, WhenClause
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats
from .resolver import KeymapResolver, ResolutionMatch, ResolutionResult

__all__ = [
    "ActionRef",
    "Binding",
    "KeySequence",
    "KeyStroke",
    "WhenClause",
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
]
