"""Pure motion, text-object and operator primitives.

The key-bound handler modules (``core``, ``visual``, ``insert``) are imported
by :mod:`keyforge_vim.keymaps.defaults` where they are registered.
"""

from .motions import (
    EXCLUSIVE_MOTIONS,
    LINEWISE_MOTIONS,
    FindState,
    MotionKind,
    execute_motion,
    find_char,
    match_bracket,
)
from .operators import Operator, execute_operator
from .text_objects import TextObjectKind, get_text_object_range, parse_text_object

__all__ = [
    "EXCLUSIVE_MOTIONS",
    "FindState",
    "LINEWISE_MOTIONS",
    "MotionKind",
    "Operator",
    "TextObjectKind",
    "execute_motion",
    "execute_operator",
    "find_char",
    "get_text_object_range",
    "match_bracket",
    "parse_text_object",
]
