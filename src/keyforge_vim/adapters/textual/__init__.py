"""Textual host: toolkit-free controller plus the ``ChallengeApp``.

The app module imports textual itself, so it is not imported here.
"""

from .controller import ChallengeController, ChallengeUIHooks, translate_key

__all__ = ["ChallengeController", "ChallengeUIHooks", "translate_key"]
