"""Executable Textual app that plays a keystroke challenge."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

try:  # pragma: no cover - imported only when the app is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use keyforge_vim.adapters.textual.app"
    ) from exc

from keyforge_vim.render import RenderSnapshot
from keyforge_vim.runtime import telemetry
from keyforge_vim.runtime.config import EngineConfig

from .controller import ChallengeController, ChallengeUIHooks, translate_key

CURSOR_STYLE = "reverse"
SELECTION_STYLE = "on dark_blue"


def render_lines(snapshot: RenderSnapshot) -> Text:
    """Build the buffer view with cursor and selection highlighting."""

    text = Text()
    for line_no, line in enumerate(snapshot.lines):
        # one trailing cell so the cursor is visible past the last character
        cells = line + " "
        for col, char in enumerate(cells):
            style = ""
            if snapshot.is_in_visual_selection(line_no, col) and col < max(len(line), 1):
                style = SELECTION_STYLE
            if (line_no, col) == snapshot.cursor.as_tuple():
                style = CURSOR_STYLE
            text.append(char, style=style or None)
        if line_no < len(snapshot.lines) - 1:
            text.append("\n")
    return text


def status_line(snapshot: RenderSnapshot) -> str:
    parts = [f"-- {snapshot.mode_label} --"]
    pending = f"{snapshot.count_label}{snapshot.pending_label}"
    if pending:
        parts.append(pending)
    parts.append(f"{snapshot.cursor.line + 1}:{snapshot.cursor.col + 1}")
    return "  ".join(parts)


class ChallengeApp(App[None]):
    """Minimal Textual UI embedding the editing engine."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
		content-align: left top;
		overflow: auto;
	}

	#mode-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-2;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
        ("ctrl+s", "validate", "Check"),
        ("ctrl+n", "restart", "Restart"),
    ]

    def __init__(
        self, challenge: Mapping[str, Any], *, config: Optional[EngineConfig] = None
    ) -> None:
        super().__init__()
        self._challenge = dict(challenge)
        self._config = config
        self.controller: ChallengeController | None = None
        self._buffer_widget: Static | None = None
        self._mode_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view")
            yield self._buffer_widget
        self._mode_widget = Static("", id="mode-line")
        self._status_widget = Static("", id="status-line")
        yield self._mode_widget
        yield self._status_widget
        yield Footer()

    async def on_mount(self) -> None:
        self.title = str(self._challenge.get("name", "keyforge"))
        self.sub_title = str(self._challenge.get("description", ""))
        hooks = ChallengeUIHooks(
            update_snapshot=self._update_snapshot,
            update_status=self._update_status,
            log=self._log_line,
        )
        self.controller = ChallengeController.from_challenge(
            self._challenge, hooks, config=self._config
        )

    async def on_key(self, event: events.Key) -> None:
        if not self.controller or event.key in {"ctrl+q", "ctrl+s", "ctrl+n"}:
            return
        token = translate_key(event.key, event.character)
        if token is None:
            return
        self.controller.feed_key(token)
        event.stop()

    def action_validate(self) -> None:
        if self.controller:
            self.controller.validate()

    def action_restart(self) -> None:
        if self.controller:
            self.controller.restart()

    def _update_snapshot(self, snapshot: RenderSnapshot) -> None:
        if self._buffer_widget:
            self._buffer_widget.update(render_lines(snapshot))
        if self._mode_widget:
            self._mode_widget.update(status_line(snapshot))
        if self._status_widget:
            self._status_widget.update(snapshot.status)

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)

    def _log_line(self, line: str) -> None:
        telemetry.get_logger().debug(line)


def load_challenge(path: Path) -> Mapping[str, Any]:
    with path.open(encoding="utf-8") as handle:
        data = json.load(handle)
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a JSON object")
    return data


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play a keyforge editing challenge.")
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--challenge",
        type=Path,
        help="JSON challenge file (validation_type, initial_buffer, ...)",
    )
    source.add_argument(
        "--text",
        default=None,
        help="Free practice on this text instead of a challenge",
    )
    parser.add_argument(
        "--telemetry-preset",
        default=None,
        choices=telemetry.PRESETS,
        help="telelog preset to configure before starting",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.challenge is not None:
        challenge = load_challenge(args.challenge)
    else:
        challenge = {
            "name": "practice",
            "validation_type": "different",
            "initial_buffer": args.text or "",
        }
    config = EngineConfig.from_env()
    if args.telemetry_preset:
        config = EngineConfig(
            tab_text=config.tab_text,
            undo_limit=config.undo_limit,
            telemetry_preset=args.telemetry_preset,
        )
    ChallengeApp(challenge, config=config).run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
