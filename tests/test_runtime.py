from __future__ import annotations

import pytest

from keyforge_vim import Editor, EngineConfig
from keyforge_vim.runtime import telemetry


def test_config_defaults() -> None:
    config = EngineConfig()

    assert config.tab_text == "\t"
    assert config.undo_limit == 0
    assert config.telemetry_preset is None


def test_config_from_env() -> None:
    config = EngineConfig.from_env(
        {
            "KEYFORGE_VIM_TAB_TEXT": "\\t",
            "KEYFORGE_VIM_UNDO_LIMIT": "5",
            "KEYFORGE_VIM_TELEMETRY_PRESET": "quiet",
        }
    )

    assert config.tab_text == "\t"
    assert config.undo_limit == 5
    assert config.telemetry_preset == "quiet"


def test_config_from_env_rejects_bad_undo_limit() -> None:
    with pytest.raises(ValueError):
        EngineConfig.from_env({"KEYFORGE_VIM_UNDO_LIMIT": "lots"})


@pytest.mark.parametrize(
    "kwargs",
    [{"tab_text": ""}, {"tab_text": "\n"}, {"undo_limit": -1}, {"telemetry_preset": "loud"}],
)
def test_config_validation(kwargs: dict[str, object]) -> None:
    with pytest.raises(ValueError):
        EngineConfig(**kwargs)  # type: ignore[arg-type]


def test_undo_limit_caps_history() -> None:
    editor = Editor("abcdef", config=EngineConfig(undo_limit=2))

    editor.handle_keys(["x", "x", "x", "u", "u", "u"])

    assert editor.text == "bcdef"
    assert editor.status_message == "Already at oldest change"


def test_configure_rejects_config_and_preset() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(config=object(), preset="quiet")


def test_unknown_preset_rejected() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(preset="loud")


def test_span_reraises_errors() -> None:
    with pytest.raises(RuntimeError):
        with telemetry.span("test::span", metadata={"k": 1}):
            raise RuntimeError("boom")
