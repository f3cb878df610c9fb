"""Tests for XDG paths and the optional settings file."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from sparrow_installer.config.paths import get_paths, reset_paths
from sparrow_installer.config.settings import (
    DEFAULT_INSTALL_SCRIPT,
    DEFAULT_UPDATE_COMMAND,
    Settings,
    get_settings_path,
)


def _write_settings(data: object) -> Path:
    path = get_settings_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_paths_follow_xdg_environment(tmp_path: Path) -> None:
    paths = get_paths()

    assert paths.settings_file == (
        tmp_path / "config" / "sparrow-installer" / "settings.json"
    )
    assert paths.log_file == tmp_path / "state" / "sparrow-installer" / "installer.log"


def test_paths_singleton_until_reset(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    first = get_paths()
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "elsewhere"))
    assert get_paths() is first

    reset_paths()
    assert get_paths().state_dir == tmp_path / "elsewhere" / "sparrow-installer"


def test_defaults_without_settings_file() -> None:
    settings = Settings()

    assert settings.install_script == DEFAULT_INSTALL_SCRIPT
    assert settings.update_command == DEFAULT_UPDATE_COMMAND
    assert settings.theme_file is None
    assert settings.text_file is None


def test_settings_file_overrides_commands(tmp_path: Path) -> None:
    _write_settings(
        {
            "install_script": "/opt/setup.sh",
            "update_command": "sudo -S rpm-ostree upgrade",
            "theme_file": "~/theme.toml",
        }
    )

    settings = Settings()

    assert settings.install_script == "/opt/setup.sh"
    assert settings.update_command == ("sudo", "-S", "rpm-ostree", "upgrade")
    assert settings.theme_file == Path("~/theme.toml").expanduser()


def test_empty_update_command_falls_back() -> None:
    _write_settings({"update_command": []})

    assert Settings().update_command == DEFAULT_UPDATE_COMMAND


@pytest.mark.parametrize("content", ["{not json", "[1, 2]"])
def test_unreadable_settings_are_ignored(
    content: str, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.WARNING)
    path = get_settings_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")

    settings = Settings()

    assert settings.install_script == DEFAULT_INSTALL_SCRIPT
    assert "Ignoring" in caplog.text


def test_reload_picks_up_changes() -> None:
    settings = Settings()
    _write_settings({"install_script": "/srv/new.sh"})

    settings.reload()

    assert settings.install_script == "/srv/new.sh"
