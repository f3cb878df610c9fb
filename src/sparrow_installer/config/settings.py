"""Optional operator settings loaded from the XDG config directory."""

import json
import logging
from pathlib import Path
from typing import Any

from sparrow_installer.config.paths import get_paths

logger = logging.getLogger(__name__)

DEFAULT_INSTALL_SCRIPT = "/usr/share/hypr/end-4_installer/setup.sh"
DEFAULT_UPDATE_COMMAND = ("sudo", "-S", "bootc", "update", "--apply")


def get_settings_path() -> Path:
    """Get the path to the settings file."""
    return get_paths().settings_file


class Settings:
    """Read-only overrides for the installer.

    The file is optional. A missing or unreadable file leaves every
    property at its built-in default.
    """

    _defaults: dict[str, Any] = {
        "install_script": DEFAULT_INSTALL_SCRIPT,
        "update_command": list(DEFAULT_UPDATE_COMMAND),
    }

    def __init__(self) -> None:
        self._data: dict[str, Any] = {}
        self._load()

    def _load(self) -> None:
        """Load settings from disk."""
        path = get_settings_path()
        if not path.exists():
            self._data = {}
            return
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Ignoring unreadable settings file %s: %s", path, e)
            self._data = {}
            return
        if not isinstance(data, dict):
            logger.warning("Ignoring settings file %s: not a JSON object", path)
            self._data = {}
            return
        self._data = data
        logger.info("Loaded settings from %s", path)

    def reload(self) -> None:
        """Re-read the settings file."""
        self._load()

    def get(self, key: str) -> Any:
        """Get a setting value, falling back to default."""
        return self._data.get(key, self._defaults.get(key))

    @property
    def install_script(self) -> str:
        """Path of the default-install shell script."""
        return str(self.get("install_script"))

    @property
    def update_command(self) -> tuple[str, ...]:
        """Argv of the system update command; reads the password on stdin."""
        raw = self.get("update_command")
        if isinstance(raw, str):
            raw = raw.split()
        if not isinstance(raw, list) or not raw:
            return DEFAULT_UPDATE_COMMAND
        return tuple(str(part) for part in raw)

    @property
    def theme_file(self) -> Path | None:
        """Optional replacement for the bundled theme.toml."""
        return self._optional_path("theme_file")

    @property
    def text_file(self) -> Path | None:
        """Optional replacement for the bundled text.toml."""
        return self._optional_path("text_file")

    def _optional_path(self, key: str) -> Path | None:
        saved = self._data.get(key)
        if not saved:
            return None
        return Path(str(saved)).expanduser()


# Global settings instance
settings = Settings()
