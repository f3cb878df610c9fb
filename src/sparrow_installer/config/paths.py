"""Centralized path management for the Sparrow installer.

Follows XDG Base Directory Specification:
- Config: $XDG_CONFIG_HOME/sparrow-installer (default: ~/.config/sparrow-installer)
- State: $XDG_STATE_HOME/sparrow-installer (default: ~/.local/state/sparrow-installer)
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

APP_DIR_NAME = "sparrow-installer"


def _xdg_config_home() -> Path:
    """Get XDG_CONFIG_HOME, defaulting to ~/.config."""
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))


def _xdg_state_home() -> Path:
    """Get XDG_STATE_HOME, defaulting to ~/.local/state."""
    return Path(os.environ.get("XDG_STATE_HOME", Path.home() / ".local" / "state"))


@dataclass
class SparrowPaths:
    """Centralized path management following XDG spec."""

    # XDG directories (computed once at init)
    _config_home: Path = field(default_factory=_xdg_config_home)
    _state_home: Path = field(default_factory=_xdg_state_home)

    @property
    def config_dir(self) -> Path:
        """Config: ~/.config/sparrow-installer/"""
        return self._config_home / APP_DIR_NAME

    @property
    def settings_file(self) -> Path:
        """Settings file: ~/.config/sparrow-installer/settings.json"""
        return self.config_dir / "settings.json"

    @property
    def state_dir(self) -> Path:
        """State: ~/.local/state/sparrow-installer/"""
        return self._state_home / APP_DIR_NAME

    @property
    def log_file(self) -> Path:
        """Default log: ~/.local/state/sparrow-installer/installer.log"""
        return self.state_dir / "installer.log"


# Singleton instance
_paths: SparrowPaths | None = None


def get_paths() -> SparrowPaths:
    """Get the paths singleton.

    XDG environment variables are read on first call; later calls return
    the same instance until reset_paths() is called.
    """
    global _paths
    if _paths is None:
        _paths = SparrowPaths()
    return _paths


def reset_paths() -> None:
    """Reset paths singleton (for testing)."""
    global _paths
    _paths = None
