"""Configuration management for the Sparrow installer."""
from __future__ import annotations

from sparrow_installer.config.paths import SparrowPaths, get_paths, reset_paths
from sparrow_installer.config.settings import Settings, get_settings_path, settings
from sparrow_installer.config.theme import (
    AppConfig,
    ConfigError,
    TextConfig,
    ThemeConfig,
    load_app_config,
    parse_alignment,
    parse_color,
)

__all__ = [
    "AppConfig",
    "ConfigError",
    "Settings",
    "SparrowPaths",
    "TextConfig",
    "ThemeConfig",
    "get_paths",
    "get_settings_path",
    "load_app_config",
    "parse_alignment",
    "parse_color",
    "reset_paths",
    "settings",
]
