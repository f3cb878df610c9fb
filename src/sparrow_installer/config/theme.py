"""Theme and text documents.

Both documents are TOML files shipped with the package (``data/theme.toml``
and ``data/text.toml``). They are loaded once at startup into frozen
dataclasses and shared read-only by the state machine and the renderer.
Either file can be replaced through the ``theme_file``/``text_file``
settings.
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, fields
from importlib import resources
from pathlib import Path
from typing import Any, TypeVar

from rich.console import JustifyMethod

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ConfigError(Exception):
    """Raised when a theme or text document is missing, malformed or incomplete."""


# --- theme.toml ---


@dataclass(frozen=True)
class ThemeColors:
    primary: str
    title_bg: str
    title_fg: str
    main_bg: str
    content_bg: str
    content_fg: str
    description_bg: str
    description_fg: str
    selected_bg: str
    selected_fg: str
    disabled_bg: str
    disabled_fg: str
    confirmation_bg: str
    confirmation_fg: str
    success_bg: str
    success_fg: str
    error_bg: str
    error_fg: str
    fail_bg: str
    fail_fg: str
    dry_run_fg: str


@dataclass(frozen=True)
class UiConfig:
    title_height: int
    description_height: int
    show_separator: bool
    separator_char: str
    dry_run_icon: str
    selection_prefix: str
    disabled_suffix: str


@dataclass(frozen=True)
class LayoutConfig:
    title_alignment: str
    description_alignment: str
    confirmation_alignment: str
    content_padding: int


@dataclass(frozen=True)
class ThemeProgressConfig:
    bar_color: str
    border_active_color: str
    spinner_speed: int  # ms per spinner frame
    progress_bar_speed: int  # ms per bar step


@dataclass(frozen=True)
class ThemeConfig:
    colors: ThemeColors
    ui: UiConfig
    layout: LayoutConfig
    progress: ThemeProgressConfig


# --- text.toml ---


@dataclass(frozen=True)
class Messages:
    welcome: str
    confirmation_prompt: str
    processing: str
    dry_run_testing: str
    dry_run_script_output: str
    dry_run_update_output: str
    dry_run_misc_text: str
    dry_run_confirm_fallback: str
    simulation_complete: str
    simulation_cancelled: str
    operation_success: str
    custom_disabled: str
    option_disabled: str
    navigation_help: str
    confirmation_help: str
    review_help: str
    processing_help: str
    disabled_help: str
    password_help: str
    password_prompt: str
    password_label: str
    password_instructions: str
    password_empty_error: str
    password_auth_failed: str
    confirm_default_install: str
    confirm_system_update: str
    progress_installing: str
    progress_updating: str
    progress_rebooting: str
    progress_poweroff: str
    spinner_chars: tuple[str, ...]


@dataclass(frozen=True)
class UiText:
    app_title: str
    dry_run_indicator: str
    default_title: str
    default_description: str
    custom_title: str
    custom_description: str
    update_title: str
    update_description: str
    exit_title: str
    exit_description: str
    success_prefix: str
    error_prefix: str
    fail_prefix: str


@dataclass(frozen=True)
class ProgressConfig:
    bar_fill_char: str
    bar_empty_char: str
    countdown_seconds: int
    simulation_timeout_seconds: int


@dataclass(frozen=True)
class TextConfig:
    messages: Messages
    ui_text: UiText
    progress: ProgressConfig


@dataclass(frozen=True)
class AppConfig:
    """Theme and text loaded together; the single read-only config object."""

    theme: ThemeConfig
    text: TextConfig


# --- token parsing ---

_COLORS: dict[str, str] = {
    "Black": "black",
    "Red": "red",
    "Green": "green",
    "Yellow": "yellow",
    "Blue": "blue",
    "Magenta": "magenta",
    "Cyan": "cyan",
    "Gray": "white",
    "DarkGray": "bright_black",
    "LightRed": "bright_red",
    "LightGreen": "bright_green",
    "LightYellow": "bright_yellow",
    "LightBlue": "bright_blue",
    "LightMagenta": "bright_magenta",
    "LightCyan": "bright_cyan",
    "White": "bright_white",
    "Gold": "rgb(255,215,0)",
}
DEFAULT_COLOR = _COLORS["White"]

_ALIGNMENTS: dict[str, JustifyMethod] = {
    "Left": "left",
    "Center": "center",
    "Right": "right",
}
DEFAULT_ALIGNMENT: JustifyMethod = "center"


def parse_color(token: str) -> str:
    """Map a theme color token to a Rich color; unknown tokens become white."""
    return _COLORS.get(token, DEFAULT_COLOR)


def parse_alignment(token: str) -> JustifyMethod:
    """Map a theme alignment token to a Rich justify value (default center)."""
    return _ALIGNMENTS.get(token, DEFAULT_ALIGNMENT)


# --- loading ---


def _read_document(path: Path | None, bundled_name: str) -> dict[str, Any]:
    try:
        if path is None:
            source = f"<bundled {bundled_name}>"
            content = (
                resources.files("sparrow_installer.config")
                .joinpath("data", bundled_name)
                .read_text(encoding="utf-8")
            )
        else:
            source = str(path)
            content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path or bundled_name}: {e}") from e

    try:
        data = tomllib.loads(content)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {source}: {e}") from e

    logger.info("Loaded %s from %s", bundled_name, source)
    return data


def _section(cls: type[T], data: dict[str, Any], name: str) -> T:
    raw = data.get(name)
    if not isinstance(raw, dict):
        raise ConfigError(f"Missing [{name}] section")

    values: dict[str, Any] = {}
    for f in fields(cls):  # type: ignore[arg-type]
        if f.name not in raw:
            raise ConfigError(f"Missing key '{f.name}' in [{name}]")
        value = raw[f.name]
        values[f.name] = tuple(value) if isinstance(value, list) else value
    return cls(**values)


def load_theme(path: Path | None = None) -> ThemeConfig:
    """Load theme.toml (bundled copy unless a path is given)."""
    data = _read_document(path, "theme.toml")
    return ThemeConfig(
        colors=_section(ThemeColors, data, "colors"),
        ui=_section(UiConfig, data, "ui"),
        layout=_section(LayoutConfig, data, "layout"),
        progress=_section(ThemeProgressConfig, data, "progress"),
    )


def load_text(path: Path | None = None) -> TextConfig:
    """Load text.toml (bundled copy unless a path is given)."""
    data = _read_document(path, "text.toml")
    text = TextConfig(
        messages=_section(Messages, data, "messages"),
        ui_text=_section(UiText, data, "ui_text"),
        progress=_section(ProgressConfig, data, "progress"),
    )
    if not text.messages.spinner_chars:
        raise ConfigError("[messages] spinner_chars must not be empty")
    return text


def load_app_config(
    theme_path: Path | None = None, text_path: Path | None = None
) -> AppConfig:
    """Load both documents once at startup."""
    return AppConfig(theme=load_theme(theme_path), text=load_text(text_path))
