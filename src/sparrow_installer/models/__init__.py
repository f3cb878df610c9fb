"""Data models for the Sparrow installer."""

from .events import Key, KeyEvent
from .session import (
    MENU_OPTIONS,
    AppState,
    Operation,
    ProgressKind,
    ProgressState,
    Session,
    StateKind,
    StatusMessage,
    StatusSeverity,
    SystemAction,
)

__all__ = [
    "AppState",
    "Key",
    "KeyEvent",
    "MENU_OPTIONS",
    "Operation",
    "ProgressKind",
    "ProgressState",
    "Session",
    "StateKind",
    "StatusMessage",
    "StatusSeverity",
    "SystemAction",
]
