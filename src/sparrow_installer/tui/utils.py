"""TUI utility functions for the installer."""

from __future__ import annotations

from sparrow_installer.models.events import Key, KeyEvent

_NAMED_KEYS: dict[str, Key] = {
    "up": Key.UP,
    "down": Key.DOWN,
    "enter": Key.ENTER,
    "escape": Key.ESCAPE,
    "tab": Key.TAB,
    "backspace": Key.BACKSPACE,
}


def to_key_event(
    key: str, character: str | None, is_printable: bool
) -> KeyEvent | None:
    """Translate a Textual key press into a KeyEvent.

    Args:
        key: Textual key name ("up", "enter", "a", "ctrl+c", ...)
        character: The character produced by the key, if any
        is_printable: Whether ``character`` is printable

    Returns:
        The matching KeyEvent, or None for keys the installer ignores.
    """
    named = _NAMED_KEYS.get(key)
    if named is not None:
        return KeyEvent(named)
    if is_printable and character:
        return KeyEvent.of(character)
    return None
