from __future__ import annotations

import pytest

from sparrow_installer.models.events import Key, KeyEvent
from sparrow_installer.tui.utils import to_key_event


@pytest.mark.parametrize(
    ("name", "key"),
    [
        ("up", Key.UP),
        ("down", Key.DOWN),
        ("enter", Key.ENTER),
        ("escape", Key.ESCAPE),
        ("tab", Key.TAB),
        ("backspace", Key.BACKSPACE),
    ],
)
def test_named_keys(name: str, key: Key) -> None:
    assert to_key_event(name, None, False) == KeyEvent(key)


def test_printable_characters_become_char_events() -> None:
    assert to_key_event("a", "a", True) == KeyEvent.of("a")
    assert to_key_event("space", " ", True) == KeyEvent.of(" ")
    assert to_key_event("question_mark", "?", True) == KeyEvent.of("?")


def test_unprintable_keys_are_dropped() -> None:
    assert to_key_event("ctrl+a", "\x01", False) is None
    assert to_key_event("f5", None, False) is None
