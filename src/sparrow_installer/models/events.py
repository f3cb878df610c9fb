"""Terminal-independent key events dispatched into the state machine."""

from dataclasses import dataclass
from enum import Enum


class Key(Enum):
    UP = "up"
    DOWN = "down"
    ENTER = "enter"
    ESCAPE = "escape"
    TAB = "tab"
    BACKSPACE = "backspace"
    CHAR = "char"


@dataclass(frozen=True)
class KeyEvent:
    """A single key press; ``char`` is set only for Key.CHAR."""

    key: Key
    char: str = ""

    @classmethod
    def of(cls, char: str) -> "KeyEvent":
        return cls(Key.CHAR, char)

    def is_char(self, char: str) -> bool:
        return self.key is Key.CHAR and self.char == char

    def __repr__(self) -> str:
        # Characters typed into the password box must not end up in logs.
        if self.key is Key.CHAR:
            return "KeyEvent(CHAR)"
        return f"KeyEvent({self.key.name})"
