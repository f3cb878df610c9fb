"""Session model: the single piece of mutable state in the installer.

The session is created once at startup in the main menu and is mutated
only by the InstallerStateMachine. Renderers read it and never write.
"""

from dataclasses import dataclass, field
from enum import Enum


class StateKind(Enum):
    """Interaction modes of the installer."""

    MAIN_MENU = "main_menu"
    CONFIRMATION = "confirmation"
    PASSWORD_INPUT = "password_input"
    PROCESSING = "processing"


@dataclass(frozen=True)
class AppState:
    """Current interaction mode plus the label shown while processing.

    ``label`` is only meaningful for PROCESSING; the other modes carry "".
    """

    kind: StateKind
    label: str = ""

    @classmethod
    def main_menu(cls) -> "AppState":
        return cls(StateKind.MAIN_MENU)

    @classmethod
    def confirmation(cls) -> "AppState":
        return cls(StateKind.CONFIRMATION)

    @classmethod
    def password_input(cls) -> "AppState":
        return cls(StateKind.PASSWORD_INPUT)

    @classmethod
    def processing(cls, label: str) -> "AppState":
        return cls(StateKind.PROCESSING, label)


class Operation(Enum):
    """Menu options, in display order."""

    DEFAULT = "default"
    CUSTOM = "custom"
    UPDATE_SYSTEM = "update_system"
    EXIT = "exit"

    @property
    def is_enabled(self) -> bool:
        return self is not Operation.CUSTOM


MENU_OPTIONS: tuple[Operation, ...] = (
    Operation.DEFAULT,
    Operation.CUSTOM,
    Operation.UPDATE_SYSTEM,
    Operation.EXIT,
)


class SystemAction(Enum):
    """Terminal actions executed after the interactive loop has exited."""

    REBOOT = "reboot"
    POWEROFF = "poweroff"


class ProgressKind(Enum):
    INDETERMINATE = "indeterminate"
    DETERMINANT = "determinant"  # countdown with known duration


class StatusSeverity(Enum):
    SUCCESS = "success"
    ERROR = "error"
    FAIL = "fail"


@dataclass(frozen=True)
class StatusMessage:
    """Transient feedback shown on the main menu."""

    text: str
    severity: StatusSeverity


@dataclass
class ProgressState:
    """Counters for a running (or simulated) operation.

    Tick timestamps are monotonic clock readings in seconds.
    """

    kind: ProgressKind
    started_at: float
    total_seconds: int = 0
    step: int = 0
    bar_position: int = 0
    countdown_remaining: int = 0
    last_spinner_tick: float = 0.0
    last_bar_tick: float = 0.0
    last_countdown_tick: float = 0.0
    simulation_started_at: float | None = None

    @classmethod
    def start(
        cls,
        kind: ProgressKind,
        now: float,
        countdown_seconds: int,
        *,
        simulate: bool = False,
    ) -> "ProgressState":
        """Fresh counters with every tick anchored at ``now``."""
        return cls(
            kind=kind,
            started_at=now,
            total_seconds=countdown_seconds if kind is ProgressKind.DETERMINANT else 0,
            countdown_remaining=countdown_seconds,
            last_spinner_tick=now,
            last_bar_tick=now,
            last_countdown_tick=now,
            simulation_started_at=now if simulate else None,
        )

    @property
    def is_determinant(self) -> bool:
        return self.kind is ProgressKind.DETERMINANT


@dataclass
class Session:
    """All mutable interaction state for the process lifetime."""

    dry_run: bool = False
    state: AppState = field(default_factory=AppState.main_menu)
    selected_index: int = 0
    pending_operation: Operation | None = None
    pending_system_action: SystemAction | None = None
    secret_buffer: str = ""
    show_secret: bool = False
    confirmation_text: str = ""
    progress: ProgressState | None = None
    action_output: list[str] = field(default_factory=list)
    status_message: StatusMessage | None = None
    should_quit: bool = False

    @property
    def selected_option(self) -> Operation:
        return MENU_OPTIONS[self.selected_index]

    @property
    def kind(self) -> StateKind:
        return self.state.kind

    def clear_secret(self) -> None:
        """Drop the credential and its visibility toggle."""
        self.secret_buffer = ""
        self.show_secret = False

    def set_status(self, text: str, severity: StatusSeverity) -> None:
        self.status_message = StatusMessage(text, severity)

    def clear_status(self) -> None:
        self.status_message = None
