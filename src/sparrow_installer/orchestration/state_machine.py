"""Interaction state machine for the installer.

InstallerStateMachine is the only code that mutates the Session. Key
events arrive through dispatch(); time-based progress moves through
advance(). Privileged commands are awaited inline, so the caller's loop
is suspended until the command has finished and the result has been
applied to the session.

States:
    MAIN_MENU -> CONFIRMATION | PASSWORD_INPUT | PROCESSING
    PASSWORD_INPUT -> MAIN_MENU | CONFIRMATION (dry-run) | PROCESSING
    CONFIRMATION -> MAIN_MENU | PROCESSING
    PROCESSING -> MAIN_MENU | PASSWORD_INPUT (auth failure) | PROCESSING (reboot)
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from sparrow_installer.config.settings import Settings
from sparrow_installer.config.settings import settings as default_settings
from sparrow_installer.config.theme import AppConfig, Messages
from sparrow_installer.models.events import Key, KeyEvent
from sparrow_installer.models.session import (
    MENU_OPTIONS,
    AppState,
    Operation,
    ProgressKind,
    ProgressState,
    Session,
    StateKind,
    StatusSeverity,
    SystemAction,
)
from sparrow_installer.runtime.animator import (
    advance_bar,
    advance_countdown,
    advance_spinner,
    simulation_expired,
)
from sparrow_installer.runtime.command_runner import (
    AuthFailureError,
    CommandError,
    PrivilegedCommandRunner,
)
from sparrow_installer.runtime.commands import command_for_operation

logger = logging.getLogger(__name__)


class InstallerStateMachine:
    """Owns the session and every legal transition on it."""

    def __init__(
        self,
        session: Session,
        config: AppConfig,
        runner: PrivilegedCommandRunner,
        *,
        settings: Settings | None = None,
        clock: Callable[[], float] = time.monotonic,
        on_suspend: Callable[[], None] | None = None,
    ) -> None:
        """
        Args:
            session: The session to drive; must start in MAIN_MENU.
            config: Shared read-only theme and text.
            runner: Runner whose dry-run flag matches the session.
            settings: Command overrides (defaults to the global settings).
            clock: Monotonic seconds; injectable for tests.
            on_suspend: Called right before a real command is awaited, so
                the caller can paint the processing state once.
        """
        self.session = session
        self.config = config
        self.runner = runner
        self.settings = settings or default_settings
        self._clock = clock
        self.on_suspend = on_suspend

    @property
    def _messages(self) -> Messages:
        return self.config.text.messages

    # --- Dispatch ---

    async def dispatch(self, event: KeyEvent) -> None:
        """Route one key event to the handler for the active state."""
        kind = self.session.kind
        logger.debug("Key %r in %s", event, kind.value)
        try:
            if kind is StateKind.PASSWORD_INPUT:
                await self._on_password_key(event)
            elif kind is StateKind.CONFIRMATION:
                await self._on_confirmation_key(event)
            elif kind is StateKind.PROCESSING:
                self._on_processing_key(event)
            else:
                await self._on_menu_key(event)
        except Exception as e:
            logger.exception("Unhandled error while handling %r", event)
            self._return_to_menu()
            self.session.set_status(f"Error: {e}", StatusSeverity.ERROR)

    async def _on_menu_key(self, event: KeyEvent) -> None:
        if event.is_char("q"):
            self.start_poweroff()
        elif event.key is Key.DOWN:
            self.select_next()
            self.session.clear_status()
        elif event.key is Key.UP:
            self.select_previous()
            self.session.clear_status()
        elif event.key is Key.ENTER:
            self.execute_selected()
        elif event.key is Key.ESCAPE:
            self.session.clear_status()

    async def _on_password_key(self, event: KeyEvent) -> None:
        session = self.session
        if event.key is Key.ENTER:
            if session.secret_buffer:
                await self.submit_password()
            else:
                session.set_status(
                    self._messages.password_empty_error, StatusSeverity.ERROR
                )
        elif event.key is Key.ESCAPE:
            self.cancel()
        elif event.key is Key.TAB:
            session.show_secret = not session.show_secret
        elif event.key is Key.BACKSPACE:
            session.secret_buffer = session.secret_buffer[:-1]
        elif event.key is Key.CHAR:
            session.secret_buffer += event.char

    async def _on_confirmation_key(self, event: KeyEvent) -> None:
        if event.key is Key.ENTER or event.is_char("y"):
            await self.confirm()
        elif event.key is Key.ESCAPE or event.is_char("n"):
            self.cancel()

    def _on_processing_key(self, event: KeyEvent) -> None:
        # Real commands cannot be interrupted; only simulations can.
        if event.key is Key.ESCAPE and self.session.dry_run:
            self.cancel_simulation()

    # --- Menu ---

    def select_next(self) -> None:
        self.session.selected_index = (self.session.selected_index + 1) % len(
            MENU_OPTIONS
        )

    def select_previous(self) -> None:
        self.session.selected_index = (self.session.selected_index - 1) % len(
            MENU_OPTIONS
        )

    def execute_selected(self) -> None:
        """Act on the highlighted menu option."""
        option = self.session.selected_option
        if not option.is_enabled:
            message = (
                self._messages.custom_disabled
                if option is Operation.CUSTOM
                else self._messages.option_disabled
            )
            self.session.set_status(message, StatusSeverity.FAIL)
            return

        if option is Operation.DEFAULT:
            self.session.pending_operation = Operation.DEFAULT
            self._show_confirmation(self._messages.confirm_default_install)
        elif option is Operation.UPDATE_SYSTEM:
            self._show_password_input(Operation.UPDATE_SYSTEM)
        elif option is Operation.EXIT:
            self.start_poweroff()

    def _show_confirmation(self, text: str) -> None:
        self.session.confirmation_text = text
        self.session.state = AppState.confirmation()
        logger.info("Awaiting confirmation for %s", self.session.pending_operation)

    def _show_password_input(self, operation: Operation) -> None:
        self.session.state = AppState.password_input()
        self.session.pending_operation = operation
        self.session.clear_secret()
        logger.info("Awaiting credentials for %s", operation.value)

    def cancel(self) -> None:
        """Leave confirmation or credential entry without committing."""
        logger.info("Cancelled %s", self.session.pending_operation)
        self._return_to_menu()

    # --- Credential entry ---

    async def submit_password(self) -> None:
        """Use the entered credential for the pending operation."""
        session = self.session
        operation = session.pending_operation
        if operation is None:
            self._return_to_menu()
            return

        logger.debug("Credential submitted (%d chars)", len(session.secret_buffer))

        if session.dry_run:
            # The secret stays in the buffer until the simulation starts.
            self._show_confirmation(self._confirm_text(operation))
            return

        secret = session.secret_buffer
        session.clear_secret()
        self._start_processing(self._label_for(operation), ProgressKind.INDETERMINATE)

        try:
            await self._execute(operation, secret)
        except AuthFailureError:
            logger.warning("Authentication failed for %s", operation.value)
            session.progress = None
            session.action_output = []
            session.state = AppState.password_input()
            session.pending_operation = operation
            session.clear_secret()
            session.set_status(self._messages.password_auth_failed, StatusSeverity.ERROR)
            return
        except CommandError as e:
            self._finish_operation(e)
            return

        self._finish_operation(None)

    # --- Confirmation ---

    async def confirm(self) -> None:
        """Start the pending operation, or its simulation in dry-run."""
        session = self.session
        operation = session.pending_operation or session.selected_option
        session.pending_operation = operation
        session.confirmation_text = ""
        self._start_processing(self._label_for(operation), ProgressKind.INDETERMINATE)

        if session.dry_run:
            session.clear_secret()
            self._start_simulation(operation)
            return

        # The install script runs without credentials.
        session.clear_secret()
        try:
            await self._execute(operation, None)
        except CommandError as e:
            self._finish_operation(e)
            return
        self._finish_operation(None)

    def _start_simulation(self, operation: Operation) -> None:
        progress = self.session.progress
        if progress is not None:
            progress.simulation_started_at = self._clock()

        if operation is Operation.DEFAULT:
            canned = self._messages.dry_run_script_output
        elif operation is Operation.UPDATE_SYSTEM:
            canned = self._messages.dry_run_update_output
        else:
            canned = ""
        self.session.action_output = canned.split("\n") if canned else []
        logger.info("DRY-RUN simulating %s", operation.value)

    def cancel_simulation(self) -> None:
        logger.info("DRY-RUN simulation cancelled")
        self._return_to_menu()
        self.session.pending_system_action = None
        self.session.set_status(self._messages.simulation_cancelled, StatusSeverity.ERROR)

    # --- Execution ---

    async def _execute(self, operation: Operation, secret: str | None) -> None:
        """Run the command behind ``operation``; raises CommandError."""
        spec = command_for_operation(operation, self.settings)
        if spec is None:
            return
        if self.on_suspend is not None:
            self.on_suspend()
        await self.runner.run(spec, secret if spec.needs_secret else None)

    def _finish_operation(self, error: CommandError | None) -> None:
        """Apply the awaited result of a real command."""
        session = self.session
        operation = session.pending_operation

        if error is None:
            logger.info("%s completed", operation.value if operation else "operation")
            session.progress = None
            session.state = AppState.main_menu()
            session.set_status(self._messages.operation_success, StatusSeverity.SUCCESS)
        elif operation is Operation.DEFAULT:
            # A broken first-run install is retried by rebooting into it.
            logger.warning("Default install failed, rebooting: %s", error)
            session.pending_operation = None
            session.action_output = []
            session.clear_secret()
            self.start_reboot()
            return
        else:
            logger.warning("Operation failed: %s", error)
            session.progress = None
            session.state = AppState.main_menu()
            session.set_status(f"Error: {error}", StatusSeverity.ERROR)

        session.pending_operation = None
        session.action_output = []
        session.clear_secret()

    # --- System actions ---

    def start_reboot(self) -> None:
        self._start_system_action(SystemAction.REBOOT, self._messages.progress_rebooting)

    def start_poweroff(self) -> None:
        self._start_system_action(SystemAction.POWEROFF, self._messages.progress_poweroff)

    def _start_system_action(self, action: SystemAction, label: str) -> None:
        self.session.pending_system_action = action
        self._start_processing(label, ProgressKind.DETERMINANT)
        logger.info(
            "Starting %s countdown (%ds)",
            action.value,
            self.config.text.progress.countdown_seconds,
        )

    def _start_processing(self, label: str, kind: ProgressKind) -> None:
        session = self.session
        session.state = AppState.processing(label)
        session.progress = ProgressState.start(
            kind, self._clock(), self.config.text.progress.countdown_seconds
        )
        session.action_output = []
        session.clear_status()

    # --- Time-based progress ---

    def advance(self) -> None:
        """Move spinner, bar and countdown forward by elapsed wall-clock time."""
        session = self.session
        progress = session.progress
        if progress is None or session.should_quit:
            return

        now = self._clock()
        theme_progress = self.config.theme.progress

        if progress.kind is ProgressKind.INDETERMINATE:
            if session.dry_run and simulation_expired(
                progress.simulation_started_at,
                now,
                self.config.text.progress.simulation_timeout_seconds,
            ):
                logger.info("DRY-RUN simulation finished")
                self._finish_operation(None)
                return

            spinner = advance_spinner(
                progress.step,
                len(self._messages.spinner_chars),
                now,
                progress.last_spinner_tick,
                theme_progress.spinner_speed,
            )
            progress.step, progress.last_spinner_tick = spinner.value, spinner.last_tick

            bar = advance_bar(
                progress.bar_position,
                now,
                progress.last_bar_tick,
                theme_progress.progress_bar_speed,
            )
            progress.bar_position, progress.last_bar_tick = bar.value, bar.last_tick
            return

        countdown = advance_countdown(
            progress.countdown_remaining, now, progress.last_countdown_tick
        )
        if countdown.expired:
            self._finish_system_action()
            return
        if countdown.elapsed:
            logger.debug("Countdown %d", countdown.value)
        progress.countdown_remaining = countdown.value
        progress.last_countdown_tick = countdown.last_tick

    def _finish_system_action(self) -> None:
        session = self.session
        action = session.pending_system_action

        if not session.dry_run:
            # The action itself runs after the terminal has been restored.
            logger.info("Countdown finished, quitting to %s", action)
            session.should_quit = True
            return

        session.progress = None
        session.action_output = []
        session.clear_secret()
        if action is SystemAction.POWEROFF:
            logger.info("DRY-RUN poweroff countdown finished, quitting")
            session.should_quit = True
            return

        logger.info("DRY-RUN reboot countdown finished")
        session.pending_system_action = None
        session.state = AppState.main_menu()
        session.set_status(self._messages.simulation_complete, StatusSeverity.SUCCESS)

    # --- Helpers ---

    def _return_to_menu(self) -> None:
        session = self.session
        session.state = AppState.main_menu()
        session.pending_operation = None
        session.confirmation_text = ""
        session.progress = None
        session.action_output = []
        session.clear_secret()

    def _label_for(self, operation: Operation) -> str:
        if operation is Operation.DEFAULT:
            return self._messages.progress_installing
        if operation is Operation.UPDATE_SYSTEM:
            return self._messages.progress_updating
        return self._messages.processing

    def _confirm_text(self, operation: Operation) -> str:
        if operation is Operation.DEFAULT:
            return self._messages.confirm_default_install
        if operation is Operation.UPDATE_SYSTEM:
            return self._messages.confirm_system_update
        return self._messages.dry_run_confirm_fallback
