"""Main Sparrow installer TUI application."""

from __future__ import annotations

import logging
from typing import Any

from textual.app import App

from sparrow_installer.models.session import Session
from sparrow_installer.orchestration.scheduler import POLL_INTERVAL_SECONDS, Scheduler
from sparrow_installer.orchestration.state_machine import InstallerStateMachine
from sparrow_installer.tui.screens.installer import InstallerScreen

logger = logging.getLogger(__name__)


class SparrowInstallerApp(App[None]):
    """Drives the installer state machine from a fixed-interval timer.

    Key presses are queued by the screen; the timer callback runs one
    scheduler iteration per tick. Textual awaits the callback before the
    next tick, so a running privileged command holds back animation and
    dispatch while keys keep queueing.
    """

    TITLE = "Sparrow Installer"

    CSS = """
    Screen {
        background: black;
    }
    """

    def __init__(self, machine: InstallerStateMachine, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.machine = machine
        self.scheduler = Scheduler(machine, render=self._redraw)
        self._installer_screen: InstallerScreen | None = None
        self._exiting = False
        machine.on_suspend = self._paint_before_suspend

    @property
    def session(self) -> Session:
        return self.machine.session

    def on_mount(self) -> None:
        """Show the installer screen and start the loop timer."""
        self._installer_screen = InstallerScreen(
            self.machine.config, key_handler=self.scheduler.post
        )
        self.push_screen(self._installer_screen)
        self.set_interval(POLL_INTERVAL_SECONDS, self._tick)
        logger.info(
            "Installer UI started (dry_run=%s, poll=%.2fs)",
            self.session.dry_run,
            POLL_INTERVAL_SECONDS,
        )

    async def _tick(self) -> None:
        if self._exiting:
            return
        if await self.scheduler.iterate():
            self._exiting = True
            logger.info("Exiting UI")
            self.exit()

    def _redraw(self, session: Session) -> None:
        if self._installer_screen is not None and self._installer_screen.is_mounted:
            self._installer_screen.redraw(session)

    def _paint_before_suspend(self) -> None:
        # Show the processing state once before the loop blocks on a command.
        self._redraw(self.session)
