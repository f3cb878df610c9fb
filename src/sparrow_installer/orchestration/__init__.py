"""Interaction logic: the state machine and the loop that drives it."""

from sparrow_installer.orchestration.scheduler import POLL_INTERVAL_SECONDS, Scheduler
from sparrow_installer.orchestration.state_machine import InstallerStateMachine

__all__ = [
    "InstallerStateMachine",
    "POLL_INTERVAL_SECONDS",
    "Scheduler",
]
