"""The four privileged command shapes the installer can run."""

from __future__ import annotations

import shlex
from collections.abc import Sequence
from dataclasses import dataclass

from sparrow_installer.config.settings import Settings
from sparrow_installer.models.session import Operation, SystemAction


@dataclass(frozen=True, slots=True)
class CommandSpec:
    """An external command plus how it is fed and reported."""

    argv: tuple[str, ...]
    label: str  # prefix for failure messages, e.g. "Reboot failed"
    needs_secret: bool = False

    @property
    def display(self) -> str:
        return shlex.join(self.argv)


def install_script_command(script_path: str) -> CommandSpec:
    """Run the default-install script; it takes no input."""
    return CommandSpec(argv=("bash", script_path), label="Setup script failed")


def update_command(argv: Sequence[str]) -> CommandSpec:
    """Update-and-apply through sudo, which reads the password from stdin."""
    return CommandSpec(
        argv=tuple(argv),
        label="System update failed",
        needs_secret=True,
    )


def reboot_command() -> CommandSpec:
    return CommandSpec(argv=("systemctl", "reboot"), label="Reboot failed")


def poweroff_command() -> CommandSpec:
    return CommandSpec(argv=("systemctl", "poweroff"), label="Poweroff failed")


def command_for_operation(operation: Operation, settings: Settings) -> CommandSpec | None:
    """Resolve the command behind a menu operation.

    Returns None for operations that never spawn a process from the menu
    (Custom is disabled; Exit goes through the deferred poweroff).
    """
    if operation is Operation.DEFAULT:
        return install_script_command(settings.install_script)
    if operation is Operation.UPDATE_SYSTEM:
        return update_command(settings.update_command)
    return None


def command_for_system_action(action: SystemAction) -> CommandSpec:
    if action is SystemAction.REBOOT:
        return reboot_command()
    return poweroff_command()
