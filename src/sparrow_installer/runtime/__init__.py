"""Runtime primitives: command execution and progress timing."""

from sparrow_installer.runtime.command_runner import (
    AuthFailureError,
    CommandError,
    CommandEvent,
    CommandFailedError,
    CommandResult,
    PrivilegedCommandRunner,
    SpawnFailureError,
)
from sparrow_installer.runtime.commands import (
    CommandSpec,
    command_for_operation,
    command_for_system_action,
)

__all__ = [
    "AuthFailureError",
    "CommandError",
    "CommandEvent",
    "CommandFailedError",
    "CommandResult",
    "CommandSpec",
    "PrivilegedCommandRunner",
    "SpawnFailureError",
    "command_for_operation",
    "command_for_system_action",
]
