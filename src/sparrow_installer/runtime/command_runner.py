"""Asynchronous runner for privileged external commands."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from sparrow_installer.runtime.commands import CommandSpec

logger = logging.getLogger(__name__)

# sudo prints one of these on a rejected password.
AUTH_FAILURE_PATTERNS: tuple[str, ...] = ("Sorry, try again", "incorrect password")


class CommandError(Exception):
    """Base class for privileged command failures."""

    def __init__(
        self,
        message: str,
        *,
        command: str,
        stderr: str = "",
        exit_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.command = command
        self.stderr = stderr
        self.exit_code = exit_code


class AuthFailureError(CommandError):
    """The command rejected the supplied credential."""


class CommandFailedError(CommandError):
    """The command ran and exited non-zero."""


class SpawnFailureError(CommandError):
    """The command could not be started or fed its input."""


@dataclass(frozen=True, slots=True)
class CommandEvent:
    """Lifecycle event emitted while running commands."""

    event_type: str  # "dry-run", "spawn" or "exit"
    command: str
    detail: str = ""


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Outcome of a command that exited successfully."""

    command: str
    exit_code: int
    stdout: str
    stderr: str
    duration_seconds: float
    dry_run: bool = False


def is_auth_failure(stderr: str) -> bool:
    """Case-sensitive match against the known sudo rejection phrases."""
    return any(pattern in stderr for pattern in AUTH_FAILURE_PATTERNS)


class PrivilegedCommandRunner:
    """Runs one command at a time and classifies its failure.

    In dry-run mode nothing is spawned and every call succeeds.
    """

    def __init__(self, *, dry_run: bool) -> None:
        self.dry_run = dry_run

    async def run(
        self,
        spec: CommandSpec,
        secret: str | None = None,
        *,
        on_event: Callable[[CommandEvent], None] | None = None,
    ) -> CommandResult:
        """Run ``spec``, writing ``secret`` plus a newline to stdin if given.

        Raises:
            AuthFailureError: stderr shows the credential was rejected.
            CommandFailedError: any other non-zero exit.
            SpawnFailureError: the process could not be launched.
        """
        command_text = spec.display

        if self.dry_run:
            logger.info("DRY-RUN would execute: %s", command_text)
            _emit_event(on_event, CommandEvent("dry-run", command_text))
            return CommandResult(
                command=command_text,
                exit_code=0,
                stdout="",
                stderr="",
                duration_seconds=0.0,
                dry_run=True,
            )

        logger.info(
            "CMD %s (stdin: %s)",
            command_text,
            f"secret, {len(secret)} chars" if secret is not None else "none",
        )
        started_at = time.perf_counter()

        try:
            process = await asyncio.create_subprocess_exec(
                *spec.argv,
                stdin=asyncio.subprocess.PIPE
                if secret is not None
                else asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            logger.warning("Failed to start %s: %s", command_text, e)
            raise SpawnFailureError(
                f"{spec.label}: {e}", command=command_text
            ) from e

        _emit_event(
            on_event, CommandEvent("spawn", command_text, detail=f"pid={process.pid}")
        )

        payload = f"{secret}\n".encode() if secret is not None else None
        try:
            stdout_bytes, stderr_bytes = await process.communicate(input=payload)
        except OSError as e:
            logger.warning("I/O error talking to %s: %s", command_text, e)
            raise SpawnFailureError(
                f"{spec.label}: {e}", command=command_text
            ) from e

        stdout = _decode_stream(stdout_bytes)
        stderr = _decode_stream(stderr_bytes)
        exit_code = process.returncode if process.returncode is not None else 1
        duration = time.perf_counter() - started_at

        _emit_event(
            on_event, CommandEvent("exit", command_text, detail=f"code={exit_code}")
        )
        if stderr:
            logger.debug("STDERR %s", stderr.strip())

        if exit_code != 0:
            if is_auth_failure(stderr):
                logger.warning("Authentication rejected by %s", command_text)
                raise AuthFailureError(
                    "Authentication failed",
                    command=command_text,
                    stderr=stderr,
                    exit_code=exit_code,
                )
            logger.warning("%s exited with %d", command_text, exit_code)
            raise CommandFailedError(
                f"{spec.label}: {stderr.strip()}",
                command=command_text,
                stderr=stderr,
                exit_code=exit_code,
            )

        logger.info("%s finished in %.1fs", command_text, duration)
        return CommandResult(
            command=command_text,
            exit_code=exit_code,
            stdout=stdout,
            stderr=stderr,
            duration_seconds=duration,
        )


def _decode_stream(data: bytes | None) -> str:
    if data is None:
        return ""
    return data.decode(errors="replace")


def _emit_event(
    on_event: Callable[[CommandEvent], None] | None,
    event: CommandEvent,
) -> None:
    if on_event is None:
        return
    on_event(event)
