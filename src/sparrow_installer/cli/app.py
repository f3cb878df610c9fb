"""CLI orchestration: build the session, run the UI, then the system action."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Callable, Sequence

from sparrow_installer.cli.parser import parse_args
from sparrow_installer.config import ConfigError, load_app_config, settings
from sparrow_installer.models.session import Session
from sparrow_installer.orchestration.state_machine import InstallerStateMachine
from sparrow_installer.runtime.command_runner import (
    CommandError,
    PrivilegedCommandRunner,
)
from sparrow_installer.runtime.commands import command_for_system_action
from sparrow_installer.tui.app import SparrowInstallerApp

logger = logging.getLogger(__name__)


async def execute_system_action(
    session: Session, runner: PrivilegedCommandRunner
) -> None:
    """Run the reboot or poweroff left behind by the interactive loop.

    Only called once the terminal has been restored. Failures are printed
    to stderr; there is no UI left to show them in.
    """
    action = session.pending_system_action
    if action is None or not session.should_quit:
        return
    if session.dry_run:
        logger.info("DRY-RUN skipping %s", action.value)
        return

    spec = command_for_system_action(action)
    logger.info("Executing %s", spec.display)
    try:
        await runner.run(spec)
    except CommandError as e:
        logger.error("%s", e)
        print(e, file=sys.stderr)


def launch_installer(args: argparse.Namespace) -> int:
    """Run the interactive installer until it quits."""
    try:
        config = load_app_config(settings.theme_file, settings.text_file)
    except ConfigError as e:
        logger.error("Configuration error: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    session = Session(dry_run=args.dry_run)
    runner = PrivilegedCommandRunner(dry_run=args.dry_run)
    machine = InstallerStateMachine(session, config, runner, settings=settings)
    app = SparrowInstallerApp(machine)

    try:
        app.run()
    except OSError as e:
        logger.exception("Terminal I/O error")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if app.return_code:
        logger.error("UI exited with code %s", app.return_code)
        return app.return_code

    asyncio.run(execute_system_action(session, runner))
    return 0


def run(
    argv: Sequence[str] | None = None,
    *,
    configure_logging: Callable[[argparse.Namespace], None] | None = None,
) -> int:
    """Parse args, apply shared CLI setup, and launch the installer."""
    args = parse_args(argv)

    if configure_logging is not None:
        configure_logging(args)

    logger.info("Starting installer (dry_run=%s)", args.dry_run)
    return launch_installer(args)
