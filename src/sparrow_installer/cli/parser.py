"""Argument parser construction for the Sparrow installer CLI."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from pathlib import Path

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def build_parser() -> argparse.ArgumentParser:
    """Build and return the top-level CLI parser."""
    parser = argparse.ArgumentParser(
        prog="sparrow-installer",
        description="Sparrow Installer - first-boot setup for Sparrow systems",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Simulate every privileged action; nothing is executed",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Log file path (default: $XDG_STATE_HOME/sparrow-installer/installer.log)",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Log level (default: $SPARROW_LOG_LEVEL or INFO)",
    )
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments from argv (or sys.argv when omitted)."""
    parser = build_parser()
    if argv is None:
        return parser.parse_args()
    return parser.parse_args(list(argv))
