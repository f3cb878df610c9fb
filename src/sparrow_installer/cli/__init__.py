"""CLI package for the Sparrow installer."""

from sparrow_installer.cli.app import execute_system_action, launch_installer, run
from sparrow_installer.cli.parser import build_parser, parse_args

__all__ = [
    "build_parser",
    "execute_system_action",
    "launch_installer",
    "parse_args",
    "run",
]
