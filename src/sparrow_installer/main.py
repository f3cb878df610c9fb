"""Main module for the Sparrow installer."""

import argparse
import logging
import os
import sys
from pathlib import Path

from sparrow_installer.cli.app import run
from sparrow_installer.config.paths import get_paths


def setup_logging(log_file: Path | None = None, level: str | None = None) -> Path:
    """Configure logging to file; the terminal belongs to the UI."""
    if log_file is None:
        paths = get_paths()
        paths.state_dir.mkdir(parents=True, exist_ok=True)
        log_file = paths.log_file
    else:
        log_file.parent.mkdir(parents=True, exist_ok=True)

    # Set level from flag or env var, default to INFO
    level = (level or os.environ.get("SPARROW_LOG_LEVEL", "INFO")).upper()

    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=[
            logging.FileHandler(log_file, mode="a"),
        ],
    )
    logging.info("Sparrow installer starting, logging to %s", log_file)
    return log_file


def _configure_logging(args: argparse.Namespace) -> None:
    setup_logging(args.log_file, args.log_level)


def main() -> None:
    """Entry point for the Sparrow installer."""
    sys.exit(run(configure_logging=_configure_logging))


if __name__ == "__main__":
    main()
