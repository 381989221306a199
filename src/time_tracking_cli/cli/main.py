# src/time_tracking_cli/cli/main.py

"""
CLI entrypoint.

Loads settings, initializes logging, records the startup task, runs the
console loop and records the shutdown task. Configuration and file errors
are fatal: they are reported on stderr and the process exits with code 1.
"""

from __future__ import annotations

import logging
import sys

from ..cli.bootstrap import create_initial_state, finish_session
from ..config import ConfigError, Settings
from ..connectors.console_connector import TerminalConsole, run_console_loop
from ..logging_setup import setup_logging
from ..persistence.csv_writer import PersistenceError

logger = logging.getLogger(__name__)


def _fatal(message: str) -> int:
    logger.error(message)
    print(f"timetrack: {message}", file=sys.stderr)
    return 1


def main() -> int:
    try:
        settings = Settings.load()
    except ConfigError as e:
        # Logging is not configured yet; stderr only.
        print(f"timetrack: configuration error: {e}", file=sys.stderr)
        return 1

    level_name = str(settings.log_level).upper()
    console_level = getattr(logging, level_name, logging.WARNING)
    try:
        setup_logging(log_dir=settings.log_dir, console_level=console_level)
    except OSError as e:
        print(f"timetrack: cannot set up logging in {settings.log_dir}: {e}", file=sys.stderr)
        return 1

    logger.info("Starting time tracking (config=%s).", settings.config_path)

    try:
        state = create_initial_state(settings)
        with TerminalConsole(alt_screen=settings.alt_screen) as console:
            run_console_loop(state, console)
        finish_session(state)
    except ConfigError as e:
        return _fatal(f"configuration error: {e}")
    except PersistenceError as e:
        return _fatal(str(e))

    print(f"Tasks saved to {state.output_path}")
    logger.info("Bye.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
