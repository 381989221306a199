# src/time_tracking_cli/connectors/console_connector.py

from __future__ import annotations

import logging
import sys

from ..cli.commands import QUIT_COMMAND, START_TEXT
from ..cli.commands import registry as command_registry
from ..core.ports import Console
from ..core.state import SessionState

logger = logging.getLogger(__name__)

_ENTER_ALT_SCREEN = "\033[?1049h"
_LEAVE_ALT_SCREEN = "\033[?1049l"
_CLEAR_SCREEN = "\033[2J\033[H"


class TerminalConsole:
    """
    stdin/stdout console.

    Screen control (alternate screen, clear after each command) is best-effort:
    it is used only when stdout is a TTY and alt_screen is enabled.
    """

    def __init__(self, *, alt_screen: bool = True) -> None:
        self._screen = alt_screen and sys.stdout.isatty()
        self._entered = False

    def ask(self, prompt: str) -> str:
        if prompt:
            print(prompt)
        return input().rstrip("\r\n")

    def say(self, text: str = "") -> None:
        print(text)

    def clear(self) -> None:
        if self._screen:
            sys.stdout.write(_CLEAR_SCREEN)
            sys.stdout.flush()

    def __enter__(self) -> TerminalConsole:
        if self._screen:
            sys.stdout.write(_ENTER_ALT_SCREEN)
            sys.stdout.flush()
            self._entered = True
        return self

    def __exit__(self, *exc_info: object) -> None:
        if self._entered:
            sys.stdout.write(_LEAVE_ALT_SCREEN)
            sys.stdout.flush()
            self._entered = False


def run_console_loop(state: SessionState, console: Console) -> None:
    """
    Read-eval loop.

    Each iteration rewrites the output file before prompting, so at most one
    iteration of input is lost on abnormal termination. Returns after 'quit'
    (or end of input) with no task open.
    """
    logger.info("Console loop started (output=%s).", state.output_path)

    while True:
        state.checkpoint()

        try:
            line = console.ask(START_TEXT).strip()
        except (EOFError, KeyboardInterrupt):
            logger.info("Console input ended, quitting.")
            command_registry.handle(state, console, QUIT_COMMAND)
            break

        console.clear()

        try:
            handled = command_registry.handle(state, console, line)
        except (EOFError, KeyboardInterrupt):
            # Input ended inside a prompt of the command; treat as quit.
            logger.info("Console input ended during %r, quitting.", line)
            command_registry.handle(state, console, QUIT_COMMAND)
            break

        if not handled:
            logger.debug("Ignored input %r", line)
            continue

        if line == QUIT_COMMAND:
            break

    logger.info("Console loop finished.")
