# src/time_tracking_cli/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the command loop.

The loop depends on Protocols instead of concrete implementations,
so the terminal, the clock and the file writer can be faked in tests.
"""

from collections.abc import Iterable
from datetime import datetime
from typing import Protocol

from ..tracking.task_models import Task


class Clock(Protocol):
    """Local wall-clock time."""
    def now(self) -> datetime: ...


class Console(Protocol):
    """
    Interactive text channel.

    ask() blocks until one line is available and returns it without the line ending.
    It raises EOFError when the input is exhausted.
    """

    def ask(self, prompt: str) -> str: ...
    def say(self, text: str = "") -> None: ...
    def clear(self) -> None: ...


class TaskWriter(Protocol):
    def write(self, tasks: Iterable[Task]) -> None: ...
