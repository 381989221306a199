# tests/conftest.py

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta
from pathlib import Path

import pytest

from time_tracking_cli.cli.bootstrap import create_initial_state
from time_tracking_cli.config import Settings
from time_tracking_cli.core.state import SessionState
from time_tracking_cli.tracking.task_models import Task

START = datetime(2024, 5, 6, 9, 0, 0)


class FakeClock:
    """Deterministic clock: every call to now() advances by `step`."""

    def __init__(self, start: datetime = START, step: timedelta = timedelta(minutes=1)) -> None:
        self.current = start
        self.step = step
        self.calls = 0

    def now(self) -> datetime:
        value = self.current
        self.current += self.step
        self.calls += 1
        return value


class FakeConsole:
    """
    Scripted console.

    - ask() pops the next scripted line; raises EOFError when the script is exhausted
    - say() output is captured for assertions
    """

    def __init__(self, inputs: Iterable[str] = ()) -> None:
        self.inputs = list(inputs)
        self.prompts: list[str] = []
        self.lines: list[str] = []
        self.clears = 0

    def ask(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.inputs:
            raise EOFError
        return self.inputs.pop(0)

    def say(self, text: str = "") -> None:
        self.lines.append(text)

    def clear(self) -> None:
        self.clears += 1

    @property
    def output(self) -> str:
        return "\n".join(self.lines)


class FakeWriter:
    """Captures every snapshot written, as CSV-ready rows."""

    def __init__(self) -> None:
        self.writes: list[list[tuple[str, str, str, str]]] = []

    def write(self, tasks: Iterable[Task]) -> None:
        self.writes.append([t.to_row() for t in tasks])


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(
        output_file_prefix=str(tmp_path / "timesheet_"),
        filename_time_format="[year]-[month]-[day]_[hour]_[minute]_[second]",
        config_path=tmp_path / "config.xml",
        log_level="WARNING",
        log_dir=tmp_path / "logs",
        alt_screen=False,
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def writer() -> FakeWriter:
    return FakeWriter()


@pytest.fixture()
def state(settings: Settings, clock: FakeClock, writer: FakeWriter) -> SessionState:
    """Session with the startup task recorded and no task open."""
    return create_initial_state(settings, clock=clock, writer=writer)


@pytest.fixture()
def make_console():
    """Factory: make_console(["n", "Write spec"]) -> FakeConsole."""
    return FakeConsole
