# src/time_tracking_cli/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..tracking.task_store import TaskStore
from .ports import Clock, TaskWriter


@dataclass
class SessionState:
    # Settings are kept on the state for commands that display them (help).
    settings: object

    store: TaskStore
    writer: TaskWriter
    clock: Clock
    output_path: Path

    def checkpoint(self) -> None:
        """Rewrite the output file from the current store."""
        self.writer.write(self.store.snapshot())
