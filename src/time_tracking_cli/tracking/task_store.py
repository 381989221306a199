# src/time_tracking_cli/tracking/task_store.py

from __future__ import annotations

import logging
from datetime import datetime

from .task_models import Task

logger = logging.getLogger(__name__)


class TaskStateError(RuntimeError):
    """Store used against its lifecycle (e.g. opening while a task is open)."""


class InvalidTaskIdError(ValueError):
    pass


class TaskStore:
    """
    In-memory record of one session.

    Invariants:
    - `next_id` equals the number of tasks ever created (closed + open).
    - at most one task is open; an open task is never in `closed_tasks`.
    - closed tasks keep closure order and are never mutated again.
    """

    def __init__(self) -> None:
        self._closed: list[Task] = []
        self._open: Task | None = None
        self._next_id = 0

    # ---- read accessors ----

    @property
    def closed_tasks(self) -> tuple[Task, ...]:
        return tuple(self._closed)

    @property
    def open_task(self) -> Task | None:
        return self._open

    @property
    def has_open_task(self) -> bool:
        return self._open is not None

    @property
    def next_id(self) -> int:
        return self._next_id

    @property
    def closed_count(self) -> int:
        return len(self._closed)

    # ---- lifecycle ----

    def _allocate_id(self) -> int:
        tid = self._next_id
        self._next_id += 1
        return tid

    def open_new(self, description: str, start: datetime) -> Task:
        if self._open is not None:
            raise TaskStateError(f"task {self._open.id} is still open; close it first")
        task = Task.create(self._allocate_id(), description, start)
        self._open = task
        logger.debug("Opened task id=%s description=%r", task.id, description)
        return task

    def close_open(self, end: datetime) -> Task | None:
        """Close the open task and return it, or None when nothing is open."""
        task = self._open
        if task is None:
            return None
        # Clock may step backwards (NTP); keep end >= start.
        task.end = max(end, task.start)
        self._closed.append(task)
        self._open = None
        logger.debug("Closed task id=%s", task.id)
        return task

    def record_closed(self, description: str, timestamp: datetime) -> Task:
        """Create a task and close it at the same instant (audit entries)."""
        self.open_new(description, timestamp)
        task = self.close_open(timestamp)
        assert task is not None
        return task

    # ---- open-task mutation ----

    def replace_open_description(self, new_text: str) -> bool:
        if self._open is None:
            return False
        self._open.description = new_text
        return True

    def append_to_open_description(self, extra: str) -> bool:
        if self._open is None:
            return False
        self._open.description += extra
        return True

    # ---- queries ----

    def description_of(self, task_id: int) -> str:
        if not 0 <= task_id < len(self._closed):
            raise InvalidTaskIdError(f"no closed task with id {task_id}")
        return self._closed[task_id].description

    def snapshot(self) -> list[Task]:
        """Closed tasks in closure order, then the open task (if any)."""
        tasks = list(self._closed)
        if self._open is not None:
            tasks.append(self._open)
        return tasks


def parse_task_id(text: str, closed_count: int) -> int | None:
    """
    Return a selectable closed-task id parsed from `text`, or None.

    Only unsigned ASCII digits are accepted (an optional leading '+');
    "-0", "1_0" and non-ASCII digits are rejected.
    """
    digits = text.strip().removeprefix("+")
    if not (digits.isascii() and digits.isdigit()):
        return None
    value = int(digits)
    if value < closed_count:
        return value
    return None
