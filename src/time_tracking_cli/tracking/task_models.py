# src/time_tracking_cli/tracking/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Final

# Row timestamps always use this pattern, independent of the filename pattern in Settings.
TIMESTAMP_FORMAT: Final = "%Y-%m-%d %H:%M:%S"

CSV_HEADER: Final = ("id", "start", "end", "description")


def format_timestamp(ts: datetime) -> str:
    return ts.strftime(TIMESTAMP_FORMAT)


@dataclass(slots=True)
class Task:
    """
    One work interval.

    Notes:
    - `end` equals `start` while the task is open; it is set once on close.
    - `description` may change only while the task is open.
    """

    id: int
    start: datetime
    end: datetime
    description: str

    @classmethod
    def create(cls, task_id: int, description: str, start: datetime) -> Task:
        return cls(id=task_id, start=start, end=start, description=description)

    def to_row(self) -> tuple[str, str, str, str]:
        return (
            str(self.id),
            format_timestamp(self.start),
            format_timestamp(self.end),
            self.description,
        )

    def __str__(self) -> str:
        return " ".join(self.to_row())
