# src/time_tracking_cli/persistence/csv_writer.py

"""
CSV export of the session.

Every call rewrites the whole file: header, closed tasks in closure order,
then the open task. The rows go to a temporary sibling first and are moved
onto the target with os.replace, so a reader sees either the previous or the
new complete file.
"""

from __future__ import annotations

import contextlib
import csv
import logging
import os
from collections.abc import Iterable
from pathlib import Path

from ..tracking.task_models import CSV_HEADER, Task

logger = logging.getLogger(__name__)


class PersistenceError(RuntimeError):
    """The output file could not be created, written or flushed."""


class CsvTaskWriter:
    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def write(self, tasks: Iterable[Task]) -> None:
        tmp = self._path.with_name(self._path.name + ".tmp")
        count = 0
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with tmp.open("w", encoding="utf-8", newline="") as fh:
                writer = csv.writer(fh)
                writer.writerow(CSV_HEADER)
                for task in tasks:
                    writer.writerow(task.to_row())
                    count += 1
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp, self._path)
        except (OSError, csv.Error) as e:
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            raise PersistenceError(f"Failed to write {self._path}: {e}") from e

        logger.debug("Wrote %d task rows to %s", count, self._path)
