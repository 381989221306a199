# src/time_tracking_cli/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- resolves the output file from settings and the session start time,
- wires the store, the CSV writer and the clock into SessionState,
- records the audit tasks that open and close a session.
"""

from __future__ import annotations

import logging

from ..config import Settings
from ..core.clock import SystemClock
from ..core.ports import Clock, TaskWriter
from ..core.state import SessionState
from ..persistence.csv_writer import CsvTaskWriter
from ..tracking.task_store import TaskStore

logger = logging.getLogger(__name__)

STARTUP_DESCRIPTION = "Start up of time tracking cli"
SHUTDOWN_DESCRIPTION = "Shut down of time tracking cli"


def create_initial_state(
    settings: Settings,
    *,
    clock: Clock | None = None,
    writer: TaskWriter | None = None,
) -> SessionState:
    """
    Create SessionState with the startup task already recorded.

    clock and writer are injectable for tests; by default the local system clock
    and a CsvTaskWriter on the resolved output path are used.
    """
    clock = clock or SystemClock()
    started_at = clock.now()
    output_path = settings.output_path_for(started_at)

    state = SessionState(
        settings=settings,
        store=TaskStore(),
        writer=writer or CsvTaskWriter(output_path),
        clock=clock,
        output_path=output_path,
    )
    state.store.record_closed(STARTUP_DESCRIPTION, started_at)
    logger.info("Session started, writing to %s", output_path)
    return state


def finish_session(state: SessionState) -> None:
    """Close whatever is open, record the shutdown task and write the file a final time."""
    now = state.clock.now()
    state.store.close_open(now)
    state.store.record_closed(SHUTDOWN_DESCRIPTION, now)
    state.checkpoint()
    logger.info(
        "Session finished: %d tasks written to %s", state.store.closed_count, state.output_path
    )
