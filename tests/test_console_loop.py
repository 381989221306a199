# tests/test_console_loop.py

from __future__ import annotations

import csv

from time_tracking_cli.cli.bootstrap import (
    SHUTDOWN_DESCRIPTION,
    STARTUP_DESCRIPTION,
    create_initial_state,
    finish_session,
)
from time_tracking_cli.connectors.console_connector import run_console_loop
from time_tracking_cli.persistence.csv_writer import CsvTaskWriter


def test_startup_task_is_recorded_closed(state) -> None:
    assert state.store.open_task is None
    assert [t.description for t in state.store.closed_tasks] == [STARTUP_DESCRIPTION]
    assert state.store.next_id == 1


def test_output_path_uses_start_time(state, settings) -> None:
    assert state.output_path.name == "timesheet_2024-05-06_09_00_00.csv"
    assert state.output_path.parent == settings.log_dir.parent


def test_file_is_rewritten_before_every_prompt(state, writer, make_console) -> None:
    console = make_console(["n", "Write spec", "show", "bogus", "quit"])
    run_console_loop(state, console)

    # one write per iteration: before n, show, bogus, quit
    assert len(writer.writes) == 4
    assert [r[3] for r in writer.writes[0]] == [STARTUP_DESCRIPTION]
    assert [r[3] for r in writer.writes[1]] == [STARTUP_DESCRIPTION, "Write spec"]
    # show and an unknown command leave the persisted snapshot untouched
    assert writer.writes[1] == writer.writes[2] == writer.writes[3]
    assert console.clears == 4


def test_end_of_input_acts_as_quit(state, make_console) -> None:
    console = make_console(["n", "Write spec"])
    run_console_loop(state, console)

    assert state.store.open_task is None
    assert state.store.closed_tasks[-1].description == "Write spec"


def test_end_of_input_inside_prompt_acts_as_quit(state, make_console) -> None:
    run_console_loop(state, make_console(["n", "Write spec", "nc", "abc"]))

    assert state.store.open_task is None
    assert [t.description for t in state.store.closed_tasks] == [STARTUP_DESCRIPTION, "Write spec"]


def test_full_session_writes_three_rows(settings, clock, make_console) -> None:
    state = create_initial_state(settings, clock=clock)
    assert isinstance(state.writer, CsvTaskWriter)

    console = make_console(["n", "Write spec", "show", "quit"])
    run_console_loop(state, console)
    assert "Write spec" in console.output
    finish_session(state)

    with state.output_path.open(encoding="utf-8", newline="") as fh:
        rows = list(csv.reader(fh))

    assert rows[0] == ["id", "start", "end", "description"]
    assert rows[1:] == [
        ["0", "2024-05-06 09:00:00", "2024-05-06 09:00:00", STARTUP_DESCRIPTION],
        ["1", "2024-05-06 09:01:00", "2024-05-06 09:02:00", "Write spec"],
        ["2", "2024-05-06 09:03:00", "2024-05-06 09:03:00", SHUTDOWN_DESCRIPTION],
    ]
