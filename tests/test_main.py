# tests/test_main.py

from __future__ import annotations

import builtins
import csv
import logging
from pathlib import Path

import pytest

from time_tracking_cli.cli.main import main


@pytest.fixture()
def isolated_logging():
    root = logging.getLogger()
    saved = list(root.handlers)
    saved_level = root.level
    yield
    for h in list(root.handlers):
        if h not in saved:
            root.removeHandler(h)
            h.close()
    for h in saved:
        if h not in root.handlers:
            root.addHandler(h)
    root.setLevel(saved_level)
    logging.captureWarnings(False)


@pytest.fixture()
def env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("TIMETRACK_OUTPUT_PREFIX", str(tmp_path / "sheets" / "ts_"))
    monkeypatch.setenv("TIMETRACK_FILENAME_TIME_FORMAT", "session")
    monkeypatch.setenv("TIMETRACK_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("TIMETRACK_ALT_SCREEN", "0")
    monkeypatch.delenv("TIMETRACK_CONFIG_PATH", raising=False)
    return tmp_path


def _feed(monkeypatch: pytest.MonkeyPatch, lines: list[str]) -> None:
    it = iter(lines)

    def fake_input(prompt: str = "") -> str:
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr(builtins, "input", fake_input)


def test_main_runs_a_session(env: Path, monkeypatch, isolated_logging, capsys) -> None:
    _feed(monkeypatch, ["n", "Write spec", "show", "quit"])

    assert main() == 0

    out_file = env / "sheets" / "ts_session.csv"
    with out_file.open(encoding="utf-8", newline="") as fh:
        rows = list(csv.reader(fh))
    assert [r[3] for r in rows] == [
        "description",
        "Start up of time tracking cli",
        "Write spec",
        "Shut down of time tracking cli",
    ]
    assert (env / "logs" / "timetrack.log").exists()
    assert "Write spec" in capsys.readouterr().out


def test_main_config_error_exits_with_1(env: Path, monkeypatch, isolated_logging, capsys) -> None:
    monkeypatch.setenv("TIMETRACK_FILENAME_TIME_FORMAT", "[not-a-component]")

    assert main() == 1
    assert "configuration error" in capsys.readouterr().err


def test_main_unwritable_output_exits_with_1(env: Path, monkeypatch, isolated_logging, capsys) -> None:
    (env / "sheets").mkdir()
    (env / "sheets" / "ts_session.csv").mkdir()
    _feed(monkeypatch, ["quit"])

    assert main() == 1
    assert "Failed to write" in capsys.readouterr().err


def test_main_unusable_log_dir_exits_with_1(
    env: Path, monkeypatch, isolated_logging, capsys
) -> None:
    # A regular file where the log directory should be.
    (env / "logs").write_text("not a directory", "utf-8")
    _feed(monkeypatch, ["quit"])

    assert main() == 1
    err = capsys.readouterr().err
    assert "cannot set up logging" in err
    assert not (env / "sheets" / "ts_session.csv").exists()
