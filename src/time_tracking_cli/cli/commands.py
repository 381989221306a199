# src/time_tracking_cli/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from ..core.ports import Console
from ..core.state import SessionState
from ..tracking.task_store import parse_task_id

CommandHandler = Callable[[SessionState, Console], None]

logger = logging.getLogger(__name__)

START_TEXT = "Please enter commands ('h' for help, 'quit' to quit, etc.):"
QUIT_COMMAND = "quit"
ABORT_INPUT = "q"

LUNCH_DESCRIPTION = "Lunch"
BIOBREAK_DESCRIPTION = "Biobreak"


class CommandRegistry:
    """
    Exact-match command table used by the console loop.

    Names are case-sensitive and never prefix-matched: "N" or "sh" are not commands.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: list[tuple[list[str], str]] = []

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        names = [name, *(aliases or [])]
        for n in names:
            if n in self._handlers:
                raise ValueError(f"command {n!r} is already registered")
            self._handlers[n] = handler
        self._help.append((names, help_text))

    def names(self) -> list[str]:
        return list(self._handlers)

    def handle(self, state: SessionState, console: Console, line: str) -> bool:
        """
        Dispatch one trimmed input line.
        Returns False (and does nothing) if the line is not a command.
        """
        handler = self._handlers.get(line)
        if handler is None:
            return False
        logger.debug("Dispatching command %r", line)
        handler(state, console)
        return True

    def build_help(self) -> str:
        lines = ["-Help and status-", "-Controls:"]
        for names, help_text in self._help:
            label = " or ".join(f"'{n}'" for n in names)
            lines.append(f" - {label} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- shared helpers ----


def _say_open_task(state: SessionState, console: Console) -> None:
    task = state.store.open_task
    if task is not None:
        console.say("The current open task is:")
        console.say(str(task))
    else:
        console.say("There is currently no open item")
    console.say()


def _say_closed_tasks(state: SessionState, console: Console) -> None:
    for task in state.store.closed_tasks:
        console.say(str(task))
    console.say()


def _close_if_open(state: SessionState, console: Console, end: datetime) -> None:
    task = state.store.close_open(end)
    if task is None:
        console.say("There is currently no open item to close")
    else:
        console.say("The task was closed:")
        console.say(str(task))
    console.say()


def _start_task(state: SessionState, console: Console, description: str, start: datetime) -> None:
    state.store.open_new(description, start)
    console.say()
    console.say("Started a new task with description:")
    console.say(description)
    console.say()


def _ask_task_id(state: SessionState, console: Console) -> int | None:
    """Block until a selectable closed-task id or 'q' is entered."""
    while True:
        raw = console.ask(
            f"Please write a valid id to copy the description from or '{ABORT_INPUT}' to exit: "
        ).strip()
        if raw == ABORT_INPUT:
            return None
        task_id = parse_task_id(raw, state.store.closed_count)
        if task_id is not None:
            return task_id
        logger.debug("Rejected task id input %r", raw)


# ---- commands ----


def cmd_help(state: SessionState, console: Console) -> None:
    console.say(registry.build_help())
    console.say()
    console.say(f"The current file path to save is {state.output_path}")
    console.say()
    _say_open_task(state, console)


def cmd_new(state: SessionState, console: Console) -> None:
    # Typing the description may take a while; the task starts when the command was given.
    started_at = state.clock.now()
    _close_if_open(state, console, started_at)
    description = ""
    while not description:
        description = console.ask(
            "A new task will be created. Please write the description:"
        ).strip()
    _start_task(state, console, description, started_at)


def cmd_new_copy(state: SessionState, console: Console) -> None:
    """
    nc: new task with the description of a closed task.

    The id is chosen before anything is closed, so aborting with 'q'
    leaves the open task running.
    """
    console.say("This will create a new task with a previous description")
    console.say()
    _say_closed_tasks(state, console)
    _say_open_task(state, console)
    task_id = _ask_task_id(state, console)
    if task_id is None:
        console.say("No task was created.")
        return
    description = state.store.description_of(task_id)
    now = state.clock.now()
    _close_if_open(state, console, now)
    _start_task(state, console, description, now)


def _fixed_task(description: str) -> CommandHandler:
    def handler(state: SessionState, console: Console) -> None:
        now = state.clock.now()
        _close_if_open(state, console, now)
        _start_task(state, console, description, now)

    handler.__name__ = f"cmd_{description.lower()}"
    return handler


cmd_lunch = _fixed_task(LUNCH_DESCRIPTION)
cmd_bio = _fixed_task(BIOBREAK_DESCRIPTION)


def cmd_describe(state: SessionState, console: Console) -> None:
    _say_open_task(state, console)
    if not state.store.has_open_task:
        return
    description = console.ask("Write the new description: ").strip()
    if not description:
        console.say("Empty description ignored.")
        return
    state.store.replace_open_description(description)


def cmd_describe_copy(state: SessionState, console: Console) -> None:
    if not state.store.has_open_task:
        console.say("There is currently no open item to copy a description into")
        console.say()
        return
    console.say("This will copy a previous description to a currently open task")
    console.say()
    _say_closed_tasks(state, console)
    _say_open_task(state, console)
    task_id = _ask_task_id(state, console)
    if task_id is None:
        return
    state.store.replace_open_description(state.store.description_of(task_id))


def cmd_append(state: SessionState, console: Console) -> None:
    _say_open_task(state, console)
    if not state.store.has_open_task:
        return
    # Leading whitespace is part of the appended text.
    extra = console.ask("Write what you would like to append: ").rstrip()
    state.store.append_to_open_description(extra)


def cmd_show(state: SessionState, console: Console) -> None:
    _say_closed_tasks(state, console)
    _say_open_task(state, console)


def cmd_quit(state: SessionState, console: Console) -> None:
    _close_if_open(state, console, state.clock.now())


registry.register(
    "h", cmd_help, help_text="open help text and current status, the current open task"
)
registry.register(
    "n",
    cmd_new,
    help_text="close current if one is open and create-new/start task",
    aliases=["s"],
)
registry.register(
    "nc", cmd_new_copy, help_text="close current if one is open, new copy of a previous task"
)
registry.register(
    "lunch", cmd_lunch, help_text="close current if one is open and start lunch break"
)
registry.register("bio", cmd_bio, help_text="close current if one is open and start biobreak")
registry.register("d", cmd_describe, help_text="change current task description")
registry.register("dc", cmd_describe_copy, help_text="copy the description from a previous task")
registry.register("a", cmd_append, help_text="append description to current task description")
registry.register("show", cmd_show, help_text="show all tasks")
registry.register(QUIT_COMMAND, cmd_quit, help_text="quit the application and save to CSV file")
