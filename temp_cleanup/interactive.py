from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

from .models import Frequency, ScheduleSpec
from .scheduler import (
    InvalidScheduleError,
    SchedulingError,
    TaskRegistrar,
    describe_trigger,
)


FREQUENCY_CHOICES = {
    "1": Frequency.HOURLY,
    "2": Frequency.DAILY,
    "3": Frequency.WEEKLY,
    "4": Frequency.MONTHLY,
}

INTRO_LINES = (
    "This script schedules automatic cleanup of your Windows temp folders.",
    "You need to run this script once as Administrator to create the scheduled task.",
    "After setup, cleanup will run automatically on schedule.\n",
)


def _print_error(message: str) -> None:
    print(message, file=sys.stderr)


def ask_question(query: str, *, ask: Callable[[str], str] = input) -> str:
    try:
        return str(ask(query)).strip()
    except EOFError:
        return ""


def parse_interval(value: str) -> int:
    text = str(value or "").strip()
    try:
        interval = int(text)
    except ValueError:
        raise ValueError(f"Invalid interval '{value}'") from None
    if interval < 1:
        raise ValueError(f"Invalid interval '{value}'")
    return interval


def resolve_script_path(argv0: str | None = None) -> Path:
    path = Path(argv0 if argv0 is not None else sys.argv[0]).resolve()
    # app.py uses relative imports and cannot be started as a plain script
    if path == Path(__file__).with_name("app.py").resolve():
        return path.with_name("__main__.py")
    return path


def run_interactive_setup(
    *,
    registrar: TaskRegistrar,
    script_path: Path,
    executable: str | None = None,
    ask: Callable[[str], str] = input,
    out: Callable[[str], None] = print,
    err: Callable[[str], None] | None = None,
) -> int:
    err = err or _print_error

    for line in INTRO_LINES:
        out(line)

    proceed = ask_question("Do you want to set up scheduling now? (y/n): ", ask=ask)
    if proceed.lower() != "y":
        out("Exiting without scheduling.")
        return 0

    out("Choose scheduling frequency:")
    for key, frequency in FREQUENCY_CHOICES.items():
        out(f"{key}. {frequency.value.capitalize()}")

    choice = ask_question("Enter choice number: ", ask=ask)
    frequency = FREQUENCY_CHOICES.get(choice)
    if frequency is None:
        out("Invalid choice")
        return 1

    interval_input = ask_question(f"Enter interval (every how many {frequency.unit}s?): ", ask=ask)
    try:
        interval = parse_interval(interval_input)
    except ValueError:
        out("Invalid interval")
        return 1

    try:
        output = registrar.register(
            script_path=script_path,
            frequency=frequency,
            interval=interval,
            executable=executable,
        )
    except InvalidScheduleError as exc:
        err(str(exc))
        return 1
    except SchedulingError as exc:
        err(f"Failed to create scheduled task: {exc.detail}")
        err("Make sure to run this script as Administrator.")
        return 1

    trigger = describe_trigger(ScheduleSpec.for_frequency(frequency, interval))
    out(f"Scheduled task created successfully ({trigger}):")
    out(output)
    out("\nYou can manually run cleanup anytime with:\n  python -m temp_cleanup --cleanup")
    return 0
