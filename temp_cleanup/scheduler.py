"""Register the cleanup as a Windows scheduled task through ``schtasks``.

The task re-runs this tool with ``--cleanup`` on the chosen trigger. The
external command is the only contract with Task Scheduler: its exit status
decides success and its captured output is handed back to the caller.
"""
from __future__ import annotations

import logging
import subprocess
import sys
from pathlib import Path
from typing import Callable

from .models import Frequency, ScheduleSpec


LOGGER = logging.getLogger("temp_cleanup")

CLEANUP_FLAG = "--cleanup"

CommandRunner = Callable[[str], subprocess.CompletedProcess]

_DAY_NAMES = {
    "MON": "Monday",
}


class InvalidScheduleError(ValueError):
    """Raised for a frequency or interval that cannot be scheduled."""


class SchedulingError(RuntimeError):
    """Raised when the scheduling command fails or cannot be started."""

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


def run_shell_command(command: str) -> subprocess.CompletedProcess:
    return subprocess.run(
        command,
        shell=True,
        capture_output=True,
        text=True,
        check=False,
    )


def parse_frequency(value: str | Frequency) -> Frequency:
    normalized = str(value.value if isinstance(value, Frequency) else value or "").strip().lower()
    try:
        return Frequency(normalized)
    except ValueError:
        allowed = [item.value for item in Frequency]
        raise InvalidScheduleError(f"Invalid frequency '{value}'. Allowed values: {allowed}") from None


def build_schedule_spec(frequency: str | Frequency, interval: int) -> ScheduleSpec:
    parsed = parse_frequency(frequency)
    if isinstance(interval, bool) or not isinstance(interval, int) or interval < 1:
        raise InvalidScheduleError(f"Invalid interval '{interval}'. Must be a positive integer")
    return ScheduleSpec.for_frequency(parsed, interval)


def build_trigger_args(spec: ScheduleSpec) -> list[str]:
    args = ["/SC", spec.frequency.schedule_code, "/MO", str(spec.interval)]
    if spec.day:
        args.extend(["/D", spec.day])
    return args


def describe_trigger(spec: ScheduleSpec) -> str:
    unit = spec.frequency.unit
    text = f"every {unit}" if spec.interval == 1 else f"every {spec.interval} {unit}s"
    if spec.frequency is Frequency.WEEKLY and spec.day:
        text = f"{text}, on {_DAY_NAMES.get(spec.day, spec.day)}"
    elif spec.frequency is Frequency.MONTHLY and spec.day:
        text = f"{text}, on day {spec.day}"
    return text


def build_task_run(*, executable: str | Path, script_path: str | Path) -> str:
    return f'"{executable}" "{script_path}" {CLEANUP_FLAG}'


def escape_task_run(task_run: str) -> str:
    # schtasks takes /TR as one quoted argument; inner quotes are backslash-escaped
    return '"' + task_run.replace('"', '\\"') + '"'


def build_schtasks_command(*, task_name: str, task_run: str, spec: ScheduleSpec) -> str:
    parts = [
        "schtasks",
        "/Create",
        "/F",
        *build_trigger_args(spec),
        "/TN",
        f'"{task_name}"',
        "/TR",
        escape_task_run(task_run),
        "/RL",
        "HIGHEST",
    ]
    return " ".join(parts)


def _result_text(result: subprocess.CompletedProcess) -> str:
    stderr = str(result.stderr or "").strip()
    stdout = str(result.stdout or "").strip()
    return stderr or stdout


class TaskRegistrar:
    def __init__(self, *, task_name: str, runner: CommandRunner | None = None):
        self._task_name = task_name
        self._runner = runner or run_shell_command

    @property
    def task_name(self) -> str:
        return self._task_name

    def build_command(
        self,
        *,
        script_path: str | Path,
        spec: ScheduleSpec,
        executable: str | Path | None = None,
    ) -> str:
        task_run = build_task_run(executable=executable or sys.executable, script_path=script_path)
        return build_schtasks_command(task_name=self._task_name, task_run=task_run, spec=spec)

    def register(
        self,
        *,
        script_path: str | Path,
        frequency: str | Frequency,
        interval: int,
        executable: str | Path | None = None,
    ) -> str:
        """Create or replace the scheduled task and return the command's stdout.

        Raises InvalidScheduleError before anything is run when the frequency
        or interval is unusable, and SchedulingError when schtasks fails.
        """
        spec = build_schedule_spec(frequency, interval)
        command = self.build_command(script_path=script_path, spec=spec, executable=executable)
        LOGGER.info("[SCHEDULE]: Registering %s (%s)", self._task_name, describe_trigger(spec))
        LOGGER.debug("[SCHEDULE]: %s", command)

        try:
            result = self._runner(command)
        except OSError as exc:
            raise SchedulingError(str(exc)) from exc

        if result.returncode != 0:
            detail = _result_text(result) or f"schtasks exited with code {result.returncode}"
            raise SchedulingError(detail)

        return str(result.stdout or "")
