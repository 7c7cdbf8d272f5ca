from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from temp_cleanup import interactive
from temp_cleanup.scheduler import TaskRegistrar


class _RecordingRunner:
    def __init__(self, *, returncode: int = 0, stdout: str = "SUCCESS", stderr: str = ""):
        self.calls: list[str] = []
        self._returncode = returncode
        self._stdout = stdout
        self._stderr = stderr

    def __call__(self, command: str) -> subprocess.CompletedProcess:
        self.calls.append(command)
        return subprocess.CompletedProcess(
            args=command, returncode=self._returncode, stdout=self._stdout, stderr=self._stderr
        )


def _answers(*values: str):
    queue = list(values)

    def ask(prompt: str) -> str:
        if not queue:
            raise EOFError
        return queue.pop(0)

    return ask


def _run(runner: _RecordingRunner, *answers: str):
    out: list[str] = []
    err: list[str] = []
    code = interactive.run_interactive_setup(
        registrar=TaskRegistrar(task_name="TempCleanupTask", runner=runner),
        script_path=Path("/opt/temp_cleanup/__main__.py"),
        executable="/usr/bin/python3",
        ask=_answers(*answers),
        out=out.append,
        err=err.append,
    )
    return code, out, err


@pytest.mark.parametrize("raw", ["0", "-3", "abc", "", "1.5"])
def test_parse_interval_rejects_invalid_values(raw: str) -> None:
    with pytest.raises(ValueError):
        interactive.parse_interval(raw)


def test_parse_interval_trims_input() -> None:
    assert interactive.parse_interval(" 4 ") == 4


def test_declining_setup_never_schedules() -> None:
    runner = _RecordingRunner()
    code, out, _ = _run(runner, "n")

    assert code == 0
    assert "Exiting without scheduling." in out
    assert runner.calls == []


def test_end_of_input_counts_as_decline() -> None:
    runner = _RecordingRunner()
    code, out, _ = _run(runner)

    assert code == 0
    assert "Exiting without scheduling." in out
    assert runner.calls == []


def test_invalid_menu_choice_aborts() -> None:
    runner = _RecordingRunner()
    code, out, _ = _run(runner, "y", "7")

    assert code == 1
    assert out[-1] == "Invalid choice"
    assert runner.calls == []


@pytest.mark.parametrize("raw_interval", ["0", "-3", "abc"])
def test_invalid_interval_aborts_without_scheduling(raw_interval: str) -> None:
    runner = _RecordingRunner()
    code, out, _ = _run(runner, "Y", "2", raw_interval)

    assert code == 1
    assert out[-1] == "Invalid interval"
    assert runner.calls == []


def test_weekly_setup_registers_task() -> None:
    runner = _RecordingRunner(stdout="SUCCESS: created")
    code, out, err = _run(runner, " y ", "3", "2")

    assert code == 0
    assert err == []
    assert len(runner.calls) == 1
    assert "/SC WEEKLY /MO 2 /D MON" in runner.calls[0]
    assert '\\"/opt/temp_cleanup/__main__.py\\" --cleanup' in runner.calls[0]
    assert "Scheduled task created successfully (every 2 weeks, on Monday):" in out
    assert "SUCCESS: created" in out
    assert "1. Hourly" in out
    assert "4. Monthly" in out


def test_scheduling_failure_prints_admin_hint() -> None:
    runner = _RecordingRunner(returncode=1, stdout="", stderr="ERROR: Access is denied.")
    code, _, err = _run(runner, "y", "4", "1")

    assert code == 1
    assert err == [
        "Failed to create scheduled task: ERROR: Access is denied.",
        "Make sure to run this script as Administrator.",
    ]


def test_resolve_script_path_maps_app_module_to_package_main() -> None:
    app_path = Path(interactive.__file__).with_name("app.py")

    assert interactive.resolve_script_path(str(app_path)) == app_path.resolve().with_name("__main__.py")


def test_resolve_script_path_resolves_relative_paths(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    assert interactive.resolve_script_path("cleanup.py") == (tmp_path / "cleanup.py").resolve()
