from __future__ import annotations

from pathlib import Path

from temp_cleanup import app


def test_cleanup_flag_runs_cleanup_only(tmp_path: Path, monkeypatch, capsys) -> None:
    user_temp = tmp_path / "user"
    windir = tmp_path / "windows"
    (user_temp / "nested").mkdir(parents=True)
    (user_temp / "nested" / "f.tmp").write_bytes(b"x" * 2048)
    (windir / "Temp").mkdir(parents=True)
    (windir / "Temp" / "g.tmp").write_bytes(b"x" * 10)

    monkeypatch.setenv("TEMP", str(user_temp))
    monkeypatch.setenv("WINDIR", str(windir))
    monkeypatch.setenv("TEMP_CLEANUP_ENV_FILE", str(tmp_path / "absent.env"))

    def fail_interactive(**_: object) -> int:
        raise AssertionError("interactive setup must not run in cleanup mode")

    monkeypatch.setattr(app, "run_interactive_setup", fail_interactive)

    code = app.main(["--cleanup"])

    assert code == 0
    assert list(user_temp.iterdir()) == []
    assert list((windir / "Temp").iterdir()) == []
    output = capsys.readouterr().out
    assert "Freed space: 2.00KB" in output
    assert "Freed space: 10.00B" in output
    assert "Cleanup done." in output


def test_no_flag_runs_interactive_setup_with_configured_task_name(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("TEMP_CLEANUP_ENV_FILE", str(tmp_path / "absent.env"))
    monkeypatch.setenv("TEMP_CLEANUP_TASK_NAME", "NightlyTempSweep")
    captured: dict = {}

    def fake_interactive(*, registrar, script_path, executable) -> int:
        captured["task_name"] = registrar.task_name
        captured["script_path"] = script_path
        return 1

    monkeypatch.setattr(app, "run_interactive_setup", fake_interactive)

    assert app.main([]) == 1
    assert captured["task_name"] == "NightlyTempSweep"
    assert isinstance(captured["script_path"], Path)


def test_unknown_arguments_are_ignored() -> None:
    args = app.parse_args(["--cleanup", "--verbose"])
    assert args.cleanup is True
