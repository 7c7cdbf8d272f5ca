from __future__ import annotations

import argparse
import logging
import sys

from .cleaner import run_cleanup
from .config import DEFAULT_LOG_LEVEL, CleanupConfig, load_config
from .interactive import resolve_script_path, run_interactive_setup
from .scheduler import TaskRegistrar


def configure_logging(config: CleanupConfig) -> None:
    level = getattr(logging, str(config.log_level).upper(), None)
    if not isinstance(level, int):
        level = getattr(logging, DEFAULT_LOG_LEVEL)
    logging.basicConfig(level=level)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Clean Windows temp folders or schedule the cleanup")
    parser.add_argument("--cleanup", action="store_true", help="Run the cleanup now and exit")
    args, _unknown = parser.parse_known_args(argv)
    return args


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    config = load_config()
    configure_logging(config)

    if args.cleanup:
        run_cleanup(config.target_folders)
        return 0

    registrar = TaskRegistrar(task_name=config.task_name)
    return run_interactive_setup(
        registrar=registrar,
        script_path=resolve_script_path(),
        executable=sys.executable,
    )


if __name__ == "__main__":
    raise SystemExit(main())
