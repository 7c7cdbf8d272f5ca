from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Callable, Iterable

from .models import CleanupReport


LOGGER = logging.getLogger("temp_cleanup")

SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")


def folder_size_bytes(path: Path) -> int:
    """Sum the sizes of regular files below *path*.

    Unreadable directories and files count as 0. Symlinks are not followed.
    """
    total = 0
    # explicit stack so tree depth is not bounded by the recursion limit
    pending = [Path(path)]
    while pending:
        directory = pending.pop()
        try:
            entries = list(directory.iterdir())
        except OSError:
            continue

        for item in entries:
            try:
                if item.is_symlink():
                    continue
                if item.is_dir():
                    pending.append(item)
                elif item.is_file():
                    total += int(item.stat().st_size)
            except OSError:
                continue
    return total


def format_bytes(size: float) -> str:
    value = float(size)
    index = 0
    while value >= 1024 and index < len(SIZE_UNITS) - 1:
        value /= 1024
        index += 1
    return f"{value:.2f}{SIZE_UNITS[index]}"


def _remove_entry(item: Path) -> bool:
    """Delete one top-level entry. Returns True when it was a directory."""
    if item.is_dir() and not item.is_symlink():
        shutil.rmtree(item)
        return True
    item.unlink()
    return False


def clean_folder(folder: Path) -> CleanupReport | None:
    root = Path(folder)
    try:
        entries = list(root.iterdir())
    except OSError:
        LOGGER.warning("[CLEANUP]: Cannot access folder %s", root, exc_info=True)
        return None

    report = CleanupReport(folder=root)
    report.bytes_before = folder_size_bytes(root)

    for item in entries:
        try:
            if _remove_entry(item):
                report.deleted_folders += 1
            else:
                report.deleted_files += 1
        except (OSError, RecursionError):
            # rmtree recurses per level on older interpreters
            report.skipped += 1
            report.failed_paths.append(item)
            LOGGER.debug("[CLEANUP]: Skipped %s", item, exc_info=True)

    report.bytes_after = folder_size_bytes(root)
    LOGGER.info(
        "[CLEANUP]: %s: %d files, %d folders removed, %d skipped, %d bytes freed",
        root,
        report.deleted_files,
        report.deleted_folders,
        report.skipped,
        report.bytes_freed,
    )
    return report


def print_report(report: CleanupReport, *, out: Callable[[str], None] = print) -> None:
    out(f"\nSummary for {report.folder}:")
    out(f"Deleted files: {report.deleted_files}")
    out(f"Deleted folders: {report.deleted_folders}")
    out(f"Skipped locked or inaccessible: {report.skipped}")
    out(f"Freed space: {format_bytes(report.bytes_freed)}")


def run_cleanup(folders: Iterable[Path], *, out: Callable[[str], None] = print) -> list[CleanupReport]:
    out("Starting temp files cleanup...")
    reports: list[CleanupReport] = []
    for folder in folders:
        report = clean_folder(folder)
        if report is None:
            out(f"Cannot access folder: {folder}")
            continue
        print_report(report, out=out)
        reports.append(report)
    out("\nCleanup done.")
    return reports
