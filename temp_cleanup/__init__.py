from .cleaner import clean_folder, folder_size_bytes, format_bytes, run_cleanup
from .config import CleanupConfig, load_config
from .models import CleanupReport, Frequency, ScheduleSpec
from .scheduler import InvalidScheduleError, SchedulingError, TaskRegistrar


__all__ = [
    "CleanupConfig",
    "CleanupReport",
    "Frequency",
    "InvalidScheduleError",
    "ScheduleSpec",
    "SchedulingError",
    "TaskRegistrar",
    "clean_folder",
    "folder_size_bytes",
    "format_bytes",
    "load_config",
    "run_cleanup",
]
