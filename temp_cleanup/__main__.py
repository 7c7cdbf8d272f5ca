import sys
from pathlib import Path

if not __package__:
    # started as a plain script (the scheduled task does this); make the
    # package importable from a checkout that was never pip-installed
    package_parent = str(Path(__file__).resolve().parent.parent)
    if package_parent not in sys.path:
        sys.path.insert(0, package_parent)

from temp_cleanup.app import main


if __name__ == "__main__":
    raise SystemExit(main())
