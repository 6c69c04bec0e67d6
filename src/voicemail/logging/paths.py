"""
Log directory preparation.
"""

from __future__ import annotations

from pathlib import Path

LOG_DIRECTORY_MODE = 0o755


def ensure_directory_exists(file_path: str | Path) -> Path:
    """Create the parent directory of a log file if it does not exist.

    Only the immediate parent is created; a missing grandparent raises
    ``FileNotFoundError``. Filesystem errors are not handled here.

    Returns:
        The absolute path of the log file.
    """
    absolute_path = Path(file_path).resolve()
    directory = absolute_path.parent

    if not directory.exists():
        directory.mkdir(mode=LOG_DIRECTORY_MODE, exist_ok=True)

    return absolute_path
