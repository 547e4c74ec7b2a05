from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Derives the on-disk names of log files from a base path template and
creates the directories that hold them. Timestamps use a format that is
valid on every major filesystem (no colons).
"""

import os
from datetime import datetime

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

SUFFIX_FORMAT = "%d.%m.%Y_%H-%M-%S"
MAX_DISAMBIGUATOR = 9999
DIR_MODE = 0o755

# -----------------------------------------------------------------------------
# NAMING API
# -----------------------------------------------------------------------------

def timestamp_suffix(now: datetime, millis: bool = False) -> str:
    """
    Render a filesystem-safe timestamp.

    Args:
        now: Point in time to render.
        millis: Append a millisecond component (DD.MM.YYYY_HH-MM-SS.mmm).

    Returns:
        str: The formatted suffix.
    """
    suffix = now.strftime(SUFFIX_FORMAT)
    if millis:
        suffix = f"{suffix}.{now.microsecond // 1000:03d}"
    return suffix


def path_with_suffix(base_path: str, suffix: str) -> str:
    """
    Insert a suffix before the file extension of a path.

    Example: logs/app.log + 31.01.2026_23-10-15 -> logs/app_31.01.2026_23-10-15.log

    Args:
        base_path: Path template.
        suffix: Text inserted after an underscore.

    Returns:
        str: The derived path. Bare file names stay bare.
    """
    directory, base = os.path.split(base_path)
    name, ext = os.path.splitext(base)
    new_base = f"{name}_{suffix}{ext}"
    if directory in ("", "."):
        return new_base
    return os.path.join(directory, new_base)


def unique_log_path(base_path: str, now: datetime) -> str:
    """
    Pick a timestamped path for base_path that does not exist yet.

    On a same-second collision the suffix gets a numeric disambiguator
    (_01, _02, ... _9999). When every disambiguator is taken, a
    millisecond-resolution suffix is returned without further checks.

    Args:
        base_path: Path template.
        now: Point in time used for the suffix.

    Returns:
        str: The candidate path.

    Raises:
        OSError: If probing a candidate fails for any reason other than
            the file not existing.
    """
    suffix = timestamp_suffix(now)
    candidate = path_with_suffix(base_path, suffix)
    if not _path_exists(candidate):
        return candidate

    for i in range(1, MAX_DISAMBIGUATOR + 1):
        candidate = path_with_suffix(base_path, f"{suffix}_{i:02d}")
        if not _path_exists(candidate):
            return candidate

    return path_with_suffix(base_path, timestamp_suffix(now, millis=True))

# -----------------------------------------------------------------------------
# DIRECTORY API
# -----------------------------------------------------------------------------

def ensure_dir(path: str) -> None:
    """
    Create the parent directory hierarchy of a file path if needed.

    Args:
        path: File path whose directory must exist.

    Raises:
        OSError: If the directory cannot be created.
    """
    directory = os.path.dirname(path)
    if directory in ("", ".", os.sep):
        return
    os.makedirs(directory, mode=DIR_MODE, exist_ok=True)

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _path_exists(path: str) -> bool:
    """Stat a path. Only 'not found' counts as absent; other errors propagate."""
    try:
        os.stat(path)
    except FileNotFoundError:
        return False
    return True
