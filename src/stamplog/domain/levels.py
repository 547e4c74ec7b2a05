from __future__ import annotations

"""
Severity and Output Mode Definitions.

Declares the ordered severity scale used for per-sink filtering and the
output destinations a logger can be bound to. Includes tolerant parsers
that turn user-supplied names into enum members.
"""

from enum import Enum, IntEnum
from typing import Dict, Union


class Severity(IntEnum):
    """Ordered log severity. Comparison is numeric."""
    DEBUG = 0
    INFO = 1
    WARN = 2
    ERROR = 3

    @property
    def label(self) -> str:
        """Text written into every log line for this severity."""
        return self.name


class OutputMode(Enum):
    """Destinations a logger writes to. Fixed at construction."""
    CONSOLE_ONLY = "console"
    FILE_ONLY = "file"
    BOTH = "both"

    @property
    def uses_console(self) -> bool:
        return self in (OutputMode.CONSOLE_ONLY, OutputMode.BOTH)

    @property
    def uses_file(self) -> bool:
        return self in (OutputMode.FILE_ONLY, OutputMode.BOTH)


# -----------------------------------------------------------------------------
# NAME MAPPINGS
# -----------------------------------------------------------------------------

_SEVERITY_MAP: Dict[str, Severity] = {
    "DEBUG": Severity.DEBUG,
    "INFO": Severity.INFO,
    "WARN": Severity.WARN,
    "WARNING": Severity.WARN,
    "ERROR": Severity.ERROR,
}

_MODE_MAP: Dict[str, OutputMode] = {
    "CONSOLE": OutputMode.CONSOLE_ONLY,
    "CONSOLE_ONLY": OutputMode.CONSOLE_ONLY,
    "FILE": OutputMode.FILE_ONLY,
    "FILE_ONLY": OutputMode.FILE_ONLY,
    "BOTH": OutputMode.BOTH,
}


# -----------------------------------------------------------------------------
# PARSERS
# -----------------------------------------------------------------------------

def parse_severity(
        value: Union[str, int, Severity, None],
        default: Severity = Severity.INFO,
) -> Severity:
    """
    Convert a severity name or number into a Severity member.

    Unknown names and out-of-range numbers fall back to the default.

    Args:
        value: Raw severity (name, numeric value or member).
        default: Severity used when the value cannot be interpreted.

    Returns:
        Severity: The resolved severity.
    """
    if isinstance(value, Severity):
        return value
    if value is None:
        return default
    if isinstance(value, int):
        try:
            return Severity(value)
        except ValueError:
            return default
    return _SEVERITY_MAP.get(str(value).strip().upper(), default)


def parse_output_mode(
        value: Union[str, OutputMode, None],
        default: OutputMode = OutputMode.CONSOLE_ONLY,
) -> OutputMode:
    """
    Convert an output mode name into an OutputMode member.

    Accepts both the enum names ("FILE_ONLY") and the short values ("file").

    Args:
        value: Raw output mode.
        default: Mode used when the value cannot be interpreted.

    Returns:
        OutputMode: The resolved output mode.
    """
    if isinstance(value, OutputMode):
        return value
    if not value:
        return default
    key = str(value).strip().upper().replace("-", "_")
    return _MODE_MAP.get(key, default)
