from __future__ import annotations

"""
Log Line Formatting.

Renders messages into the single line layout shared by console and file
output, and resolves the source location of a logging call.
"""

import os
import sys
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Tuple

from stamplog.domain.levels import Severity

LINE_DATE_FORMAT = "%Y/%m/%d %H:%M:%S"
UNKNOWN_FILE = "???"


@dataclass(frozen=True)
class SourceLocation:
    """Call site of a logging invocation."""
    file: str
    line: int

    def __str__(self) -> str:
        return f"{self.file}:{self.line}"


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def format_line(
        now: datetime,
        level: Severity,
        location: SourceLocation,
        message: str,
) -> str:
    """
    Build a complete log line.

    Layout: <YYYY/MM/DD HH:MM:SS> <LEVEL>: <file>:<line> - <message>\\n

    Args:
        now: Timestamp of the entry.
        level: Severity of the entry.
        location: Call site.
        message: Rendered message text.

    Returns:
        str: The newline-terminated line.
    """
    return f"{now.strftime(LINE_DATE_FORMAT)} {level.label}: {location} - {message}\n"


def render_message(message: Any, args: Tuple[Any, ...]) -> str:
    """
    Apply %-style arguments to a message.

    A single mapping argument is used for named placeholders, as the
    standard logging module does. Mismatched arguments never raise: the
    raw message is returned with the arguments appended.

    Args:
        message: Message or format string.
        args: Positional formatting arguments.

    Returns:
        str: The rendered message.
    """
    text = str(message)
    if not args:
        return text

    params: Any = args
    if len(args) == 1 and isinstance(args[0], Mapping) and args[0]:
        params = args[0]

    try:
        return text % params
    except (TypeError, ValueError, KeyError):
        extra = " ".join(repr(a) for a in args)
        return f"{text} {extra}"


def find_caller(depth: int = 1) -> SourceLocation:
    """
    Resolve the call site a number of frames above the caller.

    depth=1 names the function that called the function calling find_caller,
    mirroring the stacklevel convention of the standard logging module.

    Args:
        depth: Number of frames to walk up from the caller.

    Returns:
        SourceLocation: Base name of the source file and line number.
    """
    try:
        frame = sys._getframe(depth + 1)
    except ValueError:
        return SourceLocation(UNKNOWN_FILE, 0)
    return SourceLocation(os.path.basename(frame.f_code.co_filename), frame.f_lineno)
