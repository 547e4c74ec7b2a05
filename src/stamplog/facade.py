from __future__ import annotations

"""
Process-Wide Default Logger.

Convenience layer for applications that want a single shared logger.
The default instance is created at most once: the first init call fires
the gate and every later call is ignored, whatever configuration it
carries. All logging helpers are no-ops until a default instance exists.

Library code should prefer passing a Logger instance explicitly.
"""

import sys
import threading
from typing import Any, Optional

from stamplog.core.formatting import render_message
from stamplog.core.logger import Logger
from stamplog.domain.config import LoggerConfig
from stamplog.domain.levels import OutputMode, Severity

_default_logger: Optional[Logger] = None
_init_fired: bool = False
_init_lock = threading.Lock()


# -----------------------------------------------------------------------------
# INITIALIZATION
# -----------------------------------------------------------------------------

def init(config: LoggerConfig) -> Optional[Logger]:
    """
    Create the process-wide default logger once.

    Args:
        config: Construction parameters.

    Returns:
        Optional[Logger]: The default logger (None if the first attempt failed).

    Raises:
        ValueError, OSError: Construction errors of the first call.
    """
    global _default_logger, _init_fired

    with _init_lock:
        if _init_fired:
            return _default_logger
        _init_fired = True
        _default_logger = Logger(config)
        return _default_logger


def init_console_only(console_level: Severity) -> Optional[Logger]:
    return init(LoggerConfig(
        output_mode=OutputMode.CONSOLE_ONLY,
        console_level=console_level,
    ))


def init_file_only(file_level: Severity, file_path: str, max_file_size: int = 0) -> Optional[Logger]:
    return init(LoggerConfig(
        output_mode=OutputMode.FILE_ONLY,
        file_level=file_level,
        file_path=file_path,
        max_file_size=max_file_size,
    ))


def init_both(
        console_level: Severity,
        file_level: Severity,
        file_path: str,
        max_file_size: int = 0,
) -> Optional[Logger]:
    return init(LoggerConfig(
        output_mode=OutputMode.BOTH,
        console_level=console_level,
        file_level=file_level,
        file_path=file_path,
        max_file_size=max_file_size,
    ))


def get_default() -> Optional[Logger]:
    """Return the default logger, or None before a successful init."""
    return _default_logger


def close() -> None:
    """Close the default logger's file. A no-op without a default logger."""
    default = _default_logger
    if default is not None:
        default.close()


# -----------------------------------------------------------------------------
# LEVELED HELPERS
# -----------------------------------------------------------------------------

def debug(message: Any, *args: Any) -> None:
    default = _default_logger
    if default is not None:
        default.log(Severity.DEBUG, message, *args, stacklevel=2)


def info(message: Any, *args: Any) -> None:
    default = _default_logger
    if default is not None:
        default.log(Severity.INFO, message, *args, stacklevel=2)


def warn(message: Any, *args: Any) -> None:
    default = _default_logger
    if default is not None:
        default.log(Severity.WARN, message, *args, stacklevel=2)


def error(message: Any, *args: Any) -> None:
    default = _default_logger
    if default is not None:
        default.log(Severity.ERROR, message, *args, stacklevel=2)


# -----------------------------------------------------------------------------
# USER-FACING CONSOLE HELPERS
# -----------------------------------------------------------------------------
# These print to the terminal regardless of the console level and record
# the message in the log file when file output is configured.

def console_error(message: Any, *args: Any) -> None:
    """Show 'Error: <msg>' on stderr and log it at ERROR to the file."""
    _console_message(sys.stderr, "Error:", Severity.ERROR, message, args)


def console_info(message: Any, *args: Any) -> None:
    """Show 'Info: <msg>' on stdout and log it at INFO to the file."""
    _console_message(sys.stdout, "Info:", Severity.INFO, message, args)


def console_success(message: Any, *args: Any) -> None:
    """Show 'Success: <msg>' on stdout and log it at INFO to the file."""
    _console_message(sys.stdout, "Success:", Severity.INFO, message, args)


def console_help(message: Any, *args: Any) -> None:
    """Print help text on stdout. Never written to the log file."""
    if _shows_console(_default_logger):
        print(render_message(message, args))


def _shows_console(default: Optional[Logger]) -> bool:
    return default is None or default.config.output_mode.uses_console


def _console_message(stream: Any, prefix: str, level: Severity, message: Any, args: tuple) -> None:
    sink = _default_logger
    if _shows_console(sink):
        print(prefix, render_message(message, args), file=stream)

    if sink is not None and sink.config.output_mode.uses_file:
        sink.log_to_file(level, message, *args, stacklevel=3)
