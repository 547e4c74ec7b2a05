from __future__ import annotations

"""
stamplog: leveled console and file logging with timestamped size rotation.
"""

import logging

from stamplog.core.file_sink import FileSink, SinkState
from stamplog.core.formatting import SourceLocation
from stamplog.core.logger import Logger
from stamplog.domain.config import LoggerConfig
from stamplog.domain.levels import OutputMode, Severity
from stamplog.facade import (
    close,
    console_error,
    console_help,
    console_info,
    console_success,
    debug,
    error,
    get_default,
    info,
    init,
    init_both,
    init_console_only,
    init_file_only,
    warn,
)
from stamplog.infra.handlers import SinkHandler, attach_sink_handler, detach_sink_handlers

__version__ = "0.1.0"

# Internal diagnostics stay silent unless the host application configures logging
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "FileSink",
    "Logger",
    "LoggerConfig",
    "OutputMode",
    "Severity",
    "SinkHandler",
    "SinkState",
    "SourceLocation",
    "attach_sink_handler",
    "close",
    "console_error",
    "console_help",
    "console_info",
    "console_success",
    "debug",
    "detach_sink_handlers",
    "error",
    "get_default",
    "info",
    "init",
    "init_both",
    "init_console_only",
    "init_file_only",
    "warn",
]
