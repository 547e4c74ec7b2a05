from __future__ import annotations

from .config import LoggerConfig
from .levels import OutputMode, Severity, parse_output_mode, parse_severity

__all__ = [
    "LoggerConfig",
    "OutputMode",
    "Severity",
    "parse_output_mode",
    "parse_severity",
]
