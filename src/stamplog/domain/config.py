from __future__ import annotations

"""
Logger Configuration Models.

Defines the immutable construction parameters of a Logger and the loaders
that build them from plain mappings or environment variables.
"""

import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from stamplog.domain.levels import (
    OutputMode,
    Severity,
    parse_output_mode,
    parse_severity,
)

ENV_PREFIX = "STAMPLOG_"


@dataclass(frozen=True)
class LoggerConfig:
    """
    Immutable specification of a Logger instance.

    Attributes:
        output_mode: Sinks the logger writes to.
        console_level: Minimum severity printed to the console.
        file_level: Minimum severity written to the log file.
        file_path: Base path template (e.g. logs/app.log). The actual files
            carry a timestamp suffix; the template itself is never written.
        max_file_size: Size threshold in bytes before rotation (0 disables).
    """
    output_mode: OutputMode = OutputMode.CONSOLE_ONLY
    console_level: Severity = Severity.INFO
    file_level: Severity = Severity.DEBUG
    file_path: str = ""
    max_file_size: int = 0

    def validate(self) -> None:
        """
        Check that the combination of parameters is usable.

        Raises:
            ValueError: If a file-backed mode has no base path.
        """
        if self.output_mode.uses_file and not (self.file_path or "").strip():
            raise ValueError(
                f"A log file path is required for output mode '{self.output_mode.value}'."
            )

    # -------------------------------------------------------------------------
    # LOADERS
    # -------------------------------------------------------------------------

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> LoggerConfig:
        """
        Build a configuration from a plain dictionary (e.g. parsed JSON).

        Unknown or malformed values fall back to the field defaults.

        Args:
            data: Mapping with any of the keys 'output_mode', 'console_level',
                'file_level', 'file_path', 'max_file_size'.

        Returns:
            LoggerConfig: The resulting configuration (not yet validated).
        """
        defaults = cls()
        return cls(
            output_mode=parse_output_mode(data.get("output_mode"), defaults.output_mode),
            console_level=parse_severity(data.get("console_level"), defaults.console_level),
            file_level=parse_severity(data.get("file_level"), defaults.file_level),
            file_path=str(data.get("file_path") or ""),
            max_file_size=_parse_size(data.get("max_file_size"), defaults.max_file_size),
        )

    @classmethod
    def from_env(
            cls,
            prefix: str = ENV_PREFIX,
            environ: Optional[Mapping[str, str]] = None,
    ) -> LoggerConfig:
        """
        Build a configuration from environment variables.

        Reads <prefix>MODE, <prefix>CONSOLE_LEVEL, <prefix>FILE_LEVEL,
        <prefix>FILE and <prefix>MAX_BYTES.

        Args:
            prefix: Variable name prefix.
            environ: Source mapping, defaults to os.environ.

        Returns:
            LoggerConfig: The resulting configuration (not yet validated).
        """
        env = os.environ if environ is None else environ
        return cls.from_mapping({
            "output_mode": env.get(f"{prefix}MODE"),
            "console_level": env.get(f"{prefix}CONSOLE_LEVEL"),
            "file_level": env.get(f"{prefix}FILE_LEVEL"),
            "file_path": env.get(f"{prefix}FILE"),
            "max_file_size": env.get(f"{prefix}MAX_BYTES"),
        })


def _parse_size(value: Any, default: int) -> int:
    """Convert a byte count from int or numeric string, keeping the default otherwise."""
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default
