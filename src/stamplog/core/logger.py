from __future__ import annotations

"""
Logger State Machine.

Ties configuration, formatting and the rotating file sink together behind a
single lock. Every read or mutation of the sink state and every console or
file write happens while the lock is held, so concurrent callers never see
the size counter and the open handle diverge.

Logging calls never raise: failures on the write path drop the affected
line for the failing sink only.
"""

import logging
import sys
import threading
from datetime import datetime
from typing import Any, Callable, List, Optional, TextIO, Tuple

from stamplog.core.file_sink import FileSink
from stamplog.core.formatting import (
    SourceLocation,
    find_caller,
    format_line,
    render_message,
)
from stamplog.domain.config import LoggerConfig
from stamplog.domain.levels import Severity

logger = logging.getLogger(__name__)

ENCODING = "utf-8"


class Logger:
    """
    Leveled logger writing to console, a rotating file, or both.

    Instances are independent of each other; any number may coexist.
    """

    def __init__(
            self,
            config: LoggerConfig,
            clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """
        Validate the configuration and open the first file for file modes.

        Args:
            config: Construction parameters.
            clock: Source of the current time for lines and file names.

        Raises:
            ValueError: If the configuration is unusable.
            OSError: If the log directory or the first file cannot be created.
        """
        config.validate()

        self._config = config
        self._clock = clock
        self._lock = threading.Lock()
        self._sink: Optional[FileSink] = None

        if config.output_mode.uses_file:
            sink = FileSink(config.file_path, config.max_file_size, clock)
            sink.open_new()
            self._sink = sink
            for note in sink.drain_notes():
                logger.debug(note)

    # -------------------------------------------------------------------------
    # PROPERTIES
    # -------------------------------------------------------------------------

    @property
    def config(self) -> LoggerConfig:
        return self._config

    @property
    def current_path(self) -> Optional[str]:
        """Path of the file currently written to, None when no file is open."""
        with self._lock:
            return self._sink.current_path if self._sink else None

    @property
    def current_size(self) -> int:
        with self._lock:
            return self._sink.current_size if self._sink else 0

    @property
    def is_open(self) -> bool:
        with self._lock:
            return bool(self._sink and self._sink.is_open)

    # -------------------------------------------------------------------------
    # LOGGING API
    # -------------------------------------------------------------------------

    def log(
            self,
            level: Severity,
            message: Any,
            *args: Any,
            location: Optional[SourceLocation] = None,
            stacklevel: int = 1,
    ) -> None:
        """
        Emit a message at the given severity.

        The message is rendered with %-style args only if at least one sink
        accepts the level. Never raises.

        Args:
            level: Severity of the message.
            message: Message or format string.
            *args: Formatting arguments.
            location: Explicit call site. Resolved from the stack if omitted.
            stacklevel: Frames above this call used as the call site.
        """
        to_console = self._console_accepts(level)
        to_file = self._file_accepts(level)
        if not (to_console or to_file):
            return
        if location is None:
            location = find_caller(stacklevel)
        self._emit(level, message, args, location, to_console, to_file)

    def log_to_file(
            self,
            level: Severity,
            message: Any,
            *args: Any,
            location: Optional[SourceLocation] = None,
            stacklevel: int = 1,
    ) -> None:
        """
        Emit a message to the file sink only, ignoring the console sink.

        Used when the caller has already shown the message to the user.
        """
        if not self._file_accepts(level):
            return
        if location is None:
            location = find_caller(stacklevel)
        self._emit(level, message, args, location, False, True)

    def debug(self, message: Any, *args: Any, stacklevel: int = 1) -> None:
        self.log(Severity.DEBUG, message, *args, stacklevel=stacklevel + 1)

    def info(self, message: Any, *args: Any, stacklevel: int = 1) -> None:
        self.log(Severity.INFO, message, *args, stacklevel=stacklevel + 1)

    def warn(self, message: Any, *args: Any, stacklevel: int = 1) -> None:
        self.log(Severity.WARN, message, *args, stacklevel=stacklevel + 1)

    warning = warn

    def error(self, message: Any, *args: Any, stacklevel: int = 1) -> None:
        self.log(Severity.ERROR, message, *args, stacklevel=stacklevel + 1)

    # -------------------------------------------------------------------------
    # LIFECYCLE
    # -------------------------------------------------------------------------

    def close(self) -> None:
        """
        Close the current file, if any. Safe to call multiple times.

        A later file write opens a new timestamped file.

        Raises:
            OSError: If closing the underlying file fails.
        """
        with self._lock:
            if self._sink is not None:
                self._sink.close()

    def __enter__(self) -> Logger:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # -------------------------------------------------------------------------
    # WRITE ROUTER
    # -------------------------------------------------------------------------

    def _emit(
            self,
            level: Severity,
            message: Any,
            args: Tuple[Any, ...],
            location: SourceLocation,
            to_console: bool,
            to_file: bool,
    ) -> None:
        # Diagnostics are logged only after the lock is released: a stdlib
        # bridge on the root logger would otherwise re-enter this instance.
        notes: List[str] = []
        with self._lock:
            try:
                line = format_line(self._clock(), level, location, render_message(message, args))
                if to_console:
                    self._write_console(level, line, notes)
                if to_file:
                    self._write_file(line, notes)
            except Exception as e:
                notes.append(f"Logger: Dropped {level.label} entry: {e}")
            finally:
                if self._sink is not None:
                    notes.extend(self._sink.drain_notes())
        for note in notes:
            logger.debug(note)

    def _console_accepts(self, level: Severity) -> bool:
        cfg = self._config
        return cfg.output_mode.uses_console and level >= cfg.console_level

    def _file_accepts(self, level: Severity) -> bool:
        cfg = self._config
        return cfg.output_mode.uses_file and level >= cfg.file_level

    def _write_console(self, level: Severity, line: str, notes: List[str]) -> None:
        stream = console_stream(level)
        try:
            stream.write(line)
            stream.flush()
        except (OSError, ValueError) as e:
            notes.append(f"Logger: Console write failed: {e}")

    def _write_file(self, line: str, notes: List[str]) -> None:
        sink = self._sink
        if sink is None:
            return

        if not sink.is_open:
            try:
                sink.open_new()
            except (OSError, ValueError) as e:
                notes.append(f"Logger: Could not open log file, line dropped: {e}")
                return

        data = line.encode(ENCODING)
        if sink.should_rotate(len(data)):
            try:
                sink.open_new()
            except (OSError, ValueError) as e:
                notes.append(f"Logger: Rotation failed, line dropped: {e}")
                return
            notes.append(f"Logger: Rotated to '{sink.current_path}'.")

        try:
            sink.write(data)
        except (OSError, ValueError) as e:
            notes.append(f"Logger: File write failed, line dropped: {e}")


def console_stream(level: Severity) -> TextIO:
    """Errors go to stderr, every other severity to stdout."""
    if level == Severity.ERROR:
        return sys.stderr
    return sys.stdout
