from __future__ import annotations

"""
Rotating File Sink.

Owns the currently open log file, its accumulated byte count and its
resolved path. Opens timestamp-named files on demand and decides when the
size threshold calls for a fresh file. The sink performs no locking of its
own: every method must be called while the owning Logger holds its lock.
For the same reason it never logs directly; diagnostics are queued and
handed out through drain_notes() once the caller has released its lock.
"""

import os
from datetime import datetime
from enum import Enum
from typing import BinaryIO, Callable, List, Optional

from stamplog.infra.fs import ensure_dir, unique_log_path

FILE_MODE = "ab"


class SinkState(Enum):
    """Lifecycle of the file handle."""
    UNOPENED = "UNOPENED"
    OPEN = "OPEN"


class FileSink:
    """
    Size-tracked, append-only log file with timestamped rotation.

    Invariants:
        - While OPEN, current_size equals the bytes written since the file
          was opened, seeded from its on-disk size.
        - While UNOPENED, current_size is 0 and current_path is None.
        - At most one handle is held; switching files closes the old one.
    """

    def __init__(
            self,
            base_path: str,
            max_size: int = 0,
            clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """
        Args:
            base_path: Path template the timestamped names are derived from.
            max_size: Rotation threshold in bytes (0 or less disables it).
            clock: Source of the current time for file names.
        """
        self._base_path = base_path
        self._max_size = max_size
        self._clock = clock

        self._handle: Optional[BinaryIO] = None
        self._path: Optional[str] = None
        self._size = 0
        self._notes: List[str] = []

    # -------------------------------------------------------------------------
    # STATE
    # -------------------------------------------------------------------------

    @property
    def state(self) -> SinkState:
        return SinkState.OPEN if self._handle is not None else SinkState.UNOPENED

    @property
    def is_open(self) -> bool:
        return self._handle is not None

    @property
    def current_path(self) -> Optional[str]:
        return self._path

    @property
    def current_size(self) -> int:
        return self._size

    @property
    def base_path(self) -> str:
        return self._base_path

    @property
    def max_size(self) -> int:
        return self._max_size

    # -------------------------------------------------------------------------
    # HANDLE MANAGEMENT
    # -------------------------------------------------------------------------

    def open_new(self) -> None:
        """
        Switch to a freshly named file derived from the base path.

        The directory and the unique name are resolved before the current
        handle is touched, so a failure leaves the existing file in place.

        Raises:
            ValueError: If no base path is configured.
            OSError: If the directory, the name probe or the open fails.
        """
        if not self._base_path:
            raise ValueError("Log file path is empty.")

        ensure_dir(self._base_path)
        path = unique_log_path(self._base_path, self._clock())
        self.open_path(path)

    def open_path(self, path: str) -> None:
        """
        Open a specific path in append-create mode and make it current.

        The size counter is seeded from the file's on-disk size, so
        reopening an existing file continues its accounting.

        Args:
            path: File to open.

        Raises:
            OSError: If the file cannot be opened. The current handle is kept.
        """
        handle = open(path, FILE_MODE)

        self._close_quietly(self._handle)

        self._handle = handle
        self._path = path
        try:
            self._size = os.fstat(handle.fileno()).st_size
        except OSError:
            self._size = 0

        self._notes.append(f"FileSink: Opened '{path}' (size={self._size}).")

    def close(self) -> None:
        """
        Release the handle and reset accounting. Safe to call repeatedly.

        Raises:
            OSError: If closing the underlying file fails. The sink is
                UNOPENED afterwards regardless.
        """
        handle = self._handle
        self._handle = None
        self._path = None
        self._size = 0
        if handle is not None:
            handle.close()

    def drain_notes(self) -> List[str]:
        """Return and clear the diagnostics queued since the last call."""
        notes, self._notes = self._notes, []
        return notes

    # -------------------------------------------------------------------------
    # WRITE PATH
    # -------------------------------------------------------------------------

    def should_rotate(self, next_bytes: int) -> bool:
        """
        Decide whether the next write must go to a new file.

        Args:
            next_bytes: Size of the pending line in bytes.

        Returns:
            bool: True if a threshold is set and would be exceeded.
        """
        return self._max_size > 0 and (self._size + next_bytes) > self._max_size

    def write(self, data: bytes) -> int:
        """
        Append bytes to the current file and account for them.

        Args:
            data: Encoded line.

        Returns:
            int: Number of bytes written.

        Raises:
            ValueError: If no file is open.
            OSError: If the write or flush fails. The counter is unchanged.
        """
        if self._handle is None:
            raise ValueError("No log file is open.")

        written = self._handle.write(data)
        self._handle.flush()
        self._size += written
        return written

    # -------------------------------------------------------------------------
    # PRIVATE HELPERS
    # -------------------------------------------------------------------------

    def _close_quietly(self, handle: Optional[BinaryIO]) -> None:
        """Close a replaced handle; failures are not fatal."""
        if handle is None:
            return
        try:
            handle.close()
        except OSError as e:
            self._notes.append(f"FileSink: Ignoring close failure of previous file: {e}")
