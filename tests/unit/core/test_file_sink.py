from __future__ import annotations

"""
Unit tests for the rotating File Sink.

Verifies:
1. UNOPENED/OPEN lifecycle and idempotent close.
2. Size accounting, including seeding from an existing file.
3. Rotation decision boundaries.
4. Failure handling: failed opens keep the current handle, close errors
   of replaced handles are swallowed, write errors leave the counter alone.
"""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from stamplog.core.file_sink import FileSink, SinkState


@pytest.fixture
def sink(tmp_path: Path, clock) -> FileSink:
    """Provide an unopened sink rooted in a temporary directory."""
    return FileSink(str(tmp_path / "logs" / "app.log"), max_size=100, clock=clock)

# -----------------------------------------------------------------------------
# LIFECYCLE
# -----------------------------------------------------------------------------

def test_new_sink_is_unopened(sink: FileSink) -> None:
    assert sink.state is SinkState.UNOPENED
    assert sink.is_open is False
    assert sink.current_size == 0
    assert sink.current_path is None


def test_open_new_creates_timestamped_file(sink: FileSink, tmp_path: Path) -> None:
    """TC-01: Directory is created and the file carries the timestamp suffix."""
    sink.open_new()

    assert sink.state is SinkState.OPEN
    assert sink.current_path == str(tmp_path / "logs" / "app_31.01.2026_23-10-15.log")
    assert Path(sink.current_path).exists()
    assert sink.current_size == 0
    assert not (tmp_path / "logs" / "app.log").exists()
    sink.close()


def test_open_new_requires_base_path(clock) -> None:
    with pytest.raises(ValueError):
        FileSink("", clock=clock).open_new()


def test_close_is_idempotent(sink: FileSink) -> None:
    sink.open_new()
    sink.close()
    sink.close()

    assert sink.state is SinkState.UNOPENED
    assert sink.current_size == 0
    assert sink.current_path is None


def test_close_on_never_opened_sink(sink: FileSink) -> None:
    sink.close()
    assert sink.state is SinkState.UNOPENED


def test_close_error_propagates_after_reset(sink: FileSink) -> None:
    """TC-02: A failing close is reported but the sink is still reset."""
    sink.open_new()
    real_handle = sink._handle
    broken = MagicMock()
    broken.close.side_effect = OSError("disk gone")
    sink._handle = broken

    with pytest.raises(OSError):
        sink.close()

    assert sink.state is SinkState.UNOPENED
    assert sink.current_size == 0
    real_handle.close()

# -----------------------------------------------------------------------------
# ACCOUNTING
# -----------------------------------------------------------------------------

def test_write_accumulates_size(sink: FileSink) -> None:
    sink.open_new()
    sink.write(b"hello\n")
    sink.write("ñ\n".encode("utf-8"))

    assert sink.current_size == 6 + 3
    assert Path(sink.current_path).read_bytes() == "hello\nñ\n".encode("utf-8")
    sink.close()


def test_open_path_seeds_size_from_existing_file(sink: FileSink, tmp_path: Path) -> None:
    """TC-03: Reopening in append mode continues from the on-disk size."""
    existing = tmp_path / "existing.log"
    existing.write_bytes(b"x" * 42)

    sink.open_path(str(existing))
    assert sink.current_size == 42

    sink.write(b"more\n")
    assert sink.current_size == 47
    assert existing.read_bytes() == b"x" * 42 + b"more\n"
    sink.close()


def test_write_without_open_file_raises(sink: FileSink) -> None:
    with pytest.raises(ValueError):
        sink.write(b"line\n")


def test_failed_write_keeps_counter(sink: FileSink) -> None:
    sink.open_new()
    sink.write(b"12345")
    real_handle = sink._handle
    broken = MagicMock()
    broken.write.side_effect = OSError("no space")
    sink._handle = broken

    with pytest.raises(OSError):
        sink.write(b"abc")

    assert sink.current_size == 5
    sink._handle = real_handle
    sink.close()

# -----------------------------------------------------------------------------
# ROTATION DECISION
# -----------------------------------------------------------------------------

def test_should_rotate_boundaries(sink: FileSink) -> None:
    """Rotation only when size + next strictly exceeds the threshold."""
    sink.open_new()
    sink.write(b"x" * 90)

    assert sink.should_rotate(10) is False
    assert sink.should_rotate(11) is True
    sink.close()


@pytest.mark.parametrize("max_size", [0, -1])
def test_should_rotate_disabled(tmp_path: Path, clock, max_size: int) -> None:
    sink = FileSink(str(tmp_path / "app.log"), max_size=max_size, clock=clock)
    sink.open_new()
    sink.write(b"x" * 10_000)

    assert sink.should_rotate(10_000) is False
    sink.close()

# -----------------------------------------------------------------------------
# HANDLE SWITCHING
# -----------------------------------------------------------------------------

def test_open_new_closes_previous_handle(sink: FileSink) -> None:
    sink.open_new()
    first_path = sink.current_path
    first_handle = sink._handle

    sink.open_new()

    assert first_handle.closed
    assert sink.current_path != first_path
    assert sink.current_path.endswith("_01.log")
    sink.close()


def test_failed_open_keeps_current_handle(sink: FileSink) -> None:
    """TC-04: A failed rotation does not lose the file being written."""
    sink.open_new()
    sink.write(b"abc")
    path = sink.current_path

    with patch("stamplog.core.file_sink.open", side_effect=OSError("denied"), create=True):
        with pytest.raises(OSError):
            sink.open_new()

    assert sink.state is SinkState.OPEN
    assert sink.current_path == path
    assert sink.current_size == 3
    sink.close()


def test_close_failure_of_replaced_handle_is_swallowed(sink: FileSink) -> None:
    sink.open_new()
    real_handle = sink._handle
    broken = MagicMock()
    broken.close.side_effect = OSError("stale handle")
    sink._handle = broken

    sink.open_new()

    assert sink.is_open
    broken.close.assert_called_once()
    real_handle.close()
    sink.close()
    assert any("Ignoring close failure" in n for n in sink.drain_notes())


def test_drain_notes_hands_out_diagnostics_once(sink: FileSink) -> None:
    """TC-05: Queued diagnostics are returned once and then cleared."""
    sink.open_new()

    notes = sink.drain_notes()

    assert len(notes) == 1
    assert notes[0].startswith("FileSink: Opened")
    assert sink.drain_notes() == []
    sink.close()
