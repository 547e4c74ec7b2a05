from __future__ import annotations

"""
Standard Logging Bridge.

Provides a logging.Handler that forwards records emitted through the
standard library into a stamplog Logger, plus tagging helpers so the
application can tell these handlers apart from third-party ones.
"""

import logging
from typing import List

from stamplog.core.formatting import SourceLocation
from stamplog.core.logger import Logger
from stamplog.domain.levels import Severity

# Internal attribute used to tag and identify our own handlers
_HANDLER_TAG_ATTR: str = "_stamplog_handler"

# Records from these loggers are never forwarded (avoids feedback loops)
_OWN_LOGGER_PREFIX: str = "stamplog"


# ==============================================================================
# BRIDGE HANDLER
# ==============================================================================

class SinkHandler(logging.Handler):
    """
    Handler that writes stdlib log records through a stamplog Logger.

    Level filtering is left to the target Logger's per-sink thresholds.
    Records from stamplog's own loggers are rejected by a filter, which
    Handler.handle applies before taking the handler lock.
    """

    def __init__(self, sink: Logger, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.sink = sink
        self.addFilter(OwnRecordFilter())
        _tag_handler(self)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            location = SourceLocation(record.filename, record.lineno)
            self.sink.log(severity_for_record(record), record.getMessage(), location=location)
        except Exception:
            self.handleError(record)


class OwnRecordFilter(logging.Filter):
    """Drop records emitted by stamplog itself (avoids feedback loops)."""

    def filter(self, record: logging.LogRecord) -> bool:
        return not _is_own_record(record)


def severity_for_record(record: logging.LogRecord) -> Severity:
    """
    Map a stdlib level number onto the stamplog severity scale.

    Args:
        record: Record to classify.

    Returns:
        Severity: DEBUG below INFO, WARN for WARNING, ERROR from ERROR upward.
    """
    levelno = record.levelno
    if levelno >= logging.ERROR:
        return Severity.ERROR
    if levelno >= logging.WARNING:
        return Severity.WARN
    if levelno >= logging.INFO:
        return Severity.INFO
    return Severity.DEBUG


# ==============================================================================
# ATTACHMENT API
# ==============================================================================

def attach_sink_handler(sink: Logger, logger_name: str = "") -> SinkHandler:
    """
    Route a stdlib logger (root by default) into a stamplog Logger.

    Idempotent: an existing bridge to the same sink is reused.

    Args:
        sink: Target stamplog Logger.
        logger_name: Name of the stdlib logger to bridge.

    Returns:
        SinkHandler: The attached handler.
    """
    target = logging.getLogger(logger_name)
    for h in target.handlers:
        if isinstance(h, SinkHandler) and h.sink is sink:
            return h

    handler = SinkHandler(sink)
    target.addHandler(handler)
    return handler


def detach_sink_handlers(logger_name: str = "") -> List[logging.Handler]:
    """
    Remove every stamplog bridge from a stdlib logger.

    Handlers installed by other code are left alone.

    Args:
        logger_name: Name of the stdlib logger.

    Returns:
        List[logging.Handler]: The handlers that were removed.
    """
    target = logging.getLogger(logger_name)
    removed = [h for h in list(target.handlers) if _is_our_handler(h)]
    for h in removed:
        target.removeHandler(h)
        h.close()
    return removed


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _tag_handler(handler: logging.Handler) -> None:
    """Mark a handler as created by this module."""
    setattr(handler, _HANDLER_TAG_ATTR, True)


def _is_our_handler(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


def _is_own_record(record: logging.LogRecord) -> bool:
    name = record.name or ""
    return name == _OWN_LOGGER_PREFIX or name.startswith(_OWN_LOGGER_PREFIX + ".")
