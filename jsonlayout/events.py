"""Log event model consumed by the encoder, and its adapter from ``logging.LogRecord``."""

from collections.abc import Mapping
from dataclasses import dataclass, field
import logging
from typing import Any

# Standard LogRecord attribute names; everything else on a record is user-supplied context.
_RECORD_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "asctime",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "exc_info",
        "exc_text",
        "message",
        "thread",
        "threadName",
        "taskName",
        "getMessage",
    }
)

# Record attributes that have their own field, or are display-only (ANSI color codes).
_EXCLUDE_EXTRAS = frozenset({"ndc", "color_message"})


@dataclass(frozen=True)
class ThrowableInfo:
    """Exception attached to an event."""

    message: str | None
    class_name: str | None
    stack_frames: tuple[str, ...] = ()


@dataclass(frozen=True)
class LocationInfo:
    """Call site of an event; every value is already a string."""

    class_name: str | None = None
    file_name: str | None = None
    method_name: str | None = None
    line_number: str | None = None


@dataclass(frozen=True)
class LogEvent:
    """A single log event.

    Attributes:
        level: Severity name, e.g. "INFO".
        logger_name: Dotted name of the originating logger.
        message: Rendered message text.
        thread_name: Name of the emitting thread.
        timestamp: Milliseconds since the epoch.
        ndc: Nested diagnostic context string, if any.
        mdc: Contextual key/value data, rendered in iteration order.
        throwable: Attached exception, if any.
        location: Call site, if known.
        logger: The originating logger, used to find the handler writing this event.
    """

    level: str
    logger_name: str
    message: str
    thread_name: str
    timestamp: int
    ndc: str | None = None
    mdc: Mapping[Any, Any] = field(default_factory=dict)
    throwable: ThrowableInfo | None = None
    location: LocationInfo | None = None
    logger: logging.Logger | None = None

    @classmethod
    def from_record(
        cls,
        record: logging.LogRecord,
        formatter: logging.Formatter | None = None,
        *,
        include_throwable: bool = True,
    ) -> "LogEvent":
        """Build an event from a stdlib log record.

        Args:
            record: The record to adapt.
            formatter: Formats the traceback into stack frame lines; a plain
                ``logging.Formatter`` is used when omitted.
            include_throwable: When False, ``exc_info`` is not read at all.
        """
        ndc = getattr(record, "ndc", None)
        return cls(
            level=record.levelname,
            logger_name=record.name,
            message=record.getMessage(),
            thread_name=record.threadName or "",
            timestamp=int(record.created * 1000),
            ndc=None if ndc is None else str(ndc),
            mdc=_extra_fields(record),
            throwable=_throwable_info(record, formatter) if include_throwable else None,
            location=_location_info(record),
            logger=logging.getLogger(record.name),
        )


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Extract user-supplied extra fields from a log record."""
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _RECORD_ATTRS and key not in _EXCLUDE_EXTRAS
    }


def _location_info(record: logging.LogRecord) -> LocationInfo | None:
    if not record.pathname and not record.funcName:
        return None
    return LocationInfo(
        class_name=record.module or None,
        file_name=record.filename or None,
        method_name=record.funcName,
        line_number=str(record.lineno),
    )


def _qualified_name(exc_type: type) -> str:
    module = exc_type.__module__
    if module in (None, "builtins"):
        return exc_type.__qualname__
    return f"{module}.{exc_type.__qualname__}"


def _throwable_info(
    record: logging.LogRecord, formatter: logging.Formatter | None
) -> ThrowableInfo | None:
    if not record.exc_info:
        return None
    exc_type, exc_value, _ = record.exc_info
    if exc_type is None:
        return None
    formatter = formatter or logging.Formatter()
    message = str(exc_value) if exc_value is not None and exc_value.args else None
    return ThrowableInfo(
        message=message,
        class_name=_qualified_name(exc_type),
        stack_frames=tuple(formatter.formatException(record.exc_info).splitlines()),
    )


__all__ = ["LocationInfo", "LogEvent", "ThrowableInfo"]
