"""Resolve the file a layout's output is written to (the ``path`` field).

The encoder does not walk the logging configuration itself: it is handed a
``PathLookup`` callable and queries it at most once.
"""

from collections.abc import Callable, Iterable, Iterator
import logging
from pathlib import Path

import structlog

from jsonlayout.events import LogEvent

logger = structlog.get_logger(__name__)

PathLookup = Callable[[LogEvent], str | None]


class StaticPathLookup:
    """Path lookup returning a value resolved up front by the application."""

    def __init__(self, path: str | None) -> None:
        self.path = path

    def __call__(self, event: LogEvent) -> str | None:  # noqa: ARG002
        return self.path


def _child_handlers(handler: logging.Handler) -> list[logging.Handler]:
    """Handlers a handler forwards to, e.g. ``MemoryHandler.target``."""
    children = list(getattr(handler, "handlers", None) or [])
    target = getattr(handler, "target", None)
    if isinstance(target, logging.Handler):
        children.append(target)
    return children


def _logger_chain(start: logging.Logger | None) -> Iterator[logging.Logger]:
    current = start
    while current is not None:
        yield current
        current = current.parent


class HandlerPathLookup:
    """Find the file handler whose formatter is ``formatter``.

    The event's logger and then its ancestors are searched in order; within a
    logger, handlers are searched depth-first through aggregating handlers.
    """

    def __init__(self, formatter: logging.Formatter) -> None:
        self.formatter = formatter

    def find_handler(self, start: logging.Logger | None) -> logging.Handler | None:
        for current in _logger_chain(start):
            handler = self._find_in(current.handlers)
            if handler is not None:
                return handler
        return None

    def _find_in(self, handlers: Iterable[logging.Handler]) -> logging.Handler | None:
        for handler in handlers:
            # First handler using this formatter wins; a formatter is meant for one handler.
            if handler.formatter is self.formatter:
                return handler
            found = self._find_in(_child_handlers(handler))
            if found is not None:
                return found
        return None

    def __call__(self, event: LogEvent) -> str | None:
        """Return the canonical path of the matching file handler, if any.

        Raises:
            OSError: If the file path cannot be canonicalized. Python before 3.13
                raises RuntimeError instead for a symlink loop.
        """
        start = event.logger if event.logger is not None else logging.getLogger(event.logger_name)
        handler = self.find_handler(start)
        if not isinstance(handler, logging.FileHandler):
            return None
        file_name = handler.baseFilename
        if not file_name:
            return None
        return str(Path(file_name).resolve())


def resolve_path_once(lookup: PathLookup, event: LogEvent) -> str | None:
    """Run ``lookup``; any failure is logged and treated as "no path"."""
    try:
        return lookup(event)
    except Exception as e:
        logger.error(
            "Unable to retrieve handler's file name", error=str(e), error_type=type(e).__name__
        )
        return None


__all__ = ["HandlerPathLookup", "PathLookup", "StaticPathLookup", "resolve_path_once"]
