"""Root logger setup writing one JSON object per line through ``JsonLayout``.

Configure once at application startup. Structured context goes in the extra dict
and is rendered under the ``mdc`` field:
    logger.info("message", extra={"key": value})
"""

import logging
import sys
from typing import Any

from jsonlayout.core.config import LayoutSettings, get_settings
from jsonlayout.layout import JsonLayout

# Third-party loggers: always WARNING so they don't flood output regardless of app level.
THIRD_PARTY_LOGGER_LEVELS: dict[str, str] = {
    "asyncio": "WARNING",
    "urllib3": "WARNING",
}


def _to_level(level: str | int) -> int:
    return level if isinstance(level, int) else getattr(logging, level.upper())


def configure_logging(
    level: str | int | None = None,
    *,
    stream: Any = None,
    settings: LayoutSettings | None = None,
    logger_levels: dict[str, str | int] | None = None,
) -> JsonLayout:
    """Configure root logger with JSON output. Call once at application startup.

    Args:
        level: Root logger level (e.g. "INFO", logging.INFO); defaults to
            ``settings.log_level``.
        stream: Output stream; defaults to sys.stdout.
        settings: Layout settings; defaults to the cached environment settings.
        logger_levels: Optional mapping of logger names to levels.

    Returns:
        The activated layout installed on the root handler.
    """
    if settings is None:
        settings = get_settings()
    if level is None:
        level = settings.log_level
    if stream is None:
        stream = sys.stdout
    root = logging.getLogger()
    root.setLevel(_to_level(level))
    root.handlers.clear()

    layout = JsonLayout.from_settings(settings)
    handler = logging.StreamHandler(stream)
    # Rendered lines already end with a newline.
    handler.terminator = ""
    handler.setFormatter(layout)
    handler.setLevel(root.level)
    root.addHandler(handler)

    levels = {**THIRD_PARTY_LOGGER_LEVELS, **(logger_levels or {})}
    for name, lvl in levels.items():
        logging.getLogger(name).setLevel(_to_level(lvl))
    return layout


__all__ = ["THIRD_PARTY_LOGGER_LEVELS", "configure_logging"]
