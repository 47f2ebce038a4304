"""Host name resolution for the ``host`` field."""

import socket

import structlog

logger = structlog.get_logger(__name__)

FALLBACK_HOST_NAME = "localhost"


def resolve_host_name() -> str:
    """Return the local host name, or ``"localhost"`` if it cannot be determined."""
    try:
        host_name = socket.gethostname()
    except OSError as e:
        logger.error("Unable to determine name of the localhost", error=str(e))
        return FALLBACK_HOST_NAME
    if not host_name:
        logger.error("Unable to determine name of the localhost", error="empty host name")
        return FALLBACK_HOST_NAME
    return host_name


__all__ = ["FALLBACK_HOST_NAME", "resolve_host_name"]
