"""Utilities: string escaping and host name resolution."""

from jsonlayout.utils.escaping import escape, quote, write_escaped
from jsonlayout.utils.hostname import FALLBACK_HOST_NAME, resolve_host_name

__all__ = [
    "FALLBACK_HOST_NAME",
    "escape",
    "quote",
    "resolve_host_name",
    "write_escaped",
]
