"""Exceptions raised by the JSON layout."""


class JsonLayoutError(Exception):
    """Base class for layout errors."""


class MalformedPairError(JsonLayoutError, IndexError):
    """A configured ``key:value`` pair lacks its separator, its key or its value.

    Subclasses IndexError: a malformed pair is a fatal misconfiguration
    surfaced at activation time, never masked.
    """

    def __init__(self, item: str) -> None:
        super().__init__(f"Expected 'key:value' or 'key=value', got {item!r}")
        self.item = item


class LayoutNotActivatedError(JsonLayoutError):
    """A layout was asked to render before activate_options() ran."""


__all__ = ["JsonLayoutError", "LayoutNotActivatedError", "MalformedPairError"]
