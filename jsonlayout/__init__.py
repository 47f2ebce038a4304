"""Single-line JSON layout for the standard logging package."""

from jsonlayout.encoder import CONTENT_TYPE, EventEncoder
from jsonlayout.errors import JsonLayoutError, LayoutNotActivatedError, MalformedPairError
from jsonlayout.events import LocationInfo, LogEvent, ThrowableInfo
from jsonlayout.fields import FieldRegistry, RenderedLabels, resolve_labels
from jsonlayout.layout import JsonLayout
from jsonlayout.sinks import HandlerPathLookup, StaticPathLookup

__all__ = [
    "CONTENT_TYPE",
    "EventEncoder",
    "FieldRegistry",
    "HandlerPathLookup",
    "JsonLayout",
    "JsonLayoutError",
    "LayoutNotActivatedError",
    "LocationInfo",
    "LogEvent",
    "MalformedPairError",
    "RenderedLabels",
    "StaticPathLookup",
    "ThrowableInfo",
    "resolve_labels",
]
