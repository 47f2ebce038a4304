"""Render a ``LogEvent`` as a single-line JSON object.

Fields are written in a fixed order; each one is gated by its label in the
``RenderedLabels`` snapshot and, for some fields, by the event carrying data
for it. Commas are only written between fields that were actually emitted.
"""

from collections.abc import Mapping, Sequence
from datetime import datetime, timedelta, timezone

from jsonlayout.events import LogEvent
from jsonlayout.fields import RenderedLabels
from jsonlayout.sinks import PathLookup, resolve_path_once
from jsonlayout.utils.escaping import quote, write_escaped

VERSION = "1"
CONTENT_TYPE = "application/json"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Representable range in milliseconds: 0001-01-01T00:00:00.000Z to 9999-12-31T23:59:59.999Z.
MIN_TIMESTAMP = (datetime.min.replace(tzinfo=timezone.utc) - _EPOCH) // timedelta(milliseconds=1)
MAX_TIMESTAMP = (datetime.max.replace(tzinfo=timezone.utc) - _EPOCH) // timedelta(milliseconds=1)


def format_timestamp(millis: int) -> str:
    """Format epoch milliseconds as ``yyyy-MM-ddTHH:mm:ss.SSSZ`` in UTC.

    Values outside years 1-9999 are clamped to the nearest representable instant.
    """
    millis = min(max(millis, MIN_TIMESTAMP), MAX_TIMESTAMP)
    moment = _EPOCH + timedelta(milliseconds=millis)
    return f"{moment.year:04d}-{moment:%m-%dT%H:%M:%S}.{moment.microsecond // 1000:03d}Z"


def _field(name: str, value: object) -> str:
    return f"{quote(name)}:{quote(value)}"


class EventEncoder:
    """Encode events using an activated label snapshot.

    A new output buffer is built for every call, so ``render`` keeps no state
    between events apart from the path cache, which is filled at most once.
    """

    def __init__(
        self,
        labels: RenderedLabels,
        *,
        host_name: str,
        fields: Mapping[str, str] | None = None,
        tags: Sequence[str] = (),
        path_lookup: PathLookup | None = None,
    ) -> None:
        self.labels = labels
        self.host_name = host_name
        self.fields: dict[str, str] = dict(fields or {})
        self.tags: tuple[str, ...] = tuple(tags)
        self._path_lookup = path_lookup
        self._path: str | None = None
        self._path_resolved = False

    @property
    def ignores_throwable(self) -> bool:
        """True when the exception field is excluded; callers can skip traceback data."""
        return self.labels.exception is None

    def render(self, event: LogEvent) -> str:
        """Return the JSON line for ``event``, terminated by a newline."""
        labels = self.labels
        parts: list[str] = []

        if labels.exception is not None:
            self._append_exception(parts, event)
        self._append_static_fields(parts)
        if labels.level is not None:
            parts.append(_field(labels.level, event.level))
        if labels.location is not None:
            self._append_location(parts, event)
        if labels.logger is not None:
            parts.append(_field(labels.logger, event.logger_name))
        if labels.message is not None:
            parts.append(_field(labels.message, event.message))
        if labels.mdc is not None:
            self._append_mdc(parts, event)
        if labels.ndc is not None and event.ndc:
            parts.append(_field(labels.ndc, event.ndc))
        if labels.host is not None:
            parts.append(_field(labels.host, self.host_name))
        if labels.path is not None:
            path = self.resolve_path(event)
            if path is not None:
                parts.append(_field(labels.path, path))
        if labels.tags is not None and self.tags:
            tags = ",".join(quote(tag) for tag in self.tags)
            parts.append(f"{quote(labels.tags)}:[{tags}]")
        if labels.timestamp is not None:
            parts.append(_field(labels.timestamp, format_timestamp(event.timestamp)))
        if labels.thread is not None:
            parts.append(_field(labels.thread, event.thread_name))
        if labels.version is not None:
            parts.append(_field(labels.version, VERSION))

        return "{" + ",".join(parts) + "}\n"

    def resolve_path(self, event: LogEvent) -> str | None:
        """Return the output file path, looking it up on the first call only."""
        if not self._path_resolved:
            try:
                if self._path_lookup is not None:
                    self._path = resolve_path_once(self._path_lookup, event)
            finally:
                self._path_resolved = True
        return self._path

    def carry_path_from(self, previous: "EventEncoder") -> None:
        """Reuse a path already resolved by ``previous`` when both share one lookup."""
        if previous._path_resolved and previous._path_lookup is self._path_lookup:
            self._path = previous._path
            self._path_resolved = True

    def _append_static_fields(self, parts: list[str]) -> None:
        for name, value in self.fields.items():
            parts.append(_field(name, value))

    def _append_exception(self, parts: list[str], event: LogEvent) -> None:
        throwable = event.throwable
        if throwable is None:
            return
        labels = self.labels
        members: list[str] = []
        if labels.exception_message is not None and throwable.message is not None:
            members.append(_field(labels.exception_message, throwable.message))
        if labels.exception_class is not None and throwable.class_name is not None:
            members.append(_field(labels.exception_class, throwable.class_name))
        if labels.exception_stacktrace is not None and throwable.stack_frames:
            out = [quote(labels.exception_stacktrace), ':"']
            write_escaped(out, "\n".join(throwable.stack_frames))
            out.append('"')
            members.append("".join(out))
        parts.append(f"{quote(labels.exception)}:{{{','.join(members)}}}")

    def _append_location(self, parts: list[str], event: LogEvent) -> None:
        location = event.location
        if location is None:
            return
        labels = self.labels
        members: list[str] = []
        for label, value in (
            (labels.location_class, location.class_name),
            (labels.location_file, location.file_name),
            (labels.location_method, location.method_name),
            (labels.location_line, location.line_number),
        ):
            if label is not None and value is not None:
                members.append(_field(label, value))
        parts.append(f"{quote(labels.location)}:{{{','.join(members)}}}")

    def _append_mdc(self, parts: list[str], event: LogEvent) -> None:
        if not event.mdc:
            return
        members = ",".join(_field(key, value) for key, value in event.mdc.items())
        parts.append(f"{quote(self.labels.mdc)}:{{{members}}}")


__all__ = ["CONTENT_TYPE", "VERSION", "EventEncoder", "format_timestamp"]
