"""``logging.Formatter`` that writes each record as one JSON line.

Configure with keyword arguments or the ``set_*`` methods, then call
``activate_options()`` once before the first record is formatted:

    layout = JsonLayout(excluded_fields="thread", tags="api,prod")
    layout.activate_options()
    handler.setFormatter(layout)
"""

from collections.abc import Callable
import logging
from typing import TYPE_CHECKING

from jsonlayout.encoder import CONTENT_TYPE, EventEncoder
from jsonlayout.errors import LayoutNotActivatedError
from jsonlayout.events import LogEvent
from jsonlayout.fields import FieldRegistry, split_list, split_pair, split_pairs
from jsonlayout.sinks import HandlerPathLookup, PathLookup
from jsonlayout.utils.hostname import resolve_host_name

if TYPE_CHECKING:
    from jsonlayout.core.config import LayoutSettings


class JsonLayout(logging.Formatter):
    """Format log records as single-line JSON with configurable fields.

    A layout instance is meant to be attached to a single handler.
    """

    content_type = CONTENT_TYPE

    def __init__(
        self,
        *,
        tags: str | None = None,
        fields: str | None = None,
        included_fields: str | None = None,
        excluded_fields: str | None = None,
        renamed_field_labels: str | None = None,
        host_name: str | None = None,
        host_resolver: Callable[[], str] = resolve_host_name,
        path_lookup: PathLookup | None = None,
    ) -> None:
        super().__init__()
        self.tags = tags
        self.fields = fields
        self.included_fields = included_fields
        self.excluded_fields = excluded_fields
        self.renamed_field_labels = renamed_field_labels
        self.host_name = host_name
        self.host_resolver = host_resolver
        self.path_lookup: PathLookup = path_lookup or HandlerPathLookup(self)
        self.registry = FieldRegistry()
        self._encoder: EventEncoder | None = None

    @classmethod
    def from_settings(cls, settings: "LayoutSettings", **kwargs) -> "JsonLayout":
        """Build and activate a layout from application settings."""
        layout = cls(
            tags=settings.tags,
            fields=settings.static_fields,
            included_fields=settings.included_fields,
            excluded_fields=settings.excluded_fields,
            renamed_field_labels=settings.renamed_field_labels,
            host_name=settings.host_name,
            **kwargs,
        )
        layout.activate_options()
        return layout

    def set_tags(self, tags: str | None) -> None:
        self.tags = tags

    def set_fields(self, fields: str | None) -> None:
        self.fields = fields

    def set_included_fields(self, included_fields: str | None) -> None:
        self.included_fields = included_fields

    def set_excluded_fields(self, excluded_fields: str | None) -> None:
        self.excluded_fields = excluded_fields

    def set_renamed_field_labels(self, renamed_field_labels: str | None) -> None:
        self.renamed_field_labels = renamed_field_labels

    def set_host_name(self, host_name: str | None) -> None:
        self.host_name = host_name

    def activate_options(self) -> None:
        """Parse the configuration and build the encoder.

        Safe to call again after changing options; every call starts over from
        the default labels. A path already resolved by the previous encoder is
        kept as long as the path lookup is unchanged.

        Raises:
            MalformedPairError: If a renamed label or static field lacks a key, a value or a
                ``:``/``=`` separator.
        """
        labels = self.registry.activate(
            includes=split_list(self.included_fields),
            renames=split_pairs(self.renamed_field_labels),
            excludes=split_list(self.excluded_fields),
        )
        tags = split_list(self.tags)
        fields = dict(split_pair(item) for item in split_list(self.fields))
        if self.host_name is None:
            self.host_name = self.host_resolver()
        encoder = EventEncoder(
            labels,
            host_name=self.host_name,
            fields=fields,
            tags=tags,
            path_lookup=self.path_lookup,
        )
        if self._encoder is not None:
            encoder.carry_path_from(self._encoder)
        self._encoder = encoder

    @property
    def encoder(self) -> EventEncoder:
        if self._encoder is None:
            raise LayoutNotActivatedError(
                "JsonLayout.activate_options() must be called before formatting"
            )
        return self._encoder

    @property
    def ignores_throwable(self) -> bool:
        """True when the exception field is excluded, so exc_info is never read."""
        return self.encoder.ignores_throwable

    def render(self, event: LogEvent) -> str:
        """Return the JSON line for an already-built event."""
        return self.encoder.render(event)

    def format(self, record: logging.LogRecord) -> str:
        encoder = self.encoder
        event = LogEvent.from_record(
            record, self, include_throwable=not encoder.ignores_throwable
        )
        return encoder.render(event)


__all__ = ["JsonLayout"]
