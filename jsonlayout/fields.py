"""Field registry: which logical fields are emitted, and under which label.

Logical field keys are dotted names. Two of them are groups with a fixed set
of children (``exception`` and ``location``); every other key is a scalar.
The registry starts from the default labels, applies includes, renames and
excludes (in that order, so excludes always win) and is then frozen into a
``RenderedLabels`` snapshot that the encoder reads while rendering.
"""

from dataclasses import dataclass
from enum import Enum
import re

from jsonlayout.errors import MalformedPairError

# One or more ',' / ';' with optional surrounding whitespace.
SEP_PATTERN = re.compile(r"(?:\s*?[,;]\s*)+")
# One or more ':' / '=' with optional surrounding whitespace.
PAIR_SEP_PATTERN = re.compile(r"(?:\s*?[:=]\s*)+")

SCALAR_KEYS: tuple[str, ...] = (
    "level",
    "logger",
    "message",
    "mdc",
    "ndc",
    "host",
    "path",
    "tags",
    "@timestamp",
    "thread",
    "@version",
)


class FieldGroup(Enum):
    """A logical field rendered as a nested object with a fixed set of children."""

    EXCEPTION = ("exception", ("class", "message", "stacktrace"), False)
    LOCATION = ("location", ("class", "file", "line", "method"), True)

    def __init__(self, key: str, children: tuple[str, ...], grouped_removal: bool) -> None:
        self.key = key
        self.children = children
        # Removing any key of the group drops every child, not just the named one.
        self.grouped_removal = grouped_removal

    def child_key(self, child: str) -> str:
        return f"{self.key}.{child}"

    @property
    def child_keys(self) -> tuple[str, ...]:
        return tuple(self.child_key(child) for child in self.children)


@dataclass(frozen=True)
class ScalarKey:
    """A top-level field key, or any name the registry does not know."""

    name: str


@dataclass(frozen=True)
class CompositeKey:
    """The parent key of a field group (``child is None``) or one of its children."""

    group: FieldGroup
    child: str | None = None

    @property
    def name(self) -> str:
        return self.group.key if self.child is None else self.group.child_key(self.child)


FieldKey = ScalarKey | CompositeKey


def parse_field_key(name: str) -> FieldKey:
    """Classify a dotted field name.

    ``"location"`` and ``"location.line"`` are composite keys; ``"locationX"``
    and ``"location.column"`` are not, and are treated as plain scalars.
    """
    for group in FieldGroup:
        if name == group.key:
            return CompositeKey(group)
        prefix = group.key + "."
        if name.startswith(prefix) and name[len(prefix) :] in group.children:
            return CompositeKey(group, name[len(prefix) :])
    return ScalarKey(name)


def _default_labels() -> dict[str, str]:
    labels: dict[str, str] = {}
    for group in FieldGroup:
        labels[group.key] = group.key
        for child in group.children:
            labels[group.child_key(child)] = child
    for key in SCALAR_KEYS:
        labels[key] = key
    return labels


DEFAULT_LABELS: dict[str, str] = _default_labels()


def split_list(value: str | None) -> list[str]:
    """Split a ``,``/``;`` delimited configuration string, dropping empty items."""
    if value is None:
        return []
    return [item for item in SEP_PATTERN.split(value.strip()) if item]


def split_pair(item: str) -> tuple[str, str]:
    """Split ``key:value`` (or ``key=value``) at the first pair separator.

    Raises:
        MalformedPairError: If ``item`` has no pair separator, or an empty key or value.
    """
    parts = PAIR_SEP_PATTERN.split(item, maxsplit=1)
    if len(parts) < 2 or not parts[0] or not parts[1]:
        raise MalformedPairError(item)
    return parts[0], parts[1]


def split_pairs(value: str | None) -> list[tuple[str, str]]:
    """Split a delimited list of ``key:value`` pairs, preserving order."""
    return [split_pair(item) for item in split_list(value)]


@dataclass(frozen=True)
class RenderedLabels:
    """Snapshot of every label consulted while rendering; ``None`` means omitted."""

    exception: str | None
    exception_class: str | None
    exception_message: str | None
    exception_stacktrace: str | None
    level: str | None
    location: str | None
    location_class: str | None
    location_file: str | None
    location_line: str | None
    location_method: str | None
    logger: str | None
    message: str | None
    mdc: str | None
    ndc: str | None
    host: str | None
    path: str | None
    tags: str | None
    timestamp: str | None
    thread: str | None
    version: str | None


class FieldRegistry:
    """Mapping from logical field key to output label.

    The active set starts as the defaults without the ``location`` group;
    ``add``, ``update`` and ``remove`` edit it, ``snapshot`` freezes it.
    """

    def __init__(self) -> None:
        self._defaults: dict[str, str] = dict(DEFAULT_LABELS)
        self._active: dict[str, str] = {}
        self.reset()

    def reset(self) -> None:
        """Discard every edit and return to the default active set."""
        self._active = dict(self._defaults)
        self.remove(FieldGroup.LOCATION.key)

    @property
    def active(self) -> dict[str, str]:
        return dict(self._active)

    def add(self, name: str) -> None:
        """Activate ``name`` with its default label.

        Any key of a field group also activates every child of that group.
        """
        if name in self._defaults:
            self._active[name] = self._defaults[name]
        key = parse_field_key(name)
        if isinstance(key, CompositeKey):
            for child_key in key.group.child_keys:
                self._active[child_key] = self._defaults[child_key]

    def update(self, name: str, label: str) -> None:
        """Set the label of ``name``, known or not.

        Renaming a group key activates the group's missing children with
        their default labels; existing labels are left alone.
        """
        key = parse_field_key(name)
        if isinstance(key, CompositeKey):
            for child_key in key.group.child_keys:
                self._active.setdefault(child_key, self._defaults[child_key])
        self._active[name] = label

    def remove(self, name: str) -> None:
        """Deactivate ``name``; a location key removes the whole location group."""
        self._active.pop(name, None)
        key = parse_field_key(name)
        if isinstance(key, CompositeKey) and key.group.grouped_removal:
            for child_key in key.group.child_keys:
                self._active.pop(child_key, None)

    def label(self, name: str) -> str | None:
        return self._active.get(name)

    def snapshot(self) -> RenderedLabels:
        """Freeze the active labels the encoder will read."""
        exception = FieldGroup.EXCEPTION
        location = FieldGroup.LOCATION
        return RenderedLabels(
            exception=self.label(exception.key),
            exception_class=self.label(exception.child_key("class")),
            exception_message=self.label(exception.child_key("message")),
            exception_stacktrace=self.label(exception.child_key("stacktrace")),
            level=self.label("level"),
            location=self.label(location.key),
            location_class=self.label(location.child_key("class")),
            location_file=self.label(location.child_key("file")),
            location_line=self.label(location.child_key("line")),
            location_method=self.label(location.child_key("method")),
            logger=self.label("logger"),
            message=self.label("message"),
            mdc=self.label("mdc"),
            ndc=self.label("ndc"),
            host=self.label("host"),
            path=self.label("path"),
            tags=self.label("tags"),
            timestamp=self.label("@timestamp"),
            thread=self.label("thread"),
            version=self.label("@version"),
        )

    def activate(
        self,
        includes: list[str] | tuple[str, ...] = (),
        excludes: list[str] | tuple[str, ...] = (),
        renames: list[tuple[str, str]] | tuple[tuple[str, str], ...] = (),
    ) -> RenderedLabels:
        """Rebuild the active set from the defaults and return its snapshot.

        Includes are applied first, then renames, then excludes.
        """
        self.reset()
        for name in includes:
            self.add(name)
        for name, label in renames:
            self.update(name, label)
        for name in excludes:
            self.remove(name)
        return self.snapshot()


def resolve_labels(
    included_fields: str | None = None,
    excluded_fields: str | None = None,
    renamed_field_labels: str | None = None,
) -> RenderedLabels:
    """Resolve raw configuration strings into a ``RenderedLabels`` snapshot."""
    return FieldRegistry().activate(
        includes=split_list(included_fields),
        excludes=split_list(excluded_fields),
        renames=split_pairs(renamed_field_labels),
    )


__all__ = [
    "DEFAULT_LABELS",
    "PAIR_SEP_PATTERN",
    "SCALAR_KEYS",
    "SEP_PATTERN",
    "CompositeKey",
    "FieldGroup",
    "FieldKey",
    "FieldRegistry",
    "RenderedLabels",
    "ScalarKey",
    "parse_field_key",
    "resolve_labels",
    "split_list",
    "split_pair",
    "split_pairs",
]
