"""JSON string escaping with a fixed, strict escape table.

The table is stricter than ``json.dumps``: the solidus and the Unicode
general punctuation block (U+2000-U+20FF) are always escaped, and nothing
outside the table is touched (no ``ensure_ascii`` style escaping).

Example:
    >>> escape('a/b "c"')
    'a\\\\/b \\\\"c\\\\"'
"""

_NAMED_ESCAPES: dict[str, str] = {
    '"': '\\"',
    "\\": "\\\\",
    "/": "\\/",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}

# Code point ranges (inclusive) written as \uXXXX with uppercase hex digits.
_UNICODE_ESCAPE_RANGES: tuple[tuple[int, int], ...] = (
    (0x0000, 0x001F),
    (0x007F, 0x009F),
    (0x2000, 0x20FF),
)


def _build_table() -> dict[int, str]:
    table: dict[int, str] = {}
    for start, end in _UNICODE_ESCAPE_RANGES:
        for code in range(start, end + 1):
            table[code] = f"\\u{code:04X}"
    # Named escapes win over the generic \uXXXX form (\b, \t, \n, \f, \r).
    for char, replacement in _NAMED_ESCAPES.items():
        table[ord(char)] = replacement
    return table


_ESCAPE_TABLE = _build_table()


def escape(value: str) -> str:
    """Return ``value`` with every character in the escape table replaced."""
    return value.translate(_ESCAPE_TABLE)


def write_escaped(out: list[str], value: str) -> None:
    """Append the escaped form of ``value`` to the string buffer ``out``."""
    out.append(value.translate(_ESCAPE_TABLE))


def quote(value: object) -> str:
    """Return ``str(value)`` escaped and wrapped in double quotes."""
    return '"' + str(value).translate(_ESCAPE_TABLE) + '"'


__all__ = ["escape", "quote", "write_escaped"]
