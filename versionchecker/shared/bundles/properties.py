"""
Reader and writer for ``.properties`` files.

Follows the java.util.Properties line format:
- ``#`` and ``!`` start comment lines
- keys end at the first unescaped ``=``, ``:`` or whitespace
- a line ending in an odd number of backslashes continues on the next line
- ``\\t \\n \\r \\f`` and ``\\uXXXX`` escapes are decoded
"""

from __future__ import annotations

import re
from typing import Dict, Iterator, Mapping, Optional

_WHITESPACE = " \t\f"
_SEPARATORS = "=:"
_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_NEWLINES = re.compile(r"\r\n|\r|\n")


def _continues(line: str) -> bool:
    count = len(line) - len(line.rstrip("\\"))
    return count % 2 == 1


def _logical_lines(text: str) -> Iterator[str]:
    buffer: Optional[str] = None

    for raw in _NEWLINES.split(text):
        line = raw.lstrip(_WHITESPACE)

        if buffer is None and (not line or line[0] in "#!"):
            continue

        if _continues(line):
            buffer = (buffer or "") + line[:-1]
            continue

        yield (buffer or "") + line
        buffer = None

    if buffer is not None:
        yield buffer


def _unescape(value: str) -> str:
    out = []
    i = 0
    n = len(value)

    while i < n:
        c = value[i]
        if c != "\\":
            out.append(c)
            i += 1
            continue

        if i + 1 >= n:
            break

        nxt = value[i + 1]
        if nxt == "u":
            digits = value[i + 2 : i + 6]
            if len(digits) != 4 or any(d not in "0123456789abcdefABCDEF" for d in digits):
                raise ValueError(f"Malformed \\uxxxx encoding: {value[i:i + 6]!r}")
            out.append(chr(int(digits, 16)))
            i += 6
            continue

        out.append(_ESCAPES.get(nxt, nxt))
        i += 2

    # \u escapes may spell out UTF-16 surrogate pairs
    return "".join(out).encode("utf-16", "surrogatepass").decode("utf-16", "replace")


def _split_entry(line: str) -> tuple[str, str]:
    i = 0
    n = len(line)

    while i < n:
        c = line[i]
        if c == "\\":
            i += 2
            continue
        if c in _SEPARATORS or c in _WHITESPACE:
            break
        i += 1

    key = line[:i]
    rest = line[i:].lstrip(_WHITESPACE)
    if rest and rest[0] in _SEPARATORS:
        rest = rest[1:].lstrip(_WHITESPACE)

    return _unescape(key), _unescape(rest)


def parse_properties(text: str) -> Dict[str, str]:
    """
    Parse properties text into a dict. Later keys override earlier ones.

    Raises ValueError on a malformed ``\\u`` escape.
    """

    entries: Dict[str, str] = {}
    for line in _logical_lines(text):
        key, value = _split_entry(line)
        entries[key] = value
    return entries


def escape(text: str, *, is_key: bool) -> str:
    out = []
    for index, c in enumerate(text):
        if c == "\\":
            out.append("\\\\")
        elif c in "\t\n\r\f":
            out.append("\\" + {"\t": "t", "\n": "n", "\r": "r", "\f": "f"}[c])
        elif c == " " and (is_key or index == 0):
            out.append("\\ ")
        elif c in "=:#!":
            out.append("\\" + c)
        elif ord(c) > 0xFFFF:
            units = c.encode("utf-16-be")
            out.append(f"\\u{units[:2].hex()}\\u{units[2:].hex()}")
        elif ord(c) < 0x20 or ord(c) > 0x7E:
            out.append(f"\\u{ord(c):04x}")
        else:
            out.append(c)
    return "".join(out)


def dump_properties(entries: Mapping[str, str], *, header: Optional[str] = None) -> str:
    """Render ``entries`` as properties text, one ``key=value`` per line."""

    lines = []
    if header:
        for comment in header.splitlines():
            lines.append(f"# {comment}".rstrip())

    for key, value in entries.items():
        lines.append(f"{escape(str(key), is_key=True)}={escape(str(value), is_key=False)}")

    return "\n".join(lines) + "\n"
