"""
Parser for JAR-style ``META-INF/MANIFEST.MF`` files.

Only the main section is read. Header names are case-insensitive.
"""

from __future__ import annotations

from typing import Dict, Iterator, Mapping, Optional, Tuple

MANIFEST_PATH = "META-INF/MANIFEST.MF"

PRODUCT_ID = "Implementation-ProductID"
TITLE = "Implementation-Title"
VERSION = "Implementation-Version"


class ManifestAttributes(Mapping[str, str]):
    """Main manifest attributes with case-insensitive lookup."""

    def __init__(self, entries: Optional[Mapping[str, str]] = None):
        self._entries: Dict[str, Tuple[str, str]] = {}
        for key, value in (entries or {}).items():
            self._entries[key.lower()] = (key, value)

    def __getitem__(self, key: str) -> str:
        return self._entries[key.lower()][1]

    def __iter__(self) -> Iterator[str]:
        return (key for key, _ in self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"ManifestAttributes({dict(self.items())!r})"


def parse_manifest(text: str) -> ManifestAttributes:
    """
    Parse the main section of a manifest.

    Continuation lines start with a single space. The main section ends at
    the first blank line. Raises ValueError for a header line without ``:``
    or a continuation line with nothing to continue.
    """

    entries: Dict[str, str] = {}
    last_key: Optional[str] = None

    for line in text.lstrip("\ufeff").splitlines():
        if not line:
            break

        if line.startswith(" "):
            if last_key is None:
                raise ValueError("Manifest continuation line without a header")
            entries[last_key] += line[1:]
            continue

        key, sep, value = line.partition(":")
        if not sep or not key:
            raise ValueError(f"Invalid manifest header: {line!r}")

        last_key = key.strip()
        entries[last_key] = value[1:] if value.startswith(" ") else value

    return ManifestAttributes(entries)
