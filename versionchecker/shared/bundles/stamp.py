"""
Version bundle stamping.

Rewrites selected keys of a ``version.properties`` file in place. Comments,
ordering and untouched keys are preserved; keys that are not present yet are
appended at the end.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, Mapping

from versionchecker.shared.bundles.properties import escape, parse_properties
from versionchecker.shared.logging.logger import get_logger

log = get_logger("shared.bundles.stamp")


def _entry_pattern(key: str) -> re.Pattern:
    return re.compile(
        r"^([ \t\f]*" + re.escape(escape(key, is_key=True)) + r")([ \t\f]*[=:][ \t\f]*|[ \t\f]+)(.*)$",
        flags=re.MULTILINE,
    )


def stamp_bundle_text(text: str, updates: Mapping[str, str]) -> str:
    """Return ``text`` with every key in ``updates`` set to its new value."""

    updated = text
    missing: Dict[str, str] = {}

    for key, value in updates.items():
        pattern = _entry_pattern(key)
        for match in pattern.finditer(updated):
            old_value = match.group(3)
            if (len(old_value) - len(old_value.rstrip("\\"))) % 2 == 1:
                raise ValueError(f"Could not stamp '{key}' (multi-line values are not supported)")

        replacement = escape(str(value), is_key=False)
        updated, count = pattern.subn(
            lambda m, replacement=replacement: f"{m.group(1)}{m.group(2)}{replacement}",
            updated,
        )
        if count == 0:
            missing[key] = value

    if missing:
        if updated and not updated.endswith("\n"):
            updated += "\n"
        for key, value in missing.items():
            updated += f"{escape(key, is_key=True)}={escape(str(value), is_key=False)}\n"

    # the rewritten text must parse back to the requested values
    parsed = parse_properties(updated)
    for key, value in updates.items():
        if parsed.get(key) != str(value):
            raise ValueError(f"Could not stamp '{key}' (multi-line values are not supported)")

    return updated


def stamp_bundle_file(path: Path, updates: Mapping[str, str]) -> bool:
    """
    Apply ``updates`` to the bundle at ``path``, creating it if needed.

    Returns True when the file changed.
    """

    original = path.read_text(encoding="utf-8") if path.exists() else ""
    updated = stamp_bundle_text(original, updates)

    if updated == original:
        return False

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(updated, encoding="utf-8")
    log.info(f"Stamped {sorted(updates)} into {path}")
    return True
