"""
Version record.

A ``VersionInfo`` is built fresh for every lookup and never changes after
that. Manifest lookups fill ``product_id``, ``title`` and ``version``; bundle
lookups fill the numbered fields instead.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class VersionInfo:
    product_id: Optional[str] = None
    title: Optional[str] = None
    version: Optional[str] = None
    version_major: Optional[str] = None
    version_minor: Optional[str] = None
    version_release: Optional[str] = None
    version_milestone: Optional[str] = None
    version_build: Optional[str] = None
    from_manifest: bool = False

    @property
    def composed_version(self) -> Optional[str]:
        """
        Dotted version expression.

        Manifest records return ``version`` as-is. Bundle records join
        major, minor, release, milestone and build, skipping unset parts.
        """
        if self.from_manifest or self.version_major is None:
            return self.version

        parts = (
            self.version_major,
            self.version_minor,
            self.version_release,
            self.version_milestone,
            self.version_build,
        )
        return ".".join(p for p in parts if p is not None)

    def as_string(self) -> str:
        """
        ``"<title> <version>"`` for manifest and placeholder records,
        ``"<title> <composed> (class)"`` for bundle records. Unset parts are
        left out, so a placeholder record renders as the placeholder text.
        """
        if self.from_manifest or self.version_major is None:
            parts = (self.title, self.version)
        else:
            parts = (self.title, self.composed_version, "(class)")
        return " ".join(p for p in parts if p)

    def to_document(self) -> Dict[str, Any]:
        document = asdict(self)
        document["composed_version"] = self.composed_version
        return document
