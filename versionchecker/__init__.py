"""
versionchecker

Reads build/version metadata for a module from the manifest of the artifact
that contains it, falling back to a ``version.properties`` resource bundle.
"""

from versionchecker.core.helper import (
    VersionHelper,
    get_version_info,
    get_version_information,
)
from versionchecker.core.models import VersionInfo
from versionchecker.shared.errors import NO_VERSION_INFORMATION, MetadataUnavailable

__all__ = [
    "MetadataUnavailable",
    "NO_VERSION_INFORMATION",
    "VersionHelper",
    "VersionInfo",
    "get_version_info",
    "get_version_information",
]
