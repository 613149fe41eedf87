"""Artifact manifest readers."""

from .parser import ManifestAttributes, parse_manifest
from .sources import (
    ArchiveManifestSource,
    ChainManifestSource,
    DistributionManifestSource,
    ManifestSource,
    StaticManifestSource,
    default_manifest_source,
    find_archive,
)

__all__ = [
    "ArchiveManifestSource",
    "ChainManifestSource",
    "DistributionManifestSource",
    "ManifestAttributes",
    "ManifestSource",
    "StaticManifestSource",
    "default_manifest_source",
    "find_archive",
    "parse_manifest",
]
