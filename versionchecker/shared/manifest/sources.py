"""
Manifest sources.

A manifest source answers one question: does the artifact that holds this
module carry version attributes? ``None`` means no. Read failures are
logged and also answered with ``None``.
"""

from __future__ import annotations

import zipfile
from abc import ABC, abstractmethod
from importlib import metadata as importlib_metadata
from pathlib import Path
from types import ModuleType
from typing import Mapping, Optional

from versionchecker.shared.logging.logger import get_logger
from versionchecker.shared.manifest.parser import (
    MANIFEST_PATH,
    PRODUCT_ID,
    TITLE,
    VERSION,
    ManifestAttributes,
    parse_manifest,
)

log = get_logger("shared.manifest.sources")


class ManifestSource(ABC):
    """Base class for manifest lookups."""

    @abstractmethod
    def get_manifest(self, module: ModuleType) -> Optional[ManifestAttributes]:
        """
        Return the main attributes for the artifact containing ``module``,
        or None if there is no such artifact.
        """
        raise NotImplementedError


class StaticManifestSource(ManifestSource):
    """Returns the same attributes for every module; None means no manifest."""

    def __init__(self, attributes: Optional[Mapping[str, str]] = None):
        self._attributes = None if attributes is None else ManifestAttributes(attributes)

    def get_manifest(self, module: ModuleType) -> Optional[ManifestAttributes]:
        return self._attributes


def find_archive(module: ModuleType) -> Optional[Path]:
    """Locate the zip archive a module was imported from, if any."""

    archive = getattr(getattr(module, "__loader__", None), "archive", None)
    if isinstance(archive, str):
        return Path(archive)

    module_file = getattr(module, "__file__", None)
    if not module_file:
        return None

    for parent in Path(module_file).parents:
        if parent.is_file():
            return parent if zipfile.is_zipfile(parent) else None
    return None


class ArchiveManifestSource(ManifestSource):
    """Reads ``META-INF/MANIFEST.MF`` from the archive the module lives in."""

    def get_manifest(self, module: ModuleType) -> Optional[ManifestAttributes]:
        archive = find_archive(module)
        if archive is None:
            return None

        try:
            with zipfile.ZipFile(archive) as zf:
                raw = zf.read(MANIFEST_PATH)
        except KeyError:
            log.debug(f"{archive} has no {MANIFEST_PATH}")
            return None
        except (OSError, zipfile.BadZipFile, RuntimeError, NotImplementedError) as e:
            log.warning(f"Failed to read manifest from {archive}: {e}")
            return None

        try:
            return parse_manifest(raw.decode("utf-8", errors="replace"))
        except ValueError as e:
            log.warning(f"Ignoring malformed manifest in {archive}: {e}")
            return None


class DistributionManifestSource(ManifestSource):
    """
    Builds manifest attributes from installed distribution metadata.

    The module's top-level package is mapped to the distribution that
    installed it:
      - Implementation-ProductID <- Name
      - Implementation-Title     <- Summary (Name when there is no summary)
      - Implementation-Version   <- Version
    """

    def get_manifest(self, module: ModuleType) -> Optional[ManifestAttributes]:
        top_level = module.__name__.partition(".")[0]

        try:
            names = importlib_metadata.packages_distributions().get(top_level)
        except Exception as e:
            log.warning(f"Failed to scan installed distributions: {e}")
            return None

        if not names:
            log.debug(f"No installed distribution provides '{top_level}'")
            return None

        try:
            meta = importlib_metadata.metadata(names[0])
        except importlib_metadata.PackageNotFoundError:
            log.debug(f"Distribution '{names[0]}' disappeared while reading metadata")
            return None

        name = meta.get("Name")
        attributes = {
            PRODUCT_ID: name,
            TITLE: meta.get("Summary") or name,
            VERSION: meta.get("Version"),
        }
        return ManifestAttributes({k: v for k, v in attributes.items() if v is not None})


class ChainManifestSource(ManifestSource):
    """Asks each source in turn and returns the first manifest found."""

    def __init__(self, *sources: ManifestSource):
        self.sources = list(sources)

    def get_manifest(self, module: ModuleType) -> Optional[ManifestAttributes]:
        for source in self.sources:
            manifest = source.get_manifest(module)
            if manifest is not None:
                return manifest
        return None


def default_manifest_source() -> ManifestSource:
    return ChainManifestSource(ArchiveManifestSource(), DistributionManifestSource())
