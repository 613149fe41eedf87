"""
Version lookup for a module or class.

Lookup order:
  1. The manifest of the artifact that contains the code unit (a zip
     archive with META-INF/MANIFEST.MF, or the installed distribution).
  2. The ``version`` resource bundle (``version.properties``).
  3. A fixed "No Version Information Available" placeholder.

Failures never reach the caller. Every lookup reads its sources again and
returns a new record.
"""

from __future__ import annotations

import importlib
import sys
from types import ModuleType
from typing import Any, Optional

from versionchecker.core.models import VersionInfo
from versionchecker.shared.bundles.loader import Bundle, BundleSource, PropertiesBundleSource
from versionchecker.shared.config.settings import Settings, load_settings
from versionchecker.shared.errors import NO_VERSION_INFORMATION, MetadataUnavailable
from versionchecker.shared.logging.logger import configure_logging, get_logger
from versionchecker.shared.manifest.parser import PRODUCT_ID, TITLE, VERSION, ManifestAttributes
from versionchecker.shared.manifest.sources import ManifestSource, default_manifest_source

log = get_logger("core.helper")

# Bundle keys
KEY_PRODUCT_ID = "impl.productID"
KEY_TITLE = "impl.title"
KEY_MAJOR = "release.major.number"
KEY_MINOR = "release.minor.number"
KEY_MILESTONE = "release.milestone.number"
KEY_BUILD = "release.build.number"


def resolve_module(target: Any = None) -> Optional[ModuleType]:
    """
    Turn a lookup target into a module.

    Accepts a module, a dotted module name, or any object with a
    ``__module__`` attribute (classes, functions). ``None`` means this
    package. Returns None when the target can't be resolved.
    """

    if target is None:
        return sys.modules[__name__.partition(".")[0]]

    if isinstance(target, ModuleType):
        return target

    if isinstance(target, str):
        module = sys.modules.get(target)
        if module is not None:
            return module
        try:
            return importlib.import_module(target)
        except ImportError as e:
            log.debug(f"Cannot import '{target}' for version lookup: {e}")
            return None
        except Exception as e:
            log.warning(f"Importing '{target}' for version lookup failed: {e!r}")
            return None

    module_name = getattr(target, "__module__", None)
    if isinstance(module_name, str):
        return sys.modules.get(module_name)

    return None


def split_release_milestone(value: Optional[str]) -> tuple[Optional[str], Optional[str]]:
    """
    Split a release/milestone number such as ``"3-4"`` or ``"3.4"``.

    Dashes count as dots. The first token is the release, the second the
    milestone. Trailing empty tokens are dropped.
    """

    if value is None:
        return None, None

    parts = value.replace("-", ".").split(".")
    if value:
        while parts and parts[-1] == "":
            parts.pop()

    release = parts[0] if parts else None
    milestone = parts[1] if len(parts) > 1 else None
    return release, milestone


def version_info_from_manifest(manifest: ManifestAttributes) -> VersionInfo:
    return VersionInfo(
        product_id=manifest.get(PRODUCT_ID),
        title=manifest.get(TITLE),
        version=manifest.get(VERSION),
        from_manifest=True,
    )


def version_info_from_bundle(bundle: Bundle) -> VersionInfo:
    """
    Build a record from a version bundle.

    Raises MetadataUnavailable when a required key is missing.
    """

    release, milestone = split_release_milestone(bundle.require(KEY_MILESTONE))
    return VersionInfo(
        product_id=bundle.require(KEY_PRODUCT_ID),
        title=bundle.require(KEY_TITLE),
        version_major=bundle.require(KEY_MAJOR),
        version_minor=bundle.require(KEY_MINOR),
        version_release=release,
        version_milestone=milestone,
        version_build=bundle.require(KEY_BUILD),
        from_manifest=False,
    )


def unavailable_version_info() -> VersionInfo:
    return VersionInfo(version=NO_VERSION_INFORMATION, from_manifest=False)


class VersionHelper:
    """
    Looks up version metadata through a manifest source and a bundle source.

    Both sources can be injected; by default the manifest comes from the
    module's archive or installed distribution and the bundle from
    ``version.properties`` on the configured search path.
    """

    def __init__(
        self,
        *,
        manifest_source: Optional[ManifestSource] = None,
        bundle_source: Optional[BundleSource] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.settings = settings or load_settings()
        configure_logging(self.settings.log_level, self.settings.log_dir)
        self.manifest_source = manifest_source or default_manifest_source()
        self.bundle_source = bundle_source or PropertiesBundleSource(self.settings.bundle_paths)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _manifest_for(self, module: Optional[ModuleType]) -> Optional[ManifestAttributes]:
        if module is None:
            return None
        return self.manifest_source.get_manifest(module)

    def _load_bundle(self, module: Optional[ModuleType]) -> Bundle:
        return self.bundle_source.load(self.settings.bundle_name, module)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get_version_info(self, target: Any = None) -> VersionInfo:
        module = resolve_module(target)

        manifest = self._manifest_for(module)
        if manifest is not None:
            return version_info_from_manifest(manifest)

        try:
            return version_info_from_bundle(self._load_bundle(module))
        except MetadataUnavailable as e:
            log.warning(f"No version information for {target!r}: {e}")
            return unavailable_version_info()

    def get_version_information(self, target: Any = None) -> str:
        """
        Return a one-line version description.

        ``"<title> <version>"`` when the artifact manifest has a version,
        ``"<title> <major>.<minor>.<milestone>.<build> (class)"`` from the
        bundle otherwise.
        """

        module = resolve_module(target)

        manifest = self._manifest_for(module)
        if manifest is not None and manifest.get(VERSION) is not None:
            return " ".join(p for p in (manifest.get(TITLE), manifest.get(VERSION)) if p)

        try:
            bundle = self._load_bundle(module)
            return "{} {}.{}.{}.{} (class)".format(
                bundle.require(KEY_TITLE),
                bundle.require(KEY_MAJOR),
                bundle.require(KEY_MINOR),
                bundle.require(KEY_MILESTONE),
                bundle.require(KEY_BUILD),
            )
        except MetadataUnavailable as e:
            log.warning(f"No version information for {target!r}: {e}")
            return f"{self.settings.product_label} - {NO_VERSION_INFORMATION}"


def get_version_info(
    target: Any = None,
    *,
    manifest_source: Optional[ManifestSource] = None,
    bundle_source: Optional[BundleSource] = None,
    settings: Optional[Settings] = None,
) -> VersionInfo:
    """
    One-off lookup. A fresh VersionHelper is built for every call, so
    settings (and ``.env``) are read again each time unless passed in.
    """
    helper = VersionHelper(
        manifest_source=manifest_source,
        bundle_source=bundle_source,
        settings=settings,
    )
    return helper.get_version_info(target)


def get_version_information(
    target: Any = None,
    *,
    manifest_source: Optional[ManifestSource] = None,
    bundle_source: Optional[BundleSource] = None,
    settings: Optional[Settings] = None,
) -> str:
    """One-off formatted lookup; builds a fresh VersionHelper per call."""
    helper = VersionHelper(
        manifest_source=manifest_source,
        bundle_source=bundle_source,
        settings=settings,
    )
    return helper.get_version_information(target)
