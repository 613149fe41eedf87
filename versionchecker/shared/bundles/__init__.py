"""Properties-file resource bundles used as the version fallback."""

from .loader import (
    Bundle,
    BundleSource,
    PropertiesBundleSource,
    StaticBundleSource,
    read_bundle_file,
)
from .properties import dump_properties, parse_properties
from .schema import validate_bundle
from .stamp import stamp_bundle_file, stamp_bundle_text

__all__ = [
    "Bundle",
    "BundleSource",
    "PropertiesBundleSource",
    "StaticBundleSource",
    "dump_properties",
    "parse_properties",
    "read_bundle_file",
    "stamp_bundle_file",
    "stamp_bundle_text",
    "validate_bundle",
]
