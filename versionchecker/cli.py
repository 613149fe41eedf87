"""
Command line entry point.

Usage:
    versionchecker show [TARGET] [--json] [--bundle-dir DIR] [--bundle-name NAME]
    versionchecker validate path/to/version.properties
    versionchecker stamp path/to/version.properties --build 42

TARGET is a dotted module name; without it the tool reports on itself.
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import sys
from pathlib import Path
from typing import Dict, List, Optional

from versionchecker.core.helper import (
    KEY_BUILD,
    KEY_MAJOR,
    KEY_MILESTONE,
    KEY_MINOR,
    KEY_PRODUCT_ID,
    KEY_TITLE,
    VersionHelper,
)
from versionchecker.shared.bundles.loader import read_bundle_file
from versionchecker.shared.bundles.schema import validate_bundle
from versionchecker.shared.bundles.stamp import stamp_bundle_file
from versionchecker.shared.config.settings import Settings, load_settings
from versionchecker.shared.errors import MetadataUnavailable
from versionchecker.shared.logging.logger import configure_logging

_STAMP_OPTIONS = {
    "product_id": KEY_PRODUCT_ID,
    "title": KEY_TITLE,
    "major": KEY_MAJOR,
    "minor": KEY_MINOR,
    "milestone": KEY_MILESTONE,
    "build": KEY_BUILD,
}


def _error(msg: str) -> None:
    print(f"[BUNDLE ERROR] {msg}", file=sys.stderr)


# ------------------------------------------------------------
# Commands
# ------------------------------------------------------------

def cmd_show(args: argparse.Namespace, settings: Settings) -> int:
    if args.bundle_dir or args.bundle_name:
        settings = dataclasses.replace(
            settings,
            bundle_name=args.bundle_name or settings.bundle_name,
            bundle_paths=list(args.bundle_dir or []) + list(settings.bundle_paths),
        )

    helper = VersionHelper(settings=settings)

    if args.json:
        info = helper.get_version_info(args.target)
        print(json.dumps(info.to_document(), indent=2))
    else:
        print(helper.get_version_information(args.target))
    return 0


def cmd_validate(args: argparse.Namespace, settings: Settings) -> int:
    try:
        bundle = read_bundle_file(args.file)
    except MetadataUnavailable as e:
        _error(str(e))
        return 1

    warnings = validate_bundle(bundle)
    for warning in warnings:
        _error(f"{args.file.name}: {warning}")

    if warnings:
        print("Bundle validation failed.", file=sys.stderr)
        return 1

    print("Bundle validation passed.")
    return 0


def cmd_stamp(args: argparse.Namespace, settings: Settings) -> int:
    updates: Dict[str, str] = {}
    for option, key in _STAMP_OPTIONS.items():
        value = getattr(args, option)
        if value is not None:
            updates[key] = value

    if not updates:
        _error("nothing to stamp; pass at least one of --major/--minor/--milestone/--build/--title/--product-id")
        return 2

    try:
        changed = stamp_bundle_file(args.file, updates)
    except (OSError, ValueError) as e:
        _error(f"failed to stamp {args.file}: {e}")
        return 1

    if changed:
        print(f"Updated {args.file}")
    else:
        print(f"{args.file} already up to date")
    return 0


# ------------------------------------------------------------
# Parser
# ------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="versionchecker",
        description="Report build/version metadata for Python modules",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print the version of this tool and exit",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log lookup details to stderr",
    )
    subparsers = parser.add_subparsers(dest="command")

    show = subparsers.add_parser("show", help="Show version information for a module")
    show.add_argument("target", nargs="?", default=None, help="Dotted module name (default: versionchecker)")
    show.add_argument("--json", action="store_true", help="Print the full version record as JSON")
    show.add_argument(
        "--bundle-dir",
        type=Path,
        action="append",
        help="Extra directory to search for the version bundle (repeatable)",
    )
    show.add_argument("--bundle-name", default=None, help="Bundle base name (default: version)")
    show.set_defaults(handler=cmd_show)

    validate = subparsers.add_parser("validate", help="Check a version bundle for missing or invalid keys")
    validate.add_argument("file", type=Path, help="Path to a .properties bundle")
    validate.set_defaults(handler=cmd_validate)

    stamp = subparsers.add_parser("stamp", help="Write release numbers into a version bundle")
    stamp.add_argument("file", type=Path, help="Path to a .properties bundle (created if missing)")
    stamp.add_argument("--product-id", dest="product_id", help="Value for impl.productID")
    stamp.add_argument("--title", help="Value for impl.title")
    stamp.add_argument("--major", help="Value for release.major.number")
    stamp.add_argument("--minor", help="Value for release.minor.number")
    stamp.add_argument("--milestone", help="Value for release.milestone.number (e.g. 3-4)")
    stamp.add_argument("--build", help="Value for release.build.number")
    stamp.set_defaults(handler=cmd_stamp)

    return parser


# ------------------------------------------------------------
# Entry point
# ------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = load_settings()
    if args.verbose:
        settings = dataclasses.replace(settings, log_level="DEBUG")
    configure_logging(settings.log_level, settings.log_dir)

    if args.version:
        print(VersionHelper(settings=settings).get_version_information())
        return 0

    if not args.command:
        parser.print_help()
        return 2

    return args.handler(args, settings)


if __name__ == "__main__":
    sys.exit(main())
