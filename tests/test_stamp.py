from __future__ import annotations

import pytest

from versionchecker.shared.bundles.properties import parse_properties
from versionchecker.shared.bundles.stamp import stamp_bundle_file, stamp_bundle_text

ORIGINAL = (
    "# build numbers\n"
    "impl.title=Demo Platform\n"
    "release.major.number = 1\n"
    "release.build.number:5\n"
)


def test_existing_keys_are_rewritten_in_place():
    updated = stamp_bundle_text(ORIGINAL, {"release.major.number": "2", "release.build.number": "6"})

    assert updated == (
        "# build numbers\n"
        "impl.title=Demo Platform\n"
        "release.major.number = 2\n"
        "release.build.number:6\n"
    )


def test_missing_keys_are_appended():
    updated = stamp_bundle_text("impl.title=Demo", {"release.milestone.number": "3-4"})

    assert updated == "impl.title=Demo\nrelease.milestone.number=3-4\n"


def test_commented_key_is_not_touched():
    updated = stamp_bundle_text("#release.build.number=1\n", {"release.build.number": "2"})

    assert updated.startswith("#release.build.number=1\n")
    assert parse_properties(updated) == {"release.build.number": "2"}


def test_values_are_escaped():
    updated = stamp_bundle_text("impl.title=x\n", {"impl.title": "Demo: Platform"})

    assert parse_properties(updated)["impl.title"] == "Demo: Platform"


def test_multiline_value_is_refused():
    with pytest.raises(ValueError):
        stamp_bundle_text("impl.title=a\\\n  b\n", {"impl.title": "c"})


def test_stamp_file(tmp_path):
    path = tmp_path / "version.properties"
    path.write_text(ORIGINAL, encoding="utf-8")

    assert stamp_bundle_file(path, {"release.build.number": "7"}) is True
    assert parse_properties(path.read_text(encoding="utf-8"))["release.build.number"] == "7"
    assert stamp_bundle_file(path, {"release.build.number": "7"}) is False


def test_stamp_creates_missing_file(tmp_path):
    path = tmp_path / "nested" / "version.properties"

    assert stamp_bundle_file(path, {"impl.title": "Demo"}) is True
    assert path.read_text(encoding="utf-8") == "impl.title=Demo\n"
