"""JSON Schema checks for version bundles."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping

from jsonschema import Draft7Validator


SCHEMA_DIR = Path(__file__).resolve().parents[2] / "schemas"
VERSION_BUNDLE_SCHEMA = SCHEMA_DIR / "version_bundle.schema.json"


def load_schema(path: Path = VERSION_BUNDLE_SCHEMA) -> Dict[str, Any]:
    return json.loads(path.read_text(encoding="utf-8"))


def validate_bundle(payload: Mapping[str, Any], schema_path: Path = VERSION_BUNDLE_SCHEMA) -> List[str]:
    """
    Check a bundle against the version bundle schema.

    Returns one message per problem, ordered by key. An empty list means the
    bundle is complete. Nothing is raised for invalid bundles.
    """

    validator = Draft7Validator(load_schema(schema_path))
    errors = sorted(validator.iter_errors(dict(payload)), key=lambda e: list(e.path))

    warnings = []
    for err in errors:
        loc = "/".join(str(p) for p in err.path) or "<root>"
        warnings.append(f"'{loc}': {err.message}")
    return warnings
