"""
Runtime settings for version lookups.

Settings come from environment variables. A ``.env`` file in the working
directory (or an explicit path) is loaded first without overriding values
that are already exported.

Design rules:
- Import-safe (no side effects)
- Invalid values are logged and replaced with defaults
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Mapping, Optional

from dotenv import load_dotenv

from versionchecker.shared.logging.logger import get_logger

log = get_logger("shared.config.settings")


# ------------------------------------------------------------
# Keys
# ------------------------------------------------------------

BUNDLE_NAME_ENV = "VERSIONCHECKER_BUNDLE_NAME"
BUNDLE_PATH_ENV = "VERSIONCHECKER_BUNDLE_PATH"
PRODUCT_LABEL_ENV = "VERSIONCHECKER_PRODUCT_LABEL"
LOG_LEVEL_ENV = "VERSIONCHECKER_LOG_LEVEL"
LOG_DIR_ENV = "VERSIONCHECKER_LOG_DIR"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Settings:
    bundle_name: str = "version"
    bundle_paths: List[Path] = field(default_factory=list)
    product_label: str = "Pentaho BI Platform"
    log_level: str = "WARNING"
    log_dir: Optional[Path] = None


def _load_bundle_name(value: Any) -> str:
    if value is None:
        return Settings.bundle_name

    name = str(value).strip()
    if not name or "/" in name or "\\" in name:
        log.warning(f"{BUNDLE_NAME_ENV}={value!r} is not a plain bundle name; using default")
        return Settings.bundle_name

    if name.endswith(".properties"):
        name = name[: -len(".properties")]
    return name


def _load_bundle_paths(value: Any) -> List[Path]:
    if not value:
        return []

    paths: List[Path] = []
    for entry in str(value).split(os.pathsep):
        entry = entry.strip()
        if entry:
            paths.append(Path(entry).expanduser())
    return paths


def _load_log_level(value: Any) -> str:
    if value is None:
        return Settings.log_level

    level = str(value).strip().upper()
    if level not in _LOG_LEVELS:
        log.warning(f"{LOG_LEVEL_ENV}={value!r} is not a log level; defaulting to WARNING")
        return Settings.log_level
    return level


def _load_log_dir(value: Any) -> Optional[Path]:
    if not value or not str(value).strip():
        return None
    return Path(str(value).strip()).expanduser()


def load_settings(
    raw: Optional[Mapping[str, Any]] = None,
    *,
    env_file: Optional[Path] = None,
) -> Settings:
    """
    Build settings from ``raw`` or, when omitted, from the process environment
    after loading ``.env``.
    """

    if raw is None:
        load_dotenv(dotenv_path=env_file, override=False)
        raw = os.environ

    product_label = raw.get(PRODUCT_LABEL_ENV)
    if product_label is not None and not str(product_label).strip():
        log.warning(f"{PRODUCT_LABEL_ENV} is empty; using default")
        product_label = None

    return Settings(
        bundle_name=_load_bundle_name(raw.get(BUNDLE_NAME_ENV)),
        bundle_paths=_load_bundle_paths(raw.get(BUNDLE_PATH_ENV)),
        product_label=str(product_label).strip() if product_label else Settings.product_label,
        log_level=_load_log_level(raw.get(LOG_LEVEL_ENV)),
        log_dir=_load_log_dir(raw.get(LOG_DIR_ENV)),
    )
