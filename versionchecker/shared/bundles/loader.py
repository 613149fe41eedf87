"""
Resource bundle lookup.

A bundle is a ``<name>.properties`` file. ``PropertiesBundleSource`` searches,
in order:
  - directories configured through settings
  - the directory of the target's top-level package
  - every directory on ``sys.path``

The first file found wins. Problems reading it surface as
``MetadataUnavailable``; the version helper decides what to do with them.
"""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from pathlib import Path
from types import ModuleType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional

from versionchecker.shared.bundles.properties import parse_properties
from versionchecker.shared.errors import MetadataUnavailable
from versionchecker.shared.logging.logger import get_logger

log = get_logger("shared.bundles.loader")

BUNDLE_SUFFIX = ".properties"


class Bundle(Mapping[str, str]):
    """Read-only key/value view over one loaded bundle."""

    def __init__(self, name: str, entries: Mapping[str, str], *, origin: Optional[str] = None):
        self.name = name
        self.origin = origin
        self._entries: Dict[str, str] = dict(entries)

    def __getitem__(self, key: str) -> str:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def require(self, key: str) -> str:
        try:
            return self._entries[key]
        except KeyError:
            raise MetadataUnavailable(
                f"Can't find resource for bundle {self.name}, key {key}",
                source=self.origin,
            ) from None


class BundleSource(ABC):
    """
    Base class for anything that can hand out a named bundle.

    ``module`` is the code unit the lookup is made for; sources may use it
    to widen their search and are free to ignore it.
    """

    @abstractmethod
    def load(self, name: str, module: Optional[ModuleType] = None) -> Bundle:
        """
        Return the bundle called ``name`` or raise MetadataUnavailable.
        """
        raise NotImplementedError


class StaticBundleSource(BundleSource):
    """Serves one in-memory bundle, or nothing when ``entries`` is None."""

    def __init__(self, entries: Optional[Mapping[str, str]] = None):
        self._entries = entries

    def load(self, name: str, module: Optional[ModuleType] = None) -> Bundle:
        if self._entries is None:
            raise MetadataUnavailable(f"Can't find bundle for base name {name}")
        return Bundle(name, self._entries, origin="<static>")


def _package_dirs(module: Optional[ModuleType]) -> List[Path]:
    if module is None:
        return []

    top = sys.modules.get(module.__name__.partition(".")[0])
    if top is None:
        return []

    package_path = getattr(top, "__path__", None)
    if package_path:
        return [Path(entry) for entry in package_path]

    module_file = getattr(top, "__file__", None)
    if module_file:
        return [Path(module_file).parent]
    return []


def _sys_path_dirs() -> List[Path]:
    dirs = []
    for entry in sys.path:
        if isinstance(entry, str):
            dirs.append(Path(entry or "."))
    return dirs


def _decode(raw: bytes) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return raw.decode("iso-8859-1")


def read_bundle_file(path: Path, name: Optional[str] = None) -> Bundle:
    """Load a single properties file as a bundle."""

    try:
        text = _decode(path.read_bytes())
    except OSError as e:
        raise MetadataUnavailable(f"Failed to read bundle: {e}", source=str(path)) from e

    try:
        entries = parse_properties(text)
    except ValueError as e:
        raise MetadataUnavailable(f"Malformed bundle: {e}", source=str(path)) from e

    return Bundle(name or path.stem, entries, origin=str(path))


class PropertiesBundleSource(BundleSource):
    def __init__(self, search_paths: Optional[Iterable[Path]] = None, *, include_sys_path: bool = True):
        self.search_paths = [Path(p) for p in (search_paths or [])]
        self.include_sys_path = include_sys_path

    def candidates(self, name: str, module: Optional[ModuleType] = None) -> List[Path]:
        dirs = list(self.search_paths) + _package_dirs(module)
        if self.include_sys_path:
            dirs += _sys_path_dirs()

        seen = set()
        candidates = []
        for directory in dirs:
            path = directory / f"{name}{BUNDLE_SUFFIX}"
            if path in seen:
                continue
            seen.add(path)
            candidates.append(path)
        return candidates

    def load(self, name: str, module: Optional[ModuleType] = None) -> Bundle:
        for path in self.candidates(name, module):
            if path.is_file():
                log.debug(f"Loading bundle '{name}' from {path}")
                return read_bundle_file(path, name)

        raise MetadataUnavailable(f"Can't find bundle for base name {name}")
