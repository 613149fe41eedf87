from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict

import pytest


FULL_BUNDLE: Dict[str, str] = {
    "impl.productID": "PBI",
    "impl.title": "Demo Platform",
    "release.major.number": "1",
    "release.minor.number": "2",
    "release.milestone.number": "3-4",
    "release.build.number": "5",
}


@pytest.fixture
def full_bundle() -> Dict[str, str]:
    return dict(FULL_BUNDLE)


@pytest.fixture
def write_bundle(tmp_path: Path) -> Callable[..., Path]:
    def _write(entries: Dict[str, str], *, directory: Path | None = None, name: str = "version") -> Path:
        target_dir = directory or tmp_path
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / f"{name}.properties"
        path.write_text("".join(f"{k}={v}\n" for k, v in entries.items()), encoding="utf-8")
        return path

    return _write

