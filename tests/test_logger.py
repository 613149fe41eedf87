from __future__ import annotations

import logging
from pathlib import Path

from versionchecker.core.helper import VersionHelper
from versionchecker.shared.bundles.loader import StaticBundleSource
from versionchecker.shared.config.settings import load_settings
from versionchecker.shared.logging import logger as logger_module
from versionchecker.shared.logging.logger import LOG_DIR_ENV, LOG_LEVEL_ENV, get_logger, set_level
from versionchecker.shared.manifest.sources import StaticManifestSource


def test_loggers_are_cached():
    first = get_logger("tests.cached")

    assert get_logger("tests.cached") is first
    assert first.name == "versionchecker:tests.cached"
    assert first.propagate is False


def test_set_level_applies_to_existing_loggers(monkeypatch):
    monkeypatch.setattr(logger_module, "_LEVEL_OVERRIDE", None)
    log = get_logger("tests.levels")

    set_level("DEBUG")
    assert log.level == logging.DEBUG

    set_level("not-a-level")
    assert log.level == logging.WARNING


def test_file_logging_is_opt_in(tmp_path, monkeypatch):
    monkeypatch.setattr(logger_module, "_LOG_DIR_OVERRIDE", None)
    monkeypatch.setenv(LOG_DIR_ENV, str(tmp_path / "logs"))

    log = get_logger("tests.file", runtime="filetest")
    try:
        log.warning("lookup failed")
        files = list((tmp_path / "logs").glob("filetest-*.log"))
        assert len(files) == 1
        for handler in log.handlers:
            handler.flush()
        assert "lookup failed" in files[0].read_text(encoding="utf-8")
    finally:
        for handler in list(log.handlers):
            handler.close()
            log.removeHandler(handler)


def test_dotenv_logging_options_reach_helper_loggers(tmp_path, monkeypatch):
    log_dir = tmp_path / "helper-logs"
    env_file = tmp_path / ".env"
    env_file.write_text(
        f"{LOG_LEVEL_ENV}=DEBUG\n{LOG_DIR_ENV}={log_dir}\n",
        encoding="utf-8",
    )
    # registered so the values loaded from .env are removed after the test
    for name in (LOG_LEVEL_ENV, LOG_DIR_ENV):
        monkeypatch.setenv(name, "placeholder")
        monkeypatch.delenv(name)
    monkeypatch.setattr(logger_module, "_LEVEL_OVERRIDE", None)
    monkeypatch.setattr(logger_module, "_LOG_DIR_OVERRIDE", None)

    helper_log = get_logger("core.helper")
    try:
        VersionHelper(
            manifest_source=StaticManifestSource(None),
            bundle_source=StaticBundleSource(None),
            settings=load_settings(env_file=env_file),
        )

        assert helper_log.level == logging.DEBUG
        file_handlers = [h for h in helper_log.handlers if isinstance(h, logging.FileHandler)]
        assert [Path(h.baseFilename).parent for h in file_handlers] == [log_dir]
    finally:
        set_level("WARNING")
        for log in list(logger_module._LOGGERS.values()):
            for handler in list(log.handlers):
                if isinstance(handler, logging.FileHandler) and str(tmp_path) in handler.baseFilename:
                    handler.close()
                    log.removeHandler(handler)
