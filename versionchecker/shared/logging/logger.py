import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

LOG_LEVEL_ENV = "VERSIONCHECKER_LOG_LEVEL"
LOG_DIR_ENV = "VERSIONCHECKER_LOG_DIR"

_LOGGERS = {}
_LEVEL_OVERRIDE: Optional[str] = None
_LOG_DIR_OVERRIDE: Optional[Path] = None


def _resolve_level() -> int:
    raw = _LEVEL_OVERRIDE or os.getenv(LOG_LEVEL_ENV, "WARNING")
    level = logging.getLevelName(raw.strip().upper())
    return level if isinstance(level, int) else logging.WARNING


def _resolve_log_dir() -> Optional[Path]:
    if _LOG_DIR_OVERRIDE is not None:
        return _LOG_DIR_OVERRIDE
    log_dir = os.getenv(LOG_DIR_ENV)
    return Path(log_dir) if log_dir else None


def _formatter() -> logging.Formatter:
    return logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    )


def _attach_file_handler(logger: logging.Logger, runtime: str, log_dir: Path) -> None:
    log_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    logfile = log_dir / f"{runtime}-{timestamp}.log"

    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler) and Path(handler.baseFilename).parent == Path(os.path.abspath(log_dir)):
            return

    file_handler = logging.FileHandler(logfile, encoding="utf-8")
    file_handler.setFormatter(_formatter())
    logger.addHandler(file_handler)


def get_logger(
    name: str,
    *,
    runtime: str = "versionchecker",
) -> logging.Logger:
    """
    Create or retrieve a named logger.

    Parameters:
    - name: logger namespace (e.g. core.helper, shared.bundles.loader)
    - runtime: log file prefix when file logging is enabled

    File logging is opt-in: a per-run log file is only written when a log
    directory is set (VERSIONCHECKER_LOG_DIR or configure_logging).
    """
    cache_key = f"{runtime}:{name}"
    if cache_key in _LOGGERS:
        return _LOGGERS[cache_key]

    logger = logging.getLogger(cache_key)
    logger.setLevel(_resolve_level())

    # ------------------------------
    # Console handler
    # ------------------------------
    console = logging.StreamHandler()
    console.setFormatter(_formatter())
    logger.addHandler(console)

    # ------------------------------
    # File handler (one per run)
    # ------------------------------
    log_dir = _resolve_log_dir()
    if log_dir:
        _attach_file_handler(logger, runtime, log_dir)

    logger.propagate = False
    _LOGGERS[cache_key] = logger

    return logger


def set_level(level: str) -> None:
    """Apply ``level`` to every logger created so far and to later ones."""

    global _LEVEL_OVERRIDE
    _LEVEL_OVERRIDE = level
    resolved = _resolve_level()
    for logger in _LOGGERS.values():
        logger.setLevel(resolved)


def set_log_dir(log_dir: Union[str, Path]) -> None:
    """Start writing log files under ``log_dir`` for existing and later loggers."""

    global _LOG_DIR_OVERRIDE
    _LOG_DIR_OVERRIDE = Path(log_dir)
    for cache_key, logger in _LOGGERS.items():
        runtime = cache_key.partition(":")[0]
        _attach_file_handler(logger, runtime, _LOG_DIR_OVERRIDE)


def configure_logging(level: str, log_dir: Optional[Path] = None) -> None:
    """Apply settings-driven logging options; a missing ``log_dir`` leaves file logging as is."""

    set_level(level)
    if log_dir is not None:
        set_log_dir(log_dir)
