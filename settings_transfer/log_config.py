"""Application logging setup.

Log files live in `data/logs/` (relative to CWD) unless LOG_DIR says otherwise,
rotated daily through TimedRotatingFileHandler.

- Rotation: midnight (UTC).
- Retention: `retention_days` rotated files (default 30).
- Level: `level` (default INFO).
"""
from __future__ import annotations

import glob
import logging
import os
import time
from logging.handlers import TimedRotatingFileHandler

_DEFAULT_LOG_DIR = os.path.join(os.getcwd(), "data", "logs")
_LOG_FILE_NAME = "settings_transfer.log"
_LOG_FORMAT = "%(asctime)s [%(levelname)-8s] %(name)s: %(message)s"
_LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Handlers installed by us, removed again on reconfiguration.
_file_handler: logging.Handler | None = None
_console_handler: logging.Handler | None = None


def _ensure_log_dir(log_dir: str | None) -> str:
    path = (log_dir or "").strip() or _DEFAULT_LOG_DIR
    os.makedirs(path, exist_ok=True)
    return path


def setup_logging(
    level: str = "INFO",
    retention_days: int = 30,
    log_dir: str | None = None,
) -> str:
    """Configure the root logger and return the log file path.

    - File handler: daily rotation, `retention_days` backups.
    - Console handler: stdout/stderr for container logs.
    - The level applies to both.
    """
    global _file_handler, _console_handler

    level_str = (level or "INFO").strip().upper()
    if level_str not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        level_str = "INFO"
    log_level = getattr(logging, level_str, logging.INFO)

    retention_days = max(1, min(365, int(retention_days or 30)))

    root = logging.getLogger()

    if _file_handler and _file_handler in root.handlers:
        root.removeHandler(_file_handler)
        _file_handler.close()
    if _console_handler and _console_handler in root.handlers:
        root.removeHandler(_console_handler)

    path = _ensure_log_dir(log_dir)
    log_file = os.path.join(path, _LOG_FILE_NAME)

    formatter = logging.Formatter(_LOG_FORMAT, datefmt=_LOG_DATE_FORMAT)

    fh = TimedRotatingFileHandler(
        log_file,
        when="midnight",
        interval=1,
        backupCount=retention_days,
        encoding="utf-8",
        utc=True,
    )
    fh.suffix = "%Y-%m-%d"
    fh.setLevel(log_level)
    fh.setFormatter(formatter)
    _file_handler = fh

    ch = logging.StreamHandler()
    ch.setLevel(log_level)
    ch.setFormatter(formatter)
    _console_handler = ch

    root.setLevel(log_level)
    root.addHandler(fh)
    root.addHandler(ch)

    _cleanup_old_logs(path, retention_days)

    # Too chatty at INFO.
    logging.getLogger("uvicorn.access").setLevel(max(log_level, logging.WARNING))
    logging.getLogger("sqlalchemy.engine").setLevel(max(log_level, logging.WARNING))

    logging.getLogger("settings_transfer").info(
        "Logging configured: level=%s, retention=%d days, file=%s",
        level_str, retention_days, log_file,
    )
    return log_file


def _cleanup_old_logs(log_dir: str, retention_days: int) -> None:
    """Remove rotated log files older than retention_days."""
    cutoff = time.time() - (retention_days * 86400)
    for f in glob.glob(os.path.join(log_dir, _LOG_FILE_NAME + ".*")):
        try:
            if os.path.getmtime(f) < cutoff:
                os.remove(f)
        except OSError:
            continue
