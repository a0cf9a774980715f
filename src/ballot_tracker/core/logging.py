"""Loguru logging configuration for the tracker CLI and library.

Three sinks are configured:

* stderr, human-readable, for everything not bound with ``json_output``;
* stderr, serialized JSON, only for records bound with ``json_output=True``
  (e.g. ``logger.bind(json_output=True).info(...)``), so a single record
  is never printed twice;
* an optional ``ballot-tracker.log`` file under ``log_dir``, rotated
  every 24 hours and retained for 7 days.
"""

import sys
from pathlib import Path

from loguru import logger

_LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | {name}:{function}:{line} | {message}"
_LOG_FILE_NAME = "ballot-tracker.log"


def _is_json_record(record: dict) -> bool:
    return bool(record["extra"].get("json_output", False))


def setup_logging(log_level: str = "INFO", log_dir: str | None = None) -> None:
    """Replace Loguru's default sink with the tracker's sinks.

    Args:
        log_level: Minimum log level to emit (case-insensitive).
        log_dir: Optional directory for the rotating log file; created if
            missing.
    """
    level = log_level.upper()
    logger.remove()
    logger.add(sys.stderr, level=level, format=_LOG_FORMAT, filter=lambda r: not _is_json_record(r))
    logger.add(sys.stderr, level=level, serialize=True, filter=_is_json_record)

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path / _LOG_FILE_NAME,
            level=level,
            format=_LOG_FORMAT,
            rotation="24h",
            retention="7 days",
        )
