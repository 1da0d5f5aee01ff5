"""
Logging setup for xapk-input.

Configures the package logger with console handlers split by severity and
an optional rotating file handler, driven by the logging settings.
"""

import json
import logging
import logging.handlers
import sys
from datetime import datetime, timezone
from typing import Optional

from xapk_input.config import Settings, settings

PACKAGE_LOGGER = "xapk_input"

STANDARD_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class JsonFormatter(logging.Formatter):
    """Render records as one JSON object per line."""

    def __init__(self, context: str) -> None:
        super().__init__()
        self.context = context

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "context": self.context,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload)


class _MaxLevelFilter(logging.Filter):
    """Pass records strictly below a level."""

    def __init__(self, max_level: int) -> None:
        super().__init__()
        self.max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.max_level


def _build_formatter(config: Settings, context: str) -> logging.Formatter:
    if config.log_format == "json":
        return JsonFormatter(context)
    return logging.Formatter(fmt=STANDARD_FORMAT, datefmt=DATE_FORMAT)


def setup_logging(
    context: str = "app",
    level: Optional[str] = None,
    config: Optional[Settings] = None,
) -> logging.Logger:
    """
    Configure the xapk_input logger.

    Args:
        context: Name used for the log file (``<log_dir>/<context>.log``)
        level: Override for ``settings.log_level``
        config: Settings to use instead of the global instance

    Returns:
        The configured package logger

    Raises:
        PermissionError: If the log directory cannot be created
    """
    config = config or settings
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel((level or config.log_level).upper())

    # Re-running setup replaces handlers instead of stacking them
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    formatter = _build_formatter(config, context)

    if config.log_console_enabled:
        stdout_handler = logging.StreamHandler(sys.stdout)
        stdout_handler.addFilter(_MaxLevelFilter(logging.WARNING))
        stdout_handler.setFormatter(formatter)
        package_logger.addHandler(stdout_handler)

        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setLevel(logging.WARNING)
        stderr_handler.setFormatter(formatter)
        package_logger.addHandler(stderr_handler)

    if config.log_file_enabled:
        log_dir = config.log_directory
        log_dir.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_dir / f"{context}.log",
            maxBytes=config.log_max_bytes,
            backupCount=config.log_backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        package_logger.addHandler(file_handler)

    package_logger.propagate = False  # Don't propagate to root logger
    return package_logger
