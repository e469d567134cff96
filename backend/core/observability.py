"""Logging setup: human-readable text in development, JSON lines in production."""

import json
import logging
from datetime import datetime, timezone

from litestar.logging.config import LoggingConfig as LitestarLoggingConfig

from core.config import LoggingConfig


TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def build_logging_config(config: LoggingConfig) -> LitestarLoggingConfig:
    """Litestar logging config for the configured level and format."""
    formatter = "json" if config.format == "json" else "standard"
    return LitestarLoggingConfig(
        formatters={
            "standard": {"format": TEXT_FORMAT},
            "json": {"()": JSONFormatter},
        },
        handlers={
            "console": {
                "class": "logging.StreamHandler",
                "level": "DEBUG",
                "formatter": formatter,
            },
        },
        root={"level": config.level.upper(), "handlers": ["console"]},
        log_exceptions="never",
    )
