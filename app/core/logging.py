"""Logging configuration."""

import logging
import logging.config

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s [%(request_id)s] %(message)s"


class RequestIdFilter(logging.Filter):
    """Guarantee a ``request_id`` attribute so the format string never fails."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = "-"
        return True


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once at application start-up."""
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "filters": {"request_id": {"()": RequestIdFilter}},
            "formatters": {"default": {"format": LOG_FORMAT}},
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                    "filters": ["request_id"],
                },
            },
            "root": {"handlers": ["console"], "level": level.upper()},
            "loggers": {
                # SQL echo is controlled by the DEBUG setting on the engine
                "sqlalchemy.engine": {"level": "WARNING"},
                "uvicorn.access": {"level": "WARNING"},
            },
        }
    )
