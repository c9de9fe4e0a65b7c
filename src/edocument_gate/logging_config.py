"""
Edocument API Gate Logging Configuration

Console logging with redaction of credentials. LOG_FORMAT=json renders
one JSON object per line through structlog, including `extra=` fields.
"""

import logging
import logging.config
import sys
from typing import Dict, Any, Optional

import structlog

from .config import Settings, get_settings


class SecurityRedactionFilter(logging.Filter):
    """Filter to redact sensitive information from logs"""

    SENSITIVE_FIELDS = [
        "password", "token", "secret", "authorization",
        "cookie", "session", "api_key", "jwt"
    ]

    def filter(self, record):
        if record.args:
            record.args = self._redact_sensitive_data(record.args)

        for field in self.SENSITIVE_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                setattr(record, field, "[REDACTED]")

        return True

    def _redact_sensitive_data(self, data):
        """Recursively redact sensitive data from log arguments"""
        if isinstance(data, dict):
            return {
                key: "[REDACTED]" if isinstance(key, str) and any(sensitive in key.lower() for sensitive in self.SENSITIVE_FIELDS)
                else self._redact_sensitive_data(value)
                for key, value in data.items()
            }
        elif isinstance(data, (list, tuple)):
            return type(data)(self._redact_sensitive_data(item) for item in data)
        return data


def build_json_formatter() -> logging.Formatter:
    """stdlib formatter rendering each record as a single JSON object"""
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.ExtraAdder(),
            structlog.processors.TimeStamper(fmt="iso"),
        ],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
    )


def build_logging_config(settings: Settings) -> Dict[str, Any]:
    """Build the dictConfig mapping for the given settings"""
    formatter = "json" if settings.log_format == "json" else "default"

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "redact": {
                "()": SecurityRedactionFilter,
            },
        },
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "json": {
                "()": build_json_formatter,
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": settings.log_level,
                "formatter": formatter,
                "filters": ["redact"],
                "stream": sys.stdout,
            },
        },
        "loggers": {
            "": {  # Root logger
                "level": settings.log_level,
                "handlers": ["console"],
            },
            "edocument_gate": {
                "level": "DEBUG" if settings.debug else settings.log_level,
                "handlers": ["console"],
                "propagate": False,
            },
            "uvicorn.access": {
                "level": "WARNING",
                "handlers": ["console"],
                "propagate": False,
            },
            "uvicorn.error": {
                "level": "INFO",
                "handlers": ["console"],
                "propagate": False,
            },
        },
    }


def setup_logging(settings: Optional[Settings] = None) -> None:
    """Setup logging configuration for the gate service"""
    settings = settings or get_settings()
    logging.config.dictConfig(build_logging_config(settings))

    logger = get_logger("startup")
    logger.info(
        "Gate logging initialized",
        extra={
            "environment": settings.environment,
            "log_level": settings.log_level,
            "log_format": settings.log_format,
        }
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger inside the package namespace configured by setup_logging"""
    return logging.getLogger(f"edocument_gate.{name}")
