"""Structured logging configuration.

structlog on top of the stdlib logging module, so records from uvicorn, httpx
and our own code share one set of processors and one stdout handler. Output is
JSON by default; LOG_FORMAT=console switches to coloured lines for local work.
Request-scoped context (request_id) is merged in from structlog.contextvars.
"""

import logging
import logging.config
import sys
from typing import Any, Literal

import structlog
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from structlog.stdlib import BoundLogger

# Chatty client libraries; the gateway logs the failures that matter itself
QUIET_LOGGERS = ("httpx", "httpcore")


class LoggingSettings(BaseSettings):
    """Logging settings from environment variables."""

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: Literal["json", "console"] = Field(default="json", alias="LOG_FORMAT")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


def _shared_processors() -> list[Any]:
    """Processors applied to structlog events and foreign stdlib records alike."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def _renderer(log_format: str) -> Any:
    if log_format == "console":
        return structlog.dev.ConsoleRenderer()
    return structlog.processors.JSONRenderer()


def _stdlib_config(settings: LoggingSettings, pre_chain: list[Any]) -> dict[str, Any]:
    loggers: dict[str, Any] = {
        "": {"handlers": ["stdout"], "level": settings.log_level, "propagate": True},
    }
    for name in QUIET_LOGGERS:
        loggers[name] = {"level": "WARNING"}
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "structured": {
                "()": structlog.stdlib.ProcessorFormatter,
                "processor": _renderer(settings.log_format),
                "foreign_pre_chain": pre_chain,
            },
        },
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "formatter": "structured",
                "stream": sys.stdout,
            },
        },
        "loggers": loggers,
    }


def configure_logging(settings: LoggingSettings) -> None:
    """Route structlog through stdlib logging and install the stdout handler."""
    shared = _shared_processors()
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.config.dictConfig(_stdlib_config(settings, shared))


configure_logging(LoggingSettings())


def get_logger(name: str) -> BoundLogger:
    """Get a structured logger.

    Example:
        logger = get_logger(__name__)
        logger.info("quote_computed", room_id="room-101", nights=3)
        # Output: {"event": "quote_computed", "room_id": "room-101", "nights": 3, ...}
    """
    return structlog.get_logger(name)  # type: ignore[no-any-return]
