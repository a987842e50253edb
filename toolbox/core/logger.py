import logging
from dataclasses import dataclass, field
from enum import StrEnum

import orjson
import structlog
from asgi_correlation_id import correlation_id
from beartype import beartype

from toolbox.core.settings import settings


class LoggerError(Exception):
    """Exception for logger related issues."""


class LogLevel(StrEnum):
    """LogLevel types for logger configuration."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class LogIcon(StrEnum):
    """Icon mappings for toolbox log categories."""

    DEFAULT = "📋"

    FOLDER = "📁"
    JSON = "📝"
    UPLOAD = "📤"
    DOWNLOAD = "📥"
    NETWORK = "🌐"


@dataclass
class LoggerConfig:
    """Logger configuration with debug-specific settings."""
    debug: bool = field(default_factory=lambda: settings.DEBUG)
    app_name: str = field(default="toolbox")
    log_level: LogLevel = field(default=LogLevel.INFO)


def add_correlation_id(logger, method_name: str, event_dict: dict) -> dict:
    """Add correlation_id to event_dict if the request carries one."""
    request_id = correlation_id.get()
    if request_id:
        event_dict["correlation_id"] = request_id
    return event_dict


class BusinessRulesProcessor:
    """
    Normalize toolbox log events.

    - Event messages are upper-cased and cut at 80 characters.
    - The icon kwarg, if provided, must be a LogIcon member.
    - Icons are prepended only in DEBUG mode.
    """

    def __init__(self, debug: bool) -> None:
        self.debug = debug

    @beartype
    def __call__(self, logger, name: str, event_dict: dict) -> dict:
        try:
            event = str(event_dict.get("event", ""))[:80].upper()
            icon_enum = LogIcon(event_dict.pop("icon", LogIcon.DEFAULT))

            if self.debug:
                event = f"{icon_enum.value} {event}"

            event_dict["event"] = event
            return event_dict
        except ValueError as err:
            raise LoggerError("Wrong Icon chosen, please choose a valid LogIcon enum member") from err


def dev_pipeline_renderer(logger, name: str, event_dict: dict) -> str:
    """Render log events as one pipe-separated line."""
    reserved_keys = {"timestamp", "level", "event", "filename", "lineno"}

    location = f"{event_dict['filename']}:{event_dict.get('lineno', '')}" if event_dict.get("filename") else ""
    extra_kwargs = " | ".join(f"{k}={v}" for k, v in event_dict.items() if k not in reserved_keys)

    parts = [
        event_dict.get("timestamp", ""),
        event_dict.get("level", LogLevel.INFO.value).upper(),
        event_dict.get("event", ""),
        extra_kwargs,
        location,
    ]
    return " | ".join(filter(None, parts))


def setup_logging(config: LoggerConfig) -> None:
    """Configure structlog for the toolbox."""
    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
            ],
            additional_ignores=["logger"]
        ),
        BusinessRulesProcessor(debug=config.debug),
    ]

    if config.debug:
        processors = shared_processors + [dev_pipeline_renderer]
    else:
        processors = shared_processors + [
            add_correlation_id,
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(serializer=orjson.dumps),
        ]

    structlog.configure(
        processors=processors,
        logger_factory=structlog.PrintLoggerFactory() if config.debug else structlog.BytesLoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, config.log_level.value)),
        cache_logger_on_first_use=True,
    )


_default_config = LoggerConfig()
setup_logging(_default_config)

logger = structlog.get_logger(_default_config.app_name)
