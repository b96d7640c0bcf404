"""structlog setup for ChromaGen.

Console output (colored, human readable) in development, one JSON object
per line everywhere else. Request handlers bind ``request_id``, ``path``
and ``method``; the usage service logs the quota identifier on every
event, so a single client's requests can be followed through the logs.

Credentials never reach a log line: the Turnstile secret, the caller's
Turnstile token and the AI API key are stripped from every event.
"""

import logging
import sys
from pathlib import Path
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from chromagen.config import Settings, get_settings

SECRET_FIELDS = frozenset(
    {"secret", "turnstile_secret_key", "turnstile_token", "api_key", "ai_api_key"}
)

NOISY_LOGGERS = ("httpcore", "httpx", "openai", "uvicorn.access", "asyncio")


def _drop_secrets(logger: logging.Logger, method_name: str, event_dict: EventDict) -> EventDict:
    for key in event_dict.keys() & SECRET_FIELDS:
        event_dict[key] = "***"
    return event_dict


def _level_field(logger: logging.Logger, method_name: str, event_dict: EventDict) -> EventDict:
    # JSON consumers expect upper-case level names; "warn" is an alias.
    event_dict["level"] = ("warning" if method_name == "warn" else method_name).upper()
    return event_dict


def _service_fields(logger: logging.Logger, method_name: str, event_dict: EventDict) -> EventDict:
    settings = get_settings()
    event_dict.setdefault("app", settings.app_name)
    event_dict.setdefault("version", settings.app_version)
    event_dict.setdefault("environment", settings.environment.value)
    return event_dict


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        _drop_secrets,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def get_console_processors() -> list[Processor]:
    """Processors for colored development output."""
    return [
        structlog.stdlib.add_log_level,
        *_shared_processors(),
        structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.plain_traceback,
        ),
    ]


def get_json_processors() -> list[Processor]:
    """Processors for machine-readable JSON lines."""
    return [
        _level_field,
        _service_fields,
        *_shared_processors(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog and the stdlib root logger from settings.

    Called once by the API lifespan; the CLI leaves structlog's defaults.
    """
    settings = settings or get_settings()
    level = logging.getLevelName(settings.log_level.value)

    structlog.configure(
        processors=(
            get_json_processors()
            if settings.log_format == "json"
            else get_console_processors()
        ),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    if settings.log_file:
        _add_file_handler(settings.log_file, level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.INFO))


def _add_file_handler(log_file: Path, level: int) -> None:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file)
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
    )
    logging.getLogger().addHandler(handler)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger.

    Example:
        logger = get_logger(__name__)
        logger.info("usage_consumed", identifier="203.0.113.7", remaining=2)
    """
    return structlog.stdlib.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Attach key/values to every later log call in this context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    structlog.contextvars.unbind_contextvars(*keys)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


class LogContext:
    """Bind log context for the duration of a ``with`` block.

    Example:
        with LogContext(client_ip=ip):
            logger.info("generation_started")
            generator.generate(image, mime_type)
    """

    def __init__(self, **kwargs: Any) -> None:
        self.kwargs = kwargs

    def __enter__(self) -> "LogContext":
        bind_context(**self.kwargs)
        return self

    def __exit__(self, *args: Any) -> None:
        unbind_context(*self.kwargs)
