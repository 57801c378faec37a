"""
Logging Configuration for COD Profit Analytics

Structured logging routed through the standard library root logger. Every
event carries the application name, environment and version; report runs
additionally bind their date window so aggregator events can be traced back
to the report that produced them.
"""

import logging
import sys
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

import structlog
from structlog.processors import JSONRenderer, TimeStamper
from structlog.stdlib import add_log_level, ProcessorFormatter
from structlog.types import EventDict, Processor

from codprofit.config.settings import Settings, get_settings


def _app_context(settings: Settings) -> Processor:
    """Processor stamping static application fields onto every event"""
    context: Dict[str, Any] = {
        "app": settings.app_name,
        "environment": settings.app_env,
        "version": settings.version,
    }

    def add_app_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        for key, value in context.items():
            event_dict.setdefault(key, value)
        return event_dict

    return add_app_context


def _build_renderer(settings: Settings) -> Processor:
    if settings.monitoring.log_format == "json":
        return JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=settings.debug)


def _build_handler(settings: Settings, level: int) -> logging.Handler:
    if settings.monitoring.log_file:
        handler: logging.Handler = logging.FileHandler(settings.monitoring.log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    return handler


def configure_logging(log_level: Optional[str] = None) -> None:
    """
    Configure structured logging for the application.

    Args:
        log_level: Override log level (DEBUG, INFO, WARNING, ERROR)
    """
    settings = get_settings()
    level = log_level or settings.monitoring.log_level
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    shared_processors: List[Processor] = [
        structlog.contextvars.merge_contextvars,
        _app_context(settings),
        structlog.stdlib.add_logger_name,
        add_log_level,
        TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    structlog.configure(
        processors=shared_processors + [ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = _build_handler(settings, numeric_level)
    handler.setFormatter(
        ProcessorFormatter(
            processor=_build_renderer(settings),
            foreign_pre_chain=shared_processors,
        )
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)

    structlog.get_logger(__name__).info(
        "Logging configured",
        level=level,
        format=settings.monitoring.log_format,
        log_file=settings.monitoring.log_file,
    )


@contextmanager
def report_log_context(**values: Any) -> Iterator[None]:
    """Bind report-scoped fields (window, tax rate) for the enclosed block"""
    with structlog.contextvars.bound_contextvars(**values):
        yield


def get_logger(name: str):
    """Get a logger instance with the given name."""
    return structlog.get_logger(name)
