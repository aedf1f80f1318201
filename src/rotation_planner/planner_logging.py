"""Structured logging for the rotation planner."""

import logging
import sys
import time
from functools import wraps
from typing import Any, Callable, Optional

import structlog
from structlog.stdlib import LoggerFactory

from .config import LogFormat, get_settings


def configure_logging(level: Optional[str] = None, log_format: Optional[LogFormat] = None) -> None:
    """Configure structlog on top of stdlib logging.

    Args:
        level: Override for the configured LOG_LEVEL
        log_format: Override for the configured LOG_FORMAT
    """
    settings = get_settings()
    level = (level or settings.LOG_LEVEL).upper()
    log_format = log_format or settings.LOG_FORMAT

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == LogFormat.JSON:
        processors.append(structlog.processors.JSONRenderer())
    elif log_format == LogFormat.STRUCTURED:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:  # text format
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        logger_factory=LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Logs go to stderr so JSON written by the CLI stays clean on stdout
    handlers = [logging.StreamHandler(sys.stderr)]
    if settings.LOG_FILE:
        settings.LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(settings.LOG_FILE)
        file_handler.setFormatter(logging.Formatter("%(message)s"))
        handlers.append(file_handler)

    logging.basicConfig(
        level=getattr(logging, level),
        handlers=handlers,
        format="%(message)s",
        force=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Until configure_logging runs, events are routed through stdlib logging so
    the caller's logging levels and handlers decide what is shown.
    """
    if not structlog.is_configured():
        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.dev.ConsoleRenderer(colors=False),
            ],
            logger_factory=LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
        )
    return structlog.get_logger(name)


def log_timing(operation: Optional[str] = None) -> Callable:
    """Decorator that logs how long a planning call took.

    Failures are logged and re-raised unchanged.
    """
    def decorator(func: Callable) -> Callable:
        op_name = operation or f"{func.__module__}.{func.__name__}"
        logger = get_logger(func.__module__)

        @wraps(func)
        def wrapper(*args, **kwargs):
            start_time = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.error(
                    f"Operation {op_name} failed",
                    error=str(e),
                    duration_ms=_elapsed_ms(start_time),
                    operation=op_name,
                )
                raise
            logger.debug(
                f"Operation {op_name} completed",
                duration_ms=_elapsed_ms(start_time),
                operation=op_name,
            )
            return result

        return wrapper

    return decorator


def _elapsed_ms(start_time: float) -> float:
    return round((time.perf_counter() - start_time) * 1000, 2)


def bind_plan_context(**context: Any) -> None:
    """Attach plan identifiers (game id, plan id) to every subsequent log line."""
    structlog.contextvars.bind_contextvars(**context)


def clear_plan_context() -> None:
    """Drop context bound with bind_plan_context."""
    structlog.contextvars.clear_contextvars()
