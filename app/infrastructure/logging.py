"""
Centralized logging configuration for the E.Q.U.I.P. 360 application.

Emits JSON records carrying request, user and assessment context so a
single assessment can be followed from first answer to saved result.
"""

from __future__ import annotations

import json
import logging
import logging.config
import os
import time
from collections.abc import Callable
from contextvars import ContextVar
from datetime import datetime, timezone
from functools import wraps
from pathlib import Path
from types import TracebackType
from typing import TYPE_CHECKING, Any, ParamSpec, TypeVar

if TYPE_CHECKING:
    from .config import LoggingConfig

P = ParamSpec("P")
R = TypeVar("R")


CONTEXT_FIELDS = (
    "user_id",
    "session_id",
    "assessment_id",
    "organization_id",
    "request_id",
    "operation",
)

_context: ContextVar[dict[str, Any]] = ContextVar("equip360_log_context", default={})


def current_context() -> dict[str, Any]:
    return dict(_context.get())


class StructuredFormatter(logging.Formatter):
    """One JSON object per record, including any assessment context fields."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        entry.update({k: getattr(record, k) for k in CONTEXT_FIELDS if hasattr(record, k)})

        if record.exc_info and record.exc_info[1] is not None:
            exc_type, exc_value, _ = record.exc_info
            entry["exception"] = {
                "type": exc_type.__name__ if exc_type else None,
                "message": str(exc_value),
                "traceback": self.formatException(record.exc_info),
            }
        return json.dumps(entry, ensure_ascii=False, default=str)


class ContextFilter(logging.Filter):
    """Copies the active LogContext fields onto every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in _context.get().items():
            setattr(record, key, value)
        return True


context_filter = ContextFilter()


def setup_logging(
    level: str = "INFO",
    log_file: str | None = None,
    structured: bool = True,
    enable_console: bool = True,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
) -> None:
    """
    Configure the ``app`` logger tree via dictConfig.

    Example:
        >>> setup_logging(level="DEBUG", log_file="./logs/equip360.log")
    """
    handlers: dict[str, dict[str, Any]] = {}
    if enable_console:
        handlers["console"] = {
            "class": "logging.StreamHandler",
            "level": level,
            "formatter": "structured" if structured else "standard",
            "filters": ["context"],
            "stream": "ext://sys.stdout",
        }
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": level,
            "formatter": "structured",
            "filters": ["context"],
            "filename": log_file,
            "maxBytes": max_bytes,
            "backupCount": backup_count,
            "encoding": "utf-8",
        }

    names = list(handlers)
    # sqlalchemy.engine and uvicorn.access are noisy below WARNING
    quiet = {"level": "WARNING", "handlers": names, "propagate": False}
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "structured": {"()": StructuredFormatter},
                "standard": {
                    "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
            },
            "filters": {"context": {"()": lambda: context_filter}},
            "handlers": handlers,
            "loggers": {
                "app": {"level": level, "handlers": names, "propagate": False},
                "sqlalchemy.engine": dict(quiet),
                "uvicorn.access": dict(quiet),
            },
            "root": {"level": level, "handlers": names},
        }
    )


def get_logger(name: str) -> logging.Logger:
    """
    Logger under the ``app.`` namespace.

    Example:
        >>> get_logger("scoring").name
        'app.scoring'
    """
    full = name if name.startswith("app.") or name == "app" else f"app.{name}"
    return logging.getLogger(full)


class LogContext:
    """Adds fields to every record logged inside the ``with`` block."""

    def __init__(self, **kwargs: Any):
        self.fields = kwargs
        self._token = None

    def __enter__(self) -> LogContext:
        self._token = _context.set({**_context.get(), **self.fields})
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._token is not None:
            _context.reset(self._token)


def _logged(
    label: str, operation: str, resolve_logger: Callable[[Callable[..., Any]], logging.Logger]
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            logger = resolve_logger(func)
            with LogContext(operation=label):
                logger.info("Starting %s", operation)
                started = time.perf_counter()
                try:
                    result = func(*args, **kwargs)
                except Exception as e:
                    logger.error(
                        "Failed %s after %.3fs: %s",
                        operation,
                        time.perf_counter() - started,
                        e,
                        exc_info=True,
                    )
                    raise
                logger.info("Completed %s in %.3fs", operation, time.perf_counter() - started)
                return result

        return wrapper

    return decorator


def log_operation(
    operation: str, logger: logging.Logger | None = None
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """
    Log start, completion and failure of an application operation.

    Example:
        >>> @log_operation("save_assessment")
        ... def save_assessment(result):
        ...     pass
    """
    return _logged(operation, operation, lambda func: logger or get_logger(func.__module__))


def log_database_operation(operation: str) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Like :func:`log_operation`, on the ``app.database`` logger."""
    return _logged(
        f"db_{operation}", f"database operation {operation}", lambda func: get_logger("database")
    )


def configure_logging_from_settings(config: LoggingConfig) -> None:
    """Apply a LoggingConfig section, e.g. at server start-up."""
    setup_logging(
        level=config.level,
        log_file=config.file_path,
        structured=config.structured,
        enable_console=config.console_enabled,
        max_bytes=config.max_bytes,
        backup_count=config.backup_count,
    )


ENVIRONMENT_PROFILES: dict[str, dict[str, Any]] = {
    "production": {
        "level": "INFO",
        "log_file": "./logs/production.log",
        "structured": True,
        "enable_console": False,
    },
    "test": {"level": "WARNING", "log_file": None, "structured": False, "enable_console": False},
    "development": {
        "level": "DEBUG",
        "log_file": "./logs/development.log",
        "structured": False,
        "enable_console": True,
    },
}


def auto_configure_logging() -> str:
    """Configure logging from ``ENVIRONMENT``; unknown values use the development profile."""
    env = os.getenv("ENVIRONMENT", "development").lower()
    setup_logging(**ENVIRONMENT_PROFILES.get(env, ENVIRONMENT_PROFILES["development"]))
    get_logger(__name__).info("Logging configured for %s environment", env)
    return env


if not logging.getLogger().handlers:
    auto_configure_logging()
