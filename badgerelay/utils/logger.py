"""structlog setup for badgerelay.

Every log line emitted while a badge request is in flight carries the
``request_id`` bound by RequestIdMiddleware, through structlog's
contextvars integration. Upstream GitHub calls are timed with
log_duration().
"""

import logging
import sys
import time
from contextlib import contextmanager
from typing import Any, Iterator, Optional

import structlog
from structlog.types import Processor

# Upstream calls slower than this are logged at WARNING.
SLOW_OPERATION_MS: float = 1000.0

REQUEST_ID_KEY = "request_id"


def configure_logging(log_level: str = "INFO", json_output: bool = True) -> None:
    """Install the badgerelay processor chain.

    Args:
        log_level: Minimum level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_output: JSON lines when True, coloured console output otherwise.
    """
    renderer: Processor = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=True)
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = "badgerelay") -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_request_id(request_id: str) -> None:
    """Attach ``request_id`` to every log line in the current context."""
    structlog.contextvars.bind_contextvars(**{REQUEST_ID_KEY: request_id})


def unbind_request_id() -> None:
    structlog.contextvars.unbind_contextvars(REQUEST_ID_KEY)


@contextmanager
def log_duration(
    operation: str,
    logger: Optional[structlog.stdlib.BoundLogger] = None,
    slow_ms: float = SLOW_OPERATION_MS,
    **context: Any,
) -> Iterator[None]:
    """Time the enclosed block and log one line when it ends.

    Success is logged at DEBUG, or WARNING past ``slow_ms``. A raised
    exception is logged at ERROR and propagates unchanged.
    """
    log = logger or get_logger()
    started = time.perf_counter()
    try:
        yield
    except Exception as exc:
        log.error(
            f"{operation} failed",
            operation=operation,
            duration_ms=(time.perf_counter() - started) * 1000,
            error=str(exc),
            **context,
        )
        raise
    duration_ms = (time.perf_counter() - started) * 1000
    emit = log.warning if duration_ms > slow_ms else log.debug
    emit(f"{operation} completed", operation=operation, duration_ms=duration_ms, **context)
