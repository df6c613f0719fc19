"""Observability helpers for instrumenting engine operations."""

from __future__ import annotations

import logging
import time
from functools import wraps
from typing import Callable, ParamSpec, TypeVar

from decor_app.logging_config import ensure_correlation_id, get_logger, log_event

LOGGER = get_logger(__name__)
P = ParamSpec("P")
R = TypeVar("R")


def _result_size(result: object) -> int | None:
    if isinstance(result, (list, tuple, dict)):
        return len(result)
    return None


def instrument_operation(operation: str) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Wrap a callable to emit structured start, completion and failure logs."""

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            correlation_id = ensure_correlation_id()
            start = time.perf_counter()
            log_event(
                LOGGER,
                logging.DEBUG,
                "operation_started",
                operation=operation,
                correlation_id=correlation_id,
            )
            try:
                result = func(*args, **kwargs)
            except Exception:
                duration_ms = round((time.perf_counter() - start) * 1000, 2)
                log_event(
                    LOGGER,
                    logging.ERROR,
                    "operation_failed",
                    operation=operation,
                    correlation_id=correlation_id,
                    duration_ms=duration_ms,
                    exc_info=True,
                )
                raise
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            log_event(
                LOGGER,
                logging.INFO,
                "operation_completed",
                operation=operation,
                correlation_id=correlation_id,
                duration_ms=duration_ms,
                result_size=_result_size(result),
            )
            return result

        return wrapper

    return decorator


__all__ = ["instrument_operation"]
