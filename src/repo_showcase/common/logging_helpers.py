"""Common logging utilities."""

import asyncio
import time
from functools import wraps

import structlog

logger = structlog.get_logger(__name__)


def _start(name: str, log_args: bool, args, kwargs) -> float:
    log_data = {"operation": name}
    if log_args:
        log_data["args"] = args
        log_data["kwargs"] = kwargs
    logger.info(f"Starting {name}", **log_data)
    return time.time()


def _completed(name: str, started: float, log_result: bool, result) -> None:
    result_log_data = {
        "operation": name,
        "duration_seconds": round(time.time() - started, 3),
        "status": "success",
    }
    if log_result:
        result_log_data["result"] = result
    logger.info(f"Completed {name}", **result_log_data)


def _failed(name: str, started: float, error: Exception) -> None:
    logger.error(
        f"Failed {name}",
        operation=name,
        duration_seconds=round(time.time() - started, 3),
        status="error",
        error=str(error),
        error_type=type(error).__name__,
    )


def log_function_call(operation_name: str | None = None, log_args: bool = False, log_result: bool = False):
    """Decorator to log function calls with timing information.

    Works on both coroutine functions and plain functions.

    Args:
        operation_name: Custom name for the operation (defaults to function name)
        log_args: Whether to log function arguments
        log_result: Whether to log function result
    """
    def decorator(func):
        name = operation_name or func.__name__

        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            started = _start(name, log_args, args, kwargs)
            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                _failed(name, started, e)
                raise
            _completed(name, started, log_result, result)
            return result

        @wraps(func)
        def sync_wrapper(*args, **kwargs):
            started = _start(name, log_args, args, kwargs)
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                _failed(name, started, e)
                raise
            _completed(name, started, log_result, result)
            return result

        if asyncio.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator


def log_api_request(endpoint: str, method: str = "GET", **context):
    """Log an upstream API request with consistent format.

    Args:
        endpoint: API endpoint being called
        method: HTTP method
        **context: Additional context to log
    """
    logger.info(
        "API request",
        endpoint=endpoint,
        method=method,
        **context
    )
