"""Common error handling utilities."""

from collections.abc import Callable
from functools import wraps
from typing import TypeVar

import structlog

from ..exceptions import GitHubAPIError, RepoShowcaseError

logger = structlog.get_logger(__name__)

T = TypeVar('T')


def handle_github_api_errors(operation_name: str):
    """Decorator that converts unexpected errors into GitHubAPIError.

    Errors from this package's own hierarchy pass through untouched.

    Args:
        operation_name: Name of the operation for logging
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        async def wrapper(*args, **kwargs) -> T:
            try:
                return await func(*args, **kwargs)
            except RepoShowcaseError:
                raise
            except Exception as e:
                logger.error(
                    f"Unexpected error in {operation_name}",
                    error=str(e),
                    error_type=type(e).__name__
                )
                raise GitHubAPIError(
                    f"Failed to {operation_name}: {str(e)}"
                ) from e
        return wrapper
    return decorator


def neutral_error_payload(error: Exception) -> dict:
    """Log a transport failure and return the error text for a neutral payload."""
    message = str(error) or "Network error"
    logger.error(
        "GitHub API error",
        error=message,
        error_type=type(error).__name__,
    )
    return {"error": message}
