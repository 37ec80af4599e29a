"""Custom exception classes for the repository widget."""

from typing import Any


class RepoShowcaseError(Exception):
    """Base exception class for the repository widget."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def __str__(self) -> str:
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message


class GitHubAPIError(RepoShowcaseError):
    """Base exception class for GitHub API related errors."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
        status_code: int | None = None,
        response_text: str | None = None,
    ) -> None:
        super().__init__(message, error_code, details)
        self.status_code = status_code
        self.response_text = response_text or ""


class FetchError(GitHubAPIError):
    """Raised when the primary repository listing call fails."""

    def __init__(self, status_code: int, response_text: str, **kwargs) -> None:
        super().__init__(
            f"GitHub API error {status_code}: {response_text}",
            error_code="FETCH_FAILED",
            status_code=status_code,
            response_text=response_text,
            **kwargs,
        )


class AuthenticationError(GitHubAPIError):
    """Exception raised when a session credential is missing or rejected."""

    def __init__(
        self, message: str = "GitHub API authentication failed", **kwargs
    ) -> None:
        super().__init__(message, error_code="AUTHENTICATION_FAILED", **kwargs)


class ValidationError(RepoShowcaseError):
    """Exception raised when data validation fails."""

    def __init__(
        self, message: str, field_errors: dict[str, str] | None = None, **kwargs
    ) -> None:
        super().__init__(message, error_code="VALIDATION_ERROR", **kwargs)
        self.field_errors = field_errors or {}


class ConfigurationError(RepoShowcaseError):
    """Exception raised when there are configuration issues."""

    def __init__(self, message: str = "Configuration error", **kwargs) -> None:
        super().__init__(message, error_code="CONFIGURATION_ERROR", **kwargs)
