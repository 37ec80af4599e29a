"""Configuration management module.

This module handles all configuration settings for the repository widget,
including the GitHub account being showcased, the optional personal access
token, the session cookie carrying a visitor's token and HTTP serving options.
"""

from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings configuration.

    Settings can be loaded from environment variables or .env file.

    Attributes:
        github_username: Account whose repositories are displayed
        github_token: Optional personal access token; absent means anonymous access
        github_api_url: Base URL of the GitHub REST API
        session_cookie_name: Cookie holding a visitor's GitHub bearer token
        login_route: Route the page navigates to when a star needs a login
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    github_username: Optional[str] = None
    github_token: Optional[str] = None
    github_api_url: str = "https://api.github.com"
    session_cookie_name: str = "gh_token"
    login_route: str = "/api/github/login"
    user_agent: str = "repo-showcase/0.1"
    request_timeout: float = 30.0
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8000

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        normalized = v.upper()
        if normalized not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return normalized

    @field_validator('github_api_url')
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    class Config:
        """Pydantic configuration."""
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


def get_settings() -> Settings:
    """Read settings from the environment as they are right now."""
    return Settings()


# Global settings instance
settings = get_settings()
