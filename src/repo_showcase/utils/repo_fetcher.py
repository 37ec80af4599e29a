"""Repository fetching and normalization."""

from typing import Any, Dict, List, Optional

import structlog

from ..common.logging_helpers import log_function_call
from ..config import get_settings
from ..exceptions import ConfigurationError
from ..models import Repository
from .github_client import GitHubClient

logger = structlog.get_logger(__name__)


def _parse_repository_data(raw: Dict[str, Any], languages: Dict[str, int]) -> Repository:
    """Map a REST repository payload onto a Repository record.

    Args:
        raw: One item of ``GET /users/{user}/repos``
        languages: Language breakdown fetched for that repository

    Returns:
        Repository object
    """
    owner = raw.get("owner") or {}
    return Repository(
        id=raw["id"],
        name=raw["name"],
        html_url=raw.get("html_url", ""),
        description=raw.get("description"),
        stargazers_count=raw.get("stargazers_count") or 0,
        language=raw.get("language"),
        languages=languages or {},
        forks_count=raw.get("forks_count") or 0,
        open_issues_count=raw.get("open_issues_count") or 0,
        owner=owner.get("login") or "",
        created_at=raw.get("created_at"),
        pushed_at=raw.get("pushed_at"),
        updated_at=raw.get("updated_at"),
    )


@log_function_call("fetch_repos")
async def fetch_repos(username: Optional[str] = None, token: Optional[str] = None) -> List[Repository]:
    """Fetch and normalize the showcased account's repositories.

    Account and credential come from the environment at call time when not
    passed; without a token the listing is anonymous and public-only.

    Raises:
        ConfigurationError: If no account is configured
        FetchError: If the repository listing fails
    """
    settings = get_settings()
    username = username or settings.github_username
    token = token or settings.github_token
    if not username:
        raise ConfigurationError("GITHUB_USERNAME is not configured")

    client = GitHubClient(token, settings=settings)
    raw_repos = await client.list_user_repositories(username)
    language_maps = await client.get_languages_batch(raw_repos)

    repos = [
        _parse_repository_data(raw, languages)
        for raw, languages in zip(raw_repos, language_maps)
    ]
    logger.info("Repositories fetched", username=username, count=len(repos), authenticated=bool(token))
    return repos
