"""GitHub REST API client module."""

import asyncio
from typing import Any, Dict, List, Optional

import httpx
import structlog

from ..common.logging_helpers import log_api_request
from ..config import Settings, get_settings
from ..exceptions import AuthenticationError, FetchError, GitHubAPIError

# Configure structured logging
logger = structlog.get_logger(__name__)

PER_PAGE = 100


def _is_language_map(payload: Any) -> bool:
    # bool is an int subclass but never a byte count
    return isinstance(payload, dict) and all(
        isinstance(name, str) and isinstance(size, int) and not isinstance(size, bool)
        for name, size in payload.items()
    )


class GitHubClient:
    """Async GitHub REST API client.

    One instance wraps one credential: either the site owner's configured
    token, a visitor's session token, or none for anonymous access. No
    retries are attempted; a failed call surfaces immediately.
    """

    def __init__(self, token: Optional[str] = None, settings: Optional[Settings] = None):
        """Initialize GitHub client.

        Args:
            token: GitHub bearer token. Anonymous requests are made without one.
            settings: Settings to read the API URL, timeout and user agent from
        """
        self.settings = settings or get_settings()
        self.token = token
        self.base_url = self.settings.github_api_url
        self.headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": self.settings.user_agent,
        }
        if token:
            self.headers["Authorization"] = f"Bearer {token}"

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.settings.request_timeout)

    async def list_user_repositories(self, username: str) -> List[Dict[str, Any]]:
        """List a user's repositories, most recently updated first.

        Pages of 100 are requested until a short page comes back.

        Raises:
            FetchError: If any listing page returns a non-2xx status
        """
        url = f"{self.base_url}/users/{username}/repos"
        repos: List[Dict[str, Any]] = []
        page = 1

        async with self._client() as client:
            while True:
                log_api_request(url, page=page)
                response = await client.get(
                    url,
                    headers=self.headers,
                    params={"per_page": PER_PAGE, "sort": "updated", "page": page},
                )
                if not response.is_success:
                    logger.error(
                        "Repository listing failed",
                        username=username,
                        status_code=response.status_code,
                    )
                    raise FetchError(response.status_code, response.text)

                batch = response.json()
                repos.extend(batch)
                if len(batch) < PER_PAGE:
                    break
                page += 1

        logger.info("Repositories listed", username=username, count=len(repos))
        return repos

    async def get_languages(self, client: httpx.AsyncClient, languages_url: str, repo_name: str = "") -> Dict[str, int]:
        """Fetch one repository's language breakdown.

        Any failure degrades to an empty mapping.
        """
        try:
            response = await client.get(languages_url, headers=self.headers)
            if not response.is_success:
                logger.warning(
                    "Failed to fetch languages",
                    repo=repo_name,
                    status_code=response.status_code,
                )
                return {}
            languages = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Failed to fetch languages", repo=repo_name, error=str(e))
            return {}

        if not _is_language_map(languages):
            logger.warning("Unexpected languages payload", repo=repo_name)
            return {}
        return languages

    async def get_languages_batch(self, repos: List[Dict[str, Any]]) -> List[Dict[str, int]]:
        """Fetch language breakdowns for all repositories concurrently."""
        async with self._client() as client:
            return await asyncio.gather(
                *(
                    self.get_languages(client, repo.get("languages_url", ""), repo.get("name", ""))
                    for repo in repos
                )
            )

    async def list_starred(self) -> List[Dict[str, Any]]:
        """List repositories starred by the authenticated user.

        Raises:
            AuthenticationError: If no token is configured
            GitHubAPIError: If GitHub answers with a non-2xx status
            httpx.HTTPError: On transport failures
        """
        self._require_token()
        url = f"{self.base_url}/user/starred"
        log_api_request(url)

        async with self._client() as client:
            response = await client.get(url, headers=self.headers)

        if not response.is_success:
            logger.error("GitHub starred-list error", status_code=response.status_code)
            raise GitHubAPIError(
                f"HTTP {response.status_code}: {response.text}",
                status_code=response.status_code,
                response_text=response.text,
            )
        return response.json()

    async def is_starred(self, owner: str, repo: str) -> bool:
        """Check whether the authenticated user starred ``owner/repo``.

        GitHub answers 204 when starred and 404 when not.
        """
        self._require_token()
        url = f"{self.base_url}/user/starred/{owner}/{repo}"
        log_api_request(url, owner=owner, repo=repo)

        async with self._client() as client:
            response = await client.get(url, headers=self.headers)

        if response.status_code == 204:
            return True
        if response.status_code == 404:
            return False
        logger.error("GitHub starred check error", status_code=response.status_code)
        raise GitHubAPIError(
            f"HTTP {response.status_code}: {response.text}",
            status_code=response.status_code,
            response_text=response.text,
        )

    async def star_repository(self, owner: str, repo: str) -> Optional[int]:
        """Star ``owner/repo`` and return its new stargazer count.

        The count is read back from the repository; None when that read fails.
        """
        self._require_token()
        star_url = f"{self.base_url}/user/starred/{owner}/{repo}"
        repo_url = f"{self.base_url}/repos/{owner}/{repo}"
        log_api_request(star_url, method="PUT", owner=owner, repo=repo)

        async with self._client() as client:
            response = await client.put(
                star_url, headers={**self.headers, "Content-Length": "0"}
            )
            if response.status_code == 401:
                raise AuthenticationError("GitHub rejected the session token", status_code=401)
            if not response.is_success:
                logger.error("GitHub star error", status_code=response.status_code)
                raise GitHubAPIError(
                    f"HTTP {response.status_code}: {response.text}",
                    status_code=response.status_code,
                    response_text=response.text,
                )

            log_api_request(repo_url, owner=owner, repo=repo)
            repo_response = await client.get(repo_url, headers=self.headers)

        try:
            details = repo_response.json() if repo_response.is_success else None
        except ValueError:
            details = None
        if not isinstance(details, dict):
            logger.warning("Could not read stargazer count", owner=owner, repo=repo)
            return None
        count = details.get("stargazers_count")
        return count if isinstance(count, int) else None

    def _require_token(self) -> None:
        if not self.token:
            raise AuthenticationError("No session credential", status_code=401)
