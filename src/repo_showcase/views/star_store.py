"""Client for the star proxy routes, as used by the views."""

from typing import Optional

import httpx
import structlog

from ..config import get_settings
from ..models import StarredListResponse, StarredStatusResponse, StarResult

logger = structlog.get_logger(__name__)

STARRED_LIST_PATH = "/api/github/starred-list"
STARRED_PATH = "/api/github/starred"
STAR_PATH = "/api/github/star"


class StarStoreClient:
    """Reads and toggles starred state through the site's own proxy routes.

    The visitor's session cookie is forwarded on every request. Transport
    failures never escape: they come back as an unauthenticated or failed
    result so the caller keeps its current state.
    """

    def __init__(self, base_url: str, session_token: Optional[str] = None, timeout: Optional[float] = None):
        settings = get_settings()
        self.base_url = base_url.rstrip("/")
        self.cookies = {settings.session_cookie_name: session_token} if session_token else {}
        self.timeout = timeout or settings.request_timeout

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.base_url, cookies=self.cookies, timeout=self.timeout)

    async def list_starred(self) -> StarredListResponse:
        try:
            async with self._client() as client:
                response = await client.get(STARRED_LIST_PATH)
            return StarredListResponse.model_validate(response.json())
        except (httpx.HTTPError, ValueError) as e:
            logger.error("refresh_stars failed", error=str(e))
            return StarredListResponse(authed=False, error=str(e))

    async def is_starred(self, owner: str, repo: str) -> StarredStatusResponse:
        try:
            async with self._client() as client:
                response = await client.get(STARRED_PATH, params={"owner": owner, "repo": repo})
            return StarredStatusResponse.model_validate(response.json())
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Starred check failed", owner=owner, repo=repo, error=str(e))
            return StarredStatusResponse(authed=False, error=str(e))

    async def star(self, owner: str, repo: str) -> StarResult:
        try:
            async with self._client() as client:
                response = await client.post(STAR_PATH, json={"owner": owner, "repo": repo})
        except httpx.HTTPError as e:
            logger.warning("Star request failed", owner=owner, repo=repo, error=str(e))
            return StarResult(status_code=0)

        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}
        count = data.get("count")
        return StarResult(
            status_code=response.status_code,
            ok=bool(data.get("ok")),
            count=count if isinstance(count, int) else None,
        )
