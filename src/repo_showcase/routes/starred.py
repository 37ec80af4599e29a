"""HTTP proxy routes for the visitor's starred repositories.

Each route reads the visitor's GitHub token from the session cookie and
forwards it as a bearer token. Nothing here raises to the visitor: missing
credentials, upstream errors and network failures all come back as a
neutral JSON payload with a matching status code.
"""

import httpx
import structlog
from starlette.requests import Request
from starlette.responses import JSONResponse

from ..common.error_handlers import neutral_error_payload
from ..common.validators import validate_github_username, validate_repo_name
from ..config import get_settings
from ..exceptions import AuthenticationError, GitHubAPIError, ValidationError
from ..models import StarredListResponse, StarredStatusResponse, StarResponse
from ..shared import mcp
from ..utils.github_client import GitHubClient

logger = structlog.get_logger(__name__)


def _session_token(request: Request) -> str | None:
    return request.cookies.get(get_settings().session_cookie_name) or None


def _json(model, status_code: int = 200) -> JSONResponse:
    return JSONResponse(model.model_dump(exclude_none=True), status_code=status_code)


@mcp.custom_route("/api/github/starred-list", methods=["GET"])
async def starred_list(request: Request) -> JSONResponse:
    """List the repositories the visitor has starred."""
    token = _session_token(request)
    if not token:
        return _json(StarredListResponse(authed=False), status_code=401)

    try:
        repos = await GitHubClient(token).list_starred()
        # a malformed listing fails model validation, which is a ValueError
        payload = StarredListResponse(authed=True, repos=repos)
    except GitHubAPIError as e:
        return _json(StarredListResponse(authed=False), status_code=e.status_code or 500)
    except (httpx.HTTPError, ValueError) as e:
        return _json(StarredListResponse(authed=False, **neutral_error_payload(e)), status_code=500)

    return _json(payload)


@mcp.custom_route("/api/github/starred", methods=["GET"])
async def starred_status(request: Request) -> JSONResponse:
    """Tell whether the visitor starred ``?owner=&repo=``."""
    token = _session_token(request)
    if not token:
        return _json(StarredStatusResponse(authed=False), status_code=401)

    try:
        owner = validate_github_username(request.query_params.get("owner"))
        repo = validate_repo_name(request.query_params.get("repo"))
    except ValidationError as e:
        return _json(StarredStatusResponse(authed=True, error=e.message), status_code=400)

    try:
        starred = await GitHubClient(token).is_starred(owner, repo)
    except GitHubAPIError as e:
        status_code = e.status_code or 500
        return _json(StarredStatusResponse(authed=status_code != 401), status_code=status_code)
    except httpx.HTTPError as e:
        return _json(StarredStatusResponse(authed=False, **neutral_error_payload(e)), status_code=500)

    return _json(StarredStatusResponse(authed=True, starred=starred))


@mcp.custom_route("/api/github/star", methods=["POST"])
async def star(request: Request) -> JSONResponse:
    """Star ``{owner, repo}`` for the visitor and echo the new count."""
    token = _session_token(request)
    if not token:
        return _json(StarResponse(ok=False), status_code=401)

    try:
        body = await request.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        return _json(StarResponse(ok=False, error="Expected a JSON object"), status_code=400)

    try:
        owner = validate_github_username(body.get("owner"))
        repo = validate_repo_name(body.get("repo"))
    except ValidationError as e:
        return _json(StarResponse(ok=False, error=e.message), status_code=400)

    try:
        count = await GitHubClient(token).star_repository(owner, repo)
    except AuthenticationError:
        return _json(StarResponse(ok=False), status_code=401)
    except GitHubAPIError as e:
        return _json(StarResponse(ok=False), status_code=e.status_code or 500)
    except httpx.HTTPError as e:
        return _json(StarResponse(ok=False, **neutral_error_payload(e)), status_code=500)

    logger.info("Repository starred", owner=owner, repo=repo, count=count)
    return _json(StarResponse(ok=True, count=count))
