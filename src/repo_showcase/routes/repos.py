"""Repository feed route used to render the widget."""

import httpx
import structlog
from starlette.requests import Request
from starlette.responses import JSONResponse

from ..common.error_handlers import neutral_error_payload
from ..common.validators import validate_sort_key
from ..exceptions import ConfigurationError, FetchError, ValidationError
from ..models import ALL_LANGUAGES, FilterCriteria
from ..shared import mcp
from ..utils.repo_fetcher import fetch_repos
from ..views.derived import repository_list_response

logger = structlog.get_logger(__name__)


@mcp.custom_route("/api/github/repos", methods=["GET"])
async def repositories(request: Request) -> JSONResponse:
    """Visible repositories for ``?language=&sort=`` plus the language options."""
    try:
        criteria = FilterCriteria(
            language=request.query_params.get("language") or ALL_LANGUAGES,
            sort_by=validate_sort_key(request.query_params.get("sort")),
        )
    except ValidationError as e:
        return JSONResponse({"error": e.message}, status_code=400)

    try:
        repos = await fetch_repos()
    except FetchError as e:
        logger.error("Repository feed unavailable", status_code=e.status_code)
        return JSONResponse({"error": str(e)}, status_code=502)
    except ConfigurationError as e:
        return JSONResponse({"error": e.message}, status_code=500)
    except httpx.HTTPError as e:
        return JSONResponse(neutral_error_payload(e), status_code=500)

    return JSONResponse(repository_list_response(repos, criteria).model_dump(mode="json"))
