"""Tools listing the showcased repositories."""

import structlog
from fastmcp import Context

from ..common.error_handlers import handle_github_api_errors
from ..common.logging_helpers import log_function_call
from ..common.validators import validate_sort_key
from ..models import ALL_LANGUAGES, FilterCriteria, RepositoryListResponse
from ..shared import mcp
from ..utils.repo_fetcher import fetch_repos
from ..views.derived import language_options, repository_list_response

logger = structlog.get_logger(__name__)


@handle_github_api_errors("list repositories")
@log_function_call("list_repositories_impl")
async def _list_repositories_impl(
    ctx: Context, language: str = ALL_LANGUAGES, sort_by: str = "activity"
) -> RepositoryListResponse:
    """Internal implementation shared by the listing tool."""
    criteria = FilterCriteria(
        language=language or ALL_LANGUAGES,
        sort_by=validate_sort_key(sort_by),
    )
    repos = await fetch_repos()
    result = repository_list_response(repos, criteria)

    await ctx.info(f"Showing {result.total_count} of {len(repos)} repositories")
    return result


@handle_github_api_errors("list repository languages")
@log_function_call("list_repository_languages_impl")
async def _list_repository_languages_impl(ctx: Context) -> list[str]:
    repos = await fetch_repos()
    languages = language_options(repos)
    await ctx.info(f"Found {len(languages) - 1} languages")
    return languages


@mcp.tool
async def list_repositories(
    ctx: Context, language: str = ALL_LANGUAGES, sort_by: str = "activity"
) -> RepositoryListResponse:
    """List the showcased account's repositories.

    Args:
        language: Language to filter by, matched against each repository's
            language breakdown and primary language. "All" disables filtering.
        sort_by: One of "created", "stars", "activity" or "updated"; always descending.

    Returns:
        RepositoryListResponse with the visible repositories and language options.

    Raises:
        ValidationError: If sort_by is unknown
        FetchError: If GitHub refuses the repository listing
    """
    return await _list_repositories_impl(ctx, language, sort_by)


@mcp.tool
async def list_repository_languages(ctx: Context) -> list[str]:
    """List the primary languages of the showcased repositories, "All" first."""
    return await _list_repository_languages_impl(ctx)
