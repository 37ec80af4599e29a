"""Pure derivations behind the repository list view.

Everything here is a function of its arguments only: the same repositories,
criteria and geometry always give the same result.
"""

from collections.abc import Iterable
from datetime import datetime

from ..models import (
    ALL_LANGUAGES,
    FilterCriteria,
    Rect,
    Repository,
    RepositoryListResponse,
    SortKey,
)

# Pixel offsets applied when the hovered card sticks out of the container
TOP_CLAMP_OFFSET = 10
BOTTOM_CLAMP_OFFSET = 20


def _timestamp(value: datetime | None) -> float:
    # Missing timestamps sort after every real one
    return value.timestamp() if value is not None else float("-inf")


_SORT_KEYS = {
    SortKey.CREATED: lambda repo: _timestamp(repo.created_at),
    SortKey.STARS: lambda repo: repo.stargazers_count or 0,
    SortKey.ACTIVITY: lambda repo: _timestamp(repo.pushed_at),
    SortKey.UPDATED: lambda repo: _timestamp(repo.updated_at),
}


def matches_language(repo: Repository, language: str) -> bool:
    """True if ``language`` is in the repository's breakdown or is its primary language."""
    if language == ALL_LANGUAGES:
        return True
    return language in (repo.languages or {}) or repo.language == language


def visible_repositories(repos: Iterable[Repository], criteria: FilterCriteria) -> list[Repository]:
    """Filter by language, then sort descending by the selected key.

    The sort is stable, so ties keep their input order.
    """
    candidates = [repo for repo in repos if matches_language(repo, criteria.language)]
    return sorted(candidates, key=_SORT_KEYS[SortKey(criteria.sort_by)], reverse=True)


def language_options(repos: Iterable[Repository]) -> list[str]:
    """Distinct primary languages, alphabetized, with the 'All' sentinel first."""
    distinct = {repo.language for repo in repos if repo.language}
    return [ALL_LANGUAGES, *sorted(distinct, key=lambda name: (name.casefold(), name))]


def compute_hover_placement(element: Rect, container: Rect) -> Rect:
    """Place the preview card over the hovered element, kept inside the container.

    A card poking above the container is pulled down to just below its top;
    a card poking below is pulled up so it ends just past the container's
    bottom. The bottom rule wins when both apply.
    """
    top = element.top
    if element.top < container.top:
        top = container.top + TOP_CLAMP_OFFSET
    if element.bottom > container.bottom:
        top = container.bottom + BOTTOM_CLAMP_OFFSET - element.height

    return Rect(top=top, left=element.left, width=element.width, height=element.height)


def repository_list_response(repos: Iterable[Repository], criteria: FilterCriteria) -> RepositoryListResponse:
    """Visible list and language options bundled for the feed route and tools."""
    repos = list(repos)
    visible = visible_repositories(repos, criteria)
    return RepositoryListResponse(
        repositories=visible,
        total_count=len(visible),
        language=criteria.language,
        sort_by=criteria.sort_by,
        languages=language_options(repos),
    )
