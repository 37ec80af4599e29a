"""Repository list view: filter/sort selection and the hover preview."""

from typing import Optional

import structlog

from ..models import FilterCriteria, Rect, Repository, SortKey
from .context import RepoContext
from .derived import compute_hover_placement, language_options, visible_repositories
from .timers import Scheduler, TimerHandle

logger = structlog.get_logger(__name__)

# Quiet window after the last scroll event before previews come back
SCROLL_QUIET_SECONDS = 0.150


class RepoListView:
    """State of the scrollable repository grid.

    The visible list is cached against the exact repository tuple and
    criteria it was built from and rebuilt from scratch when either changes.
    At most one repository is hovered at a time; hovering ends on pointer
    leave, on any scroll and on viewport resize.
    """

    def __init__(self, context: RepoContext, scheduler: Scheduler):
        self.context = context
        self.scheduler = scheduler
        self.criteria = FilterCriteria()
        self.hovered_repo: Optional[Repository] = None
        self.hover_rect: Optional[Rect] = None
        self.scrolling = False
        self._scroll_timer: Optional[TimerHandle] = None
        self._cache_key: Optional[tuple] = None
        self._visible: list[Repository] = []
        self._languages_key: Optional[tuple] = None
        self._languages: list[str] = []

    # -- filters and sorting ------------------------------------------------

    def set_language(self, language: str) -> None:
        self.criteria = self.criteria.model_copy(update={"language": language})

    def set_sort(self, sort_by: SortKey | str) -> None:
        self.criteria = self.criteria.model_copy(update={"sort_by": SortKey(sort_by)})

    @property
    def visible_repositories(self) -> list[Repository]:
        repos = self.context.repos
        key = (repos, self.criteria)
        if self._cache_key is None or self._cache_key[0] is not repos or self._cache_key[1] != self.criteria:
            self._visible = visible_repositories(repos, self.criteria)
            self._cache_key = key
            logger.debug(
                "Visible list recomputed",
                language=self.criteria.language,
                sort_by=self.criteria.sort_by.value,
                count=len(self._visible),
            )
        return list(self._visible)

    @property
    def languages(self) -> list[str]:
        repos = self.context.repos
        if self._languages_key is None or self._languages_key[0] is not repos:
            self._languages = language_options(repos)
            self._languages_key = (repos,)
        return list(self._languages)

    # -- hover preview ------------------------------------------------------

    def mouse_enter(self, repo: Repository, element: Rect, container: Optional[Rect]) -> None:
        self.hovered_repo = repo
        self.hover_rect = None
        if container is None:
            return
        self.hover_rect = compute_hover_placement(element, container)

    def mouse_leave(self) -> None:
        self._clear_hover()

    def resize(self) -> None:
        self._clear_hover()

    def _clear_hover(self) -> None:
        self.hovered_repo = None
        self.hover_rect = None

    def scroll(self) -> None:
        self.scrolling = True
        if self._scroll_timer is not None:
            self._scroll_timer.cancel()
        self._clear_hover()
        self._scroll_timer = self.scheduler.call_later(SCROLL_QUIET_SECONDS, self._scroll_settled)

    def _scroll_settled(self) -> None:
        self._scroll_timer = None
        self.scrolling = False

    @property
    def preview(self) -> Optional[tuple[Repository, Rect]]:
        """Hovered repository and where to draw its preview, if one should show."""
        if self.scrolling or self.hovered_repo is None or self.hover_rect is None:
            return None
        return self.hovered_repo, self.hover_rect

    def close(self) -> None:
        if self._scroll_timer is not None:
            self._scroll_timer.cancel()
            self._scroll_timer = None
