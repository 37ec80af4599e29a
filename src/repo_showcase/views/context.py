"""Shared repository context handed to the list and card views."""

from collections.abc import Mapping, Sequence
from types import MappingProxyType
from typing import Optional, Protocol

import structlog

from ..models import Repository, StarredListResponse, StarredStatusResponse, StarResult

logger = structlog.get_logger(__name__)


class StarStore(Protocol):
    async def list_starred(self) -> StarredListResponse: ...

    async def is_starred(self, owner: str, repo: str) -> StarredStatusResponse: ...

    async def star(self, owner: str, repo: str) -> StarResult: ...


class RepoContext:
    """Repository list plus the visitor's star state.

    The repository list is fixed at construction. ``starred`` and ``counts``
    are read-only snapshots; every change swaps in a new one instead of
    editing the current one, so views holding an old snapshot never see it
    change underneath them.
    """

    def __init__(self, repos: Sequence[Repository], star_store: StarStore):
        self._repos = tuple(repos)
        self.star_store = star_store
        self._starred: frozenset[str] = frozenset()
        self._counts: Mapping[str, int] = MappingProxyType(
            {repo.name: repo.stargazers_count for repo in self._repos}
        )
        self.is_loaded = False

    @property
    def repos(self) -> tuple[Repository, ...]:
        return self._repos

    @property
    def starred(self) -> frozenset[str]:
        return self._starred

    @property
    def counts(self) -> Mapping[str, int]:
        return self._counts

    def is_starred(self, name: str) -> bool:
        return name in self._starred

    def count_for(self, repo: Repository) -> int:
        return self._counts.get(repo.name, repo.stargazers_count)

    async def mount(self) -> None:
        await self.refresh_stars()

    async def refresh_stars(self) -> None:
        """Re-read the visitor's starred repositories.

        A successful authenticated answer replaces the whole starred set;
        anything else leaves it as it was. ``is_loaded`` only records that an
        attempt finished.
        """
        try:
            data = await self.star_store.list_starred()
            if data.authed and isinstance(data.repos, list):
                self._starred = frozenset(
                    repo["name"] for repo in data.repos if isinstance(repo, dict) and repo.get("name")
                )
                logger.info("Starred repositories refreshed", count=len(self._starred))
            else:
                logger.info("Starred repositories unavailable", authed=data.authed)
        except Exception as e:
            logger.error("refresh_stars failed", error=str(e), error_type=type(e).__name__)
        finally:
            self.is_loaded = True

    def record_star(self, name: str, count: Optional[int] = None) -> None:
        """Mark ``name`` starred, taking the server-echoed count when there is one."""
        self._starred = self._starred | {name}
        if isinstance(count, int):
            self._counts = MappingProxyType({**self._counts, name: count})
