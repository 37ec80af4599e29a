"""Pytest configuration and fixtures for the repository widget tests."""

from datetime import datetime, timezone
from typing import Any, Callable, Dict, List
from unittest.mock import AsyncMock

import pytest

from repo_showcase.models import (
    Repository,
    StarredListResponse,
    StarredStatusResponse,
    StarResult,
)
from repo_showcase.views.context import RepoContext


class ManualScheduler:
    """Scheduler whose clock only moves when a test advances it."""

    class Handle:
        def __init__(self, due: float, callback: Callable[[], None]):
            self.due = due
            self.callback = callback
            self.cancelled = False

        def cancel(self) -> None:
            self.cancelled = True

    def __init__(self):
        self.now = 0.0
        self.handles: List[ManualScheduler.Handle] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> "ManualScheduler.Handle":
        handle = self.Handle(self.now + delay, callback)
        self.handles.append(handle)
        return handle

    def advance(self, seconds: float) -> None:
        self.now = round(self.now + seconds, 6)
        due = sorted(
            (h for h in self.handles if not h.cancelled and h.due <= self.now + 1e-9),
            key=lambda h: h.due,
        )
        for handle in due:
            self.handles.remove(handle)
            handle.callback()

    @property
    def pending(self) -> int:
        return sum(1 for h in self.handles if not h.cancelled)


def _at(day: int) -> datetime:
    return datetime(2024, 1, day, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_repo() -> Callable[..., Repository]:
    """Factory for Repository records with sensible defaults."""
    counter = {"next_id": 1}

    def factory(name: str, **overrides: Any) -> Repository:
        repo_id = overrides.pop("id", counter["next_id"])
        counter["next_id"] += 1
        data: Dict[str, Any] = {
            "id": repo_id,
            "name": name,
            "owner": "octocat",
            "html_url": f"https://github.com/octocat/{name}",
            "stargazers_count": 0,
            "created_at": _at(1),
            "pushed_at": _at(1),
            "updated_at": _at(1),
        }
        data.update(overrides)
        return Repository(**data)

    return factory


@pytest.fixture
def sample_repos(make_repo) -> List[Repository]:
    """Four repositories with distinct dates, stars and languages."""
    return [
        make_repo(
            "alpha",
            language="Python",
            languages={"Python": 5000, "Shell": 200},
            stargazers_count=5,
            created_at=_at(1),
            pushed_at=_at(20),
            updated_at=_at(10),
        ),
        make_repo(
            "beta",
            language="TypeScript",
            languages={"TypeScript": 9000, "CSS": 300},
            stargazers_count=42,
            created_at=_at(5),
            pushed_at=_at(3),
            updated_at=_at(25),
        ),
        make_repo(
            "gamma",
            language="Go",
            languages={},
            stargazers_count=17,
            created_at=_at(9),
            pushed_at=_at(12),
            updated_at=_at(2),
        ),
        make_repo(
            "delta",
            language=None,
            languages={"Shell": 100},
            stargazers_count=0,
            created_at=_at(3),
            pushed_at=_at(7),
            updated_at=_at(4),
        ),
    ]


@pytest.fixture
def sample_repository_payload() -> Dict[str, Any]:
    """One item of GET /users/{user}/repos."""
    return {
        "id": 1296269,
        "name": "Hello-World",
        "full_name": "octocat/Hello-World",
        "owner": {"login": "octocat", "id": 1},
        "html_url": "https://github.com/octocat/Hello-World",
        "description": "This your first repo!",
        "language": "Python",
        "languages_url": "https://api.github.com/repos/octocat/Hello-World/languages",
        "stargazers_count": 80,
        "forks_count": 9,
        "open_issues_count": 0,
        "created_at": "2011-01-26T19:01:12Z",
        "pushed_at": "2011-01-26T19:06:43Z",
        "updated_at": "2011-01-26T19:14:43Z",
    }


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def star_store() -> AsyncMock:
    """Star store double; by default the visitor is signed in and has starred nothing."""
    store = AsyncMock()
    store.list_starred.return_value = StarredListResponse(authed=True, repos=[])
    store.is_starred.return_value = StarredStatusResponse(authed=True, starred=False)
    store.star.return_value = StarResult(status_code=200, ok=True, count=None)
    return store


@pytest.fixture
def repo_context(sample_repos, star_store) -> RepoContext:
    return RepoContext(sample_repos, star_store)


# Environment setup for tests
@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """Setup test environment variables."""
    monkeypatch.setenv("GITHUB_USERNAME", "octocat")
    monkeypatch.setenv("GITHUB_TOKEN", "test_token_123")
    monkeypatch.delenv("GITHUB_API_URL", raising=False)
    monkeypatch.delenv("SESSION_COOKIE_NAME", raising=False)
    monkeypatch.delenv("LOGIN_ROUTE", raising=False)
