"""Data models for the repository widget."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

ALL_LANGUAGES = "All"


class SortKey(str, Enum):
    """Field the visible list is ordered by, always descending."""

    CREATED = "created"
    STARS = "stars"
    ACTIVITY = "activity"
    UPDATED = "updated"


class Repository(BaseModel):
    """Normalized GitHub repository record, immutable once fetched."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: int = Field(description="Repository ID")
    name: str = Field(description="Repository name, unique within the owner")
    owner: str = Field(default="", description="Owner login")
    html_url: str = Field(description="Repository web URL")
    description: str | None = Field(default=None, description="Repository description")
    language: str | None = Field(default=None, description="Primary programming language")
    languages: dict[str, int] = Field(
        default_factory=dict, description="Language name to byte count"
    )
    stargazers_count: int = Field(default=0, ge=0, description="Number of stars")
    forks_count: int = Field(default=0, description="Number of forks")
    open_issues_count: int = Field(default=0, description="Number of open issues")
    created_at: datetime | None = Field(default=None, description="Creation time")
    pushed_at: datetime | None = Field(default=None, description="Last push time")
    updated_at: datetime | None = Field(default=None, description="Last update time")


class FilterCriteria(BaseModel):
    """Language filter and sort key selected in the list view."""

    model_config = ConfigDict(frozen=True)

    language: str = Field(default=ALL_LANGUAGES, description="Language or the 'All' sentinel")
    sort_by: SortKey = Field(default=SortKey.ACTIVITY, description="Descending sort key")


class Rect(BaseModel):
    """Viewport rectangle in pixels."""

    model_config = ConfigDict(frozen=True)

    top: float = 0
    left: float = 0
    width: float = 0
    height: float = 0

    @property
    def bottom(self) -> float:
        return self.top + self.height


class StarredListResponse(BaseModel):
    """Payload of the starred-list proxy route."""

    authed: bool
    repos: list[dict[str, Any]] = Field(default_factory=list)
    error: str | None = None


class StarredStatusResponse(BaseModel):
    """Payload of the single-repository starred check."""

    authed: bool
    starred: bool = False
    error: str | None = None


class StarResponse(BaseModel):
    """Payload of the star proxy route."""

    ok: bool
    count: int | None = None
    error: str | None = None


class StarResult(BaseModel):
    """Outcome of a star request as seen by a card."""

    status_code: int = Field(description="HTTP status, 0 when the request never completed")
    ok: bool = False
    count: int | None = None


class RepositoryListResponse(BaseModel):
    """Visible repositories for a language filter and sort key."""

    repositories: list[Repository] = Field(description="Filtered and sorted repositories")
    total_count: int = Field(description="Number of visible repositories")
    language: str = Field(default=ALL_LANGUAGES, description="Applied language filter")
    sort_by: SortKey = Field(default=SortKey.ACTIVITY, description="Applied sort key")
    languages: list[str] = Field(
        default_factory=list, description="Language options, 'All' first"
    )
