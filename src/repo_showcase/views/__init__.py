"""View state for the repository widget.

These classes hold what a front end renders: the shared repository
context, the filtered/sorted list with its hover preview and the per-card
star toggle.
"""

from .context import RepoContext
from .derived import compute_hover_placement, language_options, visible_repositories
from .repo_card import CardState, ClickEvent, RepoCardView
from .repo_list import RepoListView
from .star_store import StarStoreClient
from .timers import LoopScheduler

__all__ = [
    "CardState",
    "ClickEvent",
    "LoopScheduler",
    "RepoCardView",
    "RepoContext",
    "RepoListView",
    "StarStoreClient",
    "compute_hover_placement",
    "language_options",
    "visible_repositories",
]
