"""Star/unstar interaction for a single repository card."""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Literal, Optional

import structlog

from ..config import get_settings
from ..models import Repository
from .context import RepoContext, StarStore
from .timers import Scheduler, TimerHandle

logger = structlog.get_logger(__name__)

UNSTAR_REFUSAL_MESSAGE = "😆 Not allowed!"
MESSAGE_DISMISS_SECONDS = 3.0


class CardState(str, Enum):
    IDLE = "idle"
    STARRING = "starring"
    CONFIRMING_UNSTAR = "confirming_unstar"
    MESSAGE_SHOWN = "message_shown"


@dataclass
class ClickEvent:
    """Pointer click as delivered to a card control."""

    default_prevented: bool = False
    propagation_stopped: bool = False

    def prevent_default(self) -> None:
        self.default_prevented = True

    def stop_propagation(self) -> None:
        self.propagation_stopped = True


def _swallow(event: Optional[ClickEvent]) -> None:
    # Controls sit inside the card's link and the list's hover tracker
    if event is not None:
        event.prevent_default()
        event.stop_propagation()


class RepoCardView:
    """One repository card and its star toggle.

    ``idle`` (un-starred) -> star -> ``starring`` -> ``idle`` (starred) on
    success, a login redirect on 401, back to un-starred otherwise.
    ``idle`` (starred) -> unstar -> ``confirming_unstar`` -> "no" returns,
    "yes" shows a refusal message for three seconds. Unstarring is never
    sent to the server.
    """

    def __init__(
        self,
        repo: Repository,
        context: RepoContext,
        star_store: StarStore,
        scheduler: Scheduler,
        navigate: Callable[[str], None],
    ):
        self.repo = repo
        self.context = context
        self.star_store = star_store
        self.scheduler = scheduler
        self.navigate = navigate
        self.state = CardState.IDLE
        self.starred = context.is_starred(repo.name)
        self.count = context.count_for(repo)
        self.message: Optional[str] = None
        self._message_timer: Optional[TimerHandle] = None

    @property
    def label(self) -> str:
        if self.state is CardState.STARRING:
            return "Starring..."
        if self.starred:
            return f"{self.count}⭐"
        return f"{self.count} ☆"

    async def mount(self) -> None:
        """Pick up the visitor's starred flag for this repository."""
        status = await self.star_store.is_starred(self.repo.owner, self.repo.name)
        if status.authed and status.starred:
            self.starred = True

    def click(self, event: ClickEvent) -> None:
        event.stop_propagation()

    async def click_star(self, event: Optional[ClickEvent] = None) -> None:
        _swallow(event)
        if self.state is not CardState.IDLE or self.starred:
            return

        self.state = CardState.STARRING
        try:
            result = await self.star_store.star(self.repo.owner, self.repo.name)

            if result.status_code == 401:
                logger.info("Star needs login", repo=self.repo.name)
                self.navigate(get_settings().login_route)
                return

            if result.ok:
                self.starred = True
                if result.count is not None:
                    self.count = result.count
                self.context.record_star(self.repo.name, result.count)
                await self.context.refresh_stars()
            else:
                logger.info("Star not confirmed", repo=self.repo.name, status_code=result.status_code)
        finally:
            self.state = CardState.IDLE

    def click_unstar(self, event: Optional[ClickEvent] = None) -> None:
        _swallow(event)
        if self.state is CardState.IDLE and self.starred:
            self.state = CardState.CONFIRMING_UNSTAR

    def confirm_unstar(self, choice: Literal["yes", "no"], event: Optional[ClickEvent] = None) -> None:
        _swallow(event)
        if self.state is not CardState.CONFIRMING_UNSTAR:
            return

        if choice == "yes":
            self.message = UNSTAR_REFUSAL_MESSAGE
            self.state = CardState.MESSAGE_SHOWN
            self._message_timer = self.scheduler.call_later(MESSAGE_DISMISS_SECONDS, self._dismiss_message)
        else:
            self.state = CardState.IDLE

    def _dismiss_message(self) -> None:
        self._message_timer = None
        self.message = None
        self.state = CardState.IDLE

    def close(self) -> None:
        if self._message_timer is not None:
            self._message_timer.cancel()
            self._message_timer = None
