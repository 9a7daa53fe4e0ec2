"""Linking participants to their RetroAchievements accounts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from core import get_logger
from core.constants import LinkStatus, Messages
from core.exceptions import RepositoryError
from database.models import AccountLink
from database.repositories import AccountLinkRepository
from services.retroachievements import RetroAchievementsClient

logger = get_logger(__name__)


@dataclass(slots=True)
class LinkResult:
    status: LinkStatus
    message: str
    link: Optional[AccountLink] = None

    @property
    def ok(self) -> bool:
        return self.status is LinkStatus.LINKED


class AccountLinkManager:
    """Binds a participant to an external username after checking it exists."""

    def __init__(
        self,
        platform: RetroAchievementsClient,
        repository: type[AccountLinkRepository] = AccountLinkRepository,
    ) -> None:
        self.platform = platform
        self.repository = repository

    async def verify(self, username: str) -> bool:
        """Check that a profile exists on the platform."""
        if not username or not username.strip():
            return False
        return await self.platform.profile_exists(username.strip())

    async def link(self, participant_id: str, external_username: str) -> LinkResult:
        username = (external_username or "").strip()
        if not await self.verify(username):
            return LinkResult(
                status=LinkStatus.NOT_FOUND,
                message=(
                    f'The RetroAchievements username "{username}" could not be found. '
                    "Please check your username and try again."
                ),
            )

        try:
            link = await self.repository.upsert(participant_id, username)
        except RepositoryError as e:
            logger.error(f"Failed to link {participant_id} to {username}: {e}", exc_info=True)
            link = None

        if link is None:
            return LinkResult(status=LinkStatus.ERROR, message=Messages.RETRY_LATER)

        logger.info(
            f"Participant {participant_id} linked to {username}",
            extra={"participant_id": participant_id, "username": username}
        )
        return LinkResult(
            status=LinkStatus.LINKED,
            message=f"Successfully connected your account to {username} on RetroAchievements!",
            link=link,
        )

    async def lookup(self, participant_id: str) -> Optional[AccountLink]:
        try:
            return await self.repository.get(participant_id)
        except RepositoryError as e:
            logger.error(f"Failed to load link for {participant_id}: {e}", exc_info=True)
            return None
