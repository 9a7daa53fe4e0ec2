"""Minimal async client for the RetroAchievements Web API."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional

import aiohttp

from core import get_logger
from core.constants import ApiDefaults
from core.exceptions import ExternalServiceError

logger = get_logger(__name__)

SERVICE_NAME = "RetroAchievements"


@dataclass(frozen=True, slots=True)
class EarnedAchievement:
    """One achievement unlocked by a user."""
    achievement_id: int
    title: str


class RetroAchievementsClient:
    """Profile lookups and day-scoped unlock queries.

    Public methods degrade instead of raising: ``profile_exists`` answers
    ``False`` and ``achievements_earned_on`` answers ``None`` whenever the
    platform does not respond usably within the timeout.
    """

    def __init__(
        self,
        api_key: str,
        username: str = "RABot",
        base_url: str = ApiDefaults.RA_API_BASE_URL,
        timeout_seconds: float = ApiDefaults.TIMEOUT_SECONDS,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> None:
        self.api_key = api_key
        self.username = username
        self.base_url = base_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._session = session

    async def profile_exists(self, username: str) -> bool:
        if not username or not username.strip():
            return False
        try:
            payload = await self._get("API_GetUserProfile.php", {"u": username.strip()})
        except ExternalServiceError as e:
            logger.warning(f"Profile lookup failed for {username!r}: {e.reason}")
            return False
        return isinstance(payload, dict) and bool(payload.get("User"))

    async def achievements_earned_on(self, username: str, day: date) -> Optional[List[EarnedAchievement]]:
        try:
            payload = await self._get(
                "API_GetAchievementsEarnedOnDay.php",
                {"u": username, "d": day.isoformat()},
            )
        except ExternalServiceError as e:
            logger.warning(
                f"Achievement query failed for {username!r} on {day.isoformat()}: {e.reason}"
            )
            return None

        if not isinstance(payload, list):
            logger.warning(f"Unexpected achievements payload for {username!r}: {type(payload).__name__}")
            return None

        earned: List[EarnedAchievement] = []
        for item in payload:
            try:
                earned.append(
                    EarnedAchievement(
                        achievement_id=int(item["AchievementID"]),
                        title=str(item.get("Title") or ""),
                    )
                )
            except (KeyError, TypeError, ValueError):
                logger.warning(f"Skipping malformed achievement entry: {item!r}")
        return earned

    async def _get(self, endpoint: str, params: Dict[str, str]) -> Any:
        query = {"z": self.username, "y": self.api_key, **params}
        url = f"{self.base_url}/{endpoint}"
        try:
            if self._session is not None:
                return await self._request(self._session, url, query)
            async with aiohttp.ClientSession(
                timeout=self.timeout,
                headers={"User-Agent": ApiDefaults.USER_AGENT},
            ) as session:
                return await self._request(session, url, query)
        except asyncio.TimeoutError as e:
            raise ExternalServiceError(SERVICE_NAME, "request timed out") from e
        except (aiohttp.ClientError, ValueError) as e:
            raise ExternalServiceError(SERVICE_NAME, repr(e)) from e

    async def _request(self, session: aiohttp.ClientSession, url: str, query: Dict[str, str]) -> Any:
        async with session.get(url, params=query, timeout=self.timeout) as response:
            if response.status == 404:
                return None
            response.raise_for_status()
            return await response.json(content_type=None)
