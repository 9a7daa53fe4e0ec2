"""Word-of-the-day provider adapter and deterministic fallback."""

from __future__ import annotations

import time
from datetime import date
from typing import Any, Optional

import aiohttp

from core import get_logger
from core.constants import ApiDefaults, FallbackWords
from utils.validators import normalize_word

logger = get_logger(__name__)


def fallback_word(day: date) -> str:
    """Pick the fallback word for a calendar day.

    Depends only on the day of the year (January 1st is day 1), so every
    process picks the same word for the same date.
    """
    day_of_year = day.timetuple().tm_yday
    return FallbackWords.WORDS[day_of_year % len(FallbackWords.WORDS)]


def _extract_word(payload: Any) -> Optional[str]:
    if isinstance(payload, str):
        return payload
    if isinstance(payload, dict):
        for key in ("word", "today", "solution"):
            value = payload.get(key)
            if isinstance(value, str):
                return value
        return None
    if isinstance(payload, list) and payload and isinstance(payload[0], str):
        return payload[0]
    return None


class WordSourceAdapter:
    """Fetches a candidate daily word from a public word API.

    ``fetch_word`` never raises: any transport, timeout or payload problem is
    logged and reported as ``None`` so the caller can fall back.
    """

    def __init__(
        self,
        url: str = ApiDefaults.WORD_API_URL,
        timeout_seconds: float = ApiDefaults.TIMEOUT_SECONDS,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> None:
        self.url = url
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._session = session

    async def fetch_word(self) -> Optional[str]:
        started = time.monotonic()
        try:
            payload = await self._get_json()
        except Exception as e:
            logger.warning(f"Word API request failed: {e!r}", extra={"url": self.url})
            return None

        duration_ms = (time.monotonic() - started) * 1000
        logger.debug(f"Word API responded in {duration_ms:.0f} ms")

        word = normalize_word(_extract_word(payload))
        if word is None:
            logger.warning("Word API returned an unusable payload", extra={"payload": repr(payload)[:200]})
        return word

    async def _get_json(self) -> Any:
        if self._session is not None:
            return await self._request(self._session)
        async with aiohttp.ClientSession(
            timeout=self.timeout,
            headers={"User-Agent": ApiDefaults.USER_AGENT},
        ) as session:
            return await self._request(session)

    async def _request(self, session: aiohttp.ClientSession) -> Any:
        async with session.get(self.url, timeout=self.timeout) as response:
            response.raise_for_status()
            return await response.json(content_type=None)
