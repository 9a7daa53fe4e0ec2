"""Daily word resolution: exactly one word per calendar day."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Callable, Optional

from core import get_logger
from core.exceptions import RepositoryError
from database.models import DailyWord
from database.repositories import DailyWordRepository
from services.word_source import WordSourceAdapter, fallback_word
from utils.validators import normalize_word, word_letters

logger = get_logger(__name__)


def utc_today() -> date:
    """The event day is the UTC calendar date."""
    return datetime.now(timezone.utc).date()


class DailyWordResolver:
    """Creates the day's word at most once and re-uses it afterwards."""

    def __init__(
        self,
        word_source: WordSourceAdapter,
        fallback: Callable[[date], str] = fallback_word,
        repository: type[DailyWordRepository] = DailyWordRepository,
    ) -> None:
        self.word_source = word_source
        self.fallback = fallback
        self.repository = repository

    async def resolve(self, today: date) -> Optional[DailyWord]:
        """Return the word for ``today``, creating it on first request.

        Returns None only when storage fails.
        """
        try:
            existing = await self.repository.get(today)
            if existing is not None:
                return existing

            word = normalize_word(await self.word_source.fetch_word())
            source = "api"
            if word is None:
                word = self.fallback(today)
                source = "fallback"
                logger.warning(f"Using fallback word for {today.isoformat()}")

            # A concurrent first-of-day caller may win the insert; the re-read
            # returns whichever word was stored first.
            stored = await self.repository.insert_if_absent(today, word, word_letters(word), source)
        except RepositoryError as e:
            logger.error(f"Failed to resolve word for {today.isoformat()}: {e}", exc_info=True)
            return None

        if stored is not None:
            logger.info(
                f"Daily word for {today.isoformat()} is {stored.word}",
                extra={"date": today.isoformat(), "source": stored.source}
            )
        return stored

    async def override_word(self, today: date, word: str) -> Optional[DailyWord]:
        """Replace the word for ``today`` (admin action).

        Returns None for a word that is not exactly five letters or when
        storage fails.
        """
        normalized = normalize_word(word)
        if normalized is None:
            logger.info(f"Rejected override word {word!r}")
            return None

        try:
            stored = await self.repository.upsert(today, normalized, word_letters(normalized), "admin")
        except RepositoryError as e:
            logger.error(f"Failed to override word for {today.isoformat()}: {e}", exc_info=True)
            return None

        logger.info(f"Daily word for {today.isoformat()} set to {normalized} by admin")
        return stored

    async def get_word_for_date(self, day: date) -> Optional[DailyWord]:
        """Read a stored word without creating one."""
        try:
            return await self.repository.get(day)
        except RepositoryError as e:
            logger.error(f"Failed to load word for {day.isoformat()}: {e}", exc_info=True)
            return None
