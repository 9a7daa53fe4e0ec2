"""Pytest configuration and fixtures."""

from datetime import date
from typing import Dict, List, Optional, Set, Tuple

import pytest

from database import close_db_pool, init_db_pool, run_migrations
from services.account_service import AccountLinkManager
from services.daily_word_service import DailyWordResolver
from services.event_service import EventService
from services.progress_service import ProgressTracker
from services.retroachievements import EarnedAchievement
from services.submission_service import SubmissionStore
from services.submission_validator import SubmissionValidator


EVENT_DAY = date(2025, 3, 14)


@pytest.fixture
async def db(tmp_path):
    """Fresh SQLite database with the event schema."""
    pool = await init_db_pool(
        database_path=str(tmp_path / "test_wordle_event.sqlite"),
        pool_size=2,
        busy_timeout_ms=5000,
    )
    await run_migrations(pool)
    yield pool
    await close_db_pool()


class FakeWordSource:
    """Word provider returning a fixed answer and counting calls."""

    def __init__(self, word: Optional[str] = None) -> None:
        self.word = word
        self.calls = 0

    async def fetch_word(self) -> Optional[str]:
        self.calls += 1
        return self.word


class FakePlatform:
    """In-memory stand-in for the RetroAchievements API."""

    def __init__(self) -> None:
        self.profiles: Set[str] = set()
        self.earned: Dict[Tuple[str, date], List[EarnedAchievement]] = {}
        self.available = True
        self.queries: List[Tuple[str, date]] = []

    def add_profile(self, username: str) -> None:
        self.profiles.add(username)

    def earn(self, username: str, day: date, *achievements: Tuple[int, str]) -> None:
        self.earned.setdefault((username, day), []).extend(
            EarnedAchievement(achievement_id=achievement_id, title=title)
            for achievement_id, title in achievements
        )

    async def profile_exists(self, username: str) -> bool:
        return self.available and username in self.profiles

    async def achievements_earned_on(self, username: str, day: date) -> Optional[List[EarnedAchievement]]:
        self.queries.append((username, day))
        if not self.available:
            return None
        return list(self.earned.get((username, day), []))


@pytest.fixture
def word_source():
    return FakeWordSource("ASSET")


@pytest.fixture
def platform():
    fake = FakePlatform()
    fake.add_profile("retrofan")
    return fake


@pytest.fixture
def event_service(db, word_source, platform):
    return EventService(
        accounts=AccountLinkManager(platform),
        words=DailyWordResolver(word_source),
        validator=SubmissionValidator(platform),
        submissions=SubmissionStore(),
        progress=ProgressTracker(),
    )
