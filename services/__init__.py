"""Services package."""

from .word_source import WordSourceAdapter, fallback_word
from .retroachievements import EarnedAchievement, RetroAchievementsClient
from .daily_word_service import DailyWordResolver, utc_today
from .account_service import AccountLinkManager, LinkResult
from .submission_validator import AchievementCheck, LetterMatch, SubmissionValidator, match_letters
from .submission_service import SubmissionStore
from .progress_service import ProgressTracker
from .event_service import (
    EventService,
    ResetOutcome,
    StatusReport,
    SubmitOutcome,
    WordOutcome,
    get_event_service,
    init_event_service,
)

__all__ = [
    # External collaborators
    "WordSourceAdapter",
    "fallback_word",
    "EarnedAchievement",
    "RetroAchievementsClient",
    # Event engine
    "DailyWordResolver",
    "utc_today",
    "AccountLinkManager",
    "LinkResult",
    "AchievementCheck",
    "LetterMatch",
    "SubmissionValidator",
    "match_letters",
    "SubmissionStore",
    "ProgressTracker",
    "EventService",
    "ResetOutcome",
    "StatusReport",
    "SubmitOutcome",
    "WordOutcome",
    "get_event_service",
    "init_event_service",
]
