"""Cross-checking submitted achievements against the platform record."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Sequence

from core import get_logger
from core.constants import CheckStatus, EventDefaults, Messages
from services.retroachievements import RetroAchievementsClient

logger = get_logger(__name__)


@dataclass(slots=True)
class AchievementCheck:
    """Result of checking that achievements were earned on a given day."""
    status: CheckStatus
    message: str
    titles: Optional[List[str]] = None
    missing_ids: List[int] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return self.status is CheckStatus.VERIFIED


@dataclass(slots=True)
class LetterMatch:
    valid: bool
    message: str
    mismatched_positions: List[int] = field(default_factory=list)


def match_letters(titles: Sequence[str], required_letters: Sequence[str]) -> LetterMatch:
    """Check that title ``i`` starts with required letter ``i`` (case-insensitive)."""
    expected = EventDefaults.WORD_LENGTH
    if len(titles) != expected or len(required_letters) != expected:
        return LetterMatch(
            valid=False,
            message=(
                f"Invalid configuration: expected {expected} achievement titles and "
                f"{expected} required letters, got {len(titles)} and {len(required_letters)}."
            ),
        )

    mismatches: List[str] = []
    positions: List[int] = []
    for i, (title, letter) in enumerate(zip(titles, required_letters)):
        actual = title[:1].upper()
        required = letter.upper()
        if actual != required:
            positions.append(i)
            mismatches.append(
                f'Achievement {i + 1}: "{title}" starts with "{actual}" '
                f'but needs to start with "{required}"'
            )

    if mismatches:
        return LetterMatch(
            valid=False,
            message="Letter mismatches found:\n" + "\n".join(mismatches),
            mismatched_positions=positions,
        )

    return LetterMatch(valid=True, message="All achievement titles match the required letters!")


class SubmissionValidator:
    """Confirms that each submitted achievement was earned on the submission day."""

    def __init__(self, platform: RetroAchievementsClient) -> None:
        self.platform = platform

    async def validate(
        self,
        external_username: str,
        achievement_ids: Sequence[int],
        day: date,
    ) -> AchievementCheck:
        earned = await self.platform.achievements_earned_on(external_username, day)
        if earned is None:
            return AchievementCheck(status=CheckStatus.UNAVAILABLE, message=Messages.PLATFORM_UNAVAILABLE)

        titles_by_id = {}
        for achievement in earned:
            titles_by_id.setdefault(achievement.achievement_id, achievement.title)

        missing = [achievement_id for achievement_id in achievement_ids if achievement_id not in titles_by_id]
        if missing:
            logger.info(
                f"{external_username} did not earn {missing} on {day.isoformat()}",
                extra={"username": external_username, "date": day.isoformat()}
            )
            return AchievementCheck(
                status=CheckStatus.MISSING,
                message=(
                    f"The following achievement(s) were not earned on {day.isoformat()}: "
                    + ", ".join(str(achievement_id) for achievement_id in missing)
                ),
                missing_ids=missing,
            )

        return AchievementCheck(
            status=CheckStatus.VERIFIED,
            message="All achievements were verified as earned on the specified date!",
            titles=[titles_by_id[achievement_id] for achievement_id in achievement_ids],
        )
