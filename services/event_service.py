"""Wordle Achievement Event use cases consumed by the chat layer.

Every public coroutine returns plain result data with a ``message`` meant
for direct display. Storage and platform failures are already converted
into results by the underlying services, so nothing here raises into the
handlers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING, List, Optional, Sequence

import aiohttp

from core import get_logger
from core.constants import Messages, SubmitStatus
from core.exceptions import ServiceError
from database.models import AccountLink, DailyWord, ProgressCounter, Submission
from services.account_service import AccountLinkManager, LinkResult
from services.daily_word_service import DailyWordResolver, utc_today
from services.progress_service import ProgressTracker
from services.retroachievements import RetroAchievementsClient
from services.submission_service import SubmissionStore
from services.submission_validator import SubmissionValidator, match_letters
from services.word_source import WordSourceAdapter
from utils.validators import is_valid_word, parse_achievement_refs

if TYPE_CHECKING:
    from config import Config

logger = get_logger(__name__)


@dataclass(slots=True)
class SubmitOutcome:
    status: SubmitStatus
    message: str
    word: Optional[DailyWord] = None
    submission: Optional[Submission] = None
    titles: Optional[List[str]] = None
    progress: Optional[ProgressCounter] = None
    became_eligible: bool = False
    errors: List[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return self.status is SubmitStatus.VALID


@dataclass(slots=True)
class StatusReport:
    word: Optional[DailyWord]
    link: Optional[AccountLink]
    submission: Optional[Submission]
    progress: Optional[ProgressCounter]
    remaining: int
    message: str


@dataclass(slots=True)
class ResetOutcome:
    reset: bool
    message: str


@dataclass(slots=True)
class WordOutcome:
    word: Optional[DailyWord]
    message: str


class EventService:
    """Composes linkage, word resolution, validation, storage and progress."""

    def __init__(
        self,
        accounts: AccountLinkManager,
        words: DailyWordResolver,
        validator: SubmissionValidator,
        submissions: SubmissionStore,
        progress: ProgressTracker,
    ) -> None:
        self.accounts = accounts
        self.words = words
        self.validator = validator
        self.submissions = submissions
        self.progress = progress

    async def connect(self, participant_id: str, username: str) -> LinkResult:
        return await self.accounts.link(participant_id, username)

    async def submit(
        self,
        participant_id: str,
        achievement_refs: Sequence[str],
        today: Optional[date] = None,
    ) -> SubmitOutcome:
        """Store and validate a participant's five achievements for the day."""
        today = today or utc_today()
        refs = [ref.strip() for ref in achievement_refs]

        achievement_ids, errors = parse_achievement_refs(refs)
        if errors:
            return SubmitOutcome(status=SubmitStatus.BAD_INPUT, message="\n".join(errors), errors=errors)

        link = await self.accounts.lookup(participant_id)
        if link is None:
            return SubmitOutcome(status=SubmitStatus.NOT_LINKED, message=Messages.NOT_LINKED)

        word = await self.words.resolve(today)
        if word is None:
            return SubmitOutcome(status=SubmitStatus.NO_WORD, message=Messages.NO_WORD)

        submission = await self.submissions.submit(participant_id, today, achievement_ids, refs)
        if submission is None:
            return SubmitOutcome(status=SubmitStatus.ERROR, message=Messages.RETRY_LATER, word=word)

        check = await self.validator.validate(link.external_username, achievement_ids, today)
        if check.valid:
            letters = match_letters(check.titles or [], word.letters)
            valid, message = letters.valid, letters.message
        else:
            valid, message = False, check.message

        marked = await self.submissions.mark_validated(submission.id, submission.revision, valid, message)
        if marked is None:
            return SubmitOutcome(
                status=SubmitStatus.ERROR,
                message=Messages.RETRY_LATER,
                word=word,
                submission=submission,
            )
        if not marked:
            return SubmitOutcome(
                status=SubmitStatus.SUPERSEDED,
                message="This submission was replaced or reset before its validation finished.",
                word=word,
                submission=submission,
            )

        counter = await self.progress.record_outcome(participant_id, today, valid)
        became_eligible = self.progress.just_became_eligible(counter, valid)
        if became_eligible:
            message += "\nCongratulations! You're now eligible for a prize!"

        logger.info(
            f"Submission by {participant_id} on {today.isoformat()} is {'valid' if valid else 'invalid'}",
            extra={"participant_id": participant_id, "date": today.isoformat(), "check": check.status.value}
        )
        return SubmitOutcome(
            status=SubmitStatus.VALID if valid else SubmitStatus.INVALID,
            message=message,
            word=word,
            submission=submission,
            titles=check.titles,
            progress=counter,
            became_eligible=became_eligible,
        )

    async def status(self, participant_id: str, today: Optional[date] = None) -> StatusReport:
        today = today or utc_today()
        word = await self.words.resolve(today)
        link = await self.accounts.lookup(participant_id)
        if link is None:
            return StatusReport(
                word=word,
                link=None,
                submission=None,
                progress=None,
                remaining=self.progress.remaining(None),
                message=Messages.NOT_LINKED,
            )

        submission = await self.submissions.get(participant_id, today)
        counter = await self.progress.get(participant_id)
        remaining = self.progress.remaining(counter)

        lines = []
        if word is not None:
            lines.append(f"Today's word: {word.word} ({' - '.join(word.letters)})")
        else:
            lines.append(Messages.NO_WORD)
        lines.append(f"Connected account: {link.external_username}")

        if submission is None:
            lines.append("Today's submission: not submitted yet")
        else:
            lines.append(f"Today's submission: {submission.validation_state.value}")
            if submission.validation_message:
                lines.append(submission.validation_message)

        successful = counter.successful_count if counter else 0
        total = counter.total_count if counter else 0
        lines.append(f"Progress: {successful}/{self.progress.threshold} successful, {total} total")
        if counter is not None and counter.eligible_for_prize:
            lines.append("Eligible for prize!")
        else:
            lines.append(f"Need {remaining} more successful submissions")

        return StatusReport(
            word=word,
            link=link,
            submission=submission,
            progress=counter,
            remaining=remaining,
            message="\n".join(lines),
        )

    async def reset(self, participant_id: str, today: Optional[date] = None) -> ResetOutcome:
        today = today or utc_today()
        if await self.accounts.lookup(participant_id) is None:
            return ResetOutcome(reset=False, message=Messages.NOT_LINKED)

        if await self.submissions.reset(participant_id, today):
            return ResetOutcome(
                reset=True,
                message="Your submission for today has been reset. You can submit again with /wordle_submit.",
            )
        return ResetOutcome(reset=False, message="You don't have a submission for today to reset.")

    async def set_word(self, word: str, today: Optional[date] = None) -> WordOutcome:
        today = today or utc_today()
        if not is_valid_word(word):
            return WordOutcome(
                word=None,
                message="The word must be exactly 5 letters and contain only alphabetic characters.",
            )
        stored = await self.words.override_word(today, word)
        if stored is None:
            return WordOutcome(word=None, message=Messages.RETRY_LATER)
        return WordOutcome(
            word=stored,
            message=f"Today's word ({stored.date.isoformat()}) has been set to {stored.word}.",
        )

    async def get_word(self, today: Optional[date] = None) -> WordOutcome:
        today = today or utc_today()
        stored = await self.words.get_word_for_date(today)
        if stored is None:
            return WordOutcome(word=None, message="No word has been stored for today yet.")
        return WordOutcome(
            word=stored,
            message=f"Today's word ({stored.date.isoformat()}): {stored.word} [{stored.source}]",
        )

    async def eligible_participants(self) -> List[ProgressCounter]:
        return await self.progress.list_eligible()

    async def acknowledge_prize(self, participant_id: str) -> bool:
        return await self.progress.mark_prize_notified(participant_id)


_event_service: Optional[EventService] = None


def init_event_service(
    config: Config,
    session: Optional[aiohttp.ClientSession] = None,
) -> EventService:
    """Wire the event engine from configuration and keep it as the process-wide instance."""
    global _event_service
    platform = RetroAchievementsClient(
        api_key=config.ra_web_api_key,
        username=config.ra_username,
        base_url=config.ra_api_base_url,
        timeout_seconds=config.http_timeout_seconds,
        session=session,
    )
    word_source = WordSourceAdapter(
        url=config.word_api_url,
        timeout_seconds=config.http_timeout_seconds,
        session=session,
    )
    _event_service = EventService(
        accounts=AccountLinkManager(platform),
        words=DailyWordResolver(word_source),
        validator=SubmissionValidator(platform),
        submissions=SubmissionStore(),
        progress=ProgressTracker(threshold=config.prize_threshold),
    )
    return _event_service


def get_event_service() -> EventService:
    if _event_service is None:
        raise ServiceError("Event service not initialized")
    return _event_service
