"""Submission storage and its pending/valid/invalid lifecycle."""

from __future__ import annotations

from datetime import date
from typing import List, Optional, Sequence

from core import get_logger
from core.constants import ValidationState
from core.exceptions import RepositoryError
from database.models import Submission
from database.repositories import SubmissionRepository

logger = get_logger(__name__)


class SubmissionStore:
    """One live submission per participant and day.

    A resubmission overwrites the row and returns it to ``pending``; the
    row's ``revision`` is bumped so a validation started for the previous
    revision can no longer be stamped onto it.
    """

    def __init__(self, repository: type[SubmissionRepository] = SubmissionRepository) -> None:
        self.repository = repository

    async def submit(
        self,
        participant_id: str,
        day: date,
        achievement_ids: Sequence[int],
        achievement_refs: Sequence[str],
    ) -> Optional[Submission]:
        try:
            submission = await self.repository.upsert(participant_id, day, achievement_ids, achievement_refs)
        except RepositoryError as e:
            logger.error(f"Failed to store submission for {participant_id}: {e}", exc_info=True)
            return None

        if submission is not None:
            logger.info(
                f"Submission stored for {participant_id} on {day.isoformat()} (revision {submission.revision})",
                extra={"participant_id": participant_id, "date": day.isoformat()}
            )
        return submission

    async def mark_validated(
        self,
        submission_id: int,
        revision: int,
        valid: bool,
        message: str,
    ) -> Optional[bool]:
        """Record the validation outcome for a still-pending submission revision.

        Returns False when the row is gone, was overwritten by a newer
        submission or already carries an outcome, and None when storage fails.
        """
        state = ValidationState.VALID if valid else ValidationState.INVALID
        try:
            updated = await self.repository.mark_validated(submission_id, revision, state, message)
        except RepositoryError as e:
            logger.error(f"Failed to mark submission {submission_id} validated: {e}", exc_info=True)
            return None

        if not updated:
            logger.info(f"Submission {submission_id} revision {revision} is stale, outcome dropped")
        return updated

    async def reset(self, participant_id: str, day: date) -> bool:
        try:
            deleted = await self.repository.delete(participant_id, day)
        except RepositoryError as e:
            logger.error(f"Failed to reset submission for {participant_id}: {e}", exc_info=True)
            return False

        if deleted:
            logger.info(f"Submission for {participant_id} on {day.isoformat()} reset")
        return deleted

    async def get(self, participant_id: str, day: date) -> Optional[Submission]:
        try:
            return await self.repository.get(participant_id, day)
        except RepositoryError as e:
            logger.error(f"Failed to load submission for {participant_id}: {e}", exc_info=True)
            return None

    async def history(self, participant_id: str, limit: int = 30) -> List[Submission]:
        try:
            return await self.repository.history(participant_id, limit)
        except RepositoryError as e:
            logger.error(f"Failed to load history for {participant_id}: {e}", exc_info=True)
            return []
