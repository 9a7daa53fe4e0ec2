"""Cumulative per-participant progress and prize eligibility."""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from core import get_logger
from core.constants import EventDefaults
from core.exceptions import RepositoryError
from database.models import ProgressCounter
from database.repositories import ProgressRepository

logger = get_logger(__name__)


class ProgressTracker:
    """Counts validation outcomes; counters are always re-read from storage."""

    def __init__(
        self,
        threshold: int = EventDefaults.PRIZE_THRESHOLD,
        repository: type[ProgressRepository] = ProgressRepository,
    ) -> None:
        self.threshold = threshold
        self.repository = repository

    async def record_outcome(self, participant_id: str, day: date, was_successful: bool) -> Optional[ProgressCounter]:
        """Count one completed validation; call exactly once per validation."""
        try:
            counter = await self.repository.record(participant_id, day, was_successful, self.threshold)
        except RepositoryError as e:
            logger.error(f"Failed to record outcome for {participant_id}: {e}", exc_info=True)
            return None

        if counter is not None and was_successful and counter.successful_count == self.threshold:
            logger.info(
                f"Participant {participant_id} reached the prize threshold",
                extra={"participant_id": participant_id}
            )
        return counter

    async def get(self, participant_id: str) -> Optional[ProgressCounter]:
        try:
            return await self.repository.get(participant_id)
        except RepositoryError as e:
            logger.error(f"Failed to load progress for {participant_id}: {e}", exc_info=True)
            return None

    async def mark_prize_notified(self, participant_id: str) -> bool:
        """Set the one-way notification flag on an eligible participant."""
        try:
            return await self.repository.mark_prize_notified(participant_id)
        except RepositoryError as e:
            logger.error(f"Failed to flag prize notification for {participant_id}: {e}", exc_info=True)
            return False

    async def list_eligible(self) -> List[ProgressCounter]:
        try:
            return await self.repository.list_eligible()
        except RepositoryError as e:
            logger.error(f"Failed to list eligible participants: {e}", exc_info=True)
            return []

    def remaining(self, counter: Optional[ProgressCounter]) -> int:
        successful = counter.successful_count if counter else 0
        return max(0, self.threshold - successful)

    def just_became_eligible(self, counter: Optional[ProgressCounter], was_successful: bool) -> bool:
        """True only for the successful outcome that brought the count to the threshold."""
        return bool(
            was_successful
            and counter
            and counter.eligible_for_prize
            and counter.successful_count == self.threshold
        )
