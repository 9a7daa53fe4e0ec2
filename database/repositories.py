"""Database access layer helpers."""

from __future__ import annotations

import json
from datetime import date, datetime, timezone
from typing import List, Optional, Sequence

from core.constants import ValidationState
from database.base_repository import BaseRepository
from database.models import AccountLink, DailyWord, ProgressCounter, Submission


def utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class DailyWordRepository(BaseRepository):
    """Repository for the word of each calendar day."""

    @staticmethod
    async def get(day: date) -> Optional[DailyWord]:
        row = await BaseRepository.fetch_one(
            "SELECT * FROM wordle_daily_words WHERE word_date=?",
            (day.isoformat(),)
        )
        return DailyWord.from_row(row) if row else None

    @staticmethod
    async def insert_if_absent(day: date, word: str, letters: Sequence[str], source: str) -> Optional[DailyWord]:
        """Insert the day's word unless one exists; return the stored row either way."""
        row = await BaseRepository.write_then_read(
            (
                """
                INSERT INTO wordle_daily_words (word_date, word, letters, source, created_at)
                VALUES (?, ?, ?, ?, ?)
                ON CONFLICT(word_date) DO NOTHING
                """,
                (day.isoformat(), word, json.dumps(list(letters)), source, utcnow_iso()),
            ),
            ("SELECT * FROM wordle_daily_words WHERE word_date=?", (day.isoformat(),)),
        )
        return DailyWord.from_row(row) if row else None

    @staticmethod
    async def upsert(day: date, word: str, letters: Sequence[str], source: str) -> Optional[DailyWord]:
        """Insert or replace the word and letters for a day."""
        row = await BaseRepository.write_then_read(
            (
                """
                INSERT INTO wordle_daily_words (word_date, word, letters, source, created_at)
                VALUES (?, ?, ?, ?, ?)
                ON CONFLICT(word_date) DO UPDATE SET
                    word=excluded.word,
                    letters=excluded.letters,
                    source=excluded.source
                """,
                (day.isoformat(), word, json.dumps(list(letters)), source, utcnow_iso()),
            ),
            ("SELECT * FROM wordle_daily_words WHERE word_date=?", (day.isoformat(),)),
        )
        return DailyWord.from_row(row) if row else None


class AccountLinkRepository(BaseRepository):
    """Repository for participant to RetroAchievements account links."""

    @staticmethod
    async def get(participant_id: str) -> Optional[AccountLink]:
        row = await BaseRepository.fetch_one(
            "SELECT * FROM wordle_account_links WHERE participant_id=?",
            (participant_id,)
        )
        return AccountLink.from_row(row) if row else None

    @staticmethod
    async def upsert(participant_id: str, external_username: str) -> Optional[AccountLink]:
        """Create the link or overwrite username and verification fields."""
        now = utcnow_iso()
        row = await BaseRepository.write_then_read(
            (
                """
                INSERT INTO wordle_account_links
                    (participant_id, external_username, linked_at, last_verified_at, verified)
                VALUES (?, ?, ?, ?, 1)
                ON CONFLICT(participant_id) DO UPDATE SET
                    external_username=excluded.external_username,
                    last_verified_at=excluded.last_verified_at,
                    verified=1
                """,
                (participant_id, external_username, now, now),
            ),
            ("SELECT * FROM wordle_account_links WHERE participant_id=?", (participant_id,)),
        )
        return AccountLink.from_row(row) if row else None


class SubmissionRepository(BaseRepository):
    """Repository for daily submissions, one live row per participant and day."""

    @staticmethod
    async def get(participant_id: str, day: date) -> Optional[Submission]:
        row = await BaseRepository.fetch_one(
            "SELECT * FROM wordle_submissions WHERE participant_id=? AND submission_date=?",
            (participant_id, day.isoformat())
        )
        return Submission.from_row(row) if row else None

    @staticmethod
    async def upsert(
        participant_id: str,
        day: date,
        achievement_ids: Sequence[int],
        achievement_refs: Sequence[str],
    ) -> Optional[Submission]:
        """Store a submission; an existing row is reset to pending and its revision bumped."""
        row = await BaseRepository.write_then_read(
            (
                """
                INSERT INTO wordle_submissions
                    (participant_id, submission_date, achievement_ids, achievement_refs,
                     validation_state, validation_message, submitted_at, validated_at, revision)
                VALUES (?, ?, ?, ?, 'pending', NULL, ?, NULL, 1)
                ON CONFLICT(participant_id, submission_date) DO UPDATE SET
                    achievement_ids=excluded.achievement_ids,
                    achievement_refs=excluded.achievement_refs,
                    validation_state='pending',
                    validation_message=NULL,
                    submitted_at=excluded.submitted_at,
                    validated_at=NULL,
                    revision=wordle_submissions.revision + 1
                """,
                (
                    participant_id,
                    day.isoformat(),
                    json.dumps([int(i) for i in achievement_ids]),
                    json.dumps(list(achievement_refs)),
                    utcnow_iso(),
                ),
            ),
            (
                "SELECT * FROM wordle_submissions WHERE participant_id=? AND submission_date=?",
                (participant_id, day.isoformat()),
            ),
        )
        return Submission.from_row(row) if row else None

    @staticmethod
    async def mark_validated(
        submission_id: int,
        revision: int,
        state: ValidationState,
        message: str,
    ) -> bool:
        """Move a pending submission to its final state if it is still the same revision."""
        updated = await BaseRepository.execute(
            """
            UPDATE wordle_submissions
            SET validation_state=?, validation_message=?, validated_at=?
            WHERE id=? AND revision=? AND validation_state='pending'
            """,
            (state.value, message, utcnow_iso(), submission_id, revision)
        )
        return updated > 0

    @staticmethod
    async def delete(participant_id: str, day: date) -> bool:
        deleted = await BaseRepository.execute(
            "DELETE FROM wordle_submissions WHERE participant_id=? AND submission_date=?",
            (participant_id, day.isoformat())
        )
        return deleted > 0

    @staticmethod
    async def history(participant_id: str, limit: int = 30) -> List[Submission]:
        rows = await BaseRepository.fetch_all(
            "SELECT * FROM wordle_submissions WHERE participant_id=? "
            "ORDER BY submission_date DESC LIMIT ?",
            (participant_id, limit)
        )
        return [Submission.from_row(row) for row in rows]


class ProgressRepository(BaseRepository):
    """Repository for cumulative per-participant counters."""

    @staticmethod
    async def get(participant_id: str) -> Optional[ProgressCounter]:
        row = await BaseRepository.fetch_one(
            "SELECT * FROM wordle_progress WHERE participant_id=?",
            (participant_id,)
        )
        return ProgressCounter.from_row(row) if row else None

    @staticmethod
    async def record(participant_id: str, day: date, successful: bool, threshold: int) -> Optional[ProgressCounter]:
        """Count one validation outcome in a single upsert statement."""
        increment = 1 if successful else 0
        row = await BaseRepository.write_then_read(
            (
                """
                INSERT INTO wordle_progress
                    (participant_id, successful_count, total_count, last_submission_date,
                     eligible_for_prize, prize_notified, updated_at)
                VALUES (?, ?, 1, ?, ?, 0, ?)
                ON CONFLICT(participant_id) DO UPDATE SET
                    successful_count=wordle_progress.successful_count + excluded.successful_count,
                    total_count=wordle_progress.total_count + 1,
                    last_submission_date=excluded.last_submission_date,
                    eligible_for_prize=(wordle_progress.successful_count + excluded.successful_count) >= ?,
                    updated_at=excluded.updated_at
                """,
                (
                    participant_id,
                    increment,
                    day.isoformat(),
                    int(increment >= threshold),
                    utcnow_iso(),
                    threshold,
                ),
            ),
            ("SELECT * FROM wordle_progress WHERE participant_id=?", (participant_id,)),
        )
        return ProgressCounter.from_row(row) if row else None

    @staticmethod
    async def mark_prize_notified(participant_id: str) -> bool:
        updated = await BaseRepository.execute(
            "UPDATE wordle_progress SET prize_notified=1, updated_at=? "
            "WHERE participant_id=? AND eligible_for_prize=1 AND prize_notified=0",
            (utcnow_iso(), participant_id)
        )
        return updated > 0

    @staticmethod
    async def list_eligible() -> List[ProgressCounter]:
        rows = await BaseRepository.fetch_all(
            "SELECT * FROM wordle_progress WHERE eligible_for_prize=1 "
            "ORDER BY successful_count DESC, participant_id"
        )
        return [ProgressCounter.from_row(row) for row in rows]
