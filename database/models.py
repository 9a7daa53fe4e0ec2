"""Data access layer models implemented with handcrafted queries."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Mapping, Optional

from core.constants import ValidationState


def _parse_ts(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


def _parse_date(value: Optional[str]) -> Optional[date]:
    return date.fromisoformat(value) if value else None


@dataclass(slots=True)
class DailyWord:
    id: int
    date: date
    word: str
    letters: List[str]
    created_at: datetime
    source: str = "api"

    @classmethod
    def from_row(cls, row: Mapping) -> DailyWord:
        return cls(
            id=row["id"],
            date=date.fromisoformat(row["word_date"]),
            word=row["word"],
            letters=json.loads(row["letters"]),
            created_at=datetime.fromisoformat(row["created_at"]),
            source=row["source"],
        )


@dataclass(slots=True)
class AccountLink:
    id: int
    participant_id: str
    external_username: str
    linked_at: datetime
    last_verified_at: Optional[datetime]
    verified: bool

    @classmethod
    def from_row(cls, row: Mapping) -> AccountLink:
        return cls(
            id=row["id"],
            participant_id=row["participant_id"],
            external_username=row["external_username"],
            linked_at=datetime.fromisoformat(row["linked_at"]),
            last_verified_at=_parse_ts(row["last_verified_at"]),
            verified=bool(row["verified"]),
        )


@dataclass(slots=True)
class Submission:
    id: int
    participant_id: str
    date: date
    achievement_ids: List[int]
    achievement_refs: List[str]
    validation_state: ValidationState
    validation_message: Optional[str]
    submitted_at: datetime
    validated_at: Optional[datetime]
    revision: int = 1

    @property
    def is_pending(self) -> bool:
        return self.validation_state is ValidationState.PENDING

    @classmethod
    def from_row(cls, row: Mapping) -> Submission:
        return cls(
            id=row["id"],
            participant_id=row["participant_id"],
            date=date.fromisoformat(row["submission_date"]),
            achievement_ids=[int(i) for i in json.loads(row["achievement_ids"])],
            achievement_refs=json.loads(row["achievement_refs"]),
            validation_state=ValidationState(row["validation_state"]),
            validation_message=row["validation_message"],
            submitted_at=datetime.fromisoformat(row["submitted_at"]),
            validated_at=_parse_ts(row["validated_at"]),
            revision=row["revision"],
        )


@dataclass(slots=True)
class ProgressCounter:
    id: int
    participant_id: str
    successful_count: int
    total_count: int
    last_submission_date: Optional[date]
    eligible_for_prize: bool
    prize_notified: bool
    updated_at: datetime

    @classmethod
    def from_row(cls, row: Mapping) -> ProgressCounter:
        return cls(
            id=row["id"],
            participant_id=row["participant_id"],
            successful_count=row["successful_count"],
            total_count=row["total_count"],
            last_submission_date=_parse_date(row["last_submission_date"]),
            eligible_for_prize=bool(row["eligible_for_prize"]),
            prize_notified=bool(row["prize_notified"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )
