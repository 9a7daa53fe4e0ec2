"""Input validation helpers."""

from __future__ import annotations

import re
from typing import List, Optional, Sequence, Tuple

from core.constants import EventDefaults


WORD_RE = re.compile(r"^[A-Z]{5}$")
ACHIEVEMENT_ID_RE = re.compile(r"^\d+$")
ACHIEVEMENT_URL_RE = re.compile(r"retroachievements\.org/achievement/(\d+)", re.IGNORECASE)


def normalize_word(value: Optional[str]) -> Optional[str]:
    """Trim and uppercase a candidate daily word; None unless it is exactly five letters A-Z."""
    if not isinstance(value, str):
        return None
    cleaned = value.strip().upper()
    if not WORD_RE.match(cleaned):
        return None
    return cleaned


def is_valid_word(value: Optional[str]) -> bool:
    return normalize_word(value) is not None


def word_letters(word: str) -> List[str]:
    """Positional uppercase decomposition of a word."""
    return list(word.upper())


def extract_achievement_id(value: str) -> Optional[int]:
    """Return the achievement id from a bare id or a RetroAchievements achievement URL."""
    if not value:
        return None
    stripped = value.strip()

    if ACHIEVEMENT_ID_RE.match(stripped):
        achievement_id = int(stripped)
        return achievement_id if achievement_id > 0 else None

    match = ACHIEVEMENT_URL_RE.search(stripped)
    if match:
        achievement_id = int(match.group(1))
        return achievement_id if achievement_id > 0 else None

    return None


def parse_achievement_refs(refs: Sequence[str]) -> Tuple[List[int], List[str]]:
    """Convert raw user references into ids, collecting one error per bad position.

    Returns:
        (ids, errors); ``ids`` is only meaningful when ``errors`` is empty.
    """
    expected = EventDefaults.WORD_LENGTH
    if len(refs) != expected:
        return [], [f"You must submit exactly {expected} achievements, got {len(refs)}."]

    ids: List[int] = []
    errors: List[str] = []
    for position, ref in enumerate(refs, start=1):
        achievement_id = extract_achievement_id(ref)
        if achievement_id is None:
            errors.append(
                f'Achievement {position}: "{ref.strip()}" is not a valid '
                f"RetroAchievements URL or achievement ID"
            )
        else:
            ids.append(achievement_id)

    return ids, errors
