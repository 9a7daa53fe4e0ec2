"""Tests for the submission lifecycle."""

import asyncio
from datetime import timedelta

import aiosqlite

from core.constants import ValidationState
from services.submission_service import SubmissionStore

from conftest import EVENT_DAY

IDS = [1, 2, 3, 4, 5]
REFS = ["1", "2", "3", "4", "5"]


async def test_submit_creates_pending_row(db):
    store = SubmissionStore()

    submission = await store.submit("tg:1", EVENT_DAY, IDS, REFS)

    assert submission.is_pending
    assert submission.revision == 1
    assert submission.achievement_ids == IDS
    assert submission.achievement_refs == REFS
    assert submission.validated_at is None


async def test_mark_validated_is_final(db):
    store = SubmissionStore()
    submission = await store.submit("tg:1", EVENT_DAY, IDS, REFS)

    assert await store.mark_validated(submission.id, submission.revision, True, "ok")
    assert not await store.mark_validated(submission.id, submission.revision, False, "late")

    stored = await store.get("tg:1", EVENT_DAY)
    assert stored.validation_state is ValidationState.VALID
    assert stored.validation_message == "ok"
    assert stored.validated_at is not None


async def test_resubmit_resets_to_pending_and_bumps_revision(db):
    store = SubmissionStore()
    first = await store.submit("tg:1", EVENT_DAY, IDS, REFS)
    await store.mark_validated(first.id, first.revision, False, "bad letters")

    second = await store.submit("tg:1", EVENT_DAY, [5, 4, 3, 2, 1], ["5", "4", "3", "2", "1"])

    assert second.id == first.id
    assert second.revision == first.revision + 1
    assert second.is_pending
    assert second.validation_message is None
    assert second.validated_at is None
    assert second.achievement_ids == [5, 4, 3, 2, 1]


async def test_stale_revision_cannot_be_marked(db):
    store = SubmissionStore()
    first = await store.submit("tg:1", EVENT_DAY, IDS, REFS)
    second = await store.submit("tg:1", EVENT_DAY, IDS, REFS)

    assert not await store.mark_validated(first.id, first.revision, True, "stale")
    assert (await store.get("tg:1", EVENT_DAY)).is_pending
    assert await store.mark_validated(second.id, second.revision, True, "fresh")


async def test_reset_deletes_only_that_day(db):
    store = SubmissionStore()
    yesterday = EVENT_DAY - timedelta(days=1)
    await store.submit("tg:1", yesterday, IDS, REFS)
    submission = await store.submit("tg:1", EVENT_DAY, IDS, REFS)

    assert await store.reset("tg:1", EVENT_DAY)
    assert not await store.reset("tg:1", EVENT_DAY)
    assert await store.get("tg:1", EVENT_DAY) is None
    assert await store.get("tg:1", yesterday) is not None
    assert not await store.mark_validated(submission.id, submission.revision, True, "gone")


async def test_history_is_newest_first(db):
    store = SubmissionStore()
    for offset in range(3):
        await store.submit("tg:1", EVENT_DAY - timedelta(days=offset), IDS, REFS)
    await store.submit("tg:2", EVENT_DAY, IDS, REFS)

    history = await store.history("tg:1")

    assert [s.date for s in history] == [EVENT_DAY - timedelta(days=i) for i in range(3)]
    assert len(await store.history("tg:1", limit=2)) == 2


async def test_interleaved_resubmissions_keep_their_own_revision(db, monkeypatch):
    original_execute = aiosqlite.Connection.execute

    async def slow_execute(self, sql, *args, **kwargs):
        cursor = await original_execute(self, sql, *args, **kwargs)
        if sql.lstrip().startswith("INSERT INTO wordle_submissions"):
            # Yield while the upsert is still open so the other submit can run
            await asyncio.sleep(0.05)
        return cursor

    monkeypatch.setattr(aiosqlite.Connection, "execute", slow_execute)
    store = SubmissionStore()
    other_ids = [11, 12, 13, 14, 15]

    first, second = await asyncio.gather(
        store.submit("tg:1", EVENT_DAY, IDS, REFS),
        store.submit("tg:1", EVENT_DAY, other_ids, [str(i) for i in other_ids]),
    )

    assert first.revision != second.revision
    assert {first.revision, second.revision} == {1, 2}
    assert first.achievement_ids == IDS
    assert second.achievement_ids == other_ids

    older, newer = sorted((first, second), key=lambda s: s.revision)
    assert not await store.mark_validated(older.id, older.revision, False, "outdated")
    assert await store.mark_validated(newer.id, newer.revision, True, "current")
    stored = await store.get("tg:1", EVENT_DAY)
    assert stored.validation_state is ValidationState.VALID
    assert stored.achievement_ids == newer.achievement_ids
