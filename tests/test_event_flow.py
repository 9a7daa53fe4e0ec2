"""End-to-end tests for the event use cases."""

from datetime import timedelta

import pytest

from core.constants import Messages, SubmitStatus, ValidationState
from core.exceptions import RepositoryError
from database.repositories import SubmissionRepository
from services.account_service import AccountLinkManager
from services.daily_word_service import DailyWordResolver
from services.event_service import EventService
from services.progress_service import ProgressTracker
from services.submission_service import SubmissionStore
from services.submission_validator import SubmissionValidator

from conftest import EVENT_DAY

REFS = ["101", "102", "103", "104", "105"]
MATCHING = ((101, "Apple Picker"), (102, "Skyward"), (103, "Snake Eater"), (104, "Egg Hunt"), (105, "Top Speed"))


@pytest.fixture
async def linked(event_service):
    await event_service.connect("tg:1", "retrofan")
    return event_service


async def test_valid_submission(linked, platform):
    platform.earn("retrofan", EVENT_DAY, *MATCHING)

    outcome = await linked.submit("tg:1", REFS, today=EVENT_DAY)

    assert outcome.status is SubmitStatus.VALID
    assert outcome.valid
    assert outcome.word.word == "ASSET"
    assert outcome.titles == [title for _, title in MATCHING]
    assert outcome.message == "All achievement titles match the required letters!"
    assert outcome.progress.successful_count == 1
    assert outcome.progress.total_count == 1

    stored = await linked.submissions.get("tg:1", EVENT_DAY)
    assert stored.validation_state is ValidationState.VALID


async def test_achievement_earned_on_other_day_is_missing(linked, platform):
    platform.earn("retrofan", EVENT_DAY, *MATCHING[:4])
    platform.earn("retrofan", EVENT_DAY - timedelta(days=1), MATCHING[4])

    outcome = await linked.submit("tg:1", REFS, today=EVENT_DAY)

    assert outcome.status is SubmitStatus.INVALID
    assert outcome.message == "The following achievement(s) were not earned on 2025-03-14: 105"
    assert outcome.progress.successful_count == 0
    assert outcome.progress.total_count == 1
    stored = await linked.submissions.get("tg:1", EVENT_DAY)
    assert stored.validation_state is ValidationState.INVALID


async def test_wrong_letter_names_only_that_position(linked, platform):
    earned = list(MATCHING)
    earned[2] = (103, "Quick Draw")
    platform.earn("retrofan", EVENT_DAY, *earned)

    outcome = await linked.submit("tg:1", REFS, today=EVENT_DAY)

    assert outcome.status is SubmitStatus.INVALID
    assert "Achievement 3:" in outcome.message
    assert 'starts with "Q" but needs to start with "S"' in outcome.message
    for position in (1, 2, 4, 5):
        assert f"Achievement {position}:" not in outcome.message


async def test_resubmission_after_invalid_result(linked, platform):
    platform.earn("retrofan", EVENT_DAY, *MATCHING, (106, "Quick Draw"))

    first = await linked.submit("tg:1", ["101", "102", "106", "104", "105"], today=EVENT_DAY)
    second = await linked.submit("tg:1", REFS, today=EVENT_DAY)

    assert first.status is SubmitStatus.INVALID
    assert second.status is SubmitStatus.VALID
    assert second.submission.id == first.submission.id
    assert second.submission.revision == first.submission.revision + 1
    assert second.progress.successful_count == 1
    assert second.progress.total_count == 2


async def test_submit_requires_link(event_service, platform):
    outcome = await event_service.submit("tg:9", REFS, today=EVENT_DAY)

    assert outcome.status is SubmitStatus.NOT_LINKED
    assert outcome.message == Messages.NOT_LINKED
    assert platform.queries == []


async def test_bad_input_stores_nothing(linked, platform):
    outcome = await linked.submit("tg:1", ["101", "oops", "103", "104", "105"], today=EVENT_DAY)

    assert outcome.status is SubmitStatus.BAD_INPUT
    assert outcome.errors == [
        'Achievement 2: "oops" is not a valid RetroAchievements URL or achievement ID'
    ]
    assert await linked.submissions.get("tg:1", EVENT_DAY) is None
    assert platform.queries == []


async def test_platform_outage_counts_as_invalid(linked, platform):
    platform.available = False

    outcome = await linked.submit("tg:1", REFS, today=EVENT_DAY)

    assert outcome.status is SubmitStatus.INVALID
    assert outcome.message == Messages.PLATFORM_UNAVAILABLE
    assert outcome.progress.total_count == 1


async def test_reaching_threshold_announces_prize(db, word_source, platform):
    service = EventService(
        accounts=AccountLinkManager(platform),
        words=DailyWordResolver(word_source),
        validator=SubmissionValidator(platform),
        submissions=SubmissionStore(),
        progress=ProgressTracker(threshold=2),
    )
    await service.connect("tg:1", "retrofan")
    for offset in range(3):
        day = EVENT_DAY + timedelta(days=offset)
        platform.earn("retrofan", day, *MATCHING)

    first = await service.submit("tg:1", REFS, today=EVENT_DAY)
    second = await service.submit("tg:1", REFS, today=EVENT_DAY + timedelta(days=1))
    third = await service.submit("tg:1", REFS, today=EVENT_DAY + timedelta(days=2))

    assert not first.became_eligible
    assert second.became_eligible
    assert second.message.endswith("Congratulations! You're now eligible for a prize!")
    assert not third.became_eligible
    assert [c.participant_id for c in await service.eligible_participants()] == ["tg:1"]
    assert await service.acknowledge_prize("tg:1")


async def test_status_and_reset(linked, platform):
    platform.earn("retrofan", EVENT_DAY, *MATCHING)

    before = await linked.status("tg:1", today=EVENT_DAY)
    assert "Today's word: ASSET (A - S - S - E - T)" in before.message
    assert "not submitted yet" in before.message
    assert before.remaining == 30

    await linked.submit("tg:1", REFS, today=EVENT_DAY)
    after = await linked.status("tg:1", today=EVENT_DAY)
    assert "Today's submission: valid" in after.message
    assert "Progress: 1/30 successful, 1 total" in after.message

    assert (await linked.reset("tg:1", today=EVENT_DAY)).reset
    assert not (await linked.reset("tg:1", today=EVENT_DAY)).reset
    # Counters are never rolled back by a reset
    assert (await linked.status("tg:1", today=EVENT_DAY)).progress.successful_count == 1


async def test_status_and_reset_require_link(event_service):
    status = await event_service.status("tg:9", today=EVENT_DAY)
    reset = await event_service.reset("tg:9", today=EVENT_DAY)

    assert status.message == Messages.NOT_LINKED
    assert not reset.reset


async def test_admin_word_commands(event_service):
    assert (await event_service.get_word(today=EVENT_DAY)).word is None

    rejected = await event_service.set_word("ab1de", today=EVENT_DAY)
    assert rejected.word is None

    outcome = await event_service.set_word("crane", today=EVENT_DAY)
    assert outcome.word.word == "CRANE"
    assert outcome.message == "Today's word (2025-03-14) has been set to CRANE."

    shown = await event_service.get_word(today=EVENT_DAY)
    assert shown.message == "Today's word (2025-03-14): CRANE [admin]"


async def test_storage_failure_while_marking_shows_retry_message(linked, platform, monkeypatch):
    platform.earn("retrofan", EVENT_DAY, *MATCHING)

    async def failing_mark(submission_id, revision, state, message):
        raise RepositoryError("disk I/O error")

    monkeypatch.setattr(SubmissionRepository, "mark_validated", staticmethod(failing_mark))

    outcome = await linked.submit("tg:1", REFS, today=EVENT_DAY)

    assert outcome.status is SubmitStatus.ERROR
    assert outcome.message == Messages.RETRY_LATER
    assert outcome.progress is None
    assert await linked.progress.get("tg:1") is None
    assert (await linked.submissions.get("tg:1", EVENT_DAY)).is_pending


async def test_outdated_validation_is_reported_as_superseded(linked, platform, monkeypatch):
    platform.earn("retrofan", EVENT_DAY, *MATCHING)
    original_validate = linked.validator.validate

    async def validate_then_resubmit(username, achievement_ids, day):
        check = await original_validate(username, achievement_ids, day)
        await linked.submissions.submit("tg:1", day, achievement_ids, REFS)
        return check

    monkeypatch.setattr(linked.validator, "validate", validate_then_resubmit)

    outcome = await linked.submit("tg:1", REFS, today=EVENT_DAY)

    assert outcome.status is SubmitStatus.SUPERSEDED
    assert await linked.progress.get("tg:1") is None
