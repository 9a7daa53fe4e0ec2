"""Tests for daily word resolution and admin overrides."""

import asyncio
from datetime import timedelta

from services.daily_word_service import DailyWordResolver
from services.word_source import fallback_word

from conftest import EVENT_DAY, FakeWordSource


async def test_resolve_creates_word_once(db, word_source):
    resolver = DailyWordResolver(word_source)

    first = await resolver.resolve(EVENT_DAY)
    second = await resolver.resolve(EVENT_DAY)

    assert first.word == "ASSET"
    assert first.letters == ["A", "S", "S", "E", "T"]
    assert first.source == "api"
    assert second.id == first.id
    assert word_source.calls == 1


async def test_resolve_uses_fallback_when_source_is_down(db):
    resolver = DailyWordResolver(FakeWordSource(None))

    stored = await resolver.resolve(EVENT_DAY)

    assert stored.word == fallback_word(EVENT_DAY)
    assert stored.source == "fallback"


async def test_resolve_rejects_malformed_source_word(db):
    resolver = DailyWordResolver(FakeWordSource("toolong"))

    stored = await resolver.resolve(EVENT_DAY)

    assert stored.word == fallback_word(EVENT_DAY)


async def test_concurrent_first_requests_agree_on_one_word(db):
    first = DailyWordResolver(FakeWordSource("ASSET"))
    second = DailyWordResolver(FakeWordSource("BRAVE"))

    results = await asyncio.gather(*(
        resolver.resolve(EVENT_DAY) for resolver in (first, second, first, second)
    ))

    assert len({word.word for word in results}) == 1
    assert len({word.id for word in results}) == 1


async def test_override_replaces_today_only(db, word_source):
    resolver = DailyWordResolver(word_source)
    yesterday = EVENT_DAY - timedelta(days=1)
    await resolver.resolve(yesterday)
    await resolver.resolve(EVENT_DAY)

    stored = await resolver.override_word(EVENT_DAY, "brave")

    assert stored.word == "BRAVE"
    assert stored.letters == ["B", "R", "A", "V", "E"]
    assert stored.source == "admin"
    assert (await resolver.resolve(EVENT_DAY)).word == "BRAVE"
    assert (await resolver.get_word_for_date(yesterday)).word == "ASSET"


async def test_override_before_first_request_is_kept(db, word_source):
    resolver = DailyWordResolver(word_source)

    await resolver.override_word(EVENT_DAY, "CRANE")

    assert (await resolver.resolve(EVENT_DAY)).word == "CRANE"
    assert word_source.calls == 0


async def test_override_rejects_invalid_word(db, word_source):
    resolver = DailyWordResolver(word_source)
    await resolver.resolve(EVENT_DAY)

    assert await resolver.override_word(EVENT_DAY, "ab1de") is None
    assert await resolver.override_word(EVENT_DAY, "four") is None
    assert (await resolver.get_word_for_date(EVENT_DAY)).word == "ASSET"


async def test_get_word_for_date_does_not_create(db, word_source):
    resolver = DailyWordResolver(word_source)

    assert await resolver.get_word_for_date(EVENT_DAY) is None
    assert word_source.calls == 0
