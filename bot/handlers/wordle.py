"""Participant commands for the Wordle Achievement Event."""

from __future__ import annotations

from aiogram import Router, types
from aiogram.filters import Command, CommandObject

from core import get_logger
from core.constants import EventDefaults
from services.event_service import get_event_service

logger = get_logger(__name__)

SUBMIT_USAGE = (
    "Usage: /wordle_submit <achievement1> <achievement2> <achievement3> <achievement4> <achievement5>\n"
    "Each achievement can be a URL like https://retroachievements.org/achievement/123456 "
    "or just the ID 123456."
)


def participant_id_of(message: types.Message) -> str:
    return str(message.from_user.id)


class WordleHandlers:
    def __init__(self) -> None:
        self.router = Router()
        self.router.name = "wordle"
        self._register()

    def setup(self, dispatcher) -> None:
        dispatcher.include_router(self.router)

    def _register(self) -> None:
        self.router.message.register(self.handle_connect, Command("wordle_connect"))
        self.router.message.register(self.handle_submit, Command("wordle_submit"))
        self.router.message.register(self.handle_status, Command("wordle_status"))
        self.router.message.register(self.handle_reset, Command("wordle_reset"))

    async def handle_connect(self, message: types.Message, command: CommandObject) -> None:
        username = (command.args or "").strip()
        if not username:
            await message.answer("Usage: /wordle_connect <RetroAchievements username>")
            return

        result = await get_event_service().connect(participant_id_of(message), username)
        await message.answer(result.message)

    async def handle_submit(self, message: types.Message, command: CommandObject) -> None:
        refs = (command.args or "").split()
        if len(refs) != EventDefaults.WORD_LENGTH:
            await message.answer(SUBMIT_USAGE)
            return

        service = get_event_service()
        participant_id = participant_id_of(message)
        outcome = await service.submit(participant_id, refs)

        lines = [outcome.message]
        if outcome.valid and outcome.titles and outcome.word:
            lines.append("")
            lines.extend(
                f"{letter}: {title}" for letter, title in zip(outcome.word.letters, outcome.titles)
            )
        await message.answer("\n".join(lines))

        if outcome.became_eligible:
            await service.acknowledge_prize(participant_id)

    async def handle_status(self, message: types.Message) -> None:
        report = await get_event_service().status(participant_id_of(message))
        await message.answer(report.message)

    async def handle_reset(self, message: types.Message) -> None:
        outcome = await get_event_service().reset(participant_id_of(message))
        await message.answer(outcome.message)


def setup_wordle_handlers(dispatcher) -> WordleHandlers:
    handler = WordleHandlers()
    handler.setup(dispatcher)
    return handler
