"""Admin commands for the Wordle Achievement Event."""

from __future__ import annotations

from typing import Iterable

from aiogram import Router, types
from aiogram.filters import Command, CommandObject

from core import get_logger
from services.event_service import get_event_service

logger = get_logger(__name__)


class AdminHandlers:
    def __init__(self, admin_ids: Iterable[int]) -> None:
        self.admin_ids = frozenset(admin_ids)
        self.router = Router()
        self.router.name = "wordle_admin"
        self._register()

    def setup(self, dispatcher) -> None:
        dispatcher.include_router(self.router)

    def _register(self) -> None:
        self.router.message.register(self.handle_set_word, Command("wordle_setword"))
        self.router.message.register(self.handle_get_word, Command("wordle_word"))
        self.router.message.register(self.handle_eligible, Command("wordle_eligible"))

    async def _ensure_admin(self, message: types.Message) -> bool:
        if message.from_user and message.from_user.id in self.admin_ids:
            return True
        await message.answer("You don't have permission to use admin commands.")
        return False

    async def handle_set_word(self, message: types.Message, command: CommandObject) -> None:
        if not await self._ensure_admin(message):
            return

        outcome = await get_event_service().set_word((command.args or "").strip())
        if outcome.word is not None:
            logger.info(f"Admin {message.from_user.id} set today's word to {outcome.word.word}")
        await message.answer(outcome.message)

    async def handle_get_word(self, message: types.Message) -> None:
        if not await self._ensure_admin(message):
            return

        outcome = await get_event_service().get_word()
        await message.answer(outcome.message)

    async def handle_eligible(self, message: types.Message) -> None:
        if not await self._ensure_admin(message):
            return

        counters = await get_event_service().eligible_participants()
        if not counters:
            await message.answer("No participants are eligible for a prize yet.")
            return

        lines = [f"Eligible participants ({len(counters)}):"]
        lines.extend(
            f"{counter.participant_id}: {counter.successful_count} successful"
            f"{' (notified)' if counter.prize_notified else ''}"
            for counter in counters
        )
        await message.answer("\n".join(lines))


def setup_admin_handlers(dispatcher, admin_ids: Iterable[int]) -> AdminHandlers:
    handler = AdminHandlers(admin_ids)
    handler.setup(dispatcher)
    return handler
