"""Telegram bot wrapper around aiogram."""

from __future__ import annotations

from aiogram import Bot, Dispatcher
from aiogram.fsm.storage.memory import MemoryStorage


class WordleBot:
    def __init__(self, token: str) -> None:
        self.bot = Bot(token=token)
        self.storage = MemoryStorage()
        self.dispatcher = Dispatcher(storage=self.storage)

    async def start(self) -> None:
        await self.dispatcher.start_polling(self.bot)

    async def stop(self) -> None:
        await self.dispatcher.stop_polling()
        await self.dispatcher.storage.close()
        await self.bot.session.close()
