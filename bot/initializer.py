"""Bot initialization module."""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.logger import get_logger

if TYPE_CHECKING:
    from config import Config

logger = get_logger(__name__)


class BotInitializer:
    """Handles bot initialization and handler registration."""

    def __init__(self, config: Config):
        self.config = config

    async def initialize(self):
        """Create the bot and register routers; the event service must already be initialized."""
        from bot import WordleBot
        from bot.handlers import setup_admin_handlers, setup_wordle_handlers

        bot = WordleBot(token=self.config.bot_token)

        # Admin router first so its commands are matched before participant ones
        setup_admin_handlers(bot.dispatcher, self.config.admin_ids)
        setup_wordle_handlers(bot.dispatcher)
        logger.info("✅ Handlers registered")

        return bot
