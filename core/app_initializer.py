"""Application initialization orchestrator."""

from __future__ import annotations

import asyncio
from contextlib import suppress
from typing import Optional

import aiohttp

from config import Config, load_config
from core.constants import ApiDefaults
from core.logger import get_logger
from database import close_db_pool, init_db_pool, run_migrations
from services.event_service import init_event_service

logger = get_logger(__name__)


class ApplicationInitializer:
    """Orchestrates application initialization and lifecycle."""

    def __init__(self, config: Optional[Config] = None):
        self.config = config or load_config()
        self.db_pool = None
        self.http_session: Optional[aiohttp.ClientSession] = None
        self.event_service = None
        self.bot = None

    async def initialize(self) -> None:
        """Initialize all application components."""
        await self._init_database()
        self._init_services()

        if self._should_enable_bot():
            await self._init_bot()
        else:
            logger.info("Bot disabled: BOT_TOKEN missing or ENABLE_BOT is off")

    async def run(self) -> None:
        """Run the application."""
        try:
            if self.bot:
                logger.info("🤖 Telegram bot started")
                await self.bot.start()
            else:
                logger.info("Event engine running without chat layer")
                while True:
                    await asyncio.sleep(1)
        finally:
            await self.cleanup()

    async def cleanup(self) -> None:
        """Cleanup resources."""
        with suppress(Exception):
            if self.bot:
                await self.bot.stop()
        with suppress(Exception):
            if self.http_session:
                await self.http_session.close()
        with suppress(Exception):
            await close_db_pool()

    async def _init_database(self) -> None:
        """Initialize database pool and run migrations."""
        self.db_pool = await init_db_pool(
            database_path=self.config.database_path,
            pool_size=self.config.db_pool_size,
            busy_timeout_ms=self.config.db_busy_timeout,
        )
        await run_migrations(self.db_pool)
        logger.info("✅ Database initialized")

    def _init_services(self) -> None:
        """Create the shared HTTP session and the event engine."""
        if not self.config.ra_web_api_key:
            logger.warning("RA_WEB_API_KEY is not set; RetroAchievements lookups will fail")

        self.http_session = aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=self.config.http_timeout_seconds),
            headers={"User-Agent": ApiDefaults.USER_AGENT},
        )
        self.event_service = init_event_service(self.config, session=self.http_session)
        logger.info("✅ Event service initialized")

    def _should_enable_bot(self) -> bool:
        """Check if bot should be enabled."""
        return bool(
            self.config.enable_bot
            and self.config.bot_token
            and self.config.bot_token != "your_bot_token_here"
        )

    async def _init_bot(self) -> None:
        """Initialize Telegram bot."""
        from bot.initializer import BotInitializer

        self.bot = await BotInitializer(self.config).initialize()
        logger.info("✅ Bot initialized successfully")
