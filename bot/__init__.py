"""Telegram bot package."""

from .wordle_bot import WordleBot

__all__ = ["WordleBot"]
