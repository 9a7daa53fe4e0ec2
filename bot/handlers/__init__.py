"""Aggregate bot handlers for dispatch registration."""

from .admin import AdminHandlers, setup_admin_handlers
from .wordle import WordleHandlers, setup_wordle_handlers

__all__ = [
    "AdminHandlers",
    "setup_admin_handlers",
    "WordleHandlers",
    "setup_wordle_handlers",
]
