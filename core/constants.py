"""Application-wide constants and configuration values."""

from __future__ import annotations

from enum import Enum


# Event rules
class EventDefaults:
    """Wordle Achievement Event rules."""
    WORD_LENGTH = 5
    PRIZE_THRESHOLD = 30  # successful submissions


class FallbackWords:
    """Words used when the word-of-the-day provider is unavailable."""
    WORDS: tuple[str, ...] = (
        "ASSET", "BRAVE", "CHARM", "DREAM", "EARTH", "FAITH", "GLORY", "HAPPY", "IDEAL", "JOYCE",
        "KNIFE", "LIGHT", "MAGIC", "NIGHT", "OCEAN", "PEACE", "QUIET", "RADIO", "SPACE", "TRUTH",
        "UNITY", "VOICE", "WATER", "YOUTH", "ZEBRA",
    )


# External API defaults
class ApiDefaults:
    """External HTTP API configuration."""
    WORD_API_URL = "https://wordle-api.vercel.app/api/wordle"
    RA_API_BASE_URL = "https://retroachievements.org/API"
    TIMEOUT_SECONDS = 10
    USER_AGENT = "wordle-achievement-event/1.0"


# Database constants
class DatabaseDefaults:
    """Default database configuration."""
    POOL_SIZE = 5
    BUSY_TIMEOUT = 5000  # milliseconds


# Status enums
class ValidationState(str, Enum):
    """Submission validation state."""
    PENDING = "pending"
    VALID = "valid"
    INVALID = "invalid"


class LinkStatus(str, Enum):
    """Outcome of linking a participant to an external account."""
    LINKED = "linked"
    NOT_FOUND = "not_found"
    ERROR = "error"


class CheckStatus(str, Enum):
    """Outcome of checking submitted achievements against the platform."""
    VERIFIED = "verified"
    MISSING = "missing"
    UNAVAILABLE = "unavailable"


class SubmitStatus(str, Enum):
    """Overall outcome of a submission request."""
    VALID = "valid"
    INVALID = "invalid"
    NOT_LINKED = "not_linked"
    NO_WORD = "no_word"
    BAD_INPUT = "bad_input"
    SUPERSEDED = "superseded"
    ERROR = "error"


# User-facing messages shared between services
class Messages:
    """Plain texts returned to the chat layer."""
    RETRY_LATER = "Something went wrong while saving your data. Please try again later."
    PLATFORM_UNAVAILABLE = (
        "Could not retrieve achievement data from RetroAchievements. "
        "This is a temporary problem, please try again later."
    )
    NOT_LINKED = (
        "You need to connect your RetroAchievements account first! "
        "Use /wordle_connect <username>."
    )
    NO_WORD = "Could not load today's word. Please try again later."
