"""Core application components."""

from core.logger import setup_logger, get_logger
from core.constants import (
    ApiDefaults,
    CheckStatus,
    DatabaseDefaults,
    EventDefaults,
    FallbackWords,
    LinkStatus,
    Messages,
    SubmitStatus,
    ValidationState,
)
from core.exceptions import (
    ApplicationError,
    ConfigurationError,
    DatabaseError,
    ExternalServiceError,
    RepositoryError,
    ServiceError,
)

__all__ = [
    # Logging
    'setup_logger',
    'get_logger',
    # Constants
    'ApiDefaults',
    'CheckStatus',
    'DatabaseDefaults',
    'EventDefaults',
    'FallbackWords',
    'LinkStatus',
    'Messages',
    'SubmitStatus',
    'ValidationState',
    # Exceptions
    'ApplicationError',
    'ConfigurationError',
    'DatabaseError',
    'ExternalServiceError',
    'RepositoryError',
    'ServiceError',
]
