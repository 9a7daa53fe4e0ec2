"""Application-wide exception classes."""

from __future__ import annotations


class ApplicationError(Exception):
    """Base exception for all application errors."""
    pass


class ConfigurationError(ApplicationError):
    """Raised when configuration is invalid."""
    pass


class DatabaseError(ApplicationError):
    """Base exception for database-related errors."""
    pass


class ConnectionPoolError(DatabaseError):
    """Raised when database connection pool has issues."""
    pass


class RepositoryError(DatabaseError):
    """Raised when repository operation fails."""
    pass


class ServiceError(ApplicationError):
    """Base exception for service-level errors."""
    pass


class ExternalServiceError(ServiceError):
    """Raised when an external API did not respond usably."""

    def __init__(self, service: str, reason: str) -> None:
        super().__init__(f"{service}: {reason}")
        self.service = service
        self.reason = reason
