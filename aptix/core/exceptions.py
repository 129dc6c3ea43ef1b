"""
Custom Exceptions - Application-specific error classes.

This module defines a hierarchy of exceptions for clean error handling:
- Each exception has a status code and the envelope "error" string
- Used by the API layer for consistent {error, message} responses
- Collaborator faults are never rendered verbatim; routes translate
  them to InternalServerError with a generic message
"""
from typing import Optional


class AptixException(Exception):
    """
    Base exception for all API errors.

    Subclass this for specific error types.
    """
    status_code: int = 500
    error: str = "Internal server error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        """Convert to error response envelope."""
        return {
            "error": self.error,
            "message": self.message,
        }


class ValidationError(AptixException):
    """Raised when an inbound request body fails schema validation."""
    status_code = 400
    error = "Validation error"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class AgentNotFoundError(AptixException):
    """Raised when the named agent has no profile in the document store."""
    status_code = 404
    error = "Agent not found"

    def __init__(self, agent_name: str):
        super().__init__(f"The agent '{agent_name}' does not exist in the database")
        self.agent_name = agent_name


class RouteNotFoundError(AptixException):
    """Raised for requests that match no endpoint."""
    status_code = 404
    error = "Not found"

    def __init__(self, message: str = "The requested endpoint does not exist"):
        super().__init__(message)


class RateLimitExceeded(AptixException):
    """Raised when a client exceeds the rate limit."""
    status_code = 429
    error = "Too many requests"

    def __init__(self, retry_after: int, window_minutes: int = 15, limit: Optional[int] = None):
        super().__init__(
            f"Too many requests from this IP, please try again after {window_minutes} minutes"
        )
        self.retry_after = retry_after
        self.limit = limit

    def headers(self) -> dict:
        """Response headers advertising when the client may retry."""
        headers = {
            "Retry-After": str(self.retry_after),
            "RateLimit-Remaining": "0",
            "RateLimit-Reset": str(self.retry_after),
        }
        if self.limit is not None:
            headers["RateLimit-Limit"] = str(self.limit)
        return headers


class InternalServerError(AptixException):
    """Generic 500 returned to clients in place of any collaborator fault."""
    status_code = 500
    error = "Internal server error"

    def __init__(self, message: str = "An unexpected error occurred"):
        super().__init__(message)


class RepositoryUnavailable(AptixException):
    """Raised when the document store cannot be read or written."""

    def __init__(self, message: str = "Document store unavailable"):
        super().__init__(message)


class ProviderUnavailable(AptixException):
    """Raised when the generation provider call fails or times out."""

    def __init__(self, message: str = "Generation provider unavailable"):
        super().__init__(message)


class AnalyticsWriteError(AptixException):
    """Failure to append an analytics record. Logged, never raised to clients."""

    def __init__(self, message: str = "Failed to record analytics"):
        super().__init__(message)
