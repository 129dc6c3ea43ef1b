"""
Models module - Pydantic schemas for data validation.

This module defines:
- Request models: Input validation for API endpoints
- Response models: Output formatting for API responses
"""
from aptix.models.agent import (
    InteractRequest,
    InteractResponse,
    HealthResponse,
    ErrorResponse,
    MESSAGE_MIN_LENGTH,
    MESSAGE_MAX_LENGTH,
)

__all__ = [
    "InteractRequest",
    "InteractResponse",
    "HealthResponse",
    "ErrorResponse",
    "MESSAGE_MIN_LENGTH",
    "MESSAGE_MAX_LENGTH",
]
