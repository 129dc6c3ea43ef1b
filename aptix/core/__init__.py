"""
Core module - Configuration and cross-cutting concerns.

This module provides:
- config.py         : Environment-based configuration management
- logging_config.py : Centralized logging setup
- exceptions.py     : Error hierarchy rendered as {error, message} envelopes
- validators.py     : Interaction body validation
- rate_limiter.py   : Per-client sliding window limiter
- audit.py          : Request audit and security header middleware
"""
from aptix.core.config import get_settings, Settings
from aptix.core.logging_config import setup_logging, get_logger, LoggerMixin

__all__ = [
    "get_settings",
    "Settings",
    "setup_logging",
    "get_logger",
    "LoggerMixin",
]
