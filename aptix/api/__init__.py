"""
API module - FastAPI routes and HTTP handling.

This module handles:
- Request body parsing and validation
- Response and error envelope formatting
- Route definitions
"""
from aptix.api.main import app, create_app

__all__ = ["app", "create_app"]
