"""
Database module - Document store access layer.

This module handles:
- Connection management and startup policy
- Agent profile lookups
- Append-only analytics records
"""
from aptix.database.connection import DatabaseConnection, open_document_store
from aptix.database.models import AgentDocument, AnalyticsEvent, Base
from aptix.database.repository import (
    AgentProfile,
    AgentRepository,
    AnalyticsRecord,
    AnalyticsRepository,
    DEFAULT_PERSONALITY,
)
from aptix.database.init_db import init_tables, drop_tables, initialize_document_store

__all__ = [
    # Connection
    "DatabaseConnection",
    "open_document_store",
    # Models
    "AgentDocument",
    "AnalyticsEvent",
    "Base",
    # Repositories
    "AgentProfile",
    "AgentRepository",
    "AnalyticsRecord",
    "AnalyticsRepository",
    "DEFAULT_PERSONALITY",
    # Init
    "init_tables",
    "drop_tables",
    "initialize_document_store",
]
