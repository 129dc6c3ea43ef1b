"""
Database Models - SQLAlchemy ORM models for the document store.

This module defines the two collections the service touches:
- agents    : one JSON document per agent, keyed by agent name
- analytics : append-only usage records, one per successful interaction

Agent documents are written by external management tooling; this
service only reads them.
"""
from typing import Any, Dict

from sqlalchemy import Column, String, Integer, DateTime, JSON, func
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class AgentDocument(Base):
    """
    Agent profile document.

    ``data`` holds every profile field (description, personality and any
    other metadata) exactly as stored; it is returned verbatim by the
    metadata endpoint.
    """
    __tablename__ = "agents"

    name = Column(String(255), primary_key=True)
    data = Column(JSON, nullable=False, default=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Return the stored document fields."""
        return dict(self.data or {})


class AnalyticsEvent(Base):
    """Usage record written after each successful interaction."""
    __tablename__ = "analytics"

    id = Column(Integer, primary_key=True, autoincrement=True)
    agent = Column(String(255), nullable=False, index=True)
    # Assigned by the database server, not the application
    timestamp = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    message_length = Column(Integer, nullable=False)
    response_length = Column(Integer, nullable=False)
    type = Column(String(32), nullable=False, default="interaction")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary using the wire field names."""
        return {
            "agent": self.agent,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "messageLength": self.message_length,
            "responseLength": self.response_length,
            "type": self.type,
        }
