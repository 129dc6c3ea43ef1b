"""
Agent and Analytics Repositories - document store access.

AgentRepository.fetch() distinguishes exactly two outcomes of a lookup:
the profile exists (an AgentProfile) or it does not (None). Storage
faults are a third, separate condition and raise RepositoryUnavailable.

SQLAlchemy calls are blocking, so both repositories hop to the
threadpool and expose coroutine methods to the async pipeline.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from starlette.concurrency import run_in_threadpool

from aptix.core.exceptions import AnalyticsWriteError, RepositoryUnavailable
from aptix.core.logging_config import LoggerMixin
from aptix.database.connection import DatabaseConnection
from aptix.database.models import AgentDocument, AnalyticsEvent


DEFAULT_PERSONALITY = "neutral and general."


@dataclass(frozen=True)
class AgentProfile:
    """
    Read-only view of an agent document.

    Attributes:
        name: Agent name (the lookup key)
        fields: Every stored field, returned verbatim by the metadata endpoint
    """
    name: str
    fields: Dict[str, Any] = field(default_factory=dict)

    @property
    def personality(self) -> Optional[str]:
        value = self.fields.get("personality")
        return value if isinstance(value, str) and value else None

    @property
    def description(self) -> Optional[str]:
        value = self.fields.get("description")
        return value if isinstance(value, str) and value else None

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.fields)


@dataclass(frozen=True)
class AnalyticsRecord:
    """Usage record for one successful interaction. Timestamp is server-assigned."""
    agent: str
    message_length: int
    response_length: int
    type: str = "interaction"


class AgentRepository(LoggerMixin):
    """
    Point lookups of agent profiles by exact name.

    Constructed with ``db=None`` when the store failed to open in a
    non-production deployment; every call then raises RepositoryUnavailable.
    """

    def __init__(self, db: Optional[DatabaseConnection]):
        self.db = db

    async def fetch(self, name: str) -> Optional[AgentProfile]:
        """
        Look up an agent profile.

        Returns:
            The profile, or None if no document exists under ``name``

        Raises:
            RepositoryUnavailable: the store could not be read
        """
        return await run_in_threadpool(self._fetch_sync, name)

    def _fetch_sync(self, name: str) -> Optional[AgentProfile]:
        if self.db is None:
            raise RepositoryUnavailable("Document store is not initialized")

        try:
            with self.db.get_session() as session:
                document = session.get(AgentDocument, name)
                # Some backends compare keys case-insensitively
                if document is None or document.name != name:
                    return None
                return AgentProfile(name=document.name, fields=document.to_dict())
        except SQLAlchemyError as e:
            raise RepositoryUnavailable(f"Failed to read agent '{name}': {e}") from e


class AnalyticsRepository(LoggerMixin):
    """Append-only writer for usage analytics."""

    def __init__(self, db: Optional[DatabaseConnection]):
        self.db = db

    async def append(self, record: AnalyticsRecord) -> None:
        """
        Append one analytics record.

        Raises:
            AnalyticsWriteError: the record could not be written
        """
        await run_in_threadpool(self._append_sync, record)

    def _append_sync(self, record: AnalyticsRecord) -> None:
        if self.db is None:
            raise AnalyticsWriteError("Document store is not initialized")

        try:
            with self.db.get_session() as session:
                session.add(AnalyticsEvent(
                    agent=record.agent,
                    message_length=record.message_length,
                    response_length=record.response_length,
                    type=record.type,
                ))
        except SQLAlchemyError as e:
            raise AnalyticsWriteError(f"Failed to record analytics: {e}") from e
