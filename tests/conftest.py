"""Shared fixtures: fake collaborators that count calls, and an app wired to them."""
from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from aptix.core.config import Settings
from aptix.core.rate_limiter import RateLimiter
from aptix.database.connection import DatabaseConnection
from aptix.database.init_db import init_tables
from aptix.database.repository import AgentProfile, AnalyticsRecord
from aptix.llm.client import CompletionClient
from aptix.services.agent_service import AgentService
from aptix.services.analytics_service import AnalyticsRecorder


def make_settings(**overrides) -> Settings:
    values = dict(
        app_name="Aptix API (test)",
        app_env="test",
        log_level="WARNING",
        port=3000,
        cors_origin="*",
        database_url="sqlite://",
        db_auto_init=True,
        llm_provider="groq",
        groq_api_key="test-key",
        google_api_key="",
        llm_model="llama-3.3-70b-versatile",
        llm_temperature=0.7,
        llm_max_tokens=500,
        llm_timeout_seconds=5.0,
        rate_limit_max_requests=1000,
        rate_limit_window_minutes=15,
        enable_audit_logging=False,
    )
    values.update(overrides)
    return Settings(**values)


class FakeAgentRepository:
    """In-memory agent store keyed by exact name."""

    def __init__(self, agents: Optional[Dict[str, dict]] = None, error: Optional[Exception] = None):
        self.agents = dict(agents or {})
        self.error = error
        self.calls: List[str] = []

    async def fetch(self, name: str) -> Optional[AgentProfile]:
        self.calls.append(name)
        if self.error is not None:
            raise self.error
        if name not in self.agents:
            return None
        return AgentProfile(name=name, fields=dict(self.agents[name]))


class StubCompletionClient(CompletionClient):
    """Completion client whose provider call is scripted."""

    provider = "stub"

    def __init__(self, reply: Optional[str] = "Solana's market cap moves fast; check a live tracker.",
                 error: Optional[Exception] = None):
        super().__init__(model="stub-model")
        self.reply = reply
        self.error = error
        self.calls: List[tuple] = []

    async def _create(self, system_prompt: str, user_message: str) -> Optional[str]:
        self.calls.append((system_prompt, user_message))
        if self.error is not None:
            raise self.error
        return self.reply


class FakeAnalyticsRepository:
    def __init__(self, error: Optional[Exception] = None):
        self.error = error
        self.records: List[AnalyticsRecord] = []
        self.calls = 0

    async def append(self, record: AnalyticsRecord) -> None:
        self.calls += 1
        if self.error is not None:
            raise self.error
        self.records.append(record)


AURA = {
    "personality": "Helpful and concise market analyst",
    "description": "",
    "chain": "solana",
    "createdBy": "aptix",
}


@pytest.fixture
def agents():
    return FakeAgentRepository({"Aura": dict(AURA)})


@pytest.fixture
def completion():
    return StubCompletionClient()


@pytest.fixture
def analytics_repo():
    return FakeAnalyticsRepository()


@pytest.fixture
def service(agents, completion, analytics_repo):
    return AgentService(
        agents=agents,
        completion_client=completion,
        analytics=AnalyticsRecorder(analytics_repo),
    )


@pytest.fixture
def client(service):
    from aptix.api.main import create_app

    app = create_app(
        settings=make_settings(),
        agent_service=service,
        rate_limiter=RateLimiter(max_requests=1000, window_minutes=15),
    )
    return TestClient(app)


@pytest.fixture
def sqlite_store():
    """A DatabaseConnection over a private in-memory SQLite database with tables created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    db = DatabaseConnection(engine=engine)
    init_tables(db)
    yield db
    db.close()
