"""
Tests for environment configuration and document store startup policy.
"""
import pytest

from aptix.core.config import get_settings
from aptix.database.connection import open_document_store
from aptix.database.init_db import initialize_document_store
from tests.conftest import make_settings


CONFIG_KEYS = (
    "APP_ENV", "NODE_ENV", "LLM_PROVIDER", "LLM_MODEL", "LLM_MAX_TOKENS",
    "LLM_TEMPERATURE", "DATABASE_URL", "PORT", "CORS_ORIGIN",
)


@pytest.fixture
def clean_env(monkeypatch):
    for key in CONFIG_KEYS:
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()


class TestSettings:

    def test_defaults(self, clean_env):
        settings = get_settings()

        assert settings.llm_provider == "groq"
        assert settings.llm_max_tokens == 500
        assert settings.llm_temperature == 0.7
        assert settings.port == 3000
        assert settings.cors_origin == "*"
        assert settings.is_development()

    def test_node_env_honoured(self, clean_env):
        clean_env.setenv("NODE_ENV", "production")
        assert get_settings().is_production()

    def test_app_env_wins_over_node_env(self, clean_env):
        clean_env.setenv("NODE_ENV", "production")
        clean_env.setenv("APP_ENV", "staging")
        assert get_settings().app_env == "staging"

    def test_overrides(self, clean_env):
        clean_env.setenv("LLM_PROVIDER", "Google")
        clean_env.setenv("LLM_MODEL", "gemini-1.5-flash")
        clean_env.setenv("LLM_MAX_TOKENS", "256")
        clean_env.setenv("DATABASE_URL", "postgres://u:p@db/aptix")

        settings = get_settings()

        assert settings.llm_provider == "google"
        assert settings.llm_model == "gemini-1.5-flash"
        assert settings.llm_max_tokens == 256
        assert settings.database_url == "postgresql://u:p@db/aptix"

    def test_unknown_provider_rejected(self, clean_env):
        clean_env.setenv("LLM_PROVIDER", "carrier-pigeon")
        with pytest.raises(ValueError):
            get_settings()


class TestDocumentStoreStartup:

    def test_open_failure_degrades_outside_production(self):
        settings = make_settings(app_env="development", database_url="not-a-valid-url")
        assert open_document_store(settings) is None

    def test_open_failure_is_fatal_in_production(self):
        settings = make_settings(app_env="production", database_url="not-a-valid-url")
        with pytest.raises(Exception):
            open_document_store(settings)

    def test_initialize_creates_tables(self, sqlite_store):
        assert initialize_document_store(sqlite_store, production=False) is True

    def test_unreachable_store_degrades_outside_production(self, sqlite_store, monkeypatch):
        monkeypatch.setattr(sqlite_store, "check_connection", lambda: False)
        assert initialize_document_store(sqlite_store, production=False) is False

    def test_unreachable_store_is_fatal_in_production(self, sqlite_store, monkeypatch):
        monkeypatch.setattr(sqlite_store, "check_connection", lambda: False)
        with pytest.raises(RuntimeError):
            initialize_document_store(sqlite_store, production=True)
