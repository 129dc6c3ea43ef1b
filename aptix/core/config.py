"""
Configuration management via environment variables.

This module loads configuration from .env file using python-dotenv.
All configuration values are accessed through the Settings class.

Secrets (provider API keys, database credentials) are only ever read
from the environment and never committed alongside the code.
"""
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


# Load .env file from project root
# This must happen before accessing os.environ
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(env_path)


SUPPORTED_LLM_PROVIDERS = ("groq", "google")


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    frozen=True makes the dataclass immutable, preventing accidental
    modification of settings at runtime.

    Attributes:
        app_name: Application identifier for logging
        app_env: Deployment mode (development, staging, production)
        log_level: Logging verbosity (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        port: Port the HTTP server listens on
        cors_origin: Allowed cross-origin source ("*" for any)
        database_url: Document store connection string (SQLAlchemy URL)
        db_auto_init: Create missing document store tables at startup
        llm_provider: Generation provider ("groq" or "google")
        groq_api_key: API key for Groq
        google_api_key: API key for Google Gemini
        llm_model: Model identifier sent to the provider
        llm_temperature: Sampling temperature
        llm_max_tokens: Maximum reply length in tokens
        llm_timeout_seconds: Per-call timeout against the provider
        rate_limit_max_requests: Requests allowed per window per client
        rate_limit_window_minutes: Rate limit window length
        enable_audit_logging: Log every request through AuditMiddleware
    """
    # Application settings
    app_name: str
    app_env: str
    log_level: str
    port: int
    cors_origin: str

    # Document store settings
    database_url: str
    db_auto_init: bool

    # LLM settings
    llm_provider: str
    groq_api_key: str
    google_api_key: str
    llm_model: str
    llm_temperature: float
    llm_max_tokens: int
    llm_timeout_seconds: float

    # Safety settings
    rate_limit_max_requests: int
    rate_limit_window_minutes: int
    enable_audit_logging: bool

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.app_env.lower() == "development"

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env.lower() == "production"


def _get_env(key: str, default: Optional[str] = None) -> str:
    """
    Get environment variable with optional default.

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        Environment variable value

    Raises:
        ValueError: If required variable is not set and no default provided
    """
    value = os.environ.get(key, default)
    if value is None:
        raise ValueError(
            f"Required environment variable '{key}' is not set. "
            f"Please check your .env file."
        )
    return value


def _get_bool(key: str, default: str) -> bool:
    return _get_env(key, default).strip().lower() in ("1", "true", "yes", "on")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Settings are read once at startup; lru_cache(maxsize=1) keeps a
    single instance for the lifetime of the process. Call
    ``get_settings.cache_clear()`` to force a reload (tests do this).

    Returns:
        Settings instance with all configuration values

    Raises:
        ValueError: If a value is malformed (e.g. unknown LLM provider)
    """
    # APP_ENV wins; NODE_ENV is honoured for deployments carried over
    # from the Node version of this service
    app_env = os.environ.get("APP_ENV") or _get_env("NODE_ENV", "development")

    llm_provider = _get_env("LLM_PROVIDER", "groq").strip().lower()
    if llm_provider not in SUPPORTED_LLM_PROVIDERS:
        raise ValueError(
            f"Unsupported LLM_PROVIDER '{llm_provider}'. "
            f"Expected one of: {', '.join(SUPPORTED_LLM_PROVIDERS)}"
        )

    database_url = _get_env("DATABASE_URL", "sqlite:///./aptix.db")
    # Heroku-style URLs use the legacy dialect name
    if database_url.startswith("postgres://"):
        database_url = database_url.replace("postgres://", "postgresql://", 1)

    return Settings(
        # Application
        app_name=_get_env("APP_NAME", "Aptix API"),
        app_env=app_env,
        log_level=_get_env("LOG_LEVEL", "INFO"),
        port=int(_get_env("PORT", "3000")),
        cors_origin=_get_env("CORS_ORIGIN", "*"),

        # Document store
        database_url=database_url,
        db_auto_init=_get_bool("DB_AUTO_INIT", "true"),

        # LLM
        llm_provider=llm_provider,
        groq_api_key=_get_env("GROQ_API_KEY", ""),
        google_api_key=_get_env("GOOGLE_API_KEY", ""),
        llm_model=_get_env("LLM_MODEL", "llama-3.3-70b-versatile"),
        llm_temperature=float(_get_env("LLM_TEMPERATURE", "0.7")),
        llm_max_tokens=int(_get_env("LLM_MAX_TOKENS", "500")),
        llm_timeout_seconds=float(_get_env("LLM_TIMEOUT_SECONDS", "30")),

        # Safety
        rate_limit_max_requests=int(_get_env("RATE_LIMIT_MAX_REQUESTS", "100")),
        rate_limit_window_minutes=int(_get_env("RATE_LIMIT_WINDOW_MINUTES", "15")),
        enable_audit_logging=_get_bool("ENABLE_AUDIT_LOGGING", "true"),
    )
