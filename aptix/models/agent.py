"""
Request and Response models for the Agent API.

These Pydantic models define the contract between client and server.
They provide:
- Type validation (InteractRequest is the interaction body schema)
- Automatic documentation
- Response serialization
"""
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, StrictStr


MESSAGE_MIN_LENGTH = 1
MESSAGE_MAX_LENGTH = 1000


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def isoformat_z(value: datetime) -> str:
    """Render an aware datetime as ISO-8601 with millisecond precision and a Z suffix."""
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class InteractRequest(BaseModel):
    """
    Request body for POST /api/agent/{name}/interact.

    Unknown keys are rejected and ``message`` must be a real string;
    no coercion from numbers or other types.
    """
    model_config = ConfigDict(extra="forbid")

    message: StrictStr = Field(
        ...,
        min_length=MESSAGE_MIN_LENGTH,
        max_length=MESSAGE_MAX_LENGTH,
        description="The message sent to the agent",
        examples=["What is the current market cap of Solana?"]
    )


class InteractResponse(BaseModel):
    """Reply envelope for a successful interaction."""
    agent: str = Field(..., description="Name of the agent that replied")
    reply: str = Field(..., min_length=1, description="Generated reply, never empty")
    timestamp: str = Field(
        default_factory=lambda: isoformat_z(utc_now()),
        description="ISO-8601 instant the reply was produced"
    )


class HealthResponse(BaseModel):
    """Response model for the /health endpoint."""
    status: str = Field(default="healthy")
    version: str
    timestamp: str = Field(default_factory=lambda: isoformat_z(utc_now()))


class ErrorResponse(BaseModel):
    """Standard error envelope."""
    error: str
    message: str
