"""
Agent Routes - Agent metadata and interaction endpoints.

- GET  /api/agent/{name}           : stored profile fields
- POST /api/agent/{name}/interact  : send a message, receive a reply

Both endpoints sit behind the per-IP rate limit on /api. Collaborator faults
are logged here with their details and answered with a generic 500;
nothing from the underlying error reaches the client.
"""
import json
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request

from aptix.api.dependencies import get_agent_service
from aptix.core.exceptions import (
    AgentNotFoundError,
    InternalServerError,
    ValidationError,
)
from aptix.core.logging_config import get_logger
from aptix.core.validators import validate_interaction
from aptix.models.agent import ErrorResponse, InteractResponse
from aptix.services.agent_service import AgentService

logger = get_logger(__name__)

AGENT_LOOKUP_FAILURE = "An unexpected error occurred while retrieving agent details"
AGENT_INTERACTION_FAILURE = "An unexpected error occurred during agent interaction"

router = APIRouter(
    prefix="/api/agent",
    tags=["Agents"],
    responses={
        404: {"model": ErrorResponse, "description": "Agent not found"},
        429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
)


def _is_json(content_type: str) -> bool:
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


async def _read_json_body(request: Request) -> Any:
    """
    Decode a JSON request body.

    Bodies that are empty or not sent as JSON are treated as an empty object.
    """
    if not _is_json(request.headers.get("content-type", "")):
        return {}
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except ValueError:
        raise ValidationError("Request body must be valid JSON") from None


@router.get(
    "/{name}",
    response_model=Dict[str, Any],
    summary="Fetch agent details",
    description="Returns the agent's stored profile fields exactly as stored.",
)
async def get_agent(
    name: str,
    service: AgentService = Depends(get_agent_service),
) -> Dict[str, Any]:
    try:
        return await service.get_agent(name)
    except AgentNotFoundError:
        raise
    except Exception as e:
        logger.error(f"Error fetching agent details: {e}", extra={"agent": name}, exc_info=True)
        raise InternalServerError(AGENT_LOOKUP_FAILURE) from e


@router.post(
    "/{name}/interact",
    response_model=InteractResponse,
    summary="Interact with an agent",
    description="""
    Send a message (1-1000 characters) to the named agent and receive
    a reply generated in the agent's persona.

    **Example body:** `{"message": "What is the current market cap of Solana?"}`
    """,
    responses={400: {"model": ErrorResponse, "description": "Validation error"}},
)
async def interact_with_agent(
    name: str,
    request: Request,
    service: AgentService = Depends(get_agent_service),
) -> InteractResponse:
    try:
        body = validate_interaction(await _read_json_body(request))
    except ValidationError as e:
        logger.warning(f"Validation error for agent interaction: {e.message}", extra={"agent": name})
        raise

    try:
        return await service.interact(name, body.message)
    except AgentNotFoundError:
        raise
    except Exception as e:
        logger.error(f"Error in agent interaction: {e}", extra={"agent": name}, exc_info=True)
        raise InternalServerError(AGENT_INTERACTION_FAILURE) from e
