"""
Agent Service - Business logic for agent lookups and interactions.

This service orchestrates the interaction pipeline:
1. Resolve the agent profile from the document store
2. Build the persona system prompt
3. Call the completion provider once
4. Record usage analytics (failure-isolated)
5. Return the reply envelope

Request validation happens before the service is called. The service
raises AgentNotFoundError for unknown agents and lets collaborator
faults (RepositoryUnavailable, ProviderUnavailable) propagate to the
route, which owns their translation to a generic 500.
"""
from typing import Any, Dict

from aptix.core.exceptions import AgentNotFoundError
from aptix.core.logging_config import get_logger
from aptix.database.repository import AgentProfile, AgentRepository
from aptix.llm.client import CompletionClient
from aptix.llm.prompts import get_agent_system_prompt
from aptix.models.agent import InteractResponse
from aptix.services.analytics_service import AnalyticsRecorder

logger = get_logger(__name__)


class AgentService:
    """
    Service for agent metadata and interactions.

    All collaborators are passed in; the service keeps no per-request
    state, so one instance serves concurrent requests.

    Example:
        >>> service = AgentService(agents, completion_client, analytics)
        >>> reply = await service.interact("Aura", "What is the current market cap of Solana?")
        >>> reply.agent
        'Aura'
    """

    def __init__(
        self,
        agents: AgentRepository,
        completion_client: CompletionClient,
        analytics: AnalyticsRecorder,
    ):
        self.agents = agents
        self.completion_client = completion_client
        self.analytics = analytics

    async def _resolve(self, name: str) -> AgentProfile:
        profile = await self.agents.fetch(name)
        if profile is None:
            logger.warning(f"Agent not found: {name}", extra={"agent": name})
            raise AgentNotFoundError(name)
        return profile

    async def get_agent(self, name: str) -> Dict[str, Any]:
        """
        Return the stored fields of an agent profile.

        Raises:
            AgentNotFoundError: no agent named ``name``
            RepositoryUnavailable: the store could not be read
        """
        profile = await self._resolve(name)
        logger.info(f"Successfully retrieved agent: {name}", extra={"agent": name})
        return profile.to_dict()

    async def interact(self, name: str, message: str) -> InteractResponse:
        """
        Send a validated message to an agent and return its reply.

        Raises:
            AgentNotFoundError: no agent named ``name``
            RepositoryUnavailable: the store could not be read
            ProviderUnavailable: the completion call failed
        """
        profile = await self._resolve(name)
        system_prompt = get_agent_system_prompt(name, profile)

        logger.info(f"Processing interaction with agent: {name}", extra={"agent": name})
        reply = await self.completion_client.complete(system_prompt, message)
        logger.info(f"Agent interaction complete: {name}", extra={"agent": name})

        outcome = await self.analytics.record(name, len(message), len(reply))
        if not outcome.ok:
            logger.warning(f"Failed to record analytics: {outcome.error}", extra={"agent": name})

        return InteractResponse(agent=name, reply=reply)
