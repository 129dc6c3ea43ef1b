"""
FastAPI dependencies.

Collaborators live on ``app.state`` (set by create_app), so tests can
build an app around fakes without touching module globals.
"""
from fastapi import Request

from aptix.services.agent_service import AgentService


def get_agent_service(request: Request) -> AgentService:
    """Return the AgentService attached to the application."""
    return request.app.state.agent_service
