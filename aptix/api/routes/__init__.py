"""
API Routes module - Endpoint definitions.

Each file in this module defines routes for a specific domain:
- agents.py : Agent metadata and interaction endpoints
- health.py : Health check endpoint
"""
from aptix.api.routes.agents import router as agents_router
from aptix.api.routes.health import router as health_router

__all__ = [
    "agents_router",
    "health_router",
]
