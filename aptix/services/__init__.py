"""
Services module - Business logic and orchestration.

Services contain the core application logic:
- No HTTP concerns (those belong in api/)
- No SQL (that belongs in database/)
- Orchestrate between the document store and the LLM layer
"""
from aptix.services.agent_service import AgentService
from aptix.services.analytics_service import AnalyticsRecorder, AnalyticsOutcome

__all__ = [
    "AgentService",
    "AnalyticsRecorder",
    "AnalyticsOutcome",
]
