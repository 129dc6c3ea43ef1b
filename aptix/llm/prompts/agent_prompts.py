"""
Agent Persona Prompts - System prompt for agent interactions.

The system prompt is built only from the agent name, personality and
description. It is a pure function of those three values, so the same
profile always produces the same prompt.
"""
from typing import Optional

from aptix.database.repository import AgentProfile, DEFAULT_PERSONALITY


AGENT_SYSTEM_PROMPT_TEMPLATE = """You are {name}, a helpful AI agent with the following personality: {personality} {description}

When responding, always maintain your character and consider your knowledge about the Solana blockchain environment.
Your answers should be concise, helpful, and accurate. If you don't know something, admit it rather than making up information.
"""


def format_agent_system_prompt(
    name: str,
    personality: Optional[str] = None,
    description: Optional[str] = None,
) -> str:
    """
    Interpolate persona fields into the system prompt template.

    Args:
        name: Agent name
        personality: Persona text; "neutral and general." when missing or empty
        description: Free-text description; empty when missing

    Returns:
        Complete system prompt for the LLM
    """
    return AGENT_SYSTEM_PROMPT_TEMPLATE.format(
        name=name,
        personality=personality or DEFAULT_PERSONALITY,
        description=description or "",
    )


def get_agent_system_prompt(name: str, profile: AgentProfile) -> str:
    """Build the system prompt for ``profile`` speaking as ``name``."""
    return format_agent_system_prompt(name, profile.personality, profile.description)
