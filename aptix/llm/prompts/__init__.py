"""
Prompts module - LLM prompt templates.

Prompts are stored as separate Python files for:
- Version control of prompt changes
- Clear documentation of prompt purpose
"""
from aptix.llm.prompts.agent_prompts import (
    AGENT_SYSTEM_PROMPT_TEMPLATE,
    format_agent_system_prompt,
    get_agent_system_prompt,
)

__all__ = [
    "AGENT_SYSTEM_PROMPT_TEMPLATE",
    "format_agent_system_prompt",
    "get_agent_system_prompt",
]
