"""
LLM module - Language model integration.

This module handles all LLM interactions:
- Persona prompt construction
- Single-shot completion calls to Groq or Google Gemini
- Empty-output fallback and provider error translation
"""
from aptix.llm.client import (
    CompletionClient,
    GroqCompletionClient,
    GeminiCompletionClient,
    FALLBACK_REPLY,
    create_completion_client,
)

__all__ = [
    "CompletionClient",
    "GroqCompletionClient",
    "GeminiCompletionClient",
    "FALLBACK_REPLY",
    "create_completion_client",
]
