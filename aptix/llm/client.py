"""
LLM Client for agent completions.

This module provides a single-shot chat completion interface over two
providers, selected by LLM_PROVIDER:
- groq   : Groq chat completions (default)
- google : Google Gemini

Every call is made exactly once. The SDK's own retries are disabled;
retry policy belongs to the deployment, not the request path. Any
transport, timeout or provider-side failure surfaces as ProviderUnavailable.
"""
from abc import ABC, abstractmethod
from typing import Optional

import google.generativeai as genai
from groq import AsyncGroq

from aptix.core.config import Settings
from aptix.core.exceptions import ProviderUnavailable
from aptix.core.logging_config import LoggerMixin


FALLBACK_REPLY = "I'm sorry, I couldn't process your request at this time."

DEFAULT_GEMINI_MODEL = "gemini-2.0-flash"


class CompletionClient(LoggerMixin, ABC):
    """
    Base completion client.

    Subclasses implement ``_create`` for one provider; ``complete`` adds
    error translation and the empty-output fallback.
    """

    provider = "base"

    def __init__(
        self,
        model: str,
        temperature: float = 0.7,
        max_tokens: int = 500,
        timeout_seconds: float = 30.0,
    ):
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout_seconds = timeout_seconds

    async def complete(self, system_prompt: str, user_message: str) -> str:
        """
        Generate a reply to ``user_message`` under ``system_prompt``.

        Returns:
            The first generated text, or FALLBACK_REPLY when the provider
            produced no usable text

        Raises:
            ProviderUnavailable: the provider call failed
        """
        try:
            text = await self._create(system_prompt, user_message)
        except ProviderUnavailable:
            raise
        except Exception as e:
            raise ProviderUnavailable(f"{self.provider} completion failed: {e}") from e

        if not text or not text.strip():
            self.logger.warning(f"Empty completion from {self.provider}/{self.model}, using fallback reply")
            return FALLBACK_REPLY
        return text

    @abstractmethod
    async def _create(self, system_prompt: str, user_message: str) -> Optional[str]:
        """Make one provider call and return its text, if any."""


class GroqCompletionClient(CompletionClient):
    """Completion client backed by Groq chat completions."""

    provider = "groq"

    def __init__(self, api_key: str, model: str, **kwargs):
        super().__init__(model, **kwargs)
        self._api_key = api_key
        self._client: Optional[AsyncGroq] = None

    @property
    def client(self) -> AsyncGroq:
        # Built on first use so the app can start without a key configured
        if self._client is None:
            if not self._api_key:
                raise ProviderUnavailable("GROQ_API_KEY is not configured")
            self._client = AsyncGroq(
                api_key=self._api_key,
                timeout=self.timeout_seconds,
                max_retries=0,
            )
            self.logger.info(f"Groq client initialized (model={self.model})")
        return self._client

    async def _create(self, system_prompt: str, user_message: str) -> Optional[str]:
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_message},
            ],
            max_tokens=self.max_tokens,
            temperature=self.temperature,
        )
        if not response.choices:
            return None
        message = response.choices[0].message
        return message.content if message else None


class GeminiCompletionClient(CompletionClient):
    """Completion client backed by Google Gemini."""

    provider = "google"

    def __init__(self, api_key: str, model: str, **kwargs):
        # Non-Gemini model ids (e.g. the Groq default) map to the default Gemini model
        if "gemini" not in model.lower():
            model = DEFAULT_GEMINI_MODEL
        super().__init__(model, **kwargs)
        self._api_key = api_key
        self._configured = False

    def _ensure_configured(self) -> None:
        if self._configured:
            return
        if not self._api_key:
            raise ProviderUnavailable("GOOGLE_API_KEY is not configured")
        genai.configure(api_key=self._api_key)
        self._configured = True
        self.logger.info(f"Gemini client initialized (model={self.model})")

    async def _create(self, system_prompt: str, user_message: str) -> Optional[str]:
        self._ensure_configured()
        model_instance = genai.GenerativeModel(
            model_name=self.model,
            system_instruction=system_prompt,
        )
        response = await model_instance.generate_content_async(
            user_message,
            generation_config=genai.types.GenerationConfig(
                max_output_tokens=self.max_tokens,
                temperature=self.temperature,
            ),
            request_options={"timeout": self.timeout_seconds},
        )
        try:
            return response.text
        except ValueError:
            # Raised when the candidate has no text parts (e.g. safety block)
            return None


def create_completion_client(settings: Settings) -> CompletionClient:
    """Build the completion client selected by ``settings.llm_provider``."""
    options = dict(
        temperature=settings.llm_temperature,
        max_tokens=settings.llm_max_tokens,
        timeout_seconds=settings.llm_timeout_seconds,
    )
    if settings.llm_provider == "google":
        return GeminiCompletionClient(settings.google_api_key, settings.llm_model, **options)
    return GroqCompletionClient(settings.groq_api_key, settings.llm_model, **options)
