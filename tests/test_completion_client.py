"""
Unit tests for the completion clients.

Provider SDK objects are replaced with small fakes; no network calls.
"""
import asyncio
from types import SimpleNamespace

import pytest

from aptix.core.exceptions import ProviderUnavailable
from aptix.llm import client as client_module
from aptix.llm.client import (
    DEFAULT_GEMINI_MODEL,
    CompletionClient,
    FALLBACK_REPLY,
    GeminiCompletionClient,
    GroqCompletionClient,
    create_completion_client,
)
from tests.conftest import StubCompletionClient, make_settings


class FakeCompletions:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.kwargs = []

    async def create(self, **kwargs):
        self.kwargs.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.response


def _groq_response(*contents):
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=c)) for c in contents]
    )


def _groq_client(completions: FakeCompletions) -> GroqCompletionClient:
    client = GroqCompletionClient(api_key="test-key", model="llama-3.3-70b-versatile")
    client._client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return client


class TestGroqCompletionClient:

    def test_returns_first_choice(self):
        completions = FakeCompletions(_groq_response("first", "second"))
        client = _groq_client(completions)

        assert asyncio.run(client.complete("system", "hello")) == "first"

    def test_request_shape(self):
        completions = FakeCompletions(_groq_response("ok"))
        client = _groq_client(completions)

        asyncio.run(client.complete("be Aura", "gm"))

        sent = completions.kwargs[0]
        assert sent["model"] == "llama-3.3-70b-versatile"
        assert sent["max_tokens"] == 500
        assert sent["temperature"] == 0.7
        assert sent["messages"] == [
            {"role": "system", "content": "be Aura"},
            {"role": "user", "content": "gm"},
        ]

    @pytest.mark.parametrize("response", [
        _groq_response(None),
        _groq_response(""),
        _groq_response("   "),
        SimpleNamespace(choices=[]),
    ])
    def test_no_usable_text_falls_back(self, response):
        client = _groq_client(FakeCompletions(response))
        assert asyncio.run(client.complete("system", "hello")) == FALLBACK_REPLY

    def test_provider_error_is_provider_unavailable(self):
        client = _groq_client(FakeCompletions(error=ConnectionError("reset by peer")))

        with pytest.raises(ProviderUnavailable) as exc_info:
            asyncio.run(client.complete("system", "hello"))
        assert exc_info.value.status_code == 500

    def test_provider_called_once_on_failure(self):
        completions = FakeCompletions(error=RuntimeError("503"))
        client = _groq_client(completions)

        with pytest.raises(ProviderUnavailable):
            asyncio.run(client.complete("system", "hello"))
        assert len(completions.kwargs) == 1

    def test_missing_api_key(self):
        client = GroqCompletionClient(api_key="", model="llama-3.3-70b-versatile")

        with pytest.raises(ProviderUnavailable):
            asyncio.run(client.complete("system", "hello"))


class FakeGeminiResponse:
    def __init__(self, text=None, blocked=False):
        self._text = text
        self._blocked = blocked

    @property
    def text(self):
        if self._blocked:
            raise ValueError("The response has no text parts")
        return self._text


class FakeGenerativeModel:
    """Stands in for genai.GenerativeModel and records every call."""

    instances = []

    def __init__(self, model_name, system_instruction=None):
        self.model_name = model_name
        self.system_instruction = system_instruction
        self.calls = []
        FakeGenerativeModel.instances.append(self)

    async def generate_content_async(self, contents, **kwargs):
        self.calls.append((contents, kwargs))
        outcome = FakeGenerativeModel.outcome
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def fake_genai(monkeypatch):
    configured = []
    FakeGenerativeModel.instances = []
    FakeGenerativeModel.outcome = FakeGeminiResponse("gm from gemini")
    monkeypatch.setattr(client_module.genai, "GenerativeModel", FakeGenerativeModel)
    monkeypatch.setattr(client_module.genai, "configure", lambda **kwargs: configured.append(kwargs))
    return configured


def _gemini_client(**kwargs) -> GeminiCompletionClient:
    return GeminiCompletionClient(
        api_key="g-key", model="gemini-1.5-flash", max_tokens=256, temperature=0.4,
        timeout_seconds=12.0, **kwargs
    )


class TestGeminiCompletionClient:

    def test_returns_response_text(self, fake_genai):
        assert asyncio.run(_gemini_client().complete("be Aura", "gm")) == "gm from gemini"
        assert fake_genai == [{"api_key": "g-key"}]

    def test_request_shape(self, fake_genai):
        asyncio.run(_gemini_client().complete("be Aura", "gm"))

        model = FakeGenerativeModel.instances[0]
        assert model.model_name == "gemini-1.5-flash"
        assert model.system_instruction == "be Aura"
        contents, kwargs = model.calls[0]
        assert contents == "gm"
        assert kwargs["generation_config"].max_output_tokens == 256
        assert kwargs["generation_config"].temperature == 0.4
        assert kwargs["request_options"] == {"timeout": 12.0}

    def test_configures_sdk_once(self, fake_genai):
        client = _gemini_client()

        asyncio.run(client.complete("s", "one"))
        asyncio.run(client.complete("s", "two"))

        assert len(fake_genai) == 1
        assert len(FakeGenerativeModel.instances) == 2

    @pytest.mark.parametrize("response", [
        FakeGeminiResponse(blocked=True),
        FakeGeminiResponse(""),
        FakeGeminiResponse("  \n"),
    ])
    def test_no_usable_text_falls_back(self, fake_genai, response):
        FakeGenerativeModel.outcome = response
        assert asyncio.run(_gemini_client().complete("s", "hello")) == FALLBACK_REPLY

    def test_sdk_error_is_provider_unavailable(self, fake_genai):
        FakeGenerativeModel.outcome = RuntimeError("429 Resource has been exhausted")
        client = _gemini_client()

        with pytest.raises(ProviderUnavailable):
            asyncio.run(client.complete("s", "hello"))
        assert len(FakeGenerativeModel.instances[0].calls) == 1

    def test_missing_api_key(self, fake_genai):
        client = GeminiCompletionClient(api_key="", model="gemini-1.5-flash")

        with pytest.raises(ProviderUnavailable):
            asyncio.run(client.complete("s", "hello"))
        assert fake_genai == []
        assert FakeGenerativeModel.instances == []


class TestCompletionClientBase:

    def test_stub_reply_passes_through(self):
        assert asyncio.run(StubCompletionClient(reply="gm").complete("s", "u")) == "gm"

    def test_base_client_is_abstract(self):
        with pytest.raises(TypeError):
            CompletionClient(model="any-model")


class TestFactory:

    def test_groq_is_default(self):
        client = create_completion_client(make_settings())
        assert isinstance(client, GroqCompletionClient)
        assert client.max_tokens == 500
        assert client.temperature == 0.7

    def test_google_provider(self):
        client = create_completion_client(
            make_settings(llm_provider="google", google_api_key="g-key", llm_model="gemini-1.5-flash")
        )
        assert isinstance(client, GeminiCompletionClient)
        assert client.model == "gemini-1.5-flash"

    def test_non_gemini_model_maps_to_default(self):
        client = GeminiCompletionClient(api_key="g-key", model="llama-3.3-70b-versatile")
        assert client.model == DEFAULT_GEMINI_MODEL
