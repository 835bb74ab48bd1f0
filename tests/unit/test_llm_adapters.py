from __future__ import annotations

import asyncio
from types import SimpleNamespace

import aiohttp
import httpx
import openai
import pytest

from code_converter.config.settings import ConverterSettings
from code_converter.domain.errors import ModelResponseError, NetworkTimeoutError
from code_converter.llm.factory import build_llm_runtime
from code_converter.llm import ollama_adapter
from code_converter.llm.ollama_adapter import OllamaAdapter
from code_converter.llm.openai_adapter import AzureOpenAIAdapter, OpenAIAdapter
from code_converter.llm.runtime import LLMRequest


def _request() -> LLMRequest:
    return LLMRequest(
        system_prompt="system",
        prompt="Convert the following SQL code to Java.",
        model="gpt-4o",
        temperature=0.3,
        max_tokens=2000,
        timeout_seconds=30,
    )


def _adapter_with(create) -> OpenAIAdapter:
    adapter = OpenAIAdapter(api_key="sk-test")
    adapter._client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))
    return adapter


def _choice(content):
    return SimpleNamespace(message=SimpleNamespace(content=content))


def test_openai_adapter_sends_two_turns_and_returns_all_choices() -> None:
    seen: dict = {}

    async def create(**kwargs):
        seen.update(kwargs)
        return SimpleNamespace(choices=[_choice("a"), _choice("b")])

    texts = asyncio.run(_adapter_with(create).complete(_request()))

    assert texts == ["a", "b"]
    assert seen["model"] == "gpt-4o"
    assert seen["messages"] == [
        {"role": "system", "content": "system"},
        {"role": "user", "content": "Convert the following SQL code to Java."},
    ]
    assert seen["max_tokens"] == 2000
    assert seen["temperature"] == 0.3
    assert seen["timeout"] == 30


def test_openai_adapter_returns_empty_list_without_choices() -> None:
    async def create(**kwargs):
        return SimpleNamespace(choices=[])

    assert asyncio.run(_adapter_with(create).complete(_request())) == []


def test_openai_adapter_rejects_choice_without_content() -> None:
    async def create(**kwargs):
        return SimpleNamespace(choices=[_choice(None)])

    with pytest.raises(ModelResponseError):
        asyncio.run(_adapter_with(create).complete(_request()))


def test_openai_adapter_maps_timeout() -> None:
    async def create(**kwargs):
        raise openai.APITimeoutError(request=httpx.Request("POST", "https://api.openai.com/v1/chat/completions"))

    with pytest.raises(NetworkTimeoutError, match="timed out"):
        asyncio.run(_adapter_with(create).complete(_request()))


def test_openai_adapter_maps_connection_error() -> None:
    async def create(**kwargs):
        raise openai.APIConnectionError(request=httpx.Request("POST", "https://api.openai.com/v1/chat/completions"))

    with pytest.raises(NetworkTimeoutError, match="Could not reach"):
        asyncio.run(_adapter_with(create).complete(_request()))


def test_openai_adapter_requires_api_key() -> None:
    with pytest.raises(ValueError):
        OpenAIAdapter(api_key="")


def test_azure_adapter_requires_endpoint() -> None:
    with pytest.raises(ValueError):
        AzureOpenAIAdapter(endpoint="", api_key="k", api_version="2024-06-01")


def test_factory_selects_adapter_by_provider() -> None:
    azure = ConverterSettings(
        _env_file=None,
        azure_openai_endpoint="https://x.openai.azure.com",
        azure_openai_api_key="k",
        azure_openai_deployment_name="gpt-4o-code",
    )
    assert isinstance(build_llm_runtime(azure), AzureOpenAIAdapter)

    plain = ConverterSettings(_env_file=None, llm_provider="openai", openai_api_key="sk-test")
    runtime = build_llm_runtime(plain)
    assert isinstance(runtime, OpenAIAdapter)
    assert not isinstance(runtime, AzureOpenAIAdapter)

    local = ConverterSettings(_env_file=None, llm_provider="ollama")
    assert isinstance(build_llm_runtime(local), OllamaAdapter)


def test_openai_adapter_maps_status_error() -> None:
    async def create(**kwargs):
        request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        raise openai.AuthenticationError(
            "Incorrect API key provided",
            response=httpx.Response(401, request=request),
            body=None,
        )

    with pytest.raises(ModelResponseError, match=r"status 401") as exc_info:
        asyncio.run(_adapter_with(create).complete(_request()))
    assert exc_info.value.info.detail == "Incorrect API key provided"


def test_azure_adapter_sends_deployment_name_as_model() -> None:
    settings = ConverterSettings(
        _env_file=None,
        azure_openai_endpoint="https://x.openai.azure.com",
        azure_openai_api_key="k",
        azure_openai_deployment_name="gpt-4o-code",
    )
    adapter = build_llm_runtime(settings)
    seen: dict = {}

    async def create(**kwargs):
        seen.update(kwargs)
        return SimpleNamespace(choices=[_choice("String sql = ...;")])

    adapter._client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))
    req = LLMRequest(
        system_prompt="system",
        prompt="Convert",
        model=settings.llm_model,
        temperature=0.3,
        max_tokens=2000,
        timeout_seconds=30,
    )

    assert asyncio.run(adapter.complete(req)) == ["String sql = ...;"]
    assert seen["model"] == "gpt-4o-code"


class FakeResponse:
    def __init__(self, status: int, body):
        self.status = status
        self._body = body

    async def text(self) -> str:
        return str(self._body)

    async def json(self):
        return self._body

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc) -> None:
        return None


class FakeSession:
    """Stands in for ``aiohttp.ClientSession``; answers or raises per test."""

    response: FakeResponse | None = None
    error: Exception | None = None
    posted: list[tuple[str, dict]] = []

    def __init__(self, *args, **kwargs):
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc) -> None:
        return None

    def post(self, url: str, json: dict):
        FakeSession.posted.append((url, json))
        if FakeSession.error is not None:
            raise FakeSession.error
        return FakeSession.response


@pytest.fixture
def ollama(monkeypatch: pytest.MonkeyPatch):
    FakeSession.response = None
    FakeSession.error = None
    FakeSession.posted = []
    monkeypatch.setattr(ollama_adapter.aiohttp, "ClientSession", FakeSession)
    return OllamaAdapter(host="localhost", port=11434)


def test_ollama_adapter_posts_chat_payload(ollama: OllamaAdapter) -> None:
    FakeSession.response = FakeResponse(200, {"message": {"role": "assistant", "content": "def add(a, b): ..."}})

    assert asyncio.run(ollama.complete(_request())) == ["def add(a, b): ..."]
    url, payload = FakeSession.posted[0]
    assert url == "http://localhost:11434/api/chat"
    assert payload["messages"][0] == {"role": "system", "content": "system"}
    assert payload["options"] == {"temperature": 0.3, "num_predict": 2000}
    assert payload["stream"] is False


def test_ollama_adapter_http_error(ollama: OllamaAdapter) -> None:
    FakeSession.response = FakeResponse(500, "model not loaded")

    with pytest.raises(ModelResponseError, match=r"status 500"):
        asyncio.run(ollama.complete(_request()))


def test_ollama_adapter_error_body(ollama: OllamaAdapter) -> None:
    FakeSession.response = FakeResponse(200, {"error": "model 'x' not found"})

    with pytest.raises(ModelResponseError) as exc_info:
        asyncio.run(ollama.complete(_request()))
    assert exc_info.value.info.detail == "model 'x' not found"


def test_ollama_adapter_without_message_returns_no_completions(ollama: OllamaAdapter) -> None:
    FakeSession.response = FakeResponse(200, {"done": True})

    assert asyncio.run(ollama.complete(_request())) == []


def test_ollama_adapter_rejects_non_text_content(ollama: OllamaAdapter) -> None:
    FakeSession.response = FakeResponse(200, {"message": {"content": None}})

    with pytest.raises(ModelResponseError):
        asyncio.run(ollama.complete(_request()))


@pytest.mark.parametrize(
    "error",
    [asyncio.TimeoutError(), aiohttp.ClientConnectionError("connection refused")],
)
def test_ollama_adapter_maps_transport_faults(ollama: OllamaAdapter, error: Exception) -> None:
    FakeSession.error = error

    with pytest.raises(NetworkTimeoutError):
        asyncio.run(ollama.complete(_request()))
