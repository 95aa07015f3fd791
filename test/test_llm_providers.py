import json

import httpx
import pytest

from extraction.task_extractor import TaskExtractor
from llm.llm_client import LLMClient, LLMError, LLMResponseError
from llm.providers.ollama_provider import OllamaProvider
from llm.providers.openai_provider import OpenAIProvider

TASKS_JSON = '{"tasks":[{"title":"Send invoice"}],"confidence":0.7}'


def test_openai_provider_request_shape(monkeypatch):
    monkeypatch.setenv("OPENAI_BASE_URL", "https://openrouter.example/api/v1/")
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"choices": [{"message": {"content": TASKS_JSON}}]})

    provider = OpenAIProvider(api_key="sk-test", transport=httpx.MockTransport(handler))
    out = provider.generate(system="sys", user="hello")

    assert out == TASKS_JSON
    assert seen["url"] == "https://openrouter.example/api/v1/chat/completions"
    assert seen["auth"] == "Bearer sk-test"
    assert [m["role"] for m in seen["body"]["messages"]] == ["system", "user"]


def test_ollama_provider_asks_for_json(monkeypatch):
    monkeypatch.setenv("OLLAMA_MODEL", "qwen2.5")
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"message": {"content": TASKS_JSON}})

    provider = OllamaProvider(transport=httpx.MockTransport(handler))
    result = LLMClient(provider=provider).extract_tasks("Send invoice")

    assert result.tasks[0].title == "Send invoice"
    assert seen["url"].endswith("/api/chat")
    assert seen["body"]["format"] == "json"
    assert seen["body"]["model"] == "qwen2.5"
    assert seen["body"]["stream"] is False


def test_http_error_becomes_llm_error():
    transport = httpx.MockTransport(lambda request: httpx.Response(503, text="overloaded"))
    client = LLMClient(provider=OllamaProvider(transport=transport))
    with pytest.raises(LLMError):
        client.complete("anything")


def test_unexpected_payload_becomes_llm_error():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"choices": []}))
    client = LLMClient(provider=OpenAIProvider(api_key="sk-test", transport=transport))
    with pytest.raises(LLMError):
        client.complete("anything")


def _html_transport() -> httpx.MockTransport:
    return httpx.MockTransport(lambda request: httpx.Response(200, text="<html>gateway</html>"))


def test_non_json_body_becomes_llm_error():
    for provider in (
        OpenAIProvider(api_key="sk-test", transport=_html_transport()),
        OllamaProvider(transport=_html_transport()),
    ):
        with pytest.raises(LLMResponseError):
            LLMClient(provider=provider).complete("anything")


def test_non_json_body_falls_back_to_patterns(now):
    provider = OpenAIProvider(api_key="sk-test", transport=_html_transport())
    extractor = TaskExtractor(llm_client=LLMClient(provider=provider))

    result = extractor.extract("We need to fix the login page.", now=now)

    assert result.tasks[0].title == "Fix the login page"
    assert result.tasks[0].confidence >= 0.85
