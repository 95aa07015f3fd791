import httpx
import pytest

from llm.llm_client import LLMClient, LLMError, LLMResponseError, extract_json_object


def test_llm_extra_text_around_json(fake_provider_factory):
    provider = fake_provider_factory(
        'Sure! Here is the result: {"tasks":[{"title":"Call mom","estimatedHours":1}]} Thanks.'
    )
    client = LLMClient(provider=provider)
    out = client.complete("Call mom")
    assert out.startswith("{") and out.endswith("}")
    assert "tasks" in out


def test_prose_wrapped_json_parses(fake_provider_factory, now):
    provider = fake_provider_factory(
        'Here you go:\n```json\n{"tasks":[{"title":"Call mom"}],"confidence":0.6}\n```'
    )
    result = LLMClient(provider=provider).extract_tasks("Call mom", now=now)
    assert result.tasks[0].title == "Call mom"
    assert result.confidence == 0.6


def test_llm_invalid_json_raises(fake_provider_factory):
    provider = fake_provider_factory("INVALID OUTPUT")
    client = LLMClient(provider=provider)
    with pytest.raises(LLMResponseError):
        client.complete("Anything")


def test_broken_json_raises():
    with pytest.raises(LLMResponseError):
        extract_json_object('{"tasks": [}')


def test_missing_tasks_key_is_schema_error(fake_provider_factory):
    client = LLMClient(provider=fake_provider_factory('{"items": []}'))
    with pytest.raises(LLMResponseError):
        client.extract_tasks("Anything")


def test_transport_error_wrapped(raising_provider_factory):
    client = LLMClient(provider=raising_provider_factory(httpx.ReadTimeout("too slow")))
    with pytest.raises(LLMError):
        client.complete("Anything")


def test_unexpected_payload_wrapped(raising_provider_factory):
    client = LLMClient(provider=raising_provider_factory(KeyError("choices")))
    with pytest.raises(LLMResponseError):
        client.complete("Anything")
