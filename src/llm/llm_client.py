import json
import logging
import os
from datetime import datetime
from typing import Optional

import httpx
from pydantic import ValidationError

from llm.prompts import SYSTEM_PROMPT, build_email_prompt, build_message_prompt
from llm.providers.base import LLMProvider
from llm.schemas import LLMExtractionResponse
from taskflow_ai.models import EmailMetadata, ReferenceData, TaskParseResult

logger = logging.getLogger(__name__)

LLM_PROVIDER = os.getenv("LLM_PROVIDER", "none").strip().lower()


class LLMError(Exception):
    """The language-model path could not produce a usable result."""


class LLMResponseError(LLMError):
    """The model answered, but not with the JSON contract we asked for."""


def get_provider(name: Optional[str] = None) -> Optional[LLMProvider]:
    """Build the provider named by LLM_PROVIDER; ``none`` disables the LLM path."""
    name = (name or LLM_PROVIDER).strip().lower()
    if name in {"", "none", "off"}:
        return None
    if name == "openai":
        from llm.providers.openai_provider import OpenAIProvider

        return OpenAIProvider()
    if name == "ollama":
        from llm.providers.ollama_provider import OllamaProvider

        return OllamaProvider()
    if name == "mock":
        from llm.providers.mock_provider import MockProvider

        return MockProvider()
    raise ValueError(f"Unknown LLM provider: {name}")


def extract_json_object(text: str) -> str:
    """Return the outermost {...} block of a model reply, tolerating prose around it."""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        raise LLMResponseError("no JSON object in model output")

    candidate = text[start : end + 1]
    try:
        json.loads(candidate)
    except json.JSONDecodeError as e:
        raise LLMResponseError(f"invalid JSON in model output: {e}") from e
    return candidate


class LLMClient:
    """Thin wrapper around an LLMProvider speaking the task-extraction JSON contract."""

    def __init__(self, provider: LLMProvider):
        self.provider = provider

    def complete(self, prompt: str, system: str = SYSTEM_PROMPT) -> str:
        try:
            raw = self.provider.generate(system=system, user=prompt)
        except httpx.HTTPError as e:
            raise LLMError(f"provider request failed: {e}") from e
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise LLMResponseError(f"unexpected provider payload: {e}") from e

        if not isinstance(raw, str):
            raise LLMResponseError("provider returned non-text output")
        return extract_json_object(raw)

    def _parse(self, text: str, now: Optional[datetime]) -> TaskParseResult:
        try:
            return LLMExtractionResponse.model_validate_json(text).to_result(now)
        except ValidationError as e:
            raise LLMResponseError(f"response does not match schema: {e.error_count()} error(s)") from e

    def extract_tasks(
        self,
        message: str,
        reference: Optional[ReferenceData] = None,
        now: Optional[datetime] = None,
    ) -> TaskParseResult:
        prompt = build_message_prompt(message, reference)
        return self._parse(self.complete(prompt), now)

    def extract_email_tasks(
        self,
        content: str,
        metadata: EmailMetadata,
        reference: Optional[ReferenceData] = None,
        is_client: bool = False,
        now: Optional[datetime] = None,
    ) -> TaskParseResult:
        prompt = build_email_prompt(content, metadata, reference, is_client=is_client)
        return self._parse(self.complete(prompt), now)
