from __future__ import annotations

import os
from typing import Optional

import httpx

from .base import LLM_TIMEOUT_S, LLMProvider


class OpenAIProvider(LLMProvider):
    """Any OpenAI-compatible chat completions endpoint (OpenAI, OpenRouter, vLLM, ...)."""

    name = "openai"

    def __init__(
        self,
        api_key: Optional[str] = None,
        timeout_s: float = LLM_TIMEOUT_S,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.api_key = (api_key or os.getenv("OPENAI_API_KEY", "")).strip()
        self.model = os.getenv("OPENAI_MODEL", "gpt-4o-mini").strip()
        self.base_url = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1").strip().rstrip("/")
        self.timeout_s = timeout_s
        self.transport = transport

        if not self.api_key:
            raise RuntimeError("OPENAI_API_KEY is missing")

    def generate(self, *, system: str, user: str, model: str | None = None) -> str:
        url = f"{self.base_url}/chat/completions"
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        payload = {
            "model": model or self.model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            "temperature": 0.2,
        }

        with httpx.Client(timeout=self.timeout_s, transport=self.transport) as client:
            r = client.post(url, headers=headers, json=payload)
            r.raise_for_status()
            data = r.json()

        return data["choices"][0]["message"]["content"]
