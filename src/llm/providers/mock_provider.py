from __future__ import annotations

import json

from llm.prompts import RESPONSE_SHAPE
from llm.providers.base import LLMProvider


class MockProvider(LLMProvider):
    """Offline provider returning a fixed, deterministic extraction for demos."""

    name = "mock"

    def generate(self, *, system: str, user: str, model: str | None = None) -> str:
        if "Extract tasks" in user:
            # ignore the instructions block, it names every priority
            lower_user = user.split(RESPONSE_SHAPE)[0].lower()
            priority = "urgent" if "urgent" in lower_user or "asap" in lower_user else "medium"
            tags = ["client"] if "client" in lower_user else ["general"]
            return json.dumps({
                "tasks": [
                    {
                        "title": "Review incoming request",
                        "description": "Generated by the offline mock provider",
                        "priority": priority,
                        "assigneeId": None,
                        "projectId": None,
                        "estimatedHours": 1,
                        "dueDate": None,
                        "tags": tags,
                        "dependencies": [],
                        "confidence": 0.7,
                    }
                ],
                "confidence": 0.7,
                "suggestions": ["Mock provider response; configure LLM_PROVIDER for real extraction"],
            })

        # Default fallback
        return "{}"
