from __future__ import annotations

import os
from abc import ABC, abstractmethod

LLM_TIMEOUT_S = float(os.getenv("LLM_TIMEOUT_S", "30"))


class LLMProvider(ABC):
    name = "base"

    @abstractmethod
    def generate(self, *, system: str, user: str) -> str:
        """
        Must return the raw model output as TEXT.
        JSON extraction and schema validation happen in LLMClient.
        """
        raise NotImplementedError
