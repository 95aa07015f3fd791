from datetime import datetime

import pytest

# Monday
NOW = datetime(2024, 1, 15, 10, 0)


class FakeProvider:
    def __init__(self, response_text: str):
        self._response_text = response_text
        self.prompts = []

    def generate(self, *, system: str, user: str) -> str:
        self.prompts.append(user)
        return self._response_text


class RaisingProvider:
    def __init__(self, exc: Exception):
        self._exc = exc

    def generate(self, *, system: str, user: str) -> str:
        raise self._exc


@pytest.fixture
def fake_provider_factory():
    def _make(response_text: str):
        return FakeProvider(response_text)
    return _make


@pytest.fixture
def raising_provider_factory():
    def _make(exc: Exception):
        return RaisingProvider(exc)
    return _make


@pytest.fixture
def now() -> datetime:
    return NOW
