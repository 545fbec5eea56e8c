from typing import List, Optional

import pytest
from fastapi.testclient import TestClient

from app.main import app
from config.settings import Settings, get_settings
from mentor.llm import generator_factory


class StubGenerator:
    """Stands in for Gemini; records every prompt it receives."""

    def __init__(self, reply: str = "Hello!", error: Optional[Exception] = None):
        self.reply = reply
        self.error = error
        self.prompts: List[str] = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def stub():
    return StubGenerator()


@pytest.fixture
def settings():
    s = Settings()
    s.gemini_api_key = "test-key"
    return s


@pytest.fixture
def factory_calls():
    return []


@pytest.fixture
def client(stub, settings, factory_calls):
    def make_generator(cfg):
        factory_calls.append(cfg)
        return stub

    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[generator_factory] = lambda: make_generator
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
