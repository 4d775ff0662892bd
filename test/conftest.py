from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from study_planner.models import Task


FIXED_NOW = datetime(2026, 1, 5, 12, 0)


class FakeProvider:
    def __init__(self, response_text: str):
        self._response_text = response_text
        self.calls = []

    def generate(self, *, system: str, user: str) -> str:
        self.calls.append({"system": system, "user": user})
        return self._response_text


class FailingProvider:
    def __init__(self, error: Exception):
        self._error = error
        self.calls = 0

    def generate(self, *, system: str, user: str) -> str:
        self.calls += 1
        raise self._error


@pytest.fixture
def fake_provider_factory():
    def _make(response_text: str):
        return FakeProvider(response_text)
    return _make


@pytest.fixture
def now():
    return FIXED_NOW


@pytest.fixture
def make_task():
    counter = {"n": 0}

    def _make(title=None, course_id="CS101", **kwargs):
        counter["n"] += 1
        return Task(
            id=str(counter["n"]),
            title=title or f"T{counter['n']}",
            course_id=course_id,
            **kwargs,
        )
    return _make


@pytest.fixture
def api_client(tmp_path):
    from api.main import app
    from api.backend import BackendAPI
    from api.dependencies import get_backend, get_block_explainer, get_plan_store
    from llm.config import LLMConfig
    from llm.explainer import BlockExplainer
    from storage.plan_store import PlanStore

    offline = LLMConfig(provider="openai", api_key="")
    app.dependency_overrides[get_backend] = lambda: BackendAPI(enhancer=None)
    app.dependency_overrides[get_block_explainer] = lambda: BlockExplainer(config=offline)
    app.dependency_overrides[get_plan_store] = lambda: PlanStore(path=str(tmp_path / "plans.json"))
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def failing_provider_factory():
    def _make(error: Exception):
        return FailingProvider(error)
    return _make
