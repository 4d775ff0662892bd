import time

import httpx
import pytest

from llm.config import LLMConfig
from llm.llm_client import LLMClient, build_provider, extract_json_object
from llm.providers.mock_provider import MockProvider
from llm.providers.ollama_provider import OllamaProvider
from study_planner.errors import LLMError


def make_client(provider, retries=2, sleeps=None):
    sleeps = sleeps if sleeps is not None else []
    return LLMClient(provider=provider, config=LLMConfig(retries=retries, backoff_s=0.2), sleep=sleeps.append)


def test_generate_json(fake_provider_factory):
    provider = fake_provider_factory('{"summary":"Keep going","studyTips":["Sleep well"]}')
    out = make_client(provider).generate_json(system="s", user="u")
    assert out == {"summary": "Keep going", "studyTips": ["Sleep well"]}


def test_llm_extra_text_around_json(fake_provider_factory):
    provider = fake_provider_factory(
        'Sure! Here is the result:\n```json\n{"summary": "ok"}\n```\nThanks.'
    )
    assert make_client(provider).generate_json(system="s", user="u") == {"summary": "ok"}


@pytest.mark.parametrize("text", ["INVALID OUTPUT", "{not json}", "[1, 2, 3]"])
def test_llm_invalid_json_raises(fake_provider_factory, text):
    with pytest.raises(LLMError):
        make_client(fake_provider_factory(text)).generate_json(system="s", user="u")


def test_json_object_must_be_an_object():
    with pytest.raises(LLMError):
        extract_json_object('"just a string"')


def test_retries_with_linear_backoff_then_gives_up(failing_provider_factory):
    provider = failing_provider_factory(httpx.ConnectError("boom"))
    sleeps = []
    with pytest.raises(LLMError):
        make_client(provider, retries=3, sleeps=sleeps).generate(system="s", user="u")
    assert provider.calls == 3
    assert sleeps == pytest.approx([0.2, 0.4])


def test_retry_recovers_after_transient_failure():
    class Flaky:
        def __init__(self):
            self.calls = 0

        def generate(self, *, system, user):
            self.calls += 1
            if self.calls == 1:
                raise httpx.ReadTimeout("slow")
            return "fine"

    provider = Flaky()
    assert make_client(provider).generate(system="s", user="u") == "fine"
    assert provider.calls == 2


def test_zero_retries_still_makes_one_attempt(failing_provider_factory):
    provider = failing_provider_factory(httpx.ConnectError("boom"))
    with pytest.raises(LLMError):
        make_client(provider, retries=0).generate(system="s", user="u")
    assert provider.calls == 1


def test_build_provider_selection():
    assert isinstance(build_provider(LLMConfig(provider="mock")), MockProvider)
    assert isinstance(build_provider(LLMConfig(provider="ollama")), OllamaProvider)
    with pytest.raises(RuntimeError):
        build_provider(LLMConfig(provider="openai", api_key=""))
    with pytest.raises(ValueError):
        build_provider(LLMConfig(provider="carrier-pigeon"))


def test_config_from_env(monkeypatch):
    monkeypatch.setenv("AI_PROVIDER", "OpenAI")
    monkeypatch.setenv("AI_API_KEY", "sk-test")
    monkeypatch.setenv("AI_TIMEOUT_MS", "2500")
    monkeypatch.setenv("AI_RETRIES", "3")
    monkeypatch.setenv("AI_TEMPERATURE", "warm")
    config = LLMConfig.from_env()
    assert config.provider == "openai"
    assert config.enabled
    assert config.timeout_s == 2.5
    assert config.attempts == 3
    assert config.temperature == 0.7


def test_openai_without_key_is_disabled():
    assert not LLMConfig(provider="openai", api_key="").enabled
    assert LLMConfig(provider="mock").enabled


def test_openai_provider_request(monkeypatch):
    from llm.providers import base, openai_provider

    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = request.content
        return httpx.Response(200, json={"choices": [{"message": {"content": "hello"}}]})

    real_client = httpx.Client

    def client_with_mock_transport(*args, **kwargs):
        kwargs["transport"] = httpx.MockTransport(handler)
        return real_client(*args, **kwargs)

    monkeypatch.setattr(base.httpx, "Client", client_with_mock_transport)

    config = LLMConfig(api_key="sk-test", max_tokens=123, base_url="https://llm.example/v1/")
    out = openai_provider.OpenAIProvider(config).generate(system="sys", user="usr")

    assert out == "hello"
    assert seen["url"] == "https://llm.example/v1/chat/completions"
    assert seen["auth"] == "Bearer sk-test"
    assert b'"max_tokens":123' in seen["body"].replace(b" ", b"")


def test_openai_provider_error_status_surfaces_as_llm_error(monkeypatch):
    from llm.providers import base, openai_provider

    real_client = httpx.Client

    def client_with_mock_transport(*args, **kwargs):
        kwargs["transport"] = httpx.MockTransport(lambda request: httpx.Response(503))
        return real_client(*args, **kwargs)

    monkeypatch.setattr(base.httpx, "Client", client_with_mock_transport)

    config = LLMConfig(api_key="sk-test", retries=2)
    client = LLMClient(config=config, sleep=lambda s: None)
    with pytest.raises(LLMError):
        client.generate(system="s", user="u")


def test_slow_trickling_response_is_cut_off_at_the_deadline(monkeypatch):
    from llm.providers import base, ollama_provider

    def trickle():
        yield b'{"message": {"content": "'
        for _ in range(20):
            time.sleep(0.1)
            yield b"zz"
        yield b'"}}'

    real_client = httpx.Client

    def client_with_mock_transport(*args, **kwargs):
        kwargs["transport"] = httpx.MockTransport(lambda request: httpx.Response(200, content=trickle()))
        return real_client(*args, **kwargs)

    monkeypatch.setattr(base.httpx, "Client", client_with_mock_transport)

    provider = ollama_provider.OllamaProvider(LLMConfig(provider="ollama", timeout_ms=300))
    started = time.monotonic()
    with pytest.raises(httpx.ReadTimeout):
        provider.generate(system="s", user="u")
    assert time.monotonic() - started < 1.0


def test_deadline_applies_per_attempt_through_the_client(monkeypatch):
    from llm.providers import base

    def trickle():
        for _ in range(20):
            time.sleep(0.1)
            yield b" "

    real_client = httpx.Client

    def client_with_mock_transport(*args, **kwargs):
        kwargs["transport"] = httpx.MockTransport(lambda request: httpx.Response(200, content=trickle()))
        return real_client(*args, **kwargs)

    monkeypatch.setattr(base.httpx, "Client", client_with_mock_transport)

    config = LLMConfig(provider="ollama", timeout_ms=200, retries=2)
    client = LLMClient(config=config, sleep=lambda s: None)
    started = time.monotonic()
    with pytest.raises(LLMError):
        client.generate(system="s", user="u")
    assert time.monotonic() - started < 1.5
