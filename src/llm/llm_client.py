import json
import logging
import time
from typing import Any, Callable, Optional

from llm.config import LLMConfig
from llm.providers.base import LLMProvider
from study_planner.errors import LLMError

logger = logging.getLogger(__name__)


def build_provider(config: LLMConfig) -> LLMProvider:
    """Instantiate the provider named by config.provider."""
    if config.provider == "mock":
        from llm.providers.mock_provider import MockProvider
        return MockProvider()
    if config.provider == "ollama":
        from llm.providers.ollama_provider import OllamaProvider
        return OllamaProvider(config)
    if config.provider == "openai":
        from llm.providers.openai_provider import OpenAIProvider
        return OpenAIProvider(config)
    raise ValueError(f"Unknown AI_PROVIDER: {config.provider!r}")


def extract_json_object(text: str) -> dict[str, Any]:
    """Pull the JSON object out of a model reply that may wrap it in prose or code fences."""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        raise LLMError("LLM reply contains no JSON object")
    try:
        data = json.loads(text[start:end + 1])
    except json.JSONDecodeError as e:
        raise LLMError(f"LLM reply is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise LLMError("LLM reply JSON is not an object")
    return data


class LLMClient:
    """Provider-agnostic text generation with bounded retries.

    Each attempt is bounded by the provider's timeout; attempts run one
    after another with a linear backoff (backoff_s * attempt) in between.
    """

    def __init__(
        self,
        provider: Optional[LLMProvider] = None,
        config: Optional[LLMConfig] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.config = config or LLMConfig.from_env()
        self.provider = provider if provider is not None else build_provider(self.config)
        self._sleep = sleep

    def generate(self, *, system: str, user: str) -> str:
        attempts = self.config.attempts
        last_error: Optional[Exception] = None

        for attempt in range(1, attempts + 1):
            try:
                return self.provider.generate(system=system, user=user)
            except Exception as e:
                last_error = e
                logger.warning(f"LLM attempt {attempt}/{attempts} failed: {e}")
                if attempt < attempts:
                    self._sleep(self.config.backoff_s * attempt)

        raise LLMError(f"LLM request failed after {attempts} attempt(s): {last_error}") from last_error

    def generate_json(self, *, system: str, user: str) -> dict[str, Any]:
        return extract_json_object(self.generate(system=system, user=user))
