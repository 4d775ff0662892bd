from __future__ import annotations

from dataclasses import dataclass, replace

from study_planner.settings import env_float, env_int, env_str


KEYLESS_PROVIDERS = {"ollama", "mock"}


@dataclass(frozen=True)
class LLMConfig:
    """Connection and sampling settings for the text-generation service."""

    provider: str = "openai"
    api_key: str = ""
    model: str = "gpt-4o-mini"
    base_url: str = "https://api.openai.com/v1"
    ollama_base_url: str = "http://localhost:11434"
    ollama_model: str = "llama3.1"

    max_tokens: int = 400
    temperature: float = 0.7
    timeout_ms: int = 8000
    # total attempts, not extra ones
    retries: int = 2
    backoff_s: float = 0.2

    @classmethod
    def from_env(cls) -> "LLMConfig":
        return cls(
            provider=env_str("AI_PROVIDER", cls.provider).lower(),
            api_key=env_str("AI_API_KEY", ""),
            model=env_str("AI_MODEL", cls.model),
            base_url=env_str("AI_BASE_URL", cls.base_url),
            ollama_base_url=env_str("OLLAMA_BASE_URL", cls.ollama_base_url),
            ollama_model=env_str("OLLAMA_MODEL", cls.ollama_model),
            max_tokens=env_int("AI_MAX_TOKENS", cls.max_tokens),
            temperature=env_float("AI_TEMPERATURE", cls.temperature),
            timeout_ms=env_int("AI_TIMEOUT_MS", cls.timeout_ms),
            retries=env_int("AI_RETRIES", cls.retries),
            backoff_s=env_float("AI_BACKOFF_S", cls.backoff_s),
        )

    @property
    def enabled(self) -> bool:
        return self.provider in KEYLESS_PROVIDERS or bool(self.api_key)

    @property
    def attempts(self) -> int:
        return max(1, self.retries)

    @property
    def timeout_s(self) -> float:
        return self.timeout_ms / 1000.0

    def with_overrides(self, **changes) -> "LLMConfig":
        return replace(self, **changes)
