from __future__ import annotations
from llm.config import LLMConfig
from .base import LLMProvider, post_json

class OpenAIProvider(LLMProvider):
    def __init__(self, config: LLMConfig):
        self.config = config
        self.api_key = config.api_key.strip()
        self.model = config.model
        self.base_url = config.base_url.rstrip("/")

        if not self.api_key:
            raise RuntimeError("AI_API_KEY is missing")

    def generate(self, *, system: str, user: str) -> str:
        url = f"{self.base_url}/chat/completions"
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            "max_tokens": self.config.max_tokens,
            "temperature": self.config.temperature,
        }

        data = post_json(url, payload, timeout_s=self.config.timeout_s, headers=headers)

        return data["choices"][0]["message"]["content"] or ""
