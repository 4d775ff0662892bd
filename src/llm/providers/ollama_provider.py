from __future__ import annotations
from llm.config import LLMConfig
from .base import LLMProvider, post_json

class OllamaProvider(LLMProvider):
    def __init__(self, config: LLMConfig):
        self.config = config
        self.model = config.ollama_model
        self.base_url = config.ollama_base_url.rstrip("/")

    def generate(self, *, system: str, user: str) -> str:
        url = f"{self.base_url}/api/chat"
        payload = {
            "model": self.model,
            "stream": False,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            "options": {
                "temperature": self.config.temperature,
                "num_predict": self.config.max_tokens,
            },
        }

        data = post_json(url, payload, timeout_s=self.config.timeout_s)

        return data["message"]["content"]
