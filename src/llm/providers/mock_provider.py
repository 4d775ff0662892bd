from __future__ import annotations
import json
from llm.providers.base import LLMProvider

class MockProvider(LLMProvider):
    def generate(self, *, system: str, user: str) -> str:
        """
        Returns canned responses based on the prompt content (local development without a key).
        """
        # Plan enhancement requests ask for a JSON object
        if "dayDescriptions" in system:
            return json.dumps({
                "summary": "Front-load the heaviest courses and keep the weekend for review.",
                "dayDescriptions": {},
                "studyTips": [
                    "Before each block, write down the one outcome you want from it.",
                ],
            })

        # Block explanation requests expect plain prose
        if "study block" in user:
            return (
                "Start with the task you understand least while you are fresh, "
                "then move to the routine ones. Work in 25-minute sessions and "
                "close the block with a five-minute recap of what you covered."
            )

        return "{}"
