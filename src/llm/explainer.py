from __future__ import annotations

import logging
from typing import Optional, Sequence

from llm.config import LLMConfig
from llm.llm_client import LLMClient
from llm.schemas import BlockExplanation
from study_planner.errors import LLMError

logger = logging.getLogger(__name__)

EXPLAIN_MAX_TOKENS = 220

SYSTEM_PROMPT = "You provide concise study guidance and sequencing suggestions."


def fallback_explanation(course: str, tasks: Sequence[str], duration_hours: Optional[float]) -> str:
    first = ", ".join(tasks[:3])
    hours = f"{duration_hours:.1f}" if duration_hours is not None else "an appropriate amount of"
    more = f", and {len(tasks) - 3} more task(s)" if len(tasks) > 3 else ""
    return (
        f"(Fallback) For {course} spend about {hours} hour(s). Start with: {first}{more}. "
        "Break work into focused 25-50 minute sessions and review notes after each session. "
        "Prioritize harder tasks first."
    )


class BlockExplainer:
    """Guidance paragraph for a single study block, with a deterministic fallback."""

    def __init__(self, client: Optional[LLMClient] = None, config: Optional[LLMConfig] = None):
        base = config or (client.config if client is not None else LLMConfig.from_env())
        self.config = base.with_overrides(max_tokens=EXPLAIN_MAX_TOKENS)
        self._client = client

    @property
    def enabled(self) -> bool:
        return self._client is not None or self.config.enabled

    def explain(
        self,
        course: str,
        tasks: Sequence[str],
        duration_hours: Optional[float] = None,
        notes: Optional[str] = None,
    ) -> BlockExplanation:
        if self.enabled:
            prompt = (
                "Write a helpful 3-4 sentence study guidance for this study block. "
                f"Course: {course}. Tasks: {', '.join(tasks)}. "
                f"Estimated duration: {duration_hours if duration_hours is not None else 'unknown'} hours. "
                f"Notes: {notes or 'none'}. Give actionable tips and how to sequence the tasks."
            )
            try:
                client = self._client or LLMClient(config=self.config)
                text = client.generate(system=SYSTEM_PROMPT, user=prompt).strip()
                if text:
                    return BlockExplanation(explanation=text)
                logger.warning("Empty explanation from LLM, using fallback")
            except (LLMError, RuntimeError, ValueError) as e:
                logger.warning(f"Block explanation failed, using fallback: {e}")

        return BlockExplanation(
            explanation=fallback_explanation(course, tasks, duration_hours),
            fallback=True,
        )
