from __future__ import annotations

import json
import logging
from typing import List, Optional

from pydantic import ValidationError

from llm.config import LLMConfig
from llm.llm_client import LLMClient
from llm.schemas import PlanEnhancement
from study_planner.errors import LLMError
from study_planner.models import GeneratedPlan

logger = logging.getLogger(__name__)

SUMMARY_MARKER = "\n\nAI insights: "

SYSTEM_PROMPT = (
    "You are a supportive study coach. You receive a weekly study plan that has "
    "already been scheduled. Do not change the schedule. Respond with JSON only, "
    "no prose and no code fences, using exactly these optional keys: "
    '"summary" (string, 2-3 sentences of extra insight), '
    '"dayDescriptions" (object mapping a weekday name to a motivating paragraph), '
    '"studyTips" (array of short, actionable strings).'
)


def build_user_prompt(plan: GeneratedPlan) -> str:
    payload = {
        "summary": plan.summary,
        "dayCount": len(plan.days),
        "totalHours": round(plan.total_hours, 1),
        "days": [d.model_dump() for d in plan.days],
    }
    return (
        "Improve the narrative of this study plan.\n"
        f"Plan:\n{json.dumps(payload, ensure_ascii=False)}"
    )


def merge_tips(base: List[str], extra: List[str]) -> List[str]:
    merged = list(base)
    seen = {t.strip().lower() for t in base}
    for tip in extra:
        key = tip.strip().lower()
        if not key or key in seen:
            continue
        seen.add(key)
        merged.append(tip.strip())
    return merged


def merge_enhancement(plan: GeneratedPlan, extra: PlanEnhancement) -> GeneratedPlan:
    """Layer service-written text over the deterministic narrative. Returns a new plan."""
    summary = plan.summary
    if extra.summary:
        summary = f"{plan.summary}{SUMMARY_MARKER}{extra.summary}"

    scheduled = {d.day for d in plan.days}
    descriptions = dict(plan.day_descriptions)
    for day, text in extra.day_descriptions.items():
        if day in scheduled and text and text.strip():
            descriptions[day] = text.strip()

    return plan.model_copy(
        update={
            "summary": summary,
            "day_descriptions": descriptions,
            "study_tips": merge_tips(plan.study_tips, extra.study_tips),
        },
        deep=True,
    )


class EnhancementGateway:
    """Optional narrative enrichment through a text-generation service.

    Only the narrative fields are touched; days and blocks pass through as-is.
    Every failure is absorbed and the input plan is returned unchanged.
    """

    def __init__(self, client: Optional[LLMClient] = None, config: Optional[LLMConfig] = None):
        self.config = config or (client.config if client is not None else LLMConfig.from_env())
        self._client = client

    @property
    def enabled(self) -> bool:
        return self._client is not None or self.config.enabled

    @property
    def client(self) -> LLMClient:
        if self._client is None:
            self._client = LLMClient(config=self.config)
        return self._client

    def enhance(self, plan: GeneratedPlan) -> GeneratedPlan:
        if not self.enabled:
            return plan

        try:
            raw = self.client.generate_json(system=SYSTEM_PROMPT, user=build_user_prompt(plan))
            extra = PlanEnhancement.model_validate(raw)
        except (LLMError, ValidationError, RuntimeError, ValueError) as e:
            logger.warning(f"Plan enhancement skipped, keeping deterministic text: {e}")
            return plan

        logger.info(
            f"Plan enhanced (summary={'yes' if extra.summary else 'no'}, "
            f"days={len(extra.day_descriptions)}, tips={len(extra.study_tips)})"
        )
        return merge_enhancement(plan, extra)
