from __future__ import annotations
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

class PlanEnhancement(BaseModel):
    """Narrative fields a text-generation service may return for a plan. All optional."""
    model_config = ConfigDict(populate_by_name=True)

    summary: Optional[str] = None
    day_descriptions: Dict[str, str] = Field(default_factory=dict, alias="dayDescriptions")
    study_tips: List[str] = Field(default_factory=list, alias="studyTips")

    @field_validator("summary")
    @classmethod
    def blank_summary_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        return v.strip()

    @field_validator("day_descriptions", mode="before")
    @classmethod
    def null_descriptions(cls, v):
        return {} if v is None else v

    @field_validator("study_tips", mode="before")
    @classmethod
    def null_tips(cls, v):
        return [] if v is None else v

class BlockExplanation(BaseModel):
    explanation: str
    fallback: bool = False
