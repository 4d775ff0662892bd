from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


class Task(BaseModel):
    id: Optional[str] = None
    title: str = Field(..., min_length=1)
    course_id: str = "Unknown"
    course_name: Optional[str] = None

    due_date: Optional[datetime] = None
    estimated_hours: Optional[float] = None

    # low | normal | medium | high | urgent; anything else scores as "normal"
    priority: Optional[str] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("title must not be blank")
        return v2

    @field_validator("id", "course_id", mode="before")
    @classmethod
    def coerce_identifier(cls, v: Any) -> Any:
        # ids come from a record store and may be numeric
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("due_date", mode="before")
    @classmethod
    def parse_due_date(cls, v: Any) -> Any:
        if v is None or v == "":
            return None
        if isinstance(v, str):
            # fromisoformat handles both "2026-01-05" and full timestamps
            v = datetime.fromisoformat(v.strip().replace("Z", "+00:00"))
        return v

    @field_validator("due_date")
    @classmethod
    def due_date_naive_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        # pydantic turns epoch numbers into aware datetimes, so normalize after coercion
        if v is not None and v.tzinfo is not None:
            v = v.astimezone(timezone.utc).replace(tzinfo=None)
        return v


class StudyPreferences(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    daily_hours: float = Field(..., gt=0, alias="dailyHours")


class PlanBlock(BaseModel):
    course: str
    tasks: List[str] = Field(default_factory=list)
    duration_hours: float = Field(0.0, ge=0)
    notes: Optional[str] = None


class PlanDay(BaseModel):
    day: str
    blocks: List[PlanBlock] = Field(default_factory=list)

    @property
    def total_hours(self) -> float:
        return sum(b.duration_hours for b in self.blocks)

    @property
    def task_count(self) -> int:
        return sum(len(b.tasks) for b in self.blocks)


class GeneratedPlan(BaseModel):
    """
    A week of study blocks plus the narrative text derived from it.
    Serialize with model_dump(by_alias=True) to get the camelCase wire shape.
    """
    model_config = ConfigDict(populate_by_name=True)

    days: List[PlanDay] = Field(default_factory=list)
    summary: str = ""
    day_descriptions: Dict[str, str] = Field(default_factory=dict, alias="dayDescriptions")
    study_tips: List[str] = Field(default_factory=list, alias="studyTips")

    @property
    def total_hours(self) -> float:
        return sum(d.total_hours for d in self.days)


class PlanRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    tasks: List[Task] = Field(..., min_length=1)
    preferences: StudyPreferences
    use_ai: bool = Field(True, alias="useAI")


class SavedPlan(BaseModel):
    id: str
    user_id: str
    title: str = "Untitled Plan"
    created_at: str
    plan: Dict[str, Any]

    def summary_view(self) -> dict:
        return {"id": self.id, "title": self.title, "created_at": self.created_at}
