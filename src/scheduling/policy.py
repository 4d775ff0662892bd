from __future__ import annotations

from dataclasses import dataclass

from study_planner.models import Task
from study_planner.settings import env_float


@dataclass(frozen=True)
class SchedulingPolicy:
    """Numeric knobs of the day allocator.

    A day stops taking tasks once its remaining hours drop to
    min_hours_remaining; tasks without a positive estimate cost
    fallback_effort_hours.
    """

    min_hours_remaining: float = 0.5
    fallback_effort_hours: float = 1.5

    @classmethod
    def from_env(cls) -> "SchedulingPolicy":
        return cls(
            min_hours_remaining=env_float("SCHEDULE_MIN_HOURS_REMAINING", cls.min_hours_remaining),
            fallback_effort_hours=env_float("SCHEDULE_FALLBACK_EFFORT_HOURS", cls.fallback_effort_hours),
        )

    def effort(self, task: Task) -> float:
        """Hours a task is expected to take."""
        if task.estimated_hours is not None and task.estimated_hours > 0:
            return float(task.estimated_hours)
        return self.fallback_effort_hours
