from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Optional, Sequence

from study_planner.models import Task


PRIORITY_SCORES = {
    "urgent": 40,
    "high": 30,
    "medium": 20,
    "normal": 15,
    "low": 10,
}
DEFAULT_PRIORITY = "normal"

SECONDS_PER_DAY = 24 * 60 * 60


def utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class PriorityScorer:
    """Urgency score from the priority label plus a due-date proximity boost."""

    def __init__(self, now: Optional[datetime] = None):
        self.now = now or utc_now()

    def base_score(self, task: Task) -> int:
        label = (task.priority or DEFAULT_PRIORITY).strip().lower()
        return PRIORITY_SCORES.get(label, PRIORITY_SCORES[DEFAULT_PRIORITY])

    def days_until_due(self, task: Task) -> Optional[int]:
        if task.due_date is None:
            return None
        delta = (task.due_date - self.now).total_seconds()
        return math.ceil(delta / SECONDS_PER_DAY)

    def due_boost(self, task: Task) -> int:
        days = self.days_until_due(task)
        if days is None:
            return 0
        if days <= 1:
            return 50
        if days <= 3:
            return 30
        if days <= 7:
            return 15
        return 0

    def score(self, task: Task) -> int:
        return self.base_score(task) + self.due_boost(task)


class TaskSorter:

    def __init__(self, scorer: Optional[PriorityScorer] = None):
        self.scorer = scorer or PriorityScorer()

    def sort(self, tasks: Sequence[Task]) -> list[Task]:
        # sorted() is stable and returns a new list
        return sorted(tasks, key=self.scorer.score, reverse=True)
