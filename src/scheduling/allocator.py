from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from scheduling.policy import SchedulingPolicy
from study_planner.models import Task, WEEKDAYS

logger = logging.getLogger(__name__)

EPSILON = 1e-9


@dataclass
class Allocation:
    # weekday -> tasks, in weekday order; only days that received tasks
    days: Dict[str, List[Task]] = field(default_factory=dict)
    unassigned: List[Task] = field(default_factory=list)

    @property
    def assigned_count(self) -> int:
        return sum(len(tasks) for tasks in self.days.values())


class DayAllocator:
    """Greedy fill of Monday..Sunday in priority order.

    Each day takes tasks from the head of the list while its remaining
    hours exceed the policy threshold and the next task fits. The head
    task is never skipped in favour of a smaller one, so priority order
    holds across days. Whatever is left after Sunday is dropped.
    """

    def __init__(self, policy: Optional[SchedulingPolicy] = None):
        self.policy = policy or SchedulingPolicy()

    def _fits(self, effort: float, hours_left: float, day_is_empty: bool, daily_hours: float) -> bool:
        if effort <= hours_left + EPSILON:
            return True
        # a task bigger than a whole day can only ever take a day on its own
        return day_is_empty and effort > daily_hours

    def allocate(self, sorted_tasks: Sequence[Task], daily_hours: float) -> Allocation:
        allocation = Allocation()
        index = 0
        threshold = self.policy.min_hours_remaining

        for day in WEEKDAYS:
            if index >= len(sorted_tasks):
                break

            hours_left = daily_hours
            day_tasks: List[Task] = []

            while hours_left > threshold and index < len(sorted_tasks):
                task = sorted_tasks[index]
                effort = self.policy.effort(task)
                if not self._fits(effort, hours_left, not day_tasks, daily_hours):
                    break
                day_tasks.append(task)
                hours_left = max(0.0, hours_left - effort)
                index += 1

            if day_tasks:
                allocation.days[day] = day_tasks

        allocation.unassigned = list(sorted_tasks[index:])
        if allocation.unassigned:
            logger.warning(
                f"{len(allocation.unassigned)} task(s) did not fit into the week "
                f"at {daily_hours}h/day and were dropped"
            )
        return allocation
