from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence, Tuple

from scheduling.allocator import Allocation, DayAllocator
from scheduling.grouper import CourseGrouper
from scheduling.narrative import NarrativeGenerator
from scheduling.policy import SchedulingPolicy
from scheduling.priority import PriorityScorer, TaskSorter
from study_planner.models import GeneratedPlan, PlanDay, StudyPreferences, Task

logger = logging.getLogger(__name__)


class Scheduler:
    """Deterministic weekly plan: score, sort, allocate, group, narrate.

    Pure given `now`; no I/O. Inputs are never mutated.
    """

    def __init__(self, policy: Optional[SchedulingPolicy] = None, now: Optional[datetime] = None):
        self.policy = policy or SchedulingPolicy()
        self.now = now

    def schedule_with_allocation(
        self,
        tasks: Sequence[Task],
        preferences: StudyPreferences,
    ) -> Tuple[GeneratedPlan, Allocation]:
        daily_hours = preferences.daily_hours

        sorter = TaskSorter(PriorityScorer(now=self.now))
        sorted_tasks = sorter.sort(tasks)

        allocation = DayAllocator(self.policy).allocate(sorted_tasks, daily_hours)

        grouper = CourseGrouper(self.policy)
        days = [
            PlanDay(day=day, blocks=grouper.group(day_tasks, daily_hours))
            for day, day_tasks in allocation.days.items()
        ]

        narrative = NarrativeGenerator().describe(days, tasks, daily_hours)

        logger.info(
            f"Scheduled {allocation.assigned_count}/{len(tasks)} tasks over {len(days)} days "
            f"({daily_hours}h/day, {len(allocation.unassigned)} dropped)"
        )

        plan = GeneratedPlan(
            days=days,
            summary=narrative.summary,
            day_descriptions=narrative.day_descriptions,
            study_tips=narrative.study_tips,
        )
        return plan, allocation

    def schedule(self, tasks: Sequence[Task], preferences: StudyPreferences) -> GeneratedPlan:
        plan, _ = self.schedule_with_allocation(tasks, preferences)
        return plan
