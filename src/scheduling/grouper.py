from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from scheduling.policy import SchedulingPolicy
from study_planner.models import PlanBlock, Task

UNKNOWN_COURSE = "Unknown"


class CourseGrouper:
    """Turn one day's tasks into per-course study blocks."""

    def __init__(self, policy: Optional[SchedulingPolicy] = None):
        self.policy = policy or SchedulingPolicy()

    def group(self, day_tasks: Sequence[Task], daily_hours: float) -> List[PlanBlock]:
        # dicts keep insertion order, which is first appearance within the day
        by_course: Dict[str, List[Task]] = {}
        for task in day_tasks:
            course_id = (task.course_id or "").strip() or UNKNOWN_COURSE
            by_course.setdefault(course_id, []).append(task)

        blocks: List[PlanBlock] = []
        for course_id, tasks in by_course.items():
            first = tasks[0]
            hours = sum(self.policy.effort(t) for t in tasks)
            blocks.append(
                PlanBlock(
                    course=first.course_name or course_id,
                    tasks=[t.title for t in tasks],
                    duration_hours=min(daily_hours, hours),
                    notes=f"{len(tasks)} task(s) | Priority: {first.priority or 'normal'}",
                )
            )
        return blocks
