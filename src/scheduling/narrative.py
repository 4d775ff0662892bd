from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from study_planner.models import PlanDay, Task

MAX_LISTED_TASKS = 3
BUSY_DAY_RATIO = 0.8


@dataclass
class Narrative:
    summary: str
    day_descriptions: Dict[str, str] = field(default_factory=dict)
    study_tips: List[str] = field(default_factory=list)


def format_hours(hours: float) -> str:
    """Render a preference value the way a user typed it: 3 not 3.0, 2.5 stays 2.5."""
    if float(hours).is_integer():
        return str(int(hours))
    return f"{hours:g}"


class NarrativeGenerator:
    """Templated summary, per-day text and study tips for a finished week."""

    def summary(self, days: Sequence[PlanDay], all_tasks: Sequence[Task], daily_hours: float) -> str:
        total_hours = sum(d.total_hours for d in days)
        courses = {b.course for d in days for b in d.blocks}
        avg = total_hours / len(days) if days else 0.0
        return (
            f"This study plan spreads {len(all_tasks)} tasks across {len(days)} days, "
            f"totaling {total_hours:.1f} hours of focused study time. "
            f"You'll be studying approximately {avg:.1f} hours per day with content "
            f"from {len(courses)} course(s). The plan is designed to balance your workload "
            f"evenly while respecting your {format_hours(daily_hours)} hour daily study preference."
        )

    def day_tip(self, day: PlanDay, daily_hours: float) -> str:
        if len(day.blocks) > 1:
            return "You have multiple subjects today, so try the Pomodoro technique to switch between courses effectively."
        if day.total_hours > daily_hours * BUSY_DAY_RATIO:
            return "This is a busy day - make sure to take short breaks every 25-30 minutes."
        return "This is a lighter day - use it to consolidate learning or get ahead on upcoming tasks."

    def describe_day(self, day: PlanDay, daily_hours: float) -> str:
        course_list = " and ".join(b.course for b in day.blocks)
        count = day.task_count
        plural = "" if count == 1 else "s"
        text = f"{day.day}: Focus on {course_list} with {count} task{plural} ({day.total_hours:.1f} hours). "

        specific = [f"{b.course}: {t}" for b in day.blocks for t in b.tasks]
        if specific:
            listed = ", ".join(specific[:MAX_LISTED_TASKS])
            more = len(specific) - MAX_LISTED_TASKS
            suffix = f", and {more} more" if more > 0 else ""
            text += f"Tasks include: {listed}{suffix}. "

        return text + self.day_tip(day, daily_hours)

    def study_tips(self, daily_hours: float) -> List[str]:
        return [
            f"Study consistently at the same time each day to build a routine. Aim for {format_hours(daily_hours)} hours daily as planned.",
            "Use the Pomodoro Technique: Study for 25 minutes, take a 5-minute break, then repeat. After 4 cycles, take a 15-minute break.",
            "Break complex tasks into smaller subtasks. This makes progress visible and keeps motivation high.",
            "The spacing effect works best when you review material after 1 day, 3 days, and 1 week. Plan reviews accordingly.",
            "Group similar subjects together when possible to maintain context and reduce cognitive switching costs.",
            "Complete harder or more important tasks early in the day when your mental energy is highest.",
            "Track completed tasks to visualize progress. Even small wins contribute to motivation.",
        ]

    def describe(self, days: Sequence[PlanDay], all_tasks: Sequence[Task], daily_hours: float) -> Narrative:
        return Narrative(
            summary=self.summary(days, all_tasks, daily_hours),
            day_descriptions={d.day: self.describe_day(d, daily_hours) for d in days},
            study_tips=self.study_tips(daily_hours),
        )
