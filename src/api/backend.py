import logging
from datetime import datetime
from typing import Optional

from llm.enhancement import EnhancementGateway
from scheduling.policy import SchedulingPolicy
from scheduling.scheduler import Scheduler
from study_planner.models import PlanRequest

logger = logging.getLogger(__name__)


class BackendAPI:
    """Central orchestration component of the study planner."""

    def __init__(
        self,
        policy: Optional[SchedulingPolicy] = None,
        enhancer: Optional[EnhancementGateway] = None,
    ):
        self.policy = policy or SchedulingPolicy()
        self.enhancer = enhancer

    def generate_plan(self, request: PlanRequest, now: Optional[datetime] = None) -> dict:
        """Builds the weekly plan and, when asked for and configured, enriches its text."""

        # 1. Score, sort, allocate, group and narrate (deterministic)
        scheduler = Scheduler(self.policy, now=now)
        plan, allocation = scheduler.schedule_with_allocation(request.tasks, request.preferences)

        # 2. Optional narrative enhancement; failures keep the deterministic plan
        enhancement = "skipped"
        if request.use_ai and self.enhancer is not None and self.enhancer.enabled:
            enhanced = self.enhancer.enhance(plan)
            enhancement = "applied" if enhanced is not plan else "failed"
            plan = enhanced

        return {
            "plan": plan,
            "tasks_scheduled": allocation.assigned_count,
            "tasks_dropped": len(allocation.unassigned),
            "enhancement": enhancement,
        }
