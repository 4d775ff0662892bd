from __future__ import annotations

import math
from typing import Any

from pydantic import ValidationError

from study_planner.errors import InputError
from study_planner.models import PlanRequest


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def _daily_hours(preferences: dict) -> float:
    raw = preferences.get("dailyHours", preferences.get("daily_hours"))
    if raw is None or isinstance(raw, bool):
        raise InputError("Invalid daily hours preference. Must be greater than 0.")
    try:
        hours = float(raw)
    except (TypeError, ValueError):
        raise InputError("Invalid daily hours preference. Must be greater than 0.")
    if not math.isfinite(hours) or hours <= 0:
        raise InputError("Invalid daily hours preference. Must be greater than 0.")
    return hours


def parse_plan_request(body: Any) -> PlanRequest:
    """
    Validate a raw plan-generation payload and build a PlanRequest.

    Checks run in the order the client expects to see their messages:
    task list shape, emptiness, required task fields, then preferences.
    Raises InputError with a human-readable message on the first violation.
    """
    if not isinstance(body, dict):
        raise InputError("Invalid request body. Expected a JSON object.")

    tasks = body.get("tasks")
    if not isinstance(tasks, list):
        raise InputError("Invalid tasks format. Expected an array of tasks.")
    if not tasks:
        raise InputError("No tasks provided. Please add tasks before generating a plan.")

    invalid = [
        t for t in tasks
        if not isinstance(t, dict) or _is_blank(t.get("title")) or _is_blank(t.get("course_id"))
    ]
    if invalid:
        raise InputError(f"{len(invalid)} task(s) missing required fields (title, course_id)")

    preferences = body.get("preferences")
    if not isinstance(preferences, dict):
        raise InputError("Invalid preferences format. Expected an object with study preferences.")
    daily_hours = _daily_hours(preferences)

    use_ai = body.get("useAI", True)
    if use_ai is None:
        use_ai = True
    elif isinstance(use_ai, str):
        use_ai = use_ai.strip().lower() not in {"0", "false", "no", "off"}

    try:
        return PlanRequest(
            tasks=tasks,
            preferences={"dailyHours": daily_hours},
            useAI=bool(use_ai),
        )
    except ValidationError as e:
        first = e.errors()[0] if e.errors() else {}
        where = ".".join(str(p) for p in first.get("loc", ()))
        msg = first.get("msg", "invalid value")
        raise InputError(f"Invalid task data: {where}: {msg}" if where else f"Invalid task data: {msg}")
