import asyncio
import json
import logging
import time
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel, Field, ValidationError

from api.backend import BackendAPI
from api.dependencies import get_backend, get_block_explainer
from api.metrics import (
    REQUESTS_TOTAL,
    REQUEST_LATENCY_SECONDS,
    PLANS_GENERATED_TOTAL,
    TASKS_SCHEDULED_TOTAL,
    TASKS_DROPPED_TOTAL,
    ENHANCEMENTS_TOTAL,
)
from llm.explainer import BlockExplainer
from study_planner.errors import InputError
from study_planner.validation import parse_plan_request

router = APIRouter()
logger = logging.getLogger(__name__)

GENERIC_FAILURE = "Failed to generate study plan. Please try again."


class ExplainIn(BaseModel):
    course: str = Field(..., min_length=1)
    tasks: List[str]
    duration_hours: Optional[float] = None
    notes: Optional[str] = None


async def _read_json(request: Request):
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise InputError("Invalid JSON in request body")


@router.post("/plan")
async def generate_plan(
    request: Request,
    backend: BackendAPI = Depends(get_backend),
) -> dict:
    start = time.time()
    status = "error"
    try:
        body = await _read_json(request)
        plan_request = parse_plan_request(body)

        logger.info(
            f"Generating plan for {len(plan_request.tasks)} tasks with "
            f"{plan_request.preferences.daily_hours}h daily preference"
        )
        result = await asyncio.to_thread(backend.generate_plan, plan_request)
        plan = result["plan"]
        logger.info(f"Plan generated with {len(plan.days)} study days")

        PLANS_GENERATED_TOTAL.inc()
        TASKS_SCHEDULED_TOTAL.inc(result["tasks_scheduled"])
        TASKS_DROPPED_TOTAL.inc(result["tasks_dropped"])
        ENHANCEMENTS_TOTAL.labels(outcome=result["enhancement"]).inc()

        status = "ok"
        return {"plan": plan.model_dump(by_alias=True)}
    except InputError as e:
        status = "invalid"
        logger.info(f"Rejected plan request: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        logger.exception("Plan generation failed")
        raise HTTPException(status_code=500, detail=GENERIC_FAILURE)
    finally:
        REQUESTS_TOTAL.labels(endpoint="/plan", status=status).inc()
        REQUEST_LATENCY_SECONDS.labels(endpoint="/plan").observe(time.time() - start)


@router.post("/plan/explain")
async def explain_block(
    request: Request,
    explainer: BlockExplainer = Depends(get_block_explainer),
) -> dict:
    try:
        body = await _read_json(request)
        payload = ExplainIn.model_validate(body)
    except (InputError, ValidationError):
        REQUESTS_TOTAL.labels(endpoint="/plan/explain", status="invalid").inc()
        raise HTTPException(status_code=400, detail="Invalid block payload. Expect { course, tasks[] }")

    result = await asyncio.to_thread(
        explainer.explain,
        payload.course,
        payload.tasks,
        payload.duration_hours,
        payload.notes,
    )
    REQUESTS_TOTAL.labels(endpoint="/plan/explain", status="fallback" if result.fallback else "ok").inc()
    return result.model_dump()
