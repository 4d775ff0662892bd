import asyncio
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from api.dependencies import get_plan_store
from api.metrics import REQUESTS_TOTAL, SAVED_PLANS_TOTAL
from storage.plan_store import PlanStore

router = APIRouter()
logger = logging.getLogger(__name__)


class SavePlanIn(BaseModel):
    user_id: str = Field(..., min_length=1)
    title: Optional[str] = None
    plan: Dict[str, Any]


@router.post("")
async def save_plan(
    payload: SavePlanIn,
    store: PlanStore = Depends(get_plan_store),
) -> dict:
    """Persist a generated plan for a user."""
    try:
        record = await asyncio.to_thread(store.save, payload.user_id, payload.plan, payload.title)
    except OSError as e:
        logger.error(f"Failed to save plan: {e}")
        REQUESTS_TOTAL.labels(endpoint="/plans", status="error").inc()
        raise HTTPException(status_code=500, detail="Failed to save plan")

    SAVED_PLANS_TOTAL.inc()
    REQUESTS_TOTAL.labels(endpoint="/plans", status="ok").inc()
    return {"success": True, "plan": record.model_dump()}


@router.get("")
async def list_plans(
    user_id: str = Query(..., min_length=1),
    store: PlanStore = Depends(get_plan_store),
) -> dict:
    """List a user's saved plans, newest first."""
    plans = await asyncio.to_thread(store.list, user_id)
    return {"plans": plans}


@router.get("/{plan_id}")
async def get_plan(
    plan_id: str,
    user_id: str = Query(..., min_length=1),
    store: PlanStore = Depends(get_plan_store),
) -> dict:
    record = await asyncio.to_thread(store.get, user_id, plan_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Plan not found")
    return record.model_dump()


@router.delete("/{plan_id}")
async def delete_plan(
    plan_id: str,
    user_id: str = Query(..., min_length=1),
    store: PlanStore = Depends(get_plan_store),
) -> dict:
    deleted = await asyncio.to_thread(store.delete, user_id, plan_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Plan not found")
    return {"success": True}
