import os
import logging
from fastapi import APIRouter, Depends, Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from api.dependencies import get_llm_config
from llm.config import LLMConfig

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health")
async def health_check(config: LLMConfig = Depends(get_llm_config)) -> dict:
    """Health check endpoint for container orchestration."""
    return {
        "status": "healthy",
        "profile": os.getenv("DEPLOYMENT_PROFILE", "unknown"),
        "ai_provider": config.provider,
        "ai_enabled": config.enabled,
    }


@router.get("/metrics")
async def metrics() -> Response:
    """
    Prometheus scrape endpoint.
    """
    data = generate_latest()
    return Response(content=data, media_type=CONTENT_TYPE_LATEST)
