import os
from functools import lru_cache

from api.backend import BackendAPI
from llm.config import LLMConfig
from llm.enhancement import EnhancementGateway
from llm.explainer import BlockExplainer
from scheduling.policy import SchedulingPolicy
from storage.plan_store import PlanStore

# Configuration
PLAN_STORE_PATH = os.getenv("PLAN_STORE_PATH", "data/plans.json").strip() or "data/plans.json"


@lru_cache(maxsize=1)
def get_llm_config() -> LLMConfig:
    return LLMConfig.from_env()


@lru_cache(maxsize=1)
def get_backend() -> BackendAPI:
    return BackendAPI(
        policy=SchedulingPolicy.from_env(),
        enhancer=EnhancementGateway(config=get_llm_config()),
    )


@lru_cache(maxsize=1)
def get_block_explainer() -> BlockExplainer:
    return BlockExplainer(config=get_llm_config())


@lru_cache(maxsize=1)
def get_plan_store() -> PlanStore:
    return PlanStore(path=PLAN_STORE_PATH)
