import logging

from fastapi import FastAPI

from api.routers import ops, plan, plans

# Logging configuration
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Study Planner")

app.include_router(plan.router, tags=["plan"])
app.include_router(plans.router, prefix="/plans", tags=["plans"])
app.include_router(ops.router, tags=["ops"])


@app.on_event("startup")
async def startup() -> None:
    logger.info("Study planner API started")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
