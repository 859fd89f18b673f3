"""
Task Planner FastAPI Backend

Same-machine HTTP API between the desktop calendar UI and the local task
store.

Architecture:
- FastAPI handles HTTP routing and request/response validation
- Pydantic schemas ensure type safety
- TaskStore owns all task data (SQLite)
- ReportAggregator and the calendar helpers are read-only views over it

Run with:
    uvicorn backend.main:app --port 3001

Or:
    python -m backend.main
"""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.dependencies import get_config, get_task_store
from backend.routers import tasks_router, reports_router, calendar_router
from backend.schemas import HealthResponse
from taskplanner import __version__
from taskplanner.core.config import configure_logging
from taskplanner.core.errors import PlannerError
from taskplanner.core.task_store import TaskStore

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    "validation": 400,
    "not_found": 404,
    "storage": 500,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup opens the store (creating or migrating the schema); a storage
    failure is logged and left for the endpoints to report.
    """
    try:
        store = get_task_store()
        logger.info("Database ready: %s (%d tasks)", store.db.db_path, store.count())
    except PlannerError as e:
        logger.error("Task store unavailable: %s", e.message)

    yield

    logger.info("Shutting down...")


# Create FastAPI app
app = FastAPI(
    title="Task Planner API",
    description="""
    Local API behind the Task Planner desktop calendar.

    ## Features

    - **Tasks**: Create, update, complete, schedule and delete tasks
    - **Reports**: Completion and time statistics over a date range
    - **Calendar**: Month grid with per-day status, day panel, today's counters
    """,
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_config().get("cors_origins", []),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(PlannerError)
async def planner_error_handler(request: Request, exc: PlannerError):
    """Map planner failures to status codes with a {error, detail} body."""
    status_code = STATUS_BY_KIND.get(exc.kind, 500)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=status_code, content=exc.to_dict())


# Routes are served at the root and under /api, the prefix used by the
# desktop client.
for _prefix in ("", "/api"):
    app.include_router(tasks_router, prefix=_prefix)
    app.include_router(reports_router, prefix=_prefix)
    app.include_router(calendar_router, prefix=_prefix)


@app.get("/")
async def root():
    """API root - returns basic info and available endpoints."""
    return {
        "name": "Task Planner API",
        "version": __version__,
        "docs": "/docs",
        "endpoints": {
            "tasks": "/tasks",
            "pool": "/tasks/pool",
            "reports": "/reports/{startDate}/{endDate}",
            "calendar": "/calendar/{year}/{month}",
            "today": "/calendar/today",
        }
    }


@app.get("/health", response_model=HealthResponse)
async def health_check(store: TaskStore = Depends(get_task_store)):
    """Health check endpoint for monitoring."""
    try:
        return HealthResponse(status="healthy", database="connected", tasks=store.count())
    except PlannerError as e:
        return HealthResponse(status="unhealthy", database="unavailable", error=e.message)


def run() -> None:
    """Start the API server with settings from the config file."""
    import uvicorn

    config = get_config()
    configure_logging(config.get("log_level", "INFO"))
    uvicorn.run(
        app,
        host=config.get("api_host", "127.0.0.1"),
        port=int(config.get("api_port", 3001)),
    )


# Allow running directly with: python -m backend.main
if __name__ == "__main__":
    run()
