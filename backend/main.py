import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskee import config
from taskee.database import Base, engine
from taskee.errors import TaskeeError, taskee_error_handler
from taskee.services.rate_limit import FixedWindowRateLimiter

# Import all models so they're registered with SQLAlchemy Base
from taskee.models import user, availability, entries, task, customer, reminder, audit_log  # noqa: F401

from taskee.routers.auth import router as auth_router
from taskee.routers.availability import router as availability_router
from taskee.routers.planning import router as planning_router
from taskee.routers.time_entries import router as time_router
from taskee.routers.trips import router as trips_router
from taskee.routers.expenses import router as expenses_router
from taskee.routers.tasks import router as tasks_router
from taskee.routers.customers import router as customers_router
from taskee.routers.reminders import router as reminders_router

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

logging.getLogger("httpx").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    Base.metadata.create_all(bind=engine, checkfirst=True)
    logger.info("Database tables ready")

    # One limiter per process; counters are not shared between instances
    app.state.import_rate_limiter = FixedWindowRateLimiter(
        limit=config.IMPORT_RATE_LIMIT,
        window_seconds=config.IMPORT_RATE_WINDOW_SECONDS,
    )
    yield
    logger.info("Application shutting down...")


app = FastAPI(title="Taskee API", version="1.0.0", lifespan=lifespan)

app.add_exception_handler(TaskeeError, taskee_error_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(availability_router)
app.include_router(planning_router)
app.include_router(time_router)
app.include_router(trips_router)
app.include_router(expenses_router)
app.include_router(tasks_router)
app.include_router(customers_router)
app.include_router(reminders_router)


@app.get("/health")
def health():
    return {"ok": True}
