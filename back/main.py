
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from back.api import router
from back.logging_setup import setup_logging
from back.mailer import Mailer
from back.middleware import ExceptionMiddleware, register_exception_handlers
from back.reminder import ReminderScheduler
from config import settings
from database.database import session_manager
from database.redis import close_redis_client

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.log_level)
    await session_manager.create_all()
    scheduler = ReminderScheduler(session_manager, Mailer.from_settings(settings))
    app.state.reminder_scheduler = scheduler
    scheduler.start()
    logger.info("Task service started, environment=%s", settings.environment)
    try:
        yield
    finally:
        await scheduler.stop()
        await session_manager.close()
        await close_redis_client()


def allowed_origins() -> list[str]:
    if not settings.client_origin:
        return ["*"]
    origins = [origin.strip() for origin in settings.client_origin.split(",") if origin.strip()]
    return origins or ["*"]


app = FastAPI(docs_url="/api/docs", redoc_url="/api/redoc",
              openapi_url="/api/openapi.json", lifespan=lifespan)
app.include_router(router)
app.add_middleware(ExceptionMiddleware)
app.add_middleware(CORSMiddleware,
                   allow_origins=allowed_origins(),
                   allow_credentials=True,
                   allow_methods=["*"],
                   allow_headers=["*"])
register_exception_handlers(app)
