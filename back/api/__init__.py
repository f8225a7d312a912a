
from fastapi import APIRouter

from back.schemas.common import as_utc
from database.models import utc_now

from .auth import router as auth_router
from .project import router as project_router
from .task import router as task_router

router = APIRouter(prefix="/api")
router.include_router(auth_router)
router.include_router(project_router)
router.include_router(task_router)


@router.get("/health", tags=["health"])
async def health() -> dict:
    return {"status": "ok", "timestamp": as_utc(utc_now()).isoformat()}
