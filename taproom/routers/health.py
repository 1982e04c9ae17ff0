import time

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from taproom.db import get_db_session
from taproom.schemas import HealthStatus

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthStatus)
async def health() -> HealthStatus:
    return HealthStatus(status="ok")


@router.get("/db", response_model=HealthStatus)
async def health_db(session: AsyncSession = Depends(get_db_session)) -> HealthStatus:
    start = time.perf_counter()
    try:
        await session.execute(text("SELECT 1"))
        elapsed = (time.perf_counter() - start) * 1000
        return HealthStatus(status="ok", latency_ms=elapsed)
    except Exception as exc:  # noqa: BLE001
        elapsed = (time.perf_counter() - start) * 1000
        return HealthStatus(status="fail", latency_ms=elapsed, last_error=str(exc))
