from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session

from apps.api.deps.deps import get_db
from apps.api.schemas.health import HealthStatus

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/live", response_model=HealthStatus)
def live() -> HealthStatus:
    return HealthStatus(status="ok")


@router.get("/ready", response_model=HealthStatus)
def ready(db: Session = Depends(get_db)) -> HealthStatus:
    db.execute(text("SELECT 1"))
    return HealthStatus(status="ready")
