"""
Health Check Router - Hackathon Scoring Dashboard
hackboard/routers/health.py

Reports which storage backend is active and whether it answers.
"""
from datetime import datetime, timezone
from typing import Dict

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from hackboard.config import Settings, get_settings
from hackboard.core.dependencies import get_hackathon_repository
from hackboard.repositories.hackathon_repository import HackathonRepository
from hackboard.services.redis_backend import RedisBackend

router = APIRouter(tags=["Health"])


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str
    backend: str
    dependencies: Dict[str, str]


@router.get("/health", response_model=HealthResponse)
def health(
    repo: HackathonRepository = Depends(get_hackathon_repository),
    settings: Settings = Depends(get_settings),
):
    dependencies = {}
    if isinstance(repo.backend, RedisBackend):
        dependencies["redis"] = "healthy" if repo.backend.ping() else "unhealthy"
    dependencies["data_dir"] = "healthy" if settings.DATA_DIR.is_dir() else "missing"

    overall = "healthy" if all(v == "healthy" for v in dependencies.values()) else "degraded"
    return HealthResponse(
        status=overall,
        timestamp=datetime.now(timezone.utc),
        version=settings.APP_VERSION,
        backend=repo.backend.name,
        dependencies=dependencies,
    )
