"""
Hackathon Router - Hackathon Scoring Dashboard
hackboard/routers/hackathons.py

Registry, dataset, leaderboard, export and seeding endpoints. Datasets are
read and written as whole snapshots; the last save wins.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Dict, List, NoReturn, Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.exceptions import HTTPException
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field

from hackboard.admin.mutations import update_hackathon_info
from hackboard.config import Settings, get_settings
from hackboard.core.dependencies import get_hackathon_repository
from hackboard.core.exceptions import (
    BackendUnavailableException,
    DuplicateEntityException,
    EntityNotFoundException,
    RepositoryException,
    ValidationRejectedException,
)
from hackboard.core.security import verify_password
from hackboard.models.hackathon import (
    CamelModel,
    HackathonData,
    HackathonInfo,
    HackathonsList,
    Project,
)
from hackboard.repositories.hackathon_repository import HackathonRepository
from hackboard.scoring.aggregator import build_leaderboard, format_score

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Hackathons"])



#  Schemas


class ErrorResponse(BaseModel):
    error_code: str
    message: str
    details: Optional[dict] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class SaveDataRequest(CamelModel):
    hackathon_id: str = Field(..., min_length=1)
    data: HackathonData
    password: Optional[str] = None


class SaveRegistryRequest(HackathonsList):
    password: Optional[str] = None


class HackathonInfoUpdate(CamelModel):
    password: Optional[str] = None
    name: Optional[str] = None
    date: Optional[str] = None
    description: Optional[str] = None
    emoji: Optional[str] = None
    results_published: Optional[bool] = None


class PasswordRequest(BaseModel):
    password: Optional[str] = None


class StatusResponse(BaseModel):
    success: bool = True
    message: str = ""


class LeaderboardEntry(CamelModel):
    """Public view of a project. Score fields are set only once results are published."""

    id: str
    team_id: str
    team_name: Optional[str] = None
    title: str
    description: str = ""
    special_awards: List[str] = Field(default_factory=list)
    scores: Optional[Dict[str, int]] = None
    overall_score: Optional[float] = None
    display_score: Optional[str] = None


class LeaderboardResponse(CamelModel):
    hackathon: HackathonInfo
    results_published: bool
    podium: List[LeaderboardEntry]
    others: List[LeaderboardEntry]
    award_winners: List[LeaderboardEntry]


class SeedResponse(StatusResponse):
    seeded: List[str] = Field(default_factory=list)



#  Exception Helpers


def raise_error(status_code: int, error_code: str, message: str, details: Optional[dict] = None) -> NoReturn:
    raise HTTPException(
        status_code=status_code,
        detail=ErrorResponse(error_code=error_code, message=message, details=details).model_dump(mode="json"),
    )


def raise_unauthorized() -> NoReturn:
    raise_error(status.HTTP_401_UNAUTHORIZED, "UNAUTHORIZED", "Unauthorized: Invalid password")


def raise_repository_error(exc: RepositoryException) -> NoReturn:
    if isinstance(exc, EntityNotFoundException):
        raise_error(
            status.HTTP_404_NOT_FOUND,
            f"{exc.entity_type.upper()}_NOT_FOUND",
            str(exc),
            {"entity_type": exc.entity_type, "entity_id": exc.entity_id},
        )
    if isinstance(exc, ValidationRejectedException):
        raise_error(status.HTTP_422_UNPROCESSABLE_ENTITY, "VALIDATION_ERROR", exc.message)
    if isinstance(exc, DuplicateEntityException):
        raise_error(status.HTTP_409_CONFLICT, "DUPLICATE_ENTITY", exc.message)
    if isinstance(exc, BackendUnavailableException):
        logger.error(f"Storage backend unavailable: {exc}")
        raise_error(status.HTTP_503_SERVICE_UNAVAILABLE, "BACKEND_UNAVAILABLE", "Storage backend unavailable")
    logger.error(f"Repository error: {exc}")
    raise_error(status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_SERVER_ERROR", "Unexpected server error")


def require_admin(password: Optional[str], settings: Settings) -> None:
    if not verify_password(password, settings):
        raise_unauthorized()


def _json_download(payload: BaseModel, filename: str) -> Response:
    body = json.dumps(payload.model_dump(mode="json", by_alias=True, exclude_none=True), indent=2, ensure_ascii=False)
    return Response(
        content=body,
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )



#  Registry


@router.get("/hackathons", response_model=HackathonsList, response_model_exclude_none=True)
def get_hackathons(repo: HackathonRepository = Depends(get_hackathon_repository)):
    try:
        return repo.get_hackathons_list()
    except RepositoryException as e:
        raise_repository_error(e)


@router.post("/hackathons", response_model=StatusResponse)
def save_hackathons(
    body: SaveRegistryRequest,
    repo: HackathonRepository = Depends(get_hackathon_repository),
    settings: Settings = Depends(get_settings),
):
    require_admin(body.password, settings)
    try:
        repo.save_hackathons_list(HackathonsList(hackathons=body.hackathons))
    except RepositoryException as e:
        raise_repository_error(e)
    return StatusResponse(message="Hackathon settings saved")


@router.patch("/hackathons/{hackathon_id}", response_model=HackathonInfo)
def patch_hackathon(
    hackathon_id: str,
    body: HackathonInfoUpdate,
    repo: HackathonRepository = Depends(get_hackathon_repository),
    settings: Settings = Depends(get_settings),
):
    require_admin(body.password, settings)
    fields = body.model_dump(exclude={"password"}, exclude_none=True)
    try:
        registry = update_hackathon_info(repo.get_hackathons_list(), hackathon_id, **fields)
        repo.save_hackathons_list(registry)
    except RepositoryException as e:
        raise_repository_error(e)
    return registry.find(hackathon_id)



#  Datasets


@router.get("/data", response_model=HackathonData, response_model_exclude_none=True)
def get_data(
    hackathon_id: Optional[str] = Query(None, alias="hackathonId"),
    repo: HackathonRepository = Depends(get_hackathon_repository),
):
    if not hackathon_id:
        raise_error(status.HTTP_400_BAD_REQUEST, "INVALID_REQUEST", "hackathonId is required")
    try:
        return repo.get_data(hackathon_id)
    except RepositoryException as e:
        raise_repository_error(e)


@router.post("/data", response_model=StatusResponse)
def save_data(
    body: SaveDataRequest,
    repo: HackathonRepository = Depends(get_hackathon_repository),
    settings: Settings = Depends(get_settings),
):
    require_admin(body.password, settings)
    try:
        repo.save_data(body.hackathon_id, body.data)
    except RepositoryException as e:
        raise_repository_error(e)
    return StatusResponse(message="Changes saved")


@router.get(
    "/hackathons/{hackathon_id}/leaderboard",
    response_model=LeaderboardResponse,
    response_model_exclude_none=True,
)
def get_leaderboard(
    hackathon_id: str,
    repo: HackathonRepository = Depends(get_hackathon_repository),
):
    """Public leaderboard. Scores and ranking stay hidden until results are published."""
    try:
        info = repo.get_hackathon_info(hackathon_id)
        if info is None:
            raise EntityNotFoundException("Hackathon", hackathon_id)
        data = repo.get_data(hackathon_id)
    except RepositoryException as e:
        raise_repository_error(e)

    published = info.results_published
    board = build_leaderboard(data, published)

    def entry(project: Project, score: Optional[float] = None) -> LeaderboardEntry:
        team = data.find_team(project.team_id)
        fields = dict(
            id=project.id,
            team_id=project.team_id,
            team_name=team.name if team else None,
            title=project.title,
            description=project.description,
            special_awards=project.special_awards,
        )
        if published and score is not None:
            fields.update(scores=project.scores, overall_score=score, display_score=format_score(score))
        return LeaderboardEntry(**fields)

    return LeaderboardResponse(
        hackathon=info,
        results_published=published,
        podium=[entry(r.project, r.overall_score) for r in board.podium],
        others=[entry(r.project, r.overall_score) for r in board.others],
        award_winners=[entry(p) for p in board.award_winners],
    )



#  Export / Seeding


@router.get("/export-data")
def export_data(
    password: Optional[str] = Query(None),
    hackathon_id: Optional[str] = Query(None, alias="hackathonId"),
    repo: HackathonRepository = Depends(get_hackathon_repository),
    settings: Settings = Depends(get_settings),
):
    """Encoded dataset for one hackathon, or the registry when no id is given."""
    require_admin(password, settings)
    try:
        if hackathon_id:
            return _json_download(repo.export_data(hackathon_id), f"{hackathon_id}.json")
        return _json_download(repo.get_hackathons_list(), "hackathons.json")
    except RepositoryException as e:
        logger.error(f"Error exporting data: {e}")
        raise_repository_error(e)


@router.post("/export-data")
def export_all_data(
    body: PasswordRequest,
    repo: HackathonRepository = Depends(get_hackathon_repository),
    settings: Settings = Depends(get_settings),
):
    require_admin(body.password, settings)
    try:
        exported = repo.export_all()
    except RepositoryException as e:
        logger.error(f"Error exporting all data: {e}")
        raise_repository_error(e)

    data: Dict[str, dict] = {
        hid: stored.model_dump(mode="json", by_alias=True, exclude_none=True)
        for hid, stored in exported["data"].items()
    }
    return JSONResponse(
        content={
            "success": True,
            "message": "Data exported successfully",
            "data": {
                "hackathons": exported["hackathons"].model_dump(mode="json", by_alias=True, exclude_none=True),
                "data": data,
            },
        }
    )


@router.post("/seed-kv", response_model=SeedResponse)
def seed_kv(
    body: PasswordRequest,
    repo: HackathonRepository = Depends(get_hackathon_repository),
    settings: Settings = Depends(get_settings),
):
    require_admin(body.password, settings)
    if not repo.is_remote:
        raise_error(
            status.HTTP_400_BAD_REQUEST,
            "REMOTE_NOT_CONFIGURED",
            "Redis storage is not configured. Set REDIS_URL first.",
        )
    try:
        seeded = repo.seed_remote_from_files()
    except RepositoryException as e:
        logger.error(f"Error seeding Redis: {e}")
        raise_repository_error(e)
    return SeedResponse(message="Successfully seeded Redis storage from JSON files", seeded=seeded)
