"""
Dependencies - Hackathon Scoring Dashboard
hackboard/core/dependencies.py

FastAPI dependency injection for the repository. The backend is chosen once
per process; tests override get_hackathon_repository.
"""

from functools import lru_cache

from hackboard.config import get_settings
from hackboard.repositories.hackathon_repository import HackathonRepository
from hackboard.services.storage import build_backends


@lru_cache()
def get_hackathon_repository() -> HackathonRepository:
    """Get cached HackathonRepository instance."""
    settings = get_settings()
    backend, file_backend = build_backends(settings)
    return HackathonRepository(
        backend,
        file_backend=file_backend,
        mirror_to_file=settings.FILE_MIRROR_ENABLED,
    )
