"""
Backend Selection - Hackathon Scoring Dashboard
hackboard/services/storage.py

Picks the active storage backend from settings. Redis is used when
REDIS_URL is configured; otherwise the file backend is used unconditionally.
The file backend is always built too, for fallback reads and the on-disk
mirror.
"""
import logging
from typing import Tuple

from hackboard.config import Settings
from hackboard.services.file_backend import FileBackend
from hackboard.services.redis_backend import RedisBackend
from hackboard.services.storage_backend import StorageBackend

logger = logging.getLogger(__name__)


def build_backends(settings: Settings) -> Tuple[StorageBackend, FileBackend]:
    """Return (active backend, file backend)."""
    file_backend = FileBackend(settings.DATA_DIR, settings.REGISTRY_FILE)

    if settings.use_redis:
        logger.info("Using Redis storage backend")
        active = RedisBackend(settings.REDIS_URL, socket_timeout=settings.REDIS_SOCKET_TIMEOUT)
        return active, file_backend

    logger.info(f"Using file storage backend at {settings.DATA_DIR}")
    return file_backend, file_backend
