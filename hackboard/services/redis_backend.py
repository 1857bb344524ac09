import logging
from typing import Optional, Type, TypeVar

import redis
from pydantic import BaseModel, ValidationError

from hackboard.core.exceptions import BackendUnavailableException, RepositoryException
from hackboard.models.hackathon import HackathonsList, StoredHackathonData
from hackboard.services.storage_backend import StorageBackend

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

REGISTRY_KEY = "hackathons-list"
DATASET_KEY_PREFIX = "hackathon:"


def dataset_key(hackathon_id: str) -> str:
    return f"{DATASET_KEY_PREFIX}{hackathon_id}"


class RedisBackend(StorageBackend):
    """
    Durable key-value backend.

    Values are stored without a TTL. Datasets are kept in whatever score form
    they are handed; the repository hands over decoded scores so reads skip
    the transform.
    """

    name = "redis"
    stores_decoded = True

    def __init__(self, url: str, socket_timeout: float = 5.0, client: Optional[redis.Redis] = None):
        self.client = client or redis.from_url(
            url,
            decode_responses=True,
            socket_connect_timeout=socket_timeout,
            socket_timeout=socket_timeout,
        )

    def _get(self, key: str, model: Type[T]) -> Optional[T]:
        try:
            data = self.client.get(key)
        except redis.RedisError as e:
            logger.error(f"Redis read failed for {key}: {e}")
            raise BackendUnavailableException(f"Redis read failed for {key}: {e}") from e
        if not data:
            return None
        try:
            return model.model_validate_json(data)
        except ValidationError as e:
            raise RepositoryException(f"Malformed value stored under {key}: {e}") from e

    def _set(self, key: str, value: BaseModel) -> None:
        try:
            self.client.set(key, value.model_dump_json(by_alias=True, exclude_none=True))
        except redis.RedisError as e:
            logger.error(f"Redis write failed for {key}: {e}")
            raise BackendUnavailableException(f"Redis write failed for {key}: {e}") from e

    def load_registry(self) -> Optional[HackathonsList]:
        return self._get(REGISTRY_KEY, HackathonsList)

    def save_registry(self, registry: HackathonsList) -> None:
        self._set(REGISTRY_KEY, registry)

    def load_raw(self, hackathon_id: str) -> Optional[StoredHackathonData]:
        return self._get(dataset_key(hackathon_id), StoredHackathonData)

    def save_raw(self, hackathon_id: str, data: StoredHackathonData) -> None:
        self._set(dataset_key(hackathon_id), data)

    def ping(self) -> bool:
        try:
            return bool(self.client.ping())
        except redis.RedisError:
            return False
