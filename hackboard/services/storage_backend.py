"""
Storage Backend Contract - Hackathon Scoring Dashboard
hackboard/services/storage_backend.py

One contract for the Redis and file backends. Every read returns None when
the entry is absent; transport and I/O failures raise
BackendUnavailableException.
"""

from abc import ABC, abstractmethod
from typing import Optional

from hackboard.models.hackathon import HackathonsList, StoredHackathonData


class StorageBackend(ABC):
    """Whole-snapshot storage of the registry and per-hackathon datasets."""

    name: str = "backend"
    # True when the backend keeps live scores rather than the encoded form
    stores_decoded: bool = False

    @abstractmethod
    def load_registry(self) -> Optional[HackathonsList]:
        ...

    @abstractmethod
    def save_registry(self, registry: HackathonsList) -> None:
        ...

    @abstractmethod
    def load_raw(self, hackathon_id: str) -> Optional[StoredHackathonData]:
        """Dataset as stored; scores may still be encoded."""

    @abstractmethod
    def save_raw(self, hackathon_id: str, data: StoredHackathonData) -> None:
        """Replace the stored dataset in full."""
