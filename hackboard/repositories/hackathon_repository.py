"""
Hackathon Repository - Hackathon Scoring Dashboard
hackboard/repositories/hackathon_repository.py

Loads and saves whole hackathon datasets. Scores are decoded on the way in
and encoded on the way out to the file store; Redis keeps the decoded form.
"""

import logging
from typing import Dict, List, Optional

from hackboard.core.exceptions import EntityNotFoundException, RepositoryException
from hackboard.models.hackathon import (
    HackathonData,
    HackathonInfo,
    HackathonsList,
    Project,
    StoredHackathonData,
    Team,
)
from hackboard.services.storage_backend import StorageBackend

logger = logging.getLogger(__name__)


class HackathonRepository:
    """
    Facade over the active storage backend.

    Args:
        backend: Active backend (Redis or file).
        file_backend: File backend used for fallback reads and the encoded
            on-disk mirror when ``backend`` is remote. Pass the same object
            (or None) when the file backend is the active one.
        mirror_to_file: Write the encoded mirror after remote saves.
    """

    def __init__(
        self,
        backend: StorageBackend,
        file_backend: Optional[StorageBackend] = None,
        mirror_to_file: bool = True,
    ):
        self.backend = backend
        self.file_backend = file_backend if file_backend is not backend else None
        self.mirror_to_file = mirror_to_file

    @property
    def is_remote(self) -> bool:
        return self.backend.stores_decoded

    # Registry

    def get_hackathons_list(self) -> HackathonsList:
        registry = self.backend.load_registry()
        if registry is None and self.file_backend is not None:
            logger.warning(
                f"Hackathons list not found in {self.backend.name}, falling back to {self.file_backend.name}"
            )
            registry = self.file_backend.load_registry()
        return registry or HackathonsList()

    def save_hackathons_list(self, registry: HackathonsList) -> None:
        self.backend.save_registry(registry)
        logger.info(f"Saved hackathons list ({len(registry.hackathons)} entries) to {self.backend.name}")

    def get_hackathon_info(self, hackathon_id: str) -> Optional[HackathonInfo]:
        return self.get_hackathons_list().find(hackathon_id)

    def _require_info(self, hackathon_id: str) -> HackathonInfo:
        info = self.get_hackathon_info(hackathon_id)
        if info is None:
            raise EntityNotFoundException("Hackathon", hackathon_id)
        return info

    # Datasets

    def _load_stored(self, hackathon_id: str) -> StoredHackathonData:
        self._require_info(hackathon_id)

        stored = self.backend.load_raw(hackathon_id)
        if stored is None and self.file_backend is not None:
            logger.warning(
                f"Hackathon {hackathon_id} not found in {self.backend.name}, "
                f"falling back to {self.file_backend.name}"
            )
            stored = self.file_backend.load_raw(hackathon_id)

        if stored is None:
            raise EntityNotFoundException("HackathonData", hackathon_id)
        return stored

    def get_data(self, hackathon_id: str) -> HackathonData:
        """Full decoded dataset. Encoded and live score fields are both accepted."""
        return self._load_stored(hackathon_id).decode()

    def save_data(self, hackathon_id: str, data: HackathonData) -> None:
        """
        Replace the stored dataset in full. Last write wins.

        Remote mode stores the decoded form, then mirrors the encoded form to
        disk. A mirror failure is logged; the remote write stands.
        """
        self._require_info(hackathon_id)

        stored = StoredHackathonData.from_data(data, encode=not self.backend.stores_decoded)
        self.backend.save_raw(hackathon_id, stored)
        logger.info(f"Saved hackathon {hackathon_id} to {self.backend.name}")

        if self.file_backend is not None and self.mirror_to_file:
            try:
                self.file_backend.save_raw(hackathon_id, StoredHackathonData.from_data(data, encode=True))
            except RepositoryException as e:
                logger.warning(f"File mirror write failed for hackathon {hackathon_id}: {e}")

    # Convenience reads

    def get_team(self, hackathon_id: str, team_id: str) -> Optional[Team]:
        return self.get_data(hackathon_id).find_team(team_id)

    def get_project(self, hackathon_id: str, project_id: str) -> Optional[Project]:
        return self.get_data(hackathon_id).find_project(project_id)

    def get_team_projects(self, hackathon_id: str, team_id: str) -> List[Project]:
        return self.get_data(hackathon_id).team_projects(team_id)

    # Export / seeding

    def export_data(self, hackathon_id: str) -> StoredHackathonData:
        """Dataset with scores re-encoded, matching the file form."""
        return StoredHackathonData.from_data(self.get_data(hackathon_id), encode=True)

    def export_all(self) -> Dict[str, object]:
        registry = self.get_hackathons_list()
        return {
            "hackathons": registry,
            "data": {h.id: self.export_data(h.id) for h in registry.hackathons},
        }

    def seed_remote_from_files(self) -> List[str]:
        """
        Copy the file registry and every file dataset (decoded) into the
        remote backend. Returns the seeded hackathon ids.
        """
        if not self.is_remote or self.file_backend is None:
            logger.info("Not using remote storage, skipping seed")
            return []

        registry = self.file_backend.load_registry()
        if registry is None:
            raise EntityNotFoundException("HackathonsList", "file")
        self.backend.save_registry(registry)
        logger.info("Seeded hackathons list to remote storage")

        seeded = []
        for info in registry.hackathons:
            stored = self.file_backend.load_raw(info.id)
            if stored is None:
                logger.warning(f"No data file for hackathon {info.id}, skipping")
                continue
            self.backend.save_raw(info.id, StoredHackathonData.from_data(stored.decode(), encode=False))
            seeded.append(info.id)
            logger.info(f"Seeded hackathon {info.id} to remote storage")
        return seeded
