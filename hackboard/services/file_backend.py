"""
File Backend - Hackathon Scoring Dashboard
hackboard/services/file_backend.py

JSON files in a data directory: the registry (hackathons.json) plus one
dataset file per hackathon, named by the registry's dataFile field.
Writes replace the whole file through a temp file, so a failed write leaves
the previous snapshot in place. Concurrent writers are not coordinated.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from hackboard.core.exceptions import (
    BackendUnavailableException,
    EntityNotFoundException,
    RepositoryException,
)
from hackboard.models.hackathon import HackathonInfo, HackathonsList, StoredHackathonData
from hackboard.services.storage_backend import StorageBackend

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class FileBackend(StorageBackend):
    """Local structured file store. Datasets are written with encoded scores."""

    name = "file"

    def __init__(self, data_dir: Path, registry_file: str = "hackathons.json"):
        self.data_dir = Path(data_dir)
        self.registry_path = self.data_dir / registry_file

    # I/O helpers

    def _read(self, path: Path, model: Type[T]) -> Optional[T]:
        try:
            contents = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise BackendUnavailableException(f"Failed to read {path}: {e}") from e
        try:
            return model.model_validate_json(contents)
        except ValidationError as e:
            raise RepositoryException(f"Malformed data file {path}: {e}") from e

    def _write(self, path: Path, payload: Any) -> None:
        text = json.dumps(payload, indent=2, ensure_ascii=False)
        tmp_name = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=path.parent, prefix=f".{path.name}.", delete=False
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(text)
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise BackendUnavailableException(f"Failed to write {path}: {e}") from e
        logger.debug(f"Wrote {path}")

    def _dataset_path(self, info: HackathonInfo) -> Path:
        return self.data_dir / info.data_file

    def _require_info(self, hackathon_id: str) -> HackathonInfo:
        registry = self.load_registry()
        info = registry.find(hackathon_id) if registry else None
        if info is None:
            raise EntityNotFoundException("Hackathon", hackathon_id)
        return info

    # Contract

    def load_registry(self) -> Optional[HackathonsList]:
        return self._read(self.registry_path, HackathonsList)

    def save_registry(self, registry: HackathonsList) -> None:
        self._write(self.registry_path, registry.model_dump(mode="json", by_alias=True, exclude_none=True))

    def load_raw(self, hackathon_id: str) -> Optional[StoredHackathonData]:
        registry = self.load_registry()
        info = registry.find(hackathon_id) if registry else None
        if info is None:
            return None
        return self._read(self._dataset_path(info), StoredHackathonData)

    def save_raw(self, hackathon_id: str, data: StoredHackathonData) -> None:
        info = self._require_info(hackathon_id)
        self._write(self._dataset_path(info), data.model_dump(mode="json", by_alias=True, exclude_none=True))
