# tests/conftest.py

"""
Pytest Fixtures - Shared datasets, backends and clients

SAMPLE DATA REFERENCE:
- Hackathon: "2025-10-31" (data file 2025-10-31.json)
- Teams:     alpha (owns apollo, artemis), beta (owns borealis), gamma (no projects)
- Awards:    best-ui, crowd-favourite
- Categories: workScope, polish, funUseful (weight 1 each)
"""

from typing import Dict, Optional

import pytest
from fastapi.testclient import TestClient

from hackboard.config import Settings, get_settings
from hackboard.core.dependencies import get_hackathon_repository
from hackboard.core.exceptions import BackendUnavailableException
from hackboard.main import app
from hackboard.models.hackathon import (
    HackathonData,
    HackathonsList,
    StoredHackathonData,
)
from hackboard.repositories.hackathon_repository import HackathonRepository
from hackboard.services.file_backend import FileBackend
from hackboard.services.storage_backend import StorageBackend

HACKATHON_ID = "2025-10-31"
ADMIN_PASSWORD = "let-me-judge"


# =============================================================================
# FAKE REMOTE BACKEND
# =============================================================================

class MemoryBackend(StorageBackend):
    """In-memory stand-in for Redis. Values go through JSON like the real one."""

    name = "memory"
    stores_decoded = True

    def __init__(self):
        self.registry_json: Optional[str] = None
        self.datasets: Dict[str, str] = {}
        self.fail = False

    def _check(self):
        if self.fail:
            raise BackendUnavailableException("connection refused")

    def load_registry(self):
        self._check()
        if self.registry_json is None:
            return None
        return HackathonsList.model_validate_json(self.registry_json)

    def save_registry(self, registry):
        self._check()
        self.registry_json = registry.model_dump_json(by_alias=True)

    def load_raw(self, hackathon_id):
        self._check()
        raw = self.datasets.get(hackathon_id)
        if raw is None:
            return None
        return StoredHackathonData.model_validate_json(raw)

    def save_raw(self, hackathon_id, data):
        self._check()
        self.datasets[hackathon_id] = data.model_dump_json(by_alias=True)


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================

@pytest.fixture
def registry_dict():
    return {
        "hackathons": [
            {
                "id": HACKATHON_ID,
                "name": "Halloween Hackathon",
                "date": "2025-10-31",
                "description": "Spooky builds",
                "emoji": "🎃",
                "resultsPublished": True,
                "dataFile": f"{HACKATHON_ID}.json",
            }
        ]
    }


@pytest.fixture
def registry(registry_dict):
    return HackathonsList.model_validate(registry_dict)


@pytest.fixture
def dataset_dict():
    return {
        "teams": [
            {"id": "alpha", "name": "Alpha", "members": ["Ann", "Bo"], "projects": ["apollo", "artemis"]},
            {"id": "beta", "name": "Beta", "members": ["Cy"], "projects": ["borealis"]},
            {"id": "gamma", "name": "Gamma", "members": [], "projects": []},
        ],
        "projects": [
            {
                "id": "apollo",
                "teamId": "alpha",
                "title": "Apollo",
                "description": "Moon shots",
                "images": [],
                "links": [{"label": "Demo", "url": "https://example.com/apollo"}],
                "scores": {"workScope": 4, "polish": 2, "funUseful": 0},
                "specialAwards": ["best-ui"],
            },
            {
                "id": "artemis",
                "teamId": "alpha",
                "title": "Artemis",
                "description": "",
                "images": [],
                "links": [],
                "scores": {"workScope": 5, "polish": 5, "funUseful": 5},
                "specialAwards": ["best-ui", "crowd-favourite"],
            },
            {
                "id": "borealis",
                "teamId": "beta",
                "title": "Borealis",
                "description": "Northern lights",
                "judgesNotes": "Great demo",
                "images": [],
                "links": [],
                "scores": {"workScope": 3, "polish": 3, "funUseful": 3},
                "specialAwards": [],
            },
        ],
        "config": {
            "categories": [
                {"id": "workScope", "label": "Work Scope", "weight": 1},
                {"id": "polish", "label": "Polish", "weight": 1},
                {"id": "funUseful", "label": "Fun / Useful", "weight": 1},
            ],
            "specialAwards": [
                {"id": "best-ui", "name": "Best UI", "emoji": "🎨"},
                {"id": "crowd-favourite", "name": "Crowd Favourite", "emoji": "🎉"},
            ],
        },
    }


@pytest.fixture
def sample_data(dataset_dict):
    return HackathonData.model_validate(dataset_dict)


# =============================================================================
# BACKEND / REPOSITORY FIXTURES
# =============================================================================

@pytest.fixture
def file_backend(tmp_path, registry):
    backend = FileBackend(tmp_path / "data")
    backend.save_registry(registry)
    return backend


@pytest.fixture
def seeded_file_backend(file_backend, sample_data):
    file_backend.save_raw(HACKATHON_ID, StoredHackathonData.from_data(sample_data, encode=True))
    return file_backend


@pytest.fixture
def memory_backend():
    return MemoryBackend()


@pytest.fixture
def file_repository(seeded_file_backend):
    return HackathonRepository(seeded_file_backend, file_backend=seeded_file_backend)


@pytest.fixture
def remote_repository(memory_backend, seeded_file_backend):
    return HackathonRepository(memory_backend, file_backend=seeded_file_backend)


# =============================================================================
# FASTAPI TEST CLIENT FIXTURE
# =============================================================================

@pytest.fixture
def admin_settings(tmp_path):
    return Settings(ADMIN_PASSWORD=ADMIN_PASSWORD, DATA_DIR=tmp_path / "data")


@pytest.fixture
def client(file_repository, admin_settings):
    """TestClient wired to a file-backed repository in tmp_path."""
    app.dependency_overrides[get_hackathon_repository] = lambda: file_repository
    app.dependency_overrides[get_settings] = lambda: admin_settings
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
