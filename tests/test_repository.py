"""
Repository Tests
tests/test_repository.py

Score transform at the boundary, remote-to-file fallback, last write wins,
the on-disk mirror, export and seeding.
"""
import json
import logging

import pytest

from hackboard.core.exceptions import BackendUnavailableException, EntityNotFoundException
from hackboard.models.hackathon import EncodedScores, HackathonsList, StoredHackathonData
from hackboard.repositories.hackathon_repository import HackathonRepository
from hackboard.scoring.obfuscation import decode_scores

HACKATHON_ID = "2025-10-31"


class TestFileMode:

    def test_get_data_decodes_scores(self, file_repository, sample_data):
        assert file_repository.get_data(HACKATHON_ID) == sample_data

    def test_unknown_hackathon_not_found(self, file_repository):
        with pytest.raises(EntityNotFoundException) as exc:
            file_repository.get_data("1999-01-01")
        assert exc.value.entity_type == "Hackathon"

    def test_registered_but_no_dataset(self, file_backend):
        repo = HackathonRepository(file_backend)
        with pytest.raises(EntityNotFoundException) as exc:
            repo.get_data(HACKATHON_ID)
        assert exc.value.entity_type == "HackathonData"

    def test_legacy_live_scores_accepted(self, file_backend, dataset_dict):
        path = file_backend.data_dir / f"{HACKATHON_ID}.json"
        path.write_text(json.dumps(dataset_dict), encoding="utf-8")
        data = HackathonRepository(file_backend).get_data(HACKATHON_ID)
        assert data.find_project("artemis").scores == {"workScope": 5, "polish": 5, "funUseful": 5}

    def test_save_encodes_scores(self, file_repository, seeded_file_backend, sample_data):
        file_repository.save_data(HACKATHON_ID, sample_data)
        stored = seeded_file_backend.load_raw(HACKATHON_ID)
        assert all(isinstance(p.scores, EncodedScores) for p in stored.projects)
        assert decode_scores(stored.projects[0].scores.text) == {"workScope": 4, "polish": 2, "funUseful": 0}

    def test_save_unknown_hackathon_not_found(self, file_repository, sample_data):
        with pytest.raises(EntityNotFoundException):
            file_repository.save_data("1999-01-01", sample_data)

    def test_last_write_wins(self, file_repository, sample_data):
        first = sample_data.model_copy(deep=True)
        first.projects[0].title = "First"
        second = sample_data.model_copy(deep=True)
        second.projects = second.projects[1:]
        second.teams[0].projects = ["artemis"]

        file_repository.save_data(HACKATHON_ID, first)
        file_repository.save_data(HACKATHON_ID, second)

        assert file_repository.get_data(HACKATHON_ID) == second

    def test_no_caching_between_reads(self, file_repository, sample_data):
        file_repository.get_data(HACKATHON_ID)
        changed = sample_data.model_copy(deep=True)
        changed.projects[0].title = "Changed"
        file_repository.save_data(HACKATHON_ID, changed)
        assert file_repository.get_project(HACKATHON_ID, "apollo").title == "Changed"


class TestConvenienceReads:

    def test_get_team(self, file_repository):
        assert file_repository.get_team(HACKATHON_ID, "beta").name == "Beta"

    def test_get_team_missing_is_none(self, file_repository):
        assert file_repository.get_team(HACKATHON_ID, "nobody") is None

    def test_get_project(self, file_repository):
        assert file_repository.get_project(HACKATHON_ID, "borealis").judges_notes == "Great demo"

    def test_get_project_missing_is_none(self, file_repository):
        assert file_repository.get_project(HACKATHON_ID, "nothing") is None

    def test_get_team_projects(self, file_repository):
        assert [p.id for p in file_repository.get_team_projects(HACKATHON_ID, "alpha")] == ["apollo", "artemis"]

    def test_get_hackathons_list(self, file_repository, registry):
        assert file_repository.get_hackathons_list() == registry

    def test_get_hackathon_info(self, file_repository):
        assert file_repository.get_hackathon_info(HACKATHON_ID).emoji == "🎃"
        assert file_repository.get_hackathon_info("nope") is None

    def test_empty_registry_when_nothing_stored(self, tmp_path):
        from hackboard.services.file_backend import FileBackend

        repo = HackathonRepository(FileBackend(tmp_path))
        assert repo.get_hackathons_list() == HackathonsList()


class TestRemoteMode:

    def test_fallback_to_file_when_remote_empty(self, remote_repository, sample_data, caplog):
        with caplog.at_level(logging.WARNING):
            assert remote_repository.get_data(HACKATHON_ID) == sample_data
        assert any("falling back" in r.message for r in caplog.records)

    def test_remote_entry_preferred(self, remote_repository, memory_backend, registry, sample_data):
        remote = sample_data.model_copy(deep=True)
        remote.projects[0].title = "From Redis"
        memory_backend.save_registry(registry)
        memory_backend.save_raw(HACKATHON_ID, StoredHackathonData.from_data(remote, encode=False))
        assert remote_repository.get_project(HACKATHON_ID, "apollo").title == "From Redis"

    def test_transport_error_not_masked_by_file(self, remote_repository, memory_backend):
        memory_backend.fail = True
        with pytest.raises(BackendUnavailableException):
            remote_repository.get_data(HACKATHON_ID)

    def test_save_stores_decoded_remotely(self, remote_repository, memory_backend, sample_data):
        remote_repository.save_data(HACKATHON_ID, sample_data)
        raw = json.loads(memory_backend.datasets[HACKATHON_ID])
        assert raw["projects"][0]["scores"] == {"workScope": 4, "polish": 2, "funUseful": 0}

    def test_save_mirrors_encoded_to_file(self, remote_repository, seeded_file_backend, sample_data):
        changed = sample_data.model_copy(deep=True)
        changed.projects[2].title = "Mirrored"
        remote_repository.save_data(HACKATHON_ID, changed)
        stored = seeded_file_backend.load_raw(HACKATHON_ID)
        assert stored.projects[2].title == "Mirrored"
        assert all(isinstance(p.scores, EncodedScores) for p in stored.projects)

    def test_mirror_disabled(self, memory_backend, seeded_file_backend, sample_data):
        repo = HackathonRepository(memory_backend, file_backend=seeded_file_backend, mirror_to_file=False)
        changed = sample_data.model_copy(deep=True)
        changed.projects[2].title = "Not mirrored"
        repo.save_data(HACKATHON_ID, changed)
        assert seeded_file_backend.load_raw(HACKATHON_ID).projects[2].title == "Borealis"

    def test_mirror_failure_keeps_remote_write(self, memory_backend, seeded_file_backend, sample_data, monkeypatch, caplog):
        def broken(*args, **kwargs):
            raise BackendUnavailableException("read-only file system")

        monkeypatch.setattr(seeded_file_backend, "save_raw", broken)
        repo = HackathonRepository(memory_backend, file_backend=seeded_file_backend)
        with caplog.at_level(logging.WARNING):
            repo.save_data(HACKATHON_ID, sample_data)
        assert HACKATHON_ID in memory_backend.datasets
        assert any("mirror" in r.message for r in caplog.records)

    def test_failed_remote_save_raises(self, remote_repository, memory_backend, sample_data):
        remote_repository.get_data(HACKATHON_ID)
        memory_backend.fail = True
        with pytest.raises(BackendUnavailableException):
            remote_repository.save_data(HACKATHON_ID, sample_data)

    def test_last_write_wins_remote(self, remote_repository, sample_data):
        first = sample_data.model_copy(deep=True)
        first.config.categories[0].weight = 3
        second = sample_data.model_copy(deep=True)
        second.config.special_awards = []
        remote_repository.save_data(HACKATHON_ID, first)
        remote_repository.save_data(HACKATHON_ID, second)
        assert remote_repository.get_data(HACKATHON_ID) == second

    def test_registry_fallback(self, remote_repository, registry):
        assert remote_repository.get_hackathons_list() == registry

    def test_save_registry_goes_to_remote(self, remote_repository, memory_backend, registry):
        remote_repository.save_hackathons_list(registry)
        assert memory_backend.load_registry() == registry


class TestExportAndSeed:

    def test_export_is_encoded(self, remote_repository, sample_data):
        remote_repository.save_data(HACKATHON_ID, sample_data)
        exported = remote_repository.export_data(HACKATHON_ID)
        assert all(isinstance(p.scores, EncodedScores) for p in exported.projects)
        assert exported.decode() == sample_data

    def test_export_all(self, file_repository):
        exported = file_repository.export_all()
        assert list(exported["data"]) == [HACKATHON_ID]
        assert exported["hackathons"].hackathons[0].id == HACKATHON_ID

    def test_seed_remote(self, remote_repository, memory_backend, registry, sample_data):
        assert remote_repository.seed_remote_from_files() == [HACKATHON_ID]
        assert memory_backend.load_registry() == registry
        stored = memory_backend.load_raw(HACKATHON_ID)
        assert stored.decode() == sample_data
        assert not any(isinstance(p.scores, EncodedScores) for p in stored.projects)

    def test_seed_is_noop_in_file_mode(self, file_repository):
        assert file_repository.seed_remote_from_files() == []
