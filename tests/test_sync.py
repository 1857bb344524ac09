"""
Sync Tool Tests
tests/test_sync.py

Export downloads are faked; files are written into tmp_path.
"""
import json
import sys

import httpx
import pytest

from hackboard.models.hackathon import StoredHackathonData
from hackboard.scripts import sync_from_production
from hackboard.scripts.sync_from_production import fetch_export, main, sync

HACKATHON_ID = "2025-10-31"


@pytest.fixture
def fake_export(monkeypatch, registry, sample_data):
    calls = []

    def fake(client, base_url, password, hackathon_id=""):
        calls.append((base_url, password, hackathon_id))
        if not hackathon_id:
            return registry.model_dump_json(by_alias=True)
        return StoredHackathonData.from_data(sample_data, encode=True).model_dump_json(by_alias=True)

    monkeypatch.setattr(sync_from_production, "fetch_export", fake)
    return calls


def test_sync_writes_registry_and_datasets(fake_export, tmp_path):
    synced = sync("https://scores.example.com/", "secret", tmp_path)

    assert synced == [HACKATHON_ID]
    assert fake_export[0] == ("https://scores.example.com", "secret", "")
    assert fake_export[1][2] == HACKATHON_ID

    registry = json.loads((tmp_path / "hackathons.json").read_text(encoding="utf-8"))
    assert registry["hackathons"][0]["id"] == HACKATHON_ID
    dataset = json.loads((tmp_path / f"{HACKATHON_ID}.json").read_text(encoding="utf-8"))
    assert all(isinstance(p["scores"], str) for p in dataset["projects"])


def test_failed_dataset_download_leaves_local_files(monkeypatch, tmp_path, registry):
    registry_path = tmp_path / "hackathons.json"
    registry_path.write_text('{"hackathons": []}', encoding="utf-8")

    def flaky(client, base_url, password, hackathon_id=""):
        if not hackathon_id:
            return registry.model_dump_json(by_alias=True)
        raise httpx.ReadTimeout("timed out")

    monkeypatch.setattr(sync_from_production, "fetch_export", flaky)
    with pytest.raises(httpx.ReadTimeout):
        sync("https://scores.example.com", "secret", tmp_path)

    assert registry_path.read_text(encoding="utf-8") == '{"hackathons": []}'
    assert not (tmp_path / f"{HACKATHON_ID}.json").exists()


def test_fetch_export_passes_params():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        return httpx.Response(200, text='{"hackathons": []}')

    with httpx.Client(transport=httpx.MockTransport(handler)) as client:
        body = fetch_export(client, "http://localhost:8000", "pw", HACKATHON_ID)

    assert body == '{"hackathons": []}'
    assert "hackathonId=2025-10-31" in seen["url"]
    assert "password=pw" in seen["url"]


def test_fetch_export_raises_on_401():
    transport = httpx.MockTransport(lambda request: httpx.Response(401, json={"detail": "Unauthorized"}))
    with httpx.Client(transport=transport) as client:
        with pytest.raises(httpx.HTTPStatusError):
            fetch_export(client, "http://localhost:8000", "bad")


def test_main_returns_error_code_on_http_failure(monkeypatch, tmp_path):
    def failing(client, base_url, password, hackathon_id=""):
        raise httpx.ConnectError("connection refused")

    monkeypatch.setattr(sync_from_production, "fetch_export", failing)
    monkeypatch.setattr(
        sys, "argv", ["sync", "--url", "http://localhost:8000", "--password", "pw", "--data-dir", str(tmp_path)]
    )
    assert main() == 1


def test_main_success(fake_export, monkeypatch, tmp_path):
    monkeypatch.setattr(
        sys, "argv", ["sync", "--url", "http://localhost:8000", "--password", "pw", "--data-dir", str(tmp_path)]
    )
    assert main() == 0
    assert (tmp_path / f"{HACKATHON_ID}.json").exists()
