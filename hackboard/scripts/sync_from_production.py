#!/usr/bin/env python
"""
Sync production data into the local data directory.

Downloads the hackathons list and every dataset (scores encoded, same as the
versioned JSON files) from a deployed instance's export endpoint, then
overwrites the local files.

Usage:
    python -m hackboard.scripts.sync_from_production --url https://scores.example.com --password secret
    python -m hackboard.scripts.sync_from_production --url http://localhost:8000 --password secret --data-dir data
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List

import httpx

from hackboard.config import get_settings
from hackboard.core.exceptions import RepositoryException
from hackboard.models.hackathon import HackathonsList, StoredHackathonData
from hackboard.services.file_backend import FileBackend

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


def fetch_export(client: httpx.Client, base_url: str, password: str, hackathon_id: str = "") -> str:
    params = {"password": password}
    if hackathon_id:
        params["hackathonId"] = hackathon_id
    resp = client.get(f"{base_url}/api/export-data", params=params)
    resp.raise_for_status()
    return resp.text


def sync(base_url: str, password: str, data_dir: Path, timeout: float = 30.0) -> List[str]:
    """
    Download everything, then write it locally. Returns the synced hackathon ids.

    Nothing is written until every download has succeeded, so a failed
    request leaves the local files untouched.
    """
    base_url = base_url.rstrip("/")
    backend = FileBackend(data_dir, get_settings().REGISTRY_FILE)
    datasets: Dict[str, StoredHackathonData] = {}

    with httpx.Client(timeout=timeout) as client:
        logger.info("Downloading hackathons list...")
        registry = HackathonsList.model_validate_json(fetch_export(client, base_url, password))

        for info in registry.hackathons:
            logger.info(f"Downloading {info.name} ({info.id})...")
            datasets[info.id] = StoredHackathonData.model_validate_json(
                fetch_export(client, base_url, password, info.id)
            )

    # The file backend resolves dataset paths through the registry
    backend.save_registry(registry)
    logger.info(f"Saved {backend.registry_path}")
    for info in registry.hackathons:
        backend.save_raw(info.id, datasets[info.id])
        logger.info(f"Saved {data_dir / info.data_file}")

    return list(datasets)


def main() -> int:
    parser = argparse.ArgumentParser(description="Sync production data to local JSON files")
    parser.add_argument("--url", required=True, help="Base URL of the deployed dashboard")
    parser.add_argument("--password", required=True, help="Admin password")
    parser.add_argument("--data-dir", type=Path, default=None, help="Local data directory (default: DATA_DIR)")
    parser.add_argument("--timeout", type=float, default=30.0)
    args = parser.parse_args()

    data_dir = args.data_dir or get_settings().DATA_DIR
    logger.info("Local JSON files will be OVERWRITTEN.")

    try:
        synced = sync(args.url, args.password, data_dir, timeout=args.timeout)
    except httpx.HTTPStatusError as e:
        logger.error(f"Export request failed: {e.response.status_code} {e.response.text}")
        return 1
    except (httpx.HTTPError, RepositoryException) as e:
        logger.error(f"Sync failed: {e}")
        return 1

    logger.info(f"Synced {len(synced)} hackathon(s): {', '.join(synced) or '-'}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
