"""
Integration tests for the metadata and image API.
"""

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from ytdlmeta.api.metadata import get_image_provider
from ytdlmeta.config import get_config
from ytdlmeta.media.images.local_images import LocalImageProvider
from tests.fixtures import set_mtime, write_image


@pytest.mark.integration
class TestHealthAPI:
    """Tests for /api/health."""

    def test_health(self, client: TestClient):
        response = client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "png" in data["images"]["formats"]


@pytest.mark.integration
class TestMetadataAPI:
    """Tests for /api/metadata endpoints."""

    def test_movie_metadata(self, client: TestClient, temp_media_file: Path, write_info_json, info_json_data):
        write_info_json(info_json_data)

        response = client.get("/api/metadata", params={"path": str(temp_media_file)})

        assert response.status_code == 200
        data = response.json()
        assert data["has_metadata"] is True
        assert data["item"]["media_type"] == "movie"
        assert data["item"]["name"] == info_json_data["fulltitle"]
        assert data["item"]["production_year"] == 2009
        assert data["item"]["genres"] == ["Music"]
        assert data["people"][0]["job"] == "Director"

    def test_episode_metadata(self, client: TestClient, temp_media_file: Path, write_info_json):
        write_info_json({
            "id": "X",
            "extractor_key": "NRKTV",
            "playlist_id": "Y",
            "series": "Skam",
            "season_number": 1,
            "episode_number": 4,
        })

        data = client.get("/api/metadata", params={"path": str(temp_media_file)}).json()

        assert data["item"]["media_type"] == "episode"
        assert data["item"]["series_name"] == "Skam"
        assert data["item"]["season_number"] == 1
        assert data["item"]["episode_number"] == 4
        assert data["item"]["provider_ids"] == {"NRK": "Y"}
        assert data["item"]["links"] == {"NRK": "https://tv.nrk.no/program/Y"}

    def test_no_sidecar(self, client: TestClient, temp_media_file: Path):
        response = client.get("/api/metadata", params={"path": str(temp_media_file)})

        assert response.status_code == 200
        assert response.json() == {"has_metadata": False, "item": None, "people": [], "error": None}

    def test_corrupt_sidecar(self, client: TestClient, temp_media_file: Path, write_info_json):
        write_info_json("{\"id\": \"x\",")

        response = client.get("/api/metadata", params={"path": str(temp_media_file)})

        assert response.status_code == 200
        data = response.json()
        assert data["has_metadata"] is False
        assert data["error"].startswith("Invalid JSON")

    def test_bad_date(self, client: TestClient, temp_media_file: Path, write_info_json):
        write_info_json({"id": "x", "extractor_key": "Youtube", "release_date": "01/02/2020"})

        response = client.get("/api/metadata", params={"path": str(temp_media_file)})

        assert response.status_code == 422
        assert "release_date" in response.json()["detail"]

    def test_path_required(self, client: TestClient):
        assert client.get("/api/metadata").status_code == 422

    def test_changed(self, client: TestClient, temp_media_file: Path, write_info_json, info_json_data):
        saved_at = datetime(2024, 1, 1, tzinfo=timezone.utc)
        set_mtime(write_info_json(info_json_data), saved_at + timedelta(days=1))

        newer = client.get(
            "/api/metadata/changed",
            params={"path": str(temp_media_file), "last_saved": saved_at.isoformat()},
        ).json()
        older = client.get(
            "/api/metadata/changed",
            params={"path": str(temp_media_file), "last_saved": (saved_at + timedelta(days=2)).isoformat()},
        ).json()

        assert newer["changed"] is True
        assert older["changed"] is False


@pytest.mark.integration
class TestImagesAPI:
    """Tests for /api/images."""

    def test_primary_image(self, client: TestClient, temp_media_file: Path):
        write_image(temp_media_file.parent / "clip.jpg", (320, 180))
        write_image(temp_media_file.parent / "clip_hq.png", (1280, 720))

        response = client.get("/api/images", params={"path": str(temp_media_file)})

        assert response.status_code == 200
        images = response.json()["images"]
        assert len(images) == 1
        assert images[0]["path"].endswith("clip_hq.png")
        assert images[0]["image_type"] == "primary"

    def test_unsupported_kind(self, client: TestClient, temp_media_file: Path):
        response = client.get("/api/images", params={"path": str(temp_media_file), "kind": "season"})

        assert response.status_code == 400

    def test_unknown_kind(self, client: TestClient, temp_media_file: Path):
        response = client.get("/api/images", params={"path": str(temp_media_file), "kind": "podcast"})

        assert response.status_code == 422

    def test_images_disabled(self, client: TestClient, temp_media_file: Path):
        write_image(temp_media_file.parent / "clip.jpg", (320, 180))
        get_config().images.enabled = False

        response = client.get("/api/images", params={"path": str(temp_media_file)})

        assert response.json() == {"images": []}

    def test_injected_image_provider(self, app, temp_media_file: Path, fake_probe):
        app.dependency_overrides[get_image_provider] = lambda: LocalImageProvider(
            probe=fake_probe({"clip.webp": 900, "clip.jpg": 100})
        )
        for name in ("clip.jpg", "clip.webp"):
            (temp_media_file.parent / name).write_bytes(b"x")

        with TestClient(app) as client:
            images = client.get("/api/images", params={"path": str(temp_media_file)}).json()["images"]

        assert images[0]["path"].endswith("clip.webp")
        assert images[0]["width"] == 900
