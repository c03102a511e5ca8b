"""
ytdlmeta Test Configuration

Shared fixtures and configuration for all tests.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Callable, Dict, Generator
from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

# Add project root to path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

import ytdlmeta.config as config_module
from ytdlmeta.api import metadata as metadata_api
from ytdlmeta.media.images.probe import ImageDimensions
from ytdlmeta.main import create_app


# ============ Configuration Fixtures ============


@pytest.fixture(autouse=True)
def reset_config(monkeypatch) -> Generator[None, None, None]:
    """Start every test from default configuration."""
    for env_var in list(os.environ):
        if env_var.startswith("YTDLMETA_"):
            monkeypatch.delenv(env_var, raising=False)
    config_module._config = config_module.YtdlMetaConfig()
    metadata_api.get_metadata_provider.cache_clear()
    metadata_api.get_image_provider.cache_clear()
    yield
    config_module._config = None
    metadata_api.get_metadata_provider.cache_clear()
    metadata_api.get_image_provider.cache_clear()


# ============ Temporary File Fixtures ============


@pytest.fixture(scope="function")
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(scope="function")
def temp_media_file(temp_dir: Path) -> Path:
    """Create a placeholder video file."""
    media_file = temp_dir / "clip.mp4"
    media_file.write_bytes(b"\x00" * 1024)
    return media_file


@pytest.fixture
def info_json_data() -> Dict[str, Any]:
    """A representative yt-dlp info.json payload."""
    return {
        "id": "dQw4w9WgXcQ",
        "extractor_key": "Youtube",
        "extractor": "youtube",
        "uploader": "Rick Astley",
        "uploader_id": "@RickAstleyYT",
        "channel_id": "UCuAXFkgsw1L7xaCfnd5JJOw",
        "upload_date": "20091025",
        "timestamp": 1256453681,
        "title": "Never Gonna Give You Up",
        "fulltitle": "Rick Astley - Never Gonna Give You Up (Official Music Video)",
        "description": "The official video for Never Gonna Give You Up",
        "thumbnail": "https://i.ytimg.com/vi/dQw4w9WgXcQ/maxresdefault.jpg",
        "age_limit": 0,
        "tags": ["rick astley", " Never Gonna Give You Up ", "rick astley", ""],
        "categories": ["Music"],
        "formats": [{"format_id": "18"}],
    }


@pytest.fixture
def write_info_json(temp_media_file: Path) -> Callable[..., Path]:
    """Write an info.json sidecar next to temp_media_file."""

    def _write(data: Any, media_file: Path = temp_media_file) -> Path:
        info_path = media_file.parent / f"{media_file.stem}.info.json"
        if isinstance(data, str):
            info_path.write_text(data, encoding="utf-8")
        else:
            info_path.write_text(json.dumps(data), encoding="utf-8")
        return info_path

    return _write


# ============ Mock Fixtures ============


@pytest.fixture
def fake_probe() -> Callable[..., MagicMock]:
    """Build a probe that reports fixed widths per file name."""

    def _build(widths: Dict[str, int], formats=("jpg", "jpeg", "png", "webp")) -> MagicMock:
        def dimensions(path):
            name = Path(path).name
            if name not in widths:
                raise OSError(f"cannot identify image file {name}")
            return ImageDimensions(width=widths[name], height=widths[name] // 2)

        probe = MagicMock()
        probe.supported_input_formats = frozenset(formats)
        probe.get_image_dimensions.side_effect = dimensions
        return probe

    return _build


# ============ FastAPI Test Client Fixtures ============


@pytest.fixture(scope="function")
def app() -> FastAPI:
    """Create a test FastAPI application."""
    return create_app()


@pytest.fixture(scope="function")
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """Create a synchronous test client."""
    with TestClient(app) as client:
        yield client


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
