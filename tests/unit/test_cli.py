"""
Unit tests for the command line.
"""

import json
from pathlib import Path

import pytest

from ytdlmeta.__main__ import build_parser, main
from tests.fixtures import write_image


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    """Keep the CLI from replacing the test logging handlers."""
    monkeypatch.setattr("ytdlmeta.__main__.setup_logging_from_config", lambda: None)


@pytest.mark.unit
class TestCli:
    """Tests for python -m ytdlmeta."""

    def test_parser_requires_command(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_metadata(self, temp_media_file: Path, write_info_json, info_json_data, capsys):
        write_info_json(info_json_data)

        exit_code = main(["metadata", str(temp_media_file)])

        output = json.loads(capsys.readouterr().out)
        assert exit_code == 0
        assert output["has_metadata"] is True
        assert output["item"]["provider_ids"] == {"Youtube": "dQw4w9WgXcQ"}
        assert output["item"]["links"]["YouTube"].endswith("v=dQw4w9WgXcQ")
        assert output["people"][0]["name"] == "Rick Astley"

    def test_metadata_missing_sidecar(self, temp_media_file: Path, capsys):
        exit_code = main(["metadata", str(temp_media_file)])

        assert exit_code == 2
        assert json.loads(capsys.readouterr().out)["has_metadata"] is False

    def test_metadata_corrupt_sidecar(self, temp_media_file: Path, write_info_json, capsys):
        write_info_json("[")

        exit_code = main(["metadata", str(temp_media_file)])

        assert exit_code == 1
        assert json.loads(capsys.readouterr().out)["error"] is not None

    def test_metadata_bad_date(self, temp_media_file: Path, write_info_json):
        write_info_json({"id": "x", "extractor_key": "Youtube", "upload_date": "2020"})

        assert main(["metadata", str(temp_media_file)]) == 1

    def test_images(self, temp_media_file: Path, capsys):
        write_image(temp_media_file.parent / "clip.png", (200, 100))

        exit_code = main(["images", str(temp_media_file), "--kind", "episode"])

        output = json.loads(capsys.readouterr().out)
        assert exit_code == 0
        assert output["images"][0]["width"] == 200
        assert output["images"][0]["image_type"] == "primary"

    def test_images_unsupported_kind(self, temp_media_file: Path):
        assert main(["images", str(temp_media_file), "--kind", "show"]) == 1

    def test_changed(self, temp_media_file: Path, write_info_json, info_json_data, capsys):
        write_info_json(info_json_data)

        main(["changed", str(temp_media_file), "--last-saved", "2000-01-01T00:00:00+00:00"])

        output = json.loads(capsys.readouterr().out)
        assert output["changed"] is True
        assert output["sidecar_path"].endswith("clip.info.json")
