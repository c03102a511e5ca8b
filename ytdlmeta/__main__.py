#!/usr/bin/env python3
"""
ytdlmeta command line.

Usage:
    python -m ytdlmeta metadata /videos/clip.mp4
    python -m ytdlmeta images /videos/clip.mp4 --kind episode
    python -m ytdlmeta changed /videos/clip.mp4 --last-saved 2024-01-01T00:00:00+00:00
    python -m ytdlmeta serve
"""

import argparse
import json
import logging
import sys
from datetime import datetime
from typing import Optional, Sequence

from ytdlmeta.api.schemas import ChangedResponse, ImageResponse, ImagesResponse, MetadataResponse
from ytdlmeta.config import load_config
from ytdlmeta.media.images.local_images import LocalImageProvider
from ytdlmeta.media.items import MediaType, create_item, supports
from ytdlmeta.media.providers.base import SidecarParseError
from ytdlmeta.media.providers.youtube_local import YoutubeLocalProvider
from ytdlmeta.utils.logging_setup import setup_logging_from_config

logger = logging.getLogger(__name__)


def cmd_metadata(args: argparse.Namespace) -> int:
    provider = YoutubeLocalProvider.from_config()
    try:
        result = provider.get_metadata(args.path)
    except SidecarParseError as e:
        logger.error(f"Could not read metadata for {args.path}: {e}")
        return 1

    print(MetadataResponse.from_result(result).model_dump_json(indent=2))
    if result.error:
        return 1
    return 0 if result.has_metadata else 2


def cmd_images(args: argparse.Namespace) -> int:
    item = create_item(MediaType(args.kind), args.path)
    if not supports(item):
        logger.error(f"Unsupported item kind: {args.kind}")
        return 1

    images = LocalImageProvider().get_images(item)
    response = ImagesResponse(images=[ImageResponse.from_image(image) for image in images])
    print(response.model_dump_json(indent=2))
    return 0 if images else 2


def cmd_changed(args: argparse.Namespace) -> int:
    provider = YoutubeLocalProvider.from_config()
    item = create_item(MediaType.MOVIE, args.path)
    item.date_last_saved = args.last_saved

    response = ChangedResponse(
        changed=provider.has_changed(item),
        sidecar_path=str(provider.get_info_json_path(args.path)),
    )
    print(response.model_dump_json(indent=2))
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    from ytdlmeta.main import run

    run()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ytdlmeta",
        description="Read metadata and thumbnails from yt-dlp sidecar files",
    )
    parser.add_argument("--config", help="Path to config.yaml")
    parser.add_argument("--log-level", help="Override the configured log level")

    subparsers = parser.add_subparsers(dest="command", required=True)

    metadata_parser = subparsers.add_parser("metadata", help="Print metadata for a media file")
    metadata_parser.add_argument("path", help="Media file path")
    metadata_parser.set_defaults(func=cmd_metadata)

    images_parser = subparsers.add_parser("images", help="Print the selected primary image")
    images_parser.add_argument("path", help="Media file path")
    images_parser.add_argument(
        "--kind",
        default=MediaType.MOVIE.value,
        choices=[media_type.value for media_type in MediaType],
        help="Item kind (default: movie)",
    )
    images_parser.set_defaults(func=cmd_images)

    changed_parser = subparsers.add_parser("changed", help="Check whether the sidecar is newer")
    changed_parser.add_argument("path", help="Media file path")
    changed_parser.add_argument(
        "--last-saved",
        type=datetime.fromisoformat,
        default=None,
        help="ISO timestamp of the last import",
    )
    changed_parser.set_defaults(func=cmd_changed)

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.set_defaults(func=cmd_serve)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = load_config(args.config)
    if args.log_level:
        config.logging.level = args.log_level
    setup_logging_from_config()

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
