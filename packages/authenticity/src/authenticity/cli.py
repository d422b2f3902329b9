"""Authenticity scoring CLI.

Commands:
    identifier    - Score a username on a platform
    url           - Score the account behind a profile link
    image         - Score an image file for manipulation artifacts
    video         - Score a sequence of frame images (capture order)
    coordination  - Detect coordinated naming across usernames
    monitor       - Score the sentiment risk of a search query

Usage:
    authenticity identifier crypto_trading_bot --platform twitter
    authenticity url https://instagram.com/some.shop
    authenticity image photo.jpg
    authenticity video frame_000.png frame_001.png frame_002.png
    authenticity coordination news_bot_24 news_bot_25 jane_smith
    authenticity monitor "brand launch"

Results are printed to stdout as JSON. The engine is configured from the
environment (INFERENCE_MODEL, ENGINE_CONFIG_PATH, MAX_WORKERS, ...).
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from authenticity.engine import ScoringEngine
from authenticity.errors import ScoringError
from authenticity.media import decode_image
from authenticity.types import Platform

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pydantic import BaseModel


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per content type."""
    parser = argparse.ArgumentParser(
        prog="authenticity",
        description="Score social media content for authenticity",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    identifier_parser = subparsers.add_parser("identifier", help="Score a username")
    identifier_parser.add_argument("identifier", help="Username, with or without a leading @")
    identifier_parser.add_argument(
        "--platform",
        "-p",
        choices=[p.value for p in Platform],
        default=Platform.TWITTER.value,
        help="Platform the username belongs to (default: twitter)",
    )

    url_parser = subparsers.add_parser("url", help="Score the account behind a profile link")
    url_parser.add_argument("url", help="Profile URL, e.g. https://x.com/jack")

    image_parser = subparsers.add_parser("image", help="Score an image file")
    image_parser.add_argument("path", type=Path, help="Image file (any format Pillow reads)")

    video_parser = subparsers.add_parser("video", help="Score decoded video frames")
    video_parser.add_argument("frames", type=Path, nargs="+", help="Frame images in capture order")

    coordination_parser = subparsers.add_parser("coordination", help="Detect coordinated usernames")
    coordination_parser.add_argument("identifiers", nargs="+", help="Usernames to compare")

    monitor_parser = subparsers.add_parser("monitor", help="Score a monitoring query")
    monitor_parser.add_argument("query", help="Brand, keyword or hashtag")

    return parser


def _run(engine: ScoringEngine, args: argparse.Namespace) -> BaseModel:
    if args.command == "identifier":
        return engine.score_identifier(args.identifier, args.platform)
    if args.command == "url":
        return engine.score_profile_url(args.url)
    if args.command == "image":
        return engine.score_image(decode_image(args.path.read_bytes()))
    if args.command == "video":
        return engine.score_video([decode_image(path.read_bytes()) for path in args.frames])
    if args.command == "coordination":
        return engine.score_coordination(args.identifiers)
    return engine.score_monitoring(args.query)


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point. Returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 2

    try:
        with ScoringEngine.from_settings() as engine:
            result = _run(engine, args)
    except ScoringError as e:
        print(f"Error [{e.code}]: {e.message}", file=sys.stderr)
        return 1
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(result.model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
