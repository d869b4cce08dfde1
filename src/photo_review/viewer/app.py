"""Application entry point for the photo review tool.

Usage:
    python -m photo_review [gallery.json] [options]

Options:
    --config <path>       Config YAML file
    --backend file|http   Where saves go (default from config)
    --url <url>           Save endpoint URL for the http backend
    --media-root <dir>    Directory image sources are relative to
    --fullscreen          Start in fullscreen
    --windowed            Start in windowed mode
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from PyQt6.QtWidgets import QApplication

from photo_review.config.config import (
    ConfigManager,
    configure_logging,
    get_gallery_config_path,
)
from photo_review.gallery.models import GalleryFormatError
from photo_review.gallery.storage import create_storage, load_gallery
from photo_review.review.session import ReviewSession
from photo_review.viewer.main_window import MainWindow


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Review and tag a photo gallery",
        prog="photo-review",
    )
    parser.add_argument(
        "gallery",
        nargs="?",
        default=None,
        help="Gallery JSON file (default from config)",
    )
    parser.add_argument(
        "--config", "-c",
        help="Path to config YAML file",
        default=None,
    )
    parser.add_argument(
        "--backend",
        choices=["file", "http"],
        default=None,
        help="Save directly to the gallery file or POST to the save endpoint",
    )
    parser.add_argument(
        "--url",
        default=None,
        help="Save endpoint URL (http backend)",
    )
    parser.add_argument(
        "--media-root",
        default=None,
        help="Directory that image sources are relative to",
    )
    parser.add_argument(
        "--fullscreen",
        action="store_true",
        default=None,
        help="Start in fullscreen mode",
    )
    parser.add_argument(
        "--windowed",
        action="store_true",
        help="Start in windowed mode",
    )
    return parser


def load_config(args: argparse.Namespace) -> tuple[ConfigManager, Path]:
    """Resolve the gallery path and load layered config for it."""
    config = ConfigManager()
    if args.config:
        config.load(args.config)
    gallery_path = Path(args.gallery or config.get("gallery.path")).resolve()
    config.load_layered(
        gallery_config_path=get_gallery_config_path(gallery_path),
        cli_config_path=args.config,
    )
    if args.backend:
        config.set("storage.backend", args.backend)
    if args.url:
        config.set("storage.url", args.url)
    if args.media_root:
        config.set("gallery.media_root", args.media_root)
    return config, gallery_path


def create_session(config: ConfigManager, gallery_path: Path) -> ReviewSession:
    """Load the gallery and build a session with the configured storage."""
    photos = load_gallery(gallery_path)
    storage = create_storage(
        config.get("storage.backend", "file"),
        gallery_path=gallery_path,
        url=config.get("storage.url"),
        timeout=config.get("storage.timeout_seconds", 10.0),
    )
    logger.info(f"Saving through {storage!r}")
    return ReviewSession(
        photos,
        storage,
        settle_delay=config.get("persist.settle_delay_ms", 50) / 1000.0,
        default_thumb_size=(
            config.get("preview.default_width", 400),
            config.get("preview.default_height", 300),
        ),
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config, gallery_path = load_config(args)
    configure_logging(config)

    if not gallery_path.exists():
        print(f"Error: '{gallery_path}' does not exist.")
        return 1

    try:
        session = create_session(config, gallery_path)
    except (GalleryFormatError, ValueError, OSError) as e:
        print(f"Error: cannot open gallery: {e}")
        return 1

    media_root = Path(config.get("gallery.media_root") or gallery_path.parent)

    # Determine fullscreen
    fullscreen = None
    if args.fullscreen:
        fullscreen = True
    elif args.windowed:
        fullscreen = False

    app = QApplication.instance()
    if app is None:
        app = QApplication(sys.argv)
    app.setApplicationName("Photo Review")

    window = MainWindow(
        session=session,
        media_root=media_root,
        config=config,
        start_fullscreen=fullscreen,
    )
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
