"""HTTP endpoint that overwrites the gallery file with a posted collection.

Usage:
    python -m photo_review.gallery.save_server [gallery.json] [options]

Options:
    --config <path>     Config YAML file
    --host <host>       Interface to bind (default from config)
    --port <port>       Port to listen on (default from config)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from flask import Flask, request

from photo_review.config.config import (
    ConfigManager,
    configure_logging,
    get_gallery_config_path,
)
from photo_review.gallery.storage import SAVE_PATH, write_text_replacing


logger = logging.getLogger(__name__)


def create_app(gallery_path: str | Path) -> Flask:
    """Flask app exposing POST /save-gallery for the given gallery file."""
    gallery_path = Path(gallery_path)
    app = Flask(__name__)
    app.config["GALLERY_PATH"] = gallery_path

    @app.post(SAVE_PATH)
    def save_gallery():
        try:
            parsed = json.loads(request.get_data(as_text=True))
            formatted = json.dumps(parsed, indent=2, ensure_ascii=False)
            write_text_replacing(app.config["GALLERY_PATH"], formatted)
        except (ValueError, OSError) as e:
            logger.error(f"Rejected gallery save: {e}")
            return str(e), 500, {"Content-Type": "text/plain; charset=utf-8"}
        logger.info(f"Saved gallery to {app.config['GALLERY_PATH']}")
        return "saved", 200, {"Content-Type": "text/plain; charset=utf-8"}

    return app


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Gallery save endpoint",
        prog="photo-review-server",
    )
    parser.add_argument(
        "gallery",
        nargs="?",
        default=None,
        help="Gallery JSON file to overwrite (default from config)",
    )
    parser.add_argument("--config", "-c", default=None, help="Path to config YAML file")
    parser.add_argument("--host", default=None, help="Interface to bind")
    parser.add_argument("--port", "-p", type=int, default=None, help="Port to listen on")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    config = ConfigManager()
    if args.config:
        config.load(args.config)
    gallery_path = Path(args.gallery or config.get("gallery.path")).resolve()
    config.load_layered(
        gallery_config_path=get_gallery_config_path(gallery_path),
        cli_config_path=args.config,
    )
    configure_logging(config)

    host = args.host or config.get("server.host", "127.0.0.1")
    port = args.port or config.get("server.port", 5173)
    app = create_app(gallery_path)
    logger.info(f"Serving {SAVE_PATH} for {gallery_path} on {host}:{port}")
    app.run(host=host, port=port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
