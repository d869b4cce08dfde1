"""Configuration manager for Photo Review."""

from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Any

import yaml


DEFAULT_CONFIG: dict[str, Any] = {
    "gallery": {
        "path": "gallery.json",
        "media_root": None,  # None = directory of the gallery file
    },
    "storage": {
        "backend": "file",  # file | http
        "url": "http://127.0.0.1:5173/save-gallery",
        "timeout_seconds": 10.0,
    },
    "persist": {
        "settle_delay_ms": 50,
    },
    "review": {
        "tag_keybindings": {
            "1": "portrait",
            "2": "nature",
            "3": "landscape",
            "4": "urban",
            "5": "documentary",
        },
    },
    "preview": {
        "thumbnail_size": 150,
        "columns": 6,
        "default_width": 400,
        "default_height": 300,
    },
    "ui": {
        "default_window_width": 1400,
        "default_window_height": 900,
        "image_cache_mb": 256,
        "start_fullscreen": False,
    },
    "server": {
        "host": "127.0.0.1",
        "port": 5173,
    },
    "logging": {
        "level": "INFO",
        "log_to_file": False,
        "log_file": "photo_review.log",
    },
}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base, returning a new dict."""
    result = copy.deepcopy(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def get_gallery_config_path(gallery_path: str | Path) -> Path:
    """Return <gallery_dir>/<gallery_stem>.config.yaml for a gallery file."""
    gallery_path = Path(gallery_path)
    return gallery_path.parent / f"{gallery_path.stem}.config.yaml"


def _read_yaml(path: Path) -> dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


class ConfigManager:
    """Load and access YAML configuration with defaults."""

    def __init__(self, config_path: str | Path | None = None):
        self._path = Path(config_path) if config_path else None
        self._config: dict[str, Any] = copy.deepcopy(DEFAULT_CONFIG)
        if self._path and self._path.exists():
            self.load()

    @property
    def path(self) -> Path | None:
        return self._path

    @property
    def config(self) -> dict[str, Any]:
        return self._config

    def load(self, config_path: str | Path | None = None) -> None:
        """Load config from YAML file, merging with defaults."""
        path = Path(config_path) if config_path else self._path
        if path is None:
            raise ValueError("No config path specified")
        self._path = path
        self._config = _deep_merge(DEFAULT_CONFIG, _read_yaml(path))

    def get(self, dotted_key: str, default: Any = None) -> Any:
        """Get a config value using dotted notation (e.g. 'storage.backend')."""
        keys = dotted_key.split(".")
        value = self._config
        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default
        return value

    def set(self, dotted_key: str, value: Any) -> None:
        """Set a config value using dotted notation."""
        keys = dotted_key.split(".")
        target = self._config
        for key in keys[:-1]:
            if key not in target or not isinstance(target[key], dict):
                target[key] = {}
            target = target[key]
        target[keys[-1]] = value

    def load_layered(
        self,
        gallery_config_path: str | Path | None = None,
        cli_config_path: str | Path | None = None,
    ) -> None:
        """Load config with layered priority: DEFAULT <- gallery config <- cli config.

        Missing files are skipped; nothing is created on disk.
        """
        self._config = copy.deepcopy(DEFAULT_CONFIG)
        for layer in (gallery_config_path, cli_config_path):
            if layer and Path(layer).exists():
                self._config = _deep_merge(self._config, _read_yaml(Path(layer)))


def configure_logging(config: ConfigManager) -> None:
    """Apply the 'logging' config section to the root logger."""
    level_name = str(config.get("logging.level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if config.get("logging.log_to_file", False):
        log_file = config.get("logging.log_file", "photo_review.log")
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=handlers,
        force=True,
    )
