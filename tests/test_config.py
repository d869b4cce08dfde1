"""Tests for ConfigManager."""

import logging
from pathlib import Path

import pytest

from photo_review.config.config import (
    ConfigManager,
    configure_logging,
    get_gallery_config_path,
)


class TestConfigManager:
    def test_default_config(self):
        cm = ConfigManager()
        assert cm.get("storage.backend") == "file"
        assert cm.get("persist.settle_delay_ms") == 50
        assert cm.get("review.tag_keybindings")["1"] == "portrait"
        assert cm.get("preview.default_width") == 400
        assert cm.get("preview.default_height") == 300

    def test_get_dotted_key(self):
        cm = ConfigManager()
        assert cm.get("server.port") == 5173
        assert cm.get("nonexistent.key") is None
        assert cm.get("nonexistent.key", "fallback") == "fallback"

    def test_set_dotted_key(self):
        cm = ConfigManager()
        cm.set("storage.backend", "http")
        assert cm.get("storage.backend") == "http"

    def test_set_creates_nested_keys(self):
        cm = ConfigManager()
        cm.set("new.nested.key", "value")
        assert cm.get("new.nested.key") == "value"

    def test_load_explicit_path(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("storage:\n  url: http://example/save-gallery\n")

        cm = ConfigManager()
        cm.load(config_path)
        assert cm.path == config_path
        assert cm.get("storage.url") == "http://example/save-gallery"
        assert cm.get("persist.settle_delay_ms") == 50

    def test_load_merges_with_defaults(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("review:\n  tag_keybindings:\n    '6': pets\n")

        cm = ConfigManager(config_path)
        bindings = cm.get("review.tag_keybindings")
        assert bindings["6"] == "pets"
        assert bindings["1"] == "portrait"

    def test_no_path_raises(self):
        cm = ConfigManager()
        with pytest.raises(ValueError):
            cm.load()


class TestGetGalleryConfigPath:
    def test_basic(self):
        p = get_gallery_config_path("/photos/gallery.json")
        assert p == Path("/photos/gallery.config.yaml")

    def test_relative(self):
        assert get_gallery_config_path("data.json").name == "data.config.yaml"


class TestLayeredConfig:
    def test_missing_files_give_defaults(self, tmp_path):
        cm = ConfigManager()
        cm.load_layered(gallery_config_path=tmp_path / "gallery.config.yaml")
        assert cm.get("storage.backend") == "file"
        assert not (tmp_path / "gallery.config.yaml").exists()

    def test_gallery_config_applied(self, tmp_path):
        gallery_config = tmp_path / "gallery.config.yaml"
        gallery_config.write_text("storage:\n  backend: http\n")
        cm = ConfigManager()
        cm.load_layered(gallery_config_path=gallery_config)
        assert cm.get("storage.backend") == "http"
        assert cm.get("storage.timeout_seconds") == 10.0

    def test_cli_config_overrides_gallery_config(self, tmp_path):
        gallery_config = tmp_path / "gallery.config.yaml"
        gallery_config.write_text("server:\n  port: 9000\n")
        cli_config = tmp_path / "cli.yaml"
        cli_config.write_text("server:\n  port: 9100\n")

        cm = ConfigManager()
        cm.load_layered(gallery_config_path=gallery_config, cli_config_path=cli_config)
        assert cm.get("server.port") == 9100


class TestConfigureLogging:
    def test_sets_root_level(self):
        cm = ConfigManager()
        cm.set("logging.level", "debug")
        configure_logging(cm)
        assert logging.getLogger().level == logging.DEBUG

    def test_log_to_file(self, tmp_path):
        log_file = tmp_path / "review.log"
        cm = ConfigManager()
        cm.set("logging.log_to_file", True)
        cm.set("logging.log_file", str(log_file))
        configure_logging(cm)
        logging.getLogger("photo_review.test").warning("hello file")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "hello file" in log_file.read_text(encoding="utf-8")
        root = logging.getLogger()
        for handler in list(root.handlers):
            if isinstance(handler, logging.FileHandler):
                root.removeHandler(handler)
                handler.close()
