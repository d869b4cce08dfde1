"""Tests for the gallery save endpoint."""

import json

import pytest

from photo_review.gallery.save_server import build_parser, create_app


@pytest.fixture
def gallery_file(tmp_path):
    path = tmp_path / "gallery.json"
    path.write_text("[]", encoding="utf-8")
    return path


@pytest.fixture
def client(gallery_file):
    return create_app(gallery_file).test_client()


class TestSaveGallery:
    def test_saves_pretty_printed(self, client, gallery_file):
        body = json.dumps([{"id": "p1", "tags": ["all"]}])
        response = client.post("/save-gallery", data=body)
        assert response.status_code == 200
        assert response.get_data(as_text=True) == "saved"
        assert response.mimetype == "text/plain"
        assert gallery_file.read_text(encoding="utf-8") == (
            '[\n  {\n    "id": "p1",\n    "tags": [\n      "all"\n    ]\n  }\n]'
        )

    def test_invalid_body_returns_500(self, client, gallery_file):
        response = client.post("/save-gallery", data="{broken")
        assert response.status_code == 500
        assert response.mimetype == "text/plain"
        assert response.get_data(as_text=True)
        assert gallery_file.read_text() == "[]"

    def test_get_not_allowed(self, client):
        assert client.get("/save-gallery").status_code == 405

    def test_other_paths_not_found(self, client):
        assert client.post("/other", data="[]").status_code == 404

    def test_accepts_http_storage_body(self, client, gallery_file):
        from photo_review.gallery.models import make_photo
        from photo_review.gallery.storage import dumps_gallery, load_gallery

        photos = [make_photo("p1", "/p1.jpg", tags=["nature"])]
        response = client.post("/save-gallery", data=dumps_gallery(photos).encode("utf-8"))
        assert response.status_code == 200
        assert load_gallery(gallery_file) == photos


class TestServerArgParser:
    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.gallery is None
        assert args.port is None

    def test_port(self):
        args = build_parser().parse_args(["g.json", "--port", "8080"])
        assert args.gallery == "g.json"
        assert args.port == 8080
