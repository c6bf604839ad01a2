from __future__ import annotations

import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from mdblog.app import create_app
from mdblog.config import SiteConfig


def test_document_page(client, cache_dir: Path):
    response = client.get("/guide/intro")

    assert response.status_code == 200
    body = response.get_data(as_text=True)
    assert "<h1>Hello</h1>" in body
    assert "Test Site" in body
    assert 'class="nav-item active"' in body
    assert (cache_dir / "guide" / "intro.html").exists()


def test_root_serves_first_document(client):
    response = client.get("/")

    assert response.status_code == 200
    assert "<h1>About</h1>" in response.get_data(as_text=True)


def test_configured_index(content_dir: Path, cache_dir: Path):
    config = SiteConfig(content_dir=content_dir, index="guide/setup")
    client = create_app(config, cache_dir=cache_dir).test_client()

    response = client.get("/")

    assert response.status_code == 200
    assert "<h1>Setup</h1>" in response.get_data(as_text=True)


def test_default_is_settled_once(client, content_dir: Path):
    client.get("/")
    (content_dir / "aaa.md").write_text("# First now", encoding="utf-8")

    response = client.get("/")

    assert "<h1>About</h1>" in response.get_data(as_text=True)


def test_missing_page_is_not_found(client, cache_dir: Path):
    response = client.get("/missing/page")

    assert response.status_code == 404
    body = response.get_data(as_text=True)
    assert "404" in body
    assert "missing/page.md" not in body
    assert not (cache_dir / "missing").exists()


def test_not_found_is_logged(client, caplog):
    with caplog.at_level(logging.ERROR, logger="mdblog.app"):
        client.get("/missing/page")

    assert "Not Found" in caplog.text
    assert "/missing/page" in caplog.text


def test_write_failure_is_internal_error(client, caplog):
    with patch("mdblog.articles.write_atomic", side_effect=OSError("disk full")):
        with caplog.at_level(logging.ERROR, logger="mdblog.app"):
            response = client.get("/guide/intro")

    assert response.status_code == 500
    body = response.get_data(as_text=True)
    assert "500" in body
    assert "disk full" not in body
    assert "WriteFile Error" in caplog.text
    assert "intro.md" in caplog.text


def test_read_failure_is_internal_error(client):
    with patch.object(Path, "read_bytes", side_effect=PermissionError("denied")):
        response = client.get("/about")

    assert response.status_code == 500


def test_empty_content_root(tmp_path: Path, cache_dir: Path):
    content = tmp_path / "empty"
    content.mkdir()
    client = create_app(SiteConfig(content_dir=content), cache_dir=cache_dir).test_client()

    response = client.get("/")

    assert response.status_code == 404


def test_missing_content_root(tmp_path: Path, cache_dir: Path):
    client = create_app(
        SiteConfig(content_dir=tmp_path / "nowhere"), cache_dir=cache_dir
    ).test_client()

    assert client.get("/").status_code == 404


def test_static_assets(client):
    response = client.get("/static/css/site.css")

    assert response.status_code == 200
    assert "sidebar" in response.get_data(as_text=True)
    response.close()


def test_access_log(client, caplog):
    with caplog.at_level(logging.INFO, logger="mdblog.access"):
        client.get("/guide/intro")

    assert "GET /guide/intro 200" in caplog.text


@pytest.mark.parametrize("path", ["/" + "a" * 300, "/guide/" + "b" * 300, "/bad%00key"])
def test_unusable_paths_are_not_found(config: SiteConfig, cache_dir: Path, caplog, path: str):
    client = create_app(config, cache_dir=cache_dir).test_client()

    with caplog.at_level(logging.ERROR, logger="mdblog.app"):
        response = client.get(path)

    assert response.status_code == 404
    assert "Not Found" in caplog.text
