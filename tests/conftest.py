"""Shared fixtures: a small Markdown content tree and a site app over it."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from mdblog.app import create_app
from mdblog.config import SiteConfig


def write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    root = tmp_path / "md"
    write(root / "about.md", "# About\n\nAll about this site.\n")
    write(root / "guide" / "intro.md", "# Hello\n")
    write(root / "guide" / "setup.md", "# Setup\n\nInstall it.\n")
    write(root / "notes" / "deep" / "leaf.md", "# Leaf\n")
    write(root / "README.md", "# Readme\n")
    write(root / ".git" / "config.md", "ignored\n")
    write(root / ".DS_Store", "")
    write(root / "image.png", "not markdown")
    (root / "empty").mkdir()
    return root


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    return tmp_path / "cache" / "articles"


@pytest.fixture
def config(content_dir: Path) -> SiteConfig:
    return SiteConfig(content_dir=content_dir, title="Test Site")


@pytest.fixture
def app(config: SiteConfig, cache_dir: Path):
    app = create_app(config, cache_dir=cache_dir)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
